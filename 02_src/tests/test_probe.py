"""Tests for the run probe."""

import httpx
import pytest

from probe import Probe, is_complete


def _progress(highest, chain_length=5):
    return {
        "chain_length": chain_length,
        "chains": [
            {"backend": b, "samples": 0 if h is None else h + 1, "highest_sequence": h}
            for b, h in zip(("s3", "sns", "sqs", "table"), highest)
        ],
    }


def _probe(handler):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return Probe(api_url="http://service/", client=client)


class TestIsComplete:
    """Tests for is_complete()."""

    def test_complete_when_all_reach_last(self):
        assert is_complete(_progress([4, 4, 4, 4]))

    def test_incomplete_when_one_lags(self):
        assert not is_complete(_progress([4, 4, 2, 4]))

    def test_incomplete_when_one_never_started(self):
        assert not is_complete(_progress([4, None, 4, 4]))


class TestProbe:
    """Tests for Probe."""

    @pytest.mark.asyncio
    async def test_start_hits_front_door(self):
        """Test that start() requests GET /."""
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200)

        probe = _probe(handler)
        await probe.start()
        await probe.close()

        assert requests[0].method == "GET"
        assert str(requests[0].url) == "http://service/"

    @pytest.mark.asyncio
    async def test_start_raises_on_server_error(self):
        """Test that a failed start is raised."""
        probe = _probe(lambda request: httpx.Response(500, json={"detail": "boom"}))

        with pytest.raises(httpx.HTTPStatusError):
            await probe.start()
        await probe.close()

    @pytest.mark.asyncio
    async def test_wait_polls_until_complete(self):
        """Test that wait_for_completion() polls progress until every chain finishes."""
        responses = iter([_progress([1, 2, 0, None]), _progress([3, 4, 4, 4]), _progress([4, 4, 4, 4])])
        polls = []

        def handler(request):
            polls.append(request.url.path)
            return httpx.Response(200, json=next(responses))

        probe = _probe(handler)
        assert await probe.wait_for_completion(poll_interval=0, timeout=5)
        await probe.close()

        assert polls == ["/api/progress"] * 3

    @pytest.mark.asyncio
    async def test_close_leaves_caller_client_open(self):
        """Test that close() does not close a client passed in by the caller."""
        async with httpx.AsyncClient(
            transport=httpx.MockTransport(lambda request: httpx.Response(200))
        ) as client:
            probe = Probe(api_url="http://service", client=client)
            await probe.close()

            assert not client.is_closed
            await probe.start()

    @pytest.mark.asyncio
    async def test_close_closes_own_client(self):
        """Test that close() closes a client the probe created."""
        probe = Probe(api_url="http://service")
        await probe.close()

        assert probe._client.is_closed

    @pytest.mark.asyncio
    async def test_wait_times_out(self):
        """Test that wait_for_completion() gives up after the timeout."""
        probe = _probe(lambda request: httpx.Response(200, json=_progress([0, 0, 0, 0])))

        assert not await probe.wait_for_completion(poll_interval=0, timeout=0)
        await probe.close()
