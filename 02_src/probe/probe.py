"""Probe: starts a latency run over HTTP and waits for the chains to finish."""

import asyncio
import time
from typing import Protocol

import httpx

from latency.logging_config import get_logger

logger = get_logger(__name__)


class IProbe(Protocol):
    """Drive a run from outside the service."""

    async def start(self) -> None:
        """Kick off a run."""
        ...

    async def progress(self) -> dict:
        """Fetch per-backend progress."""
        ...

    async def wait_for_completion(
        self, poll_interval: float = 2.0, timeout: float = 600.0
    ) -> bool:
        """Poll until every chain has recorded its last hop."""
        ...


def is_complete(progress: dict) -> bool:
    """Every chain has a sample for chain_length - 1."""
    last = progress["chain_length"] - 1
    return all(chain["highest_sequence"] == last for chain in progress["chains"])


class Probe:
    """Run driver talking to the service's HTTP API."""

    def __init__(
        self,
        api_url: str = "http://localhost:8000",
        client: httpx.AsyncClient | None = None,
    ):
        self._api_url = api_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient()

    async def close(self) -> None:
        """Close the HTTP client if this probe created it."""
        if self._owns_client:
            await self._client.aclose()

    async def start(self) -> None:
        """Kick off a run."""
        response = await self._client.get(f"{self._api_url}/", timeout=30.0)
        response.raise_for_status()
        logger.info("Probe: run started")

    async def progress(self) -> dict:
        """Fetch per-backend progress."""
        response = await self._client.get(f"{self._api_url}/api/progress", timeout=10.0)
        response.raise_for_status()
        return response.json()

    async def wait_for_completion(
        self, poll_interval: float = 2.0, timeout: float = 600.0
    ) -> bool:
        """Poll until every chain has recorded its last hop. False on timeout."""
        deadline = time.monotonic() + timeout
        while True:
            progress = await self.progress()
            summary = ", ".join(
                f"{c['backend']}={c['samples']}" for c in progress["chains"]
            )
            logger.info("Probe: %s", summary)

            if is_complete(progress):
                return True
            if time.monotonic() >= deadline:
                logger.warning("Probe: timed out waiting for chains")
                return False

            await asyncio.sleep(poll_interval)
