"""Chain driver: records one hop and sends the next value."""

import asyncio
from typing import Any, Awaitable, Callable, Protocol

from ..config import CHAIN_LENGTH
from ..errors import SequenceOutOfRangeError
from ..logging_config import get_logger
from ..models import Backend, TimingSample, now_ms
from ..storage import ITimingStore

logger = get_logger(__name__)


DispatchFn = Callable[[int], Awaitable[Any]]
Clock = Callable[[], int]


class IChainDriver(Protocol):
    """Advances a backend's chain by one step per delivery."""

    async def advance(
        self, backend: Backend, arrived_sequence: int, dispatch_next: DispatchFn
    ) -> None:
        """Record the hop for arrived_sequence and dispatch arrived_sequence + 1."""
        ...


class ChainDriver:
    """Drives every backend's chain from 0 up to chain_length."""

    def __init__(
        self,
        store: ITimingStore,
        chain_length: int = CHAIN_LENGTH,
        clock: Clock = now_ms,
        deduplicate: bool = False,
    ):
        self._store = store
        self._chain_length = chain_length
        self._clock = clock
        self._deduplicate = deduplicate
        self._locks: dict[Backend, asyncio.Lock] = {}

    @property
    def chain_length(self) -> int:
        return self._chain_length

    async def advance(
        self, backend: Backend, arrived_sequence: int, dispatch_next: DispatchFn
    ) -> None:
        """Record the hop for arrived_sequence and dispatch arrived_sequence + 1.

        The dispatch is started before the sample is written and is not
        awaited between the two timestamps, so dispatch_timestamp and
        delivery_timestamp bracket the invocation, not the remote
        acknowledgement. Failures of either the write or the dispatch are
        re-raised; the chain is not retried.
        """
        if not 0 <= arrived_sequence <= self._chain_length:
            logger.warning(
                "Out-of-range delivery %s on %s rejected",
                arrived_sequence,
                backend.value,
                extra={"backend": backend, "sequence": arrived_sequence},
            )
            raise SequenceOutOfRangeError(
                f"Sequence {arrived_sequence} outside [0, {self._chain_length}]"
            )

        if arrived_sequence == self._chain_length:
            logger.info(
                "Chain %s complete at %s",
                backend.value,
                arrived_sequence,
                extra={"backend": backend, "sequence": arrived_sequence},
            )
            return

        if not self._deduplicate:
            await self._hop(backend, arrived_sequence, dispatch_next)
            return

        lock = self._locks.setdefault(backend, asyncio.Lock())
        async with lock:
            if await self._store.contains(backend, arrived_sequence):
                logger.warning(
                    "Duplicate delivery of %s on %s skipped",
                    arrived_sequence,
                    backend.value,
                    extra={"backend": backend, "sequence": arrived_sequence},
                )
                return
            await self._hop(backend, arrived_sequence, dispatch_next)

    async def _hop(
        self, backend: Backend, arrived_sequence: int, dispatch_next: DispatchFn
    ) -> None:
        dispatch_timestamp = self._clock()
        dispatch = asyncio.ensure_future(dispatch_next(arrived_sequence + 1))
        delivery_timestamp = self._clock()

        sample = TimingSample(
            backend=backend,
            sequence=arrived_sequence,
            dispatch_timestamp=dispatch_timestamp,
            delivery_timestamp=delivery_timestamp,
        )

        results = await asyncio.gather(
            self._store.append(sample), dispatch, return_exceptions=True
        )
        for result in results:
            if isinstance(result, BaseException):
                logger.error(
                    "Chain %s stalled at %s: %s",
                    backend.value,
                    arrived_sequence,
                    result,
                    extra={"backend": backend, "sequence": arrived_sequence},
                )
                raise result

        logger.debug(
            "Hop %s -> %s on %s",
            arrived_sequence,
            arrived_sequence + 1,
            backend.value,
            extra={"backend": backend, "sequence": arrived_sequence},
        )
