"""Aggregation of timing samples into chart series."""

import math

from ..errors import NoDataError
from ..models import Backend, ChainProgress, ChartData, Series, TimingSample
from ..storage import ITimingStore


def average_interval(timestamps: list[int]) -> float:
    """Span of dispatch timestamps divided by the number of samples.

    This is the average spacing between hops, not a per-hop round trip.
    """
    return (max(timestamps) - min(timestamps)) / len(timestamps)


def build_series(backend: Backend, samples: list[TimingSample]) -> Series:
    """Sparse dispatch-timestamp series for one backend's samples."""
    size = max(sample.sequence for sample in samples) + 1
    values: list[int | None] = [None] * size
    for sample in samples:
        values[sample.sequence] = sample.dispatch_timestamp

    latency = average_interval([sample.dispatch_timestamp for sample in samples])
    return Series(
        label=f"{backend.value} ({math.floor(latency)}ms)",
        values=values,
        latency_ms=latency,
    )


class Aggregator:
    """Builds per-backend series from the timing store."""

    def __init__(self, store: ITimingStore):
        self._store = store

    async def compute_series(self) -> ChartData:
        """Group all samples by backend into chart series.

        Raises:
            NoDataError: the store holds no samples.
        """
        samples = await self._store.scan_all()
        if not samples:
            raise NoDataError("No items returned!")

        groups: dict[Backend, list[TimingSample]] = {}
        for sample in samples:
            groups.setdefault(Backend(sample.backend), []).append(sample)

        timestamps = [sample.dispatch_timestamp for sample in samples]
        return ChartData(
            min_timestamp=min(timestamps),
            max_timestamp=max(timestamps),
            series=[
                build_series(backend, groups[backend])
                for backend in sorted(groups, key=lambda b: b.value)
            ],
        )

    async def progress(self) -> list[ChainProgress]:
        """Sample count and highest recorded sequence for every backend."""
        samples = await self._store.scan_all()

        progress = {backend: ChainProgress(backend=backend.value) for backend in Backend}
        for sample in samples:
            entry = progress[Backend(sample.backend)]
            entry.samples += 1
            if entry.highest_sequence is None or sample.sequence > entry.highest_sequence:
                entry.highest_sequence = sample.sequence

        return list(progress.values())
