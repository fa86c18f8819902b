"""Chart-ready aggregation models."""

from dataclasses import dataclass, field


@dataclass
class Series:
    """Dispatch timestamps of one backend, indexed by sequence."""

    label: str
    values: list[int | None]  # None where a sequence has no sample
    latency_ms: float

    def to_chart(self) -> dict:
        """Shape expected by the chart library."""
        return {"text": self.label, "values": self.values}


@dataclass
class ChainProgress:
    """How far one backend's chain has got."""

    backend: str
    samples: int = 0
    highest_sequence: int | None = None


@dataclass
class ChartData:
    """Everything a chart needs: axis bounds plus one series per backend."""

    min_timestamp: int
    max_timestamp: int
    series: list[Series] = field(default_factory=list)
