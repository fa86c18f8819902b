"""Core data models for the latency service."""

from .chart import ChainProgress, ChartData, Series
from .timing import Backend, TimingSample, now_ms

__all__ = [
    # Timing
    "Backend",
    "TimingSample",
    "now_ms",
    # Chart
    "ChainProgress",
    "ChartData",
    "Series",
]
