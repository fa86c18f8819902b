"""Storage module."""

from .storage import ITimingStore, TimingStore

__all__ = ["ITimingStore", "TimingStore"]
