"""Run probe module."""

from .probe import IProbe, Probe, is_complete

__all__ = ["IProbe", "Probe", "is_complete"]
