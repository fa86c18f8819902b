"""Measurement harness: chain driver, delivery listeners and aggregation."""

from .aggregator import Aggregator
from .driver import ChainDriver, DispatchFn, IChainDriver
from .listeners import DECODERS, DeliveryListener

__all__ = [
    "Aggregator",
    "ChainDriver",
    "DECODERS",
    "DeliveryListener",
    "DispatchFn",
    "IChainDriver",
]
