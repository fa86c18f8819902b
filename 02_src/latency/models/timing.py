"""Timing data models."""

import time
from dataclasses import dataclass
from enum import Enum


class Backend(str, Enum):
    """Messaging backends under measurement."""

    BUCKET = "s3"
    TOPIC = "sns"
    QUEUE = "sqs"
    TABLE = "table"


@dataclass(frozen=True)
class TimingSample:
    """One chain hop: when sequence + 1 was sent after sequence arrived."""

    backend: Backend
    sequence: int
    dispatch_timestamp: int  # epoch ms, before dispatch was invoked
    delivery_timestamp: int  # epoch ms, after dispatch was invoked


def now_ms() -> int:
    """Wall-clock time in milliseconds since the epoch."""
    return time.time_ns() // 1_000_000
