"""Event source latency measurement service."""

from .app import Application, IApplication
from .backends import (
    BackendAdapter,
    BucketAdapter,
    IBackendAdapter,
    LoopbackTransport,
    QueueAdapter,
    TableAdapter,
    TopicAdapter,
)
from .errors import (
    LatencyError,
    MalformedEnvelopeError,
    NoDataError,
    SequenceOutOfRangeError,
    UnknownBackendError,
)
from .harness import Aggregator, ChainDriver, DeliveryListener
from .models import Backend, ChainProgress, ChartData, Series, TimingSample
from .storage import ITimingStore, TimingStore

__all__ = [
    # Application
    "Application",
    "IApplication",
    # Models
    "Backend",
    "TimingSample",
    "ChainProgress",
    "ChartData",
    "Series",
    # Errors
    "LatencyError",
    "MalformedEnvelopeError",
    "NoDataError",
    "SequenceOutOfRangeError",
    "UnknownBackendError",
    # Components
    "ITimingStore",
    "TimingStore",
    "IBackendAdapter",
    "BackendAdapter",
    "BucketAdapter",
    "TopicAdapter",
    "QueueAdapter",
    "TableAdapter",
    "LoopbackTransport",
    "ChainDriver",
    "DeliveryListener",
    "Aggregator",
]
