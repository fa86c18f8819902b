"""Backend adapters module."""

from .aws import AWSClients
from .base import BackendAdapter, DeliveryHandler, IBackendAdapter
from .bucket import BucketAdapter
from .loopback import LoopbackTransport
from .queue import QueueAdapter
from .table import TableAdapter
from .topic import TopicAdapter

__all__ = [
    "AWSClients",
    "BackendAdapter",
    "BucketAdapter",
    "DeliveryHandler",
    "IBackendAdapter",
    "LoopbackTransport",
    "QueueAdapter",
    "TableAdapter",
    "TopicAdapter",
]
