"""In-process loopback transport.

Stands in for the four AWS services when running locally or under test.
Every write is turned into the same Lambda-style envelope the real event
source would produce and delivered back to the bound adapter from its own
asyncio task.
"""

import asyncio
import uuid
from collections import deque
from typing import Any

from ..logging_config import get_logger
from ..models import Backend
from .base import IBackendAdapter

logger = get_logger(__name__)

# Most recent writes kept for inspection when nothing was listening
UNDELIVERED_LIMIT = 100


def bucket_envelope(key: str) -> dict:
    """S3 ObjectCreated notification for one object."""
    return {
        "Records": [
            {
                "eventSource": "aws:s3",
                "eventName": "ObjectCreated:Put",
                "s3": {"object": {"key": key, "size": 0}},
            }
        ]
    }


def topic_envelope(message: str) -> dict:
    """SNS notification carrying one message."""
    return {
        "Records": [
            {
                "EventSource": "aws:sns",
                "Sns": {"MessageId": str(uuid.uuid4()), "Message": message},
            }
        ]
    }


def queue_envelope(*bodies: str) -> dict:
    """SQS batch; the loopback queue always sends batches of one."""
    return {
        "Records": [
            {"eventSource": "aws:sqs", "messageId": str(uuid.uuid4()), "body": body}
            for body in bodies
        ]
    }


def table_envelope(new_image: dict) -> dict:
    """DynamoDB stream record with a NEW_IMAGE view."""
    return {
        "Records": [
            {
                "eventSource": "aws:dynamodb",
                "eventName": "INSERT",
                "dynamodb": {"NewImage": new_image},
            }
        ]
    }


class _BucketClient:
    def __init__(self, transport: "LoopbackTransport"):
        self._transport = transport

    async def put_object(self, Bucket: str, Key: str, Body: bytes = b"", **kwargs: Any) -> dict:
        self._transport.emit(Backend.BUCKET, bucket_envelope(Key))
        return {"ETag": uuid.uuid4().hex}


class _TopicClient:
    def __init__(self, transport: "LoopbackTransport"):
        self._transport = transport

    async def publish(self, TopicArn: str, Message: str, **kwargs: Any) -> dict:
        envelope = topic_envelope(Message)
        self._transport.emit(Backend.TOPIC, envelope)
        return {"MessageId": envelope["Records"][0]["Sns"]["MessageId"]}


class _QueueClient:
    def __init__(self, transport: "LoopbackTransport"):
        self._transport = transport

    async def send_message(self, QueueUrl: str, MessageBody: str, **kwargs: Any) -> dict:
        envelope = queue_envelope(MessageBody)
        self._transport.emit(Backend.QUEUE, envelope)
        return {"MessageId": envelope["Records"][0]["messageId"]}


class _TableClient:
    def __init__(self, transport: "LoopbackTransport"):
        self._transport = transport

    async def put_item(self, TableName: str, Item: dict, **kwargs: Any) -> dict:
        self._transport.emit(Backend.TABLE, table_envelope(Item), latest_only=True)
        return {}


class LoopbackTransport:
    """Fake clients for all four backends, delivering through asyncio tasks."""

    def __init__(self, delay: float = 0.0):
        self._delay = delay
        self._adapters: dict[Backend, IBackendAdapter] = {}
        self._tasks: set[asyncio.Task] = set()
        self._clients: dict[Backend, Any] = {
            Backend.BUCKET: _BucketClient(self),
            Backend.TOPIC: _TopicClient(self),
            Backend.QUEUE: _QueueClient(self),
            Backend.TABLE: _TableClient(self),
        }
        self.undelivered: deque[tuple[Backend, dict]] = deque(maxlen=UNDELIVERED_LIMIT)

    def client(self, backend: Backend) -> Any:
        """Get the fake client for a backend."""
        return self._clients[backend]

    def bind(self, adapter: IBackendAdapter) -> None:
        """Route deliveries for the adapter's backend to it."""
        self._adapters[adapter.backend] = adapter

    @property
    def pending(self) -> int:
        """Number of deliveries still in flight."""
        return sum(1 for task in self._tasks if not task.done())

    def emit(self, backend: Backend, envelope: dict, latest_only: bool = False) -> None:
        """Schedule delivery of an envelope.

        With ``latest_only`` the write is only observable by a listener that
        was already registered when the write happened.
        """
        adapter = self._adapters.get(backend)
        if adapter is None or (latest_only and not adapter.has_delivery_callbacks):
            self.undelivered.append((backend, envelope))
            return

        task = asyncio.create_task(self._deliver(adapter, envelope))
        self._tasks.add(task)
        task.add_done_callback(self._on_done)

    async def _deliver(self, adapter: IBackendAdapter, envelope: dict) -> None:
        if self._delay:
            await asyncio.sleep(self._delay)
        await adapter.deliver(envelope)

    def _on_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error("Loopback delivery failed: %s", error, exc_info=error)

    async def drain(self) -> None:
        """Wait until no delivery is in flight, including ones spawned meanwhile."""
        while True:
            pending = [task for task in self._tasks if not task.done()]
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)

    async def close(self) -> None:
        """Cancel in-flight deliveries and forget undelivered writes."""
        self.undelivered.clear()
        pending = [task for task in self._tasks if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
