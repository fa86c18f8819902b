"""Message queue (SQS) backend."""

from typing import Any

from ..models import Backend
from .base import BackendAdapter

# One message per delivery, and a visibility timeout long enough that a slow
# chain step is not redelivered while it is still being handled.
BATCH_SIZE = 1
VISIBILITY_TIMEOUT_SECONDS = 180


class QueueAdapter(BackendAdapter):
    """Sends the value as message body; delivery is a batch of exactly one message."""

    backend = Backend.QUEUE

    def __init__(self, client: Any, queue_url: str):
        super().__init__(client)
        self._queue_url = queue_url

    @property
    def subscription_options(self) -> dict[str, Any]:
        return {
            "batch_size": BATCH_SIZE,
            "visibility_timeout_seconds": VISIBILITY_TIMEOUT_SECONDS,
        }

    async def dispatch(self, value: int) -> Any:
        return await self._client.send_message(
            QueueUrl=self._queue_url,
            MessageBody=str(value),
        )
