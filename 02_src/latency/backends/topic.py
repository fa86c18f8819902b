"""Pub/sub topic (SNS) backend."""

from typing import Any

from ..models import Backend
from .base import BackendAdapter


class TopicAdapter(BackendAdapter):
    """Publishes the value as message text; delivery carries one message per event."""

    backend = Backend.TOPIC

    def __init__(self, client: Any, topic_arn: str):
        super().__init__(client)
        self._topic_arn = topic_arn

    async def dispatch(self, value: int) -> Any:
        return await self._client.publish(
            TopicArn=self._topic_arn,
            Message=str(value),
        )
