"""Change-data-capture stream (DynamoDB Streams) backend."""

import random
from typing import Any

from ..models import Backend
from .base import BackendAdapter


class TableAdapter(BackendAdapter):
    """Writes a record keyed by the value; delivery is the stream's new image.

    Each write carries a random ``r`` attribute so that overwriting an
    existing key still produces a change record. The stream is read from
    LATEST, so a freshly attached listener never sees earlier writes.
    """

    backend = Backend.TABLE

    def __init__(self, client: Any, table_name: str):
        super().__init__(client)
        self._table_name = table_name

    @property
    def subscription_options(self) -> dict[str, Any]:
        return {
            "starting_position": "LATEST",
            "stream_view_type": "NEW_IMAGE",
        }

    async def dispatch(self, value: int) -> Any:
        return await self._client.put_item(
            TableName=self._table_name,
            Item={
                "val": {"N": str(value)},
                "r": {"N": repr(random.random())},
            },
        )
