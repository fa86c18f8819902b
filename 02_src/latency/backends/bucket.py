"""Object-store (S3) notification backend."""

from typing import Any

from ..models import Backend
from .base import BackendAdapter


class BucketAdapter(BackendAdapter):
    """Writes an empty object named after the value; delivery is an ObjectCreated notification."""

    backend = Backend.BUCKET

    def __init__(self, client: Any, bucket_name: str):
        super().__init__(client)
        self._bucket_name = bucket_name

    @property
    def subscription_options(self) -> dict[str, Any]:
        return {"events": ["s3:ObjectCreated:*"]}

    async def dispatch(self, value: int) -> Any:
        return await self._client.put_object(
            Bucket=self._bucket_name,
            Key=str(value),
            Body=b"",
        )
