"""Delivery listeners: decode a backend envelope and advance its chain."""

import re
from typing import Callable

from ..backends import IBackendAdapter
from ..errors import MalformedEnvelopeError
from ..logging_config import get_logger
from ..models import Backend
from .driver import IChainDriver

logger = get_logger(__name__)


Decoder = Callable[[dict], int]


def _first_record(envelope: dict) -> dict:
    records = envelope.get("Records") if isinstance(envelope, dict) else None
    if not records:
        raise MalformedEnvelopeError("Envelope has no Records")
    if len(records) > 1:
        logger.debug("Envelope carries %s records, only the first is used", len(records))
    return records[0]


_SEQUENCE = re.compile(r"[0-9]+")


def _to_int(text: object) -> int:
    # Plain ASCII digits only: no sign, whitespace, underscores or other scripts
    if not isinstance(text, str) or not _SEQUENCE.fullmatch(text):
        raise MalformedEnvelopeError(f"Not a sequence value: {text!r}")
    return int(text)


def decode_bucket_envelope(envelope: dict) -> int:
    """Object key of an S3 ObjectCreated notification."""
    try:
        return _to_int(_first_record(envelope)["s3"]["object"]["key"])
    except (KeyError, TypeError) as e:
        raise MalformedEnvelopeError(f"Missing object key: {e}") from e


def decode_topic_envelope(envelope: dict) -> int:
    """Message text of an SNS notification."""
    try:
        return _to_int(_first_record(envelope)["Sns"]["Message"])
    except (KeyError, TypeError) as e:
        raise MalformedEnvelopeError(f"Missing SNS message: {e}") from e


def decode_queue_envelope(envelope: dict) -> int:
    """Body of the first SQS message."""
    try:
        return _to_int(_first_record(envelope)["body"])
    except (KeyError, TypeError) as e:
        raise MalformedEnvelopeError(f"Missing SQS body: {e}") from e


def decode_table_envelope(envelope: dict) -> int:
    """``val`` attribute of a DynamoDB stream NEW_IMAGE."""
    try:
        return _to_int(_first_record(envelope)["dynamodb"]["NewImage"]["val"]["N"])
    except (KeyError, TypeError) as e:
        raise MalformedEnvelopeError(f"Missing NewImage val: {e}") from e


DECODERS: dict[Backend, Decoder] = {
    Backend.BUCKET: decode_bucket_envelope,
    Backend.TOPIC: decode_topic_envelope,
    Backend.QUEUE: decode_queue_envelope,
    Backend.TABLE: decode_table_envelope,
}


class DeliveryListener:
    """Turns one backend's deliveries into chain steps."""

    def __init__(self, adapter: IBackendAdapter, driver: IChainDriver):
        self._adapter = adapter
        self._driver = driver
        self._decode = DECODERS[adapter.backend]

    @property
    def backend(self) -> Backend:
        return self._adapter.backend

    def attach(self) -> None:
        """Register as the adapter's delivery callback."""
        self._adapter.register_delivery_callback(self)

    async def __call__(self, envelope: dict) -> None:
        """Handle a delivery envelope."""
        try:
            value = self._decode(envelope)
        except MalformedEnvelopeError as e:
            logger.error(
                "Malformed %s envelope dropped: %s",
                self.backend.value,
                e,
                extra={"backend": self.backend},
            )
            raise

        await self._driver.advance(self.backend, value, self._adapter.dispatch)
