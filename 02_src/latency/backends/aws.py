"""aioboto3 client wiring for the AWS backends."""

from contextlib import AsyncExitStack
from typing import Any

import aioboto3

from ..config import AWSConfig
from ..logging_config import get_logger

logger = get_logger(__name__)

SERVICES = ("s3", "sns", "sqs", "dynamodb")


class AWSClients:
    """Opens one long-lived aioboto3 client per service used by the adapters."""

    def __init__(self, config: AWSConfig):
        self._config = config
        self._stack: AsyncExitStack | None = None
        self._clients: dict[str, Any] = {}

    async def open(self) -> None:
        """Create the service clients."""
        if self._stack is not None:
            return

        session = aioboto3.Session(**self._config.session_kwargs())
        stack = AsyncExitStack()
        try:
            for service in SERVICES:
                self._clients[service] = await stack.enter_async_context(
                    session.client(service, **self._config.client_kwargs())
                )
        except Exception:
            await stack.aclose()
            self._clients.clear()
            raise

        self._stack = stack
        logger.info("AWS clients opened in %s", self._config.region)

    async def close(self) -> None:
        """Close all service clients."""
        if self._stack is None:
            return
        await self._stack.aclose()
        self._stack = None
        self._clients.clear()

    def client(self, service: str) -> Any:
        """Get an open client by service name."""
        if service not in self._clients:
            raise RuntimeError("AWS clients not opened")
        return self._clients[service]
