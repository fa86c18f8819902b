"""Backend adapter interface and shared delivery plumbing."""

from typing import Any, Awaitable, Callable, Protocol

from ..logging_config import get_logger
from ..models import Backend

logger = get_logger(__name__)


DeliveryHandler = Callable[[dict], Awaitable[None]]


class IBackendAdapter(Protocol):
    """Sends sequence values into one messaging backend and receives them back."""

    @property
    def backend(self) -> Backend:
        """Backend identifier."""
        ...

    @property
    def subscription_options(self) -> dict[str, Any]:
        """Event-source settings the backend's delivery trigger must use."""
        ...

    @property
    def subscription_options(self) -> dict[str, Any]:
        """Event-source settings the backend's delivery trigger must use."""
        return {}

    @property
    def has_delivery_callbacks(self) -> bool:
        """Whether any delivery callback is registered."""
        ...

    async def dispatch(self, value: int) -> Any:
        """Send a value into the backend."""
        ...

    def register_delivery_callback(self, handler: DeliveryHandler) -> None:
        """Register a callback invoked with each delivery envelope."""
        ...

    async def deliver(self, envelope: dict) -> None:
        """Hand a delivery envelope to the registered callbacks."""
        ...


class BackendAdapter:
    """Base adapter: holds the transport client and the delivery callbacks."""

    backend: Backend

    def __init__(self, client: Any):
        self._client = client
        self._handlers: list[DeliveryHandler] = []

    @property
    def subscription_options(self) -> dict[str, Any]:
        """Event-source settings the backend's delivery trigger must use."""
        return {}

    @property
    def has_delivery_callbacks(self) -> bool:
        return bool(self._handlers)

    async def dispatch(self, value: int) -> Any:
        raise NotImplementedError

    def register_delivery_callback(self, handler: DeliveryHandler) -> None:
        """Register a callback invoked with each delivery envelope."""
        self._handlers.append(handler)

    async def deliver(self, envelope: dict) -> None:
        """Hand a delivery envelope to the registered callbacks, in order."""
        if not self._handlers:
            logger.warning(
                "Delivery for %s dropped: no callback registered",
                self.backend.value,
                extra={"backend": self.backend},
            )
            return

        for handler in self._handlers:
            await handler(envelope)
