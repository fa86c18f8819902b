"""Application bootstrap and lifecycle management."""

import asyncio
import os
from typing import Any, Protocol

from .backends import (
    AWSClients,
    BucketAdapter,
    IBackendAdapter,
    LoopbackTransport,
    QueueAdapter,
    TableAdapter,
    TopicAdapter,
)
from .config import Settings, load_settings, resolve_db_path
from .errors import UnknownBackendError
from .harness import Aggregator, ChainDriver, DeliveryListener
from .logging_config import get_logger
from .models import Backend
from .storage import ITimingStore, TimingStore

logger = get_logger(__name__)


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    async def start(self) -> None:
        """Initialize components in dependency order."""
        ...

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        ...

    async def start_run(self) -> None:
        """Dispatch sequence 0 into every backend."""
        ...

    def adapter(self, backend: Backend | str) -> IBackendAdapter:
        """Get the adapter for a backend."""
        ...

    @property
    def store(self) -> ITimingStore:
        """Timing store."""
        ...

    @property
    def driver(self) -> ChainDriver:
        """Chain driver."""
        ...

    @property
    def aggregator(self) -> Aggregator:
        """Aggregator over the timing store."""
        ...


class Application:
    """Main application bootstrap."""

    def __init__(self, db_path: str | None = None, settings: Settings | None = None):
        env_db_path = os.getenv("DATABASE_URL") if db_path is None else db_path
        self._db_path = resolve_db_path(env_db_path)
        self._settings = settings or load_settings()

        # Components (will be initialized in start())
        self._store: ITimingStore | None = None
        self._aws: AWSClients | None = None
        self._loopback: LoopbackTransport | None = None
        self._adapters: dict[Backend, IBackendAdapter] = {}
        self._driver: ChainDriver | None = None
        self._listeners: list[DeliveryListener] = []
        self._aggregator: Aggregator | None = None

    async def start(self) -> None:
        """Initialize components in dependency order."""
        logger.info("Starting application with %s transport", self._settings.transport)

        # 1. Timing store (no dependencies)
        self._store = TimingStore(self._db_path)
        await self._store.init()
        logger.info("Timing store initialized")

        # 2. Backend adapters (depend on a transport)
        self._adapters = await self._create_adapters()
        logger.info("Backend adapters created: %s", ", ".join(b.value for b in self._adapters))

        # 3. Chain driver (depends on the store)
        self._driver = ChainDriver(
            self._store,
            chain_length=self._settings.chain_length,
            deduplicate=self._settings.deduplicate,
        )

        # 4. Delivery listeners (depend on adapters + driver)
        self._listeners = []
        for adapter in self._adapters.values():
            listener = DeliveryListener(adapter, self._driver)
            listener.attach()
            self._listeners.append(listener)
        logger.info("Delivery listeners attached")

        # 5. Aggregator (depends on the store)
        self._aggregator = Aggregator(self._store)
        logger.info("All components initialized successfully")

    async def _create_adapters(self) -> dict[Backend, IBackendAdapter]:
        settings = self._settings

        if settings.transport == "aws":
            missing = settings.missing_aws_resources()
            if missing:
                raise ValueError(f"AWS transport requires {', '.join(missing)}")
            self._aws = AWSClients(settings.aws)
            await self._aws.open()
            clients: dict[Backend, Any] = {
                Backend.BUCKET: self._aws.client("s3"),
                Backend.TOPIC: self._aws.client("sns"),
                Backend.QUEUE: self._aws.client("sqs"),
                Backend.TABLE: self._aws.client("dynamodb"),
            }
        else:
            self._loopback = LoopbackTransport()
            clients = {backend: self._loopback.client(backend) for backend in Backend}

        adapters: list[IBackendAdapter] = [
            BucketAdapter(clients[Backend.BUCKET], settings.bucket_name or "loopback-bucket"),
            TopicAdapter(clients[Backend.TOPIC], settings.topic_arn or "loopback-topic"),
            QueueAdapter(clients[Backend.QUEUE], settings.queue_url or "loopback-queue"),
            TableAdapter(clients[Backend.TABLE], settings.table_name or "loopback-table"),
        ]
        if self._loopback:
            for adapter in adapters:
                self._loopback.bind(adapter)

        return {adapter.backend: adapter for adapter in adapters}

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        if self._loopback:
            await self._loopback.close()
        if self._aws:
            await self._aws.close()
            logger.info("AWS clients closed")
        if self._store:
            await self._store.close()
            logger.info("Timing store closed")

    async def start_run(self) -> None:
        """Dispatch sequence 0 into every backend and wait until all accepted it."""
        if not self._adapters:
            raise RuntimeError("Application not started")

        logger.info("Starting run of %s hops per backend", self._settings.chain_length)
        await asyncio.gather(*(adapter.dispatch(0) for adapter in self._adapters.values()))

    def adapter(self, backend: Backend | str) -> IBackendAdapter:
        """Get the adapter for a backend."""
        if not self._adapters:
            raise RuntimeError("Application not started")
        try:
            return self._adapters[Backend(backend)]
        except (KeyError, ValueError):
            raise UnknownBackendError(str(backend))

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def store(self) -> ITimingStore:
        """Get timing store instance."""
        if not self._store:
            raise RuntimeError("Application not started")
        return self._store

    @property
    def driver(self) -> ChainDriver:
        """Get chain driver instance."""
        if not self._driver:
            raise RuntimeError("Application not started")
        return self._driver

    @property
    def aggregator(self) -> Aggregator:
        """Get aggregator instance."""
        if not self._aggregator:
            raise RuntimeError("Application not started")
        return self._aggregator

    @property
    def loopback(self) -> LoopbackTransport | None:
        """Loopback transport, when running without AWS."""
        return self._loopback
