"""Project-level configuration and path helpers."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DATA_DIR = PROJECT_ROOT / "03_data"
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_DB_PATH = DATA_DIR / "latency.db"
DEFAULT_LOG_PATH = LOGS_DIR / "app.log"

DATA_DIR.mkdir(parents=True, exist_ok=True)
LOGS_DIR.mkdir(parents=True, exist_ok=True)

# Number of hops every chain runs before it stops dispatching.
CHAIN_LENGTH = 500

TRANSPORTS = ("loopback", "aws")


PathLike = Union[str, Path]


def resolve_db_path(env_value: PathLike | None = None) -> PathLike:
    """Resolve DATABASE_URL to an absolute path."""
    if not env_value:
        return DEFAULT_DB_PATH

    if str(env_value) == ":memory:":
        return ":memory:"

    candidate = Path(env_value)
    return candidate if candidate.is_absolute() else PROJECT_ROOT / candidate


@dataclass(frozen=True)
class AWSConfig:
    """AWS credentials and endpoint used to build aioboto3 clients."""

    region: str = "us-east-1"
    access_key_id: str | None = None
    secret_access_key: str | None = None
    endpoint_url: str | None = None  # LocalStack

    def session_kwargs(self) -> dict[str, Any]:
        """Build kwargs for aioboto3.Session()."""
        kwargs: dict[str, Any] = {"region_name": self.region}
        if self.access_key_id:
            kwargs["aws_access_key_id"] = self.access_key_id
        if self.secret_access_key:
            kwargs["aws_secret_access_key"] = self.secret_access_key
        return kwargs

    def client_kwargs(self) -> dict[str, Any]:
        """Build kwargs for session.client()."""
        kwargs: dict[str, Any] = {}
        if self.endpoint_url:
            kwargs["endpoint_url"] = self.endpoint_url
        return kwargs


@dataclass(frozen=True)
class Settings:
    """Runtime settings for a measurement service."""

    chain_length: int = CHAIN_LENGTH
    transport: str = "loopback"
    bucket_name: str | None = None
    topic_arn: str | None = None
    queue_url: str | None = None
    table_name: str | None = None
    deduplicate: bool = False
    aws: AWSConfig = field(default_factory=AWSConfig)

    def missing_aws_resources(self) -> list[str]:
        """Names of AWS resources that are not configured."""
        resources = {
            "LATENCY_BUCKET": self.bucket_name,
            "LATENCY_TOPIC_ARN": self.topic_arn,
            "LATENCY_QUEUE_URL": self.queue_url,
            "LATENCY_TABLE": self.table_name,
        }
        return [name for name, value in resources.items() if not value]


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_aws_config() -> AWSConfig:
    """Load AWS configuration from environment variables."""
    region = (
        os.getenv("LATENCY_AWS_REGION")
        or os.getenv("AWS_DEFAULT_REGION")
        or os.getenv("AWS_REGION")
        or "us-east-1"
    )
    return AWSConfig(
        region=region,
        access_key_id=os.getenv("AWS_ACCESS_KEY_ID"),
        secret_access_key=os.getenv("AWS_SECRET_ACCESS_KEY"),
        endpoint_url=os.getenv("LATENCY_AWS_ENDPOINT_URL") or os.getenv("AWS_ENDPOINT_URL"),
    )


def load_settings() -> Settings:
    """Load settings from environment variables."""
    transport = os.getenv("LATENCY_TRANSPORT", "loopback").strip().lower()
    if transport not in TRANSPORTS:
        raise ValueError(f"Unknown LATENCY_TRANSPORT: {transport!r}")

    chain_length = int(os.getenv("LATENCY_CHAIN_LENGTH", str(CHAIN_LENGTH)))
    if chain_length < 1:
        raise ValueError("LATENCY_CHAIN_LENGTH must be at least 1")

    return Settings(
        chain_length=chain_length,
        transport=transport,
        bucket_name=os.getenv("LATENCY_BUCKET"),
        topic_arn=os.getenv("LATENCY_TOPIC_ARN"),
        queue_url=os.getenv("LATENCY_QUEUE_URL"),
        table_name=os.getenv("LATENCY_TABLE"),
        deduplicate=_env_flag("LATENCY_DEDUPLICATE"),
        aws=load_aws_config(),
    )
