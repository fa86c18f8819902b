"""Tests for configuration loading."""

from pathlib import Path

import pytest

from latency.config import (
    CHAIN_LENGTH,
    PROJECT_ROOT,
    AWSConfig,
    Settings,
    load_aws_config,
    load_settings,
    resolve_db_path,
)

_ENV_VARS = (
    "LATENCY_TRANSPORT",
    "LATENCY_CHAIN_LENGTH",
    "LATENCY_BUCKET",
    "LATENCY_TOPIC_ARN",
    "LATENCY_QUEUE_URL",
    "LATENCY_TABLE",
    "LATENCY_DEDUPLICATE",
    "LATENCY_AWS_REGION",
    "AWS_DEFAULT_REGION",
    "AWS_REGION",
    "AWS_ACCESS_KEY_ID",
    "AWS_SECRET_ACCESS_KEY",
    "LATENCY_AWS_ENDPOINT_URL",
    "AWS_ENDPOINT_URL",
)


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch):
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)


class TestResolveDbPath:
    """Tests for resolve_db_path()."""

    def test_memory(self):
        assert resolve_db_path(":memory:") == ":memory:"

    def test_relative_is_under_project_root(self):
        assert resolve_db_path("data/x.db") == PROJECT_ROOT / "data/x.db"

    def test_absolute_kept(self, tmp_path):
        assert resolve_db_path(tmp_path / "x.db") == tmp_path / "x.db"

    def test_default(self):
        assert Path(resolve_db_path()).name == "latency.db"


class TestLoadSettings:
    """Tests for load_settings()."""

    def test_defaults(self):
        """Test default settings."""
        settings = load_settings()

        assert settings.chain_length == CHAIN_LENGTH == 500
        assert settings.transport == "loopback"
        assert settings.deduplicate is False
        assert settings.aws.region == "us-east-1"

    def test_from_env(self, monkeypatch):
        """Test settings read from environment variables."""
        monkeypatch.setenv("LATENCY_TRANSPORT", "AWS")
        monkeypatch.setenv("LATENCY_CHAIN_LENGTH", "50")
        monkeypatch.setenv("LATENCY_BUCKET", "bucket")
        monkeypatch.setenv("LATENCY_QUEUE_URL", "https://sqs/q")
        monkeypatch.setenv("LATENCY_DEDUPLICATE", "true")

        settings = load_settings()

        assert settings.transport == "aws"
        assert settings.chain_length == 50
        assert settings.bucket_name == "bucket"
        assert settings.deduplicate is True
        assert settings.missing_aws_resources() == ["LATENCY_TOPIC_ARN", "LATENCY_TABLE"]

    def test_unknown_transport_rejected(self, monkeypatch):
        monkeypatch.setenv("LATENCY_TRANSPORT", "kafka")

        with pytest.raises(ValueError, match="LATENCY_TRANSPORT"):
            load_settings()

    def test_chain_length_must_be_positive(self, monkeypatch):
        monkeypatch.setenv("LATENCY_CHAIN_LENGTH", "0")

        with pytest.raises(ValueError):
            load_settings()

    def test_all_resources_configured(self):
        settings = Settings(bucket_name="b", topic_arn="t", queue_url="q", table_name="d")
        assert settings.missing_aws_resources() == []


class TestAWSConfig:
    """Tests for AWS configuration."""

    def test_region_precedence(self, monkeypatch):
        """Test LATENCY_AWS_REGION > AWS_DEFAULT_REGION > AWS_REGION."""
        monkeypatch.setenv("AWS_REGION", "eu-west-1")
        assert load_aws_config().region == "eu-west-1"

        monkeypatch.setenv("AWS_DEFAULT_REGION", "ap-south-1")
        assert load_aws_config().region == "ap-south-1"

        monkeypatch.setenv("LATENCY_AWS_REGION", "us-west-2")
        assert load_aws_config().region == "us-west-2"

    def test_session_kwargs_omit_missing_credentials(self):
        assert AWSConfig(region="eu-west-1").session_kwargs() == {"region_name": "eu-west-1"}

    def test_session_kwargs_with_credentials(self):
        config = AWSConfig(region="eu-west-1", access_key_id="AKIA", secret_access_key="secret")

        assert config.session_kwargs() == {
            "region_name": "eu-west-1",
            "aws_access_key_id": "AKIA",
            "aws_secret_access_key": "secret",
        }

    def test_endpoint_url_for_clients(self, monkeypatch):
        monkeypatch.setenv("AWS_ENDPOINT_URL", "http://localhost:4566")

        config = load_aws_config()

        assert config.client_kwargs() == {"endpoint_url": "http://localhost:4566"}
        assert AWSConfig().client_kwargs() == {}
