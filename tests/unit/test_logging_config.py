"""Tests for structlog configuration."""

import json
import logging
from collections.abc import Iterator

import pytest
import structlog

from payments_api.config import Settings
from payments_api.logging_config import setup_logging


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    root_logger = logging.getLogger()
    handlers, level = root_logger.handlers[:], root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


class TestSetupLogging:
    def test_json_output_carries_app_and_request_context(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        setup_logging(Settings(_env_file=None, log_json=True, app_env="test"))
        structlog.contextvars.bind_contextvars(request_id="req-1")

        structlog.get_logger("payments_api.test").info("payment_created", payment_id="abc")

        line = capsys.readouterr().out.strip().splitlines()[-1]
        record = json.loads(line)
        assert record["event"] == "payment_created"
        assert record["payment_id"] == "abc"
        assert record["request_id"] == "req-1"
        assert record["level"] == "info"
        assert record["app_name"] == "payments-api"
        assert record["app_env"] == "test"
        assert "timestamp" in record

    def test_level_filtering(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging(Settings(_env_file=None, log_json=True, log_level="WARNING"))
        logger = structlog.get_logger("payments_api.test")

        logger.info("payment_created")
        logger.warning("cancellation_before_creation")

        out = capsys.readouterr().out
        assert "payment_created" not in out
        assert "cancellation_before_creation" in out
