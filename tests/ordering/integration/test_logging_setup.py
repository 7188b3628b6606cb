"""Tests for the structlog/stdlib logging setup."""

import logging

import pytest
import structlog
from ordering.utils.logging import add_context, clear_context, configure_logging, get_log_level


@pytest.fixture()
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        handler.close()
    root.handlers = handlers
    root.setLevel(level)
    structlog.reset_defaults()
    clear_context()


class TestLogLevel:
    @pytest.mark.parametrize(
        "environment,expected",
        [("production", "INFO"), ("development", "DEBUG"), ("test", "WARNING"), ("unknown", "INFO")],
    )
    def test_level_follows_environment(self, monkeypatch, environment, expected):
        monkeypatch.delenv("ENV", raising=False)
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.setenv("ENVIRONMENT", environment)
        assert get_log_level() == expected

    def test_explicit_level_wins(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.setenv("LOG_LEVEL", "error")
        assert get_log_level() == "ERROR"


class TestConfigureLogging:
    def test_writes_rotating_log_files(self, tmp_path, monkeypatch, restore_logging):
        monkeypatch.setenv("LOG_LEVEL", "INFO")
        monkeypatch.setenv("ENVIRONMENT", "production")

        configure_logging(log_dir=tmp_path)
        add_context(consumer="PaymentEventsConsumer")
        structlog.get_logger("ordering.test").info("Order created", order_id="ord-1")
        for handler in logging.getLogger().handlers:
            handler.flush()

        content = (tmp_path / "ordering.log").read_text()
        assert '"order_id": "ord-1"' in content
        assert '"consumer": "PaymentEventsConsumer"' in content
        assert (tmp_path / "ordering_error.log").exists()

    def test_noisy_libraries_are_quieted(self, restore_logging):
        configure_logging(log_dir=None)
        assert logging.getLogger("botocore").level == logging.WARNING
        assert logging.getLogger("httpx").level == logging.WARNING
