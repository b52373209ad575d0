"""Tests for structured logging context."""

from unittest.mock import MagicMock
from uuid import uuid4

import pytest
import structlog

from src.memora.core import config
from src.memora.core.logging import (
    REDACTED,
    bind_account_context,
    bind_request_context,
    clear_request_context,
    redact_sensitive,
)

pytestmark = pytest.mark.unit


def test_bind_request_context(capturing_logger):
    """Test binding request_id to log context."""
    bind_request_context("test-request-123")
    structlog.get_logger().info("test message")

    entries = capturing_logger.calls
    assert len(entries) == 1
    assert entries[0].kwargs["request_id"] == "test-request-123"


def test_bind_request_context_with_none(capturing_logger):
    """Test that None request_id is not bound."""
    bind_request_context(None)
    structlog.get_logger().info("test message")

    assert "request_id" not in capturing_logger.calls[0].kwargs


def test_bind_account_context_omits_email_by_default(capturing_logger):
    """Email is only logged when log_user_emails=True."""
    account_id = uuid4()

    bind_account_context(account_id, "admin", "alice@example.com")
    structlog.get_logger().info("test message")

    entry = capturing_logger.calls[0].kwargs
    assert entry["account_id"] == str(account_id)
    assert entry["account_role"] == "admin"
    assert "account_email" not in entry


def test_bind_account_context_with_email_logging_enabled(capturing_logger, monkeypatch):
    mock_settings = MagicMock()
    mock_settings.log_user_emails = True
    monkeypatch.setattr(config, "get_settings", lambda: mock_settings)

    bind_account_context(uuid4(), "user", "alice@example.com")
    structlog.get_logger().info("test message")

    assert capturing_logger.calls[0].kwargs["account_email"] == "alice@example.com"


def test_clear_request_context(capturing_logger):
    bind_request_context("test-request-123")
    bind_account_context(uuid4(), "user")

    clear_request_context()
    structlog.get_logger().info("after clear")

    entry = capturing_logger.calls[0].kwargs
    assert "request_id" not in entry
    assert "account_id" not in entry


def test_credentials_are_redacted():
    event = redact_sensitive(
        None,
        "info",
        {"event": "login", "password": "hunter2", "refresh_token": "eyJ...", "email": "a@b.c"},
    )

    assert event["password"] == REDACTED
    assert event["refresh_token"] == REDACTED
    assert event["email"] == "a@b.c"
