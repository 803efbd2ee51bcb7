"""
Where: services/webhook/tests/test_config_defaults.py
What: Validate default WebhookConfig values and environment overrides.
Why: Keep job defaults (backoff, User-Agent, base URL lookup) stable.
"""

import pytest
from pydantic import ValidationError

from services.webhook.config import DEFAULT_USER_AGENT, WebhookConfig
from services.webhook.core import logging_config


def _clear_env(monkeypatch) -> None:
    for name in (
        "WEBHOOK_BASE_URL",
        "WEBHOOK_REQUEST_TIMEOUT",
        "RATE_LIMIT_BACKOFF_SECONDS",
        "USER_AGENT",
        "VERIFY_SSL",
        "HTTP_TRUST_ENV",
        "HTTP_FOLLOW_REDIRECTS",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults(monkeypatch):
    _clear_env(monkeypatch)

    config = WebhookConfig(_env_file=None)

    assert config.WEBHOOK_BASE_URL == ""
    assert config.RATE_LIMIT_BACKOFF_SECONDS == 5.0
    assert config.WEBHOOK_REQUEST_TIMEOUT == 30.0
    assert config.USER_AGENT == DEFAULT_USER_AGENT == "sgnl-generic-webhook/1.0.0"
    assert config.VERIFY_SSL is True
    assert config.HTTP_FOLLOW_REDIRECTS is True
    assert config.LOG_LEVEL == "INFO"


def test_environment_overrides(monkeypatch):
    _clear_env(monkeypatch)
    monkeypatch.setenv("WEBHOOK_BASE_URL", "https://hooks.example.com")
    monkeypatch.setenv("RATE_LIMIT_BACKOFF_SECONDS", "0.5")
    monkeypatch.setenv("VERIFY_SSL", "false")

    config = WebhookConfig(_env_file=None)

    assert config.WEBHOOK_BASE_URL == "https://hooks.example.com"
    assert config.RATE_LIMIT_BACKOFF_SECONDS == 0.5
    assert config.VERIFY_SSL is False


def test_env_names_are_case_sensitive(monkeypatch):
    _clear_env(monkeypatch)
    monkeypatch.setenv("webhook_base_url", "https://lower.example.com")

    config = WebhookConfig(_env_file=None)

    assert config.WEBHOOK_BASE_URL == ""


def test_negative_backoff_rejected(monkeypatch):
    _clear_env(monkeypatch)

    with pytest.raises(ValidationError):
        WebhookConfig(_env_file=None, RATE_LIMIT_BACKOFF_SECONDS=-1)


def test_setup_logging_uses_configured_level(monkeypatch):
    _clear_env(monkeypatch)
    monkeypatch.delenv("LOG_CONFIG_PATH", raising=False)
    calls = []
    monkeypatch.setattr(
        logging_config,
        "common_setup_logging",
        lambda path, log_level=None: calls.append((path, log_level)),
    )

    logging_config.setup_logging(WebhookConfig(_env_file=None, LOG_LEVEL="DEBUG"))

    assert calls == [(str(logging_config.DEFAULT_LOG_CONFIG_PATH), "DEBUG")]
