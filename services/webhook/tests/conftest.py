import pytest

from services.webhook.config import WebhookConfig

BASE_URL = "https://api.example.com"


@pytest.fixture
def webhook_config():
    """Config isolated from the host environment and .env files."""
    return WebhookConfig(
        _env_file=None,
        WEBHOOK_BASE_URL="",
        RATE_LIMIT_BACKOFF_SECONDS=0,
    )


@pytest.fixture
def mock_context():
    return {
        "env": {"WEBHOOK_BASE_URL": BASE_URL},
        "secrets": {"API_KEY": "test-api-key-123456"},
        "outputs": {},
        "partial_results": {},
    }
