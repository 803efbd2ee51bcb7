"""
Webhook job configuration definition.

Loads configuration from environment variables and provides a Pydantic model.
Uses pydantic-settings for type safety and defaults.
"""

import sys
from pydantic import Field
from services.common.core.config import BaseAppConfig

WEBHOOK_VERSION = "1.0.0"
DEFAULT_USER_AGENT = f"sgnl-generic-webhook/{WEBHOOK_VERSION}"


class WebhookConfig(BaseAppConfig):
    """
    Configuration management for the generic webhook job.
    """

    # Target resolution
    WEBHOOK_BASE_URL: str = Field(
        default="", description="Base URL used when no address parameter is given"
    )

    # Outbound request
    WEBHOOK_REQUEST_TIMEOUT: float = Field(
        default=30.0, description="Timeout handed to the HTTP client (seconds)"
    )
    USER_AGENT: str = Field(default=DEFAULT_USER_AGENT, description="Default User-Agent header")

    # Error recovery
    RATE_LIMIT_BACKOFF_SECONDS: float = Field(
        default=5.0, ge=0, description="Fixed delay before the single rate-limit retry"
    )

    # model_config is inherited


# Load config as a singleton.
# pydantic-settings reads environment variables during instantiation.
try:
    config = WebhookConfig()
except Exception as e:
    sys.stderr.write(f"Failed to load configuration: {e}\n")
    raise
