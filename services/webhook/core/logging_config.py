import os
from pathlib import Path
from typing import Optional

from services.common.core.logging_config import setup_logging as common_setup_logging
from services.webhook.config import WebhookConfig
from services.webhook.config import config as default_config

DEFAULT_LOG_CONFIG_PATH = Path(__file__).resolve().parent.parent / "logging.yml"


def setup_logging(config: Optional[WebhookConfig] = None):
    """
    Load the YAML config and initialize logging at the configured LOG_LEVEL.
    LOG_CONFIG_PATH overrides the packaged configuration.
    """
    config = config or default_config
    config_path = os.getenv("LOG_CONFIG_PATH", str(DEFAULT_LOG_CONFIG_PATH))
    common_setup_logging(config_path, log_level=config.LOG_LEVEL)
