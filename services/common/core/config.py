"""
Common Configuration
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class BaseAppConfig(BaseSettings):
    """
    Common application settings.
    """

    LOG_LEVEL: str = Field(default="INFO", description="Log level")
    VERIFY_SSL: bool = Field(default=True, description="Whether to verify SSL certificates")

    # ===== Outbound HTTP Defaults =====
    HTTP_TRUST_ENV: bool = Field(
        default=True, description="Honour HTTP(S)_PROXY / NO_PROXY from the environment"
    )
    HTTP_FOLLOW_REDIRECTS: bool = Field(
        default=True, description="Whether outbound clients follow redirects"
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=True, extra="ignore"
    )
