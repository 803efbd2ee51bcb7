"""
Execution context model.

Encapsulates what the job runner hands to every handler.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

BASE_URL_ENV_KEY = "WEBHOOK_BASE_URL"


class ExecutionContext(BaseModel):
    """
    Runner supplied context: environment, secrets, outputs of previous
    steps and partial results of an interrupted run.
    """

    model_config = ConfigDict(extra="ignore")

    env: Dict[str, str] = Field(default_factory=dict)
    secrets: Dict[str, str] = Field(default_factory=dict)
    outputs: Dict[str, Any] = Field(default_factory=dict)
    partial_results: Any = None  # Opaque; only its truthiness and JSON form are used

    @field_validator("env", "secrets", "outputs", mode="before")
    @classmethod
    def _null_to_empty(cls, value):
        return {} if value is None else value

    @property
    def base_url(self) -> Optional[str]:
        """Base URL supplied through the execution environment, if any."""
        return self.env.get(BASE_URL_ENV_KEY) or None
