"""
Job parameter models.

Parameters arrive from the job runner using the job metadata names
(camelCase); attributes are exposed in snake_case.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class JobParams(BaseModel):
    """Fields shared by every handler. Unknown keys are ignored."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    method: Optional[str] = None
    address: Optional[str] = None
    address_override: Optional[str] = Field(default=None, alias="addressOverride")

    @field_validator("method", "address", "address_override", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class InvokeParams(JobParams):
    """Parameters of the invoke handler."""

    address_suffix: Optional[str] = Field(default=None, alias="addressSuffix")
    request_body: Optional[Any] = Field(default=None, alias="requestBody")
    request_headers: Optional[Union[str, Dict[str, Any]]] = Field(
        default=None, alias="requestHeaders"
    )
    accepted_status_codes: List[int] = Field(default_factory=list, alias="acceptedStatusCodes")

    @field_validator("address_suffix", "request_body", "request_headers", mode="before")
    @classmethod
    def _empty_string_to_none(cls, value):
        if isinstance(value, str) and value == "":
            return None
        return value

    @field_validator("accepted_status_codes", mode="before")
    @classmethod
    def _null_codes_to_empty(cls, value):
        return [] if value is None else value


class ErrorParams(JobParams):
    """Parameters of the error handler: the original params plus the raised error."""

    error: Any = None

    @property
    def error_message(self) -> str:
        """Message of the raised error, whatever shape the runner passed it in."""
        if self.error is None:
            return ""
        if isinstance(self.error, BaseException):
            return str(self.error)
        if isinstance(self.error, dict):
            message = self.error.get("message")
            return "" if message is None else str(message)
        return str(self.error)


class HaltParams(JobParams):
    """Parameters of the halt handler."""

    reason: Optional[str] = None
