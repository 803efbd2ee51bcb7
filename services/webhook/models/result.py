"""
Job result models.

Standardizes the output of the webhook handlers. Results are flat mappings
keyed off the ``status`` discriminator; only the fields relevant to a status
are present in the serialized output.
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel


class JobStatus(str, Enum):
    SUCCESS = "success"
    HTTP_ERROR = "http_error"
    TIMEOUT_ERROR = "timeout_error"
    DNS_ERROR = "dns_error"
    HALTED = "halted"


class JobResult(BaseModel):
    """
    Unified result of a webhook handler.

    ``invoke`` produces success / http_error, ``error`` produces
    timeout_error / dns_error (or the retried invoke result), ``halt``
    produces halted.
    """

    status: JobStatus
    error: Optional[str] = None
    status_code: Optional[int] = None
    body: Optional[str] = None
    headers: Optional[Dict[str, str]] = None
    url: Optional[str] = None
    method: Optional[str] = None
    processed_at: Optional[str] = None

    # Error recovery
    recovery_method: Optional[str] = None
    original_error: Optional[str] = None
    recovered_at: Optional[str] = None
    recommendation: Optional[str] = None

    # Halt
    reason: Optional[str] = None
    halted_at: Optional[str] = None
    cleanup_completed: Optional[bool] = None
    partial_results_logged: Optional[bool] = None

    @property
    def is_success(self) -> bool:
        return self.status == JobStatus.SUCCESS

    def to_output(self) -> Dict[str, Any]:
        """Serialize to the flat mapping handed back to the job runner."""
        return self.model_dump(mode="json", exclude_unset=True)
