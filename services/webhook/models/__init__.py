"""
Data model definitions package.

Aggregates the models shared by the webhook handlers.
"""

from .context import BASE_URL_ENV_KEY, ExecutionContext
from .params import ErrorParams, HaltParams, InvokeParams, JobParams
from .request import RequestSpec
from .result import JobResult, JobStatus

__all__ = [
    "BASE_URL_ENV_KEY",
    "ExecutionContext",
    "ErrorParams",
    "HaltParams",
    "InvokeParams",
    "JobParams",
    "RequestSpec",
    "JobResult",
    "JobStatus",
]
