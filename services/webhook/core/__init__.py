"""
Core logic package.

Provides request construction, authentication and error classification.
"""

from .auth import apply_auth_header
from .error_classifier import RecoveryAction, classify_error
from .request_builder import build_request, join_url

__all__ = [
    "apply_auth_header",
    "RecoveryAction",
    "classify_error",
    "build_request",
    "join_url",
]
