"""
RequestContext management.
Use ContextVar to share the invocation ID across async execution.
"""

from contextvars import ContextVar
from typing import Optional


# Context variable for the job invocation ID (UUID).
_invocation_id_var: ContextVar[Optional[str]] = ContextVar("invocation_id", default=None)


def get_invocation_id() -> Optional[str]:
    """Get the current invocation ID."""
    return _invocation_id_var.get()


def set_invocation_id(invocation_id: str) -> str:
    """Set the invocation ID for the current context."""
    _invocation_id_var.set(invocation_id)
    return invocation_id


def generate_invocation_id() -> str:
    """
    Generate and set a new invocation ID (UUID) for the current context.
    """
    import uuid

    return set_invocation_id(str(uuid.uuid4()))


def clear_invocation_id() -> None:
    """Clear the invocation ID context."""
    _invocation_id_var.set(None)
