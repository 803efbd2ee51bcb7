"""
Services package.

Provides the webhook job business logic.
"""

from .webhook_invoker import WebhookInvoker

__all__ = [
    "WebhookInvoker",
]
