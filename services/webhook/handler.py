"""
Job runner entry points.

The runner calls ``invoke`` for every execution, ``error`` when ``invoke``
raised, and ``halt`` when it cancels the job. Params and context are plain
mappings; every handler returns the flat result mapping.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Mapping, Optional

from services.common.core.http_client import HttpClientFactory
from services.common.core.request_context import clear_invocation_id, generate_invocation_id
from services.webhook.config import WebhookConfig
from services.webhook.config import config as default_config
from services.webhook.services.webhook_invoker import WebhookInvoker

logger = logging.getLogger("webhook.handler")


@asynccontextmanager
async def _invoker(config: WebhookConfig) -> AsyncIterator[WebhookInvoker]:
    factory = HttpClientFactory(config)
    async with factory.create_async_client(timeout=config.WEBHOOK_REQUEST_TIMEOUT) as client:
        yield WebhookInvoker(client=client, config=config)


async def invoke(
    params: Mapping[str, Any],
    context: Optional[Mapping[str, Any]] = None,
    config: Optional[WebhookConfig] = None,
) -> Dict[str, Any]:
    """Perform the webhook request described by ``params``."""
    invocation_id = generate_invocation_id()
    logger.debug(f"invoke started (invocation_id={invocation_id})")
    try:
        async with _invoker(config or default_config) as invoker:
            result = await invoker.invoke(params, context)
        return result.to_output()
    finally:
        clear_invocation_id()


async def error(
    params: Mapping[str, Any],
    context: Optional[Mapping[str, Any]] = None,
    config: Optional[WebhookConfig] = None,
) -> Dict[str, Any]:
    """Recover from the error in ``params["error"]`` or re-raise."""
    invocation_id = generate_invocation_id()
    logger.debug(f"error handler started (invocation_id={invocation_id})")
    try:
        async with _invoker(config or default_config) as invoker:
            result = await invoker.error(params, context)
        return result.to_output()
    finally:
        clear_invocation_id()


async def halt(
    params: Optional[Mapping[str, Any]],
    context: Optional[Mapping[str, Any]] = None,
    config: Optional[WebhookConfig] = None,
) -> Dict[str, Any]:
    """Acknowledge a cancellation; never raises."""
    generate_invocation_id()
    try:
        invoker = WebhookInvoker(client=None, config=config or default_config)
        result = await invoker.halt(params, context)
        return result.to_output()
    finally:
        clear_invocation_id()
