import logging

import pytest

from services.webhook.models import JobStatus
from services.webhook.services.webhook_invoker import WebhookInvoker


@pytest.fixture
def invoker(webhook_config):
    return WebhookInvoker(client=None, config=webhook_config)


@pytest.mark.asyncio
async def test_graceful_shutdown(invoker, mock_context):
    params = {"method": "GET", "address": "https://api.example.com", "reason": "timeout"}

    result = await invoker.halt(params, mock_context)

    assert result.status == JobStatus.HALTED
    assert result.method == "GET"
    assert result.url == "https://api.example.com"
    assert result.reason == "timeout"
    assert result.cleanup_completed is True
    assert result.halted_at.endswith("Z")
    assert result.partial_results_logged is False


@pytest.mark.asyncio
async def test_partial_results_are_logged(invoker, mock_context, caplog):
    caplog.set_level(logging.INFO, logger="webhook.invoker")
    context = {**mock_context, "partial_results": {"request_started": True, "headers_sent": True}}

    result = await invoker.halt({"method": "POST", "reason": "cancellation"}, context)

    assert result.status == JobStatus.HALTED
    assert result.partial_results_logged is True
    assert result.reason == "cancellation"
    assert result.url == "https://api.example.com"
    assert "request_started" in caplog.text


@pytest.mark.asyncio
async def test_defaults_when_nothing_is_known(invoker):
    result = await invoker.halt({"reason": "shutdown"}, {})

    assert result.method == "unknown"
    assert result.url == "unknown"
    assert result.partial_results_logged is False


@pytest.mark.asyncio
async def test_never_raises_on_malformed_input(invoker):
    result = await invoker.halt({"method": ["not", "a", "string"]}, {"env": "nope"})

    assert result.status == JobStatus.HALTED
    assert result.method == "unknown"
    assert result.cleanup_completed is True

    result = await invoker.halt(None, None)
    assert result.status == JobStatus.HALTED


@pytest.mark.asyncio
async def test_output_includes_reason_even_when_missing(invoker):
    result = await invoker.halt({}, {})
    output = result.to_output()

    assert output["status"] == "halted"
    assert "reason" in output and output["reason"] is None
    assert "status_code" not in output


@pytest.mark.asyncio
async def test_partial_results_of_any_shape_are_logged(invoker, mock_context, caplog):
    caplog.set_level(logging.INFO, logger="webhook.invoker")
    context = {**mock_context, "partial_results": ["step1"]}

    result = await invoker.halt({"method": "GET", "reason": "x"}, context)

    assert result.partial_results_logged is True
    assert result.url == "https://api.example.com"
    assert "step1" in caplog.text


@pytest.mark.asyncio
async def test_one_malformed_context_field_keeps_the_rest(invoker, mock_context, caplog):
    caplog.set_level(logging.WARNING, logger="webhook.request_builder")
    context = {**mock_context, "secrets": "not-a-mapping", "partial_results": {"a": 1}}

    result = await invoker.halt({"method": "GET"}, context)

    assert result.url == "https://api.example.com"
    assert result.partial_results_logged is True
    assert "Ignoring malformed execution context field secrets" in caplog.text
