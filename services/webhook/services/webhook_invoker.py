"""
Webhook Invoker Service

Performs the single outbound HTTP request of a webhook job and classifies the
response. Also hosts the error recovery and halt handlers that the job runner
calls when an invocation throws or is cancelled.
"""

import asyncio
import json
import logging
from typing import Any, List, Mapping, Optional

import httpx

from services.webhook.config import WebhookConfig
from services.webhook.core.error_classifier import RecoveryAction, classify_error
from services.webhook.core.exceptions import (
    RetryFailedError,
    TransportError,
    UnrecoverableError,
)
from services.webhook.core.request_builder import (
    build_request,
    parse_context,
    parse_context_lenient,
    parse_params,
    resolve_base_address,
)
from services.webhook.core.utils import utc_timestamp
from services.webhook.models import (
    ErrorParams,
    HaltParams,
    InvokeParams,
    JobResult,
    JobStatus,
    RequestSpec,
)

logger = logging.getLogger("webhook.invoker")

# Recovered outcomes: action -> (status, recovery_method, recommendation)
_RECOVERED_OUTCOMES = {
    RecoveryAction.TIMEOUT: (
        JobStatus.TIMEOUT_ERROR,
        "timeout_handling",
        "Consider increasing timeout or checking network connectivity",
    ),
    RecoveryAction.DNS_FAILURE: (
        JobStatus.DNS_ERROR,
        "dns_failure_handling",
        "Verify the target URL is correct and accessible",
    ),
}


def is_success_status(status_code: int, accepted_status_codes: List[int]) -> bool:
    return 200 <= status_code < 300 or status_code in accepted_status_codes


class WebhookInvoker:
    def __init__(self, client: Optional[httpx.AsyncClient], config: WebhookConfig):
        """
        Args:
            client: httpx.AsyncClient used for the outbound request
                (not needed by halt)
            config: WebhookConfig instance
        """
        self.client = client
        self.config = config

    async def invoke(
        self, params: Mapping[str, Any], context: Optional[Mapping[str, Any]]
    ) -> JobResult:
        """
        Build the request, send it once and classify the response.

        Non-success HTTP statuses are returned as ``http_error`` results;
        only validation and transport failures raise.

        Raises:
            ValidationError: missing method / address, malformed params
            InvalidJsonError: malformed requestBody / requestHeaders
            TransportError: the request could not complete
        """
        logger.info("Starting generic webhook execution")
        invoke_params = parse_params(InvokeParams, params)
        ctx = parse_context(context)
        logger.info(f"HTTP Method: {invoke_params.method}")

        spec = build_request(invoke_params, ctx, self.config)
        logger.info(f"Target URL: {spec.url}")
        logger.info(f"Request headers: {json.dumps(list(spec.headers))}")

        response = await self._send(spec)
        return self._classify(spec, response, invoke_params.accepted_status_codes)

    async def _send(self, spec: RequestSpec) -> httpx.Response:
        if self.client is None:
            raise RuntimeError("WebhookInvoker.invoke requires an HTTP client")

        try:
            response = await self.client.request(
                spec.method,
                spec.url,
                headers=spec.encoded_headers(),
                content=spec.body,
            )
        except httpx.RequestError as e:
            logger.error(
                f"Webhook request failed for {spec.method} {spec.url}",
                extra={
                    "target_url": spec.url,
                    "method": spec.method,
                    "error_type": type(e).__name__,
                    "error_detail": str(e),
                },
            )
            raise TransportError(e) from e

        logger.info(f"Response status: {response.status_code}")
        logger.info(f"Response body length: {len(response.text)} characters")
        return response

    def _classify(
        self, spec: RequestSpec, response: httpx.Response, accepted_status_codes: List[int]
    ) -> JobResult:
        fields = dict(
            status_code=response.status_code,
            body=response.text,
            headers=dict(response.headers),
            url=spec.url,
            method=spec.method,
            processed_at=utc_timestamp(),
        )

        if is_success_status(response.status_code, accepted_status_codes):
            logger.info(f"Request completed successfully with status {response.status_code}")
            return JobResult(status=JobStatus.SUCCESS, **fields)

        error_message = f"HTTP request failed with status {response.status_code}"
        logger.error(error_message, extra={"target_url": spec.url, "method": spec.method})
        return JobResult(status=JobStatus.HTTP_ERROR, error=error_message, **fields)

    async def error(
        self, params: Mapping[str, Any], context: Optional[Mapping[str, Any]]
    ) -> JobResult:
        """
        Recover from an error raised by invoke.

        Rate limits get one retry after a fixed backoff, timeouts and DNS
        failures are turned into results, anything else is re-raised.

        Raises:
            RetryFailedError: the retry after the rate-limit backoff raised
            UnrecoverableError: the error matches no recovery rule
        """
        error_params = parse_params(ErrorParams, params)
        ctx = parse_context(context)
        message = error_params.error_message
        target_url = resolve_base_address(error_params, ctx, self.config)

        logger.error(f"Webhook request encountered error: {message}")
        logger.error(f"Target: {error_params.method} {target_url}")

        action = classify_error(message)

        if action == RecoveryAction.RETRY_AFTER_BACKOFF:
            return await self._retry_after_backoff(params, context)

        if action in _RECOVERED_OUTCOMES:
            status, recovery_method, recommendation = _RECOVERED_OUTCOMES[action]
            logger.warning(f"Recovered from webhook error via {recovery_method}")
            return JobResult(
                status=status,
                method=error_params.method,
                url=target_url,
                recovery_method=recovery_method,
                original_error=message,
                recovered_at=utc_timestamp(),
                recommendation=recommendation,
            )

        logger.error(f"Unable to recover from webhook error: {message}")
        cause = error_params.error if isinstance(error_params.error, BaseException) else None
        raise UnrecoverableError(message) from cause

    async def _retry_after_backoff(
        self, params: Mapping[str, Any], context: Optional[Mapping[str, Any]]
    ) -> JobResult:
        delay = self.config.RATE_LIMIT_BACKOFF_SECONDS
        logger.warning(f"Rate limited - backing off for {delay} seconds")
        await asyncio.sleep(delay)

        logger.info("Retrying webhook request after backoff")
        retry_params = {key: value for key, value in params.items() if key != "error"}
        try:
            return await self.invoke(retry_params, context)
        except Exception as e:
            logger.error(f"Retry after rate limit backoff failed: {e}")
            raise RetryFailedError(e) from e

    async def halt(
        self, params: Optional[Mapping[str, Any]], context: Optional[Mapping[str, Any]]
    ) -> JobResult:
        """
        Record a cooperative cancellation. Never raises.
        """
        try:
            halt_params = HaltParams.model_validate(dict(params or {}))
        except (TypeError, ValueError) as e:
            logger.warning(f"Ignoring malformed halt params: {e}")
            halt_params = HaltParams()
        ctx = parse_context_lenient(context)

        target_url = resolve_base_address(halt_params, ctx, self.config)
        logger.info(f"Webhook job is being halted ({halt_params.reason})")
        logger.info(f"Target: {halt_params.method} {target_url}")

        partial_results_logged = bool(ctx.partial_results)
        if partial_results_logged:
            logger.info("Logging partial results before shutdown")
            logger.info(
                f"Partial results: {json.dumps(ctx.partial_results, indent=2, default=str)}"
            )

        # Clients are scoped to a single call, so there is nothing left to tear down.
        logger.info("Performing cleanup operations")

        return JobResult(
            status=JobStatus.HALTED,
            method=halt_params.method or "unknown",
            url=target_url or "unknown",
            reason=halt_params.reason,
            halted_at=utc_timestamp(),
            cleanup_completed=True,
            partial_results_logged=partial_results_logged,
        )
