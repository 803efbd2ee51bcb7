"""
Request construction.

Turns the invoke parameters, the execution context and the job configuration
into a RequestSpec: validates the method, resolves the target URL, merges
headers, validates the JSON body and injects the authentication header.
Everything here runs before any I/O.
"""

import json
import logging
from typing import Any, Dict, Mapping, Optional, Tuple, Type, TypeVar

import httpx
from pydantic import ValidationError as PydanticValidationError

from services.webhook.config import WebhookConfig
from services.webhook.core.auth import apply_auth_header
from services.webhook.core.exceptions import InvalidJsonError, ValidationError
from services.webhook.core.utils import has_header
from services.webhook.models import ExecutionContext, InvokeParams, JobParams, RequestSpec

logger = logging.getLogger("webhook.request_builder")

ParamsT = TypeVar("ParamsT", bound=JobParams)

MISSING_ADDRESS_MESSAGE = (
    "Either address parameter or WEBHOOK_BASE_URL environment variable must be provided"
)


def parse_params(model: Type[ParamsT], params: Optional[Mapping[str, Any]]) -> ParamsT:
    """Validate raw runner params, naming the offending field on failure."""
    try:
        return model.model_validate(dict(params or {}))
    except PydanticValidationError as e:
        fields = ", ".join(
            ".".join(str(part) for part in err["loc"]) or "params" for err in e.errors()
        )
        raise ValidationError(f"Invalid parameter(s): {fields}") from e


def parse_context(context: Optional[Mapping[str, Any]]) -> ExecutionContext:
    try:
        return ExecutionContext.model_validate(dict(context or {}))
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid execution context: {e}") from e


def parse_context_lenient(context: Any) -> ExecutionContext:
    """
    Validate the context field by field, dropping only the fields that fail.
    Used where the handler must not raise (halt).
    """
    if not isinstance(context, Mapping):
        if context is not None:
            logger.warning(
                f"Ignoring malformed execution context of type {type(context).__name__}"
            )
        return ExecutionContext()

    fields = {}
    for name in ExecutionContext.model_fields:
        if name not in context:
            continue
        try:
            ExecutionContext.model_validate({name: context[name]})
        except PydanticValidationError as e:
            logger.warning(f"Ignoring malformed execution context field {name}: {e}")
            continue
        fields[name] = context[name]
    return ExecutionContext.model_validate(fields)


def resolve_base_address(
    params: JobParams, context: ExecutionContext, config: WebhookConfig
) -> Optional[str]:
    """
    Target address before any suffix is applied.

    Precedence: address > addressOverride > context env base URL > configured base URL.
    """
    return (
        params.address
        or params.address_override
        or context.base_url
        or config.WEBHOOK_BASE_URL
        or None
    )


def join_url(base: str, suffix: Optional[str]) -> str:
    """Join base and suffix with exactly one slash between them."""
    if not suffix:
        return base
    if base.endswith("/"):
        base = base[:-1]
    if suffix.startswith("/"):
        suffix = suffix[1:]
    return f"{base}/{suffix}"


def resolve_target_url(
    params: InvokeParams, context: ExecutionContext, config: WebhookConfig
) -> str:
    base = resolve_base_address(params, context, config)
    if not base:
        raise ValidationError(MISSING_ADDRESS_MESSAGE)

    target_url = join_url(base, params.address_suffix)

    try:
        parsed = httpx.URL(target_url)
    except httpx.InvalidURL as e:
        raise ValidationError(f"Invalid address {target_url!r}: {e}") from e
    if not parsed.is_absolute_url:
        raise ValidationError(f"Invalid address {target_url!r}: an absolute URL is required")

    return target_url


def _parse_custom_headers(raw: Any) -> Dict[str, str]:
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as e:
            raise InvalidJsonError("requestHeaders", str(e)) from e
    if not isinstance(raw, dict):
        raise InvalidJsonError("requestHeaders", "expected a JSON object")

    return {
        str(name): value if isinstance(value, str) else json.dumps(value)
        for name, value in raw.items()
    }


def _prepare_body(raw: Any) -> str:
    if isinstance(raw, str):
        try:
            json.loads(raw)
        except json.JSONDecodeError as e:
            raise InvalidJsonError("requestBody", str(e)) from e
        # The original text is sent, not a re-serialized copy.
        return raw
    try:
        return json.dumps(raw)
    except (TypeError, ValueError) as e:
        raise InvalidJsonError("requestBody", str(e)) from e


def _ensure_latin1(headers: Mapping[str, str], source: str) -> None:
    for name, value in headers.items():
        try:
            name.encode("latin-1")
            value.encode("latin-1")
        except UnicodeEncodeError as e:
            raise ValidationError(
                f"Invalid header {name!r} from {source}: not Latin-1 encodable"
            ) from e


def build_headers_and_body(
    params: InvokeParams, secrets: Mapping[str, str], config: WebhookConfig
) -> Tuple[Dict[str, str], Optional[str]]:
    headers: Dict[str, str] = {"User-Agent": config.USER_AGENT}
    _ensure_latin1(headers, "USER_AGENT")

    if params.request_headers is not None:
        custom = _parse_custom_headers(params.request_headers)
        _ensure_latin1(custom, "requestHeaders")
        headers.update(custom)

    body = None
    if params.request_body is not None:
        body = _prepare_body(params.request_body)
        if not has_header(headers, "Content-Type"):
            headers["Content-Type"] = "application/json"

    auth: Dict[str, str] = {}
    applied = apply_auth_header(auth, secrets)
    if applied:
        _ensure_latin1(auth, applied)
        headers.update(auth)
        logger.debug(f"Applied authentication from secret {applied}")

    return headers, body


def build_request(
    params: InvokeParams, context: ExecutionContext, config: WebhookConfig
) -> RequestSpec:
    """
    Build the outbound request.

    Raises:
        ValidationError: method or target address missing / unusable, or a
            header that cannot be sent as Latin-1
        InvalidJsonError: requestBody or requestHeaders is not valid JSON
    """
    if not params.method:
        raise ValidationError("HTTP method is required")

    url = resolve_target_url(params, context, config)
    headers, body = build_headers_and_body(params, context.secrets, config)

    return RequestSpec(method=params.method.strip().upper(), url=url, headers=headers, body=body)
