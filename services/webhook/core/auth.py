"""
Authentication header injection.

Secrets are checked in priority order; the first secret that is present
decides the single authentication header applied to the request.
"""

from typing import Callable, Dict, Mapping, Optional, Tuple

HeaderApplier = Callable[[str], Tuple[str, str]]

AUTH_HEADER_RULES: Tuple[Tuple[str, HeaderApplier], ...] = (
    ("AUTHORIZATION_HEADER", lambda value: ("Authorization", value)),
    ("API_KEY", lambda value: ("X-API-Key", value)),
    ("BEARER_TOKEN", lambda value: ("Authorization", f"Bearer {value}")),
)


def apply_auth_header(headers: Dict[str, str], secrets: Mapping[str, str]) -> Optional[str]:
    """
    Set the authentication header selected by ``secrets`` on ``headers``.

    Returns:
        The secret key that was applied, or None when no secret matched.
    """
    for secret_key, applier in AUTH_HEADER_RULES:
        value = secrets.get(secret_key)
        if value:
            name, header_value = applier(value)
            headers[name] = header_value
            return secret_key
    return None
