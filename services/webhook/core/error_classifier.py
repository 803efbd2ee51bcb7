"""
Error message classification for the recovery handler.

Matching is a case-sensitive substring check over the error message; rules
are evaluated in order and the first match wins.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class RecoveryAction(str, Enum):
    RETRY_AFTER_BACKOFF = "retry_after_backoff"
    TIMEOUT = "timeout"
    DNS_FAILURE = "dns_failure"
    UNRECOVERABLE = "unrecoverable"


@dataclass(frozen=True)
class RecoveryRule:
    patterns: Tuple[str, ...]
    action: RecoveryAction

    def matches(self, message: str) -> bool:
        return any(pattern in message for pattern in self.patterns)


RECOVERY_RULES: Tuple[RecoveryRule, ...] = (
    RecoveryRule(("rate limit", "429"), RecoveryAction.RETRY_AFTER_BACKOFF),
    RecoveryRule(("timeout", "ETIMEDOUT"), RecoveryAction.TIMEOUT),
    RecoveryRule(("ENOTFOUND", "DNS"), RecoveryAction.DNS_FAILURE),
)


def classify_error(message: str) -> RecoveryAction:
    """Return the recovery action for an error message."""
    for rule in RECOVERY_RULES:
        if rule.matches(message or ""):
            return rule.action
    return RecoveryAction.UNRECOVERABLE
