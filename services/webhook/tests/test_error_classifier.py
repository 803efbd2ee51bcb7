import pytest

from services.webhook.core.auth import AUTH_HEADER_RULES, apply_auth_header
from services.webhook.core.error_classifier import RECOVERY_RULES, RecoveryAction, classify_error


@pytest.mark.parametrize(
    "message, expected",
    [
        ("Too many requests: rate limit exceeded", RecoveryAction.RETRY_AFTER_BACKOFF),
        ("upstream returned 429", RecoveryAction.RETRY_AFTER_BACKOFF),
        ("Request timeout - ETIMEDOUT", RecoveryAction.TIMEOUT),
        ("connect ETIMEDOUT 10.0.0.1:443", RecoveryAction.TIMEOUT),
        ("DNS resolution failed - ENOTFOUND", RecoveryAction.DNS_FAILURE),
        ("getaddrinfo ENOTFOUND api.example.com", RecoveryAction.DNS_FAILURE),
        ("Invalid SSL certificate", RecoveryAction.UNRECOVERABLE),
        ("", RecoveryAction.UNRECOVERABLE),
    ],
)
def test_classify_error(message, expected):
    assert classify_error(message) == expected


def test_first_matching_rule_wins():
    # Mentions both a rate limit and a timeout; the rate-limit rule comes first.
    assert classify_error("429 after timeout") == RecoveryAction.RETRY_AFTER_BACKOFF
    assert classify_error("DNS lookup timeout") == RecoveryAction.TIMEOUT


def test_matching_is_case_sensitive():
    assert classify_error("Rate Limit hit") == RecoveryAction.UNRECOVERABLE
    assert classify_error("Timeout") == RecoveryAction.UNRECOVERABLE
    assert classify_error("dns failure") == RecoveryAction.UNRECOVERABLE


def test_rule_table_order():
    assert [rule.action for rule in RECOVERY_RULES] == [
        RecoveryAction.RETRY_AFTER_BACKOFF,
        RecoveryAction.TIMEOUT,
        RecoveryAction.DNS_FAILURE,
    ]


def test_auth_rule_table_order():
    assert [key for key, _ in AUTH_HEADER_RULES] == [
        "AUTHORIZATION_HEADER",
        "API_KEY",
        "BEARER_TOKEN",
    ]


def test_apply_auth_header_reports_applied_secret():
    headers = {}
    applied = apply_auth_header(headers, {"BEARER_TOKEN": "abc", "UNRELATED": "x"})

    assert applied == "BEARER_TOKEN"
    assert headers == {"Authorization": "Bearer abc"}


def test_apply_auth_header_skips_empty_secrets():
    headers = {}
    applied = apply_auth_header(headers, {"AUTHORIZATION_HEADER": "", "API_KEY": "k"})

    assert applied == "API_KEY"
    assert headers == {"X-API-Key": "k"}
