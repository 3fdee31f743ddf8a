"""
Webhook Security Module

This module handles secure verification of Levanta webhook payloads.
It implements HMAC-SHA256 signature verification to ensure requests
are genuinely from Levanta.

Design Decisions:
- Use constant-time comparison to prevent timing attacks
- Verify signature over the raw body, before any payload parsing
- A missing secret skips verification (local testing only)
- Raise typed errors so the handler can map them to responses
"""

import hashlib
import hmac
from typing import Mapping, Optional

from levanta_webhook.logging_config import get_logger

logger = get_logger(__name__)

SIGNATURE_HEADER = "x-levanta-hmac-sha256"


class WebhookSecurityError(Exception):
    """Base exception for webhook authentication failures."""

    detail = "Unauthorized"

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail or self.detail)
        if detail:
            self.detail = detail


class MissingSignatureError(WebhookSecurityError):
    """Raised when the signature header is absent or empty."""

    detail = "No signature provided"


class InvalidSignatureError(WebhookSecurityError):
    """Raised when the signature does not match the body."""

    detail = "Invalid signature"


def compute_signature(raw_body: bytes, secret: str) -> str:
    """
    Compute the lowercase hex HMAC-SHA256 of a raw body.

    Args:
        raw_body: Exact request body bytes
        secret: Shared webhook secret

    Returns:
        Hex-encoded digest
    """
    return hmac.new(secret.encode("utf-8"), raw_body, hashlib.sha256).hexdigest()


def verify_signature(raw_body: bytes, signature: str, secret: str) -> bool:
    """
    Check a signature against the body in constant time.

    Both sides are compared as UTF-8 bytes, so a signature of a different
    length or with non-ASCII characters is a plain mismatch.
    """
    expected = compute_signature(raw_body, secret)
    return hmac.compare_digest(
        expected.encode("utf-8"),
        signature.encode("utf-8")
    )


def extract_signature(headers: Mapping[str, str]) -> Optional[str]:
    """
    Look up the signature header case-insensitively.

    Starlette headers are already case-insensitive, plain dicts are not.
    """
    value = headers.get(SIGNATURE_HEADER)
    if value is None:
        for key, candidate in headers.items():
            if key.lower() == SIGNATURE_HEADER:
                value = candidate
                break
    return value or None


def verify_request_signature(
    raw_body: bytes,
    signature: Optional[str],
    secret: Optional[str]
) -> bool:
    """
    Authenticate a webhook request.

    Args:
        raw_body: Raw request body bytes
        signature: Value of the signature header, if any
        secret: Configured webhook secret, if any

    Returns:
        True if the signature was checked and matched, False if
        verification was skipped because no secret is configured

    Raises:
        MissingSignatureError: If no signature was supplied
        InvalidSignatureError: If the signature does not match
    """
    if not signature:
        logger.error("No signature provided")
        raise MissingSignatureError()

    if not secret:
        logger.warning("No webhook secret set, skipping signature verification")
        return False

    if not verify_signature(raw_body, signature, secret):
        logger.error("Invalid signature", body_bytes=len(raw_body))
        raise InvalidSignatureError()

    logger.info("Signature verified")
    return True
