"""Webhook signature verification"""

import hashlib
import hmac
from typing import Optional, Union

SIGNATURE_PREFIX = 'sha256='


def compute_signature(raw_body: Union[bytes, str], secret: str) -> str:
    """Return the ``sha256=<hex>`` header value for a body"""
    if isinstance(raw_body, str):
        raw_body = raw_body.encode('utf-8')
    digest = hmac.new(secret.encode('utf-8'), raw_body, hashlib.sha256).hexdigest()
    return SIGNATURE_PREFIX + digest


def validate_signature(
    raw_body: Optional[Union[bytes, str]],
    signature_header: Optional[str],
    secret: Optional[str]
) -> bool:
    """Check an HMAC-SHA256 webhook signature.

    Returns False for absent or empty inputs, a header without the
    ``sha256=`` prefix, or a digest mismatch. Never raises for present
    inputs.
    """
    if not raw_body or not signature_header or not secret:
        return False
    if not signature_header.startswith(SIGNATURE_PREFIX):
        return False

    try:
        expected = compute_signature(raw_body, secret)[len(SIGNATURE_PREFIX):]
    except UnicodeEncodeError:
        # lone surrogates, e.g. from undecodable environment bytes
        return False
    provided = signature_header[len(SIGNATURE_PREFIX):]

    # compare_digest rejects non-ASCII str, so compare bytes
    return hmac.compare_digest(
        expected.encode('ascii'),
        provided.encode('utf-8', errors='replace')
    )
