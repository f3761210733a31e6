"""Tests for webhook signature verification.

Property tests use Hypothesis to check the verifier over arbitrary bodies
and secrets.
"""

import hashlib
import hmac

import pytest
from hypothesis import assume, given, settings, strategies as st

from agentlink.webhooks.signature import compute_signature, validate_signature

bodies = st.binary(min_size=1, max_size=512)
secrets = st.text(min_size=1, max_size=64)


def _reference(body: bytes, secret: str) -> str:
    return "sha256=" + hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()


class TestComputeSignature:

    def test_matches_reference_hmac(self):
        assert compute_signature(b"test payload", "test-secret") == _reference(
            b"test payload", "test-secret"
        )

    def test_str_body_is_utf8_encoded(self):
        assert compute_signature("héllo", "s") == compute_signature("héllo".encode(), "s")

    def test_hex_is_lowercase(self):
        digest = compute_signature(b"x", "s")[len("sha256="):]
        assert digest == digest.lower()
        assert len(digest) == 64


class TestValidateSignature:

    @settings(max_examples=100, deadline=None)
    @given(body=bodies, secret=secrets)
    def test_accepts_correct_signature(self, body, secret):
        assert validate_signature(body, _reference(body, secret), secret) is True

    @settings(max_examples=100, deadline=None)
    @given(body=bodies, secret=secrets, other=st.binary(min_size=1, max_size=512))
    def test_rejects_signature_of_other_body(self, body, secret, other):
        assume(other != body)
        assert validate_signature(body, _reference(other, secret), secret) is False

    @settings(max_examples=100, deadline=None)
    @given(body=bodies, secret=secrets, other=secrets)
    def test_rejects_signature_with_other_secret(self, body, secret, other):
        assume(other != secret)
        assert validate_signature(body, _reference(body, other), secret) is False

    @settings(deadline=None)
    @given(body=bodies, secret=secrets, header=st.text(max_size=80))
    def test_never_raises_for_arbitrary_headers(self, body, secret, header):
        assert validate_signature(body, header, secret) in (True, False)

    @pytest.mark.parametrize(
        "body, header, secret",
        [
            (None, "sha256=abc", "secret"),
            (b"payload", None, "secret"),
            (b"payload", "sha256=abc", None),
            (b"", "sha256=abc", "secret"),
            (b"payload", "", "secret"),
            (b"payload", "sha256=abc", ""),
        ],
    )
    def test_absent_inputs_are_rejected(self, body, header, secret):
        assert validate_signature(body, header, secret) is False

    def test_rejects_missing_prefix(self):
        body, secret = b"payload", "secret"
        digest = _reference(body, secret)[len("sha256="):]
        assert validate_signature(body, digest, secret) is False
        assert validate_signature(body, "md5=" + digest, secret) is False
        assert validate_signature(body, "sha1=" + digest, secret) is False

    def test_rejects_uppercase_digest(self):
        body, secret = b"payload", "secret"
        header = "sha256=" + _reference(body, secret)[len("sha256="):].upper()
        assert validate_signature(body, header, secret) is False

    def test_non_ascii_header_is_rejected_without_error(self):
        assert validate_signature(b"payload", "sha256=ünïcödé", "secret") is False

    @pytest.mark.parametrize(
        "body, secret",
        [
            (b"payload", "\udcff"),
            ("\ud800", "secret"),
        ],
    )
    def test_unencodable_input_is_rejected(self, body, secret):
        assert validate_signature(body, "sha256=" + "0" * 64, secret) is False

    def test_str_body(self):
        header = _reference("test payload".encode(), "test-secret")
        assert validate_signature("test payload", header, "test-secret") is True
