"""
Tests for push body signing and verification.
"""

from __future__ import annotations

import pytest

from salon_calendar.core.config import settings
from salon_calendar.infrastructure.realtime.push_signature import PushSignature


BODY = b'{"event":"newAppointment"}'


def test_signed_body_verifies():
    """A body signed with the shared secret verifies, whatever the hex case."""
    signer = PushSignature("k")
    header = signer.sign(BODY)
    assert header.startswith("sha256=")
    assert signer.verify(BODY, header)
    assert signer.verify(BODY, "SHA256=" + header.split("=", 1)[1].upper())


def test_wrong_secret_scheme_or_header_fails():
    """Other secrets, other schemes and headers without a digest fail."""
    signer = PushSignature("k")
    assert not signer.verify(BODY, PushSignature("other").sign(BODY))
    assert not signer.verify(BODY, "sha1=abc")
    assert not signer.verify(BODY, "garbage")
    assert not signer.verify(BODY + b" ", signer.sign(BODY))


def test_unsigned_bodies_pass_only_when_allowed():
    """Missing headers are accepted only when unsigned pushes are allowed."""
    assert PushSignature("k", allow_unsigned=True).verify(BODY, None)
    assert not PushSignature("k").verify(BODY, "")


def test_missing_secret_fails_closed():
    """A signed request cannot be verified, or a body signed, without a secret."""
    assert not PushSignature(None, allow_unsigned=True).verify(BODY, PushSignature("k").sign(BODY))
    with pytest.raises(ValueError):
        PushSignature(None).sign(BODY)


def test_from_settings_allows_unsigned_in_dev_only(monkeypatch):
    """ENV decides whether unsigned pushes are accepted."""
    monkeypatch.setattr(settings, "REALTIME_WEBHOOK_SECRET", "k")
    monkeypatch.setattr(settings, "ENV", "local")
    assert PushSignature.from_settings().verify(BODY, None)
    monkeypatch.setattr(settings, "ENV", "production")
    assert not PushSignature.from_settings().verify(BODY, None)
