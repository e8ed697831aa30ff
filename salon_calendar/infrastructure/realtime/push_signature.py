from __future__ import annotations

import hashlib
import hmac
import logging

from salon_calendar.core.config import settings

SIGNATURE_HEADER = "X-Hub-Signature-256"
_SCHEME = "sha256"


class PushSignature:
    """HMAC-SHA256 over the raw push body, carried as `sha256=<hex>` in SIGNATURE_HEADER."""

    def __init__(self, secret: str | None, allow_unsigned: bool = False) -> None:
        self._secret = secret
        self._allow_unsigned = allow_unsigned
        self._logger = logging.getLogger(__name__)

    @classmethod
    def from_settings(cls) -> PushSignature:
        return cls(settings.REALTIME_WEBHOOK_SECRET, allow_unsigned=settings.ENV.lower() in {"dev", "local"})

    def sign(self, body: bytes) -> str:
        if not self._secret:
            raise ValueError("REALTIME_WEBHOOK_SECRET is required to sign push bodies")
        return f"{_SCHEME}={self._digest(body)}"

    def verify(self, body: bytes, header: str | None) -> bool:
        if not header:
            if self._allow_unsigned:
                self._logger.warning("Unsigned push accepted", extra={"reason": "dev/local"})
            return self._allow_unsigned

        if not self._secret:
            self._logger.error("Signed push received but REALTIME_WEBHOOK_SECRET is not set")
            return False

        scheme, sep, digest = header.strip().partition("=")
        if not sep or scheme.lower() != _SCHEME:
            return False
        return hmac.compare_digest(self._digest(body), digest.lower())

    def _digest(self, body: bytes) -> str:
        return hmac.new(self._secret.encode("utf-8"), body, hashlib.sha256).hexdigest()
