"""Verificação da assinatura HMAC SHA-256 enviada pela Meta nos webhooks."""

from __future__ import annotations

import hashlib
import hmac
from collections.abc import Mapping
from dataclasses import dataclass

SIGNATURE_HEADER = "x-hub-signature-256"
SIGNATURE_PREFIX = "sha256="


@dataclass(slots=True)
class SignatureResult:
    """Resultado da verificação; `skipped` indica secret não configurado."""

    valid: bool
    skipped: bool = False
    error: str | None = None

    @property
    def validated(self) -> bool:
        return self.valid and not self.skipped


def compute_signature(raw_body: bytes, secret: str) -> str:
    """Valor esperado do header (com prefixo `sha256=`)."""
    digest = hmac.new(secret.encode("utf-8"), raw_body, hashlib.sha256).hexdigest()
    return f"{SIGNATURE_PREFIX}{digest}"


def verify_webhook_signature(
    raw_body: bytes,
    headers: Mapping[str, str],
    secret: str | None,
) -> SignatureResult:
    """Confere o header `x-hub-signature-256` contra o corpo bruto.

    Sem secret a verificação é pulada (apenas desenvolvimento).
    """
    if not secret:
        return SignatureResult(valid=True, skipped=True)

    received = headers.get(SIGNATURE_HEADER)
    if not received:
        return SignatureResult(valid=False, error="missing_signature")
    if not received.startswith(SIGNATURE_PREFIX):
        return SignatureResult(valid=False, error="invalid_signature_format")

    if not hmac.compare_digest(compute_signature(raw_body, secret), received):
        return SignatureResult(valid=False, error="signature_mismatch")
    return SignatureResult(valid=True)
