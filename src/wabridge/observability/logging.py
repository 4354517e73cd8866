"""Logging estruturado em JSON e helpers de mascaramento.

Regra da casa: eventos em snake_case, dados em `extra`, nunca payload bruto
nem telefone completo.
"""

from __future__ import annotations

import logging

from pythonjsonlogger.json import JsonFormatter

from wabridge.observability.middleware import get_correlation_id

_LOG_FIELDS = ("asctime", "levelname", "name", "message", "correlation_id", "service")
_RENAMED_FIELDS = {"levelname": "level", "name": "logger"}
_TEXT_PREVIEW_LIMIT = 100


class CorrelationIdFilter(logging.Filter):
    """Completa cada record com `service` e `correlation_id`."""

    def __init__(self, service_name: str) -> None:
        super().__init__()
        self._service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        if not getattr(record, "correlation_id", None):
            record.correlation_id = get_correlation_id()
        record.service = self._service_name
        return True


def configure_logging(level: str = "INFO", service_name: str = "wabridge") -> None:
    """Instala um único handler JSON (stderr) no root logger.

    Chamadas repetidas substituem o handler anterior.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(
        JsonFormatter(
            " ".join(f"%({field})s" for field in _LOG_FIELDS),
            rename_fields=_RENAMED_FIELDS,
        )
    )
    handler.addFilter(CorrelationIdFilter(service_name))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level.upper())


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def mask_phone(number: str | None) -> str | None:
    """Mascara número de telefone (mantém 3 iniciais e 2 finais).

    Exemplo:
        mask_phone("15551234567") -> "155******67"
    """
    if not number:
        return None
    if len(number) <= 5:
        return "*" * len(number)
    return f"{number[:3]}{'*' * (len(number) - 5)}{number[-2:]}"


def preview_text(text: str | None, limit: int = _TEXT_PREVIEW_LIMIT) -> str | None:
    """Trunca texto para preview em log."""
    if text is None or len(text) <= limit:
        return text
    return f"{text[:limit]}..."
