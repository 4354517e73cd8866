from __future__ import annotations

from .extractor import EXTRACTORS
from .normalizer import (
    empty_message,
    log_mapped_message,
    map_inbound_message,
    normalize_webhook,
)

__all__ = [
    "EXTRACTORS",
    "empty_message",
    "log_mapped_message",
    "map_inbound_message",
    "normalize_webhook",
]
