"""Introspecção e sanitização de templates WhatsApp."""

from .analyzer import analyze_template, as_components, image_variable_for, is_dynamic_image_header
from .parser import parse_template
from .placeholders import Placeholder, has_placeholders, placeholder_indices, scan_placeholders
from .sanitizer import sanitize_template, sanitize_template_components

__all__ = [
    "Placeholder",
    "analyze_template",
    "as_components",
    "has_placeholders",
    "image_variable_for",
    "is_dynamic_image_header",
    "parse_template",
    "placeholder_indices",
    "sanitize_template",
    "sanitize_template_components",
    "scan_placeholders",
]
