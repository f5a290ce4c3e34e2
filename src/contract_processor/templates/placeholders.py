"""Placeholder discovery and validation for `{{FIELD_NAME}}` templates."""

import re
from dataclasses import dataclass, field

PLACEHOLDER_PATTERN = re.compile(r"\{\{([^{}]+)\}\}")

# Filled with the current date by the template filler
SIGNATURE_DATE_PLACEHOLDER = "FECHA_FIRMA"

# Every uploaded client template must carry these
REQUIRED_PLACEHOLDERS = ("NOMBRE_CLIENTE", "FECHA_EVENTO")


@dataclass
class PlaceholderValidation:
    """Result of checking a template for its required placeholders."""
    is_valid: bool
    missing: list[str] = field(default_factory=list)


def extract_placeholders(body: str) -> list[str]:
    """Return distinct placeholder names in order of first occurrence.

    Names are trimmed; empty markers and markers without a closing `}}`
    are ignored.
    """
    placeholders: list[str] = []
    seen: set[str] = set()
    for match in PLACEHOLDER_PATTERN.finditer(body or ""):
        name = match.group(1).strip()
        if name and name not in seen:
            seen.add(name)
            placeholders.append(name)
    return placeholders


def validate_required_placeholders(
    placeholders: list[str],
    required: tuple[str, ...] = REQUIRED_PLACEHOLDERS,
) -> PlaceholderValidation:
    missing = [name for name in required if name not in placeholders]
    return PlaceholderValidation(is_valid=not missing, missing=missing)
