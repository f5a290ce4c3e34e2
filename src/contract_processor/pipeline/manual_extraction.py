"""
Regex field extraction.

Used when the model reply cannot be parsed. Rules target the way event
planners dictate meeting notes in Spanish ("cliente Ana Pérez, RFC ...").
"""

import re

import structlog

from contract_processor.models.document import ExtractedFields

logger = structlog.get_logger(__name__)

_MONTHS = (
    "enero|febrero|marzo|abril|mayo|junio|julio|agosto"
    "|septiembre|setiembre|octubre|noviembre|diciembre"
)

# Ordered alternatives per field; the first pattern that matches wins
FIELD_PATTERNS: dict[str, list[re.Pattern[str]]] = {
    "NOMBRE_CLIENTE": [
        re.compile(r"nombre completo(?:\s+es)?[.:\s]*([^.?\n,]+)", re.IGNORECASE),
        re.compile(r"\bcliente\s*:?\s+(?:es\s+)?([^,.;\n]+)", re.IGNORECASE),
    ],
    "RFC": [
        re.compile(r"\bRFC(?:\s+es)?[?:\s]*([A-Z0-9.]+)", re.IGNORECASE),
    ],
    "NOMBRE_EVENTO": [
        re.compile(r"\bevento\s*:?\s*[\"'“‘]([^\"'”’\n]+)[\"'”’]", re.IGNORECASE),
        re.compile(r"se llama\s+([^.\n]+)", re.IGNORECASE),
        re.compile(r"nombre del evento\s*(?:es|:)?\s*([^,.\n]+)", re.IGNORECASE),
    ],
    "FECHA_EVENTO": [
        re.compile(
            rf"((?:\d{{1,2}}\s+de\s+)?(?:{_MONTHS})\s+(?:de|del)\s+\d{{4}})",
            re.IGNORECASE,
        ),
        re.compile(r"\b(\d{1,2}[/-]\d{1,2}[/-]\d{2,4})\b"),
    ],
    "UBICACION": [
        re.compile(
            r"\bubicaci[oó]n(?:\s+del\s+evento)?(?:\s+es)?\s*:?\s+([^,.;\n]+)",
            re.IGNORECASE,
        ),
    ],
    "PAQUETE": [
        re.compile(r"\bpaquete\s+([A-Z])\b", re.IGNORECASE),
    ],
}


def _clean(field_name: str, raw: str) -> str:
    value = raw.strip()
    if field_name == "RFC":
        return value.rstrip(".").upper()
    if field_name == "PAQUETE":
        return f"Paquete {value.upper()}"
    return value


def extract_fields_manually(text: str) -> ExtractedFields:
    """Apply the regex rules to `text`; only matched fields are returned."""
    fields: ExtractedFields = {}
    if not text:
        return fields

    for field_name, patterns in FIELD_PATTERNS.items():
        for pattern in patterns:
            match = pattern.search(text)
            if not match:
                continue
            value = _clean(field_name, match.group(1))
            if value:
                fields[field_name] = value
                break

    logger.debug("manual_extraction_completed", fields=sorted(fields))
    return fields
