"""Substitute extracted field values into a template body."""

import re
from datetime import date
from typing import Mapping

import structlog

from contract_processor.models.document import FillResult
from contract_processor.templates.placeholders import (
    PLACEHOLDER_PATTERN,
    SIGNATURE_DATE_PLACEHOLDER,
)

logger = structlog.get_logger(__name__)


def format_signature_date(day: date) -> str:
    """Short es-MX date, e.g. 5/3/2025."""
    return f"{day.day}/{day.month}/{day.year}"


def _usable(value: object) -> bool:
    if value is None:
        return False
    return bool(str(value).strip())


def fill_template(
    body: str,
    fields: Mapping[str, object],
    placeholders: list[str],
    today: date | None = None,
) -> FillResult:
    """
    Replace every placeholder that has a usable field value.

    All markers are substituted in a single pass over the original body, so
    text inserted from a value is never rescanned. Placeholders without a
    value keep their marker and are reported in `missing_field_names`. The
    signature date marker is always replaced with today's date.
    """
    values = {
        name: str(fields[name])
        for name in placeholders
        if _usable(fields.get(name))
    }
    missing = [name for name in placeholders if name not in values]
    signature_date = format_signature_date(today or date.today())

    def substitute(match: re.Match[str]) -> str:
        name = match.group(1).strip()
        if name in values:
            return values[name]
        if name == SIGNATURE_DATE_PLACEHOLDER:
            return signature_date
        return match.group(0)

    document = PLACEHOLDER_PATTERN.sub(substitute, body)

    logger.debug(
        "template_filled",
        filled=len(values),
        missing=len(missing),
        total=len(placeholders),
    )

    return FillResult(
        document=document,
        filled_count=len(values),
        missing_field_names=missing,
        total_placeholders=len(placeholders),
    )
