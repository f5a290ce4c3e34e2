"""
Template handling: built-in catalog, placeholder discovery, resolution and filling.
"""

from contract_processor.templates.catalog import DEFAULT_TEMPLATES, get_default_template
from contract_processor.templates.filler import fill_template, format_signature_date
from contract_processor.templates.placeholders import (
    REQUIRED_PLACEHOLDERS,
    SIGNATURE_DATE_PLACEHOLDER,
    PlaceholderValidation,
    extract_placeholders,
    validate_required_placeholders,
)
from contract_processor.templates.resolver import (
    HttpTemplateStore,
    TemplateResolver,
    TemplateStore,
    get_template_resolver,
)

__all__ = [
    "DEFAULT_TEMPLATES",
    "get_default_template",
    "fill_template",
    "format_signature_date",
    "REQUIRED_PLACEHOLDERS",
    "SIGNATURE_DATE_PLACEHOLDER",
    "PlaceholderValidation",
    "extract_placeholders",
    "validate_required_placeholders",
    "HttpTemplateStore",
    "TemplateResolver",
    "TemplateStore",
    "get_template_resolver",
]
