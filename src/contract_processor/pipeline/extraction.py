"""
Field extraction.

Asks the model for the contract fields as JSON and falls back to the regex
rules in `manual_extraction` whenever the reply is not a usable JSON object.
"""

import json
import re
from functools import lru_cache
from typing import Any

import structlog

from contract_processor.config import get_settings
from contract_processor.models.document import DocumentType, ExtractedFields, ExtractionMethod
from contract_processor.models.workflow import Degraded, Ok, Outcome
from contract_processor.pipeline.manual_extraction import extract_fields_manually
from contract_processor.services.llm_service import LLMService, get_llm_service

logger = structlog.get_logger(__name__)

EXTRACTION_PROMPT = """Extrae información de la transcripción para un contrato.
RESPONDE SOLO en formato JSON válido con estos campos si están disponibles:
{
  "NOMBRE_CLIENTE": "nombre extraído o null",
  "RFC": "rfc extraído o null",
  "NOMBRE_EVENTO": "nombre del evento o null",
  "FECHA_EVENTO": "fecha del evento o null",
  "UBICACION": "ubicación o null",
  "PAQUETE": "tipo de paquete o null"
}
No inventes información. Usa null para los campos que no aparezcan."""

_FENCE_PATTERN = re.compile(r"```(?:json)?\s*\n?|\n?```", re.IGNORECASE)


def strip_code_fences(text: str) -> str:
    """Remove markdown code fences around a JSON reply."""
    return _FENCE_PATTERN.sub("", text or "").strip()


def normalize_fields(data: dict[str, Any]) -> ExtractedFields:
    """Stringify values and drop nulls and blanks."""
    fields: ExtractedFields = {}
    for key, value in data.items():
        if value is None:
            continue
        text = str(value).strip()
        if text:
            fields[str(key).strip()] = text
    return fields


def parse_fields(reply: str) -> ExtractedFields | None:
    """
    Parse a model reply into fields.

    Returns None when the reply is empty, not JSON, or not a JSON object.
    A nested `{"campos": {...}}` object is unwrapped.
    """
    text = strip_code_fences(reply)
    if not text:
        return None
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        return None
    if not isinstance(data, dict):
        return None
    if isinstance(data.get("campos"), dict):
        data = data["campos"]
    return normalize_fields(data)


class FieldExtractionAgent:
    """Extracts contract fields from a transcript."""

    def __init__(self, llm: LLMService | None = None):
        self.settings = get_settings()
        self._llm = llm

    @property
    def llm(self) -> LLMService:
        if self._llm is None:
            self._llm = get_llm_service()
        return self._llm

    def extract(
        self,
        text: str,
        document_type: DocumentType,
        system_prompt: str | None = None,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        timeout: float | None = None,
    ) -> tuple[Outcome[ExtractedFields], ExtractionMethod]:
        """
        Extract fields for `document_type` from `text`.

        Returns (outcome, method). Blank input skips the model and yields
        no fields.
        """
        if not text or not text.strip():
            return Degraded({}, reason="empty input"), ExtractionMethod.SKIPPED

        user_prompt = f"tipo_contrato: {document_type.value}\n\n{text}"
        reply, model_used = self.llm.generate(
            system_prompt or EXTRACTION_PROMPT,
            user_prompt,
            max_tokens=max_tokens or self.settings.extraction_max_tokens,
            model=model,
            temperature=temperature,
            timeout=timeout,
        )

        fields = parse_fields(reply)
        if fields is None:
            logger.warning(
                "extraction_parse_failed",
                reply=(reply or "")[:100],
                model=model_used,
            )
            manual = extract_fields_manually(text)
            return (
                Degraded(manual, reason="model reply was not a JSON object; used manual extraction"),
                ExtractionMethod.MANUAL,
            )

        logger.info(
            "fields_extracted",
            fields=len(fields),
            model=model_used,
        )
        return Ok(fields), ExtractionMethod.MODEL


@lru_cache()
def get_field_extraction_agent() -> FieldExtractionAgent:
    """Get cached field extraction agent instance."""
    return FieldExtractionAgent()
