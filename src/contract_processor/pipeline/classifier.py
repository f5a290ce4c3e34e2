"""
Document classification.

Decides which of the five document types a transcript describes. The model
reply is normalised leniently; anything unrecognisable resolves to the base
contract and is reported as degraded.
"""

import json
import re
from functools import lru_cache

import structlog

from contract_processor.config import get_settings
from contract_processor.models.document import DocumentType
from contract_processor.models.workflow import Degraded, Ok, Outcome
from contract_processor.services.llm_service import LLMService, get_llm_service

logger = structlog.get_logger(__name__)

CLASSIFIER_PROMPT = """Eres un analista legal especializado en clasificación de documentos contractuales.

Analiza el texto y clasifica el tipo de contrato. Responde solo con uno de: 'contrato_base', 'anexo_a', 'anexo_b', 'anexo_c', 'anexo_d'.

Guíate por el contenido:
- Si habla de "servicios, cliente, firma" → contrato_base
- Si habla de "decoración, fotos, medidas" → anexo_a
- Si habla de "reunión, temas tratados" → anexo_b
- Si habla de "cambios, rondas, aprobación" → anexo_c
- Si habla de "entrega final, autorización de pago" → anexo_d

No devuelvas ningún otro texto."""

FALLBACK_TYPE = DocumentType.CONTRATO_BASE

_LABEL_PATTERN = re.compile(r"\b(contrato_base|anexo_[a-d])\b")
_STRIP_CHARS = " \t\r\n\"'`.,;:!?¡¿*"


def normalize_label(reply: str) -> DocumentType | None:
    """
    Map a raw classifier reply to a document type.

    Accepts a bare label (quotes, backticks and punctuation ignored), a JSON
    object with a `tipo_contrato` key, or prose mentioning exactly one label.
    """
    text = (reply or "").strip()
    if not text:
        return None

    if text.startswith("{"):
        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            data = None
        if isinstance(data, dict) and data.get("tipo_contrato") is not None:
            return DocumentType.parse(str(data["tipo_contrato"]))

    cleaned = re.sub(r"\s+", "_", text.strip(_STRIP_CHARS).lower())
    parsed = DocumentType.parse(cleaned)
    if parsed is not None:
        return parsed

    mentioned = set(_LABEL_PATTERN.findall(text.lower()))
    if len(mentioned) == 1:
        return DocumentType.parse(mentioned.pop())
    return None


class DocumentClassifier:
    """Classifies transcripts with a single completion request."""

    def __init__(self, llm: LLMService | None = None):
        self.settings = get_settings()
        self._llm = llm

    @property
    def llm(self) -> LLMService:
        if self._llm is None:
            self._llm = get_llm_service()
        return self._llm

    def classify(
        self,
        text: str,
        system_prompt: str | None = None,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        timeout: float | None = None,
    ) -> Outcome[DocumentType]:
        if not text or not text.strip():
            return Degraded(FALLBACK_TYPE, reason="empty input")

        reply, model_used = self.llm.generate(
            system_prompt or CLASSIFIER_PROMPT,
            text,
            max_tokens=max_tokens or self.settings.classification_max_tokens,
            model=model,
            temperature=temperature,
            timeout=timeout,
        )

        document_type = normalize_label(reply)
        if document_type is None:
            logger.warning(
                "classification_unrecognized",
                reply=reply[:100],
                model=model_used,
            )
            return Degraded(
                FALLBACK_TYPE,
                reason=f"unrecognized classifier reply: {reply.strip()[:50]!r}",
            )

        logger.info(
            "document_classified",
            document_type=document_type.value,
            model=model_used,
        )
        return Ok(document_type)


@lru_cache()
def get_document_classifier() -> DocumentClassifier:
    """Get cached document classifier instance."""
    return DocumentClassifier()
