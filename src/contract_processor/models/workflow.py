"""
Workflow input/output models and the Ok/Degraded outcome type.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Generic, Literal, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field

from contract_processor.models.document import (
    DocumentType,
    ExtractedFields,
    ExtractionMethod,
    FillResult,
    TemplateOrigin,
)

T = TypeVar("T")


# =============================================================================
# Outcome
# =============================================================================


@dataclass(frozen=True)
class Ok(Generic[T]):
    """A step produced its value without falling back."""

    value: T

    @property
    def degraded(self) -> bool:
        return False

    @property
    def reason(self) -> None:
        return None


@dataclass(frozen=True)
class Degraded(Generic[T]):
    """A step fell back to a default; `reason` says why."""

    value: T
    reason: str

    @property
    def degraded(self) -> bool:
        return True


Outcome = Union[Ok[T], Degraded[T]]


# =============================================================================
# Workflow models
# =============================================================================


class WorkflowState(str, Enum):
    """Orchestrator states, in execution order."""

    START = "start"
    CLASSIFIED = "classified"
    TEMPLATE_RESOLVED = "template_resolved"
    FIELDS_EXTRACTED = "fields_extracted"
    FILLED = "filled"
    DONE = "done"
    FAILED = "failed"


class WorkflowInput(BaseModel):
    """A single request to generate a document from free text."""

    model_config = ConfigDict(frozen=True)

    input_text: str = Field(default="", description="Raw transcript text")
    client_id: str | None = Field(default=None, description="Tenant owning custom templates")
    document_type: DocumentType | None = Field(
        default=None,
        description="Caller-declared document type; skips classification when set",
    )


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class WorkflowSuccess(BaseModel):
    """Completed run: the filled document plus completeness statistics."""

    success: Literal[True] = True
    document_type: DocumentType
    template_origin: TemplateOrigin
    extracted_fields: ExtractedFields = Field(default_factory=dict)
    placeholders: list[str] = Field(default_factory=list)
    fill_result: FillResult
    completeness_ratio: float = Field(..., ge=0.0, le=1.0)
    timestamp: datetime = Field(default_factory=_utcnow)

    # Observability
    client_id: str | None = None
    agent_name: str | None = None
    extraction_method: ExtractionMethod = ExtractionMethod.MODEL
    degradations: list[str] = Field(default_factory=list)
    template_size: int = 0
    processing_time_ms: int = 0

    @property
    def document(self) -> str:
        return self.fill_result.document

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class WorkflowFailure(BaseModel):
    """Run aborted by an unexpected error."""

    success: Literal[False] = False
    error_message: str
    failed_state: WorkflowState = WorkflowState.START
    timestamp: datetime = Field(default_factory=_utcnow)
    processing_time_ms: int = 0

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


WorkflowOutput = Union[WorkflowSuccess, WorkflowFailure]
