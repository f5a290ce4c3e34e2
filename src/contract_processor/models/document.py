"""
Document and template models.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


# Field name -> extracted string value. Absent keys mean "not found".
ExtractedFields = dict[str, str]


class DocumentType(str, Enum):
    """The five document kinds a transcript can be classified into."""

    CONTRATO_BASE = "contrato_base"
    ANEXO_A = "anexo_a"
    ANEXO_B = "anexo_b"
    ANEXO_C = "anexo_c"
    ANEXO_D = "anexo_d"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]

    @classmethod
    def parse(cls, value: str | None) -> "DocumentType | None":
        """Return the matching member, or None for anything outside the enumeration."""
        if not value:
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


class TemplateOrigin(str, Enum):
    """Which fallback tier produced the template used for a run."""

    CLIENT_CUSTOM = "client_custom"
    DEFAULT_FALLBACK = "default_fallback"
    DEFAULT = "default"


class ExtractionMethod(str, Enum):
    """How the extracted fields were obtained."""

    MODEL = "model"
    MANUAL = "manual"
    SKIPPED = "skipped"


class TemplateRecord(BaseModel):
    """A resolved template body and the tier it came from."""

    model_config = ConfigDict(frozen=True)

    body: str
    origin: TemplateOrigin

    @property
    def size(self) -> int:
        return len(self.body)


class FillResult(BaseModel):
    """Outcome of substituting extracted fields into a template."""

    model_config = ConfigDict(frozen=True)

    document: str
    filled_count: int = Field(..., ge=0)
    missing_field_names: list[str] = Field(default_factory=list)
    total_placeholders: int = Field(..., ge=0)

    @model_validator(mode="after")
    def check_counts(self) -> "FillResult":
        if self.filled_count + len(self.missing_field_names) != self.total_placeholders:
            raise ValueError(
                "filled_count + len(missing_field_names) must equal total_placeholders"
            )
        return self

    @property
    def completeness_ratio(self) -> float:
        """Fraction of placeholders filled; 0 for templates without placeholders."""
        if self.total_placeholders == 0:
            return 0.0
        return self.filled_count / self.total_placeholders
