"""
Agent configuration models.

An agent is a client-owned bundle of prompts, model settings and workflow
steps. Stored configurations often arrive as JSON text; they are parsed and
validated once here so a workflow run never re-parses them.
"""

import json
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

WorkflowStep = Literal["classify", "extract", "generate"]

DEFAULT_STEPS: list[WorkflowStep] = ["classify", "extract", "generate"]


class AgentStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    DRAFT = "draft"


class AgentPrompts(BaseModel):
    """System-prompt overrides. None keeps the built-in prompt for that step."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    classifier: str | None = None
    extractor: str | None = None

    @field_validator("classifier", "extractor")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            return None
        return v


class ModelSettings(BaseModel):
    """Model parameters applied to every completion the agent issues."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    model: str = "gpt-4.1"
    temperature: float = Field(default=0.2, ge=0.0, le=2.0)
    max_tokens: int = Field(default=2048, gt=0, alias="maxTokens")


class WorkflowSettings(BaseModel):
    """Which pipeline steps run and how long a model call may take."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    steps: list[WorkflowStep] = Field(default_factory=lambda: list(DEFAULT_STEPS))
    timeout_ms: int = Field(default=60000, gt=0, alias="timeout")
    enable_guardrails: bool = Field(default=True, alias="enableGuardrails")

    @field_validator("steps")
    @classmethod
    def require_generate(cls, v: list[WorkflowStep]) -> list[WorkflowStep]:
        if "generate" not in v:
            raise ValueError("workflow steps must include 'generate'")
        # Preserve order, drop repeats
        return list(dict.fromkeys(v))

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000


class AgentConfig(BaseModel):
    """A validated agent configuration."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, protected_namespaces=())

    name: str = Field(..., min_length=1)
    client_id: str = Field(..., min_length=1, alias="clientId")
    description: str | None = None
    status: AgentStatus = AgentStatus.ACTIVE
    prompts: AgentPrompts = Field(default_factory=AgentPrompts)
    model_settings: ModelSettings = Field(default_factory=ModelSettings, alias="modelSettings")
    workflow: WorkflowSettings = Field(default_factory=WorkflowSettings)

    @field_validator("prompts", "model_settings", "workflow", mode="before")
    @classmethod
    def parse_json_text(cls, v: Any) -> Any:
        """Accept JSON-encoded sections; None means defaults."""
        if v is None:
            return {}
        if isinstance(v, str):
            try:
                return json.loads(v) if v.strip() else {}
            except json.JSONDecodeError as e:
                raise ValueError(f"invalid JSON configuration: {e.msg}") from e
        return v

    @property
    def is_active(self) -> bool:
        return self.status == AgentStatus.ACTIVE

    def runs_step(self, step: WorkflowStep) -> bool:
        return step in self.workflow.steps
