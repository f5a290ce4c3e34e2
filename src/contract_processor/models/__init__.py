"""
Pydantic models for contract-processor.

- Document models: document types, templates, fill results
- Workflow models: inputs, tagged outputs, step outcomes
- Agent models: validated agent configuration
"""

from contract_processor.models.agent import (
    AgentConfig,
    AgentPrompts,
    AgentStatus,
    ModelSettings,
    WorkflowSettings,
)
from contract_processor.models.document import (
    DocumentType,
    ExtractedFields,
    ExtractionMethod,
    FillResult,
    TemplateOrigin,
    TemplateRecord,
)
from contract_processor.models.workflow import (
    Degraded,
    Ok,
    Outcome,
    WorkflowFailure,
    WorkflowInput,
    WorkflowOutput,
    WorkflowState,
    WorkflowSuccess,
)

__all__ = [
    # Agent models
    "AgentConfig",
    "AgentPrompts",
    "AgentStatus",
    "ModelSettings",
    "WorkflowSettings",
    # Document models
    "DocumentType",
    "ExtractedFields",
    "ExtractionMethod",
    "FillResult",
    "TemplateOrigin",
    "TemplateRecord",
    # Workflow models
    "Degraded",
    "Ok",
    "Outcome",
    "WorkflowFailure",
    "WorkflowInput",
    "WorkflowOutput",
    "WorkflowState",
    "WorkflowSuccess",
]
