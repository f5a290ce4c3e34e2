"""
Workflow Orchestrator

Runs one transcript through guardrail -> classify -> resolve template ->
extract fields -> fill, and reports a structured success or failure.
"""

import time
from datetime import date
from functools import lru_cache
from typing import Any, Callable

import structlog

from contract_processor.config import Settings, get_settings
from contract_processor.exceptions import AgentInactiveError, GuardrailTripwireError
from contract_processor.models.agent import AgentConfig
from contract_processor.models.document import (
    DocumentType,
    ExtractedFields,
    ExtractionMethod,
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
from contract_processor.pipeline.classifier import DocumentClassifier
from contract_processor.pipeline.extraction import FieldExtractionAgent
from contract_processor.services.llm_service import LLMService, get_llm_service
from contract_processor.templates.filler import fill_template
from contract_processor.templates.placeholders import extract_placeholders
from contract_processor.templates.resolver import TemplateResolver, get_template_resolver

logger = structlog.get_logger(__name__)


class WorkflowOrchestrator:
    """
    Orchestrates the document generation workflow.

    States advance START -> CLASSIFIED -> TEMPLATE_RESOLVED ->
    FIELDS_EXTRACTED -> FILLED -> DONE. Any unexpected error moves the run
    to FAILED and is returned as a `WorkflowFailure`; fallbacks taken along
    the way are listed in `WorkflowSuccess.degradations`.
    """

    def __init__(
        self,
        llm: LLMService | None = None,
        resolver: TemplateResolver | None = None,
        classifier: DocumentClassifier | None = None,
        extractor: FieldExtractionAgent | None = None,
        settings: Settings | None = None,
        agent_config: AgentConfig | None = None,
    ):
        self.settings = settings or get_settings()
        self.agent_config = agent_config

        self._llm = llm
        self._resolver = resolver
        self._classifier = classifier
        self._extractor = extractor

        self._progress_callback: Callable[[WorkflowState], None] | None = None

    @property
    def llm(self) -> LLMService:
        if self._llm is None:
            self._llm = get_llm_service()
        return self._llm

    @property
    def resolver(self) -> TemplateResolver:
        if self._resolver is None:
            self._resolver = get_template_resolver()
        return self._resolver

    @property
    def classifier(self) -> DocumentClassifier:
        if self._classifier is None:
            self._classifier = DocumentClassifier(llm=self.llm)
        return self._classifier

    @property
    def extractor(self) -> FieldExtractionAgent:
        if self._extractor is None:
            self._extractor = FieldExtractionAgent(llm=self.llm)
        return self._extractor

    def set_progress_callback(
        self,
        callback: Callable[[WorkflowState], None],
    ) -> None:
        """Set callback invoked on every state transition."""
        self._progress_callback = callback

    def _report_progress(self, state: WorkflowState) -> None:
        if self._progress_callback:
            self._progress_callback(state)

    # =========================================================================
    # Agent settings
    # =========================================================================

    def _runs_step(self, step: str) -> bool:
        if self.agent_config is None:
            return True
        return self.agent_config.runs_step(step)

    def _model_options(self) -> dict[str, Any]:
        """Per-call model overrides taken from the agent configuration."""
        if self.agent_config is None:
            return {}
        model_settings = self.agent_config.model_settings
        return {
            "model": model_settings.model,
            "temperature": model_settings.temperature,
            "max_tokens": model_settings.max_tokens,
            "timeout": self.agent_config.workflow.timeout_seconds,
        }

    # =========================================================================
    # Main Workflow
    # =========================================================================

    def run(self, workflow_input: WorkflowInput, today: date | None = None) -> WorkflowOutput:
        """Run the full workflow for one transcript."""
        started = time.perf_counter()
        state = WorkflowState.START

        logger.info(
            "workflow_started",
            client_id=workflow_input.client_id,
            agent=self.agent_config.name if self.agent_config else None,
            input_length=len(workflow_input.input_text),
        )

        try:
            self._report_progress(state)

            if self.agent_config is not None and not self.agent_config.is_active:
                raise AgentInactiveError("Agent is not active")

            degradations: list[str] = []
            text = workflow_input.input_text

            # Guardrail
            self._check_input(text, degradations)

            # Classify
            classified = self._classify(workflow_input)
            document_type = self._unwrap(classified, "classification", degradations)
            state = WorkflowState.CLASSIFIED
            self._report_progress(state)

            # Resolve template
            resolved: Outcome[TemplateRecord] = self.resolver.resolve(
                workflow_input.client_id, document_type
            )
            template = self._unwrap(resolved, "template", degradations)
            placeholders = extract_placeholders(template.body)
            state = WorkflowState.TEMPLATE_RESOLVED
            self._report_progress(state)

            # Extract fields
            if self._runs_step("extract"):
                extracted, method = self.extractor.extract(
                    text,
                    document_type,
                    system_prompt=self._prompt("extractor"),
                    **self._model_options(),
                )
                fields: ExtractedFields = self._unwrap(extracted, "extraction", degradations)
            else:
                fields, method = {}, ExtractionMethod.SKIPPED
            state = WorkflowState.FIELDS_EXTRACTED
            self._report_progress(state)

            # Fill
            fill_result = fill_template(template.body, fields, placeholders, today=today)
            state = WorkflowState.FILLED
            self._report_progress(state)

            result = WorkflowSuccess(
                document_type=document_type,
                template_origin=template.origin,
                extracted_fields=fields,
                placeholders=placeholders,
                fill_result=fill_result,
                completeness_ratio=fill_result.completeness_ratio,
                client_id=workflow_input.client_id,
                agent_name=self.agent_config.name if self.agent_config else None,
                extraction_method=method,
                degradations=degradations,
                template_size=template.size,
                processing_time_ms=self._elapsed_ms(started),
            )

            state = WorkflowState.DONE
            self._report_progress(state)

            logger.info(
                "workflow_completed",
                document_type=document_type.value,
                template_origin=template.origin.value,
                filled=fill_result.filled_count,
                total=fill_result.total_placeholders,
                degradations=len(degradations),
                processing_time_ms=result.processing_time_ms,
            )
            return result

        except Exception as e:
            logger.error(
                "workflow_failed",
                failed_state=state.value,
                error=str(e),
                error_type=type(e).__name__,
            )
            try:
                self._report_progress(WorkflowState.FAILED)
            except Exception as callback_error:
                logger.warning("progress_callback_failed", error=str(callback_error))
            return WorkflowFailure(
                error_message=str(e),
                failed_state=state,
                processing_time_ms=self._elapsed_ms(started),
            )

    # =========================================================================
    # Steps
    # =========================================================================

    def _check_input(self, text: str, degradations: list[str]) -> None:
        """Moderate the transcript when the agent enables guardrails."""
        if self.agent_config is None or not self.agent_config.workflow.enable_guardrails:
            return
        if not text.strip():
            return
        if not self.llm.is_configured("openai"):
            degradations.append("guardrails: moderation provider not configured")
            return

        flagged = self.llm.moderate(text, timeout=self.agent_config.workflow.timeout_seconds)
        if flagged:
            logger.warning("guardrail_tripwire", categories=flagged)
            raise GuardrailTripwireError(flagged)

    def _classify(self, workflow_input: WorkflowInput) -> Outcome[DocumentType]:
        if workflow_input.document_type is not None:
            logger.debug(
                "classification_overridden",
                document_type=workflow_input.document_type.value,
            )
            return Ok(workflow_input.document_type)

        if not self._runs_step("classify"):
            return Degraded(
                DocumentType.CONTRATO_BASE,
                reason="classification step disabled",
            )

        return self.classifier.classify(
            workflow_input.input_text,
            system_prompt=self._prompt("classifier"),
            **self._model_options(),
        )

    def _prompt(self, step: str) -> str | None:
        if self.agent_config is None:
            return None
        return getattr(self.agent_config.prompts, step)

    @staticmethod
    def _unwrap(outcome: Outcome, step: str, degradations: list[str]):
        if isinstance(outcome, Degraded):
            degradations.append(f"{step}: {outcome.reason}")
        return outcome.value

    @staticmethod
    def _elapsed_ms(started: float) -> int:
        return int((time.perf_counter() - started) * 1000)


@lru_cache()
def get_workflow_orchestrator() -> WorkflowOrchestrator:
    """Get cached workflow orchestrator instance."""
    return WorkflowOrchestrator()
