"""
Exception hierarchy for contract-processor.

Model errors, inactive agents, guardrail tripwires and unexpected exceptions
end a workflow run; template store errors are always absorbed by the
resolver's fallback.
"""


class ContractProcessorError(Exception):
    """Base class for all contract-processor errors."""


class LLMError(ContractProcessorError):
    """A language-model completion could not be obtained."""


class LLMUnavailableError(LLMError):
    """No language-model provider is configured."""


class LLMTimeoutError(LLMError):
    """A language-model call exceeded its timeout."""


class TemplateStoreError(ContractProcessorError):
    """The external template store could not serve a template."""


class TemplateNotFoundError(TemplateStoreError):
    """The store answered but holds no usable template for the client/type pair."""

    def __init__(self, client_id: str, document_type: str):
        self.client_id = client_id
        self.document_type = document_type
        super().__init__(f"No template {document_type} for client {client_id}")


class AgentInactiveError(ContractProcessorError):
    """The agent configuration is not active and cannot process input."""


class GuardrailTripwireError(ContractProcessorError):
    """The input guardrail flagged the transcript."""

    def __init__(self, categories: list[str]):
        self.categories = categories
        super().__init__(f"Input flagged by guardrail: {', '.join(categories)}")
