"""Shared pytest fixtures and mocks for the contract-processor test suite."""

import json

import pytest
import structlog
from unittest.mock import MagicMock

from contract_processor.models import AgentConfig


# ---------------------------------------------------------------------------
# Singleton cache clearing (autouse)
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def clear_singletons(monkeypatch):
    """Clear all @lru_cache singletons and provider keys between tests."""
    from contract_processor.config import get_settings
    from contract_processor.pipeline.classifier import get_document_classifier
    from contract_processor.pipeline.extraction import get_field_extraction_agent
    from contract_processor.pipeline.orchestrator import get_workflow_orchestrator
    from contract_processor.services.llm_service import get_llm_service
    from contract_processor.templates.resolver import get_template_resolver

    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)

    get_settings.cache_clear()
    get_llm_service.cache_clear()
    get_template_resolver.cache_clear()
    get_document_classifier.cache_clear()
    get_field_extraction_agent.cache_clear()
    get_workflow_orchestrator.cache_clear()
    yield
    get_settings.cache_clear()
    # The CLI reconfigures structlog per invocation
    structlog.reset_defaults()


@pytest.fixture
def no_retry_wait(monkeypatch):
    """Skip tenacity backoff sleeps."""
    monkeypatch.setattr("tenacity.nap.time.sleep", lambda _: None)


# ---------------------------------------------------------------------------
# Sample data fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def sample_transcript():
    """Meeting notes dictated in a single line."""
    return (
        "Reunión completada, cliente Ana Pérez, RFC ABC123456XYZ, evento 'Boda Ana', "
        "fecha marzo del 2025, ubicación Jardín Los Pinos, paquete B"
    )


@pytest.fixture
def sample_fields():
    """Fields a well-behaved model returns for `sample_transcript`."""
    return {
        "NOMBRE_CLIENTE": "Ana Pérez",
        "RFC": "ABC123456XYZ",
        "NOMBRE_EVENTO": "Boda Ana",
        "FECHA_EVENTO": "marzo del 2025",
        "UBICACION": "Jardín Los Pinos",
        "PAQUETE": "Paquete B",
    }


@pytest.fixture
def client_template():
    """A small client-owned template."""
    return (
        "CONTRATO PERSONALIZADO\n"
        "Cliente: {{NOMBRE_CLIENTE}}\n"
        "Evento: {{NOMBRE_EVENTO}} el {{FECHA_EVENTO}}\n"
        "Firmado el {{FECHA_FIRMA}}\n"
    )


@pytest.fixture
def agent_config():
    """Active agent with JSON-encoded sections, as stored by the admin API."""
    return AgentConfig(
        name="Agente Eventos",
        clientId="client-001",
        status="active",
        prompts=json.dumps({"classifier": None, "extractor": None}),
        modelSettings=json.dumps({"model": "gpt-4.1", "temperature": 0.2, "maxTokens": 2048}),
        workflow=json.dumps({"steps": ["classify", "extract", "generate"], "timeout": 60000}),
    )


# ---------------------------------------------------------------------------
# Collaborator mocks
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_llm():
    """LLMService stand-in; set `generate.return_value` or `side_effect` per test."""
    llm = MagicMock()
    llm.generate.return_value = ("", "gpt-test")
    llm.moderate.return_value = []
    return llm


class FakeTemplateStore:
    """In-memory template store that can be told to fail."""

    def __init__(self, templates=None, error=None):
        self.templates = templates or {}
        self.error = error
        self.calls = []

    def fetch(self, client_id, document_type):
        self.calls.append((client_id, document_type))
        if self.error is not None:
            raise self.error
        return self.templates[(client_id, document_type.value)]


@pytest.fixture
def fake_store():
    return FakeTemplateStore()
