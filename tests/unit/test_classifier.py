"""Tests for contract_processor/pipeline/classifier.py: label normalisation and fallback."""

import pytest
from unittest.mock import MagicMock

from contract_processor.exceptions import LLMTimeoutError
from contract_processor.models import Degraded, DocumentType, Ok
from contract_processor.pipeline.classifier import (
    CLASSIFIER_PROMPT,
    DocumentClassifier,
    normalize_label,
)
from contract_processor.services.llm_service import LLMService


@pytest.fixture
def classifier(mock_llm):
    return DocumentClassifier(llm=mock_llm)


class TestNormalizeLabel:

    @pytest.mark.parametrize("reply,expected", [
        ("anexo_b", DocumentType.ANEXO_B),
        ("  contrato_base\n", DocumentType.CONTRATO_BASE),
        ("'anexo_c'", DocumentType.ANEXO_C),
        ('"ANEXO_D".', DocumentType.ANEXO_D),
        ("`anexo_a`", DocumentType.ANEXO_A),
        ("Anexo A", DocumentType.ANEXO_A),
        ('{"tipo_contrato": "anexo_b", "confianza": 0.9, "razon": "reunión"}', DocumentType.ANEXO_B),
        ("El documento corresponde al anexo_d.", DocumentType.ANEXO_D),
    ])
    def test_recognized(self, reply, expected):
        assert normalize_label(reply) == expected

    @pytest.mark.parametrize("reply", [
        "",
        "   ",
        "anexo_e",
        "no estoy seguro",
        "anexo_a o anexo_b",
        '{"tipo_contrato": "otro"}',
    ])
    def test_unrecognized(self, reply):
        assert normalize_label(reply) is None


class TestClassify:

    def test_returns_ok_for_valid_label(self, classifier, mock_llm):
        mock_llm.generate.return_value = ("anexo_c", "gpt-4o")
        outcome = classifier.classify("Hubo tres rondas de cambios antes de la aprobación")
        assert isinstance(outcome, Ok)
        assert outcome.value == DocumentType.ANEXO_C

    def test_sends_fixed_prompt_with_small_budget(self, classifier, mock_llm):
        mock_llm.generate.return_value = ("contrato_base", "gpt-4o")
        classifier.classify("texto")
        args, kwargs = mock_llm.generate.call_args
        assert args == (CLASSIFIER_PROMPT, "texto")
        assert kwargs["max_tokens"] == 50

    def test_custom_prompt_and_model(self, classifier, mock_llm):
        mock_llm.generate.return_value = ("anexo_a", "gpt-4.1")
        classifier.classify("texto", system_prompt="Clasifica.", model="gpt-4.1", temperature=0.2)
        args, kwargs = mock_llm.generate.call_args
        assert args[0] == "Clasifica."
        assert kwargs["model"] == "gpt-4.1"
        assert kwargs["temperature"] == 0.2

    @pytest.mark.parametrize("reply", ["", "no sé", "anexo_z"])
    def test_unrecognized_reply_degrades_to_base(self, classifier, mock_llm, reply):
        mock_llm.generate.return_value = (reply, "gpt-4o")
        outcome = classifier.classify("texto")
        assert isinstance(outcome, Degraded)
        assert outcome.value == DocumentType.CONTRATO_BASE

    def test_blank_input_skips_model(self, classifier, mock_llm):
        outcome = classifier.classify("   ")
        assert outcome == Degraded(DocumentType.CONTRATO_BASE, reason="empty input")
        mock_llm.generate.assert_not_called()

    def test_transport_errors_propagate(self, classifier, mock_llm):
        mock_llm.generate.side_effect = LLMTimeoutError("timed out")
        with pytest.raises(LLMTimeoutError):
            classifier.classify("texto")

    def test_empty_choice_list_defaults_to_base(self, monkeypatch):
        settings = MagicMock()
        settings.llm_max_tokens = 1024
        settings.llm_temperature = 0.1
        settings.llm_timeout = 30.0
        settings.classification_max_tokens = 50
        monkeypatch.setattr("contract_processor.pipeline.classifier.get_settings", lambda: settings)

        llm = LLMService.__new__(LLMService)
        llm.settings = settings
        llm.primary_provider = "openai"
        llm.primary_model = "gpt-test"
        llm.fallback_provider = "anthropic"
        llm.fallback_model = "claude-test"
        llm._anthropic = None
        llm._openai = MagicMock()
        llm._openai.chat.completions.create.return_value = MagicMock(choices=[])

        outcome = DocumentClassifier(llm=llm).classify("texto")
        assert outcome.value == DocumentType.CONTRATO_BASE
        assert outcome.degraded
