"""Integration tests for the click CLI via CliRunner."""

import json

import pytest
from click.testing import CliRunner

from contract_processor.cli import cli
from contract_processor.exceptions import LLMTimeoutError


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def patched_llm(mock_llm, monkeypatch):
    monkeypatch.setattr("contract_processor.pipeline.orchestrator.get_llm_service", lambda: mock_llm)
    monkeypatch.setattr("contract_processor.pipeline.classifier.get_llm_service", lambda: mock_llm)
    return mock_llm


class TestTemplateCommands:

    def test_show_template(self, runner):
        result = runner.invoke(cli, ["show-template", "anexo_a"])
        assert result.exit_code == 0
        assert "ANEXO A - ESPECIFICACIONES TÉCNICAS DEL EVENTO" in result.output

    def test_show_template_rejects_unknown_type(self, runner):
        result = runner.invoke(cli, ["show-template", "anexo_z"])
        assert result.exit_code != 0

    def test_placeholders(self, runner, tmp_path, client_template):
        path = tmp_path / "plantilla.md"
        path.write_text(client_template, encoding="utf-8")
        result = runner.invoke(cli, ["placeholders", str(path)])
        assert result.exit_code == 0
        assert result.output.split() == ["NOMBRE_CLIENTE", "NOMBRE_EVENTO", "FECHA_EVENTO", "FECHA_FIRMA"]

    def test_validate_template_valid(self, runner, tmp_path, client_template):
        path = tmp_path / "plantilla.md"
        path.write_text(client_template, encoding="utf-8")
        result = runner.invoke(cli, ["validate-template", str(path)])
        assert result.exit_code == 0
        assert "Valid" in result.output

    def test_validate_template_invalid(self, runner, tmp_path):
        path = tmp_path / "plantilla.md"
        path.write_text("Cliente: {{NOMBRE_CLIENTE}}", encoding="utf-8")
        result = runner.invoke(cli, ["validate-template", str(path)])
        assert result.exit_code == 1
        assert "FECHA_EVENTO" in result.output


class TestRunCommand:

    def test_run_with_type(self, runner, patched_llm, sample_transcript, sample_fields):
        patched_llm.generate.return_value = (json.dumps(sample_fields), "gpt-test")
        result = runner.invoke(cli, ["run", sample_transcript, "--type", "contrato_base"])
        assert result.exit_code == 0, result.output
        assert "Ana Pérez" in result.output
        assert patched_llm.generate.call_count == 1

    def test_run_from_file_with_output(self, runner, patched_llm, tmp_path, sample_transcript):
        patched_llm.generate.side_effect = [("anexo_b", "gpt-test"), ("{}", "gpt-test")]
        source = tmp_path / "transcripcion.txt"
        source.write_text(sample_transcript, encoding="utf-8")
        output = tmp_path / "resultado.json"

        result = runner.invoke(cli, ["run", "--file", str(source), "--output", str(output)])

        assert result.exit_code == 0, result.output
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["success"] is True
        assert data["document_type"] == "anexo_b"
        assert data["template_origin"] == "default"

    def test_run_empty_text(self, runner, patched_llm):
        result = runner.invoke(cli, ["run", ""])
        assert result.exit_code == 0
        patched_llm.generate.assert_not_called()

    def test_run_failure_exit_code(self, runner, patched_llm):
        patched_llm.generate.side_effect = LLMTimeoutError("timed out")
        result = runner.invoke(cli, ["run", "cliente Ana"])
        assert result.exit_code == 1
        assert "timed out" in result.output

    def test_run_with_agent_config(self, runner, patched_llm, tmp_path):
        agent_file = tmp_path / "agente.json"
        agent_file.write_text(json.dumps({
            "name": "Agente", "clientId": "c1", "status": "inactive",
        }), encoding="utf-8")
        result = runner.invoke(cli, ["run", "cliente Ana", "--agent-config", str(agent_file)])
        assert result.exit_code == 1
        assert "Agent is not active" in result.output

    def test_run_with_invalid_agent_config(self, runner, patched_llm, tmp_path):
        agent_file = tmp_path / "agente.json"
        agent_file.write_text(json.dumps({"name": "Agente"}), encoding="utf-8")
        result = runner.invoke(cli, ["run", "cliente Ana", "--agent-config", str(agent_file)])
        assert result.exit_code == 2
        assert "invalid agent configuration" in result.output


class TestClassifyCommand:

    def test_classify(self, runner, patched_llm):
        patched_llm.generate.return_value = ("anexo_d", "gpt-test")
        result = runner.invoke(cli, ["classify", "Entrega final y autorización de pago"])
        assert result.exit_code == 0
        assert "anexo_d" in result.output.splitlines()

    def test_classify_fallback_reported(self, runner, patched_llm):
        patched_llm.generate.return_value = ("", "gpt-test")
        result = runner.invoke(cli, ["classify", "texto"])
        assert result.exit_code == 0
        assert "contrato_base" in result.output
        assert "Fallback" in result.output


class TestConfigCommands:

    def test_config(self, runner):
        result = runner.invoke(cli, ["config"])
        assert result.exit_code == 0
        assert "Primary LLM: openai (gpt-4o)" in result.output

    def test_health(self, runner):
        result = runner.invoke(cli, ["health"])
        assert result.exit_code == 0
        assert "openai" in result.output

    def test_debug_flag(self, runner):
        result = runner.invoke(cli, ["--debug", "config"])
        assert result.exit_code == 0
