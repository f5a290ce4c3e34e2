"""
Command-line interface for contract-processor.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
import structlog
from pydantic import ValidationError

from contract_processor.config import get_settings

logger = structlog.get_logger(__name__)

DOCUMENT_TYPES = click.Choice(
    ["contrato_base", "anexo_a", "anexo_b", "anexo_c", "anexo_d"],
    case_sensitive=False,
)


def _read_text(text: Optional[str], file: Optional[str]) -> str:
    if file:
        return Path(file).read_text(encoding="utf-8")
    return text or ""


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, debug: bool) -> None:
    """contract-processor: generate filled contracts from transcripts."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug

    level = logging.DEBUG if debug else getattr(logging, get_settings().log_level, logging.INFO)
    # Logs go to stderr so documents can be piped from stdout
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


# =========================================================================
# Workflow Commands
# =========================================================================


@cli.command()
@click.argument("text", required=False)
@click.option("--file", "-f", type=click.Path(exists=True, dir_okay=False), help="Read the transcript from a file")
@click.option("--client-id", "-c", help="Client whose custom templates should be used")
@click.option("--type", "document_type", type=DOCUMENT_TYPES, help="Skip classification and use this document type")
@click.option("--agent-config", type=click.Path(exists=True, dir_okay=False), help="Agent configuration JSON file")
@click.option("--output", "-o", type=click.Path(), help="Write the full result as JSON")
@click.pass_context
def run(
    ctx: click.Context,
    text: Optional[str],
    file: Optional[str],
    client_id: Optional[str],
    document_type: Optional[str],
    agent_config: Optional[str],
    output: Optional[str],
) -> None:
    """Generate a document from TEXT (or --file)."""
    from contract_processor.models import AgentConfig, DocumentType, WorkflowInput
    from contract_processor.pipeline.orchestrator import (
        WorkflowOrchestrator,
        get_workflow_orchestrator,
    )

    agent = None
    if agent_config:
        try:
            agent = AgentConfig.model_validate_json(Path(agent_config).read_text(encoding="utf-8"))
        except ValidationError as e:
            click.echo(f"Error: invalid agent configuration\n{e}", err=True)
            ctx.exit(2)

    workflow_input = WorkflowInput(
        input_text=_read_text(text, file),
        client_id=client_id,
        document_type=DocumentType.parse(document_type),
    )

    if agent is None:
        orchestrator = get_workflow_orchestrator()
    else:
        orchestrator = WorkflowOrchestrator(agent_config=agent)
    result = orchestrator.run(workflow_input)

    if output:
        Path(output).write_text(
            json.dumps(result.to_dict(), indent=2, ensure_ascii=False),
            encoding="utf-8",
        )

    if not result.success:
        click.echo(f"Error ({result.failed_state.value}): {result.error_message}", err=True)
        ctx.exit(1)

    click.echo(result.document)
    click.echo("\n=== Summary ===", err=True)
    click.echo(f"Document type: {result.document_type.value}", err=True)
    click.echo(f"Template origin: {result.template_origin.value}", err=True)
    click.echo(f"Extraction method: {result.extraction_method.value}", err=True)
    click.echo(
        f"Placeholders filled: {result.fill_result.filled_count}/{result.fill_result.total_placeholders}"
        f" ({result.completeness_ratio:.0%})",
        err=True,
    )
    if result.fill_result.missing_field_names:
        click.echo(f"Missing: {', '.join(result.fill_result.missing_field_names)}", err=True)
    for reason in result.degradations:
        click.echo(f"Fallback: {reason}", err=True)
    if output:
        click.echo(f"\nResults written to: {output}", err=True)


@cli.command()
@click.argument("text", required=False)
@click.option("--file", "-f", type=click.Path(exists=True, dir_okay=False), help="Read the transcript from a file")
def classify(text: Optional[str], file: Optional[str]) -> None:
    """Classify TEXT (or --file) into a document type."""
    from contract_processor.pipeline.classifier import get_document_classifier

    outcome = get_document_classifier().classify(_read_text(text, file))
    click.echo(outcome.value.value)
    if outcome.degraded:
        click.echo(f"Fallback: {outcome.reason}", err=True)


# =========================================================================
# Template Commands
# =========================================================================


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
def placeholders(path: str) -> None:
    """List the placeholders found in a template file."""
    from contract_processor.templates import extract_placeholders

    for name in extract_placeholders(Path(path).read_text(encoding="utf-8")):
        click.echo(name)


@cli.command("show-template")
@click.argument("document_type", type=DOCUMENT_TYPES)
def show_template(document_type: str) -> None:
    """Print the built-in template for DOCUMENT_TYPE."""
    from contract_processor.templates import get_default_template

    click.echo(get_default_template(document_type))


@cli.command("validate-template")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def validate_template(ctx: click.Context, path: str) -> None:
    """Check that a template file carries the required placeholders."""
    from contract_processor.templates import extract_placeholders, validate_required_placeholders

    found = extract_placeholders(Path(path).read_text(encoding="utf-8"))
    validation = validate_required_placeholders(found)

    click.echo(f"Placeholders: {len(found)}")
    if not validation.is_valid:
        click.echo(f"Invalid: missing {', '.join(validation.missing)}", err=True)
        ctx.exit(1)
    click.echo("Valid")


# =========================================================================
# Config Commands
# =========================================================================


@cli.command()
def health() -> None:
    """Check which LLM providers are configured."""
    from contract_processor.services.llm_service import get_llm_service

    click.echo("\n=== Service Health Check ===\n")
    click.echo("LLM Services:")
    for provider, status in get_llm_service().health_check().items():
        status_str = "✓" if status else "✗"
        click.echo(f"  {provider}: {status_str}")


@cli.command()
def config() -> None:
    """Show current configuration."""
    settings = get_settings()

    click.echo("\n=== contract-processor Configuration ===\n")
    click.echo(f"Environment: {settings.environment}")
    click.echo(f"Debug: {settings.debug}")
    click.echo(f"\nPrimary LLM: {settings.primary_llm_provider} ({settings.primary_llm_model})")
    click.echo(f"Fallback LLM: {settings.fallback_llm_provider} ({settings.fallback_llm_model})")
    click.echo(f"LLM timeout: {settings.llm_timeout}s")
    click.echo(f"\nTemplate store: {settings.template_store_url}")
    click.echo(f"Template store timeout: {settings.template_store_timeout}s")


def main() -> None:
    """Entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
