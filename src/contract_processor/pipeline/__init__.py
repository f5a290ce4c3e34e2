"""
Document generation workflow.

1. Classification - Decide which document type the transcript describes
2. Extraction - Pull contract fields out of the transcript
3. Orchestration - Resolve the template, fill it and report completeness
"""

from contract_processor.pipeline.classifier import DocumentClassifier
from contract_processor.pipeline.extraction import FieldExtractionAgent
from contract_processor.pipeline.manual_extraction import extract_fields_manually
from contract_processor.pipeline.orchestrator import WorkflowOrchestrator

__all__ = [
    "DocumentClassifier",
    "FieldExtractionAgent",
    "extract_fields_manually",
    "WorkflowOrchestrator",
]
