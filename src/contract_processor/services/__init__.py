"""
External services used by the workflow.
"""

from contract_processor.services.llm_service import LLMService, get_llm_service

__all__ = [
    "LLMService",
    "get_llm_service",
]
