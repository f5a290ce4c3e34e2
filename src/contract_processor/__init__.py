"""
contract-processor: contract generation from business transcripts

Classifies a Spanish-language transcript into one of five document types,
resolves the client's template (falling back to the built-in catalog),
extracts the contract fields and fills the template.
"""

__version__ = "0.1.0"

from contract_processor.config import get_settings

__all__ = ["get_settings", "__version__"]
