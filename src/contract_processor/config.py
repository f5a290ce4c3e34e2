"""
Configuration management for contract-processor.

Loads settings from environment variables with sensible defaults.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Environment
    # ==========================================================================
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    # ==========================================================================
    # LLM API Keys
    # ==========================================================================
    openai_api_key: str = Field(default="", description="OpenAI API key")
    anthropic_api_key: str = Field(default="", description="Anthropic API key for Claude")

    # ==========================================================================
    # LLM Configuration
    # ==========================================================================
    primary_llm_provider: Literal["openai", "anthropic"] = "openai"
    primary_llm_model: str = "gpt-4o"
    fallback_llm_provider: Literal["openai", "anthropic"] = "anthropic"
    fallback_llm_model: str = "claude-sonnet-4-20250514"
    llm_temperature: float = 0.1
    llm_max_tokens: int = 2048
    llm_timeout: float = Field(default=60.0, gt=0, description="Per-call timeout in seconds")

    # Per-step completion budgets
    classification_max_tokens: int = 50
    extraction_max_tokens: int = 300

    # Input guardrail
    moderation_model: str = "omni-moderation-latest"

    # ==========================================================================
    # Template Store
    # ==========================================================================
    template_store_url: str = "http://localhost:3000/api/admin"
    template_store_timeout: float = Field(default=10.0, gt=0)

    @field_validator("template_store_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the base URL so paths can be appended directly."""
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
