"""
LLM service for document classification and field extraction.

Supports GPT-4o (OpenAI) and Claude (Anthropic) with automatic fallback.
"""

from functools import lru_cache

import anthropic
import openai
import structlog
from anthropic import Anthropic
from openai import OpenAI
from tenacity import retry, retry_if_not_exception_type, stop_after_attempt, wait_exponential

from contract_processor.config import get_settings
from contract_processor.exceptions import LLMTimeoutError, LLMUnavailableError

logger = structlog.get_logger(__name__)


class LLMService:
    """
    Completion client with a primary and a fallback provider.

    Transient provider errors are retried. Timeouts are not retried and do
    not trigger the fallback: they surface as `LLMTimeoutError`.
    """

    def __init__(self):
        settings = get_settings()
        self.settings = settings

        self._anthropic: Anthropic | None = None
        self._openai: OpenAI | None = None

        # Retries are owned by tenacity below
        if settings.openai_api_key:
            self._openai = OpenAI(api_key=settings.openai_api_key, max_retries=0)
        if settings.anthropic_api_key:
            self._anthropic = Anthropic(api_key=settings.anthropic_api_key, max_retries=0)

        self.primary_provider = settings.primary_llm_provider
        self.primary_model = settings.primary_llm_model
        self.fallback_provider = settings.fallback_llm_provider
        self.fallback_model = settings.fallback_llm_model

    @property
    def anthropic(self) -> Anthropic:
        if not self._anthropic:
            raise LLMUnavailableError("Anthropic client not configured. Set ANTHROPIC_API_KEY.")
        return self._anthropic

    @property
    def openai(self) -> OpenAI:
        if not self._openai:
            raise LLMUnavailableError("OpenAI client not configured. Set OPENAI_API_KEY.")
        return self._openai

    def is_configured(self, provider: str) -> bool:
        if provider == "openai":
            return self._openai is not None
        if provider == "anthropic":
            return self._anthropic is not None
        return False

    def health_check(self) -> dict[str, bool]:
        """Report which providers have credentials."""
        return {
            "openai": self.is_configured("openai"),
            "anthropic": self.is_configured("anthropic"),
        }

    # =========================================================================
    # Core LLM Calls
    # =========================================================================

    @retry(
        retry=retry_if_not_exception_type((LLMTimeoutError, LLMUnavailableError)),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    def _call_openai(
        self,
        system_prompt: str,
        user_prompt: str,
        model: str,
        max_tokens: int,
        temperature: float,
        timeout: float,
    ) -> str:
        """Call OpenAI chat completions."""
        try:
            response = self.openai.chat.completions.create(
                model=model,
                max_tokens=max_tokens,
                temperature=temperature,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                timeout=timeout,
            )
        except openai.APITimeoutError as e:
            raise LLMTimeoutError(f"OpenAI request timed out after {timeout}s") from e

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""

    @retry(
        retry=retry_if_not_exception_type((LLMTimeoutError, LLMUnavailableError)),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    def _call_anthropic(
        self,
        system_prompt: str,
        user_prompt: str,
        model: str,
        max_tokens: int,
        temperature: float,
        timeout: float,
    ) -> str:
        """Call Anthropic messages API."""
        try:
            response = self.anthropic.messages.create(
                model=model,
                max_tokens=max_tokens,
                temperature=temperature,
                system=system_prompt,
                messages=[{"role": "user", "content": user_prompt}],
                timeout=timeout,
            )
        except anthropic.APITimeoutError as e:
            raise LLMTimeoutError(f"Anthropic request timed out after {timeout}s") from e

        if not response.content:
            return ""
        return getattr(response.content[0], "text", "") or ""

    def _call(
        self,
        provider: str,
        system_prompt: str,
        user_prompt: str,
        model: str,
        max_tokens: int,
        temperature: float,
        timeout: float,
    ) -> str:
        call = self._call_anthropic if provider == "anthropic" else self._call_openai
        return call(system_prompt, user_prompt, model, max_tokens, temperature, timeout)

    def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int | None = None,
        use_fallback: bool = True,
        model: str | None = None,
        temperature: float | None = None,
        timeout: float | None = None,
    ) -> tuple[str, str]:
        """
        Generate a completion with automatic fallback.

        `model` overrides the primary provider's model only; the fallback
        always uses its configured model.

        Returns (response_text, model_used).
        """
        max_tokens = max_tokens or self.settings.llm_max_tokens
        temperature = self.settings.llm_temperature if temperature is None else temperature
        timeout = timeout or self.settings.llm_timeout

        if self.is_configured(self.primary_provider):
            primary_model = model or self.primary_model
            try:
                text = self._call(
                    self.primary_provider, system_prompt, user_prompt,
                    primary_model, max_tokens, temperature, timeout,
                )
                return text, primary_model
            except LLMTimeoutError:
                raise
            except Exception as e:
                logger.warning(
                    "primary_llm_failed",
                    provider=self.primary_provider,
                    error=str(e),
                )
                if not use_fallback:
                    raise

        if use_fallback and self.is_configured(self.fallback_provider):
            try:
                text = self._call(
                    self.fallback_provider, system_prompt, user_prompt,
                    self.fallback_model, max_tokens, temperature, timeout,
                )
                return text, self.fallback_model
            except Exception as e:
                logger.error(
                    "fallback_llm_failed",
                    provider=self.fallback_provider,
                    error=str(e),
                )
                raise

        raise LLMUnavailableError(
            "No LLM provider available. Set OPENAI_API_KEY or ANTHROPIC_API_KEY."
        )

    @retry(
        retry=retry_if_not_exception_type((LLMTimeoutError, LLMUnavailableError)),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    def moderate(self, text: str, timeout: float | None = None) -> list[str]:
        """
        Run OpenAI moderation over `text`.

        Returns the flagged category names; an empty list means the text passed.
        """
        timeout = timeout or self.settings.llm_timeout
        try:
            response = self.openai.moderations.create(
                model=self.settings.moderation_model,
                input=text,
                timeout=timeout,
            )
        except openai.APITimeoutError as e:
            raise LLMTimeoutError(f"OpenAI moderation timed out after {timeout}s") from e

        flagged: list[str] = []
        for result in response.results:
            if not result.flagged:
                continue
            categories = result.categories.model_dump(by_alias=True)
            flagged.extend(name for name, hit in categories.items() if hit and name not in flagged)
        return flagged


@lru_cache()
def get_llm_service() -> LLMService:
    """Get cached LLM service instance."""
    return LLMService()
