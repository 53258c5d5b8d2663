"""
Gemini Service - Google AI text generation for disruption explanations
Thin wrapper that turns a formatted prompt into plain text or a typed failure
"""

import logging
from typing import Any, Optional

from google import genai
from google.genai.types import GenerateContentConfig, HttpOptions

logger = logging.getLogger(__name__)


class ExplanationProviderError(Exception):
    """Raised when the generator fails or returns nothing usable"""
    pass


def extract_response_text(response: Any) -> str:
    """Extract text robustly from Gemini response across client modes."""
    response_text = getattr(response, "text", None)
    if isinstance(response_text, str) and response_text:
        return response_text

    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return ""

    parts = getattr(getattr(candidates[0], "content", None), "parts", None) or []
    texts = [part.text for part in parts if isinstance(getattr(part, "text", None), str) and part.text]
    return "".join(texts)


class GeminiExplanationService:
    """
    Service for generating explanations with Google Gemini models

    Any failure surfaces as ExplanationProviderError so callers can fall
    back to a fixed sentence.
    """

    def __init__(
        self,
        api_key: str,
        model_name: str = "gemini-2.5-flash",
        temperature: float = 0.4,
        max_output_tokens: int = 1024,
        client: Optional[Any] = None
    ):
        """
        Initialize Google AI service with an API key

        Args:
            api_key: Google Gemini API key
            model_name: Default model name
            temperature: Default sampling temperature
            max_output_tokens: Default output token cap
            client: Pre-built genai client (tests inject a fake here)
        """
        if not api_key and client is None:
            raise ValueError("GOOGLE_GEMINI_API_KEY not provided")

        self.model_name = model_name
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens
        self.client = client or genai.Client(
            api_key=api_key,
            http_options=HttpOptions(api_version="v1")
        )
        logger.info(f"Initialized Google AI client with API Key ({model_name})")

    def complete(
        self,
        prompt: str,
        system_instruction: Optional[str] = None,
        model_name: Optional[str] = None,
        temperature: Optional[float] = None,
        max_output_tokens: Optional[int] = None
    ) -> str:
        """
        Generate plain text for a prompt

        Args:
            prompt: Formatted prompt text
            system_instruction: Optional system instruction
            model_name: Override of the default model
            temperature: Override of the default temperature
            max_output_tokens: Override of the default token cap

        Returns:
            Generated text, stripped

        Raises:
            ExplanationProviderError: On API failure or empty output
        """
        model = model_name or self.model_name
        gen_config = GenerateContentConfig(
            temperature=self.temperature if temperature is None else temperature,
            max_output_tokens=max_output_tokens or self.max_output_tokens,
            system_instruction=system_instruction or None
        )

        try:
            response = self.client.models.generate_content(
                model=model,
                contents=prompt,
                config=gen_config
            )
        except Exception as e:
            logger.error(f"Gemini generation failed: {str(e)}")
            raise ExplanationProviderError(f"Generation failed: {str(e)}") from e

        text = extract_response_text(response).strip()
        if not text:
            logger.warning(f"Gemini returned an empty response ({model})")
            raise ExplanationProviderError("Empty model response")

        logger.info(f"Generated explanation with {model} ({len(text)} chars)")
        return text


# Singleton instance
_service_instance: Optional[GeminiExplanationService] = None


def get_gemini_service(api_key: Optional[str] = None) -> Optional[GeminiExplanationService]:
    """
    Get singleton Gemini service instance

    Args:
        api_key: Google Gemini API key (uses Settings if not provided)

    Returns:
        GeminiExplanationService instance or None if API key not configured
    """
    global _service_instance

    if _service_instance is None or api_key:
        from disruption_helper.core.config import get_settings
        settings = get_settings()

        api_key = api_key or settings.google_gemini_api_key
        if not api_key:
            logger.warning("GOOGLE_GEMINI_API_KEY not configured - AI explanations disabled")
            return None

        _service_instance = GeminiExplanationService(
            api_key=api_key,
            model_name=settings.default_model_name,
            temperature=settings.default_temperature,
            max_output_tokens=settings.max_output_tokens
        )

    return _service_instance
