"""LLM Service for chat-completion requests."""

import logging
from typing import Optional

import openai
from openai import AsyncOpenAI

from config.settings import get_settings

logger = logging.getLogger(__name__)


class BackendTransportError(Exception):
    """Raised when the generative backend could not be reached or answered nothing."""


class LLMService:
    """
    LLM Service for structured prompt generation.

    Wraps an OpenAI-compatible chat completions endpoint. The SDK's own
    retries are disabled; callers decide how often a request is attempted.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[AsyncOpenAI] = None,
    ):
        """
        Initialize LLM Service.

        Args:
            api_key: OpenAI API key (defaults to settings)
            model: Model name (defaults to settings)
            base_url: Optional proxy URL (defaults to settings)
            timeout: Request timeout in seconds (defaults to settings)
            client: Preconfigured client, mainly for tests
        """
        settings = get_settings()
        self.api_key = api_key or settings.openai_api_key
        self.model = model or settings.openai_model
        self.base_url = base_url or settings.openai_base_url
        self.timeout = timeout or settings.prompt_request_timeout

        if client is not None:
            self.client = client
        elif self.api_key:
            self.client = AsyncOpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=self.timeout,
                max_retries=0,
            )
        else:
            self.client = None
            logger.warning("[LLMService] OPENAI_API_KEY fehlt; LLM requests will fail")

    async def generate_response(
        self,
        system_prompt: str,
        user_message: str,
        temperature: float = 0.7,
    ) -> str:
        """
        Generate LLM response.

        Args:
            system_prompt: System instructions
            user_message: User data summary
            temperature: Sampling temperature (0-2)

        Returns:
            Generated response text

        Raises:
            BackendTransportError: client missing, request failed or empty reply
        """
        if self.client is None:
            raise BackendTransportError("OpenAI client not configured")

        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_message},
        ]

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=temperature,
            )
        except openai.APIError as exc:
            raise BackendTransportError(f"{type(exc).__name__}: {exc}") from exc

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise BackendTransportError("Empty response from LLM")
        return content


_llm_service: Optional[LLMService] = None


def get_llm_service() -> LLMService:
    global _llm_service
    if _llm_service is None:
        _llm_service = LLMService()
        logger.info("[LLMService] Singleton instance created with model=%s", _llm_service.model)
    return _llm_service
