"""Chat-completion collaborator.

`ChatCompletionClient` is the port the orchestrator depends on;
`OpenAICompletionClient` is the production adapter over the OpenAI SDK. The
adapter translates SDK failures into the application's error taxonomy:
missing credentials -> `ConfigurationError`, HTTP and network failures ->
`TransportError`, empty replies -> `ParseError`.
"""

from typing import Any, Dict, List, Optional, Protocol

import openai
from openai import AsyncOpenAI

from core.config import get_settings
from core.exceptions import ConfigurationError, ParseError, TransportError
from core.logger import get_logger

logger = get_logger("services.completion_client")

Message = Dict[str, str]


class ChatCompletionClient(Protocol):
    """Turns a list of chat messages into the best completion's text."""

    async def complete(
        self,
        messages: List[Message],
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
        json_mode: bool = False,
    ) -> str:
        ...


class OpenAICompletionClient:
    """Single-attempt async client for OpenAI chat completions.

    The API key is checked when a completion is requested, not at
    construction, so the service can start without one and report the
    problem on first use.

    Args:
        api_key: OpenAI API key (reads settings when None).
        model: Chat model name.
        client: Optional pre-configured AsyncOpenAI client (for testing).
    """

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None, client: Optional[AsyncOpenAI] = None):
        settings = get_settings()
        self.api_key = api_key or settings.openai_api_key
        self.model = model or settings.openai_model
        self._client = client

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            if not self.api_key:
                raise ConfigurationError(
                    "OpenAI API key is missing. Please set OPENAI_API_KEY in your .env file.",
                    config_key="OPENAI_API_KEY",
                )
            # retries are disabled: one attempt, then the caller's fallback applies
            self._client = AsyncOpenAI(api_key=self.api_key, max_retries=0)
        return self._client

    async def complete(
        self,
        messages: List[Message],
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
        json_mode: bool = False,
    ) -> str:
        """Send `messages` and return the first choice's text.

        Raises:
            ConfigurationError: If no API key is configured.
            TransportError: On HTTP, connection or timeout failures.
            ParseError: If the response carries no text.
        """
        client = self._get_client()

        params: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "temperature": temperature,
        }
        if max_tokens:
            params["max_tokens"] = max_tokens
        if json_mode:
            params["response_format"] = {"type": "json_object"}

        logger.debug("Calling OpenAI: model=%s messages=%s json_mode=%s", self.model, len(messages), json_mode)
        try:
            completion = await client.chat.completions.create(**params)
        except openai.AuthenticationError as exc:
            logger.error("OpenAI rejected the configured credentials: %s", exc)
            raise ConfigurationError("OpenAI API key was rejected", config_key="OPENAI_API_KEY") from exc
        except openai.APIError as exc:
            logger.warning("OpenAI API error: %s", exc)
            raise TransportError(f"OpenAI API error: {exc}", cause=type(exc).__name__) from exc

        if not completion.choices:
            raise ParseError("OpenAI returned no choices")
        content = completion.choices[0].message.content
        if not content:
            raise ParseError("OpenAI returned an empty completion")

        usage = getattr(completion, "usage", None)
        if usage is not None:
            logger.info(
                "OpenAI response received: model=%s total_tokens=%s",
                self.model,
                getattr(usage, "total_tokens", None),
            )
        return content
