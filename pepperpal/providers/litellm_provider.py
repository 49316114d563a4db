"""LiteLLM-backed model client targeting OpenRouter."""

from __future__ import annotations

from typing import Any

import litellm
from litellm import acompletion
from loguru import logger

from pepperpal.providers.base import CompletionResult

# OpenRouter app attribution headers.
DEFAULT_HEADERS = {
    "HTTP-Referer": "https://github.com/peppercoin/pepper-pal",
    "X-Title": "Pepper Pal",
}


class LiteLLMClient:
    """
    Stateless completion client.

    Credentials are passed per call rather than through litellm globals, so
    several clients can coexist in one process.
    """

    def __init__(
        self,
        api_key: str | None = None,
        api_base: str | None = None,
        *,
        temperature: float = 0.1,
        timeout: float | None = None,
        extra_headers: dict[str, str] | None = None,
    ):
        self.api_key = api_key
        self.api_base = api_base
        self.temperature = temperature
        self.timeout = timeout
        self.extra_headers = DEFAULT_HEADERS if extra_headers is None else extra_headers

        # Disable LiteLLM logging noise
        litellm.suppress_debug_info = True
        # Drop parameters a given upstream model does not accept
        litellm.drop_params = True

    @staticmethod
    def _resolve_model(model: str) -> str:
        """OpenRouter model ids need litellm's ``openrouter/`` prefix."""
        return model if model.startswith("openrouter/") else f"openrouter/{model}"

    async def complete(
        self,
        messages: list[dict[str, Any]],
        *,
        model: str,
        max_tokens: int,
        temperature: float | None = None,
    ) -> CompletionResult:
        """
        Send one chat completion request.

        Args:
            messages: List of message dicts with 'role' and 'content'.
            model: OpenRouter model identifier.
            max_tokens: Completion token cap.
            temperature: Overrides the client default when given.

        Returns:
            CompletionResult; ``success`` is False on any provider error or
            when the model produced no content.
        """
        if not self.api_key:
            logger.error("OpenRouter API key not configured")
            return CompletionResult(success=False, error="not_configured")

        resolved = self._resolve_model(model)
        kwargs: dict[str, Any] = {
            "model": resolved,
            "messages": messages,
            "max_tokens": max_tokens,
            "temperature": self.temperature if temperature is None else temperature,
            "top_p": 0.9,
            "api_key": self.api_key,
        }
        if self.api_base:
            kwargs["api_base"] = self.api_base
        if self.timeout:
            kwargs["timeout"] = self.timeout
        if self.extra_headers:
            kwargs["extra_headers"] = self.extra_headers

        logger.debug(f"Completion request: model={resolved} messages={len(messages)} max_tokens={max_tokens}")

        try:
            response = await acompletion(**kwargs)
        except Exception as e:
            logger.error(f"LLM call failed ({resolved}): {e}")
            return CompletionResult(success=False, error=self._error_code(e), finish_reason="error")

        return self._parse_response(response, resolved_model=resolved)

    @staticmethod
    def _error_code(exc: Exception) -> str:
        """Map raw provider exceptions to short codes; details stay in logs."""
        raw = str(exc).lower()
        if "rate_limit" in raw or "429" in raw:
            return "rate_limited"
        if "timeout" in raw or "timed out" in raw:
            return "timeout"
        if "authentication" in raw or "401" in raw or "403" in raw:
            return "auth"
        if "context_length" in raw or "context window" in raw:
            return "context_length"
        if "connection" in raw or "connect" in raw:
            return "connection"
        return "upstream_error"

    @staticmethod
    def _parse_response(response: Any, *, resolved_model: str = "") -> CompletionResult:
        usage: dict[str, int] = {}
        if getattr(response, "usage", None):
            usage = {
                "prompt_tokens": response.usage.prompt_tokens or 0,
                "completion_tokens": response.usage.completion_tokens or 0,
                "total_tokens": response.usage.total_tokens or 0,
            }

        if not response.choices:
            logger.warning(f"No choices returned by {resolved_model}")
            return CompletionResult(success=False, usage=usage, error="empty")

        choice = response.choices[0]
        content = (choice.message.content or "").strip()
        finish_reason = choice.finish_reason or "stop"

        if not content:
            # Reasoning models can spend the whole budget before writing content.
            error = "length_exhausted" if finish_reason == "length" else "empty"
            logger.warning(f"Empty completion from {resolved_model} (finish_reason={finish_reason})")
            return CompletionResult(success=False, usage=usage, error=error, finish_reason=finish_reason)

        logger.debug(f"Completion received: {len(content)} chars, finish_reason={finish_reason}")
        return CompletionResult(success=True, content=content, usage=usage, finish_reason=finish_reason)
