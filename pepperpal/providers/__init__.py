"""Remote model clients."""

from pepperpal.providers.base import CompletionResult, ModelClient
from pepperpal.providers.litellm_provider import LiteLLMClient

__all__ = ["CompletionResult", "LiteLLMClient", "ModelClient"]
