"""Choosing an API client by provider name."""

from __future__ import annotations

from grokcode.api import anthropic, openai, xai
from grokcode.api.models import ApiClient, ApiConfig
from grokcode.errors import ConfigError

_PROVIDERS = {
    "xai": xai.XaiClient,
    "openai": openai.OpenAiClient,
    "anthropic": anthropic.AnthropicClient,
}


def create_client(provider: str, config: ApiConfig) -> ApiClient:
    """Build the client for the named provider."""
    client_class = _PROVIDERS.get(provider)
    if client_class is None:
        raise ConfigError(f"Unknown API provider: {provider}")
    return client_class(config)