"""Client for the xAI chat completion endpoint."""

from __future__ import annotations

from grokcode.api.models import ChatCompletionRequest, ChatCompletionResponse
from grokcode.api.openai import _ChatCompletionsClient


class XaiClient(_ChatCompletionsClient):
    """Talks to the xAI chat completions API."""

    async def chat_completion(self, request: ChatCompletionRequest) -> ChatCompletionResponse:
        """Send the request and return the parsed response."""
        return await self._complete(request)