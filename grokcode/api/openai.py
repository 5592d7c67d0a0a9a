"""Clients for OpenAI-compatible chat completion endpoints."""

from __future__ import annotations

import os
import sys
from typing import Any, Callable, Dict, Optional, TypeVar

import httpx

from grokcode.api.models import (
    ApiClient,
    ApiConfig,
    ChatCompletionRequest,
    ChatCompletionResponse,
)
from grokcode.errors import ApiResponseError, HttpError, JsonError, RateLimitExceeded

_RATE_LIMIT_RETRY_SECS = 60
_T = TypeVar("_T")


def _debug_enabled() -> bool:
    return "DEBUG_API" in os.environ


def _debug(*lines: str) -> None:
    for line in lines:
        print(line, file=sys.stderr)


class _HttpApiClient(ApiClient):
    """Base for clients that post JSON over HTTP, optionally through a shared httpx client."""

    def __init__(self, config: ApiConfig, http_client: Optional[httpx.AsyncClient] = None) -> None:
        super().__init__(config)
        self._http = http_client

    async def _post(self, url: str, headers: Dict[str, str], payload: Any) -> httpx.Response:
        timeout = self.config.timeout_secs
        try:
            if self._http is not None:
                return await self._http.post(url, headers=headers, json=payload, timeout=timeout)
            async with httpx.AsyncClient() as http:
                return await http.post(url, headers=headers, json=payload, timeout=timeout)
        except httpx.TimeoutException as exc:
            raise HttpError(f"request timeout: {exc}") from exc
        except httpx.HTTPError as exc:
            raise HttpError(exc) from exc

    @staticmethod
    def _decode(response: httpx.Response, parse: Callable[[Any], _T]) -> _T:
        try:
            return parse(response.json())
        except (ValueError, JsonError) as exc:
            raise HttpError(f"error decoding response body: {exc}") from exc


class _ChatCompletionsClient(_HttpApiClient):
    """Shared behaviour of endpoints that speak the chat completions protocol."""

    async def _complete(self, request: ChatCompletionRequest) -> ChatCompletionResponse:
        url = f"{self.config.base_url}/chat/completions"
        debug = _debug_enabled()
        if debug:
            _debug(
                f"DEBUG: Sending API request to {url}",
                f"  Model: {request.model}",
                f"  Messages count: {len(request.messages)}",
                f"  Tools count: {len(request.tools or [])}",
                f"  Tool choice: {request.tool_choice}",
            )

        headers = {
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Type": "application/json",
        }
        response = await self._post(url, headers, request.to_dict())

        if response.status_code == 429:
            raise RateLimitExceeded(response.text, _RATE_LIMIT_RETRY_SECS)
        if not response.is_success:
            status = f"{response.status_code} {response.reason_phrase}".strip()
            raise ApiResponseError(f"API error {status}: {response.text}")

        parsed = self._decode(response, ChatCompletionResponse.from_dict)

        if debug:
            _debug("DEBUG: API Response received", f"  Choices count: {len(parsed.choices)}")
            if parsed.choices:
                message = parsed.choices[0].message
                calls = None if message.tool_calls is None else len(message.tool_calls)
                _debug(f"  Content: {message.content!r}", f"  Tool calls: {calls}")
        return parsed


class OpenAiClient(_ChatCompletionsClient):
    """Talks to the OpenAI chat completions API."""

    async def chat_completion(self, request: ChatCompletionRequest) -> ChatCompletionResponse:
        """Send the request and return the parsed response."""
        return await self._complete(request)