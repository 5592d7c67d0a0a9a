"""Client for the Anthropic messages endpoint."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Tuple

from grokcode.api.models import (
    ChatCompletionRequest,
    ChatCompletionResponse,
    Choice,
    FunctionCall,
    Message,
    ToolCall,
)
from grokcode.api.openai import _RATE_LIMIT_RETRY_SECS, _debug, _debug_enabled, _HttpApiClient
from grokcode.errors import ConfigError, JsonError, RateLimitExceeded

_ANTHROPIC_VERSION = "2023-06-01"


def _content_blocks(data: Any) -> List[Dict[str, Any]]:
    if not isinstance(data, dict):
        raise JsonError("expected an object for response")
    blocks = data.get("content")
    if not isinstance(blocks, list):
        raise JsonError("missing or invalid field `content` in response")
    stop_reason = data.get("stop_reason")
    if stop_reason is not None and not isinstance(stop_reason, str):
        raise JsonError("invalid type for `stop_reason` in response")
    for block in blocks:
        if not isinstance(block, dict) or not isinstance(block.get("type"), str):
            raise JsonError("missing field `type` in content block")
        for key in ("text", "id", "name"):
            value = block.get(key)
            if value is not None and not isinstance(value, str):
                raise JsonError(f"invalid type for `{key}` in content block")
    return blocks


def _with_blocks(data: Any) -> Tuple[Any, List[Dict[str, Any]]]:
    return data, _content_blocks(data)


class AnthropicClient(_HttpApiClient):
    """Talks to the Anthropic messages API, translating to and from chat completions."""

    def convert_request(self, request: ChatCompletionRequest) -> Dict[str, Any]:
        """Turn a chat completion request into an Anthropic request body."""
        messages = []
        system_prompt: Optional[str] = None
        for message in request.messages:
            if message.role == "system":
                system_prompt = message.content
            elif message.role in ("user", "assistant"):
                messages.append({"role": message.role, "content": message.content or ""})

        body: Dict[str, Any] = {"model": self.config.model, "messages": messages}
        if system_prompt is not None:
            body["system"] = system_prompt
        body["max_tokens"] = request.max_tokens
        body["temperature"] = request.temperature
        if request.tools is not None:
            body["tools"] = [
                {
                    "name": tool.function.name,
                    "description": tool.function.description,
                    "input_schema": tool.function.parameters,
                }
                for tool in request.tools
            ]
        return body

    def convert_response(self, data: Any) -> ChatCompletionResponse:
        """Turn an Anthropic response body into a chat completion response."""
        blocks = _content_blocks(data)
        tool_calls = [
            ToolCall(
                id=block.get("id") or "",
                type="function",
                function=FunctionCall(
                    name=block.get("name") or "",
                    arguments=json.dumps(
                        block.get("input"), separators=(",", ":"), sort_keys=True
                    ),
                ),
            )
            for block in blocks
            if block["type"] == "tool_use"
        ]
        text = "\n".join(
            block["text"]
            for block in blocks
            if block["type"] == "text" and block.get("text") is not None
        )
        message = Message(role="assistant", content=text or None, tool_calls=tool_calls or None)
        return ChatCompletionResponse(choices=[Choice(message=message)])

    async def chat_completion(self, request: ChatCompletionRequest) -> ChatCompletionResponse:
        """Send the request and return the translated response."""
        url = f"{self.config.base_url}/messages"
        debug = _debug_enabled()
        if debug:
            _debug(
                f"DEBUG: Sending Anthropic API request to {url}",
                f"  Model: {request.model}",
                f"  Messages count: {len(request.messages)}",
                f"  Tools count: {len(request.tools or [])}",
            )

        payload = self.convert_request(request)
        api_key = self.config.api_key
        if any(ch in api_key for ch in "\r\n\0") or not api_key.isprintable():
            raise ConfigError("Invalid API key format")
        headers = {
            "x-api-key": api_key,
            "Content-Type": "application/json",
            "anthropic-version": _ANTHROPIC_VERSION,
        }
        response = await self._post(url, headers, payload)

        if not response.is_success:
            raise RateLimitExceeded(response.text, _RATE_LIMIT_RETRY_SECS)

        data, blocks = self._decode(response, _with_blocks)

        if debug:
            _debug(
                "DEBUG: Anthropic API Response received",
                f"  Content blocks: {len(blocks)}",
                f"  Stop reason: {data.get('stop_reason')!r}",
            )
        return self.convert_response(data)