"""Data types shared by every chat completion client."""

from __future__ import annotations

import abc
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Type, Union

from grokcode.errors import JsonError

_Kind = Union[Type[Any], Tuple[Type[Any], ...]]


def _require(data: Any, key: str, kind: _Kind, where: str) -> Any:
    if not isinstance(data, dict):
        raise JsonError(f"expected an object for {where}")
    if key not in data:
        raise JsonError(f"missing field `{key}` in {where}")
    value = data[key]
    if not isinstance(value, kind):
        raise JsonError(f"invalid type for `{key}` in {where}")
    return value


def _optional(data: Dict[str, Any], key: str, kind: _Kind, where: str) -> Any:
    value = data.get(key)
    if value is not None and not isinstance(value, kind):
        raise JsonError(f"invalid type for `{key}` in {where}")
    return value


@dataclass
class FunctionCall:
    """The function an assistant asked to call, with JSON-encoded arguments."""

    name: str
    arguments: str


@dataclass
class ToolCall:
    """A tool call made by the assistant."""

    id: str
    function: FunctionCall
    type: str = "function"


def _tool_call_to_dict(call: ToolCall) -> Dict[str, Any]:
    return {
        "id": call.id,
        "type": call.type,
        "function": {"name": call.function.name, "arguments": call.function.arguments},
    }


def _tool_call_from_dict(data: Any) -> ToolCall:
    call_id = _require(data, "id", str, "tool call")
    call_type = _require(data, "type", str, "tool call")
    function = _require(data, "function", dict, "tool call")
    return ToolCall(
        id=call_id,
        type=call_type,
        function=FunctionCall(
            name=_require(function, "name", str, "function call"),
            arguments=_require(function, "arguments", str, "function call"),
        ),
    )


@dataclass
class Message:
    """One message in a conversation."""

    role: str
    content: Optional[str] = None
    tool_calls: Optional[List[ToolCall]] = None
    tool_call_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Wire form, leaving out fields that are absent."""
        data: Dict[str, Any] = {"role": self.role}
        if self.content is not None:
            data["content"] = self.content
        if self.tool_calls is not None:
            data["tool_calls"] = [_tool_call_to_dict(call) for call in self.tool_calls]
        if self.tool_call_id is not None:
            data["tool_call_id"] = self.tool_call_id
        return data

    @classmethod
    def from_dict(cls, data: Any) -> "Message":
        """Build a message from its wire form."""
        role = _require(data, "role", str, "message")
        raw_calls = _optional(data, "tool_calls", list, "message")
        return cls(
            role=role,
            content=_optional(data, "content", str, "message"),
            tool_calls=None if raw_calls is None else [_tool_call_from_dict(c) for c in raw_calls],
            tool_call_id=_optional(data, "tool_call_id", str, "message"),
        )


@dataclass
class Function:
    """A function the model may call, described by a JSON schema."""

    name: str
    description: str
    parameters: Any


@dataclass
class Tool:
    """A tool definition offered to the model."""

    function: Function
    type: str = "function"

    def to_dict(self) -> Dict[str, Any]:
        """Wire form of the tool definition."""
        return {
            "type": self.type,
            "function": {
                "name": self.function.name,
                "description": self.function.description,
                "parameters": self.function.parameters,
            },
        }


@dataclass
class ResponseFormat:
    """Requested format of the model's answer."""

    type: str = "json_object"


@dataclass
class ChatCompletionRequest:
    """A request to a chat completion endpoint."""

    model: str
    messages: List[Message]
    tools: Optional[List[Tool]] = None
    tool_choice: str = "auto"
    temperature: float = 0.7
    max_tokens: int = 4096
    response_format: Optional[ResponseFormat] = None

    def to_dict(self) -> Dict[str, Any]:
        """Wire form, leaving out tools and response format when absent."""
        data: Dict[str, Any] = {
            "model": self.model,
            "messages": [message.to_dict() for message in self.messages],
        }
        if self.tools is not None:
            data["tools"] = [tool.to_dict() for tool in self.tools]
        data["tool_choice"] = self.tool_choice
        data["temperature"] = self.temperature
        data["max_tokens"] = self.max_tokens
        if self.response_format is not None:
            data["response_format"] = {"type": self.response_format.type}
        return data


@dataclass
class Choice:
    """One candidate answer in a response."""

    message: Message


@dataclass
class ChatCompletionResponse:
    """A response from a chat completion endpoint."""

    choices: List[Choice] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Wire form of the response."""
        return {"choices": [{"message": choice.message.to_dict()} for choice in self.choices]}

    @classmethod
    def from_dict(cls, data: Any) -> "ChatCompletionResponse":
        """Build a response from its wire form; unknown fields are ignored."""
        raw_choices = _require(data, "choices", list, "response")
        return cls(
            choices=[
                Choice(message=Message.from_dict(_require(raw, "message", dict, "choice")))
                for raw in raw_choices
            ]
        )


@dataclass
class ApiConfig:
    """Connection settings for an API client."""

    api_key: str
    base_url: str
    model: str
    timeout_secs: float = 300
    max_retries: int = 3


class ApiClient(abc.ABC):
    """A client able to run chat completions against some provider."""

    def __init__(self, config: ApiConfig) -> None:
        self.config = config

    @abc.abstractmethod
    async def chat_completion(self, request: ChatCompletionRequest) -> ChatCompletionResponse:
        """Send the request and return the provider's answer."""