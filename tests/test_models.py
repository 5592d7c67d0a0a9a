import pytest

from grokcode.api.models import (
    ApiClient,
    ApiConfig,
    ChatCompletionRequest,
    ChatCompletionResponse,
    Choice,
    Function,
    FunctionCall,
    Message,
    ResponseFormat,
    Tool,
    ToolCall,
)
from grokcode.errors import JsonError


def test_message_to_dict_omits_absent_fields():
    assert Message(role="user", content="Hello").to_dict() == {"role": "user", "content": "Hello"}


def test_message_with_tool_calls_round_trips():
    message = Message(
        role="assistant",
        tool_calls=[
            ToolCall(
                id="call_123",
                function=FunctionCall(name="read_file", arguments='{"path": "test.txt"}'),
            )
        ],
    )
    data = message.to_dict()
    assert "content" not in data
    assert data["tool_calls"][0]["type"] == "function"
    assert Message.from_dict(data) == message


def test_tool_message_round_trips():
    message = Message(role="tool", content="file body", tool_call_id="call_123")
    assert Message.from_dict(message.to_dict()) == message


def test_message_from_dict_accepts_null_content():
    message = Message.from_dict({"role": "assistant", "content": None})
    assert message.content is None
    assert message.tool_calls is None


def test_message_from_dict_missing_role():
    with pytest.raises(JsonError):
        Message.from_dict({"content": "Hello"})


def test_message_from_dict_bad_tool_call():
    with pytest.raises(JsonError):
        Message.from_dict({"role": "assistant", "tool_calls": [{"id": "x"}]})


def test_tool_to_dict():
    tool = Tool(
        function=Function(name="read_file", description="Read a file", parameters={"type": "object"})
    )
    assert tool.to_dict() == {
        "type": "function",
        "function": {
            "name": "read_file",
            "description": "Read a file",
            "parameters": {"type": "object"},
        },
    }


def test_request_to_dict_omits_optional_parts():
    request = ChatCompletionRequest(
        model="gpt-4",
        messages=[Message(role="user", content="Hello")],
        tool_choice="auto",
        temperature=0.7,
        max_tokens=100,
    )
    data = request.to_dict()
    assert "tools" not in data
    assert "response_format" not in data
    assert data["messages"] == [{"role": "user", "content": "Hello"}]
    assert data["max_tokens"] == 100
    assert data["tool_choice"] == "auto"


def test_request_to_dict_includes_tools_and_format():
    tool = Tool(function=Function(name="f", description="d", parameters={"type": "object"}))
    request = ChatCompletionRequest(
        model="gpt-4",
        messages=[],
        tools=[tool],
        response_format=ResponseFormat(type="json_object"),
    )
    data = request.to_dict()
    assert data["tools"] == [tool.to_dict()]
    assert data["response_format"] == {"type": "json_object"}


def test_response_from_dict_ignores_extra_fields():
    response = ChatCompletionResponse.from_dict(
        {
            "id": "chatcmpl-123",
            "choices": [
                {"index": 0, "message": {"role": "assistant", "content": "Hi"}, "finish_reason": "stop"}
            ],
        }
    )
    assert response.choices == [Choice(message=Message(role="assistant", content="Hi"))]


def test_response_round_trips():
    response = ChatCompletionResponse(
        choices=[Choice(message=Message(role="assistant", content="Done"))]
    )
    assert ChatCompletionResponse.from_dict(response.to_dict()) == response


def test_response_from_dict_empty_choices():
    assert ChatCompletionResponse.from_dict({"choices": []}).choices == []


@pytest.mark.parametrize("data", [{}, {"choices": "nope"}, {"choices": [{}]}, "text"])
def test_response_from_dict_rejects_malformed(data):
    with pytest.raises(JsonError):
        ChatCompletionResponse.from_dict(data)


def test_api_client_is_abstract():
    config = ApiConfig(api_key="placeholder", base_url="https://api.example.com", model="m")
    with pytest.raises(TypeError):
        ApiClient(config)


@pytest.mark.asyncio
async def test_api_client_subclass_keeps_config():
    class Echo(ApiClient):
        async def chat_completion(self, request):
            return ChatCompletionResponse(choices=[Choice(message=request.messages[-1])])

    config = ApiConfig(api_key="placeholder", base_url="https://api.example.com", model="m")
    client = Echo(config)
    response = await client.chat_completion(
        ChatCompletionRequest(model="m", messages=[Message(role="user", content="ping")])
    )
    assert client.config is config
    assert response.choices[0].message.content == "ping"