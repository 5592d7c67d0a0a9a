# grokcode

Building blocks for an AI coding assistant:

- async chat-completion clients for xAI (Grok), OpenAI and Anthropic, all
  taking and returning the same OpenAI-style request and response types
  (`grokcode.api`)
- an in-memory, thread-safe response cache with expiry and eviction
  (`grokcode.cache`)
- timestamped file backups with a retention period (`grokcode.backup`)
- one family of exceptions, each able to say whether it is worth retrying
  (`grokcode.errors`)

## What it does not do

This is a library only. It has no command-line program, no conversation loop
that drives a model, no tools for the model to run (reading files, running
commands, searching code, git), no terminal interface and no storage for API
keys. You pass keys in through `ApiConfig` yourself.

## Installation

```
pip install grokcode
```

To run the tests:

```
pip install "grokcode[test]"
pytest
```

## Talking to a provider

`grokcode.api.factory.create_client(provider, config)` builds a client by
provider name: `"xai"` (`XaiClient`), `"openai"` (`OpenAiClient`) or
`"anthropic"` (`AnthropicClient`). Any other name raises `ConfigError`.

```python
import asyncio

from grokcode.api.factory import create_client
from grokcode.api.models import ApiConfig, ChatCompletionRequest, Message


async def ask() -> None:
    config = ApiConfig(
        api_key="placeholder",
        base_url="https://api.x.ai/v1",
        model="grok-2-latest",
        timeout_secs=300,
        max_retries=3,
    )
    client = create_client("xai", config)
    request = ChatCompletionRequest(
        model=config.model,
        messages=[Message(role="user", content="Hello")],
        tool_choice="auto",
        temperature=0.7,
        max_tokens=100,
    )
    response = await client.chat_completion(request)
    print(response.choices[0].message.content)


asyncio.run(ask())
```

Every client posts with a timeout of `config.timeout_secs` seconds. The client
classes can also be built directly, and accept an optional `http_client`
(an `httpx.AsyncClient`) to share one connection pool; without it each call
opens and closes its own.

xAI and OpenAI requests go to `{base_url}/chat/completions` with a
`Bearer` authorization header. Anthropic requests go to `{base_url}/messages`
with `x-api-key` and `anthropic-version: 2023-06-01` headers.

### Data types (`grokcode.api.models`)

- `Message` (role, content, tool_calls, tool_call_id), with `to_dict()` and
  `Message.from_dict()`; absent fields are left out of the wire form.
- `Tool` and `Function` describe a tool offered to the model.
- When the model asks for a tool, the reply message carries `ToolCall`
  objects, each holding a `FunctionCall` with the tool's name and its
  arguments as a JSON string.
- `ChatCompletionRequest.to_dict()` gives the request body;
  `ResponseFormat` may ask for a `json_object` answer.
- `ChatCompletionResponse.from_dict()` parses a reply into `Choice` objects,
  ignoring unknown fields; `to_dict()` gives it back.
- `ApiClient` is the abstract base every client implements.

### Anthropic conversion

`AnthropicClient.convert_request()` and `convert_response()` translate
between the shared types and Anthropic's messages format:

- the system message becomes the `system` field; only user and assistant
  messages are kept
- tool definitions become tools with an `input_schema`
- text blocks in the reply are joined with newlines into the content, and
  `tool_use` blocks come back as ordinary tool calls

## Errors

Every failure raises a subclass of `grokcode.errors.GrokError`:

- A 429 status from xAI or OpenAI raises `RateLimitExceeded`, with
  `retry_after()` returning 60.
- Any other non-success status from xAI or OpenAI raises `ApiResponseError`,
  whose message holds the status and the body.
- Anthropic reports every non-success status as `RateLimitExceeded`, and an
  API key containing unprintable characters as `ConfigError`.
- Transport failures, timeouts included, and replies that are not valid JSON
  or lack the expected fields raise `HttpError`.

Other ways to use the errors:

- `is_retryable()` is true for `RateLimitExceeded`, `OperationTimeoutError`
  and `HttpError`.
- `retry_after()` gives the rate limit's own delay, 5 for timeouts, 2 for
  HTTP errors and `None` otherwise.
- `with_context("...")` wraps an error in a `ContextError` whose `source` is
  the original. A context error is never wrapped twice.

## Response cache

```python
from grokcode.cache import ResponseCache

cache = ResponseCache(100, 300)  # 100 entries, 5 minute lifetime
key = ResponseCache.generate_key("explain main.py", ["file contents"])
cache.put(key, '{"choices": []}')
cache.get(key)        # the stored string, or None once expired
cache.stats()         # CacheStats(total_entries=..., expired_entries=..., active_entries=...)
cache.clear()
```

The key is the SHA-256 hex digest of the message followed by each tool
result, with a `|` in front of each result.

A successful `get` counts a read and refreshes the entry's time, so an entry
expires only after going unread for the whole lifetime. When the cache is
full, `put` drops the entry with the fewest reads, and among those the one
least recently touched. A custom `clock` callable may be passed for testing.

## Backups

```python
from pathlib import Path

from grokcode.backup import BackupManager

manager = BackupManager(7)
backup = manager.create_backup(Path("src/main.py"))  # src/main.py.YYYYmmdd_HHMMSS.bak
for info in manager.list_backups(Path("src/main.py")):
    print(info.path, info.created, info.size)
```

- `create_backup` raises `MissingFileError` if the file does not exist.
- `backup_path_for` gives the path a backup taken now would use.
- `list_backups` returns `BackupInfo` entries, newest first.
- `cleanup_old_backups` deletes backups older than the retention period and
  returns their paths.

Retention is set like this:

- With no argument, the retention period comes from
  `GROK_BACKUP_RETENTION_DAYS`, and defaults to 7 days.
- A retention of 0 keeps every backup.
- Otherwise, each new backup removes copies of that file older than the
  retention period.

## Debug output

Set `DEBUG_API` in the environment to print request and response details,
and backup cleanup counts, to standard error.