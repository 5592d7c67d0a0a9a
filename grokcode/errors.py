"""Error types raised throughout grokcode."""

from __future__ import annotations

from typing import Optional


class GrokError(Exception):
    """Base class for every error the package raises."""

    template = "{}"

    def __init__(self, message: object = "") -> None:
        self.message = str(message)
        super().__init__(self.template.format(self.message))

    def with_context(self, context: str) -> "GrokError":
        """Wrap this error in a ContextError, unless it already is one."""
        if isinstance(self, ContextError):
            return self
        return ContextError(context, self)

    def is_retryable(self) -> bool:
        """Whether the failed operation is worth trying again."""
        return isinstance(self, (RateLimitExceeded, OperationTimeoutError, HttpError))

    def retry_after(self) -> Optional[int]:
        """Suggested delay in seconds before a retry, if any."""
        return None


class IoError(GrokError):
    """A file or other I/O operation failed."""

    template = "IO error: {}"


class ApiError(GrokError):
    """A generic API failure."""

    template = "API error: {}"


class ApiRequestError(GrokError):
    """The API request could not be built or sent."""

    template = "API request error: {}"


class ApiResponseError(GrokError):
    """The API answered with an error status."""

    template = "{}"


class RateLimitExceeded(GrokError):
    """The API refused the request because of rate limiting."""

    template = "Rate limit exceeded: {}"

    def __init__(self, message: object = "", retry_after: Optional[int] = None) -> None:
        super().__init__(message)
        self._retry_after = retry_after

    def retry_after(self) -> Optional[int]:
        return self._retry_after


class NoSummaryGenerated(GrokError):
    """The model produced no project summary."""

    template = "No summary generated"

    def __init__(self) -> None:
        super().__init__("")


class JsonError(GrokError):
    """JSON could not be encoded or decoded."""

    template = "JSON error: {}"


class HttpError(GrokError):
    """The HTTP transport failed."""

    template = "HTTP error: {}"

    def retry_after(self) -> Optional[int]:
        return 2


class ConfigError(GrokError):
    """The configuration is missing or invalid."""

    template = "Configuration error: {}"


class ToolExecutionError(GrokError):
    """A tool failed while running."""

    template = "Tool execution error: {}"


class InvalidInputError(GrokError):
    """An argument was not acceptable."""

    template = "Invalid input: {}"


class MissingFileError(GrokError):
    """A required file does not exist."""

    template = "File not found: {}"


class PermissionDeniedError(GrokError):
    """An operation was not permitted."""

    template = "Permission denied: {}"


class ProcessExecutionError(GrokError):
    """A process could not be run."""

    template = "Process execution error: {}"


class OperationTimeoutError(GrokError):
    """An operation took too long."""

    template = "Operation timed out: {}"

    def retry_after(self) -> Optional[int]:
        return 5


class ContextError(GrokError):
    """An error carrying a description of what was being done."""

    template = "{}"

    def __init__(self, context: str, source: GrokError) -> None:
        super().__init__(context)
        self.context = str(context)
        self.source = source
        self.__cause__ = source