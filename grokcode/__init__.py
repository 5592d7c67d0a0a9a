"""Chat-completion clients, a response cache, file backups and error types for coding assistants."""

__version__ = "0.1.0"