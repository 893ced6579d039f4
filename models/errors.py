"""
Error types raised along the chat request path.
"""
from enum import Enum
from typing import List


class ValidationFailed(Exception):
    """Raised when a chat request violates one or more field constraints."""

    def __init__(self, details: List[str]):
        super().__init__("; ".join(details))
        self.details = list(details)


class CompletionErrorKind(Enum):
    """Failure categories of a completion call."""
    TIMEOUT = "timeout"
    UNREACHABLE = "unreachable"
    MISCONFIGURED = "misconfigured"
    THROTTLED = "throttled"
    BAD_MODEL_CONFIG = "bad_model_config"
    UNKNOWN = "unknown"


class CompletionError(Exception):
    """A completion call failed; `kind` says how, `message` keeps the provider's text for logs."""

    def __init__(self, kind: CompletionErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __repr__(self) -> str:
        return f"CompletionError(kind={self.kind.value!r}, message={self.message!r})"
