"""
Models package exports.
"""
from models.api_models import ChatRequest, ChatAnswer, ErrorResponse
from models.errors import ValidationFailed, CompletionError, CompletionErrorKind

__all__ = [
    'ChatRequest',
    'ChatAnswer',
    'ErrorResponse',
    'ValidationFailed',
    'CompletionError',
    'CompletionErrorKind'
]
