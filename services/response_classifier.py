"""
Maps chat outcomes to HTTP status codes and fixed-shape JSON bodies.
"""
from fastapi import status

from models.api_models import ChatAnswer, ErrorResponse
from models.errors import CompletionError, CompletionErrorKind, ValidationFailed


class ResponseClassifier:
    """Translates validation and completion outcomes into responses."""

    FAILURES = {
        CompletionErrorKind.TIMEOUT: (
            status.HTTP_408_REQUEST_TIMEOUT,
            "Request timeout",
            "The request took too long to process. Please try again.",
        ),
        CompletionErrorKind.UNREACHABLE: (
            status.HTTP_503_SERVICE_UNAVAILABLE,
            "Service unavailable",
            "Unable to connect to AI service. Please try again later.",
        ),
        CompletionErrorKind.MISCONFIGURED: (
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Configuration error",
            "The service is currently unavailable. Please contact support.",
        ),
        CompletionErrorKind.THROTTLED: (
            status.HTTP_429_TOO_MANY_REQUESTS,
            "Rate limit exceeded",
            "Too many requests. Please try again later.",
        ),
        CompletionErrorKind.BAD_MODEL_CONFIG: (
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Configuration error",
            "Invalid AI model configuration. Please contact support.",
        ),
        CompletionErrorKind.UNKNOWN: (
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal server error",
            "Something went wrong while generating an answer. Please try again.",
        ),
    }

    @staticmethod
    def success(answer: str) -> tuple[int, dict]:
        """Response for a generated answer."""
        return status.HTTP_200_OK, ChatAnswer(answer=answer).model_dump()

    @staticmethod
    def validation_failure(error: ValidationFailed) -> tuple[int, dict]:
        """Response for a request that failed validation."""
        body = ErrorResponse(error="Validation failed", details=error.details)
        return status.HTTP_400_BAD_REQUEST, body.model_dump(exclude_none=True)

    @classmethod
    def completion_failure(cls, error: CompletionError) -> tuple[int, dict]:
        """Response for a failed completion call. Provider text is never included."""
        status_code, title, message = cls.FAILURES.get(
            error.kind, cls.FAILURES[CompletionErrorKind.UNKNOWN]
        )
        body = ErrorResponse(error=title, message=message)
        return status_code, body.model_dump(exclude_none=True)
