import pytest

from models.errors import CompletionError, CompletionErrorKind, ValidationFailed
from services.response_classifier import ResponseClassifier


def test_success_wraps_answer():
    """Given an answer, when classified, then the body is exactly the answer."""
    assert ResponseClassifier.success("MDD involves...") == (200, {"answer": "MDD involves..."})


def test_validation_failure_lists_details():
    """Given validation messages, when classified, then a 400 carries them all."""
    status_code, body = ResponseClassifier.validation_failure(ValidationFailed(["a", "b"]))
    assert status_code == 400
    assert body == {"error": "Validation failed", "details": ["a", "b"]}


@pytest.mark.parametrize("kind, expected_status, expected_error", [
    (CompletionErrorKind.TIMEOUT, 408, "Request timeout"),
    (CompletionErrorKind.UNREACHABLE, 503, "Service unavailable"),
    (CompletionErrorKind.MISCONFIGURED, 500, "Configuration error"),
    (CompletionErrorKind.THROTTLED, 429, "Rate limit exceeded"),
    (CompletionErrorKind.BAD_MODEL_CONFIG, 500, "Configuration error"),
    (CompletionErrorKind.UNKNOWN, 500, "Internal server error"),
])
def test_completion_failure_maps_kind(kind, expected_status, expected_error):
    """Given a completion failure kind, when classified, then the fixed status and title are used."""
    status_code, body = ResponseClassifier.completion_failure(CompletionError(kind, "provider internals"))
    assert status_code == expected_status
    assert body["error"] == expected_error
    assert set(body) == {"error", "message"}


@pytest.mark.parametrize("kind", list(CompletionErrorKind))
def test_completion_failure_hides_provider_message(kind):
    """Given provider text in the error, when classified, then it never reaches the body."""
    _, body = ResponseClassifier.completion_failure(CompletionError(kind, "sk-secret upstream trace"))
    assert "sk-secret" not in body["message"]


def test_configuration_errors_have_distinct_messages():
    """Given the two operator-fault kinds, when classified, then the messages tell them apart."""
    _, misconfigured = ResponseClassifier.completion_failure(CompletionError(CompletionErrorKind.MISCONFIGURED, ""))
    _, bad_model = ResponseClassifier.completion_failure(CompletionError(CompletionErrorKind.BAD_MODEL_CONFIG, ""))
    assert misconfigured["message"] == "The service is currently unavailable. Please contact support."
    assert bad_model["message"] == "Invalid AI model configuration. Please contact support."
