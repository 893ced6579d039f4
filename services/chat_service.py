"""
Chat service containing request validation and system prompt construction.
"""
from typing import Any

from pydantic import ValidationError

from models.api_models import ChatRequest
from models.errors import ValidationFailed
from utils.constants import (
    SYSTEM_PROMPT,
    RECENCY_UNLIMITED,
    RECENCY_WINDOW,
    MATERIALS_HEADING,
    MATERIALS_ITEM,
    NO_MATERIALS,
    ChatOptions,
    ValidationMessages,
)


class ChatService:
    """Service for handling chat request logic."""

    # Field-level messages for any failure on enumerated options
    OPTION_MESSAGES = {
        'citationStyle': ValidationMessages.CITATION_STYLE,
        'citationMode': ValidationMessages.CITATION_MODE,
        'recency': ValidationMessages.RECENCY,
    }

    QUESTION_MESSAGES = {
        'missing': ValidationMessages.QUESTION_REQUIRED,
        'string_type': ValidationMessages.QUESTION_TYPE,
        'string_too_short': ValidationMessages.QUESTION_TOO_SHORT,
        'string_too_long': ValidationMessages.QUESTION_TOO_LONG,
    }

    @staticmethod
    def validate_request(payload: Any) -> ChatRequest:
        """
        Validate a decoded request body and apply defaults.

        Every violation is collected before failing.

        Args:
            payload: Decoded JSON body

        Returns:
            Fully-populated ChatRequest

        Raises:
            ValidationFailed: With one message per violation, in field order
        """
        if not isinstance(payload, dict):
            raise ValidationFailed([ValidationMessages.BODY_NOT_OBJECT])

        try:
            return ChatRequest.model_validate(payload)
        except ValidationError as e:
            errors = e.errors()
            details = [ChatService._describe_error(error) for error in errors]

            # The item-count check only runs when every entry is valid
            if (ChatService._too_many_materials(payload)
                    and ValidationMessages.MATERIALS_TOO_MANY not in details):
                positions = [
                    index for index, error in enumerate(errors)
                    if error.get('loc', ())[:1] == ('materials',)
                ]
                insert_at = positions[-1] + 1 if positions else len(details)
                details.insert(insert_at, ValidationMessages.MATERIALS_TOO_MANY)

            raise ValidationFailed(details) from e

    @staticmethod
    def build_system_prompt(request: ChatRequest) -> str:
        """Render the system instruction for a validated request."""
        return SYSTEM_PROMPT.format(
            citation_style=request.citation_style,
            citation_mode=request.citation_mode,
            recency_preference=ChatService._format_recency(request.recency),
            course_materials=ChatService._format_materials(request.materials),
        )

    @staticmethod
    def _format_recency(recency: str) -> str:
        """Format the recency preference line."""
        if recency == "all":
            return RECENCY_UNLIMITED
        return RECENCY_WINDOW.format(years=recency)

    @staticmethod
    def _format_materials(materials: list[str]) -> str:
        """Format course materials as a bulleted list."""
        if not materials:
            return NO_MATERIALS
        lines = [MATERIALS_HEADING]
        lines.extend(MATERIALS_ITEM.format(material=material) for material in materials)
        return "\n".join(lines)

    @staticmethod
    def _too_many_materials(payload: dict) -> bool:
        """Whether the raw materials list is longer than allowed."""
        materials = payload.get('materials')
        return isinstance(materials, list) and len(materials) > ChatOptions.MATERIALS_MAX_ITEMS

    @staticmethod
    def _describe_error(error: dict) -> str:
        """Translate one pydantic error into a user-facing message."""
        loc = error.get('loc', ())
        error_type = error.get('type', '')
        field = loc[0] if loc else None

        if error_type == 'extra_forbidden':
            return ValidationMessages.UNKNOWN_FIELD.format(field=field)

        if field == 'question':
            return ChatService.QUESTION_MESSAGES.get(error_type, ValidationMessages.QUESTION_TYPE)

        if field in ChatService.OPTION_MESSAGES:
            return ChatService.OPTION_MESSAGES[field]

        if field == 'materials':
            # Item errors carry the list index as a second location element
            if len(loc) > 1:
                if error_type == 'string_too_long':
                    return ValidationMessages.MATERIAL_TOO_LONG
                return ValidationMessages.MATERIAL_TYPE
            if error_type == 'too_long':
                return ValidationMessages.MATERIALS_TOO_MANY
            return ValidationMessages.MATERIALS_TYPE

        return f"{field}: {error.get('msg', 'Validation error')}"
