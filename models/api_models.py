"""
Pydantic data models for API requests and responses.
"""
from typing import Annotated, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from utils.constants import ChatOptions

Material = Annotated[str, Field(max_length=ChatOptions.MATERIAL_MAX_LENGTH)]


class ChatRequest(BaseModel):
    """Chat request with citation preferences and optional course materials."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    question: str = Field(
        min_length=ChatOptions.QUESTION_MIN_LENGTH,
        max_length=ChatOptions.QUESTION_MAX_LENGTH,
    )
    citation_style: Literal["apa", "mla", "chicago"] = Field(
        ChatOptions.DEFAULT_CITATION_STYLE, alias="citationStyle"
    )
    citation_mode: Literal["strict", "balanced", "flexible"] = Field(
        ChatOptions.DEFAULT_CITATION_MODE, alias="citationMode"
    )
    recency: Literal["5", "10", "15", "all"] = ChatOptions.DEFAULT_RECENCY
    materials: List[Material] = Field(
        default_factory=list,
        description="Course materials the answer may draw on"
    )

    @field_validator("materials")
    @classmethod
    def limit_materials(cls, materials: List[str]) -> List[str]:
        """Cap the number of materials once every entry has been validated."""
        if len(materials) > ChatOptions.MATERIALS_MAX_ITEMS:
            raise PydanticCustomError(
                "too_long",
                "List should have at most {max_length} items",
                {"max_length": ChatOptions.MATERIALS_MAX_ITEMS},
            )
        return materials


class ChatAnswer(BaseModel):
    """Successful chat response."""
    answer: str


class ErrorResponse(BaseModel):
    """Error body returned on every failure path."""
    error: str
    message: Optional[str] = None
    details: Optional[List[str]] = None
