"""Pydantic models for Gemini prompt analysis."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AnalysisResult(BaseModel):
    """Structured search hint extracted from a free-text movie description.

    Only ``searchQuery`` is required. The model's other fields are loosely
    shaped in practice, so they are coerced rather than rejected.
    """

    model_config = ConfigDict(populate_by_name=True)

    genres: list[str] = Field(default_factory=list)
    era: str | None = None
    mood: str | None = None
    keywords: list[str] = Field(default_factory=list)
    search_query: str = Field(min_length=1, validation_alias="searchQuery")

    @field_validator("genres", "keywords", mode="before")
    @classmethod
    def _as_string_list(cls, value):
        if isinstance(value, str):
            return [value] if value.strip() else []
        if not isinstance(value, (list, tuple)):
            return []
        return [str(item) for item in value if item is not None and not isinstance(item, (dict, list))]

    @field_validator("era", "mood", mode="before")
    @classmethod
    def _as_optional_string(cls, value):
        if isinstance(value, str):
            return value or None
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        if isinstance(value, (list, tuple)):
            parts = [item for item in value if isinstance(item, str) and item]
            return ", ".join(parts) or None
        return None

    @field_validator("search_query", mode="before")
    @classmethod
    def _query_as_string(cls, value):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class AnalysisOutcome(BaseModel):
    success: bool
    data: AnalysisResult | None = None
    error: str | None = None
