"""Pydantic models for OMDb search results and detail records."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

# OMDb marks missing values with this literal string
NOT_AVAILABLE = "N/A"


def _none_if_missing(value):
    if value is None or value == "" or value == NOT_AVAILABLE:
        return None
    return value


class SearchResult(BaseModel):
    """One entry of an OMDb ``Search`` array."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(validation_alias="imdbID")
    title: str = Field(validation_alias="Title")
    year: str = Field(default="", validation_alias="Year")
    poster: str | None = Field(default=None, validation_alias="Poster")
    media_type: str = Field(default="movie", validation_alias="Type")

    @field_validator("poster", mode="before")
    @classmethod
    def _poster_sentinel(cls, value):
        return _none_if_missing(value)


class Rating(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    source: str = Field(validation_alias="Source")
    value: str = Field(validation_alias="Value")


class DetailRecord(SearchResult):
    """Full OMDb record for a single title (``plot=full``)."""

    plot: str | None = Field(default=None, validation_alias="Plot")
    genre: str | None = Field(default=None, validation_alias="Genre")
    director: str | None = Field(default=None, validation_alias="Director")
    writer: str | None = Field(default=None, validation_alias="Writer")
    actors: str | None = Field(default=None, validation_alias="Actors")
    runtime: str | None = Field(default=None, validation_alias="Runtime")
    rating: str | None = Field(default=None, validation_alias="imdbRating")
    rated: str | None = Field(default=None, validation_alias="Rated")
    released: str | None = Field(default=None, validation_alias="Released")
    awards: str | None = Field(default=None, validation_alias="Awards")
    language: str | None = Field(default=None, validation_alias="Language")
    country: str | None = Field(default=None, validation_alias="Country")
    website: str | None = Field(default=None, validation_alias="Website")
    ratings: list[Rating] = Field(default_factory=list, validation_alias="Ratings")

    @field_validator(
        "plot", "genre", "director", "writer", "actors", "runtime", "rating",
        "rated", "released", "awards", "language", "country", "website",
        mode="before",
    )
    @classmethod
    def _missing_fields(cls, value):
        return _none_if_missing(value)

    @property
    def genre_list(self) -> list[str]:
        return _split_names(self.genre)

    @property
    def actor_list(self) -> list[str]:
        return _split_names(self.actors)


def _split_names(value: str | None) -> list[str]:
    """Split an OMDb comma-joined field into trimmed names."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]
