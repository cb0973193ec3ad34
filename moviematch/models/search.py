"""Models for search orchestration and the search API."""

from dataclasses import dataclass, field
from typing import Literal

from pydantic import BaseModel

from moviematch.models.analysis import AnalysisResult
from moviematch.models.movie import SearchResult


@dataclass(frozen=True)
class SearchCandidate:
    """A single query to try against OMDb, tagged with the strategy that produced it."""

    strategy: str
    query: str


@dataclass
class SearchOutcome:
    results: list[SearchResult] = field(default_factory=list)
    strategy: str | None = None
    query: str | None = None
    analysis: AnalysisResult | None = None
    analysis_error: str | None = None
    notices: list[str] = field(default_factory=list)


class SearchResponse(BaseModel):
    request_id: int | None = None
    query: str
    state: Literal["results", "empty"]
    strategy: str | None = None
    matched_query: str | None = None
    results: list[SearchResult]
    notices: list[str]
    analysis_error: str | None = None
    keys_set: bool
