"""Tests for the search orchestrator and its fallback strategies."""

import pytest

from moviematch.models.analysis import AnalysisOutcome, AnalysisResult
from moviematch.models.movie import SearchResult
from moviematch.models.settings import Credentials
from moviematch.services.search_service import (
    FALLBACK_NOTICE,
    NO_RESULTS_NOTICE,
    extract_keywords,
    fallback_candidates,
    find_movies,
    keyword_pairs,
    reversed_query,
)

CREDENTIALS = Credentials(gemini_api_key="gemini-key", omdb_api_key="omdb-key")


def movie(imdb_id: str, title: str = "A Movie") -> SearchResult:
    return SearchResult(id=imdb_id, title=title, year="2000", poster=None, media_type="movie")


class FakeSearch:
    """OMDb stand-in: returns results only for the queries it was given."""

    def __init__(self, hits: dict[str, list[SearchResult]] | None = None):
        self.hits = hits or {}
        self.queries: list[str] = []
        self.keys: list[str] = []

    async def __call__(self, query: str, api_key: str) -> list[SearchResult]:
        self.queries.append(query)
        self.keys.append(api_key)
        return self.hits.get(query, [])


def analysis_succeeds(search_query: str, keywords=()):
    async def analyze(prompt, api_key):
        return AnalysisOutcome(
            success=True,
            data=AnalysisResult(search_query=search_query, keywords=list(keywords)),
        )
    return analyze


def analysis_fails(error: str = "All endpoints failed"):
    async def analyze(prompt, api_key):
        return AnalysisOutcome(success=False, error=error)
    return analyze


# ── Candidate generators ─────────────────────────────────────────────────────


class TestKeywords:
    def test_stop_words_removed(self):
        assert extract_keywords("Interstellar but funnier") == ["interstellar", "funnier"]

    def test_short_words_and_punctuation(self):
        assert extract_keywords("Alien, but set in SPACE!") == ["alien", "set", "space"]
        assert extract_keywords("Up!") == []

    def test_accented_letters_kept(self):
        assert extract_keywords("Amélie, but darker") == ["amélie", "darker"]

    def test_duplicates_kept_in_order(self):
        assert extract_keywords("war movie about war") == ["war", "movie", "about", "war"]

    def test_empty(self):
        assert extract_keywords("   ") == []


def test_keyword_pairs_in_index_order():
    assert list(keyword_pairs(["a", "b", "c"])) == ["a b", "a c", "b c"]
    assert list(keyword_pairs(["solo"])) == []


def test_reversed_query_only_for_two_words():
    assert reversed_query("Godfather modern") == "modern Godfather"
    assert reversed_query("  Godfather   modern ") == "modern Godfather"
    assert reversed_query("Godfather") is None
    assert reversed_query("The Godfather modern") is None


def test_fallback_candidates_order():
    candidates = [(c.strategy, c.query) for c in fallback_candidates("Godfather modern")]
    assert candidates == [
        ("original", "Godfather modern"),
        ("keyword", "godfather"),
        ("keyword", "modern"),
        ("keyword_pair", "godfather modern"),
        ("reversed", "modern Godfather"),
    ]


# ── Orchestration ────────────────────────────────────────────────────────────


class TestFindMovies:
    @pytest.mark.asyncio
    async def test_refined_query_wins_immediately(self):
        search = FakeSearch({"space comedy": [movie("tt1")]})
        outcome = await find_movies(
            "Interstellar but funnier", CREDENTIALS,
            analyze=analysis_succeeds("space comedy", ["space"]), search=search,
        )
        assert search.queries == ["space comedy"]
        assert outcome.strategy == "refined"
        assert [m.id for m in outcome.results] == ["tt1"]
        assert outcome.notices == []

    @pytest.mark.asyncio
    async def test_analysis_keywords_tried_before_local_fallback(self):
        search = FakeSearch()
        await find_movies(
            "Interstellar but funnier", CREDENTIALS,
            analyze=analysis_succeeds("space comedy", ["space", "comedy"]), search=search,
        )
        assert search.queries[:4] == ["space comedy", "space", "comedy", "Interstellar but funnier"]

    @pytest.mark.asyncio
    async def test_first_matching_analysis_keyword_wins(self):
        search = FakeSearch({"comedy": [movie("tt2")], "astronaut": [movie("tt3")]})
        outcome = await find_movies(
            "Interstellar but funnier", CREDENTIALS,
            analyze=analysis_succeeds("space comedy", ["space", "comedy", "astronaut"]),
            search=search,
        )
        assert search.queries == ["space comedy", "space", "comedy"]
        assert outcome.strategy == "ai_keyword"
        assert outcome.query == "comedy"
        assert outcome.analysis.search_query == "space comedy"

    @pytest.mark.asyncio
    async def test_failed_analysis_falls_back_to_raw_query(self):
        search = FakeSearch({"Heat": [movie("tt0113277", "Heat")]})
        outcome = await find_movies(
            "Heat", CREDENTIALS, analyze=analysis_fails("Missing API key"), search=search,
        )
        assert search.queries == ["Heat"]
        assert outcome.strategy == "original"
        assert outcome.analysis is None
        assert outcome.analysis_error == "Missing API key"
        assert outcome.notices == [FALLBACK_NOTICE]

    @pytest.mark.asyncio
    async def test_local_keywords_in_order(self):
        search = FakeSearch({"funnier": [movie("tt4")]})
        outcome = await find_movies(
            "Interstellar but funnier", CREDENTIALS, analyze=analysis_fails(), search=search,
        )
        assert search.queries == ["Interstellar but funnier", "interstellar", "funnier"]
        assert outcome.strategy == "keyword"

    @pytest.mark.asyncio
    async def test_pairs_stop_at_first_hit(self):
        search = FakeSearch({"alpha gamma": [movie("tt5")], "beta gamma": [movie("tt6")]})
        outcome = await find_movies(
            "alpha beta gamma", CREDENTIALS, analyze=analysis_fails(), search=search,
        )
        assert search.queries == [
            "alpha beta gamma", "alpha", "beta", "gamma", "alpha beta", "alpha gamma",
        ]
        assert outcome.strategy == "keyword_pair"
        assert [m.id for m in outcome.results] == ["tt5"]

    @pytest.mark.asyncio
    async def test_reversed_two_word_query(self):
        search = FakeSearch({"modern Godfather": [movie("tt7")]})
        outcome = await find_movies(
            "Godfather modern", CREDENTIALS, analyze=analysis_fails(), search=search,
        )
        assert search.queries[-1] == "modern Godfather"
        assert outcome.strategy == "reversed"
        assert outcome.query == "modern Godfather"

    @pytest.mark.asyncio
    async def test_exhausted_strategies_return_empty(self):
        search = FakeSearch()
        outcome = await find_movies(
            "Godfather modern", CREDENTIALS,
            analyze=analysis_succeeds("godfather remake", ["mafia"]), search=search,
        )
        assert outcome.results == []
        assert outcome.strategy is None
        assert outcome.notices == [FALLBACK_NOTICE, NO_RESULTS_NOTICE]
        assert search.queries == [
            "godfather remake", "mafia",
            "Godfather modern", "godfather", "modern", "godfather modern", "modern Godfather",
        ]

    @pytest.mark.asyncio
    async def test_credentials_routed_to_each_client(self):
        seen = {}

        async def analyze(prompt, api_key):
            seen["prompt"] = prompt
            seen["gemini"] = api_key
            return AnalysisOutcome(success=False, error="nope")

        search = FakeSearch()
        await find_movies("Heat", CREDENTIALS, analyze=analyze, search=search)
        assert seen == {"prompt": "Heat", "gemini": "gemini-key"}
        assert set(search.keys) == {"omdb-key"}
