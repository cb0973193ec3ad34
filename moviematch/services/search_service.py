"""Movie search with progressively looser fallback queries.

The order of attempts is:

1. the Gemini-refined ``searchQuery``
2. each Gemini keyword
3. the raw query, each local keyword, each keyword pair, and for two-word
   queries the words reversed

Candidates come from generators, so a query is only built once every earlier
one has come back empty. The first non-empty result list wins.
"""

import logging
import re
from collections.abc import Awaitable, Callable, Iterable, Iterator

from moviematch.models.analysis import AnalysisOutcome, AnalysisResult
from moviematch.models.movie import SearchResult
from moviematch.models.search import SearchCandidate, SearchOutcome
from moviematch.models.settings import Credentials
from moviematch.services.gemini_service import analyze_movie_prompt
from moviematch.services.omdb_service import search_movies

logger = logging.getLogger(__name__)

SearchFn = Callable[[str, str], Awaitable[list[SearchResult]]]
AnalyzeFn = Callable[[str, str], Awaitable[AnalysisOutcome]]

STOP_WORDS = frozenset({
    "a", "an", "the", "and", "but", "or", "in", "on", "at", "to", "for",
    "with", "like", "than",
})
MIN_KEYWORD_LENGTH = 3

FALLBACK_NOTICE = "Using smart search to find movies"
NO_RESULTS_NOTICE = "No movies found. Try a different description."

_PUNCTUATION_RE = re.compile(r"[^\w\s]")


# ── Candidate generators ─────────────────────────────────────────────────────

def extract_keywords(query: str) -> list[str]:
    """Lowercased words of the query minus punctuation, short words and stop words."""
    keywords = []
    for word in query.lower().split():
        word = _PUNCTUATION_RE.sub("", word)
        if len(word) < MIN_KEYWORD_LENGTH or word in STOP_WORDS:
            continue
        keywords.append(word)
    return keywords


def keyword_pairs(keywords: list[str]) -> Iterator[str]:
    """Every pair (i < j) in index order, joined by a space."""
    for i in range(len(keywords)):
        for j in range(i + 1, len(keywords)):
            yield f"{keywords[i]} {keywords[j]}"


def reversed_query(query: str) -> str | None:
    """The two words swapped, or None unless the query is exactly two words."""
    words = query.split()
    if len(words) != 2:
        return None
    return f"{words[1]} {words[0]}"


def analysis_candidates(analysis: AnalysisResult) -> Iterator[SearchCandidate]:
    yield SearchCandidate("refined", analysis.search_query)
    for keyword in analysis.keywords:
        yield SearchCandidate("ai_keyword", keyword)


def fallback_candidates(query: str) -> Iterator[SearchCandidate]:
    yield SearchCandidate("original", query)

    keywords = extract_keywords(query)
    logger.debug("Extracted keywords: %s", keywords)
    for keyword in keywords:
        yield SearchCandidate("keyword", keyword)

    if len(keywords) >= 2:
        for pair in keyword_pairs(keywords):
            yield SearchCandidate("keyword_pair", pair)

    swapped = reversed_query(query)
    if swapped:
        yield SearchCandidate("reversed", swapped)


# ── Orchestration ────────────────────────────────────────────────────────────

async def first_match(
    candidates: Iterable[SearchCandidate],
    search: SearchFn,
    api_key: str,
) -> tuple[SearchCandidate, list[SearchResult]] | None:
    """Search each candidate in turn, stopping at the first non-empty result."""
    for candidate in candidates:
        logger.info("Trying %s query: %r", candidate.strategy, candidate.query)
        results = await search(candidate.query, api_key)
        if results:
            return candidate, results
    return None


async def find_movies(
    query: str,
    credentials: Credentials,
    *,
    analyze: AnalyzeFn = analyze_movie_prompt,
    search: SearchFn = search_movies,
) -> SearchOutcome:
    """Run the full search sequence for one user query."""
    outcome = SearchOutcome()

    analysis = await analyze(query, credentials.gemini_api_key)
    if analysis.success and analysis.data:
        outcome.analysis = analysis.data
        match = await first_match(
            analysis_candidates(analysis.data), search, credentials.omdb_api_key
        )
        if match:
            return _matched(outcome, match)
    else:
        outcome.analysis_error = analysis.error
        logger.info("Prompt analysis unavailable: %s", analysis.error)

    logger.info("Falling back to multi-strategy search for %r", query)
    outcome.notices.append(FALLBACK_NOTICE)

    match = await first_match(fallback_candidates(query), search, credentials.omdb_api_key)
    if match:
        return _matched(outcome, match)

    outcome.notices.append(NO_RESULTS_NOTICE)
    return outcome


def _matched(
    outcome: SearchOutcome,
    match: tuple[SearchCandidate, list[SearchResult]],
) -> SearchOutcome:
    candidate, results = match
    outcome.results = results
    outcome.strategy = candidate.strategy
    outcome.query = candidate.query
    logger.info("Found %d result(s) via %s query %r", len(results), candidate.strategy, candidate.query)
    return outcome
