"""Movie search and details from the OMDb API.

Both calls swallow every failure: a transport error, a bad status, a
malformed payload and a ``Response: "False"`` answer all look the same to
callers (empty list / None).
"""

import logging

import httpx

from moviematch.config import settings
from moviematch.models.movie import DetailRecord, SearchResult

logger = logging.getLogger(__name__)


async def search_movies(query: str, api_key: str) -> list[SearchResult]:
    """Search OMDb by title. Returns an empty list when nothing is found."""
    if not query or not query.strip():
        logger.debug("Skipping OMDb search for empty query")
        return []

    try:
        async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as client:
            resp = await client.get(
                settings.omdb_api_url,
                params={"s": query.strip(), "apikey": api_key, "r": "json"},
            )
            if resp.status_code != 200:
                logger.warning("OMDb search failed with status %d", resp.status_code)
                return []

            data = resp.json()
            if data.get("Response") == "False":
                logger.info("OMDb returned no results for %r: %s", query, data.get("Error", "Unknown error"))
                return []

            items = data.get("Search")
            if not isinstance(items, list):
                logger.warning("OMDb search response has no Search array")
                return []

            return [SearchResult.model_validate(item) for item in items]
    except Exception as e:
        logger.warning("OMDb search error for %r: %s", query, e)
        return []


async def get_movie_details(imdb_id: str, api_key: str) -> DetailRecord | None:
    """Fetch the full OMDb record for one IMDb id."""
    if not imdb_id or not imdb_id.strip():
        logger.debug("Skipping OMDb lookup for empty id")
        return None

    try:
        async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as client:
            resp = await client.get(
                settings.omdb_api_url,
                params={"i": imdb_id.strip(), "plot": "full", "apikey": api_key, "r": "json"},
            )
            if resp.status_code != 200:
                logger.warning("OMDb details failed with status %d", resp.status_code)
                return None

            data = resp.json()
            if data.get("Response") == "False":
                logger.info("OMDb returned no details for %s: %s", imdb_id, data.get("Error", "Unknown error"))
                return None

            return DetailRecord.model_validate(data)
    except Exception as e:
        logger.warning("OMDb details error for %s: %s", imdb_id, e)
        return None
