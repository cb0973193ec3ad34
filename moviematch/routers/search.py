"""Search route: AI-assisted movie search with fallbacks."""

from fastapi import APIRouter, Depends

from moviematch.models.search import SearchResponse
from moviematch.services.credential_store import CredentialStore, get_credential_store
from moviematch.services.search_service import find_movies

router = APIRouter(prefix="/api/search", tags=["search"])


@router.get("", response_model=SearchResponse)
async def search(
    q: str = "",
    request_id: int | None = None,
    store: CredentialStore = Depends(get_credential_store),
):
    """Find movies matching a natural-language description.

    - q: free-text description, e.g. "Interstellar but funnier"
    - request_id: echoed back so clients can drop responses to superseded searches
    """
    credentials = store.get()
    query = q.strip()

    if not query:
        return SearchResponse(
            request_id=request_id,
            query=q,
            state="empty",
            results=[],
            notices=[],
            keys_set=credentials.keys_set,
        )

    outcome = await find_movies(query, credentials)
    return SearchResponse(
        request_id=request_id,
        query=query,
        state="results" if outcome.results else "empty",
        strategy=outcome.strategy,
        matched_query=outcome.query,
        results=outcome.results,
        notices=outcome.notices,
        analysis_error=outcome.analysis_error,
        keys_set=credentials.keys_set,
    )
