"""Movie detail routes."""

from fastapi import APIRouter, Depends, HTTPException

from moviematch.models.movie import DetailRecord
from moviematch.services.credential_store import CredentialStore, get_credential_store
from moviematch.services.omdb_service import get_movie_details

router = APIRouter(prefix="/api/movies", tags=["movies"])


@router.get("/{imdb_id}", response_model=DetailRecord)
async def movie_details(imdb_id: str, store: CredentialStore = Depends(get_credential_store)):
    """Full OMDb record for one title. Not cached; every call hits OMDb."""
    details = await get_movie_details(imdb_id, store.get().omdb_api_key)
    if details is None:
        raise HTTPException(status_code=404, detail="Movie not found")
    return details
