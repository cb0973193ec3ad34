"""Application settings routes: API key management."""

from fastapi import APIRouter, Depends, HTTPException

from moviematch.config import settings
from moviematch.models.settings import ApiKeyUpdate
from moviematch.services.credential_store import (
    CredentialStore,
    get_credential_store,
    resolve_key_name,
)

router = APIRouter(prefix="/api/settings", tags=["settings"])


@router.get("")
async def get_settings(store: CredentialStore = Depends(get_credential_store)):
    """Get application settings (secrets redacted)."""
    credentials = store.get()
    return {
        "base_url": settings.base_url,
        "omdb_api_url": settings.omdb_api_url,
        "gemini_endpoints": settings.gemini_endpoints,
        "has_gemini_api_key": bool(credentials.gemini_api_key),
        "has_omdb_api_key": bool(credentials.omdb_api_key),
        "keys_set": credentials.keys_set,
    }


@router.put("/api-keys")
async def save_api_key(body: ApiKeyUpdate, store: CredentialStore = Depends(get_credential_store)):
    """Save an API key (overrides the configured default)."""
    try:
        key_name = resolve_key_name(body.key_name)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not body.value.strip():
        raise HTTPException(status_code=400, detail="Value cannot be empty")

    credentials = await store.set(key_name, body.value.strip())
    return {"message": f"{key_name} saved", "keys_set": credentials.keys_set}


@router.delete("/api-keys/{key_name}")
async def delete_api_key(key_name: str, store: CredentialStore = Depends(get_credential_store)):
    """Remove a saved API key (falls back to the configured default)."""
    try:
        key_name = resolve_key_name(key_name)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    credentials = await store.clear(key_name)
    return {"message": f"{key_name} removed", "keys_set": credentials.keys_set}
