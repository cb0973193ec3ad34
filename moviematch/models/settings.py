"""Pydantic models for stored API credentials."""

from pydantic import BaseModel


class Credentials(BaseModel):
    gemini_api_key: str = ""
    omdb_api_key: str = ""

    @property
    def keys_set(self) -> bool:
        """Both keys present; searches cannot succeed otherwise."""
        return bool(self.gemini_api_key and self.omdb_api_key)


class ApiKeyUpdate(BaseModel):
    key_name: str
    value: str
