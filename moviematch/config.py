"""Application configuration via environment variables."""

from pathlib import Path

from pydantic_settings import BaseSettings

GEMINI_API_BASE = "https://generativelanguage.googleapis.com"


class Settings(BaseSettings):
    """MovieMatch application settings loaded from environment variables."""

    # Public URL used for links in rendered pages
    base_url: str = "http://localhost:8080"

    # Data paths
    data_dir: Path = Path("./data")
    db_path: Path = Path("./data/moviematch.db")

    # Default API keys, overridden by keys saved through the settings API
    gemini_api_key: str = ""
    omdb_api_key: str = ""

    # External services
    omdb_api_url: str = "https://www.omdbapi.com/"
    gemini_endpoints: list[str] = [
        f"{GEMINI_API_BASE}/v1beta/models/gemini-1.5-pro:generateContent",
        f"{GEMINI_API_BASE}/v1/models/gemini-pro:generateContent",
        f"{GEMINI_API_BASE}/v1beta/models/gemini-pro:generateContent",
    ]
    gemini_temperature: float = 0.2
    gemini_max_output_tokens: int = 1000
    http_timeout_seconds: float = 15.0

    # Shown when a movie has no poster
    placeholder_poster_url: str = (
        "https://images.unsplash.com/photo-1478720568477-152d9b164e26"
        "?ixlib=rb-1.2.1&auto=format&fit=crop&w=1350&q=80"
    )

    # CORS (comma-separated extra origins, in addition to localhost defaults)
    cors_origins: str = ""

    log_level: str = "INFO"

    model_config = {
        "env_prefix": "MOVIEMATCH_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


# Singleton instance
settings = Settings()
