"""MovieMatch FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from moviematch.config import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
# Keep noisy libraries at WARNING
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)

from moviematch.database import close_db, init_db
from moviematch.routers import movies, pages, search, settings as settings_router
from moviematch.services.credential_store import CredentialStore

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown lifecycle."""
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    await init_db()

    store = CredentialStore()
    credentials = await store.load()
    app.state.credential_store = store
    if not credentials.keys_set:
        logger.warning(
            "Gemini and/or OMDb API key not configured. Set MOVIEMATCH_GEMINI_API_KEY "
            "and MOVIEMATCH_OMDB_API_KEY or save them from the settings form."
        )

    yield
    await close_db()


app = FastAPI(
    title="MovieMatch",
    description="Natural-language movie search",
    version=VERSION,
    lifespan=lifespan,
)

# CORS: localhost defaults plus any extra origins from MOVIEMATCH_CORS_ORIGINS
_cors_origins = ["http://localhost:5173", "http://localhost:8080"]
if settings.cors_origins:
    _cors_origins.extend(o.strip() for o in settings.cors_origins.split(",") if o.strip())
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(search.router)
app.include_router(movies.router)
app.include_router(settings_router.router)
app.include_router(pages.router)


@app.get("/api/health")
async def health():
    return {"status": "ok", "version": VERSION}
