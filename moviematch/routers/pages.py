"""Server-rendered pages: search home, result fragments and the movie detail view."""

import html
from urllib.parse import quote

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from moviematch.config import settings
from moviematch.models.movie import DetailRecord, SearchResult
from moviematch.services.credential_store import CredentialStore, get_credential_store
from moviematch.services.omdb_service import get_movie_details
from moviematch.services.search_service import find_movies

router = APIRouter(tags=["pages"])

IDLE_HINT = (
    'Try searching for something like "Interstellar but funnier" or '
    '"Something like The Godfather but set in modern times"'
)
SKELETON_CARDS = 8


# ── Routes ───────────────────────────────────────────────────────────────────

@router.get("/", response_class=HTMLResponse)
async def home_page(q: str = "", store: CredentialStore = Depends(get_credential_store)):
    """Search page. With ``?q=`` the results are rendered in place."""
    credentials = store.get()
    query = q.strip()
    if query:
        outcome = await find_movies(query, credentials)
        results_html = render_results(query, outcome.results, outcome.notices, outcome.analysis_error)
    else:
        results_html = f'<p class="hint">{_esc(IDLE_HINT)}</p>'
    return HTMLResponse(content=render_home_page(query, results_html, credentials.keys_set))


@router.get("/fragments/results", response_class=HTMLResponse)
async def results_fragment(q: str = "", store: CredentialStore = Depends(get_credential_store)):
    """Results grid or empty state, swapped into the home page by its script."""
    query = q.strip()
    if not query:
        return HTMLResponse(content=f'<p class="hint">{_esc(IDLE_HINT)}</p>')
    outcome = await find_movies(query, store.get())
    return HTMLResponse(content=render_results(query, outcome.results, outcome.notices, outcome.analysis_error))


@router.get("/movie/{imdb_id}", response_class=HTMLResponse)
async def movie_page(imdb_id: str):
    """Detail page shell; shows a skeleton until the detail fragment loads."""
    return HTMLResponse(content=render_movie_page(imdb_id))


@router.get("/fragments/movie/{imdb_id}", response_class=HTMLResponse)
async def movie_fragment(imdb_id: str, store: CredentialStore = Depends(get_credential_store)):
    details = await get_movie_details(imdb_id, store.get().omdb_api_key)
    if details is None:
        return HTMLResponse(content=render_not_found(), status_code=404)
    return HTMLResponse(content=render_movie_details(details))


# ── HTML Templates ───────────────────────────────────────────────────────────

def poster_url(movie: SearchResult) -> str:
    return movie.poster or settings.placeholder_poster_url


def render_movie_card(movie: SearchResult) -> str:
    return f"""<a class="card" href="/movie/{quote(movie.id)}">
    <img src="{_esc(poster_url(movie))}" alt="{_esc(movie.title)}" loading="lazy">
    <div class="card-body">
        <h3>{_esc(movie.title)}</h3>
        <span class="meta">{_esc(movie.year)} &middot; {_esc(movie.media_type)}</span>
    </div>
</a>"""


def render_skeleton_grid(count: int = SKELETON_CARDS) -> str:
    cards = '<div class="card skeleton"><div class="poster"></div><div class="line"></div></div>' * count
    return f'<div class="grid">{cards}</div>'


def render_notices(notices: list[str], error: str | None = None) -> str:
    if not notices and not error:
        return ""
    items = f'<li class="error">{_esc(error)}</li>' if error else ""
    items += "".join(f"<li>{_esc(n)}</li>" for n in notices)
    return f'<ul class="notices">{items}</ul>'


def render_results(
    query: str,
    movies: list[SearchResult],
    notices: list[str] | None = None,
    analysis_error: str | None = None,
) -> str:
    """Result grid for a completed search, or the empty state when nothing matched."""
    notices_html = render_notices(notices or [], analysis_error)
    if not movies:
        return f"""{notices_html}
<div class="empty">
    <h2>No results found for "{_esc(query)}"</h2>
    <p>Try a different description or be more specific about the type of movie you're looking for.</p>
</div>"""

    cards = "\n".join(render_movie_card(m) for m in movies)
    return f"""{notices_html}
<h2 class="section-title">Results for "{_esc(query)}"</h2>
<div class="grid">
{cards}
</div>"""


def render_home_page(query: str, results_html: str, keys_set: bool) -> str:
    keys_status = "API keys saved" if keys_set else "API keys missing: searches will not return results"
    return _render_layout(
        title="MovieMatch",
        body=f"""
<section class="hero">
    <h1>Find Your Perfect Movie Match</h1>
    <p>Describe the movie you're looking for in natural language, and we'll find it for you.</p>
    <form id="search-form" action="/" method="get">
        <input id="search-input" name="q" value="{_esc(query)}" placeholder="Describe a movie..." autocomplete="off">
        <button type="submit">Search</button>
    </form>
    <p id="toast" class="toast" hidden></p>
</section>

<section id="results">
{results_html}
</section>

<details class="keys">
    <summary>API keys <span class="meta" id="keys-status">({_esc(keys_status)})</span></summary>
    <form id="keys-form">
        <label>Gemini API key <input type="password" id="gemini-key" autocomplete="off"></label>
        <label>OMDb API key <input type="password" id="omdb-key" autocomplete="off"></label>
        <button type="submit">Save keys</button>
    </form>
</details>

<template id="skeleton">{render_skeleton_grid()}</template>
""",
        script=_HOME_SCRIPT,
    )


def render_movie_page(imdb_id: str) -> str:
    return _render_layout(
        title="MovieMatch",
        body=f"""
<a class="back" href="/">&larr; Back</a>
<section id="movie" data-fragment="/fragments/movie/{quote(imdb_id)}">
{render_details_skeleton()}
</section>
""",
        script=_MOVIE_SCRIPT,
    )


def render_details_skeleton() -> str:
    return """<div class="details skeleton">
    <div class="poster"></div>
    <div class="info"><div class="line wide"></div><div class="line"></div><div class="block"></div></div>
</div>"""


def render_not_found() -> str:
    return """<div class="empty">
    <h2>Movie not found</h2>
    <a class="button" href="/">Return Home</a>
</div>"""


def render_movie_details(movie: DetailRecord) -> str:
    """Populated detail layout. Absent fields are left out rather than shown as blanks."""
    facts = []
    if movie.rating:
        facts.append(f'<div class="rating">&#9733; <strong>{_esc(movie.rating)}/10</strong> <span class="meta">IMDb Rating</span></div>')
    if movie.runtime:
        facts.append(f"<div>{_esc(movie.runtime)}</div>")
    if movie.rated:
        facts.append(f'<div class="badge">{_esc(movie.rated)}</div>')
    if movie.genre_list:
        chips = "".join(f'<span class="chip">{_esc(g)}</span>' for g in movie.genre_list)
        facts.append(f'<div class="chips">{chips}</div>')
    for label, value in (
        ("Released", movie.released),
        ("Director", movie.director),
        ("Writer", movie.writer),
        ("Language", movie.language),
        ("Country", movie.country),
    ):
        if value:
            facts.append(f'<div><span class="meta">{label}: </span>{_esc(value)}</div>')

    awards_html = f'<p class="awards">{_esc(movie.awards)}</p>' if movie.awards else ""
    cast_html = ""
    if movie.actor_list:
        chips = "".join(f'<span class="chip muted">{_esc(a)}</span>' for a in movie.actor_list)
        cast_html = f'<h2>Cast</h2><div class="chips">{chips}</div>'

    facts_html = "\n        ".join(facts)
    return f"""<h1>{_esc(movie.title)} <span class="meta">({_esc(movie.year)})</span></h1>
<div class="details">
    <div class="side">
        <img src="{_esc(poster_url(movie))}" alt="{_esc(movie.title)}">
        {facts_html}
    </div>
    <div class="main">
        {awards_html}
        <h2>Overview</h2>
        <p>{_esc(movie.plot)}</p>
        {cast_html}
    </div>
</div>"""


def _render_layout(title: str, body: str, script: str = "") -> str:
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{_esc(title)}</title>
    <style>{_STYLE}</style>
</head>
<body>
    <header><a href="/">MovieMatch</a></header>
    <main class="container">
{body}
    </main>
    <script>{script}</script>
</body>
</html>"""


def _esc(s) -> str:
    """HTML-escape a string."""
    return html.escape(str(s)) if s else ""


_STYLE = """
* { margin: 0; padding: 0; box-sizing: border-box; }
body { background: #0d1117; color: #c9d1d9; font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif; min-height: 100vh; }
header { padding: 16px 24px; border-bottom: 1px solid #30363d; }
header a, a.back { color: #58a6ff; text-decoration: none; font-weight: 600; }
.container { max-width: 1200px; margin: 0 auto; padding: 24px 16px; }
.hero { text-align: center; padding: 64px 0 40px; }
.hero h1 { font-size: 40px; margin-bottom: 16px; }
.hero p { color: #8b949e; margin-bottom: 24px; }
form { display: flex; gap: 8px; justify-content: center; flex-wrap: wrap; }
input { background: #161b22; color: #c9d1d9; border: 1px solid #30363d; border-radius: 6px; padding: 10px 12px; min-width: 320px; }
button, .button { background: #238636; color: #fff; border: 0; border-radius: 6px; padding: 10px 16px; cursor: pointer; text-decoration: none; }
.toast { margin-top: 12px; color: #f0883e; }
.hint, .empty p, .meta { color: #8b949e; }
.empty, .hint { text-align: center; padding: 48px 0; }
.section-title { margin-bottom: 16px; }
.notices { list-style: none; color: #8b949e; font-size: 13px; margin-bottom: 12px; }
.notices .error { color: #f85149; }
.grid { display: grid; grid-template-columns: repeat(auto-fill, minmax(180px, 1fr)); gap: 16px; }
.card { background: #161b22; border: 1px solid #30363d; border-radius: 8px; overflow: hidden; color: inherit; text-decoration: none; }
.card img, .card .poster { width: 100%; aspect-ratio: 2 / 3; object-fit: cover; display: block; }
.card-body { padding: 8px 12px; }
.card-body h3 { font-size: 14px; margin-bottom: 4px; }
.skeleton .poster, .skeleton .line, .skeleton .block { background: #21262d; animation: pulse 1.5s ease-in-out infinite; border-radius: 4px; }
.skeleton .line { height: 14px; margin: 10px 12px; }
.skeleton .line.wide { height: 32px; width: 75%; }
.skeleton .block { height: 96px; margin: 10px 12px; }
@keyframes pulse { 50% { opacity: 0.4; } }
.details { display: flex; gap: 32px; flex-wrap: wrap; margin-top: 24px; }
.details .side, .details .poster { width: 320px; display: flex; flex-direction: column; gap: 12px; }
.details .skeleton .poster { aspect-ratio: 2 / 3; }
.details .side img { width: 100%; border-radius: 8px; }
.details .main, .details .info { flex: 1; min-width: 280px; }
.details h2 { margin: 24px 0 12px; }
.awards { font-style: italic; color: #8b949e; }
.chips { display: flex; flex-wrap: wrap; gap: 8px; }
.chip { padding: 4px 12px; border-radius: 999px; background: #1f6feb33; font-size: 13px; }
.chip.muted { background: #21262d; color: #8b949e; }
.badge { display: inline-block; padding: 2px 8px; background: #21262d; border-radius: 4px; font-size: 13px; width: fit-content; }
.keys { margin-top: 48px; }
.keys form { justify-content: flex-start; margin-top: 12px; }
.keys label { display: flex; flex-direction: column; gap: 4px; font-size: 13px; }
"""

# Each search gets a generation number; a response that arrives after a newer
# search started is dropped.
_HOME_SCRIPT = """
const form = document.getElementById("search-form");
const input = document.getElementById("search-input");
const results = document.getElementById("results");
const toast = document.getElementById("toast");
let generation = 0;

function showToast(message) {
    toast.textContent = message;
    toast.hidden = false;
    setTimeout(() => { toast.hidden = true; }, 4000);
}

form.addEventListener("submit", async (event) => {
    event.preventDefault();
    const q = input.value.trim();
    if (!q) {
        showToast("Please enter a movie description");
        return;
    }
    const current = ++generation;
    results.innerHTML = document.getElementById("skeleton").innerHTML;
    history.replaceState(null, "", "/?q=" + encodeURIComponent(q));
    try {
        const resp = await fetch("/fragments/results?q=" + encodeURIComponent(q));
        const body = await resp.text();
        if (current !== generation) return;
        results.innerHTML = body;
    } catch (err) {
        if (current !== generation) return;
        results.innerHTML = "";
        showToast("Something went wrong. Please try again.");
    }
});

document.getElementById("keys-form").addEventListener("submit", async (event) => {
    event.preventDefault();
    const gemini = document.getElementById("gemini-key").value.trim();
    const omdb = document.getElementById("omdb-key").value.trim();
    if (!gemini || !omdb) {
        showToast("Please enter both API keys");
        return;
    }
    for (const [key_name, value] of [["gemini", gemini], ["omdb", omdb]]) {
        const resp = await fetch("/api/settings/api-keys", {
            method: "PUT",
            headers: { "Content-Type": "application/json" },
            body: JSON.stringify({ key_name, value }),
        });
        if (!resp.ok) {
            const body = await resp.json().catch(() => ({}));
            showToast(body.detail || "Failed to save " + key_name + " API key");
            return;
        }
    }
    document.getElementById("keys-status").textContent = "(API keys saved)";
    showToast("API keys saved successfully");
});
"""

_MOVIE_SCRIPT = """
const section = document.getElementById("movie");
fetch(section.dataset.fragment)
    .then((resp) => resp.text())
    .then((body) => { section.innerHTML = body; })
    .catch(() => { section.innerHTML = "<div class='empty'><h2>Failed to load movie details</h2></div>"; });
"""
