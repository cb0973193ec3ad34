"""Prompt analysis with the Gemini generateContent API.

Turns a free-text movie description into genres, era, mood, keywords and a
refined search query. Endpoints are tried in the configured order; the first
one that yields a usable JSON object wins.
"""

import json
import logging
import re

import httpx
from pydantic import ValidationError

from moviematch.config import settings
from moviematch.models.analysis import AnalysisOutcome, AnalysisResult

logger = logging.getLogger(__name__)

# First "{" through last "}" of the generated text
_JSON_OBJECT_RE = re.compile(r"(\{[\s\S]*\})")

PROMPT_TEMPLATE = """Analyze this movie request: "{prompt}"
Output a structured JSON with these fields only:
1. genres: An array of likely genres
2. era: Time period if mentioned (e.g. "90s", "modern", "80s sci-fi")
3. mood: The emotional tone (e.g. "funny", "thrilling", "romantic")
4. keywords: Important descriptive words for search
5. searchQuery: A refined search query for IMDB

Only return valid JSON with these fields - no extra text."""


class AnalysisError(Exception):
    """One endpoint attempt failed; the message is reported to the caller."""


def build_request_body(prompt: str) -> dict:
    return {
        "contents": [
            {"parts": [{"text": PROMPT_TEMPLATE.format(prompt=prompt)}]}
        ],
        "generationConfig": {
            "temperature": settings.gemini_temperature,
            "maxOutputTokens": settings.gemini_max_output_tokens,
        },
    }


def extract_generated_text(payload: dict) -> str:
    """Pull ``candidates[0].content.parts[0].text`` out of a response."""
    try:
        text = payload["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        raise AnalysisError("Unexpected API response format")
    if not text:
        raise AnalysisError("Unexpected API response format")
    return text


def parse_analysis(text: str) -> AnalysisResult:
    """Parse the JSON object embedded in the model's text output."""
    match = _JSON_OBJECT_RE.search(text)
    if not match:
        raise AnalysisError("Could not find valid JSON in response")

    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError:
        raise AnalysisError("Failed to parse JSON from response")
    if not isinstance(parsed, dict):
        raise AnalysisError("Failed to parse JSON from response")

    if not parsed.get("searchQuery"):
        raise AnalysisError("Missing required 'searchQuery' field in response")

    try:
        return AnalysisResult.model_validate(parsed)
    except ValidationError:
        raise AnalysisError("Failed to parse JSON from response")


def _error_message(resp: httpx.Response) -> str:
    """Prefer the API's own error message over the bare status code."""
    try:
        message = resp.json().get("error", {}).get("message")
    except Exception:
        message = None
    return message or f"API error: {resp.status_code}"


async def _analyze_with_endpoint(
    client: httpx.AsyncClient, endpoint: str, api_key: str, body: dict
) -> AnalysisResult:
    resp = await client.post(
        endpoint,
        params={"key": api_key},
        json=body,
        headers={"Content-Type": "application/json"},
    )
    if resp.status_code != 200:
        raise AnalysisError(_error_message(resp))

    try:
        payload = resp.json()
    except ValueError:
        raise AnalysisError("Unexpected API response format")

    return parse_analysis(extract_generated_text(payload))


async def analyze_movie_prompt(prompt: str, api_key: str) -> AnalysisOutcome:
    """Analyze a movie description. Never raises; failures come back in the outcome."""
    if not api_key:
        return AnalysisOutcome(success=False, error="Missing API key")
    if not prompt or not prompt.strip():
        return AnalysisOutcome(success=False, error="Please enter a movie description")

    body = build_request_body(prompt)
    last_error = "Failed to connect to Gemini API"

    async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as client:
        for endpoint in settings.gemini_endpoints:
            logger.debug("Trying Gemini endpoint %s", endpoint)
            try:
                result = await _analyze_with_endpoint(client, endpoint, api_key, body)
            except AnalysisError as e:
                logger.warning("Gemini endpoint %s failed: %s", endpoint, e)
                last_error = str(e)
                continue
            except httpx.HTTPError as e:
                logger.warning("Gemini endpoint %s unreachable: %s", endpoint, e)
                last_error = str(e) or type(e).__name__
                continue

            logger.info("Gemini analysis succeeded via %s", endpoint)
            return AnalysisOutcome(success=True, data=result)

    logger.error("All Gemini endpoints failed: %s", last_error)
    return AnalysisOutcome(success=False, error=last_error)
