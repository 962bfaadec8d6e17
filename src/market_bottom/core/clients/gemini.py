"""Gemini (Google Generative Language) API client for recent indicator readings.

API docs: https://ai.google.dev/api/generate-content
Uses the search-grounding tool so the model can look up published values.
The model's reply is free text and is treated as untrusted input: it must
contain a JSON object that validates against MarketData.
"""

from __future__ import annotations

import json
import logging
from datetime import date
from typing import Optional

import httpx
from pydantic import ValidationError

from ..models import MarketData

logger = logging.getLogger(__name__)

API_BASE = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-2.5-flash"

PROMPT_TEMPLATE = """Search for real stock market data on {day}.
I need these indicators for QQQ/Nasdaq:
1. CNN Fear & Greed Index (0-100)
2. CBOE VIX Index
3. RSI (14 days), daily and weekly
4. Equity Put/Call Ratio
Provide the result strictly in JSON format: {{"fearGreed": number, "vix": number, "rsiDaily": number, "rsiWeekly": number, "putCallRatio": number}}"""


class LiveDataError(RuntimeError):
    """The live data service failed or returned something unusable."""


def build_prompt(day: date) -> str:
    return PROMPT_TEMPLATE.format(day=day.isoformat())


def _extract_text(payload: dict) -> str:
    """Concatenate the text parts of the first candidate.

    Every level of the envelope is type-checked; anything unexpected is a
    LiveDataError.
    """
    candidates = payload.get("candidates")
    if not candidates:
        feedback = payload.get("promptFeedback")
        reason = feedback.get("blockReason", "unknown") if isinstance(feedback, dict) else "unknown"
        raise LiveDataError(f"No candidates in response (block reason: {reason})")
    if not isinstance(candidates, list):
        raise LiveDataError(f"Expected a list of candidates, got {type(candidates).__name__}")

    candidate = candidates[0]
    if not isinstance(candidate, dict):
        raise LiveDataError(f"Expected a candidate object, got {type(candidate).__name__}")

    content = candidate.get("content") or {}
    if not isinstance(content, dict):
        raise LiveDataError(f"Expected candidate content object, got {type(content).__name__}")

    parts = content.get("parts") or []
    if not isinstance(parts, list):
        raise LiveDataError(f"Expected a list of content parts, got {type(parts).__name__}")

    texts = [p.get("text") for p in parts if isinstance(p, dict)]
    text = "".join(t for t in texts if isinstance(t, str))
    if not text.strip():
        raise LiveDataError("Empty response text")
    return text


def _strip_json_fence(text: str) -> str:
    raw = text.strip()
    if "```json" in raw:
        raw = raw.split("```json", 1)[1].split("```", 1)[0]
    elif raw.startswith("```"):
        raw = raw.strip("`")
    raw = raw.strip()
    # Grounded replies sometimes wrap the object in prose
    if not raw.startswith("{"):
        start, end = raw.find("{"), raw.rfind("}")
        if start != -1 and end > start:
            raw = raw[start:end + 1]
    return raw


def parse_market_data(text: str) -> MarketData:
    """Validate a model reply into MarketData.

    All five indicator keys must be present and be finite JSON numbers.
    Validation is strict: numeric strings and booleans are rejected.
    """
    raw = _strip_json_fence(text)
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise LiveDataError(f"Response is not valid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise LiveDataError(f"Expected a JSON object, got {type(data).__name__}")

    try:
        return MarketData.model_validate(data, strict=True)
    except ValidationError as exc:
        raise LiveDataError(f"Response failed schema validation: {exc.error_count()} error(s)") from exc


async def fetch_market_data(
    day: date,
    api_key: str,
    model: str = DEFAULT_MODEL,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> MarketData:
    """Ask a search-grounded Gemini model for the indicator readings on ``day``.

    Args:
        day: Trading date to look up.
        api_key: Gemini API key.
        model: Model id, e.g. 'gemini-2.5-flash'.
        transport: Optional httpx transport override.

    Returns:
        Validated MarketData.

    Raises:
        LiveDataError: on HTTP failure or an unusable reply.
    """
    body = {
        "contents": [{"role": "user", "parts": [{"text": build_prompt(day)}]}],
        "tools": [{"google_search": {}}],
    }
    headers = {"x-goog-api-key": api_key}

    try:
        async with httpx.AsyncClient(timeout=httpx.Timeout(30.0, connect=10.0), transport=transport) as client:
            response = await client.post(f"{API_BASE}/models/{model}:generateContent", json=body, headers=headers)
            response.raise_for_status()
            payload = response.json()
    except httpx.HTTPError as exc:
        raise LiveDataError(f"Gemini request failed: {exc}") from exc
    except ValueError as exc:
        raise LiveDataError(f"Gemini returned a non-JSON body: {exc}") from exc

    if not isinstance(payload, dict):
        raise LiveDataError("Gemini returned an unexpected response shape")

    text = _extract_text(payload)
    market_data = parse_market_data(text)
    logger.debug("Live readings for %s: %s", day, market_data.model_dump())
    return market_data
