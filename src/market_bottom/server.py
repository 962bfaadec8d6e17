"""Market Bottom MCP Server.

FastMCP server with 5 tools around the market bottom scoring engine.
Run: market-bottom-mcp
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from .core.clients.gemini import DEFAULT_MODEL
from .core.history import BOTTOM_EVENTS, HISTORICAL_BOTTOMS, historical_dates
from .core.models import DataSource, MarketData, StatusTier
from .core.resolver import parse_query_date, resolve_market_data
from .core.scoring import score_market_bottom, summarize

logger = logging.getLogger(__name__)

READ_ONLY = ToolAnnotations(readOnlyHint=True, destructiveHint=False, idempotentHint=True, openWorldHint=True)
LOCAL_ONLY = ToolAnnotations(readOnlyHint=True, destructiveHint=False, idempotentHint=True, openWorldHint=False)


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncIterator[None]:
    """Configure logging for the server process."""
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    if not _get_gemini_key():
        logger.warning("GEMINI_API_KEY not set — recent dates will use fallback readings")
    yield


mcp = FastMCP(
    "Market Bottom",
    instructions="Ask your AI whether the Nasdaq-100 is bottoming. Scores Fear & Greed, VIX, RSI, and the put/call ratio into a 0-100 gauge with five status tiers.",
    lifespan=lifespan,
)


def _get_gemini_key() -> Optional[str]:
    return os.environ.get("GEMINI_API_KEY") or os.environ.get("API_KEY") or None


def _get_gemini_model() -> str:
    return os.environ.get("GEMINI_MODEL", DEFAULT_MODEL)


def _score_payload(data: MarketData) -> dict:
    result = score_market_bottom(data)
    return {
        "indicators": data.model_dump(),
        "score": result.model_dump(),
        "summary": summarize(data, result),
    }


# ─── Tool 1: Manual score ────────────────────────────────────────────────────


@mcp.tool(annotations=LOCAL_ONLY)
async def bottom_score(
    fear_greed: float,
    vix: float,
    rsi_daily: float,
    rsi_weekly: float,
    put_call_ratio: float,
) -> dict:
    """Score indicator readings you already have.

    Args:
        fear_greed: CNN Fear & Greed Index (0 = extreme fear, 100 = extreme greed).
        vix: CBOE VIX level.
        rsi_daily: Daily RSI(14).
        rsi_weekly: Weekly RSI(14).
        put_call_ratio: Equity put/call ratio.
    """
    data = MarketData(
        fear_greed=fear_greed,
        vix=vix,
        rsi_daily=rsi_daily,
        rsi_weekly=rsi_weekly,
        put_call_ratio=put_call_ratio,
    )
    return {
        "title": "Market Bottom Score",
        "source": DataSource.MANUAL.value,
        **_score_payload(data),
    }


# ─── Tool 2: Score for a date ────────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY)
async def bottom_score_for_date(date: str = "") -> dict:
    """Market bottom score for a date — recorded bottoms, live data for the last month, filler otherwise.

    Args:
        date: Date as YYYY-MM-DD between 2010-01-01 and today. Default today.
    """
    day = parse_query_date(date)
    resolved = await resolve_market_data(day, api_key=_get_gemini_key(), model=_get_gemini_model())
    payload = _score_payload(resolved.market_data)
    return {
        "title": f"Market Bottom Score — {day.isoformat()}",
        "date": day.isoformat(),
        "source": resolved.source.value,
        "note": resolved.note,
        "event": BOTTOM_EVENTS.get(day),
        **payload,
    }


# ─── Tool 3: What-if ─────────────────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY)
async def bottom_what_if(
    date: str = "",
    fear_greed: Optional[float] = None,
    vix: Optional[float] = None,
    rsi: Optional[float] = None,
    rsi_daily: Optional[float] = None,
    rsi_weekly: Optional[float] = None,
    put_call_ratio: Optional[float] = None,
) -> dict:
    """Adjust some readings for a date and see how the score moves.

    Args:
        date: Base date as YYYY-MM-DD. Default today.
        fear_greed: Override the Fear & Greed Index.
        vix: Override the VIX level.
        rsi: Set daily and weekly RSI to the same value.
        rsi_daily: Override daily RSI (applied after ``rsi``).
        rsi_weekly: Override weekly RSI (applied after ``rsi``).
        put_call_ratio: Override the put/call ratio.
    """
    day = parse_query_date(date)
    resolved = await resolve_market_data(day, api_key=_get_gemini_key(), model=_get_gemini_model())
    base = resolved.market_data

    adjusted = base
    if rsi is not None:
        adjusted = adjusted.with_average_rsi(rsi)
    adjusted = adjusted.with_changes(
        fear_greed=fear_greed,
        vix=vix,
        rsi_daily=rsi_daily,
        rsi_weekly=rsi_weekly,
        put_call_ratio=put_call_ratio,
    )

    base_result = score_market_bottom(base)
    adjusted_payload = _score_payload(adjusted)
    delta = adjusted_payload["score"]["total_score"] - base_result.total_score

    if adjusted == base:
        summary = f"No readings changed. {adjusted_payload['summary']}"
    else:
        summary = (
            f"Score moves {base_result.total_score:.1f} → {adjusted_payload['score']['total_score']:.1f} "
            f"({delta:+.1f}). Status: {adjusted_payload['score']['status']}."
        )

    return {
        "title": f"What-if — {day.isoformat()}",
        "date": day.isoformat(),
        "source": resolved.source.value,
        "base": {"indicators": base.model_dump(), "score": base_result.model_dump()},
        "adjusted": adjusted_payload,
        "delta": delta,
        "summary": summary,
    }


# ─── Tool 4: Historical bottoms ──────────────────────────────────────────────


@mcp.tool(annotations=LOCAL_ONLY)
async def bottom_history() -> dict:
    """Scores at recorded market bottoms since 2011, oldest first."""
    bottoms = []
    for day in historical_dates():
        data = HISTORICAL_BOTTOMS[day]
        result = score_market_bottom(data)
        bottoms.append({
            "date": day.isoformat(),
            "event": BOTTOM_EVENTS.get(day),
            "indicators": data.model_dump(),
            "score": result.model_dump(),
        })

    deepest = max(bottoms, key=lambda b: b["score"]["total_score"])
    return {
        "title": "Historical Market Bottoms",
        "bottoms": bottoms,
        "summary": (
            f"{len(bottoms)} recorded bottoms. Deepest: {deepest['date']} "
            f"({deepest['event']}) at {deepest['score']['total_score']:.1f}/100."
        ),
    }


# ─── Tool 5: Tiers ───────────────────────────────────────────────────────────


@mcp.tool(annotations=LOCAL_ONLY)
async def bottom_tiers() -> dict:
    """How total scores map to status tiers."""
    tiers = []
    parts = []
    upper = None
    for tier in StatusTier:
        if tier is StatusTier.NEAR_TOP:
            min_score = None
            parts.append(f"{tier.label}: < {upper:g}")
        else:
            min_score = tier.threshold
            parts.append(f"{tier.label}: ≥ {min_score:g}")
        tiers.append({
            "tier": tier.number,
            "min_score": min_score,
            "max_score_exclusive": upper,
            "status": tier.label,
            "status_color": tier.color,
        })
        upper = tier.threshold
    return {
        "title": "Status Tiers",
        "tiers": tiers,
        "summary": " | ".join(parts),
    }


def main():
    """Entry point for the CLI command."""
    mcp.run()


if __name__ == "__main__":
    main()
