"""Choose where the indicator readings for a date come from.

Order of preference:
1. Recorded readings for a known historical bottom.
2. A live lookup, for dates within the trailing month when an API key is set.
3. Deterministic filler readings.

A failed live lookup never reaches the caller — it degrades to filler.
"""

from __future__ import annotations

import calendar
import logging
from datetime import date
from typing import Optional

from .clients import gemini
from .fallback import generate_fallback
from .history import lookup_historical
from .models import DataSource, ResolvedMarketData

logger = logging.getLogger(__name__)

EARLIEST_QUERY_DATE = date(2010, 1, 1)


def months_back(today: date, months: int) -> date:
    """Same day-of-month ``months`` calendar months earlier, clamped to month end."""
    month = today.month - months
    year = today.year
    while month <= 0:
        month += 12
        year -= 1
    day = min(today.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def is_within_trailing_month(day: date, today: Optional[date] = None, months: int = 1) -> bool:
    today = today or date.today()
    return months_back(today, months) <= day <= today


def parse_query_date(text: str, today: Optional[date] = None) -> date:
    """Parse an ISO ``YYYY-MM-DD`` date, defaulting to today when blank.

    Raises ValueError for malformed dates and for dates outside
    2010-01-01 .. today.
    """
    today = today or date.today()
    text = (text or "").strip()
    if not text:
        return today
    try:
        day = date.fromisoformat(text)
    except ValueError:
        raise ValueError(f"Invalid date: {text!r}. Use YYYY-MM-DD, e.g. '2020-03-23'.") from None
    if day < EARLIEST_QUERY_DATE or day > today:
        raise ValueError(
            f"Date {day.isoformat()} is out of range. Choose a date between "
            f"{EARLIEST_QUERY_DATE.isoformat()} and {today.isoformat()}."
        )
    return day


async def resolve_market_data(
    day: date,
    api_key: Optional[str] = None,
    model: str = gemini.DEFAULT_MODEL,
    today: Optional[date] = None,
    live_window_months: int = 1,
) -> ResolvedMarketData:
    """Return the readings for ``day`` and where they came from."""
    historical = lookup_historical(day)
    if historical is not None:
        logger.debug("Using recorded readings for %s", day)
        return ResolvedMarketData(date=day, market_data=historical, source=DataSource.HISTORICAL)

    note = None
    if is_within_trailing_month(day, today, live_window_months):
        if api_key:
            try:
                live = await gemini.fetch_market_data(day, api_key, model=model)
                logger.info("Fetched live readings for %s", day)
                return ResolvedMarketData(date=day, market_data=live, source=DataSource.LIVE)
            except gemini.LiveDataError as exc:
                logger.warning("Live lookup failed for %s, using fallback readings: %s", day, exc)
                note = f"Live lookup failed: {exc}"
        else:
            logger.info("No Gemini API key configured; using fallback readings for %s", day)
            note = "Live lookup disabled (GEMINI_API_KEY not set)"

    return ResolvedMarketData(
        date=day,
        market_data=generate_fallback(day),
        source=DataSource.FALLBACK,
        note=note,
    )
