"""Indicator readings recorded at well-known market bottoms."""

from __future__ import annotations

from datetime import date
from typing import Optional

from .models import MarketData


def _reading(fear_greed: float, vix: float, rsi_daily: float, rsi_weekly: float, put_call_ratio: float) -> MarketData:
    return MarketData(
        fear_greed=fear_greed,
        vix=vix,
        rsi_daily=rsi_daily,
        rsi_weekly=rsi_weekly,
        put_call_ratio=put_call_ratio,
    )


HISTORICAL_BOTTOMS: dict[date, MarketData] = {
    date(2020, 3, 23): _reading(3, 82.7, 16, 32, 1.45),
    date(2022, 10, 13): _reading(8, 33.6, 28, 34, 1.28),
    date(2018, 12, 24): _reading(5, 36.1, 20, 30, 1.35),
    date(2011, 10, 4): _reading(12, 45.4, 25, 31, 1.20),
    date(2015, 8, 24): _reading(7, 40.7, 19, 35, 1.30),
    date(2016, 2, 11): _reading(15, 28.1, 27, 38, 1.15),
    date(2023, 10, 27): _reading(22, 21.3, 30, 42, 1.05),
    date(2024, 8, 5): _reading(18, 38.5, 26, 45, 1.18),
    date(2025, 4, 7): _reading(5, 45.0, 15, 20, 1.35),
}

BOTTOM_EVENTS: dict[date, str] = {
    date(2020, 3, 23): "COVID-19 crash",
    date(2022, 10, 13): "2022 rate-hike bear market low",
    date(2018, 12, 24): "Christmas Eve 2018 selloff",
    date(2011, 10, 4): "2011 US debt downgrade",
    date(2015, 8, 24): "August 2015 flash crash",
    date(2016, 2, 11): "Early 2016 oil/China slump",
    date(2023, 10, 27): "October 2023 yield spike low",
    date(2024, 8, 5): "Yen carry-trade unwind",
    date(2025, 4, 7): "April 2025 tariff shock",
}


def lookup_historical(day: date) -> Optional[MarketData]:
    """Return the recorded readings for a historical bottom, if ``day`` is one."""
    return HISTORICAL_BOTTOMS.get(day)


def historical_dates() -> list[date]:
    return sorted(HISTORICAL_BOTTOMS)
