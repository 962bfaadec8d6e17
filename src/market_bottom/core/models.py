"""Pydantic data models — the shared business objects.

The scoring engine, the data producers, and the MCP tools all exchange
these models.
"""

from __future__ import annotations

import math
from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class DataSource(str, Enum):
    """Where a set of indicator readings came from."""

    HISTORICAL = "historical"
    LIVE = "live"
    FALLBACK = "fallback"
    MANUAL = "manual"


class StatusTier(Enum):
    """Ordered classification tiers, most extreme bottom first.

    Each member carries its tier number, the inclusive lower bound of the
    total score, the display label and the display color.
    """

    CENTURY_BOTTOM = (1, 90.0, "century-level bottom (strong buy)", "red")
    OVERSOLD_BOTTOM = (2, 80.0, "oversold bottom zone (consider buying)", "orange")
    SELLING = (3, 70.0, "selling in progress (watch)", "yellow")
    NORMAL = (4, 60.0, "normal-year stage (neutral)", "emerald")
    NEAR_TOP = (5, -math.inf, "near top (risk management)", "blue")

    def __init__(self, number: int, threshold: float, label: str, color: str):
        self.number = number
        self.threshold = threshold
        self.label = label
        self.color = color

    @classmethod
    def from_number(cls, number: int) -> "StatusTier":
        for tier in cls:
            if tier.number == number:
                return tier
        raise ValueError(f"Unknown status tier: {number}")


class MarketData(BaseModel):
    """Indicator readings for one evaluation.

    Values are not range-checked: external sources may report readings
    outside the nominal ranges and the scoring engine clamps them.
    Field aliases match the camelCase JSON used by the live data service.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, allow_inf_nan=False)

    fear_greed: float = Field(alias="fearGreed", description="CNN Fear & Greed Index, nominally 0-100")
    vix: float = Field(alias="vix", description="CBOE volatility index")
    rsi_daily: float = Field(alias="rsiDaily", description="Daily RSI(14), nominally 0-100")
    rsi_weekly: float = Field(alias="rsiWeekly", description="Weekly RSI(14), nominally 0-100")
    put_call_ratio: float = Field(alias="putCallRatio", description="Equity put/call ratio")

    @property
    def avg_rsi(self) -> float:
        return (self.rsi_daily + self.rsi_weekly) / 2

    def with_changes(self, **changes: float) -> MarketData:
        """Return a copy with some readings replaced.

        Unknown field names raise ``ValueError``; ``None`` values are ignored.
        """
        updates = {k: v for k, v in changes.items() if v is not None}
        unknown = set(updates) - set(type(self).model_fields)
        if unknown:
            raise ValueError(f"Unknown indicator(s): {', '.join(sorted(unknown))}")
        return type(self).model_validate({**self.model_dump(), **updates})

    def with_average_rsi(self, rsi: float) -> MarketData:
        """Set daily and weekly RSI to the same reading."""
        return self.with_changes(rsi_daily=rsi, rsi_weekly=rsi)


class ScoreResult(BaseModel):
    """Composite bottom score with its per-indicator breakdown."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    total_score: float = Field(ge=0.0, le=100.0, alias="totalScore", description="Sum of the four sub-scores")
    fear_greed_score: float = Field(ge=0.0, le=25.0, alias="fearGreedScore")
    vix_score: float = Field(ge=0.0, le=25.0, alias="vixScore")
    rsi_score: float = Field(ge=0.0, le=25.0, alias="rsiScore")
    put_call_score: float = Field(ge=0.0, le=25.0, alias="putCallScore")
    status: str = Field(alias="status", description="Status tier label")
    status_color: str = Field(alias="statusColor", description="Display color paired with the status")
    tier: int = Field(ge=1, le=5, alias="tier", description="1 = most extreme bottom, 5 = near top")

    @property
    def status_tier(self) -> StatusTier:
        return StatusTier.from_number(self.tier)


class ResolvedMarketData(BaseModel):
    """Indicator readings for a calendar date, tagged with their provenance."""

    date: date
    market_data: MarketData
    source: DataSource
    note: Optional[str] = Field(None, description="Why this source was used, if not the preferred one")
