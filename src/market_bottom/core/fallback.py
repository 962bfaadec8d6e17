"""Deterministic filler readings for dates with no recorded or live data.

The values are plausible-looking but are NOT market data. They are derived
from a seeded sine hash of the date so the same date always yields the same
readings:

    seed = year + month + day
    h(s) = frac(sin(s) * 10000)

and each indicator is ``base + h(seed + k) * span`` for its own offset ``k``.
"""

from __future__ import annotations

import math
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from .models import MarketData


def unit_hash(seed: float) -> float:
    """Pseudo-random value in [0, 1) from a numeric seed."""
    x = math.sin(seed) * 10000
    return x - math.floor(x)


def _round_half_up(value: float) -> float:
    """Nearest integer, halves rounded up."""
    return float(math.floor(value + 0.5))


def _round_fixed(value: float, digits: int) -> float:
    """Round the exact binary value of ``value`` to ``digits`` decimals, halves up.

    Works on the float's exact decimal expansion, so 12.35 (stored as
    12.3499...) rounds to 12.3.
    """
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def date_seed(day: date) -> int:
    return day.year + day.month + day.day


def generate_fallback(day: date) -> MarketData:
    """Build reproducible filler readings for ``day``."""
    seed = date_seed(day)
    return MarketData(
        fear_greed=_round_half_up(30 + unit_hash(seed) * 50),
        vix=_round_fixed(12 + unit_hash(seed + 1) * 15, 1),
        rsi_daily=_round_half_up(35 + unit_hash(seed + 2) * 40),
        rsi_weekly=_round_half_up(40 + unit_hash(seed + 3) * 30),
        put_call_ratio=_round_fixed(0.65 + unit_hash(seed + 4) * 0.4, 2),
    )
