"""Market bottom scoring engine.

Four fear/oversold indicators are each mapped onto 0-25 points and summed
into a 0-100 composite. Extremes of fear, volatility, oversold momentum and
hedging all push the score up. Everything here is pure: no I/O, no logging,
no state.
"""

from __future__ import annotations

from .models import MarketData, ScoreResult, StatusTier

MAX_SUB_SCORE = 25.0

# VIX ramps linearly from calm to panic
VIX_CALM = 15.0
VIX_PANIC = 30.0

# Average RSI: overbought scores 0, oversold scores 25
RSI_OVERBOUGHT = 70.0
RSI_OVERSOLD = 30.0

# Put/call ratio: complacent scores 0, heavy hedging scores 25
PUT_CALL_LOW = 0.6
PUT_CALL_HIGH = 1.1


def _clamp(value: float, low: float = 0.0, high: float = MAX_SUB_SCORE) -> float:
    return max(low, min(high, value))


def score_fear_greed(fear_greed: float) -> float:
    """Index 0 (extreme fear) scores 25, index 100 (extreme greed) scores 0."""
    return _clamp((100.0 - fear_greed) / 4.0)


def score_vix(vix: float) -> float:
    """Zero at or below 15, full marks at or above 30, linear in between."""
    if vix >= VIX_PANIC:
        return MAX_SUB_SCORE
    if vix <= VIX_CALM:
        return 0.0
    return (vix - VIX_CALM) / (VIX_PANIC - VIX_CALM) * MAX_SUB_SCORE


def score_rsi(rsi_daily: float, rsi_weekly: float) -> float:
    """Score the average of daily and weekly RSI."""
    avg_rsi = (rsi_daily + rsi_weekly) / 2
    return _clamp((RSI_OVERBOUGHT - avg_rsi) / (RSI_OVERBOUGHT - RSI_OVERSOLD) * MAX_SUB_SCORE)


def score_put_call(put_call_ratio: float) -> float:
    return _clamp((put_call_ratio - PUT_CALL_LOW) / (PUT_CALL_HIGH - PUT_CALL_LOW) * MAX_SUB_SCORE)


def classify_score(total_score: float) -> StatusTier:
    """Map a total score onto its status tier.

    Thresholds are checked from the highest down and the first match wins,
    so each tier includes its lower bound.
    """
    for tier in StatusTier:
        if total_score >= tier.threshold:
            return tier
    return StatusTier.NEAR_TOP


def score_market_bottom(data: MarketData) -> ScoreResult:
    """Compute the composite bottom score for one set of readings."""
    fear_greed_score = score_fear_greed(data.fear_greed)
    vix_score = score_vix(data.vix)
    rsi_score = score_rsi(data.rsi_daily, data.rsi_weekly)
    put_call_score = score_put_call(data.put_call_ratio)

    total_score = fear_greed_score + vix_score + rsi_score + put_call_score
    tier = classify_score(total_score)

    return ScoreResult(
        total_score=total_score,
        fear_greed_score=fear_greed_score,
        vix_score=vix_score,
        rsi_score=rsi_score,
        put_call_score=put_call_score,
        status=tier.label,
        status_color=tier.color,
        tier=tier.number,
    )


def summarize(data: MarketData, result: ScoreResult) -> str:
    """One-line human-readable breakdown of a score."""
    return (
        f"Bottom score {result.total_score:.1f}/100 — {result.status}. "
        f"Fear & Greed {data.fear_greed:g} → {result.fear_greed_score:.1f} pts | "
        f"VIX {data.vix:g} → {result.vix_score:.1f} pts | "
        f"RSI avg {data.avg_rsi:g} → {result.rsi_score:.1f} pts | "
        f"Put/Call {data.put_call_ratio:g} → {result.put_call_score:.1f} pts"
    )
