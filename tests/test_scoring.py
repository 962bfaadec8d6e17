import pytest

from market_bottom.core.models import StatusTier
from market_bottom.core.scoring import (
    classify_score,
    score_fear_greed,
    score_market_bottom,
    score_put_call,
    score_rsi,
    score_vix,
    summarize,
)

from .conftest import make_data


def test_covid_bottom_scores_tier_one():
    result = score_market_bottom(make_data(3, 82.7, 16, 32, 1.45))
    assert result.fear_greed_score == pytest.approx(24.25)
    assert result.vix_score == 25
    assert result.rsi_score == 25
    assert result.put_call_score == 25
    assert result.total_score == pytest.approx(99.25)
    assert result.tier == 1
    assert result.status == "century-level bottom (strong buy)"
    assert result.status_color == "red"


def test_neutral_readings_score_near_top():
    result = score_market_bottom(make_data(50, 15, 50, 50, 0.8))
    assert result.fear_greed_score == pytest.approx(12.5)
    assert result.vix_score == 0
    assert result.rsi_score == pytest.approx(12.5)
    assert result.put_call_score == pytest.approx(10)
    assert result.total_score == pytest.approx(35)
    assert result.tier == 5
    assert result.status == "near top (risk management)"


def test_euphoric_readings_clamp_to_zero():
    result = score_market_bottom(make_data(100, 10, 90, 90, 0.5))
    assert result.fear_greed_score == 0
    assert result.vix_score == 0
    assert result.rsi_score == 0
    assert result.put_call_score == 0
    assert result.total_score == 0
    assert result.tier == 5


def test_panic_readings_saturate_at_100():
    result = score_market_bottom(make_data(0, 40, 10, 10, 1.2))
    assert result.fear_greed_score == 25
    assert result.vix_score == 25
    assert result.rsi_score == 25
    assert result.put_call_score == 25
    assert result.total_score == 100
    assert result.status_tier is StatusTier.CENTURY_BOTTOM


@pytest.mark.parametrize(
    "data",
    [
        make_data(-500, -10, -200, 400, -3),
        make_data(1e6, 1e6, 1e6, 1e6, 1e6),
        make_data(-1e6, 0, -1e6, -1e6, 0),
        make_data(101, 29.999, 29.5, 30.5, 1.0999),
    ],
)
def test_out_of_range_inputs_stay_bounded(data):
    result = score_market_bottom(data)
    for sub in (result.fear_greed_score, result.vix_score, result.rsi_score, result.put_call_score):
        assert 0 <= sub <= 25
    assert 0 <= result.total_score <= 100


def test_vix_saturation_and_ramp():
    assert score_vix(0) == 0
    assert score_vix(15) == 0
    assert score_vix(22.5) == pytest.approx(12.5)
    assert score_vix(30) == 25
    assert score_vix(82.7) == 25


def test_clamped_formulas_saturate_at_boundaries():
    assert score_fear_greed(0) == 25
    assert score_fear_greed(-20) == 25
    assert score_fear_greed(100) == 0
    assert score_fear_greed(120) == 0
    assert score_rsi(30, 30) == 25
    assert score_rsi(70, 70) == 0
    assert score_rsi(10, 50) == 25
    assert score_put_call(0.6) == 0
    assert score_put_call(1.1) == pytest.approx(25)
    assert score_put_call(2.0) == 25


def test_sub_scores_are_monotonic():
    steps = [x / 2 for x in range(-40, 241)]

    fg = [score_fear_greed(v) for v in reversed(steps)]
    assert fg == sorted(fg)

    vix = [score_vix(v) for v in steps]
    assert vix == sorted(vix)

    rsi = [score_rsi(v, v) for v in reversed(steps)]
    assert rsi == sorted(rsi)

    pcr = [score_put_call(v / 50) for v in steps]
    assert pcr == sorted(pcr)


@pytest.mark.parametrize(
    "total, tier",
    [
        (100, 1),
        (90, 1),
        (89.999, 2),
        (80, 2),
        (79.999, 3),
        (70, 3),
        (69.999, 4),
        (60, 4),
        (59.999, 5),
        (0, 5),
        (-1e9, 5),
    ],
)
def test_classify_lower_bounds_inclusive(total, tier):
    assert classify_score(total).number == tier


def test_every_score_maps_to_exactly_one_tier():
    for i in range(0, 10001):
        total = i / 100
        matches = [
            t for t in StatusTier
            if total >= t.threshold and all(total < u.threshold for u in StatusTier if u.number < t.number)
        ]
        assert len(matches) == 1
        assert classify_score(total) is matches[0]


def test_summarize_mentions_each_indicator():
    data = make_data(3, 82.7, 16, 32, 1.45)
    text = summarize(data, score_market_bottom(data))
    assert text.startswith("Bottom score 99.")
    assert "century-level bottom" in text
    assert "VIX 82.7" in text
    assert "RSI avg 24" in text
    assert "Put/Call 1.45" in text
