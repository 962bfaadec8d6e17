import pytest

from market_bottom.core.models import MarketData


def make_data(fear_greed=50, vix=15, rsi_daily=50, rsi_weekly=50, put_call_ratio=0.8) -> MarketData:
    return MarketData(
        fear_greed=fear_greed,
        vix=vix,
        rsi_daily=rsi_daily,
        rsi_weekly=rsi_weekly,
        put_call_ratio=put_call_ratio,
    )


@pytest.fixture()
def neutral_data() -> MarketData:
    return make_data()


@pytest.fixture()
def no_api_key(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("API_KEY", raising=False)
