"""Pytest configuration and fixtures."""

import pytest

from services.trade_view.app.config import TradeViewConfig
from services.trade_view.app.pipeline import TradeViewPipeline
from tests.fixtures.sample_trades import SampleTradeGenerator, make_trade


TRADE_VIEW_ENV_VARS = [
    "TRADE_VIEW_ENV",
    "TRADE_VIEW_LOG_LEVEL",
    "TRADE_VIEW_LOG_FORMAT",
    "TRADE_VIEW_SOURCE_URL",
    "TRADE_VIEW_SOURCE_TIMEOUT_SECONDS",
    "TRADE_VIEW_MIN_TRADE_SIZE",
    "TRADE_VIEW_LOOKBACK_YEARS",
    "TRADE_VIEW_DEFAULT_PERIOD",
    "TRADE_VIEW_SERIES_LABEL",
    "TRADE_VIEW_HIERARCHY_ROOT_NAME",
    "TRADE_VIEW_PALETTE",
]


@pytest.fixture
def clean_trade_view_env(monkeypatch):
    """Keep host environment variables out of configuration tests."""
    for name in TRADE_VIEW_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def trade_view_config(clean_trade_view_env):
    """Default trade view configuration fixture."""
    return TradeViewConfig()


@pytest.fixture
def pipeline(trade_view_config):
    """Pipeline built from the default configuration."""
    return TradeViewPipeline(trade_view_config)


@pytest.fixture
def sample_payload():
    """Two trades on consecutive days, as returned by the trades API."""
    return [
        {'timestamp': '2023-01-01T00:00:00Z', 'tradeSize': 10, 'price': 5},
        {'timestamp': '2023-01-02T00:00:00Z', 'tradeSize': 20, 'price': 3},
    ]


@pytest.fixture
def sample_trades(sample_payload):
    """Trade records for the two-day sample."""
    return [make_trade(item['timestamp'], item['tradeSize'], item['price']) for item in sample_payload]


@pytest.fixture
def generated_trades():
    """A few hundred trades spread over several months."""
    return SampleTradeGenerator.generate_trades(count=400)
