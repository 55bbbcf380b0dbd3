"""Unit tests for the trade view pipeline."""

import pytest

from services.trade_view.app.pipeline import TradeViewPipeline
from services.trade_view.app.source.client import parse_payload
from shared.schemas.models import Period
from shared.utils.errors import InvalidConfigurationError
from tests.fixtures.sample_trades import make_trade


pytestmark = pytest.mark.usefixtures("clean_trade_view_env")


class TestTradeViewPipeline:
    """Test aggregate, reduce and project in one call."""

    def test_default_period_from_config(self, pipeline, sample_trades):
        result = pipeline.run(sample_trades)

        assert result.period is Period.DAILY
        assert result.series.labels == ["2023-01-01", "2023-01-02"]
        assert result.series.values == [10, 20]
        assert [child.value for child in result.hierarchy.children] == [50, 60]

    def test_configured_default_period(self, monkeypatch, sample_trades):
        monkeypatch.setenv("TRADE_VIEW_DEFAULT_PERIOD", "Monthly")
        from services.trade_view.app.config import TradeViewConfig

        result = TradeViewPipeline(TradeViewConfig()).run(sample_trades)

        assert result.period is Period.MONTHLY
        assert result.series.labels == ["2023-1"]
        assert result.series.values == [30]

    def test_without_config(self, sample_trades):
        result = TradeViewPipeline().run(sample_trades, "Quarterly")

        assert result.series.labels == ["2023-Q1"]
        assert result.hierarchy.name == "Total Value"

    def test_invalid_period_raises(self, pipeline, sample_trades):
        with pytest.raises(InvalidConfigurationError):
            pipeline.run(sample_trades, "Annually")

    def test_skipped_records_are_reported(self, pipeline, sample_trades):
        records = sample_trades + [make_trade("31/12/2023", trade_size=1000)]

        result = pipeline.run(records, Period.DAILY)

        assert result.skipped_count == 1
        assert result.skipped[0].index == 2
        assert sum(result.series.values) == 30

    def test_boolean_timestamp_from_payload_is_skipped(self, pipeline):
        records = parse_payload([
            {"timestamp": True, "tradeSize": 1, "price": 1},
            {"timestamp": "2023-01-01T00:00:00Z", "tradeSize": 2, "price": 1},
        ])

        result = pipeline.run(records, Period.DAILY)

        assert result.series.labels == ["2023-01-01"]
        assert result.skipped_count == 1
        assert result.skipped[0].value == "True"

    def test_empty_input(self, pipeline):
        result = pipeline.run([], Period.WEEKLY)

        assert result.buckets == {}
        assert result.reduced == []
        assert result.series.labels == []
        assert result.hierarchy.children == []
        assert result.to_dict()["skipped_count"] == 0

    def test_reuse_across_periods(self, pipeline, generated_trades):
        expected_volume = sum(trade.trade_size for trade in generated_trades)

        for period in Period:
            result = pipeline.run(generated_trades, period)
            assert sum(result.series.values) == pytest.approx(expected_volume)
            assert result.series.labels == [child.name for child in result.hierarchy.children]

    def test_repeat_runs_are_identical(self, pipeline, generated_trades):
        first = pipeline.run(generated_trades, Period.WEEKLY).to_dict()
        second = pipeline.run(generated_trades, Period.WEEKLY).to_dict()

        assert first == second

    def test_to_dict(self, pipeline, sample_trades):
        document = pipeline.run(sample_trades, "daily").to_dict()

        assert document["period"] == "Daily"
        assert document["series"]["labels"] == ["2023-01-01", "2023-01-02"]
        assert document["bar_chart"]["datasets"][0]["data"] == [10, 20]
        assert document["hierarchy"]["children"][1] == {"name": "2023-01-02", "value": 60}
        assert [item["key"] for item in document["buckets"]] == ["2023-01-01", "2023-01-02"]
        assert set(document["colors"]) == {"2023-01-01", "2023-01-02"}
        assert document["skipped"] == []
