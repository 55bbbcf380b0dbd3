"""Property tests for bucketing invariants.

These tests check that aggregation partitions its input, conserves
volume, is independent of input order, and always emits buckets in
calendar order.
"""

from collections import Counter

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from services.trade_view.app.buckets.aggregator import aggregate
from services.trade_view.app.buckets.periods import derive_key, key_start
from services.trade_view.app.pipeline import TradeViewPipeline
from tests.fixtures.trade_strategies import malformed_timestamp, periods, trade_record


records = st.lists(trade_record(), max_size=60)


class TestPartition:
    """Every valid record lands in exactly one bucket."""

    @settings(max_examples=100)
    @given(trades=records, period=periods)
    def test_buckets_are_a_permutation_of_input(self, trades, period):
        result = aggregate(trades, period)
        flattened = [record for bucket in result.buckets.values() for record in bucket.records]

        assert Counter(flattened) == Counter(trades)
        assert result.skipped == []

    @settings(max_examples=100)
    @given(trades=records, period=periods)
    def test_records_match_their_bucket_key(self, trades, period):
        result = aggregate(trades, period)

        for key, bucket in result.buckets.items():
            assert bucket.key == key
            assert all(derive_key(record.timestamp, period) == key for record in bucket.records)

    @settings(max_examples=100)
    @given(
        valid=records,
        invalid=st.lists(trade_record(timestamps=malformed_timestamp), max_size=10),
        period=periods,
        data=st.data(),
    )
    def test_invalid_records_are_skipped_not_lost(self, valid, invalid, period, data):
        mixed = data.draw(st.permutations(valid + invalid))

        result = aggregate(mixed, period)

        assert result.record_count == len(valid)
        assert result.skipped_count == len(invalid)
        assert sorted(item.index for item in result.skipped) == [
            index for index, record in enumerate(mixed) if record in invalid
        ]


class TestConservation:
    """Reduced volume equals the input volume for every period."""

    @settings(max_examples=100)
    @given(trades=records, period=periods)
    def test_total_volume_conserved(self, trades, period):
        result = TradeViewPipeline().run(trades, period)

        expected_volume = sum(trade.trade_size for trade in trades)
        expected_notional = sum(trade.trade_size * trade.price for trade in trades)

        assert sum(result.series.values) == pytest.approx(expected_volume, rel=1e-9, abs=1e-6)
        assert result.hierarchy.total_value == pytest.approx(expected_notional, rel=1e-9, abs=1e-3)
        assert sum(item.trade_count for item in result.reduced) == len(trades)


class TestDeterminism:
    """Input order never changes keys or membership."""

    @settings(max_examples=100)
    @given(trades=records, period=periods, data=st.data())
    def test_shuffled_input_same_buckets(self, trades, period, data):
        shuffled = data.draw(st.permutations(trades))

        original = aggregate(trades, period)
        reordered = aggregate(shuffled, period)

        assert list(original.buckets) == list(reordered.buckets)
        for key, bucket in original.buckets.items():
            assert Counter(bucket.records) == Counter(reordered.buckets[key].records)

    @settings(max_examples=50)
    @given(trades=records, period=periods)
    def test_repeat_runs_identical(self, trades, period):
        pipeline = TradeViewPipeline()

        assert pipeline.run(trades, period).to_dict() == pipeline.run(trades, period).to_dict()


class TestOrdering:
    """Projections enumerate buckets chronologically and in lockstep."""

    @settings(max_examples=100)
    @given(trades=records, period=periods)
    def test_projection_order(self, trades, period):
        result = TradeViewPipeline().run(trades, period)
        starts = [key_start(label, period) for label in result.series.labels]

        assert starts == sorted(starts)
        assert len(set(starts)) == len(starts)
        assert result.series.labels == [child.name for child in result.hierarchy.children]
        assert len(result.series.labels) == len(result.series.values)
