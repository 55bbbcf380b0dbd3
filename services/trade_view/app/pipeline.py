"""Aggregate, reduce and project trades in one call."""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Union

from shared.schemas.models import (
    Bucket,
    HierarchicalProjection,
    Period,
    ReducedBucket,
    SeriesProjection,
    SkippedRecord,
    TradeRecord,
)
from shared.utils.logging import add_period, get_logger

from .buckets.aggregator import aggregate
from .builders.palette import assign_colors
from .builders.projections import ProjectionBuilder
from .calculators.reducer import reduce_buckets


logger = get_logger(__name__)


@dataclass
class TradeViewResult:
    """Everything one pipeline run derives from its input records."""
    period: Period
    buckets: Dict[str, Bucket]
    reduced: List[ReducedBucket]
    series: SeriesProjection
    hierarchy: HierarchicalProjection
    skipped: List[SkippedRecord] = field(default_factory=list)
    colors: Dict[str, str] = field(default_factory=dict)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON document handed to renderers."""
        return {
            "period": self.period.value,
            "series": self.series.to_dict(),
            "bar_chart": self.series.to_chart_dict(),
            "hierarchy": self.hierarchy.to_dict(),
            "buckets": [item.to_dict() for item in self.reduced],
            "colors": dict(self.colors),
            "skipped_count": self.skipped_count,
            "skipped": [item.to_dict() for item in self.skipped],
        }


class TradeViewPipeline:
    """Stateless aggregation pipeline.

    Holds only configuration, so one instance can be reused for any number
    of runs with different periods over the same cached records.
    """

    def __init__(self, config=None):
        self.config = config
        self.default_period = getattr(config, "default_period", Period.DAILY)
        self.palette = getattr(config, "palette", None)
        self.projection_builder = ProjectionBuilder(config)

    def run(
        self,
        records: Iterable[TradeRecord],
        period: Optional[Union[Period, str]] = None,
    ) -> TradeViewResult:
        """Run aggregation for ``period`` (or the configured default).

        Raises:
            InvalidConfigurationError: If ``period`` is not recognized.
        """
        period = Period.parse(period if period is not None else self.default_period)
        log = add_period(logger, period.value)

        aggregation = aggregate(records, period)
        reduced = reduce_buckets(aggregation.buckets)
        projections = self.projection_builder.build(reduced)

        if aggregation.skipped:
            log.warning(
                "Trades excluded from aggregation",
                skipped_count=aggregation.skipped_count,
            )

        log.info(
            "Trade view built",
            bucket_count=len(reduced),
            record_count=aggregation.record_count,
            skipped_count=aggregation.skipped_count,
        )

        return TradeViewResult(
            period=period,
            buckets=aggregation.buckets,
            reduced=projections.reduced,
            series=projections.series,
            hierarchy=projections.hierarchy,
            skipped=aggregation.skipped,
            colors=assign_colors((item.key for item in projections.reduced), self.palette),
        )
