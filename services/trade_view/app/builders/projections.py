"""Series and hierarchical projections of reduced buckets."""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from shared.schemas.models import (
    HierarchicalProjection,
    HierarchyNode,
    ReducedBucket,
    SeriesProjection,
)
from shared.utils.logging import get_logger


logger = get_logger(__name__)


@dataclass
class ProjectionSet:
    """Both chart views built from one ordered bucket sequence."""
    series: SeriesProjection
    hierarchy: HierarchicalProjection
    reduced: List[ReducedBucket] = field(default_factory=list)


class ProjectionBuilder:
    """Builder for the bar series and treemap projections.

    Both projections are built from the same chronologically sorted
    sequence, so ``series.labels[i]`` and ``hierarchy.children[i].name``
    always refer to the same bucket.
    """

    def __init__(self, config=None):
        self.config = config
        self.series_label = getattr(config, "series_label", "Total Volume")
        self.root_name = getattr(config, "hierarchy_root_name", "Total Value")

    def build(self, reduced: Iterable[ReducedBucket]) -> ProjectionSet:
        """Sort ``reduced`` once and build both projections from it."""
        ordered = self._order(reduced)
        projections = ProjectionSet(
            series=self._series(ordered),
            hierarchy=self._hierarchy(ordered),
            reduced=ordered,
        )
        logger.debug("Built projections", bucket_count=len(ordered))
        return projections

    def build_series(self, reduced: Iterable[ReducedBucket]) -> SeriesProjection:
        """Build the label/volume series in chronological order."""
        return self._series(self._order(reduced))

    def build_hierarchy(self, reduced: Iterable[ReducedBucket]) -> HierarchicalProjection:
        """Build the notional-weighted tree in chronological order."""
        return self._hierarchy(self._order(reduced))

    def _order(self, reduced: Iterable[ReducedBucket]) -> List[ReducedBucket]:
        return sorted(reduced, key=lambda item: item.period_start)

    def _series(self, ordered: List[ReducedBucket]) -> SeriesProjection:
        return SeriesProjection(
            labels=[item.key for item in ordered],
            values=[item.total_volume for item in ordered],
            label=self.series_label,
        )

    def _hierarchy(self, ordered: List[ReducedBucket]) -> HierarchicalProjection:
        return HierarchicalProjection(
            name=self.root_name,
            children=[
                HierarchyNode(name=item.key, value=item.total_notional)
                for item in ordered
            ],
        )


def build_projections(
    reduced: Iterable[ReducedBucket],
    series_label: Optional[str] = None,
    root_name: Optional[str] = None,
) -> ProjectionSet:
    """Build both projections with optional label overrides."""
    builder = ProjectionBuilder()
    if series_label is not None:
        builder.series_label = series_label
    if root_name is not None:
        builder.root_name = root_name
    return builder.build(reduced)
