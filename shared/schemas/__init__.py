"""
Schema definitions for trade aggregation.

Provides type-safe models for:
- Trade records received from the record source
- Buckets and their reduced metrics
- Series and hierarchical projections handed to renderers
"""

from .models import (
    Period,
    TradeRecord,
    Bucket,
    ReducedBucket,
    SkippedRecord,
    AggregationResult,
    SeriesProjection,
    HierarchyNode,
    HierarchicalProjection,
)

__all__ = [
    "Period",
    "TradeRecord",
    "Bucket",
    "ReducedBucket",
    "SkippedRecord",
    "AggregationResult",
    "SeriesProjection",
    "HierarchyNode",
    "HierarchicalProjection",
]
