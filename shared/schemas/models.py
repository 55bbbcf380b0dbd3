"""
Data models for the trade aggregation pipeline.

Defines the core data structures used throughout the system
with validation and serialization support.
"""

from dataclasses import dataclass, field
from typing import Dict, Any, Optional, List, Union
from datetime import date, datetime
from enum import Enum

from shared.utils.errors import InvalidConfigurationError


TimestampValue = Union[str, datetime, int, float]


class Period(Enum):
    """Calendar period used to bucket trades."""
    DAILY = "Daily"
    WEEKLY = "Weekly"
    MONTHLY = "Monthly"
    QUARTERLY = "Quarterly"

    @classmethod
    def parse(cls, value: Union["Period", str]) -> "Period":
        """Resolve a period selector, rejecting anything unrecognized."""
        if isinstance(value, cls):
            return value

        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value.lower() == normalized:
                    return member

        raise InvalidConfigurationError(
            f"Unrecognized aggregation period: {value!r}",
            config_key="period",
            config_value=value,
            details={"allowed": [member.value for member in cls]},
        )


@dataclass(frozen=True)
class TradeRecord:
    """Single executed trade as delivered by the record source."""
    timestamp: TimestampValue
    trade_size: float
    price: float

    @property
    def notional(self) -> float:
        """Traded value of the record."""
        return self.trade_size * self.price

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary using the wire field names."""
        timestamp = self.timestamp
        if isinstance(timestamp, datetime):
            timestamp = timestamp.isoformat()
        return {
            "timestamp": timestamp,
            "tradeSize": self.trade_size,
            "price": self.price,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TradeRecord":
        """Create from dictionary, accepting wire or snake_case names."""
        trade_size = data["tradeSize"] if "tradeSize" in data else data["trade_size"]
        return cls(
            timestamp=data["timestamp"],
            trade_size=trade_size,
            price=data["price"],
        )


@dataclass
class Bucket:
    """All trades falling into one period instance."""
    key: str
    period_start: date
    records: List[TradeRecord] = field(default_factory=list)

    def add(self, record: TradeRecord) -> None:
        """Append a record, keeping first-seen order."""
        self.records.append(record)

    def __len__(self) -> int:
        return len(self.records)


@dataclass(frozen=True)
class ReducedBucket:
    """Aggregate metrics for one bucket."""
    key: str
    period_start: date
    total_volume: float
    total_notional: float
    trade_count: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "key": self.key,
            "period_start": self.period_start.isoformat(),
            "total_volume": self.total_volume,
            "total_notional": self.total_notional,
            "trade_count": self.trade_count,
        }


@dataclass(frozen=True)
class SkippedRecord:
    """Record excluded from aggregation and the reason for it."""
    index: int
    reason: str
    error_code: str
    value: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "index": self.index,
            "reason": self.reason,
            "error_code": self.error_code,
            "value": self.value,
        }


@dataclass
class AggregationResult:
    """Buckets produced by one aggregation call plus skipped records."""
    period: Period
    buckets: Dict[str, Bucket] = field(default_factory=dict)
    skipped: List[SkippedRecord] = field(default_factory=list)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    @property
    def record_count(self) -> int:
        return sum(len(bucket) for bucket in self.buckets.values())


@dataclass
class SeriesProjection:
    """Parallel label/value sequences for a bar-style display."""
    labels: List[str] = field(default_factory=list)
    values: List[float] = field(default_factory=list)
    label: str = "Total Volume"

    def __post_init__(self):
        if len(self.labels) != len(self.values):
            raise ValueError("labels and values must have the same length")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "label": self.label,
            "labels": list(self.labels),
            "values": list(self.values),
        }

    def to_chart_dict(
        self,
        background_color: str = "rgba(75,192,192,0.2)",
        border_color: str = "rgba(75,192,192,1)",
        border_width: int = 1,
    ) -> Dict[str, Any]:
        """Convert to the bar chart payload shape (labels plus one dataset)."""
        return {
            "labels": list(self.labels),
            "datasets": [
                {
                    "label": self.label,
                    "data": list(self.values),
                    "backgroundColor": background_color,
                    "borderColor": border_color,
                    "borderWidth": border_width,
                }
            ],
        }


@dataclass(frozen=True)
class HierarchyNode:
    """Leaf of the hierarchical projection."""
    name: str
    value: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {"name": self.name, "value": self.value}


@dataclass
class HierarchicalProjection:
    """Root-with-children value tree for a treemap-style display."""
    name: str = "Total Value"
    children: List[HierarchyNode] = field(default_factory=list)

    @property
    def total_value(self) -> float:
        return sum(child.value for child in self.children)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "children": [child.to_dict() for child in self.children],
        }
