"""Configuration for the trade view service."""

import os
from shared.framework.config import ServiceConfig
from shared.schemas.models import Period


DEFAULT_PALETTE = (
    "#4bc0c0",
    "#36a2eb",
    "#ff6384",
    "#ff9f40",
    "#9966ff",
    "#ffcd56",
    "#c9cbcf",
    "#2e7d32",
)


class TradeViewConfig(ServiceConfig):
    """Configuration for the trade view service."""

    def __init__(self) -> None:
        super().__init__(service_name="trade-view")

        self.source_url = os.getenv("TRADE_VIEW_SOURCE_URL", "http://localhost:5072/api/trades")
        self.source_timeout_seconds = float(os.getenv("TRADE_VIEW_SOURCE_TIMEOUT_SECONDS", "10"))
        self.min_trade_size = float(os.getenv("TRADE_VIEW_MIN_TRADE_SIZE", "0"))
        self.lookback_years = int(os.getenv("TRADE_VIEW_LOOKBACK_YEARS", "1"))

        self.default_period = Period.parse(os.getenv("TRADE_VIEW_DEFAULT_PERIOD", "Daily"))

        self.series_label = os.getenv("TRADE_VIEW_SERIES_LABEL", "Total Volume")
        self.hierarchy_root_name = os.getenv("TRADE_VIEW_HIERARCHY_ROOT_NAME", "Total Value")

        palette = os.getenv("TRADE_VIEW_PALETTE")
        self.palette = tuple(
            color.strip() for color in palette.split(",") if color.strip()
        ) if palette else DEFAULT_PALETTE

        if self.source_timeout_seconds <= 0:
            raise ValueError("source_timeout_seconds must be positive")
        if self.min_trade_size < 0:
            raise ValueError("min_trade_size must be non-negative")
        if self.lookback_years < 1:
            raise ValueError("lookback_years must be at least 1")
        if not self.palette:
            raise ValueError("palette must contain at least one color")

    def to_dict(self):
        """Convert configuration to dictionary."""
        result = super().to_dict()
        result.update({
            "source_url": self.source_url,
            "source_timeout_seconds": self.source_timeout_seconds,
            "min_trade_size": self.min_trade_size,
            "lookback_years": self.lookback_years,
            "default_period": self.default_period.value,
            "series_label": self.series_label,
            "hierarchy_root_name": self.hierarchy_root_name,
            "palette": list(self.palette),
        })
        return result
