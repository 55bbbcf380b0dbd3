"""Sample trade generators for testing."""

from datetime import datetime, timedelta, timezone
from typing import Dict, Any, List

from shared.schemas.models import TradeRecord


def make_trade(timestamp, trade_size: float = 1.0, price: float = 1.0) -> TradeRecord:
    """Build a single trade record."""
    return TradeRecord(timestamp=timestamp, trade_size=trade_size, price=price)


class SampleTradeGenerator:
    """Generator for sample trades for testing."""

    @staticmethod
    def generate_payload(count: int = 100, start: datetime = None, step: timedelta = None) -> List[Dict[str, Any]]:
        """Generate trades shaped like the trades API response."""
        start = start or datetime(2023, 1, 1, tzinfo=timezone.utc)
        step = step or timedelta(hours=13)
        payload = []

        for i in range(count):
            payload.append({
                'timestamp': (start + step * i).isoformat().replace('+00:00', 'Z'),
                'tradeSize': float(10 + i % 7),
                'price': 100.0 + (i * 0.5),
            })

        return payload

    @staticmethod
    def generate_trades(count: int = 100, start: datetime = None, step: timedelta = None) -> List[TradeRecord]:
        """Generate trade records."""
        return [
            TradeRecord.from_dict(item)
            for item in SampleTradeGenerator.generate_payload(count, start, step)
        ]
