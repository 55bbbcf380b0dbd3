"""
Record source adapters.

Retrieve trade records from the trades API or a JSON file and hand them
to the aggregation pipeline.
"""

from .client import TradePayload, TradeSourceClient, default_start_date, load_trades_file, parse_payload

__all__ = [
    "TradePayload",
    "TradeSourceClient",
    "default_start_date",
    "load_trades_file",
    "parse_payload",
]
