"""HTTP client for the trades API."""

import asyncio
import json
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, List, Optional, Union

import aiohttp
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from shared.schemas.models import TradeRecord
from shared.utils.errors import SourceError, create_error_context
from shared.utils.logging import get_logger


logger = get_logger(__name__)


class TradePayload(BaseModel):
    """One item of the trades API response."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    # Left unparsed so the aggregator applies its invalid-timestamp policy
    timestamp: Any = None
    trade_size: float = Field(alias="tradeSize", ge=0, allow_inf_nan=False)
    price: float = Field(ge=0, allow_inf_nan=False)

    def to_record(self) -> TradeRecord:
        return TradeRecord(timestamp=self.timestamp, trade_size=self.trade_size, price=self.price)


def default_start_date(today: Optional[date] = None, years: int = 1) -> date:
    """Same calendar date ``years`` earlier; 29 February falls back to the 28th."""
    today = today or datetime.now(timezone.utc).date()
    try:
        return today.replace(year=today.year - years)
    except ValueError:
        return today.replace(year=today.year - years, day=28)


def parse_payload(items: Any) -> List[TradeRecord]:
    """Validate a decoded API response into trade records.

    Items failing validation (negative size or price, missing fields) are
    dropped with a warning.

    Raises:
        SourceError: If the payload is not a JSON array.
    """
    if not isinstance(items, list):
        raise SourceError(
            "Trades payload must be a JSON array",
            details={"payload_type": type(items).__name__},
        )

    records = []
    for index, item in enumerate(items):
        try:
            records.append(TradePayload.model_validate(item).to_record())
        except ValidationError as e:
            logger.warning(
                "Dropping invalid trade payload",
                index=index,
                errors=e.error_count(),
            )
    return records


def load_trades_file(path: Union[str, Path]) -> List[TradeRecord]:
    """Read trades from a JSON file shaped like the API response."""
    path = Path(path)
    try:
        items = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise SourceError(f"Failed to read trades file {path}: {e}", url=str(path)) from e
    return parse_payload(items)


class TradeSourceClient:
    """Fetches trade records from the trades API.

    The client owns its ``aiohttp`` session unless one is injected. Use it
    as an async context manager or call ``start``/``stop`` explicitly.
    """

    def __init__(self, config, session: Optional[aiohttp.ClientSession] = None):
        self.config = config
        self.service_name = getattr(config, "service_name", "trade-view")
        self.base_url = getattr(config, "source_url", "http://localhost:5072/api/trades")
        self.timeout_seconds = getattr(config, "source_timeout_seconds", 10.0)
        self.session = session
        self._owns_session = session is None

    async def __aenter__(self) -> "TradeSourceClient":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop()

    async def start(self) -> None:
        """Open the HTTP session."""
        if self.session:
            return
        self.session = aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=self.timeout_seconds)
        )
        self._owns_session = True

    async def stop(self) -> None:
        """Close the HTTP session if this client opened it."""
        if self.session and self._owns_session:
            await self.session.close()
        self.session = None

    async def fetch_trades(
        self,
        start_timestamp: Union[datetime, date, str],
        min_trade_size: float = 0,
    ) -> List[TradeRecord]:
        """Fetch trades since ``start_timestamp`` at or above ``min_trade_size``.

        Raises:
            SourceError: On transport failure, non-2xx status, or a body
                that is not a JSON array.
        """
        if not self.session:
            await self.start()

        params = {
            "startTimestamp": self._format_start(start_timestamp),
            "minQuoteSize": self._format_number(min_trade_size),
        }
        context = create_error_context(
            service=self.service_name,
            operation="fetch_trades",
            metadata=dict(params),
        )

        try:
            async with self.session.get(
                self.base_url,
                params=params,
                headers={"Content-Type": "application/json"},
            ) as response:
                if response.status < 200 or response.status >= 300:
                    body = await response.text()
                    raise SourceError(
                        f"HTTP error! Status: {response.status}",
                        url=self.base_url,
                        status=response.status,
                        context=context,
                        details={"body": body[:500]},
                    )
                items = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.error("Trades request failed", url=self.base_url, error=str(e))
            raise SourceError(
                f"Failed to fetch trades: {e}", url=self.base_url, context=context
            ) from e

        records = parse_payload(items)
        logger.info(
            "Fetched trades",
            url=self.base_url,
            start_timestamp=params["startTimestamp"],
            record_count=len(records),
        )
        return records

    def _format_start(self, value: Union[datetime, date, str]) -> str:
        if isinstance(value, datetime):
            if value.tzinfo is None:
                value = value.replace(tzinfo=timezone.utc)
            return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")
        if isinstance(value, date):
            return f"{value.isoformat()}T00:00:00Z"
        return value

    def _format_number(self, value: float) -> str:
        if float(value).is_integer():
            return str(int(value))
        return str(value)
