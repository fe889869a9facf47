"""Treasury yield quotes from Twelve Data."""

import logging
from dataclasses import asdict, dataclass
from typing import Any

import httpx

logger = logging.getLogger(__name__)

MATURITY_SYMBOLS = {
    "US2Y": "2Y",
    "US5Y": "5Y",
    "US10Y": "10Y",
    "US30Y": "30Y",
}


class TreasuryError(Exception):
    """Twelve Data could not be queried."""

    def __init__(self, message: str, status_code: int = 500):
        self.status_code = status_code
        super().__init__(message)


@dataclass(frozen=True)
class TreasuryYield:
    maturity: str
    yield_: float | None = None
    change: float | None = None
    percent_change: float | None = None
    previous_close: float | None = None
    timestamp: str | None = None

    def as_dict(self) -> dict[str, Any]:
        data = asdict(self)
        return {
            "maturity": data["maturity"],
            "yield": data["yield_"],
            "change": data["change"],
            "percentChange": data["percent_change"],
            "previousClose": data["previous_close"],
            "timestamp": data["timestamp"],
        }


def _number(value: Any) -> float | None:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def parse_quotes(payload: Any) -> list[TreasuryYield]:
    """Turn a multi-symbol quote response into one entry per maturity.

    Maturities missing from the response, or quoted without a close, are
    returned with every value set to None.
    """
    quotes = payload if isinstance(payload, dict) else {}
    yields = []
    for symbol, maturity in MATURITY_SYMBOLS.items():
        quote = quotes.get(symbol)
        if not isinstance(quote, dict) or quote.get("close") is None:
            yields.append(TreasuryYield(maturity=maturity))
            continue
        yields.append(
            TreasuryYield(
                maturity=maturity,
                yield_=_number(quote.get("close")),
                change=_number(quote.get("change")),
                percent_change=_number(quote.get("percent_change")),
                previous_close=_number(quote.get("previous_close")),
                timestamp=quote.get("datetime"),
            )
        )
    return yields


async def fetch_treasury_yields(http_client: httpx.AsyncClient, base_url: str, api_key: str) -> list[TreasuryYield]:
    """Fetch the 2Y, 5Y, 10Y and 30Y treasury quotes.

    Raises:
        TreasuryError: If Twelve Data answers with a non-2xx status
    """
    response = await http_client.get(
        f"{base_url.rstrip('/')}/quote",
        params={"symbol": ",".join(MATURITY_SYMBOLS), "apikey": api_key},
    )
    if not response.is_success:
        raise TreasuryError("Failed to fetch treasury data", response.status_code)
    return parse_quotes(response.json())
