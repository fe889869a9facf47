"""Unit tests for treasury quote parsing."""

import httpx
import pytest

from debtstack_chat.market.treasury import TreasuryError, fetch_treasury_yields, parse_quotes

QUOTES = {
    "US2Y": {"close": "4.21", "change": "-0.03", "percent_change": "-0.71", "previous_close": "4.24", "datetime": "2025-06-02"},
    "US10Y": {"close": "4.46", "change": "0.05", "percent_change": "1.13", "previous_close": "4.41", "datetime": "2025-06-02"},
    "US30Y": {"code": 404, "message": "symbol not found"},
}


class TestParseQuotes:
    """Tests for parse_quotes."""

    def test_one_entry_per_maturity_in_order(self):
        assert [y.maturity for y in parse_quotes(QUOTES)] == ["2Y", "5Y", "10Y", "30Y"]

    def test_values_are_numbers(self):
        two_year = parse_quotes(QUOTES)[0].as_dict()
        assert two_year == {
            "maturity": "2Y",
            "yield": 4.21,
            "change": -0.03,
            "percentChange": -0.71,
            "previousClose": 4.24,
            "timestamp": "2025-06-02",
        }

    def test_missing_quotes_are_null(self):
        yields = {y.maturity: y.as_dict() for y in parse_quotes(QUOTES)}

        for maturity in ("5Y", "30Y"):
            assert yields[maturity]["yield"] is None
            assert yields[maturity]["timestamp"] is None

    def test_garbage_payload(self):
        assert all(y.yield_ is None for y in parse_quotes(["unexpected"]))


class TestFetchTreasuryYields:
    """Tests for fetch_treasury_yields."""

    async def test_requests_all_symbols(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["params"] = dict(request.url.params)
            seen["path"] = request.url.path
            return httpx.Response(200, json=QUOTES)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            yields = await fetch_treasury_yields(client, "https://api.twelvedata.com", "td-key")

        assert seen["path"] == "/quote"
        assert seen["params"] == {"symbol": "US2Y,US5Y,US10Y,US30Y", "apikey": "td-key"}
        assert yields[2].yield_ == 4.46

    async def test_error_status(self):
        async with httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(429))) as client:
            with pytest.raises(TreasuryError) as exc_info:
                await fetch_treasury_yields(client, "https://api.twelvedata.com", "td-key")

        assert exc_info.value.status_code == 429
