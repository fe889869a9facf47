"""Integration tests for GET /api/treasury."""

import httpx
from fastapi import FastAPI
from fastapi.testclient import TestClient

QUOTES = {
    "US2Y": {"close": "4.21", "change": "-0.03", "percent_change": "-0.71", "previous_close": "4.24", "datetime": "2025-06-02"},
    "US5Y": {"close": "4.10", "change": "0.00", "percent_change": "0.00", "previous_close": "4.10", "datetime": "2025-06-02"},
    "US10Y": {"close": "4.46", "change": "0.05", "percent_change": "1.13", "previous_close": "4.41", "datetime": "2025-06-02"},
}


def with_twelve_data(app: FastAPI, response: httpx.Response) -> TestClient:
    app.state.http_client = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: response))
    return TestClient(app)


class TestTreasuryEndpoint:
    """Tests for the treasury endpoint."""

    def test_returns_yields_with_cache_header(self, test_app: FastAPI):
        client = with_twelve_data(test_app, httpx.Response(200, json=QUOTES))

        response = client.get("/api/treasury")

        assert response.status_code == 200
        assert response.headers["cache-control"] == "public, s-maxage=300, stale-while-revalidate=600"
        yields = response.json()["yields"]
        assert [y["maturity"] for y in yields] == ["2Y", "5Y", "10Y", "30Y"]
        assert yields[2]["yield"] == 4.46
        assert yields[3] == {
            "maturity": "30Y",
            "yield": None,
            "change": None,
            "percentChange": None,
            "previousClose": None,
            "timestamp": None,
        }

    def test_upstream_error_status_is_relayed(self, test_app: FastAPI):
        client = with_twelve_data(test_app, httpx.Response(429))

        response = client.get("/api/treasury")

        assert response.status_code == 429
        assert response.json() == {"error": "Failed to fetch treasury data"}

    def test_missing_api_key(self, test_app: FastAPI):
        test_app.state.settings = test_app.state.settings.model_copy(
            update={"twelve_data": test_app.state.settings.twelve_data.model_copy(update={"api_key": ""})}
        )

        response = TestClient(test_app).get("/api/treasury")

        assert response.status_code == 503
        assert response.json() == {"error": "Treasury data API key not configured"}
