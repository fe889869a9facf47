"""Unit tests for tool response shaping."""

from debtstack_chat.agents.chat.tools.shaping import shape_response, slim_item


def bonds(count: int) -> list[dict]:
    return [{"cusip": f"00000000{i}", "name": f"Note {i}"} for i in range(count)]


class TestShapeResponse:
    """Tests for shape_response."""

    def test_caps_list_and_marks_truncation(self):
        shaped = shape_response({"data": bonds(45), "meta": {"total": 45}}, max_items=20)

        assert len(shaped["data"]) == 20
        assert shaped["_truncated"] == {"shown": 20, "total": 45}
        assert shaped["meta"] == {"total": 45}

    def test_short_list_has_no_marker(self):
        shaped = shape_response({"data": bonds(3)})

        assert len(shaped["data"]) == 3
        assert "_truncated" not in shaped

    def test_exactly_at_cap_has_no_marker(self):
        assert "_truncated" not in shape_response({"data": bonds(20)}, max_items=20)

    def test_non_list_data_passes_through(self):
        payload = {"data": {"ticker": "AAPL", "collateral": "x"}}
        assert shape_response(payload) is payload

    def test_non_dict_passes_through(self):
        assert shape_response([1, 2, 3]) == [1, 2, 3]
        assert shape_response(None) is None

    def test_does_not_mutate_input(self):
        payload = {"data": bonds(25)}
        shape_response(payload, max_items=5)
        assert len(payload["data"]) == 25


class TestSlimItem:
    """Tests for slim_item."""

    def test_drops_verbose_fields(self):
        item = {
            "name": "8.75% Senior Secured Notes due 2030",
            "collateral": [{"type": "vessels"}],
            "collateral_data_confidence": 0.4,
            "guarantee_data_confidence": 0.9,
        }
        assert slim_item(item) == {"name": "8.75% Senior Secured Notes due 2030"}

    def test_collapses_pricing(self):
        item = {
            "cusip": "893830BK8",
            "pricing": {
                "last_price": 94.25,
                "ytm": 10.1,
                "spread": 612,
                "price_source": "TRACE",
                "last_trade_date": "2025-01-02",
                "staleness_days": 3,
            },
        }

        assert slim_item(item)["pricing"] == {"last_price": 94.25, "ytm": 10.1, "spread": 612, "price_source": "TRACE"}

    def test_missing_pricing_fields_are_null(self):
        assert slim_item({"pricing": {"ytm": 7.0}})["pricing"] == {
            "last_price": None,
            "ytm": 7.0,
            "spread": None,
            "price_source": None,
        }

    def test_null_pricing_is_kept(self):
        assert slim_item({"pricing": None}) == {"pricing": None}

    def test_non_dict_items_pass_through(self):
        assert slim_item("AAPL") == "AAPL"
