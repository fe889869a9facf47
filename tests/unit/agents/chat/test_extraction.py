"""Unit tests for model output parsing and debt extraction."""

from unittest.mock import AsyncMock, Mock

import pytest
from langchain_core.messages import AIMessage

from debtstack_chat.agents.chat.research import ExtractionError
from debtstack_chat.agents.chat.research.extraction import DebtExtractor, parse_model_json


def fake_llm(content) -> Mock:
    llm = Mock()
    llm.ainvoke = AsyncMock(return_value=AIMessage(content=content))
    return llm


class TestParseModelJson:
    """Tests for parse_model_json."""

    def test_plain_json(self):
        assert parse_model_json('{"ticker": "RIG"}') == {"ticker": "RIG"}

    def test_code_fence(self):
        text = 'Here you go:\n```json\n{"ticker": "RIG"}\n```\nDone.'
        assert parse_model_json(text) == {"ticker": "RIG"}

    def test_trailing_commas(self):
        assert parse_model_json('{"instruments": [{"name": "A",},],}') == {"instruments": [{"name": "A"}]}

    def test_invalid_json(self):
        with pytest.raises(ExtractionError, match="Failed to parse extraction output"):
            parse_model_json("not json at all")

    def test_non_object(self):
        with pytest.raises(ExtractionError):
            parse_model_json("[1, 2]")


class TestDebtExtractor:
    """Tests for DebtExtractor.extract."""

    async def test_builds_result_with_fallbacks(self):
        llm = fake_llm(
            """```json
            {
              "company_name": "Transocean Ltd.",
              "filing_scale": "millions",
              "instruments": [
                {"name": "8.75% Senior Secured Notes due 2030", "interest_rate": 875,
                 "outstanding_cents": 82500000000, "maturity_date": "2030-02-15"},
                "not an instrument"
              ],
              "total_debt_cents": 700000000000,
            }
            ```"""
        )

        result = await DebtExtractor(llm).extract("Long-term debt ...", "RIG", "1451505", "2025-02-20")

        assert result.company_name == "Transocean Ltd."
        assert result.ticker == "RIG"
        assert result.cik == "1451505"
        assert result.filing_date == "2025-02-20"
        assert result.filing_scale == "millions"
        assert len(result.instruments) == 1
        assert result.instruments[0].interest_rate == 875
        assert result.total_debt_cents == 700000000000

    async def test_section_is_embedded_in_prompt(self):
        llm = fake_llm('{"instruments": []}')

        await DebtExtractor(llm).extract("UNIQUE-SECTION-TEXT", "RIG", "1", "2025-01-01")

        (messages,), _ = llm.ainvoke.call_args
        assert "UNIQUE-SECTION-TEXT" in messages[0].content
        assert "{debt_section}" not in messages[0].content

    async def test_missing_fields_default(self):
        result = await DebtExtractor(fake_llm("{}")).extract("s", "GM", "1467858", "2025-02-01")

        assert result.company_name == "GM"
        assert result.filing_scale == "unknown"
        assert result.instruments == []
        assert result.total_debt_cents is None

    async def test_block_content(self):
        llm = fake_llm([{"type": "text", "text": '{"ticker": "GM"}'}])
        result = await DebtExtractor(llm).extract("s", "GM", "1", "2025-01-01")
        assert result.ticker == "GM"

    async def test_mistyped_instruments_are_kept_as_written(self):
        llm = fake_llm(
            """{"instruments": [
              {"name": "5.25% Notes due 2029", "interest_rate": "5.25%", "outstanding_cents": "1,500,000"},
              {"name": 2031, "interest_rate": 650, "issuer_entity": "GM Financial"}
            ]}"""
        )

        result = await DebtExtractor(llm).extract("s", "GM", "1", "2025-01-01")

        assert len(result.instruments) == 2
        assert result.instruments[0].interest_rate == "5.25%"
        assert result.instruments[0].outstanding_cents == "1,500,000"
        assert result.instruments[1].name == 2031
        dumped = result.model_dump()["instruments"][1]
        assert dumped["issuer_entity"] == "GM Financial"
