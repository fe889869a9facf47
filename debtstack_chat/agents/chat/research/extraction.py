"""Structured debt extraction from a filing section using a hosted LLM."""

import json
import logging
import re
from typing import Any

from langchain_core.messages import HumanMessage
from langchain_core.runnables import Runnable
from pydantic import BaseModel, ConfigDict, Field

from debtstack_chat.agents.chat.research.exceptions import ExtractionError

logger = logging.getLogger(__name__)

EXTRACTION_PROMPT = """Extract ALL INDIVIDUAL DEBT INSTRUMENTS from this SEC 10-K filing debt section.

CRITICAL RULES:
- Extract EACH INDIVIDUAL instrument separately, NOT totals or aggregates.
- Amounts must be in CENTS (1 dollar = 100 cents, so $1 billion = 100,000,000,000 cents).
- Interest rates in BASIS POINTS (1% = 100 bps, so 5.25% = 525 bps).
- DETECT THE FILING'S SCALE from the document header (look for "in millions", "in thousands", "in billions", "$000") and convert amounts accordingly.

For each instrument extract:
- name: Specific name (e.g., "5.25% Senior Notes due 2030")
- instrument_type: One of: senior_notes, senior_secured_notes, subordinated_notes, convertible_notes, term_loan, revolver, abl, commercial_paper, debenture, mortgage, bond, other
- seniority: senior_secured, senior_unsecured, or subordinated
- rate_type: fixed or floating
- interest_rate: For fixed rate, in basis points (525 for 5.25%)
- spread_bps: For floating rate, spread over benchmark in bps
- benchmark: For floating rate (SOFR, Prime, etc.)
- outstanding_cents: Current outstanding amount in CENTS
- maturity_date: YYYY-MM-DD format
- cusip: 9-character CUSIP if disclosed, else null

Return JSON with this exact structure:
{
  "company_name": "Full legal company name",
  "ticker": "TICKER",
  "filing_date": "YYYY-MM-DD",
  "filing_scale": "millions|thousands|billions|units",
  "instruments": [
    {
      "name": "5.25% Senior Notes due 2030",
      "instrument_type": "senior_notes",
      "seniority": "senior_unsecured",
      "rate_type": "fixed",
      "interest_rate": 525,
      "spread_bps": null,
      "benchmark": null,
      "outstanding_cents": 150000000000,
      "maturity_date": "2030-06-15",
      "cusip": null
    }
  ],
  "total_debt_cents": 500000000000
}

IMPORTANT: Return ONLY the JSON object. No markdown, no code blocks, no explanatory text.

<filing_section>
{debt_section}
</filing_section>"""

_CODE_FENCE_RE = re.compile(r"```(?:json)?\s*\n?([\s\S]*?)```")
_TRAILING_COMMA_RE = re.compile(r",\s*([\]}])")


class DebtInstrument(BaseModel):
    """One instrument as reported by the model.

    Values are kept as the model wrote them (``"5.25%"`` stays a string) and
    unknown keys are preserved.
    """

    model_config = ConfigDict(extra="allow")

    name: Any = None
    instrument_type: Any = None
    seniority: Any = None
    rate_type: Any = None
    interest_rate: Any = None
    spread_bps: Any = None
    benchmark: Any = None
    outstanding_cents: Any = None
    maturity_date: Any = None
    cusip: Any = None


class ResearchResult(BaseModel):
    company_name: Any
    ticker: Any
    cik: str
    filing_date: Any
    filing_scale: Any = "unknown"
    instruments: list[DebtInstrument] = Field(default_factory=list)
    total_debt_cents: Any = None


def parse_model_json(text: str) -> dict[str, Any]:
    """Parse the model's JSON answer, tolerating code fences and trailing commas.

    Raises:
        ExtractionError: If the remaining text is not a JSON object
    """
    match = _CODE_FENCE_RE.search(text)
    json_str = match.group(1) if match else text
    json_str = _TRAILING_COMMA_RE.sub(r"\1", json_str)
    try:
        parsed = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise ExtractionError(str(e)) from e
    if not isinstance(parsed, dict):
        raise ExtractionError(f"expected a JSON object, got {type(parsed).__name__}")
    return parsed


def _message_text(message: Any) -> str:
    content = getattr(message, "content", message)
    if isinstance(content, str):
        return content
    return "".join(
        block.get("text", "") if isinstance(block, dict) else str(block) for block in content
    )


class DebtExtractor:
    """Turns a debt section into a ``ResearchResult`` with one LLM call."""

    def __init__(self, llm: Runnable):
        self.llm = llm

    async def extract(self, debt_section: str, ticker: str, cik: str, filing_date: str) -> ResearchResult:
        prompt = EXTRACTION_PROMPT.replace("{debt_section}", debt_section)
        response = await self.llm.ainvoke([HumanMessage(content=prompt)])
        parsed = parse_model_json(_message_text(response))

        instruments = parsed.get("instruments")
        result = ResearchResult(
            company_name=parsed.get("company_name") or ticker,
            ticker=parsed.get("ticker") or ticker,
            cik=cik,
            filing_date=parsed.get("filing_date") or filing_date,
            filing_scale=parsed.get("filing_scale") or "unknown",
            instruments=[
                DebtInstrument.model_validate(item)
                for item in (instruments if isinstance(instruments, list) else [])
                if isinstance(item, dict)
            ],
            total_debt_cents=parsed.get("total_debt_cents") or None,
        )
        logger.info(f"Extracted {len(result.instruments)} debt instruments for {ticker}")
        return result
