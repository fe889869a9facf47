"""Tool catalog exposed to the model.

Each entry is an OpenAI-format function definition bound to the chat model.
The names here are the only ones the dispatcher will execute.
"""

from decimal import Decimal
from enum import StrEnum
from typing import Any


class ToolName(StrEnum):
    SEARCH_COMPANIES = "search_companies"
    SEARCH_BONDS = "search_bonds"
    RESOLVE_BOND = "resolve_bond"
    GET_GUARANTORS = "get_guarantors"
    GET_CORPORATE_STRUCTURE = "get_corporate_structure"
    SEARCH_PRICING = "search_pricing"
    SEARCH_DOCUMENTS = "search_documents"
    GET_CHANGES = "get_changes"
    RESEARCH_COMPANY = "research_company"

    @classmethod
    def parse(cls, name: str) -> "ToolName | None":
        try:
            return cls(name)
        except ValueError:
            return None


# Pay-as-you-go price per call, in dollars
TOOL_COSTS: dict[ToolName, Decimal] = {
    ToolName.SEARCH_COMPANIES: Decimal("0.05"),
    ToolName.SEARCH_BONDS: Decimal("0.05"),
    ToolName.RESOLVE_BOND: Decimal("0.05"),
    ToolName.GET_GUARANTORS: Decimal("0.15"),
    ToolName.GET_CORPORATE_STRUCTURE: Decimal("0.15"),
    ToolName.SEARCH_PRICING: Decimal("0.05"),
    ToolName.SEARCH_DOCUMENTS: Decimal("0.15"),
    ToolName.GET_CHANGES: Decimal("0.10"),
    ToolName.RESEARCH_COMPANY: Decimal("0"),
}

SENIORITIES = ["senior_secured", "senior_unsecured", "subordinated"]

SECTION_TYPES = [
    "debt_footnote",
    "credit_agreement",
    "indenture",
    "covenants",
    "mda_liquidity",
    "exhibit_21",
    "guarantor_list",
]


def _tool(name: ToolName, description: str, properties: dict[str, Any], required: list[str]):
    return {
        "type": "function",
        "function": {
            "name": name.value,
            "description": description,
            "parameters": {
                "type": "object",
                "properties": properties,
                "required": required,
            },
        },
    }


_TICKERS = {"type": "string", "description": "Company ticker(s), comma-separated"}
_LIMIT = {"type": "integer", "description": "Maximum results (default 10)"}

TOOL_DEFINITIONS: list[dict[str, Any]] = [
    _tool(
        ToolName.SEARCH_COMPANIES,
        "Search companies by ticker, sector, leverage ratio, and risk flags. "
        "Use to find companies with specific characteristics, compare leverage across peers, "
        "or screen for structural subordination risk. "
        "Example: 'Find tech companies with leverage above 4x'",
        {
            "ticker": {"type": "string", "description": "Comma-separated tickers (e.g., 'AAPL,MSFT,GOOGL')"},
            "sector": {"type": "string", "description": "Filter by sector (e.g., 'Technology', 'Energy')"},
            "min_leverage": {"type": "number", "description": "Minimum leverage ratio"},
            "max_leverage": {"type": "number", "description": "Maximum leverage ratio"},
            "has_structural_sub": {"type": "boolean", "description": "Filter for structural subordination"},
            "sort": {
                "type": "string",
                "description": "Sort field, prefix with - for descending (e.g., '-net_leverage_ratio')",
            },
            "limit": _LIMIT,
        },
        [],
    ),
    _tool(
        ToolName.SEARCH_BONDS,
        "Search bonds by ticker, seniority, yield, spread, and maturity. "
        "Use for yield hunting, finding high-yield opportunities, or analyzing maturity walls. "
        "Example: 'Find senior unsecured bonds yielding above 8%'",
        {
            "ticker": _TICKERS,
            "seniority": {"type": "string", "enum": SENIORITIES, "description": "Bond seniority level"},
            "min_ytm": {"type": "number", "description": "Minimum yield to maturity (%)"},
            "has_pricing": {"type": "boolean", "description": "Only bonds with pricing data"},
            "maturity_before": {"type": "string", "description": "Maturity before date (YYYY-MM-DD)"},
            "limit": {"type": "integer", "description": "Maximum results (default 50)"},
        },
        [],
    ),
    _tool(
        ToolName.RESOLVE_BOND,
        "Look up a bond by CUSIP, ISIN, or description. "
        "Use when you have a partial bond identifier and need full details. "
        "Example: 'RIG 8% 2027' or 'CUSIP 893830AK8'",
        {
            "query": {
                "type": "string",
                "description": "Bond identifier - CUSIP, ISIN, or description (e.g., 'RIG 8% 2027')",
            },
        },
        ["query"],
    ),
    _tool(
        ToolName.GET_GUARANTORS,
        "Find all entities that guarantee a bond. "
        "Use to understand guarantee coverage and structural subordination risk. "
        "Pass a CUSIP, ISIN or bond description.",
        {"bond_id": {"type": "string", "description": "Bond CUSIP, ISIN or description"}},
        ["bond_id"],
    ),
    _tool(
        ToolName.GET_CORPORATE_STRUCTURE,
        "Get the full corporate structure for a company. "
        "Shows parent-subsidiary hierarchy, entity types, and debt at each level. "
        "Use to understand structural subordination and where debt sits in the org.",
        {"ticker": {"type": "string", "description": "Company ticker (e.g., 'RIG', 'CHTR')"}},
        ["ticker"],
    ),
    _tool(
        ToolName.SEARCH_PRICING,
        "Get bond pricing from FINRA TRACE. "
        "Returns current price, yield to maturity, and spread to treasury. "
        "Use to find distressed bonds or compare relative value.",
        {
            "ticker": _TICKERS,
            "cusip": {"type": "string", "description": "Bond CUSIP(s)"},
            "min_ytm": {"type": "number", "description": "Minimum yield to maturity (%)"},
            "limit": _LIMIT,
        },
        [],
    ),
    _tool(
        ToolName.SEARCH_DOCUMENTS,
        "Search SEC filing sections for specific terms. "
        "Section types: debt_footnote, credit_agreement, indenture, covenants, mda_liquidity. "
        "Use to find covenant language, credit agreement terms, or debt descriptions.",
        {
            "query": {"type": "string", "description": "Search terms"},
            "ticker": _TICKERS,
            "section_type": {"type": "string", "enum": SECTION_TYPES, "description": "Section type to search"},
            "limit": _LIMIT,
        },
        ["query"],
    ),
    _tool(
        ToolName.GET_CHANGES,
        "See what changed in a company's debt structure since a date. "
        "Returns new issuances, matured debt, leverage changes, and pricing movements. "
        "Use to monitor companies for material changes.",
        {
            "ticker": {"type": "string", "description": "Company ticker"},
            "since": {"type": "string", "description": "Compare since date (YYYY-MM-DD)"},
        },
        ["ticker", "since"],
    ),
    _tool(
        ToolName.RESEARCH_COMPANY,
        "Read a company's latest 10-K or 20-F directly from SEC EDGAR and extract its debt "
        "instruments. Slow (up to 45 seconds). Use only when DebtStack has no data on the company.",
        {
            "ticker": {"type": "string", "description": "Company ticker"},
            "company_name": {"type": "string", "description": "Company name, if known"},
        },
        ["ticker"],
    ),
]
