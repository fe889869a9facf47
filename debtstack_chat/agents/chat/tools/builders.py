"""Request builders for the DebtStack backend tools.

Every builder is a pure function from the model's argument bag to a
``BackendRequest``. Optional arguments that are absent (or empty) are left
out of the outbound request. The model's ``fields`` argument is never
forwarded because guessed field names make the backend reject the call.
"""

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any
from urllib.parse import quote

# Alternate tickers mapped to their DebtStack canonical form
TICKER_ALIASES: dict[str, str] = {
    "GOOG": "GOOGL",
    "BRK": "BRK.B",
    "BRK.A": "BRK.B",
    "FB": "META",
}

_CUSIP_RE = re.compile(r"^[A-Za-z0-9]{9}$")
_ISIN_PREFIX_RE = re.compile(r"^[A-Z]{2}")


@dataclass(frozen=True)
class BackendRequest:
    method: str
    path: str
    params: dict[str, str] = field(default_factory=dict)
    json: dict[str, Any] | None = None


class BondIdentifierKind(StrEnum):
    CUSIP = "cusip"
    ISIN = "isin"
    FUZZY = "fuzzy"


def classify_bond_identifier(query: str) -> BondIdentifierKind:
    """Decide how a free-form bond identifier should be looked up.

    Nine alphanumeric characters are treated as a CUSIP, twelve characters
    starting with two uppercase letters as an ISIN, anything else as a
    description to fuzzy match.
    """
    if len(query) == 9 and _CUSIP_RE.match(query):
        return BondIdentifierKind.CUSIP
    if len(query) == 12 and _ISIN_PREFIX_RE.match(query):
        return BondIdentifierKind.ISIN
    return BondIdentifierKind.FUZZY


def normalize_ticker(ticker: str) -> str:
    """Upper-case a ticker (or comma-separated tickers) and apply aliases."""
    upper = ticker.upper().strip()
    if "," in upper:
        return ",".join(TICKER_ALIASES.get(t.strip(), t.strip()) for t in upper.split(","))
    return TICKER_ALIASES.get(upper, upper)


def _present(value: Any) -> bool:
    return value is not None and value != ""


def _param(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _set_optional(params: dict[str, str], args: Mapping[str, Any], *names: str) -> None:
    for name in names:
        if _present(args.get(name)):
            params[name] = _param(args[name])


def _set_ticker(params: dict[str, str], args: Mapping[str, Any]) -> None:
    if _present(args.get("ticker")):
        params["ticker"] = normalize_ticker(str(args["ticker"]))


def _limit(args: Mapping[str, Any], default: int) -> str:
    value = args.get("limit")
    return _param(value if _present(value) else default)


def search_companies(args: Mapping[str, Any]) -> BackendRequest:
    params: dict[str, str] = {}
    _set_ticker(params, args)
    _set_optional(params, args, "sector", "min_leverage", "max_leverage", "has_structural_sub", "sort")
    params["limit"] = _limit(args, 10)
    return BackendRequest("GET", "/v1/companies", params)


def search_bonds(args: Mapping[str, Any]) -> BackendRequest:
    params: dict[str, str] = {}
    _set_ticker(params, args)
    _set_optional(params, args, "seniority", "min_ytm", "has_pricing", "maturity_before")
    params["limit"] = _limit(args, 50)
    return BackendRequest("GET", "/v1/bonds", params)


def resolve_bond(args: Mapping[str, Any]) -> BackendRequest:
    query = str(args.get("query") or "").strip()
    kind = classify_bond_identifier(query)
    if kind is BondIdentifierKind.FUZZY:
        params = {"q": query, "match_mode": "fuzzy"}
    else:
        params = {kind.value: query}
    return BackendRequest("GET", "/v1/bonds/resolve", params)


def get_guarantors(args: Mapping[str, Any]) -> BackendRequest:
    bond_id = str(args.get("bond_id") or "").strip()
    start: dict[str, Any] = {"type": "bond", "id": bond_id}
    if classify_bond_identifier(bond_id) is BondIdentifierKind.FUZZY:
        start["match_mode"] = "fuzzy"
    body = {
        "start": start,
        "relationships": ["guarantees"],
        "direction": "inbound",
        "fields": ["name", "entity_type", "jurisdiction", "is_guarantor"],
    }
    return BackendRequest("POST", "/v1/entities/traverse", json=body)


def get_corporate_structure(args: Mapping[str, Any]) -> BackendRequest:
    body = {
        "start": {"type": "company", "id": normalize_ticker(str(args.get("ticker") or ""))},
        "relationships": ["subsidiaries"],
        "direction": "outbound",
        "depth": 10,
        "fields": ["name", "entity_type", "jurisdiction", "is_guarantor", "is_vie", "debt_at_entity"],
    }
    return BackendRequest("POST", "/v1/entities/traverse", json=body)


def search_pricing(args: Mapping[str, Any]) -> BackendRequest:
    params: dict[str, str] = {}
    _set_ticker(params, args)
    _set_optional(params, args, "cusip", "min_ytm")
    params["has_pricing"] = "true"
    params["limit"] = _limit(args, 10)
    return BackendRequest("GET", "/v1/bonds", params)


def search_documents(args: Mapping[str, Any]) -> BackendRequest:
    query = str(args.get("query") or "").strip()
    if len(query) < 2:
        query = str(args.get("section_type") or args.get("ticker") or "debt")
    params = {"q": query}
    _set_ticker(params, args)
    _set_optional(params, args, "section_type")
    params["limit"] = _limit(args, 10)
    return BackendRequest("GET", "/v1/documents/search", params)


def get_changes(args: Mapping[str, Any]) -> BackendRequest:
    ticker = normalize_ticker(str(args.get("ticker") or ""))
    params: dict[str, str] = {}
    _set_optional(params, args, "since")
    return BackendRequest("GET", f"/v1/companies/{quote(ticker, safe='')}/changes", params)


RequestBuilder = Callable[[Mapping[str, Any]], BackendRequest]
