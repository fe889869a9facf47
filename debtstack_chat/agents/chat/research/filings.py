"""SEC EDGAR filing discovery, download and debt section extraction."""

import re
from dataclasses import dataclass

import httpx

from debtstack_chat.agents.chat.research.exceptions import ResearchError

SUBMISSIONS_URL = "https://data.sec.gov/submissions/CIK{cik}.json"
ARCHIVES_URL = "https://www.sec.gov/Archives/edgar/data/{cik}/{accession}/{document}"

ANNUAL_REPORT_FORMS = frozenset({"10-K", "10-K/A", "20-F", "20-F/A"})

# Footnote headers, most specific first
DEBT_HEADER_PRIORITY = (
    "debt - ",
    "long-term debt -",
    "long-term debt:",
    "debt and credit",
    "borrowings -",
    "borrowings:",
    "notes and debentures",
    "financing arrangements",
    "short-term borrowings and long-term debt",
    "deposits and borrowings",
    "credit facilities and debt",
    "long-term obligations",
    "indebtedness",
)

DEBT_HEADER_GENERAL = (
    "long-term debt",
    "notes payable",
    "credit facility",
    "senior notes",
    "term loan",
    "revolving credit",
    "aggregate principal",
    "principal amount",
    "debt maturity",
    "secured credit",
)

SECTION_LEAD_CHARS = 500
FALLBACK_OFFSET_RATIO = 0.3
DEFAULT_MAX_SECTION_CHARS = 100_000


@dataclass(frozen=True)
class FilingInfo:
    accession_number: str
    primary_document: str
    filing_date: str
    form: str


async def find_latest_annual_report(
    http_client: httpx.AsyncClient,
    cik: str,
    user_agent: str,
) -> FilingInfo | None:
    """Return the newest 10-K or 20-F (or amendment) in a filer's recent filings.

    SEC lists recent filings newest first as parallel arrays; the first
    matching form wins. Returns None when the filer has no annual report.
    """
    url = SUBMISSIONS_URL.format(cik=cik.zfill(10))
    response = await http_client.get(
        url, headers={"User-Agent": user_agent, "Accept": "application/json"}
    )
    if response.status_code != 200:
        raise ResearchError(f"SEC submissions API error: {response.status_code}")

    recent = (response.json().get("filings") or {}).get("recent")
    if not recent:
        return None

    forms = recent.get("form") or []
    accessions = recent.get("accessionNumber") or []
    documents = recent.get("primaryDocument") or []
    dates = recent.get("filingDate") or []
    for i, form in enumerate(forms):
        if form in ANNUAL_REPORT_FORMS:
            return FilingInfo(
                accession_number=accessions[i],
                primary_document=documents[i],
                filing_date=dates[i],
                form=form,
            )
    return None


async def download_filing(
    http_client: httpx.AsyncClient,
    cik: str,
    filing: FilingInfo,
    user_agent: str,
) -> str:
    """Download a filing's primary document and return it as plain text."""
    url = ARCHIVES_URL.format(
        cik=cik,
        accession=filing.accession_number.replace("-", ""),
        document=filing.primary_document,
    )
    response = await http_client.get(url, headers={"User-Agent": user_agent})
    if response.status_code != 200:
        raise ResearchError(f"Failed to download filing: {response.status_code}")
    return clean_filing_html(response.text)


_TAG_SNIFF_RE = re.compile(r"<[a-zA-Z]")

_BLOCK_PATTERNS = (
    re.compile(r"<\?xml[^>]*\?>", re.IGNORECASE),
    re.compile(r"<!DOCTYPE[^>]*>", re.IGNORECASE),
    re.compile(r"<script[\s\S]*?</script>", re.IGNORECASE),
    re.compile(r"<style[\s\S]*?</style>", re.IGNORECASE),
    re.compile(r"<ix:hidden[\s\S]*?</ix:hidden>", re.IGNORECASE),
)
_INLINE_XBRL_RE = re.compile(r"<ix:[^>]*>([\s\S]*?)</ix:[^>]*>", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]+>")

_ENTITIES = (
    ("&nbsp;", " "),
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#x27;", "'"),
    ("&#x2019;", "’"),
    ("&#x2014;", "—"),
    ("&#x2013;", "–"),
)
_ENTITY_RES = tuple((re.compile(re.escape(entity), re.IGNORECASE), char) for entity, char in _ENTITIES)
_NUMERIC_ENTITY_RE = re.compile(r"&#\d+;|&#x[0-9a-fA-F]+;")

_SPACES_RE = re.compile(r"[ \t]+")
_BLANK_LINES_RE = re.compile(r"\n{3,}")


def clean_filing_html(content: str) -> str:
    """Strip an (i)XBRL/HTML filing down to plain text.

    Content whose first 500 characters contain no opening tag is assumed to be
    plain text already and returned as is.
    """
    if not content:
        return ""
    if not _TAG_SNIFF_RE.search(content[:500]):
        return content

    text = content
    for pattern in _BLOCK_PATTERNS:
        text = pattern.sub("", text)
    text = _INLINE_XBRL_RE.sub(r"\1", text)
    text = _TAG_RE.sub(" ", text)

    for pattern, char in _ENTITY_RES:
        text = pattern.sub(char, text)
    text = _NUMERIC_ENTITY_RE.sub(" ", text)

    text = _SPACES_RE.sub(" ", text)
    text = _BLANK_LINES_RE.sub("\n\n", text)
    return text.strip()


def find_debt_section_start(content: str) -> int | None:
    """Position of the first debt header phrase, or None if none occurs."""
    lower = content.lower()
    for patterns in (DEBT_HEADER_PRIORITY, DEBT_HEADER_GENERAL):
        for pattern in patterns:
            pos = lower.find(pattern)
            if pos != -1:
                return pos
    return None


def extract_debt_section(content: str, max_chars: int = DEFAULT_MAX_SECTION_CHARS) -> str:
    """Cut the window of a filing most likely to hold the debt footnote.

    The window starts a little before the first matching header. When no
    header matches, it starts 30% of the way into the document.
    """
    pos = find_debt_section_start(content)
    if pos is None:
        start = int(len(content) * FALLBACK_OFFSET_RATIO)
    else:
        start = max(0, pos - SECTION_LEAD_CHARS)
    return content[start : start + max_chars]
