"""Live SEC EDGAR research: ticker → latest annual report → extracted debt instruments."""

import logging
from dataclasses import dataclass

import httpx

from debtstack_chat.agents.chat.research.exceptions import (
    FilingContentError,
    FilingNotFoundError,
    TickerNotFoundError,
)
from debtstack_chat.agents.chat.research.extraction import DebtExtractor, ResearchResult
from debtstack_chat.agents.chat.research.filings import (
    FilingInfo,
    download_filing,
    extract_debt_section,
    find_latest_annual_report,
)
from debtstack_chat.agents.chat.research.tickers import TickerCache
from debtstack_chat.platform.agent.config import ResearchConfig

logger = logging.getLogger(__name__)

RESEARCH_NOTE = "Live SEC filing research, not yet in DebtStack database"


@dataclass(frozen=True)
class ResearchReport:
    result: ResearchResult
    filing: FilingInfo
    cik: str

    def to_payload(self) -> dict:
        return {
            "data": self.result.model_dump(),
            "meta": {
                "source": "sec_edgar",
                "filing_form": self.filing.form,
                "filing_date": self.filing.filing_date,
                "cik": self.cik,
                "note": RESEARCH_NOTE,
            },
        }


class ResearchPipeline:
    """Runs the five research steps for one ticker.

    Each step that can come up empty raises its own ``ResearchError``
    subclass; nothing is retried.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        ticker_cache: TickerCache,
        extractor: DebtExtractor,
        config: ResearchConfig,
    ):
        self.http_client = http_client
        self.ticker_cache = ticker_cache
        self.extractor = extractor
        self.config = config

    async def run(self, ticker: str, company_name: str | None = None) -> ResearchReport:
        ticker = ticker.upper().strip()
        log_ctx = f"[research {ticker}]"

        cik = await self.ticker_cache.resolve_cik(ticker)
        if not cik:
            raise TickerNotFoundError(ticker)

        filing = await find_latest_annual_report(self.http_client, cik, self.config.user_agent)
        if filing is None:
            raise FilingNotFoundError(ticker, cik)
        logger.info(f"{log_ctx} using {filing.form} filed {filing.filing_date} ({company_name or cik})")

        text = await download_filing(self.http_client, cik, filing, self.config.user_agent)
        if len(text) < self.config.min_content_chars:
            raise FilingContentError(ticker, len(text))

        section = extract_debt_section(text, self.config.max_section_chars)
        logger.debug(f"{log_ctx} debt section {len(section)} of {len(text)} chars")

        result = await self.extractor.extract(section, ticker, cik, filing.filing_date)
        return ResearchReport(result=result, filing=filing, cik=cik)
