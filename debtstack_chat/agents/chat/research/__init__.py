"""Live SEC EDGAR research pipeline."""

from debtstack_chat.agents.chat.research.exceptions import (
    ExtractionError,
    FilingContentError,
    FilingNotFoundError,
    ResearchError,
    TickerNotFoundError,
)
from debtstack_chat.agents.chat.research.extraction import DebtExtractor, ResearchResult
from debtstack_chat.agents.chat.research.pipeline import ResearchPipeline, ResearchReport
from debtstack_chat.agents.chat.research.tickers import TickerCache

__all__ = [
    "DebtExtractor",
    "ExtractionError",
    "FilingContentError",
    "FilingNotFoundError",
    "ResearchError",
    "ResearchPipeline",
    "ResearchReport",
    "ResearchResult",
    "TickerCache",
    "TickerNotFoundError",
]
