"""Exception hierarchy for the live SEC research pipeline.

Each step of the pipeline has its own failure type so the HTTP endpoint can
map it to a status code and the chat tool can relay the message verbatim.
"""


class ResearchError(Exception):
    """Base exception for all research pipeline errors."""

    status_code = 500


class TickerNotFoundError(ResearchError):
    """Raised when a ticker has no CIK in the SEC ticker table."""

    status_code = 404

    def __init__(self, ticker: str):
        self.ticker = ticker
        super().__init__(f'Could not find CIK for ticker "{ticker}". Verify the ticker is correct.')


class FilingNotFoundError(ResearchError):
    """Raised when a filer has no annual report among its recent filings."""

    status_code = 404

    def __init__(self, ticker: str, cik: str):
        self.ticker = ticker
        self.cik = cik
        super().__init__(f"No 10-K or 20-F filing found for {ticker} (CIK: {cik}).")


class FilingContentError(ResearchError):
    """Raised when a downloaded filing is too short to contain a debt section."""

    status_code = 422

    def __init__(self, ticker: str, length: int):
        self.ticker = ticker
        self.length = length
        super().__init__(f"Filing content too short or empty for {ticker}.")


class ExtractionError(ResearchError):
    """Raised when the model's extraction output cannot be parsed."""

    def __init__(self, message: str):
        super().__init__(f"Failed to parse extraction output: {message}")
