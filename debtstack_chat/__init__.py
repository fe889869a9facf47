"""debtstack-chat - Streaming credit research assistant over the DebtStack API and SEC EDGAR."""

from .platform.server.app import create_app
from .platform.settings import Settings


def app():
    """Create the FastAPI application instance."""
    settings = Settings()
    return create_app(settings)
