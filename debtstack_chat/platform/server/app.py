"""FastAPI application factory and server configuration.

This module creates and configures the FastAPI application with all middleware,
routes, and lifecycle management.
"""

import asyncio
import logging
import os
import signal
import warnings
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from debtstack_chat.agents.chat.agent import ChatAgentBuilder
from debtstack_chat.platform.observability import errors as bugsnag
from debtstack_chat.platform.observability.logging import configure_logging
from debtstack_chat.platform.observability.metrics import prometheus_middleware
from debtstack_chat.platform.server.handlers import EXCEPTION_HANDLERS
from debtstack_chat.platform.server.health import HealthCheck
from debtstack_chat.platform.server.middlewares import CorrelationIdMiddleware
from debtstack_chat.platform.server.routes import root as root_router
from debtstack_chat.platform.settings import Settings

# LiteLLM response objects trip Pydantic serializer warnings when LangChain
# copies them into AIMessage metadata
warnings.filterwarnings("ignore", message="Pydantic serializer warnings")

logger = logging.getLogger(__name__)


def lifespan_closure(settings):
    @asynccontextmanager
    async def lifespan(app):
        """
        Use this to initialize all of the singleton dependencies and shared
        objects.  i.e. http client, chat orchestrator, bugsnag, etc
        """
        if settings.bugsnag.release_stage in ["production", "development"]:
            signal_handler = SignalHandler(app)
            signal_handler.register_signal_handler()
        await bugsnag.initialize_bugsnag(
            settings.bugsnag.api_key,
            settings.bugsnag.release_stage,
        )

        # Configure structured logging (JSON in prod/dev, console in local)
        if settings.app_http.log_json is not None:
            json_output = settings.app_http.log_json
        else:
            json_output = settings.bugsnag.release_stage != "local"
        configure_logging(settings.app_http.log_level, json_output=json_output)

        app.state.settings = settings

        # Shared HTTP client for the DebtStack API, SEC EDGAR and Twelve Data
        app.state.http_client = httpx.AsyncClient(
            timeout=30.0,  # Default timeout, overridden per-request by the tools
            limits=httpx.Limits(max_keepalive_connections=20, max_connections=100),
            follow_redirects=True,
        )

        components = ChatAgentBuilder(settings, app.state.http_client).build()
        app.state.orchestrator = components.orchestrator
        app.state.research = components.research
        if components.orchestrator is None:
            logger.warning("No chat model configured; /api/chat will answer 500")

        HealthCheck.enable()
        try:
            yield
        finally:
            if not app.state.http_client.is_closed:
                await app.state.http_client.aclose()

    return lifespan


def create_app(settings: Settings):
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings instance

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(lifespan=lifespan_closure(settings), exception_handlers=EXCEPTION_HANDLERS)
    app.add_middleware(CorrelationIdMiddleware)
    app.middleware("http")(prometheus_middleware)

    # Platform routes (health, metrics), chat and market data
    app.include_router(root_router)

    return app


class SignalHandler:
    def __init__(self, app: FastAPI):
        self.app = app

    async def handle_exit(self):
        """
        Handle the exit of the server
        Do NOT use FastAPI @app.on_event("shutdown") or lifespan
        The problem with this method is, it is invoked *after* server
        stops accepting request, so it does not give us any time to
        drain requests in progress and DNS cache to refresh
        """
        HealthCheck.disable()
        for _ in range(20):
            logging.info("Shutting down...")
            await asyncio.sleep(1)

        # Close HTTP client
        if hasattr(self.app.state, "http_client"):
            await self.app.state.http_client.aclose()

        # stop service successfully
        os.kill(os.getpid(), signal.SIGUSR1)

    def signal_handler(self):
        asyncio.create_task(self.handle_exit())

    def register_signal_handler(self) -> None:
        loop = asyncio.get_running_loop()
        for sig in [signal.SIGINT, signal.SIGTERM]:
            loop.add_signal_handler(sig, self.signal_handler)
