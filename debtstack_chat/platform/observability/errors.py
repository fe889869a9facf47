"""Bugsnag error reporting integration.

ERROR-level log records (including ``logger.exception`` calls from the chat
loop and the research endpoint) are forwarded to Bugsnag once it is
initialized.
"""

import logging

import bugsnag
from bugsnag.handlers import BugsnagHandler

from debtstack_chat.platform.constants import SERVICE_NAME


async def initialize_bugsnag(api_key: str, release_stage: str) -> None:
    """Initialize Bugsnag error reporting.

    Args:
        api_key: Bugsnag project API key
        release_stage: Environment identifier ("production", "development", "local")

    Note:
        No-op when release_stage is "local" to avoid reporting during local development.
    """
    if release_stage == "local":
        return
    bugsnag.configure(
        api_key=api_key,
        release_stage=release_stage,
        app_type=SERVICE_NAME,
        auto_notify=True,
    )
    handler = BugsnagHandler()
    handler.setLevel(logging.ERROR)
    logging.getLogger().addHandler(handler)
