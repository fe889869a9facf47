"""Unit tests for Bugsnag initialization."""

import logging
from unittest.mock import patch

from bugsnag.handlers import BugsnagHandler

from debtstack_chat.platform.observability.errors import initialize_bugsnag


def bugsnag_handlers() -> list[logging.Handler]:
    return [h for h in logging.getLogger().handlers if isinstance(h, BugsnagHandler)]


class TestInitializeBugsnag:
    """Tests for initialize_bugsnag."""

    async def test_local_is_a_no_op(self):
        with patch("debtstack_chat.platform.observability.errors.bugsnag.configure") as configure:
            await initialize_bugsnag("key", "local")

        configure.assert_not_called()

    async def test_reports_error_logs(self):
        before = bugsnag_handlers()
        with patch("debtstack_chat.platform.observability.errors.bugsnag.configure") as configure:
            await initialize_bugsnag("key", "production")

        try:
            configure.assert_called_once()
            assert configure.call_args.kwargs["release_stage"] == "production"
            assert configure.call_args.kwargs["app_type"] == "debtstack-chat"
            added = [h for h in bugsnag_handlers() if h not in before]
            assert len(added) == 1
            assert added[0].level == logging.ERROR
        finally:
            for handler in bugsnag_handlers():
                if handler not in before:
                    logging.getLogger().removeHandler(handler)
