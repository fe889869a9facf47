"""Request correlation ID propagation.

Written as plain ASGI middleware so the id stays bound while a streaming
chat response is still being produced.
"""

import uuid

from starlette.datastructures import Headers, MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from debtstack_chat.platform.observability.logging import REQUEST_ID_HEADER, correlation_id_ctx


class CorrelationIdMiddleware:
    """Reads X-Request-ID from the request, or generates one, and echoes it back."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        correlation_id = Headers(scope=scope).get(REQUEST_ID_HEADER) or str(uuid.uuid4())

        async def send_with_id(message: Message) -> None:
            if message["type"] == "http.response.start":
                MutableHeaders(scope=message)[REQUEST_ID_HEADER] = correlation_id
            await send(message)

        token = correlation_id_ctx.set(correlation_id)
        try:
            await self.app(scope, receive, send_with_id)
        finally:
            correlation_id_ctx.reset(token)
