"""Application-wide exception handlers.

Request bodies that fail to parse or validate answer with the same
``{"error": ...}`` shape as every other rejection.
"""

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

INVALID_BODY_MESSAGE = "Invalid request body"


async def invalid_request_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info(f"Rejected {request.method} {request.url.path}: {len(exc.errors())} validation error(s)")
    return JSONResponse({"error": INVALID_BODY_MESSAGE}, status_code=400)


EXCEPTION_HANDLERS = {
    RequestValidationError: invalid_request_handler,
}
