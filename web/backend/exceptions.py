#!/usr/bin/env python3
"""
Error handlers for the web application.
"""

import logging
from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse

from core.exceptions import (
    JobStoreError,
    MatchingCancelledError,
    MatchingError,
    ProfileNotFoundError,
)

logger = logging.getLogger(__name__)


def _status_for(exc: MatchingError) -> int:
    if isinstance(exc, ProfileNotFoundError):
        return 404
    if isinstance(exc, JobStoreError):
        return 503
    if isinstance(exc, MatchingCancelledError):
        return 409
    return 500


async def matching_exception_handler(
    request: Request,
    exc: MatchingError
) -> JSONResponse:
    """
    Handle matching layer exceptions.

    Args:
        request: The FastAPI request.
        exc: The matching exception.

    Returns:
        JSONResponse with error details.
    """
    status_code = _status_for(exc)
    if status_code >= 500:
        logger.error(f"Matching error in {request.url.path}: {exc}", exc_info=True)
    else:
        logger.warning(f"Matching error in {request.url.path}: {exc}")

    message = str(exc)
    if isinstance(exc, ProfileNotFoundError):
        message = "Nurse profile not found"

    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": message,
            "type": exc.__class__.__name__
        }
    )


async def http_exception_handler(
    request: Request,
    exc: HTTPException
) -> JSONResponse:
    """
    Handle FastAPI HTTP exceptions with consistent format.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": exc.detail,
            "type": "HTTPException"
        }
    )


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle unexpected exceptions.
    """
    logger.exception(f"Unexpected error in {request.url.path}")

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal server error",
            "type": "InternalError"
        }
    )
