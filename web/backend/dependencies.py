#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.
"""

import asyncio
import logging
import threading
from functools import lru_cache
from typing import AsyncIterator, Optional

from fastapi import Depends, Header, HTTPException, Request

from core.app_context import AppContext
from core.matcher.matching_service import MatchingService
from .config import get_config

logger = logging.getLogger(__name__)

DISCONNECT_POLL_SECONDS = 0.1


@lru_cache()
def get_app_context() -> AppContext:
    """Wired application context, built once per process."""
    return AppContext.build(get_config())


def get_matching_service(context: AppContext = Depends(get_app_context)) -> MatchingService:
    """
    FastAPI dependency that returns the matching service.

    Usage:
        @router.get("/endpoint")
        def my_endpoint(service: MatchingService = Depends(get_matching_service)):
            ...
    """
    return context.matching_service


def get_current_candidate_id(
    x_candidate_id: Optional[str] = Header(default=None)
) -> str:
    """
    Identity of the signed-in candidate.

    Authentication happens upstream; the gateway forwards the user id in the
    X-Candidate-Id header.
    """
    candidate_id = (x_candidate_id or "").strip()
    if not candidate_id:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return candidate_id


async def watch_for_disconnect(
    request: Request,
    cancel_event: threading.Event,
    poll_seconds: float = DISCONNECT_POLL_SECONDS
) -> None:
    """Set cancel_event once the client goes away."""
    while not cancel_event.is_set():
        if await request.is_disconnected():
            logger.info(f"Client disconnected from {request.url.path}; cancelling matching run")
            cancel_event.set()
            return
        await asyncio.sleep(poll_seconds)


async def get_disconnect_event(request: Request) -> AsyncIterator[threading.Event]:
    """
    Cancel event tied to the lifetime of the HTTP connection.

    Sync routes run in the threadpool, so the watcher keeps polling on the
    event loop while the matching run is in progress.
    """
    cancel_event = threading.Event()
    watcher = asyncio.create_task(watch_for_disconnect(request, cancel_event))
    try:
        yield cancel_event
    finally:
        watcher.cancel()
