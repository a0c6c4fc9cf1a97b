#!/usr/bin/env python3
"""
Admin endpoints - inspect a nurse's matches by profile id.
"""

import threading

from fastapi import APIRouter, Depends

from core.matcher.matching_service import MatchingService
from ..dependencies import get_disconnect_event, get_matching_service
from ..models.responses import MatchesResponse, MatchSummary

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/profiles/{profile_id}/matches", response_model=MatchesResponse)
def get_profile_matches(
    profile_id: str,
    service: MatchingService = Depends(get_matching_service),
    cancel_event: threading.Event = Depends(get_disconnect_event)
):
    """
    Get the ranked matches for one nurse profile.

    Read-only view for administrators; never notifies the nurse.
    """
    results = service.get_matches_for_profile(profile_id, cancel_event=cancel_event)
    matches = [MatchSummary.from_result(r) for r in results]

    return MatchesResponse(
        success=True,
        count=len(matches),
        matches=matches
    )
