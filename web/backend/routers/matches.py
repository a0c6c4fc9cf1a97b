#!/usr/bin/env python3
"""
Match endpoints - ranked jobs for the signed-in candidate.
"""

import logging
import threading

from fastapi import APIRouter, Depends

from core.matcher.matching_service import MatchingService
from ..dependencies import get_current_candidate_id, get_disconnect_event, get_matching_service
from ..models.responses import MatchesResponse, MatchSummary

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/matches", tags=["matches"])


@router.get("", response_model=MatchesResponse)
def get_matches(
    candidate_id: str = Depends(get_current_candidate_id),
    service: MatchingService = Depends(get_matching_service),
    cancel_event: threading.Event = Depends(get_disconnect_event)
):
    """
    Get every active job ranked for the current candidate.

    Returns matches sorted by score (highest first), newer postings first on
    ties. A strong top match also triggers a notification to the candidate.
    The run is abandoned if the client disconnects first.
    """
    results = service.get_matches_for_candidate(candidate_id, cancel_event=cancel_event)
    matches = [MatchSummary.from_result(r) for r in results]

    return MatchesResponse(
        success=True,
        count=len(matches),
        matches=matches
    )
