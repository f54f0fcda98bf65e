"""
Debate API endpoints.

Provides the SSE streaming endpoint that starts a debate, and cancellation.
"""

import json
import logging

from fastapi import APIRouter, Depends, HTTPException
from sse_starlette.sse import EventSourceResponse

from api.dependencies import get_debate_service
from shared.config import Settings, get_settings
from shared.exceptions import ValidationError

from .exceptions import DebateNotFoundError, DebateStreamError
from .interfaces import IDebateService
from .models import CancelDebateResponse, CreateDebateRequest, DebateStatus
from .session import DebateSession

logger = logging.getLogger(__name__)

router = APIRouter()

DONE_EVENT = "done"
ERROR_EVENT = "error"


async def event_generator(session: DebateSession, cancel_on_disconnect: bool = False):
    """
    Generate SSE events for a debate session.

    Yields events in the format:
        event: <event_type>
        data: <json_data>

    followed by exactly one terminal frame, ``done`` or ``error``.
    """
    try:
        async for event in session.stream.subscribe():
            yield {
                "event": event.type.value,
                "data": event.model_dump_json(exclude_none=True),
            }
    except DebateStreamError as e:
        yield {
            "event": ERROR_EVENT,
            "data": json.dumps({"message": e.message}),
        }
    else:
        yield {
            "event": DONE_EVENT,
            "data": json.dumps({"status": DebateStatus.COMPLETED.value}),
        }
    finally:
        if cancel_on_disconnect and not session.finished:
            logger.info(f"Client went away; cancelling debate {session.id}")
            session.cancel()


@router.post("/stream")
async def stream_debate(
    request: CreateDebateRequest,
    service: IDebateService = Depends(get_debate_service),
    settings: Settings = Depends(get_settings),
):
    """
    Start a debate and stream its events via SSE.

    Event format:
        event: <event_type>
        data: {"type": "<event_type>", "model": "...", ...}

    Event types:
    - provider_turn_started: A participant is about to speak
    - tool_invocation: A participant searched the web mid-turn
    - agent_response: A participant finished (round_number set for consensus)
    - round_completed: The arbiter's consensus for a round is in
    - provider_turn_failed: A turn was skipped (only when enabled)

    Terminal frames:
    - done: {"status": "completed"}
    - error: {"message": "..."}

    The session ID is returned in the X-Debate-Id header.
    """
    try:
        session = await service.start_debate(request)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)

    return EventSourceResponse(
        event_generator(session, settings.debate_cancel_on_disconnect),
        headers={"X-Debate-Id": session.id},
        media_type="text/event-stream",
    )


@router.post("/{debate_id}/cancel", response_model=CancelDebateResponse)
async def cancel_debate(
    debate_id: str,
    service: IDebateService = Depends(get_debate_service),
) -> CancelDebateResponse:
    """
    Cancel a running debate.
    """
    try:
        session = await service.cancel_debate(debate_id)
    except DebateNotFoundError:
        raise HTTPException(status_code=404, detail="Debate not found")

    return CancelDebateResponse(
        id=session.id,
        status=session.status,
        cancelled=not session.finished,
    )
