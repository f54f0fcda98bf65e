"""
Debates module.

Handles debate orchestration, context building and streaming.

Public API:
- IDebateService: Interface for debate operations
- DebateSession: One live debate
- DebateEvent: Event emitted during a debate
- CreateDebateRequest: Request to start a debate
"""

from .interfaces import IDebateService
from .models import (
    AgentResponse,
    CancelDebateResponse,
    CreateDebateRequest,
    DebateEvent,
    DebateEventType,
    DebateStatus,
    ProviderTurnFailed,
    ProviderTurnStarted,
    RoundCompleted,
    ToolInvocation,
    Transcript,
)
from .session import DebateSession
from .exceptions import (
    ConsensusError,
    DebateError,
    DebateNotFoundError,
    DebateStreamError,
    InvalidParticipantsError,
    ProviderError,
    StreamClosedError,
)

__all__ = [
    # Interface
    "IDebateService",
    # Models
    "AgentResponse",
    "CancelDebateResponse",
    "CreateDebateRequest",
    "DebateEvent",
    "DebateEventType",
    "DebateSession",
    "DebateStatus",
    "ProviderTurnFailed",
    "ProviderTurnStarted",
    "RoundCompleted",
    "ToolInvocation",
    "Transcript",
    # Exceptions
    "ConsensusError",
    "DebateError",
    "DebateNotFoundError",
    "DebateStreamError",
    "InvalidParticipantsError",
    "ProviderError",
    "StreamClosedError",
]
