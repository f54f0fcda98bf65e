"""
Debates module data models.

These models define the event vocabulary of a debate and the request
that starts one. Events are immutable; a session's transcript is the
ordered, append-only list of them.
"""

from enum import Enum
from typing import Annotated, Iterator, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, field_validator, model_validator

from modules.search.models import SearchResult
from providers.base import ProviderId


class DebateStatus(str, Enum):
    """Debate session status."""

    RUNNING = "running"      # Orchestrator loop in progress
    COMPLETED = "completed"  # All rounds finished
    FAILED = "failed"        # Aborted by a fatal error
    CANCELLED = "cancelled"  # Cancelled before completion


class DebateEventType(str, Enum):
    """Types of events emitted during a debate."""

    PROVIDER_TURN_STARTED = "provider_turn_started"
    TOOL_INVOCATION = "tool_invocation"
    AGENT_RESPONSE = "agent_response"
    ROUND_COMPLETED = "round_completed"
    PROVIDER_TURN_FAILED = "provider_turn_failed"


class _Event(BaseModel):
    model_config = {"frozen": True}


class ProviderTurnStarted(_Event):
    """A provider is about to be asked to speak."""

    type: Literal[DebateEventType.PROVIDER_TURN_STARTED] = DebateEventType.PROVIDER_TURN_STARTED
    model: ProviderId = Field(..., description="Provider taking the turn")


class ToolInvocation(_Event):
    """An agent searched the web during its turn."""

    type: Literal[DebateEventType.TOOL_INVOCATION] = DebateEventType.TOOL_INVOCATION
    model: ProviderId = Field(..., description="Provider that ran the search")
    query: str = Field(..., description="Search query")
    results: list[SearchResult] = Field(default_factory=list, description="Search results")


class AgentResponse(_Event):
    """A provider finished its turn.

    round_number is set only on the arbiter's per-round consensus.
    """

    type: Literal[DebateEventType.AGENT_RESPONSE] = DebateEventType.AGENT_RESPONSE
    model: ProviderId = Field(..., description="Provider that responded")
    text: str = Field(..., description="Response text")
    round_number: Optional[int] = Field(None, ge=0, description="Round (consensus only)")

    @property
    def is_consensus(self) -> bool:
        return self.round_number is not None


class RoundCompleted(_Event):
    """A round's consensus has been produced."""

    type: Literal[DebateEventType.ROUND_COMPLETED] = DebateEventType.ROUND_COMPLETED
    round_number: int = Field(..., ge=0, description="Zero-based round number")


class ProviderTurnFailed(_Event):
    """A participant's turn failed and was skipped."""

    type: Literal[DebateEventType.PROVIDER_TURN_FAILED] = DebateEventType.PROVIDER_TURN_FAILED
    model: ProviderId = Field(..., description="Provider whose turn failed")
    error: str = Field(..., description="Failure description")


DebateEvent = Annotated[
    Union[
        ProviderTurnStarted,
        ToolInvocation,
        AgentResponse,
        RoundCompleted,
        ProviderTurnFailed,
    ],
    Field(discriminator="type"),
]

debate_event_adapter: TypeAdapter[DebateEvent] = TypeAdapter(DebateEvent)


class Transcript:
    """
    Ordered, append-only record of a session's events.

    There is no API to modify or remove an entry; readers get the live
    sequence through iteration or an immutable snapshot.
    """

    def __init__(self, events: Optional[list[DebateEvent]] = None):
        self._events: list[DebateEvent] = list(events or [])

    def append(self, event: DebateEvent) -> None:
        self._events.append(event)

    def snapshot(self) -> tuple[DebateEvent, ...]:
        return tuple(self._events)

    def __iter__(self) -> Iterator[DebateEvent]:
        return iter(tuple(self._events))

    def __len__(self) -> int:
        return len(self._events)

    def __getitem__(self, index: int) -> DebateEvent:
        return self._events[index]

    def __repr__(self) -> str:
        return f"Transcript({len(self._events)} events)"


class CreateDebateRequest(BaseModel):
    """Request to start a new debate."""

    question: str = Field(
        ...,
        min_length=1,
        max_length=10000,
        description="The question or topic to debate",
    )
    rounds: int = Field(
        default=1,
        ge=1,
        le=10,
        description="Number of debate rounds",
    )
    participants: Optional[list[ProviderId]] = Field(
        None,
        min_length=1,
        description="Participating providers, in speaking order (server default if omitted)",
    )
    arbiter: Optional[ProviderId] = Field(
        None,
        description="Provider that synthesizes each round (server default if omitted)",
    )

    @field_validator("question")
    @classmethod
    def _strip_question(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("question must not be blank")
        return value

    @model_validator(mode="after")
    def _check_unique_participants(self) -> "CreateDebateRequest":
        if self.participants and len(set(self.participants)) != len(self.participants):
            raise ValueError("participants must not contain duplicates")
        return self


class CancelDebateResponse(BaseModel):
    """Result of a cancellation request."""

    id: str = Field(..., description="Debate session ID")
    status: DebateStatus = Field(..., description="Session status when the request was handled")
    cancelled: bool = Field(..., description="Whether a running debate was asked to stop")
