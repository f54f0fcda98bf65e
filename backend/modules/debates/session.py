"""
Debate session: the ephemeral state of one debate request.

A session lives from the moment a debate request arrives until its stream
closes; nothing about it is persisted.
"""

import asyncio
import uuid
from dataclasses import dataclass, field
from typing import Optional

from providers.base import ProviderId

from .event_stream import EventStream
from .exceptions import InvalidParticipantsError
from .models import DebateStatus, Transcript


@dataclass
class DebateSession:
    """One debate: fixed membership, its transcript and its live stream."""

    question: str
    total_rounds: int
    participants: list[ProviderId]
    arbiter: ProviderId
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    transcript: Transcript = field(default_factory=Transcript)
    stream: EventStream = field(default_factory=EventStream)
    status: DebateStatus = DebateStatus.RUNNING
    error: Optional[str] = None
    task: Optional[asyncio.Task] = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.total_rounds < 1:
            raise ValueError(f"total_rounds must be >= 1, got {self.total_rounds}")
        if not self.participants:
            raise InvalidParticipantsError("A debate needs at least one participant")
        if len(set(self.participants)) != len(self.participants):
            raise InvalidParticipantsError(
                "Participants must not contain duplicates",
                [p.value for p in self.participants],
            )
        self.participants = list(self.participants)

    @property
    def finished(self) -> bool:
        return self.status != DebateStatus.RUNNING

    @property
    def completed_rounds(self) -> int:
        return sum(1 for event in self.transcript if event.type == "round_completed")

    def cancel(self) -> bool:
        """Request cancellation of the running session task.

        Returns:
            True if a running task was asked to cancel
        """
        if self.task is None or self.task.done():
            return False
        return self.task.cancel()
