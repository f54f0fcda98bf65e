"""
Debates module interface.

The API layer depends on IDebateService for all debate operations.
"""

from typing import Optional, Protocol, runtime_checkable

from .models import CreateDebateRequest
from .session import DebateSession


@runtime_checkable
class IDebateService(Protocol):
    """
    Interface for debate operations.

    This protocol defines the contract that the debates module exposes
    to the API layer.
    """

    async def start_debate(self, request: CreateDebateRequest) -> DebateSession:
        """
        Create a session and start running it in the background.

        The returned session's stream is ready to subscribe to; events
        pushed before the consumer subscribes are buffered.

        Args:
            request: Debate configuration

        Returns:
            The live session, in RUNNING status

        Raises:
            InvalidParticipantsError: If a participant or the arbiter has
                no registered capability provider
        """
        ...

    def get_session(self, debate_id: str) -> Optional[DebateSession]:
        """
        Look up a live session.

        Sessions are forgotten once their run finishes.

        Returns:
            The session if it is still running, None otherwise
        """
        ...

    async def cancel_debate(self, debate_id: str) -> DebateSession:
        """
        Cancel a live session.

        Cancellation is cooperative; the session reaches CANCELLED status
        at its next suspension point and its stream closes with an error.

        Raises:
            DebateNotFoundError: If no live session has this ID
        """
        ...
