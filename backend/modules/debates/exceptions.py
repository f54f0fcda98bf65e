"""
Debates module exceptions.
"""

from typing import Optional

from shared.exceptions import (
    ColloquyError,
    NotFoundError,
    ValidationError,
)


class DebateError(ColloquyError):
    """Base exception for debate-related errors."""

    pass


class DebateNotFoundError(NotFoundError):
    """Raised when a live debate session is not found."""

    def __init__(self, debate_id: str):
        super().__init__(
            f"Debate not found: {debate_id}",
            code="DEBATE_NOT_FOUND",
            details={"debate_id": debate_id},
        )


class InvalidParticipantsError(ValidationError):
    """Raised when the participant set of a debate is unusable."""

    def __init__(self, message: str, participants: Optional[list[str]] = None):
        super().__init__(
            message,
            code="INVALID_PARTICIPANTS",
            details={"participants": participants or []},
        )


class ProviderError(DebateError):
    """Raised when an LLM provider fails to produce a usable response."""

    def __init__(
        self,
        provider: str,
        message: str,
        original_error: Optional[str] = None,
    ):
        super().__init__(
            f"Provider error ({provider}): {message}",
            code="PROVIDER_ERROR",
            details={
                "provider": provider,
                "original_error": original_error,
            },
        )
        self.provider = provider


class ConsensusError(DebateError):
    """Raised when the arbiter cannot synthesize a round. Fatal to the session."""

    def __init__(self, round_number: int, message: str):
        super().__init__(
            f"Consensus failed for round {round_number}: {message}",
            code="CONSENSUS_FAILED",
            details={"round_number": round_number},
        )
        self.round_number = round_number


class DebateStreamError(DebateError):
    """Raised to the stream consumer when the session failed."""

    def __init__(self, message: str):
        super().__init__(message, code="DEBATE_STREAM_FAILED")


class StreamClosedError(DebateError):
    """Raised on misuse of an event stream (push after close, second subscriber)."""

    def __init__(self, message: str = "Event stream is closed"):
        super().__init__(message, code="STREAM_CLOSED")
