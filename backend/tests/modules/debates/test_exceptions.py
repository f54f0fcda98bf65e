"""Tests for debates module exceptions."""

from modules.debates.exceptions import (
    ConsensusError,
    DebateError,
    DebateNotFoundError,
    DebateStreamError,
    InvalidParticipantsError,
    ProviderError,
    StreamClosedError,
)
from shared.exceptions import ColloquyError, NotFoundError, ValidationError


class TestDebateExceptions:
    def test_not_found(self):
        error = DebateNotFoundError("abc")
        assert isinstance(error, NotFoundError)
        assert error.code == "DEBATE_NOT_FOUND"
        assert error.details == {"debate_id": "abc"}
        assert "abc" in error.message

    def test_invalid_participants(self):
        error = InvalidParticipantsError("bad roster", ["mistral"])
        assert isinstance(error, ValidationError)
        assert error.code == "INVALID_PARTICIPANTS"
        assert error.details == {"participants": ["mistral"]}

    def test_provider_error(self):
        error = ProviderError("openai", "rate limited", original_error="RateLimitError")
        assert error.message == "Provider error (openai): rate limited"
        assert error.provider == "openai"
        assert error.details["original_error"] == "RateLimitError"
        assert error.to_dict()["error"] == "PROVIDER_ERROR"

    def test_consensus_error(self):
        error = ConsensusError(2, "timed out")
        assert error.message == "Consensus failed for round 2: timed out"
        assert error.round_number == 2
        assert error.code == "CONSENSUS_FAILED"

    def test_stream_errors(self):
        assert DebateStreamError("boom").message == "boom"
        assert StreamClosedError().message == "Event stream is closed"
        assert StreamClosedError().code == "STREAM_CLOSED"

    def test_all_are_colloquy_errors(self):
        for error in (
            DebateError("x"),
            ProviderError("p", "m"),
            ConsensusError(0, "m"),
            DebateStreamError("m"),
            StreamClosedError(),
        ):
            assert isinstance(error, ColloquyError)
