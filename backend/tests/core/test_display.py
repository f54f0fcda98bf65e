"""Tests for terminal rendering of debate events."""

import pytest

from core.display import console, extract_answer, render_event
from modules.debates.models import (
    AgentResponse,
    ProviderTurnFailed,
    ProviderTurnStarted,
    RoundCompleted,
    ToolInvocation,
)
from providers.base import ProviderId

from tests.stubs import make_result


def rendered(event) -> str:
    with console.capture() as capture:
        render_event(event)
    return capture.get()


class TestExtractAnswer:
    def test_strips_think_blocks(self):
        assert extract_answer("<think>hmm</think>\nThe answer.") == "The answer."

    def test_keeps_content_without_tags(self):
        assert extract_answer("  Plain.  ") == "Plain."

    def test_falls_back_when_only_thinking(self):
        assert extract_answer("<think>only</think>") == "<think>only</think>"


class TestRenderEvent:
    def test_turn_started(self):
        assert "DeepSeek is thinking" in rendered(ProviderTurnStarted(model=ProviderId.DEEPSEEK))

    def test_tool_invocation(self):
        output = rendered(
            ToolInvocation(model=ProviderId.GROQ, query="tidal power", results=[make_result(1)])
        )
        assert "Groq searched for" in output
        assert "tidal power" in output
        assert "1 results" in output

    def test_participant_response(self):
        output = rendered(AgentResponse(model=ProviderId.XAI, text="<think>x</think>Argument"))
        assert "xAI" in output
        assert "Argument" in output
        assert "<think>" not in output

    def test_consensus_response(self):
        output = rendered(AgentResponse(model=ProviderId.OPENAI, text="Agreed", round_number=1))
        assert "Consensus, round 2 (OpenAI)" in output

    def test_turn_failed(self):
        output = rendered(ProviderTurnFailed(model=ProviderId.GOOGLE, error="quota"))
        assert "Google skipped this turn" in output

    def test_round_completed(self):
        assert "Round 1 complete" in rendered(RoundCompleted(round_number=0))
