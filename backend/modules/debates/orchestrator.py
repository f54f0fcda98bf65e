"""
Debate orchestrator: the LangGraph state machine that drives a session.

Graph structure:
    participant_turn -> [participant_turn | synthesize_round]
    synthesize_round -> [participant_turn | END]

Each round, every participant speaks once in fixed order, then the arbiter
synthesizes a consensus from the full transcript. Nodes emit events through
LangGraph's custom stream writer (stream_mode="custom") the moment they
happen, including searches made in the middle of a turn; run() forwards
each one to the session transcript and event stream in emission order.

Failure policy:
- A participant's failed turn is logged and skipped; the debate goes on.
- A failed arbiter synthesis is fatal: the session fails and the stream
  closes with an error.
"""

import asyncio
import logging
import operator
from collections.abc import Mapping
from datetime import date
from typing import Annotated, Optional, TypedDict

from langgraph.config import get_stream_writer
from langgraph.graph import END, StateGraph

from modules.questions.interfaces import IQuestionLog
from modules.search.interfaces import ISearchService
from providers.base import ProviderId

from .capability import ICapabilityProvider
from .context_builder import (
    ARBITER_PROMPT,
    PARTICIPANT_PROMPT,
    build_arbiter_context,
    build_context,
    system_message,
)
from .exceptions import ConsensusError
from .models import (
    AgentResponse,
    DebateEvent,
    DebateStatus,
    ProviderTurnFailed,
    ProviderTurnStarted,
    RoundCompleted,
)
from .search_tool import build_search_tool
from .session import DebateSession

logger = logging.getLogger(__name__)

CANCELLED_MESSAGE = "Debate was cancelled"


class DebateGraphState(TypedDict):
    """State carried through the debate graph."""

    question: str
    participants: list[ProviderId]  # Speaking order, fixed for the session
    arbiter: ProviderId
    total_rounds: int
    round_number: int  # Zero-based
    participant_index: int  # Next participant to speak in this round
    transcript: Annotated[list[DebateEvent], operator.add]  # Append-only history


def next_after_turn(state: DebateGraphState) -> str:
    """Next participant, or synthesis once everyone has spoken."""
    if state["participant_index"] < len(state["participants"]):
        return "participant_turn"
    return "synthesize_round"


def next_after_synthesis(state: DebateGraphState) -> str:
    """Next round, or the end once all rounds are complete."""
    if state["round_number"] < state["total_rounds"]:
        return "participant_turn"
    return END


class DebateOrchestrator:
    """
    Runs one debate session to completion.

    One orchestrator per session; its run() is the session's only task and
    the only writer of the session transcript and stream.
    """

    def __init__(
        self,
        session: DebateSession,
        capabilities: Mapping[ProviderId, ICapabilityProvider],
        search: ISearchService,
        question_log: Optional[IQuestionLog] = None,
        emit_turn_failures: bool = False,
        today: Optional[date] = None,
    ):
        self.session = session
        self._capabilities = capabilities
        self._search = search
        self._question_log = question_log
        self._emit_turn_failures = emit_turn_failures
        self._today = today
        self._background: set[asyncio.Task] = set()

    def build_graph(self):
        """Build and compile this session's debate graph."""
        graph = StateGraph(DebateGraphState)

        graph.add_node("participant_turn", self._participant_turn)
        graph.add_node("synthesize_round", self._synthesize_round)

        graph.set_entry_point("participant_turn")

        graph.add_conditional_edges(
            "participant_turn",
            next_after_turn,
            {
                "participant_turn": "participant_turn",
                "synthesize_round": "synthesize_round",
            },
        )
        graph.add_conditional_edges(
            "synthesize_round",
            next_after_synthesis,
            {
                "participant_turn": "participant_turn",
                END: END,
            },
        )

        return graph.compile()

    def _initial_state(self) -> DebateGraphState:
        return {
            "question": self.session.question,
            "participants": list(self.session.participants),
            "arbiter": self.session.arbiter,
            "total_rounds": self.session.total_rounds,
            "round_number": 0,
            "participant_index": 0,
            "transcript": [],
        }

    def _recursion_limit(self) -> int:
        steps = self.session.total_rounds * (len(self.session.participants) + 1)
        return steps + 10

    async def run(self) -> DebateSession:
        """
        Drive the session from Running to Completed, Failed or Cancelled.

        Returns:
            The session, with its final status set and its stream closed

        Raises:
            asyncio.CancelledError: If the task was cancelled; the stream is
                closed with an error first
        """
        session = self.session
        session.status = DebateStatus.RUNNING
        self._record_question()
        logger.info(
            f"Debate {session.id} started: {session.total_rounds} round(s), "
            f"participants={[p.value for p in session.participants]}, "
            f"arbiter={session.arbiter.value}"
        )

        graph = self.build_graph()
        try:
            async for event in graph.astream(
                self._initial_state(),
                stream_mode="custom",
                config={"recursion_limit": self._recursion_limit()},
            ):
                session.transcript.append(event)
                session.stream.push(event)
        except asyncio.CancelledError:
            logger.info(f"Debate {session.id} cancelled")
            session.status = DebateStatus.CANCELLED
            session.error = CANCELLED_MESSAGE
            session.stream.fail(CANCELLED_MESSAGE)
            raise
        except Exception as e:
            logger.exception(f"Debate {session.id} failed")
            session.status = DebateStatus.FAILED
            session.error = str(e) or type(e).__name__
            session.stream.fail(session.error)
            return session

        session.status = DebateStatus.COMPLETED
        session.stream.complete()
        logger.info(f"Debate {session.id} completed with {len(session.transcript)} events")
        return session

    async def _participant_turn(self, state: DebateGraphState) -> dict:
        """One participant's turn. Failures are contained here."""
        writer = get_stream_writer()
        index = state["participant_index"]
        participant = state["participants"][index]
        round_number = state["round_number"]
        events: list[DebateEvent] = []

        def emit(event: DebateEvent) -> None:
            events.append(event)
            writer(event)

        emit(ProviderTurnStarted(model=participant))

        messages = [
            system_message(PARTICIPANT_PROMPT, self._today),
            *build_context(state["question"], state["transcript"], participant),
        ]
        search_tool = build_search_tool(participant, self._search, emit)

        try:
            capability = self._capabilities[participant]
            text = await capability.generate(messages, [search_tool])
        except Exception as e:
            logger.warning(
                f"Turn skipped for {participant.value} in round {round_number}: {e}"
            )
            if self._emit_turn_failures:
                emit(ProviderTurnFailed(model=participant, error=str(e) or type(e).__name__))
        else:
            emit(AgentResponse(model=participant, text=text))

        return {
            "transcript": events,
            "participant_index": index + 1,
        }

    async def _synthesize_round(self, state: DebateGraphState) -> dict:
        """The arbiter's consensus for the round. Failures are fatal."""
        writer = get_stream_writer()
        round_number = state["round_number"]
        arbiter = state["arbiter"]

        messages = [
            system_message(ARBITER_PROMPT, self._today),
            *build_arbiter_context(state["question"], state["transcript"], round_number),
        ]

        try:
            text = await self._capabilities[arbiter].generate(messages)
        except Exception as e:
            raise ConsensusError(round_number, str(e) or type(e).__name__) from e

        consensus = AgentResponse(model=arbiter, text=text, round_number=round_number)
        completed = RoundCompleted(round_number=round_number)
        writer(consensus)
        writer(completed)

        return {
            "transcript": [consensus, completed],
            "round_number": round_number + 1,
            "participant_index": 0,
        }

    def _record_question(self) -> None:
        """Log the question in the background; failures never reach the debate."""
        if self._question_log is None:
            return

        async def record() -> None:
            try:
                await self._question_log.record(self.session.question)
            except Exception as e:
                logger.warning(f"Failed to record question for debate {self.session.id}: {e}")

        task = asyncio.create_task(record())
        self._background.add(task)
        task.add_done_callback(self._background.discard)
