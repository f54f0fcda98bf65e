"""
Debates service implementation.

Owns the live sessions: each debate runs as its own asyncio task and is
dropped from the registry once that task finishes.
"""

import asyncio
import logging
from collections.abc import Mapping
from typing import Optional

from modules.questions.interfaces import IQuestionLog
from modules.search.interfaces import ISearchService
from providers.base import ProviderId
from providers.factory import parse_provider
from shared.config import Settings, get_settings
from shared.exceptions import ValidationError

from .capability import ICapabilityProvider
from .exceptions import DebateNotFoundError, InvalidParticipantsError
from .interfaces import IDebateService
from .models import CreateDebateRequest, DebateStatus
from .orchestrator import CANCELLED_MESSAGE, DebateOrchestrator
from .session import DebateSession

logger = logging.getLogger(__name__)


class DebateService(IDebateService):
    """
    In-memory debate service.

    Implements IDebateService. Sessions are never persisted; the only
    side effect outside the process is the question log.
    """

    def __init__(
        self,
        capabilities: Mapping[ProviderId, ICapabilityProvider],
        search: ISearchService,
        question_log: Optional[IQuestionLog] = None,
        settings: Optional[Settings] = None,
    ):
        self._capabilities = capabilities
        self._search = search
        self._question_log = question_log
        self._settings = settings or get_settings()
        self._sessions: dict[str, DebateSession] = {}

    @property
    def active_sessions(self) -> list[DebateSession]:
        return list(self._sessions.values())

    def resolve_roster(
        self,
        request: CreateDebateRequest,
    ) -> tuple[list[ProviderId], ProviderId]:
        """
        Work out who debates and who arbitrates.

        Falls back to the configured defaults for whatever the request
        leaves out, then checks every provider has a capability.
        """
        try:
            participants = request.participants or [
                parse_provider(name) for name in self._settings.debate_participants
            ]
            arbiter = request.arbiter or parse_provider(self._settings.debate_arbiter)
        except ValueError as e:
            raise InvalidParticipantsError(f"Invalid debate configuration: {e}") from e

        unknown = [p.value for p in [*participants, arbiter] if p not in self._capabilities]
        if unknown:
            raise InvalidParticipantsError(
                f"No capability provider registered for: {', '.join(unknown)}",
                unknown,
            )
        return list(participants), arbiter

    async def start_debate(self, request: CreateDebateRequest) -> DebateSession:
        """Create a session and schedule its orchestrator."""
        if request.rounds > self._settings.debate_max_rounds:
            raise ValidationError(
                f"At most {self._settings.debate_max_rounds} rounds are allowed",
                details={"rounds": request.rounds},
            )

        participants, arbiter = self.resolve_roster(request)
        session = DebateSession(
            question=request.question,
            total_rounds=request.rounds,
            participants=participants,
            arbiter=arbiter,
        )
        orchestrator = DebateOrchestrator(
            session,
            capabilities=self._capabilities,
            search=self._search,
            question_log=self._question_log,
            emit_turn_failures=self._settings.debate_emit_turn_failures,
        )

        self._sessions[session.id] = session
        session.task = asyncio.create_task(orchestrator.run(), name=f"debate-{session.id}")
        session.task.add_done_callback(lambda task: self._on_task_done(session, task))
        return session

    def get_session(self, debate_id: str) -> Optional[DebateSession]:
        return self._sessions.get(debate_id)

    async def cancel_debate(self, debate_id: str) -> DebateSession:
        session = self._sessions.get(debate_id)
        if session is None:
            raise DebateNotFoundError(debate_id)

        if session.cancel():
            logger.info(f"Cancellation requested for debate {debate_id}")
        return session

    def _on_task_done(self, session: DebateSession, task: asyncio.Task) -> None:
        """Close the stream of a session cancelled before its run started."""
        if task.cancelled() and not session.stream.closed:
            logger.info(f"Debate {session.id} cancelled before it started")
            session.status = DebateStatus.CANCELLED
            session.error = CANCELLED_MESSAGE
            session.stream.fail(CANCELLED_MESSAGE)
        self._forget(session.id)

    def _forget(self, debate_id: str) -> None:
        session = self._sessions.pop(debate_id, None)
        if session is not None:
            logger.debug(f"Debate {debate_id} finished with status {session.status.value}")


# Module-level instance getter
_service_instance: Optional[DebateService] = None


def get_debate_service() -> DebateService:
    """Get the debate service singleton."""
    global _service_instance
    if _service_instance is None:
        from modules.questions.service import get_question_log
        from modules.search.service import get_search_service
        from .capability import get_capabilities

        _service_instance = DebateService(
            capabilities=get_capabilities(),
            search=get_search_service(),
            question_log=get_question_log(),
        )
    return _service_instance


def reset_debate_service() -> None:
    """Reset the debate service singleton (for testing)."""
    global _service_instance
    _service_instance = None
