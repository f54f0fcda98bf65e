"""
Question log implementations.

SupabaseQuestionLog writes to the `questions` table; NullQuestionLog is used
when no database is configured.
"""

import asyncio
import logging
from typing import Optional

from supabase import Client

from shared.config import get_settings
from shared.database import get_supabase_client, is_supabase_configured

from .interfaces import IQuestionLog

logger = logging.getLogger(__name__)


class SupabaseQuestionLog(IQuestionLog):
    """Question log backed by a Supabase table."""

    def __init__(self, supabase_client: Client, table: str = "questions"):
        self._db = supabase_client
        self._table = table

    async def record(self, question: str) -> None:
        # supabase-py is synchronous; keep the event loop free
        await asyncio.to_thread(
            lambda: self._db.table(self._table).insert({"question": question}).execute()
        )


class NullQuestionLog(IQuestionLog):
    """Question log that only writes to the application log."""

    async def record(self, question: str) -> None:
        logger.debug(f"Question asked: {question[:100]}")


# Module-level instance getter
_log_instance: Optional[IQuestionLog] = None


def get_question_log() -> IQuestionLog:
    """Get the question log singleton."""
    global _log_instance
    if _log_instance is None:
        if is_supabase_configured():
            _log_instance = SupabaseQuestionLog(
                get_supabase_client(),
                table=get_settings().questions_table,
            )
        else:
            _log_instance = NullQuestionLog()
    return _log_instance


def reset_question_log() -> None:
    """Reset the question log singleton (for testing)."""
    global _log_instance
    _log_instance = None
