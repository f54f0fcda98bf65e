"""
Question log interface.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class IQuestionLog(Protocol):
    """
    Records every question asked, for the public question counter.

    Callers treat this as fire-and-forget: failures are never surfaced
    to the debate.
    """

    async def record(self, question: str) -> None:
        """Store one asked question."""
        ...
