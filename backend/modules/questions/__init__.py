"""
Questions module.

Logs every debate question for the visitor-facing question counter.
"""

from .interfaces import IQuestionLog

__all__ = ["IQuestionLog"]
