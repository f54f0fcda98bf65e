"""
Context reconstruction for debate turns.

Every turn is a stateless call: an agent's whole view of the debate is
projected from the shared transcript right before it speaks. Functions here
are pure; the same transcript prefix and agent always produce the same
messages. System prompts carry the current date and are prepended by the
orchestrator, not here.
"""

import json
from datetime import date
from pathlib import Path
from typing import Any, Iterable

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from modules.search.models import SearchResult
from providers.base import ProviderId

from .models import AgentResponse, DebateEvent, ToolInvocation

# Path to prompts directory
PROMPTS_DIR = Path(__file__).parent.parent.parent / "prompts"

PARTICIPANT_PROMPT = "participant"
ARBITER_PROMPT = "arbiter"

# Page text beyond this is cut to keep the context manageable
MAX_RESULT_CONTENT = 2000

CONTINUE_INSTRUCTION = (
    "Continue the debate with your next contribution. Respond directly with "
    "your arguments and evidence; do not comment on the debate format, the "
    "other participants' instructions, or your own process. "
    "The original question was: {question}"
)


def load_prompt(name: str, today: date | None = None) -> str:
    """Load a prompt template from the prompts directory and fill in the date."""
    template = (PROMPTS_DIR / f"{name}.txt").read_text()
    return template.replace("{current_date}", (today or date.today()).isoformat())


def system_message(name: str, today: date | None = None) -> SystemMessage:
    return SystemMessage(content=load_prompt(name, today))


def _truncate(text: str, limit: int = MAX_RESULT_CONTENT) -> str:
    return text[:limit] + "..." if len(text) > limit else text


def _result_record(result: SearchResult) -> dict[str, str]:
    return {
        "title": result.title,
        "link": result.link,
        "snippet": result.snippet,
        "content": _truncate(result.content),
    }


def format_search_results(results: Iterable[SearchResult]) -> str:
    """Serialize search results as JSON, the way agents see them."""
    return json.dumps([_result_record(r) for r in results], ensure_ascii=False)


def _event_record(event: DebateEvent) -> dict[str, Any]:
    record = event.model_dump(mode="json", exclude_none=True)
    if isinstance(event, ToolInvocation):
        record["results"] = [_result_record(r) for r in event.results]
    return record


def build_context(
    question: str,
    transcript: Iterable[DebateEvent],
    for_agent: ProviderId,
) -> list[BaseMessage]:
    """
    Build the message sequence that primes ``for_agent``'s next turn.

    - Empty transcript: the question as a single user message.
    - Otherwise every search becomes an informational user message, the
      agent's own responses become assistant messages, other agents'
      responses become user messages prefixed with their display name,
      and a closing instruction restates the question.
    """
    events = list(transcript)
    if not events:
        return [HumanMessage(content=question)]

    messages: list[BaseMessage] = []
    for event in events:
        if isinstance(event, ToolInvocation):
            messages.append(
                HumanMessage(
                    content=(
                        f"{event.model.display_name} searched for `{event.query}`; "
                        f"results: {format_search_results(event.results)}"
                    )
                )
            )
        elif isinstance(event, AgentResponse):
            if event.model == for_agent:
                messages.append(AIMessage(content=event.text))
            else:
                messages.append(
                    HumanMessage(content=f"{event.model.display_name}: {event.text}")
                )

    messages.append(HumanMessage(content=CONTINUE_INSTRUCTION.format(question=question)))
    return messages


def build_arbiter_context(
    question: str,
    transcript: Iterable[DebateEvent],
    round_number: int,
) -> list[BaseMessage]:
    """
    Build the arbiter's request for round ``round_number``.

    The arbiter always sees the full multi-party record, serialized as
    JSON, rather than a per-agent replay.
    """
    history = json.dumps(
        [_event_record(event) for event in transcript],
        indent=2,
        ensure_ascii=False,
    )
    return [
        HumanMessage(
            content=(
                f"Question under debate: {question}\n\n"
                f"Please provide the consensus for round {round_number + 1} "
                f"based on this debate:\n{history}"
            )
        )
    ]
