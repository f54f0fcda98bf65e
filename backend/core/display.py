"""Rich terminal rendering for debate events."""

import re

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from modules.debates.models import (
    AgentResponse,
    DebateEvent,
    ProviderTurnFailed,
    ProviderTurnStarted,
    RoundCompleted,
    ToolInvocation,
)

console = Console()

# Long answers are cut when printed
MAX_ANSWER_CHARS = 1500


def extract_answer(content: str) -> str:
    """Extract the answer portion from content (everything outside <think> tags).

    Args:
        content: Full response including potential <think>...</think> tags

    Returns:
        The answer portion, or the full content if nothing is left
    """
    think_pattern = r"<think>.*?</think>"
    answer = re.sub(think_pattern, "", content, flags=re.DOTALL).strip()
    return answer if answer else content.strip()


def _truncate(text: str, limit: int = MAX_ANSWER_CHARS) -> str:
    return text[:limit] + "..." if len(text) > limit else text


def render_event(event: DebateEvent) -> None:
    """Print one debate event to the console."""
    if isinstance(event, ProviderTurnStarted):
        console.print(f"[dim]{event.model.display_name} is thinking...[/dim]")
    elif isinstance(event, ToolInvocation):
        console.print(
            f"[dim]{event.model.display_name} searched for[/dim] "
            f"[italic]{event.query}[/italic] [dim]({len(event.results)} results)[/dim]"
        )
    elif isinstance(event, AgentResponse):
        answer = _truncate(extract_answer(event.text))
        if event.is_consensus:
            title = f"Consensus, round {event.round_number + 1} ({event.model.display_name})"
            border = "green"
        else:
            title = event.model.display_name
            border = "blue"
        console.print(Panel(Text(answer, overflow="fold"), title=title, border_style=border))
    elif isinstance(event, ProviderTurnFailed):
        console.print(f"[yellow]{event.model.display_name} skipped this turn:[/yellow] {event.error}")
    elif isinstance(event, RoundCompleted):
        console.print(f"[dim]Round {event.round_number + 1} complete[/dim]")
        console.print("─" * 60)
