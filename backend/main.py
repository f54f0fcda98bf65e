"""
Colloquy - multi-agent LLM debate in the terminal.

Sends a question to several LLM providers for a multi-round debate. Each
round every participant speaks once, possibly searching the web first,
and an arbiter synthesizes a consensus. Events stream to the terminal as
they happen.
"""

import argparse
import asyncio
import sys
from pathlib import Path

from core.display import console, render_event
from modules.debates.capability import get_capabilities
from modules.debates.exceptions import DebateStreamError
from modules.debates.models import CreateDebateRequest
from modules.debates.service import DebateService
from modules.debates.session import DebateSession
from modules.questions.service import get_question_log
from modules.search.service import get_search_service
from providers.base import ProviderId
from shared.config import get_settings
from shared.exceptions import ValidationError
from shared.logging_config import configure_logging


async def run_debate(request: CreateDebateRequest) -> DebateSession:
    """Run a debate and render its events until the stream closes.

    Args:
        request: Question, rounds and roster of the debate

    Returns:
        The finished session
    """
    service = DebateService(
        capabilities=get_capabilities(),
        search=get_search_service(),
        question_log=get_question_log(),
    )
    session = await service.start_debate(request)

    console.print(f"[bold]Question:[/bold] {session.question}")
    console.print(
        f"[dim]Participants: {', '.join(p.display_name for p in session.participants)}[/dim]"
    )
    console.print(f"[dim]Arbiter: {session.arbiter.display_name}[/dim]")
    console.print(f"[dim]Rounds: {session.total_rounds}[/dim]\n")

    try:
        async for event in session.stream.subscribe():
            render_event(event)
    except DebateStreamError as e:
        console.print(f"\n[red]Debate failed:[/red] {e.message}")

    if session.task is not None:
        await session.task
    return session


def main(request: CreateDebateRequest) -> int:
    """Main entry point.

    Returns:
        Process exit code
    """
    try:
        session = asyncio.run(run_debate(request))
    except ValidationError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        return 2

    console.print(
        f"\n[dim]Completed {session.completed_rounds} of {session.total_rounds} round(s)[/dim]"
    )
    if session.error:
        return 1

    console.print("\n[bold green]Done![/bold green]")
    return 0


if __name__ == "__main__":
    provider_names = [p.value for p in ProviderId]

    parser = argparse.ArgumentParser(
        description="Multi-agent LLM debate with web search and per-round consensus"
    )
    parser.add_argument(
        "question",
        nargs="?",
        help="Question to debate",
    )
    parser.add_argument(
        "-f", "--file",
        type=Path,
        help="Path to a .txt or .md file containing the question",
    )
    parser.add_argument(
        "--rounds", "-r",
        type=int,
        default=1,
        help="Number of debate rounds (default: 1)",
    )
    parser.add_argument(
        "--participants", "-p",
        nargs="+",
        choices=provider_names,
        help="Participating providers in speaking order (default: from settings)",
    )
    parser.add_argument(
        "--arbiter", "-a",
        choices=provider_names,
        help="Provider that synthesizes each round (default: from settings)",
    )
    args = parser.parse_args()

    # Resolve question from file or argument
    if args.file:
        if not args.file.exists():
            console.print(f"[red]Error:[/red] File not found: {args.file}")
            sys.exit(1)
        if args.file.suffix.lower() not in (".txt", ".md"):
            console.print(f"[red]Error:[/red] File must be .txt or .md: {args.file}")
            sys.exit(1)
        question = args.file.read_text().strip()
    elif args.question:
        question = args.question
    else:
        parser.error("Either a question or --file must be provided")

    configure_logging(get_settings().log_level)

    try:
        request = CreateDebateRequest(
            question=question,
            rounds=args.rounds,
            participants=args.participants,
            arbiter=args.arbiter,
        )
    except ValueError as e:
        parser.error(str(e))

    sys.exit(main(request))
