"""Terminal client that drives the same dispatcher as the host page."""
from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path
from typing import Iterable

from winedex.config import settings
from winedex.display import DisplayState
from winedex.search import WineSearch

GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
RESET = "\033[0m"

STATE_COLORS = {
    DisplayState.RESULTS: GREEN,
    DisplayState.EMPTY: YELLOW,
    DisplayState.ERROR: RED,
}


async def perform_query(query: str) -> WineSearch:
    session = WineSearch(settings)
    await session.run_text_search(query)
    return session


async def perform_similar(wine_code: str) -> WineSearch:
    session = WineSearch(settings)
    await session.run_similarity_search(wine_code)
    return session


async def perform_suggested(encoded_query: str) -> WineSearch:
    session = WineSearch(settings)
    await session.run_suggested_query(encoded_query)
    return session


def pretty_print_session(label: str, session: WineSearch) -> None:
    color = STATE_COLORS.get(session.state, RESET)
    print(f"{label} | state: {color}{session.state.value}{RESET}")
    print(session.container.html)


def interactive_shell() -> None:
    print("Interactive wine search. Type 'exit' to quit, ':similar CODE' to find similar wines.")
    while True:
        try:
            line = input("> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            return
        if not line:
            continue
        if line.lower() in {"exit", "quit"}:
            return
        if line.startswith(":similar "):
            code = line.split(maxsplit=1)[1]
            pretty_print_session(f"Similar: {code}", asyncio.run(perform_similar(code)))
            continue
        pretty_print_session(f"Query: {line}", asyncio.run(perform_query(line)))


def batch_mode(file_path: Path) -> None:
    with file_path.open("r", encoding="utf-8") as fh:
        for line in fh:
            query = line.strip()
            if not query:
                continue
            pretty_print_session(f"Query: {query}", asyncio.run(perform_query(query)))


def main(argv: Iterable[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="CLI client for the wine search service")
    parser.add_argument("query", nargs="?", help="Query string. If omitted, starts REPL mode.")
    parser.add_argument("--similar", metavar="CODE", help="Find wines similar to this code")
    parser.add_argument("--suggested", metavar="ENCODED", help="Run a URL-encoded suggested query")
    parser.add_argument("--batch", type=Path, help="File with queries to execute line by line")
    args = parser.parse_args(list(argv) if argv is not None else None)

    logging.basicConfig(
        level=logging.getLevelName(settings.log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        force=True,
    )

    if args.batch:
        batch_mode(args.batch)
        return 0
    if args.similar:
        session = asyncio.run(perform_similar(args.similar))
        pretty_print_session(f"Similar: {args.similar}", session)
        return 0 if session.state is not DisplayState.ERROR else 1
    if args.suggested:
        session = asyncio.run(perform_suggested(args.suggested))
        pretty_print_session(f"Query: {session.query_field.value}", session)
        return 0 if session.state is not DisplayState.ERROR else 1
    if args.query:
        session = asyncio.run(perform_query(args.query))
        pretty_print_session(f"Query: {args.query}", session)
        return 0 if session.state is not DisplayState.ERROR else 1
    interactive_shell()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
