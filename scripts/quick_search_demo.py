# Path: scripts/quick_search_demo.py
# Purpose: Simple CLI to run a search query against a freshly built catalog.
# Layer: scripts.
# Details: Demonstrates synonym-aware search and "load more" paging through a SearchSession.

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional, TextIO

# Ensure project root is on sys.path when running as a script.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from config import AppSettings, configure_logging
from core.library import LibraryManager
from core.models.domain import SearchPage
from core.search.pagination import SearchSession

LOAD_MORE_COMMAND = ":more"


def _print_page(page: SearchPage) -> None:
    for result in page.results:
        print(f"score={result.score} group={result.entry.group_name or '-'} name={result.entry.display_name} path={result.entry.id}")
    print(f"Showing {len(page.results)} of {page.total} results")


def _interactive(library: LibraryManager, session: SearchSession, stream: TextIO) -> None:
    """Read one query per line; ``:more`` shows the next page of the current query."""

    for line in stream:
        text = line.rstrip("\n")
        if text.strip() == LOAD_MORE_COMMAND:
            session.load_more(library.search_session(session).total)
        else:
            session.update(text, session.group_filter)
        _print_page(library.search_session(session))


def main(argv: Optional[List[str]] = None, stdin: Optional[TextIO] = None) -> int:
    """Execute a quick search from the command line."""

    parser = argparse.ArgumentParser(description="Run a quick search against a media wallet")
    parser.add_argument("--text", type=str, default="", help="Text query to search for")
    parser.add_argument("--group", type=str, default=None, help="Restrict results to one group")
    parser.add_argument("--pages", type=int, default=1, help="Number of result pages to show")
    parser.add_argument("--interactive", action="store_true", help=f"Read queries from stdin; '{LOAD_MORE_COMMAND}' loads the next page")
    parser.add_argument("--config", type=Path, default=Path("wallet_config.json"), help="Settings JSON file")
    parser.add_argument("--root", type=Path, default=None, help="Wallet root folder (overrides the settings file)")
    parser.add_argument("--synonyms", type=Path, default=None, help="Synonym JSON file (overrides the settings file)")
    args = parser.parse_args(argv)
    if args.pages < 1:
        parser.error("--pages must be at least 1")

    settings = AppSettings.load_from_file(args.config)
    if args.root is not None:
        settings = settings.model_copy(update={"root_dir": args.root})
    if args.synonyms is not None:
        settings.search = settings.search.model_copy(update={"synonyms_path": args.synonyms})
    configure_logging(settings.log_level)

    library = LibraryManager.from_settings(settings)
    session = SearchSession(page_size=settings.search.page_size)
    session.update(args.text, args.group)
    try:
        if args.interactive:
            _interactive(library, session, stdin if stdin is not None else sys.stdin)
            return 0
        page = library.search_session(session)
        while session.page_count < args.pages and page.has_more:
            session.load_more(page.total)
            page = library.search_session(session)
    finally:
        library.close()

    _print_page(page)
    return 0


if __name__ == "__main__":
    sys.exit(main())
