"""
Entry point for bandwidth-tui.
Wires up: parse args -> load the log once -> run the terminal view (or the JSON API).
"""

import argparse
import logging
import sys
from typing import List, Optional

from bandwidth_tui.config import Settings, configure_logging
from bandwidth_tui.services.aggregator import Aggregator
from bandwidth_tui.services.parser import LogParser
from bandwidth_tui.services.session import Session
from bandwidth_tui.services.storage import LogStore
from bandwidth_tui.utils.opener import open_url

logger = logging.getLogger(__name__)

USAGE = "Usage: bandwidth-tui <ndjson-file>"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="bandwidth-tui",
        description="Browse per-path request and bandwidth totals from an NDJSON access log.",
    )
    p.add_argument("log_file", nargs="?", default="", help="Path to the NDJSON log file.")
    p.add_argument("--poll-ms", type=int, default=None, help="Input poll timeout in milliseconds.")
    p.add_argument("--serve", action="store_true", help="Serve the stats as JSON instead of opening the terminal view.")
    p.add_argument("--host", default=None, help="Bind host for --serve.")
    p.add_argument("--port", type=int, default=None, help="Bind port for --serve.")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    if not args.log_file:
        print(USAGE, file=sys.stderr)
        return 0

    settings = Settings.from_env().with_overrides(poll_ms=args.poll_ms, host=args.host, port=args.port)
    configure_logging(settings, to_stderr=args.serve)

    store = LogStore(args.log_file)
    aggregator = Aggregator(store, LogParser())
    try:
        stats, summary = aggregator.load_stats()
    except OSError as e:
        logger.error("Failed to load %s: %s", args.log_file, e)
        print(f"failed to load {args.log_file}: {e}", file=sys.stderr)
        return 1

    if args.serve:
        import uvicorn

        from bandwidth_tui.api import create_app

        uvicorn.run(create_app(store, stats, summary), host=settings.host, port=settings.port)
        return 0

    from bandwidth_tui.ui.terminal import run_terminal

    run_terminal(Session(stats, opener=open_url), summary, poll_ms=settings.poll_ms)
    return 0


if __name__ == "__main__":
    sys.exit(main())
