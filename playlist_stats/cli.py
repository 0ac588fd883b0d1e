import argparse
import logging
import sys
from typing import List, Optional

from playlist_stats.config import (
    DEFAULT_PLAYLIST_ID,
    TITLE_WIDTH,
    get_api_key,
    get_max_pages,
    save_api_key,
)
from playlist_stats.errors import PlaylistStatsError
from playlist_stats.output.report import ReportPrinter
from playlist_stats.services.report_service import PlaylistReportService
from playlist_stats.youtube_client import YouTubeClient

logger = logging.getLogger(__name__)


def run(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        prog="playlist-stats",
        description="List the videos of a YouTube playlist ranked by views.",
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="Log progress to stderr (-vv for debug)."
    )
    sub = parser.add_subparsers(dest="command", required=True)

    report = sub.add_parser("report", help="Print every video of a playlist sorted by views.")
    report.add_argument(
        "playlist_id", nargs="?", default=DEFAULT_PLAYLIST_ID, help="Playlist ID (PL...)."
    )
    report.add_argument(
        "--max-pages",
        type=_positive_int,
        default=None,
        help="Stop after this many playlist pages (default: no limit).",
    )
    report.add_argument("--width", type=_title_width, default=TITLE_WIDTH, help="Title column width.")

    set_key = sub.add_parser("set-key", help="Store the API key in the per-user config file.")
    set_key.add_argument("key", help="YouTube Data API key.")

    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    try:
        if args.command == "report":
            _handle_report(args)
        elif args.command == "set-key":
            _handle_set_key(args)
    except PlaylistStatsError as exc:
        logger.debug("aborting", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(1)


def _handle_report(args: argparse.Namespace) -> None:
    api_key = get_api_key()
    max_pages = args.max_pages if args.max_pages is not None else get_max_pages()
    yt = YouTubeClient(api_key=api_key, max_pages=max_pages)
    svc = PlaylistReportService(yt=yt)

    # build() either returns the whole report or raises; nothing is printed on failure
    result = svc.build(args.playlist_id)
    ReportPrinter(width=args.width).print(result)


def _handle_set_key(args: argparse.Namespace) -> None:
    path = save_api_key(args.key)
    print(f"Saved API key to {path}")


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    # stdout is reserved for the report
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def _title_width(s: str) -> int:
    n = _positive_int(s)
    if n < 4:
        raise argparse.ArgumentTypeError(f"title width must be at least 4: {s!r}")
    return n


def _positive_int(s: str) -> int:
    try:
        n = int(s)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {s!r}") from None
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1: {s!r}")
    return n
