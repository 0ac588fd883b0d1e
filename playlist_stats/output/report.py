from __future__ import annotations

from typing import Iterable

from playlist_stats.config import TITLE_WIDTH
from playlist_stats.models import PlaylistReport, Video

_ELLIPSIS = "..."


class ReportPrinter:
    def __init__(self, width: int = TITLE_WIDTH) -> None:
        self._width = width

    def print(self, report: PlaylistReport) -> None:
        text = format_report(report.videos, self._width)
        if text:
            print(text)
        print(format_total(report.total_views))


def format_report(videos: Iterable[Video], width: int = TITLE_WIDTH) -> str:
    """One line per video, in the order given: padded title, two spaces, views."""
    return "\n".join(
        f"{_truncate(v.title, width).ljust(width)}  {v.view_count}" for v in videos
    )


def format_total(total_views: int) -> str:
    return f"Total views: {total_views}"


def _truncate(text: str, max_len: int) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - len(_ELLIPSIS)] + _ELLIPSIS
