from __future__ import annotations

from typing import Iterable, List

from playlist_stats.models import Video


class Ranker:
    """
    Sorting policy for the report: views, highest first.
    sorted() is stable, so equal view counts keep their input order.
    """

    def sort(self, videos: Iterable[Video]) -> List[Video]:
        return sorted(videos, key=lambda v: v.view_count, reverse=True)
