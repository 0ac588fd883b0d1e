from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Statistics:
    views: int
    likes: int
    comments: int


@dataclass(frozen=True)
class Video:
    video_id: str
    title: str
    statistics: Statistics

    @property
    def view_count(self) -> int:
        return self.statistics.views


@dataclass(frozen=True)
class PlaylistReport:
    playlist_id: str
    videos: Tuple[Video, ...]
    total_views: int
