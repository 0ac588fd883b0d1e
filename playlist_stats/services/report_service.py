from __future__ import annotations

import logging

from playlist_stats.errors import DecodeError, PipelineError, TransportError
from playlist_stats.models import PlaylistReport
from playlist_stats.services.ranker import Ranker
from playlist_stats.youtube_client import YouTubeClient

logger = logging.getLogger(__name__)

PLAYLIST_STAGE = "cannot fetch videos from playlist"
STATISTICS_STAGE = "cannot fetch statistics for videos"


class PlaylistReportService:
    def __init__(self, yt: YouTubeClient, ranker: Ranker | None = None) -> None:
        self._yt = yt
        self._ranker = ranker or Ranker()

    def build(self, playlist_id: str) -> PlaylistReport:
        try:
            video_ids = self._yt.playlist_video_ids(playlist_id)
        except (TransportError, DecodeError) as exc:
            raise PipelineError(PLAYLIST_STAGE, exc) from exc

        try:
            videos = self._yt.fetch_videos(video_ids)
        except (TransportError, DecodeError) as exc:
            raise PipelineError(STATISTICS_STAGE, exc) from exc

        ranked = self._ranker.sort(videos)
        total = sum(v.view_count for v in ranked)
        logger.info("playlist %s: %d videos, %d total views", playlist_id, len(ranked), total)
        return PlaylistReport(playlist_id=playlist_id, videos=tuple(ranked), total_views=total)
