from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional, Tuple
from urllib.parse import urlencode

import httplib2
from googleapiclient.errors import HttpError
from googleapiclient.http import HttpRequest, build_http

from playlist_stats.decoding import decode_playlist_page, decode_video_list
from playlist_stats.errors import DecodeError, TransportError
from playlist_stats.models import Video

logger = logging.getLogger(__name__)

API_HOST = "www.googleapis.com"
API_BASE_PATH = "/youtube/v3/"


@dataclass(frozen=True)
class ApiRequest:
    path: str
    params: Tuple[Tuple[str, str], ...]
    method: str = "GET"

    @property
    def url(self) -> str:
        return f"https://{API_HOST}{API_BASE_PATH}{self.path}?{urlencode(self.params)}"

    @property
    def redacted_url(self) -> str:
        # for log lines; never print the API key
        params = [(k, "***" if k == "key" else v) for k, v in self.params]
        return f"https://{API_HOST}{API_BASE_PATH}{self.path}?{urlencode(params)}"

    def param(self, name: str) -> Optional[str]:
        for k, v in self.params:
            if k == name:
                return v
        return None


def build_request(path: str, params: Mapping[str, str]) -> ApiRequest:
    """Parameters keep the caller's insertion order."""
    return ApiRequest(path=path, params=tuple((k, str(v)) for k, v in params.items()))


class HttpTransport:
    """
    Sends ApiRequests through google-api-python-client's HttpRequest.
    One httplib2.Http is built per transport and reused.
    """

    def __init__(self, http: Optional[httplib2.Http] = None) -> None:
        self._http = http or build_http()

    def send(self, request: ApiRequest) -> str:
        req = HttpRequest(
            self._http,
            _body_text,
            request.url,
            method=request.method,
            headers={"accept": "application/json"},
        )
        try:
            return req.execute()
        except HttpError as exc:
            # str(exc) embeds the request URI, key included
            status = getattr(exc.resp, "status", None)
            reason = getattr(exc, "reason", "") or ""
            raise TransportError(f"{request.path}: HTTP {status} {reason}".rstrip(), status=status) from exc
        except (httplib2.HttpLib2Error, OSError) as exc:
            raise TransportError(f"{request.path}: {exc}") from exc


def _body_text(resp, content) -> str:
    if isinstance(content, bytes):
        try:
            return content.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError("", f"response is not valid UTF-8 ({exc.reason} at byte {exc.start})") from exc
    return content


class YouTubeClient:
    """
    Thin wrapper around the two YouTube Data API v3 calls we need:
      - page through a playlist for its video IDs
      - fetch stats for those IDs in one batched request
    """

    def __init__(self, api_key: str, transport=None, max_pages: Optional[int] = None) -> None:
        self._api_key = api_key
        self._transport = transport or HttpTransport()
        self._max_pages = max_pages

    def _send(self, request: ApiRequest) -> str:
        logger.debug("GET %s", request.redacted_url)
        return self._transport.send(request)

    def playlist_video_ids(self, playlist_id: str) -> List[str]:
        params = {
            "part": "id,contentDetails",
            "playlistId": playlist_id,
            "key": self._api_key,
        }
        ids: list[str] = []
        pages = 0

        while True:
            body = self._send(build_request("playlistItems", params))
            page_ids, page_token = decode_playlist_page(body)
            ids.extend(page_ids)
            pages += 1
            logger.debug("playlist %s page %d: %d items", playlist_id, pages, len(page_ids))

            if page_token is None:
                break
            if self._max_pages is not None and pages >= self._max_pages:
                logger.warning(
                    "stopping after %d pages of playlist %s (max_pages reached)", pages, playlist_id
                )
                break
            params = {**params, "pageToken": page_token}

        logger.info("playlist %s: %d videos in %d pages", playlist_id, len(ids), pages)
        return ids

    def fetch_videos(self, video_ids: Iterable[str]) -> List[Video]:
        vids = list(video_ids)
        if not vids:
            return []

        # one batched lookup; an oversized batch fails at the API, it is not split
        logger.info("fetching statistics for %d videos", len(vids))
        body = self._send(
            build_request(
                "videos",
                {
                    "part": "statistics,id,snippet",
                    "id": ",".join(vids),
                    "key": self._api_key,
                },
            )
        )
        return decode_video_list(body)
