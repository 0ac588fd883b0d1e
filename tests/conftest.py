import json

import pytest


class FakeTransport:
    """Replays canned bodies (or raises canned errors) and records every request."""

    def __init__(self, responses):
        self._responses = list(responses)
        self.requests = []

    def send(self, request):
        self.requests.append(request)
        if not self._responses:
            raise AssertionError(f"unexpected request: {request.redacted_url}")
        resp = self._responses.pop(0)
        if isinstance(resp, Exception):
            raise resp
        return resp


def playlist_page(video_ids, next_page_token=None):
    data = {
        "kind": "youtube#playlistItemListResponse",
        "items": [
            {"id": f"item-{vid}", "contentDetails": {"videoId": vid}} for vid in video_ids
        ],
    }
    if next_page_token is not None:
        data["nextPageToken"] = next_page_token
    return json.dumps(data)


def video_item(video_id, title, views, likes=0, comments=0):
    return {
        "kind": "youtube#video",
        "id": video_id,
        "snippet": {"title": title, "channelTitle": "Some Channel"},
        "statistics": {
            "viewCount": views,
            "likeCount": likes,
            "commentCount": comments,
        },
    }


def videos_body(items):
    return json.dumps({"kind": "youtube#videoListResponse", "items": items})


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    # keep real keys and user config files out of the tests
    monkeypatch.delenv("YOUTUBE_API_KEY", raising=False)
    monkeypatch.delenv("PLAYLIST_STATS_MAX_PAGES", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setenv("APPDATA", str(tmp_path / "appdata"))
    monkeypatch.chdir(tmp_path)
