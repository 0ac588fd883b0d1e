from urllib.parse import parse_qsl, urlsplit

from playlist_stats.youtube_client import API_HOST, build_request


def test_request_targets_versioned_api_path():
    req = build_request("playlistItems", {"part": "id,contentDetails", "playlistId": "PL1", "key": "K"})
    parts = urlsplit(req.url)

    assert req.method == "GET"
    assert parts.scheme == "https"
    assert parts.netloc == API_HOST == "www.googleapis.com"
    assert parts.path == "/youtube/v3/playlistItems"
    assert parse_qsl(parts.query) == [
        ("part", "id,contentDetails"),
        ("playlistId", "PL1"),
        ("key", "K"),
    ]


def test_params_are_url_encoded():
    req = build_request("videos", {"id": "a b,c&d"})
    assert urlsplit(req.url).query == "id=a+b%2Cc%26d"


def test_param_order_is_stable():
    a = build_request("videos", {"part": "x", "id": "1", "key": "k"})
    b = build_request("videos", {"part": "x", "id": "1", "key": "k"})
    assert a == b
    assert a.url == b.url


def test_redacted_url_hides_key():
    req = build_request("videos", {"id": "1", "key": "secret"})
    assert "secret" not in req.redacted_url
    assert "key=%2A%2A%2A" in req.redacted_url
    assert req.param("key") == "secret"
    assert req.param("pageToken") is None
