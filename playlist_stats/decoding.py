from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Callable, Generic, List, Optional, Tuple, TypeVar, Union

from playlist_stats.errors import DecodeError
from playlist_stats.models import Statistics, Video

T = TypeVar("T")

_INT_LITERAL_RE = re.compile(r"[+-]?[0-9]+")


# Tagged results. A decoder answers with exactly one of these:
#   Ok        -> the value had the right type and was decoded
#   Mismatch  -> the value has the wrong JSON type for this decoder
#   Invalid   -> right type, but the value itself is unacceptable


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Mismatch:
    expected: str
    got: str


@dataclass(frozen=True)
class Invalid:
    reason: str


Result = Union[Ok[T], Mismatch, Invalid]
Decoder = Callable[[Any], "Result[T]"]


def first_of(*decoders: Decoder) -> Decoder:
    """
    Ordered alternative: try each decoder in turn, moving on only when the
    previous one reported a type mismatch. An Invalid result stops the chain.
    """

    def decode(value: Any) -> Result:
        expected: List[str] = []
        for dec in decoders:
            res = dec(value)
            if isinstance(res, Mismatch):
                expected.append(res.expected)
                continue
            return res
        return Mismatch(expected=" or ".join(expected), got=_json_type(value))

    return decode


def number_int(value: Any) -> Result[int]:
    # bool is an int subclass in Python but a distinct JSON type
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return Mismatch(expected="number", got=_json_type(value))
    if isinstance(value, float) and not value.is_integer():
        return Invalid(f"{value!r} is not an integer")
    return _non_negative(int(value))


def string_int(value: Any) -> Result[int]:
    if not isinstance(value, str):
        return Mismatch(expected="string", got=_json_type(value))
    if not _INT_LITERAL_RE.fullmatch(value):
        return Invalid(f"{value!r} is not a base-10 integer")
    try:
        n = int(value, 10)
    except ValueError as exc:
        # CPython caps str->int conversion length
        return Invalid(f"integer literal of {len(value)} digits cannot be converted ({exc})")
    return _non_negative(n)


permissive_int = first_of(number_int, string_int)


def _non_negative(n: int) -> Result[int]:
    if n < 0:
        return Invalid(f"{n} is negative")
    return Ok(n)


def _json_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


# --- strict field access ---------------------------------------------------


def parse_json(body: str) -> dict:
    try:
        data = json.loads(body)
    except (TypeError, ValueError) as exc:
        raise DecodeError("", f"response is not valid JSON ({exc})") from exc
    if not isinstance(data, dict):
        raise DecodeError("", f"expected a JSON object, got {_json_type(data)}")
    return data


def _field(obj: dict, name: str, path: str) -> Any:
    if name not in obj:
        raise DecodeError(_join(path, name), "missing field")
    return obj[name]


def _typed(obj: dict, name: str, kind: type, path: str) -> Any:
    value = _field(obj, name, path)
    if isinstance(value, bool) or not isinstance(value, kind):
        expected = {str: "string", dict: "object", list: "array"}[kind]
        raise DecodeError(_join(path, name), f"expected {expected}, got {_json_type(value)}")
    return value


def _decode_with(decoder: Decoder, obj: dict, name: str, path: str) -> Any:
    field_path = _join(path, name)
    res = decoder(_field(obj, name, path))
    if isinstance(res, Ok):
        return res.value
    if isinstance(res, Mismatch):
        raise DecodeError(field_path, f"expected {res.expected}, got {res.got}")
    raise DecodeError(field_path, res.reason)


def _join(path: str, name: str) -> str:
    return f"{path}.{name}" if path else name


# --- record decoders -------------------------------------------------------


def decode_statistics(obj: dict, path: str = "statistics") -> Statistics:
    return Statistics(
        views=_decode_with(permissive_int, obj, "viewCount", path),
        likes=_decode_with(permissive_int, obj, "likeCount", path),
        comments=_decode_with(permissive_int, obj, "commentCount", path),
    )


def decode_video(item: Any, path: str = "") -> Video:
    if not isinstance(item, dict):
        raise DecodeError(path, f"expected object, got {_json_type(item)}")
    snippet = _typed(item, "snippet", dict, path)
    stats = _typed(item, "statistics", dict, path)
    return Video(
        video_id=_typed(item, "id", str, path),
        title=_typed(snippet, "title", str, _join(path, "snippet")),
        statistics=decode_statistics(stats, _join(path, "statistics")),
    )


def decode_items(data: dict) -> list:
    return _typed(data, "items", list, "")


def decode_video_list(body: str) -> List[Video]:
    items = decode_items(parse_json(body))
    return [decode_video(item, f"items[{i}]") for i, item in enumerate(items)]


def decode_playlist_page(body: str) -> Tuple[List[str], Optional[str]]:
    """
    Returns (video_ids, next_page_token) for one playlistItems page.
    The token is None when it is absent or not a string.
    """
    data = parse_json(body)
    ids: List[str] = []
    for i, item in enumerate(decode_items(data)):
        path = f"items[{i}]"
        if not isinstance(item, dict):
            raise DecodeError(path, f"expected object, got {_json_type(item)}")
        details = _typed(item, "contentDetails", dict, path)
        ids.append(_typed(details, "videoId", str, _join(path, "contentDetails")))

    token = data.get("nextPageToken")
    if not isinstance(token, str):
        token = None
    return ids, token
