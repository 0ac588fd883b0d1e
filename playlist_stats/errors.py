from __future__ import annotations

from typing import Optional


class PlaylistStatsError(Exception):
    """Base class for everything this package raises on purpose."""


class ConfigError(PlaylistStatsError):
    pass


class TransportError(PlaylistStatsError):
    """The request could not be completed, or came back with a failing HTTP status."""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


class DecodeError(PlaylistStatsError):
    """The response body is not JSON, or does not have the expected shape."""

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"{path}: {message}" if path else message)
        self.path = path


class PipelineError(PlaylistStatsError):
    """A stage of the report pipeline failed; the cause is chained."""

    def __init__(self, stage: str, cause: PlaylistStatsError) -> None:
        super().__init__(f"{stage}: {cause}")
        self.stage = stage
