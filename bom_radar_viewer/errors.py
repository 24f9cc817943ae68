"""Exceptions raised while talking to the Bureau of Meteorology."""

from typing import Optional


class RadarViewerError(Exception):
    """Base exception for upstream data problems."""

    pass


class UpstreamFetchError(RadarViewerError):
    """The upstream HTTP call failed or returned a non-success status.

    ``status`` is ``None`` when no response was received at all
    (connection refused, timeout, DNS failure).
    """

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        reason: Optional[str] = None,
        url: Optional[str] = None,
    ):
        super().__init__(message)
        self.status = status
        self.reason = reason
        self.url = url


class NoDataError(RadarViewerError):
    """The upstream call succeeded but had nothing we could use."""

    pass


class LocationNotFoundError(NoDataError):
    """The location search returned no candidates for the coordinates."""

    pass


class PartialDataError(RadarViewerError):
    """An optional weather sub-fetch failed; its field becomes null."""

    pass
