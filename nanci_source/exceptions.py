"""
Defines custom exceptions for the plugin to allow for more specific error handling.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Classifies why a stream URL could not be resolved."""

    NETWORK = "network"
    HTTP_STATUS = "http_status"
    PARSE = "parse"
    MISSING_FIELD = "missing_field"
    INVALID_REQUEST = "invalid_request"
    UNEXPECTED = "unexpected"


class NanciSourceError(Exception):
    """Base exception for all plugin-specific errors."""


class ConfigurationError(NanciSourceError):
    """Raised for issues related to configuration loading or validation."""


class ResolutionError(NanciSourceError):
    """Raised when a stream URL cannot be resolved for a song."""

    kind: ErrorKind

    def __init__(self, message: str, song_id: str, quality: str):
        super().__init__(message)
        self.song_id = song_id
        self.quality = quality


class NetworkError(ResolutionError):
    """Raised when the upstream service cannot be reached or times out."""

    kind = ErrorKind.NETWORK


class UpstreamStatusError(ResolutionError):
    """Raised when the upstream service answers with a non-2xx status."""

    kind = ErrorKind.HTTP_STATUS

    def __init__(self, message: str, song_id: str, quality: str, status: int):
        super().__init__(message, song_id, quality)
        self.status = status


class ResponseParseError(ResolutionError):
    """Raised when the response body is not a JSON object."""

    kind = ErrorKind.PARSE


class MissingFieldError(ResolutionError):
    """Raised when the JSON body carries no usable 'data' field."""

    kind = ErrorKind.MISSING_FIELD


class InvalidRequestError(ResolutionError):
    """Raised when the request cannot be sent, e.g. a header holds a control character."""

    kind = ErrorKind.INVALID_REQUEST


class UnexpectedResolutionError(ResolutionError):
    """Wraps any other error raised while resolving."""

    kind = ErrorKind.UNEXPECTED
