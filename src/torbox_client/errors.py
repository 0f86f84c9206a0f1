"""Exceptions raised by the TorBox client"""


class TorboxError(Exception):
    """Base exception for TorBox client errors"""

    def __init__(self, message: str, *, operation: str | None = None):
        super().__init__(message)
        self.message = message
        self.operation = operation

    def __str__(self) -> str:
        if self.operation:
            return f'failed to {self.operation}: {self.message}'
        return self.message


class ConfigurationError(TorboxError):
    """Client cannot be created from the given settings"""


class BuildError(TorboxError):
    """Request body does not match the declared body type"""


class TransportError(TorboxError):
    """Connection level failure while talking to the API"""

    def __init__(self, message: str, *, retryable: bool = False, operation: str | None = None):
        super().__init__(message, operation=operation)
        self.retryable = retryable


class APIError(TorboxError):
    """Error status from the API or an envelope with success=false"""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        error: str = '',
        detail: str = '',
        operation: str | None = None,
    ):
        super().__init__(message, operation=operation)
        self.status_code = status_code
        self.error = error
        self.detail = detail


class DecodeError(TorboxError):
    """Response body could not be parsed into the expected model"""


class TorrentNotFoundError(TorboxError):
    """Identifier is neither an active nor a queued torrent"""


class InvalidMagnetLinkError(TorboxError, ValueError):
    """Magnet URI could not be parsed"""


class NotMagnetSchemeError(InvalidMagnetLinkError):
    """URI does not use the magnet: scheme"""


def format_api_error(error: str, detail: str, status_code: int | None = None) -> str:
    """Build an error message from the envelope error/detail strings"""
    status = f' (status: {status_code})' if status_code is not None else ''
    if error and detail:
        return f'torbox API error: {error} - {detail}{status}'
    if error or detail:
        return f'torbox API error: {error or detail}{status}'
    if status_code is not None:
        return f'torbox server error{status}'
    return 'unknown error'
