"""
Errors raised by the football-data.org client.

The client never recovers from these locally; callers decide whether to
retry. Each error carries a message_key understood by matchday.i18n.
"""

from typing import Optional


class FootballDataError(Exception):
    """Base error for football-data.org requests."""
    message_key = 'error_unknown'
    status_code: Optional[int] = None


class InvalidResponse(FootballDataError):
    """Transport failure or a result that is not a usable HTTP response."""
    message_key = 'error_invalid_response'


class RateLimited(FootballDataError):
    """HTTP 429: the plan's request budget is exhausted."""
    message_key = 'error_rate_limited'
    status_code = 429


class Unauthorized(FootballDataError):
    """HTTP 403: missing, invalid or insufficient API key."""
    message_key = 'error_unauthorized'
    status_code = 403


class NotFound(FootballDataError):
    """HTTP 404."""
    message_key = 'error_not_found'
    status_code = 404


class ServerError(FootballDataError):
    """Any other non-200 status."""
    message_key = 'error_server'

    def __init__(self, status_code: int, message: Optional[str] = None):
        self.status_code = status_code
        super().__init__(message or f"Server error ({status_code})")


class DecodingError(FootballDataError):
    """A 200 response whose body does not match the expected shape."""
    message_key = 'error_decoding'

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Could not decode response: {detail}")


def error_for_status(status_code: int, body: str = "") -> FootballDataError:
    """Map a non-200 HTTP status to its error."""
    snippet = body[:200] if body else ""
    if status_code == 429:
        return RateLimited(snippet or "Too many requests")
    if status_code == 403:
        return Unauthorized(snippet or "Forbidden")
    if status_code == 404:
        return NotFound(snippet or "Not found")
    return ServerError(status_code, snippet or None)
