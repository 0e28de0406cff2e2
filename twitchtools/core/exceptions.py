"""Error taxonomy for the proxy.

Every error carries the message returned to clients as ``{"error": ...}``
and the status code it maps to when strict error statuses are enabled.
Without strict mode everything except a missing parameter is a 500.
"""


class TwitchToolsError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingParameterError(TwitchToolsError):
    """A required query parameter was absent or empty."""

    status_code = 400

    def __init__(self, name: str):
        super().__init__(f"{name} parameter required")
        self.parameter = name


class UpstreamAuthError(TwitchToolsError):
    """The client-credentials exchange did not yield a token."""

    status_code = 502


class NotFoundError(TwitchToolsError):
    """No Helix user matched the requested login."""

    status_code = 404


class ChannelUnavailableError(TwitchToolsError):
    """The chatters lookup failed (channel offline or nonexistent)."""

    status_code = 503


class UpstreamProtocolError(TwitchToolsError):
    """Any other non-success response from Helix."""

    status_code = 502


def status_for(error: TwitchToolsError, strict: bool) -> int:
    """HTTP status for *error*; non-strict mode collapses upstream failures to 500."""
    if strict or isinstance(error, MissingParameterError):
        return error.status_code
    return 500
