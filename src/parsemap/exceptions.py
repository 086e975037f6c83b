class ParsemapError(Exception):
    """Base error for everything raised by parsemap."""


class InvalidInput(ParsemapError, ValueError):
    """A coordinate, precision, cell code or request parameter is out of range."""


class UpstreamDataError(ParsemapError):
    """A zone statistics or point lookup source failed or returned bad data."""


class ConnectionError(UpstreamDataError):
    """Could not reach the zone store."""


class AuthenticationError(UpstreamDataError):
    """Missing or wrong app key (401)."""


class NotFoundError(UpstreamDataError):
    """List not found (404)."""


class ServerError(UpstreamDataError):
    """Internal zone store error (500)."""
