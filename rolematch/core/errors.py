"""Error taxonomy for resolving, fetching, and exporting matched candidates."""

GENERIC_FETCH_MESSAGE = "Failed to load data. Please try again."


class RoleMatchError(Exception):
    """Base class for every failure surfaced to the dashboard user."""

    user_message = GENERIC_FETCH_MESSAGE


class MissingParameterError(RoleMatchError):
    """Role identifier absent where a request needs one."""


class ResolutionError(RoleMatchError):
    """Role link did not match any known pattern."""

    user_message = "Could not extract a valid role ID from the link"

    def __init__(self, link: str, reason: str):
        super().__init__(f"Could not resolve role link {link!r}: {reason}")
        self.link = link
        self.reason = reason


class FetchTimeoutError(RoleMatchError):
    """Upstream did not answer before the client deadline."""

    def __init__(self, timeout: float):
        super().__init__(f"Request timed out after {int(timeout * 1000)}ms")
        self.timeout = timeout


class HTTPStatusError(RoleMatchError):
    """Upstream answered with a non-success status."""

    def __init__(self, status: int, body: str = ""):
        super().__init__(f"HTTP error! status: {status}")
        self.status = status
        self.body = body


class UnknownNetworkError(RoleMatchError):
    """Transport failure other than a timeout."""


class MalformedResponseError(RoleMatchError):
    """Body was not JSON or did not fit either known response shape."""


class EmptySelectionError(RoleMatchError):
    """Export or email requested with nothing selected."""

    user_message = "Please select at least one candidate"
