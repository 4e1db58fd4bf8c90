"""Custom exception hierarchy for the API relay."""


class ProxyError(Exception):
    """Base exception for all relay errors."""


class RouteNotFound(ProxyError):
    """Raised when a request path matches no configured prefix."""

    def __init__(self, path: str) -> None:
        super().__init__(f"No matching prefix found for path: {path}")
        self.path = path


class UpstreamError(ProxyError):
    """Raised when an upstream API could not be called.

    Attributes:
        message: Error message
        target_url: Upstream URL the request was sent to
        detail: Underlying client error text
    """

    def __init__(self, message: str, target_url: str, detail: str = "") -> None:
        super().__init__(message)
        self.target_url = target_url
        self.detail = detail


class UpstreamCallError(UpstreamError):
    """Raised when the outbound call fails before a response is received."""

    def __init__(self, target_url: str, detail: str) -> None:
        super().__init__(f"Failed to fetch {target_url}: {detail}", target_url, detail)
