"""Request routing logic - maps a path prefix to an upstream API."""

from collections.abc import Sequence
from dataclasses import dataclass

from core.routes import ROUTE_TABLE, Route


@dataclass(frozen=True)
class RouteMatch:
    """Routing decision for a request path."""

    prefix: str
    upstream: str
    remainder: str

    def target_url(self, query: str = "") -> str:
        """Build the absolute upstream URL, keeping the original query string."""
        url = f"{self.upstream}{self.remainder}"
        if query:
            url += f"?{query}"
        return url


class PrefixRouter:
    """Match request paths against an ordered prefix table."""

    def __init__(self, routes: Sequence[Route] = ROUTE_TABLE):
        self._routes = tuple(routes)

    @property
    def routes(self) -> tuple[Route, ...]:
        return self._routes

    def match(self, path: str) -> RouteMatch | None:
        """Return the first route whose prefix ends on a segment boundary of `path`."""
        for route in self._routes:
            if not path.startswith(route.prefix):
                continue
            remainder = path[len(route.prefix):]
            # /gemini must not swallow /gemini-pro
            if remainder == "" or remainder.startswith("/"):
                return RouteMatch(route.prefix, route.upstream, remainder)
        return None
