"""Routing orchestration for relayed requests."""

from collections.abc import Mapping

from core.exceptions import RouteNotFound
from core.headers import HeaderBuilder
from core.protocols import RequestLogger
from core.request_types import PreparedRequest
from core.router import PrefixRouter


class RoutingService:
    """Resolve the upstream target and outbound headers for a request."""

    def __init__(
        self,
        logger: RequestLogger,
        router: PrefixRouter,
        header_builder: HeaderBuilder,
    ) -> None:
        self._logger = logger
        self._router = router
        self._headers = header_builder

    def prepare(
        self,
        method: str,
        path: str,
        query: str,
        headers: Mapping[str, str],
    ) -> PreparedRequest:
        """Prepare a request for forwarding, or raise RouteNotFound."""
        match = self._router.match(path)
        if match is None:
            raise RouteNotFound(path)

        target_url = match.target_url(query)
        upstream_headers = self._headers.build_upstream_headers(headers)
        self._logger.log_forward(match.prefix, target_url)
        return PreparedRequest(match.prefix, method, target_url, upstream_headers)
