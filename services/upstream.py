"""HTTP relaying to upstream APIs with streaming support."""

from collections.abc import AsyncIterator

import httpx
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from core.exceptions import UpstreamCallError
from core.protocols import RequestLogger
from core.request_types import PreparedRequest

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
}

# RFC 9110 hop-by-hop headers, owned by the serving runtime
HOP_BY_HOP = {
    "connection", "keep-alive", "proxy-authenticate", "proxy-authorization",
    "te", "trailers", "transfer-encoding", "upgrade",
}


class UpstreamClient:
    """Forward prepared requests upstream and relay the streamed response."""

    def __init__(self, client: httpx.AsyncClient, logger: RequestLogger) -> None:
        self._client = client
        self._logger = logger

    async def forward(
        self,
        prepared: PreparedRequest,
        body: AsyncIterator[bytes] | None = None,
    ) -> StreamingResponse:
        """Send the request and stream the upstream response back unchanged."""
        try:
            req = self._client.build_request(
                prepared.method,
                prepared.target_url,
                headers=prepared.headers,
                content=body,
            )
            response = await self._client.send(req, stream=True)
        except Exception as e:
            # Network, timeout, bad URL or unencodable header: all end the call
            raise UpstreamCallError(prepared.target_url, str(e) or type(e).__name__) from e

        self._logger.log_response(prepared.target_url, response.status_code)
        return self._relay(response)

    def _relay(self, response: httpx.Response) -> StreamingResponse:
        """Build the client response: upstream status, headers and raw body."""
        relayed = StreamingResponse(
            response.aiter_raw(),
            status_code=response.status_code,
            background=BackgroundTask(self._cleanup_streaming, response),
        )
        relayed.raw_headers = [
            (key.lower().encode("latin-1"), value.encode("latin-1"))
            for key, value in response.headers.multi_items()
            if key.lower() not in HOP_BY_HOP
        ]
        for name, value in SECURITY_HEADERS.items():
            relayed.headers[name] = value
        return relayed

    async def _cleanup_streaming(self, response: httpx.Response) -> None:
        """Clean up streaming resources."""
        await response.aclose()
