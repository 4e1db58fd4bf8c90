import inspect

import httpx
import pytest

from app import build_upstream_client, create_app
from core.config import Config


class RecordingLogger:
    """RequestLogger that keeps every event for assertions."""

    def __init__(self):
        self.events: list[tuple] = []

    def log_request(self, method, path):
        self.events.append(("request", method, path))

    def log_header(self, name, value):
        self.events.append(("header", name, value))

    def log_forward(self, prefix, target_url):
        self.events.append(("forward", prefix, target_url))

    def log_response(self, target_url, status):
        self.events.append(("response", target_url, status))

    def log_not_found(self, path):
        self.events.append(("not_found", path))

    def log_error(self, target_url, message):
        self.events.append(("error", target_url, message))

    def of_kind(self, kind):
        return [event[1:] for event in self.events if event[0] == kind]


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def recorder():
    return RecordingLogger()


@pytest.fixture
def relay(recorder):
    """Build an in-process relay whose upstream calls go to `handler`.

    Returns a factory; the captured upstream requests are appended to
    `factory.seen`.
    """
    seen: list[httpx.Request] = []

    def factory(handler):
        async def capture(request: httpx.Request):
            await request.aread()
            seen.append(request)
            result = handler(request)
            if inspect.isawaitable(result):
                result = await result
            if isinstance(result, Exception):
                raise result
            return result

        config = Config()
        upstream = build_upstream_client(config, transport=httpx.MockTransport(capture))
        app = create_app(config, recorder, upstream_client=upstream)
        transport = httpx.ASGITransport(app=app)
        return httpx.AsyncClient(transport=transport, base_url="http://relay.local")

    factory.seen = seen
    return factory
