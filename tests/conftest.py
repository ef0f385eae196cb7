from typing import List, Optional

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer
from loguru import logger

from webhook_tunnel.common.config import MockServerConfig, RelayConfig


def _sse_app(*chunks: bytes, status: int = 200, seen_headers: Optional[list] = None):
    """Build an upstream app whose /stream writes the given chunks and closes."""

    async def stream(request):
        if seen_headers is not None:
            seen_headers.append(dict(request.headers))
        if status != 200:
            return web.Response(status=status, text="unavailable")

        response = web.StreamResponse(headers={"Content-Type": "text/event-stream"})
        await response.prepare(request)
        for chunk in chunks:
            await response.write(chunk)
        return response

    app = web.Application()
    app.router.add_get("/stream", stream)
    return app


def _tunnel_app(received: List[tuple]):
    """Build a tunnel target app that records every POST it receives."""

    async def hook(request):
        received.append((request.headers.get("Content-Type"), await request.text()))
        return web.Response(text="ok")

    app = web.Application()
    app.router.add_post("/hook", hook)
    return app


@pytest_asyncio.fixture
async def make_server():
    """Fixture that starts aiohttp test servers and closes them afterwards."""
    servers = []

    async def _make_server(app: web.Application) -> TestServer:
        server = TestServer(app)
        await server.start_server()
        servers.append(server)
        return server

    yield _make_server

    for server in servers:
        await server.close()


@pytest.fixture
def log_records():
    """Fixture that captures loguru records as (level, message) tuples."""
    records = []
    handler_id = logger.add(
        lambda message: records.append(
            (message.record["level"].name, message.record["message"])
        ),
        level="DEBUG",
    )
    yield records
    logger.remove(handler_id)


@pytest.fixture
def relay_config():
    """Fixture that provides a sample relay configuration."""
    return RelayConfig(
        stream_url="http://localhost:8080/stream",
        tunnel_url="http://internal-service:3000/webhook",
        log_level="DEBUG",
    )


@pytest.fixture
def mock_server_config():
    """Fixture that provides a mock server configuration without delays."""
    return MockServerConfig(host="127.0.0.1", port=8080, interval=0)


@pytest.fixture
def sse_app():
    """Fixture that provides the upstream event stream app builder."""
    return _sse_app


@pytest.fixture
def tunnel_app():
    """Fixture that provides the recording tunnel target app builder."""
    return _tunnel_app
