import asyncio
from typing import Any

import pytest
from aiohttp import web

from nanci_source.models.config import SourceConfig

CDN_URL = "https://cdn.example/a.mp3"


class FakeUpstream:
    """A local stand-in for the stream URL service that records every request."""

    def __init__(self) -> None:
        self.requests: list[dict[str, Any]] = []
        self.status = 200
        self.body = '{"data": "%s"}' % CDN_URL
        self.content_type = "application/json"
        self.delay = 0.0
        self.base_address = ""

    def reply(self, body: str, status: int = 200, content_type: str = "application/json") -> None:
        self.body = body
        self.status = status
        self.content_type = content_type

    def config(self, **overrides: Any) -> SourceConfig:
        return SourceConfig(base_address=self.base_address, **overrides)

    async def handle(self, request: web.Request) -> web.Response:
        self.requests.append(
            {
                "method": request.method,
                "path": request.path,
                "headers": dict(request.headers),
            }
        )
        if self.delay:
            await asyncio.sleep(self.delay)
        return web.Response(
            text=self.body, status=self.status, content_type=self.content_type
        )


@pytest.fixture
async def upstream(aiohttp_server) -> FakeUpstream:
    fake = FakeUpstream()
    app = web.Application()
    app.router.add_get("/url/tx/{song_id}/{quality}", fake.handle)
    server = await aiohttp_server(app)
    fake.base_address = f"http://{server.host}:{server.port}"
    return fake


@pytest.fixture
def refused_config(unused_tcp_port: int) -> SourceConfig:
    """Points at a local port nothing listens on."""
    return SourceConfig(base_address=f"http://127.0.0.1:{unused_tcp_port}")
