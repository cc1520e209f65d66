"""Shared fixtures: an in-process fake gateway that records every request."""

import asyncio
import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from core.observability.metrics import get_metrics
from gateway import CMMSGateway, GatewayConfig, StaticSessionProvider

GATEWAY_PREFIX = "/functions/v1/api-gateway"


@dataclass
class RecordedRequest:
    method: str
    path: str
    query: Dict[str, str]
    headers: Any
    body: Any = None


@dataclass
class CannedResponse:
    status: int = 200
    body: Any = None
    text: Optional[str] = None
    headers: Dict[str, str] = field(default_factory=dict)
    delay: float = 0.0


class FakeGateway:
    """Records requests and replays canned responses keyed by (method, path).

    Paths are recorded without the gateway prefix, so tests compare against
    the suffix the client was asked for (e.g. "/api/assets"). Responses queued
    for the same key are served in order; the last one repeats.
    """

    def __init__(self):
        self.requests: List[RecordedRequest] = []
        self._responses: Dict[tuple, List[CannedResponse]] = {}
        self.default = CannedResponse(status=200, body={})
        self.server: Optional[TestServer] = None

    @property
    def root_url(self) -> str:
        return str(self.server.make_url("/")).rstrip("/")

    @property
    def base_url(self) -> str:
        return self.root_url + GATEWAY_PREFIX

    def respond(self, method: str, path: str, status: int = 200, body: Any = None, **kwargs) -> None:
        self._responses.setdefault((method, path), []).append(CannedResponse(status=status, body=body, **kwargs))

    def reset(self, method: str, path: str) -> None:
        """Forget responses queued for (method, path) so the next respond() is served."""
        self._responses.pop((method, path), None)

    def fail_all(self, status: int) -> None:
        self.default = CannedResponse(status=status, body={"error": "boom"})

    @property
    def last(self) -> RecordedRequest:
        return self.requests[-1]

    def requests_to(self, path: str) -> List[RecordedRequest]:
        return [r for r in self.requests if r.path == path]

    async def handle(self, request: web.Request) -> web.StreamResponse:
        path = request.path
        if path.startswith(GATEWAY_PREFIX):
            path = path[len(GATEWAY_PREFIX):]

        raw = await request.read()
        self.requests.append(
            RecordedRequest(
                method=request.method,
                path=path,
                query=dict(request.query),
                headers=request.headers.copy(),
                body=json.loads(raw) if raw else None,
            )
        )

        queue = self._responses.get((request.method, path))
        if queue:
            canned = queue.pop(0) if len(queue) > 1 else queue[0]
        else:
            canned = self.default

        if canned.delay:
            await asyncio.sleep(canned.delay)
        if canned.status == 204:
            return web.Response(status=204, headers=canned.headers)
        if canned.text is not None:
            return web.Response(status=canned.status, text=canned.text, headers=canned.headers)
        return web.json_response(canned.body, status=canned.status, headers=canned.headers)


@pytest.fixture(autouse=True)
def reset_metrics():
    get_metrics().reset()
    yield


@pytest_asyncio.fixture
async def fake_gateway():
    fake = FakeGateway()
    app = web.Application()
    app.router.add_route("*", "/{tail:.*}", fake.handle)
    server = TestServer(app)
    await server.start_server()
    fake.server = server
    yield fake
    await server.close()


@pytest.fixture
def gateway_config(fake_gateway):
    return GatewayConfig(base_url=fake_gateway.base_url)


@pytest_asyncio.fixture
async def cmms(gateway_config):
    gateway = CMMSGateway(gateway_config, StaticSessionProvider("test-token", organization_id="org-1"))
    await gateway.connect()
    yield gateway
    await gateway.disconnect()
