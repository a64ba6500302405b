import asyncio
from types import SimpleNamespace
from typing import Any, Dict, List, Optional, Tuple
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from pricecheckbot.models import PriceLookup, TokenInfo
from pricecheckbot.moralis import TokenDataClient


class FakeMoralis:
    """In-process Moralis gateway; each route answers what the test configured."""

    def __init__(self):
        self.metadata: Dict[str, Tuple[int, Any]] = {}
        self.prices: Dict[str, Tuple[int, Any]] = {}
        self.hits: List[Tuple[str, str, Optional[str]]] = []
        self.pings = 0
        self.base_url = ""

    def token(self, address: str, name: Optional[str], price: Any):
        self.metadata[address] = (200, {"mint": address, "name": name, "symbol": "FOO"})
        self.prices[address] = (200, {"usdPrice": price, "exchangeName": "Raydium"})

    def _answer(self, table, request: web.Request) -> web.Response:
        address = request.match_info["address"]
        kind = "metadata" if table is self.metadata else "price"
        self.hits.append((kind, address, request.headers.get("X-API-Key")))
        status, body = table.get(address, (404, {"message": "Not found"}))
        if isinstance(body, str):
            return web.Response(status=status, text=body)
        return web.json_response(body, status=status)

    async def _metadata(self, request):
        return self._answer(self.metadata, request)

    async def _price(self, request):
        return self._answer(self.prices, request)

    async def _ping(self, request):
        self.pings += 1
        return web.Response(text="OK")

    def app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/token/{network}/{address}/metadata", self._metadata)
        app.router.add_get("/token/{network}/{address}/price", self._price)
        app.router.add_get("/ping", self._ping)
        return app


@pytest_asyncio.fixture
async def moralis():
    fake = FakeMoralis()
    server = TestServer(fake.app())
    await server.start_server()
    fake.base_url = f"http://{server.host}:{server.port}"
    yield fake
    await server.close()


@pytest_asyncio.fixture
async def token_client(moralis):
    client = TokenDataClient(api_key="test-key", base_url=moralis.base_url, network="mainnet", timeout=5)
    await client.start()
    yield client
    await client.close()


class StubTokenClient:
    """Hands out queued lookups; optionally blocks each one until ``gate`` is set."""

    def __init__(self, *lookups: PriceLookup, gate: Optional[asyncio.Event] = None):
        self.lookups = list(lookups)
        self.gate = gate
        self.calls: List[Optional[str]] = []
        self.on_call = None

    async def lookup_token(self, address):
        self.calls.append(address)
        if self.on_call: self.on_call()
        if self.gate is not None:
            await self.gate.wait()
        return self.lookups.pop(0) if len(self.lookups) > 1 else self.lookups[0]


def ok(name: str, price: float) -> PriceLookup:
    return PriceLookup.success(TokenInfo(name=name, usd_price=price))


def make_message(message_id: int = 42):
    return SimpleNamespace(id=message_id, edit=AsyncMock())


def make_interaction(*, channel_id: int = 111, message=None, posted_id: int = 999, channel: Any = ...):
    if channel is ...:
        channel = SimpleNamespace(id=channel_id, send=AsyncMock(return_value=SimpleNamespace(id=posted_id)))
    return SimpleNamespace(
        channel_id=channel_id, channel=channel, message=message, user="tester#0001",
        response=SimpleNamespace(defer=AsyncMock(), send_modal=AsyncMock()),
        followup=SimpleNamespace(send=AsyncMock()),
        delete_original_response=AsyncMock(),
    )


@pytest.fixture
def interaction():
    return make_interaction()
