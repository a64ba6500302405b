import asyncio

import aiohttp
from aiohttp.test_utils import unused_port

from pricecheckbot.keepalive import KeepAlive


async def test_ping_hits_target(moralis):
    keepalive = KeepAlive(url=f"{moralis.base_url}/ping")
    await keepalive.ping()
    assert moralis.pings == 1


async def test_ping_failure_is_logged_not_raised():
    await KeepAlive(url="http://127.0.0.1:1/").ping()


async def test_start_pings_and_stop_cancels(moralis):
    keepalive = KeepAlive(url=f"{moralis.base_url}/ping", minutes=10)
    await keepalive.start()
    for _ in range(100):
        if moralis.pings: break
        await asyncio.sleep(0.01)
    assert moralis.pings == 1

    await keepalive.stop()
    await asyncio.sleep(0.05)
    assert not keepalive.pinger.is_running()


async def test_health_endpoint():
    port = unused_port()
    keepalive = KeepAlive(port=port)
    await keepalive.start()
    try:
        async with aiohttp.ClientSession() as s:
            async with s.get(f"http://127.0.0.1:{port}/") as r:
                assert r.status == 200
                assert await r.text() == "OK"
    finally:
        await keepalive.stop()
    assert not keepalive.pinger.is_running()
