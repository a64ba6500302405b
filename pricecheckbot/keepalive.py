import asyncio
from typing import Optional

import aiohttp
from aiohttp import web
from discord.ext import tasks

from .logging_setup import log


async def health(request: web.Request) -> web.Response:
    return web.Response(text="OK")


class KeepAlive:
    """Health endpoint plus a periodic self-ping, for hosts that idle out quiet apps."""

    def __init__(self, url: str = "", port: Optional[int] = None, minutes: float = 10):
        self.url = url
        self.port = port
        self._runner: Optional[web.AppRunner] = None
        self.pinger = tasks.loop(minutes=minutes)(self.ping)

    async def ping(self):
        try:
            async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=15)) as s:
                async with s.get(self.url) as r:
                    log.debug(f"Keepalive ping {self.url} -> HTTP {r.status}")
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            log.warning(f"Keepalive ping {self.url} failed: {e!r}")

    async def start(self):
        if self.port:
            app = web.Application()
            app.router.add_get("/", health)
            self._runner = web.AppRunner(app)
            await self._runner.setup()
            await web.TCPSite(self._runner, "0.0.0.0", self.port).start()
            log.info(f"Health endpoint listening on :{self.port}")
        if self.url and not self.pinger.is_running():
            self.pinger.start()
            log.info(f"Keepalive pinging {self.url}")

    async def stop(self):
        if self.pinger.is_running():
            self.pinger.cancel()
        if self._runner is not None:
            await self._runner.cleanup()
            self._runner = None
