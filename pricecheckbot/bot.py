from typing import Optional
import discord
from discord.ext import commands

from .config import (CLIENT_ID, AUTO_REFRESH_SEC, KEEPALIVE_URL, KEEPALIVE_MINUTES, PORT, LOG_LEVEL,
                     COMMAND_NAME, COMMAND_DESCRIPTION)
from .handler import PriceCheckHandler
from .keepalive import KeepAlive
from .logging_setup import log
from .moralis import TokenDataClient
from .refresh import RefreshScheduler
from .views import RefreshButton


class Bot(commands.Bot):
    def __init__(self, token_client: Optional[TokenDataClient] = None, auto_refresh_sec: int = AUTO_REFRESH_SEC):
        intents = discord.Intents.default()
        # slash commands, modals and buttons need no privileged intents
        intents.message_content = False
        super().__init__(command_prefix="!", intents=intents, application_id=CLIENT_ID)
        self.token_client = token_client or TokenDataClient()
        self.refresh_scheduler = RefreshScheduler(auto_refresh_sec) if auto_refresh_sec else None
        self.price_handler = PriceCheckHandler(self.token_client, self.refresh_scheduler)
        self.keepalive = KeepAlive(KEEPALIVE_URL, PORT, KEEPALIVE_MINUTES)

    async def setup_hook(self):
        # the HTTP client is ready before any interaction can arrive
        await self.token_client.start()
        self.add_dynamic_items(RefreshButton)

        handler = self.price_handler

        @self.tree.command(name=COMMAND_NAME, description=COMMAND_DESCRIPTION)
        async def check(interaction: discord.Interaction):
            await handler.open_form(interaction)

        await self.keepalive.start()

        try:
            synced = await self.tree.sync()
            log.info(f"Slash command registered ({len(synced)} synced)")
        except discord.HTTPException:
            log.exception("Slash command sync failed")

    async def on_ready(self):
        guilds = ", ".join([f"{g.name}({g.id})" for g in self.guilds]) or "none"
        refresh = f"{self.refresh_scheduler.interval_sec}s" if self.refresh_scheduler else "off"
        log.info(f"Logged in as {self.user} | Guilds: [{guilds}] | LOG_LEVEL={LOG_LEVEL} | auto refresh={refresh}")

    async def on_raw_message_delete(self, payload: discord.RawMessageDeleteEvent):
        if self.refresh_scheduler and self.refresh_scheduler.cancel(payload.message_id):
            log.info(f"Message {payload.message_id} deleted; auto refresh stopped")

    async def on_raw_bulk_message_delete(self, payload: discord.RawBulkMessageDeleteEvent):
        if self.refresh_scheduler:
            for mid in payload.message_ids:
                self.refresh_scheduler.cancel(mid)

    async def close(self):
        if self.refresh_scheduler:
            self.refresh_scheduler.cancel_all()
        await self.keepalive.stop()
        await self.token_client.close()
        await super().close()
