from typing import Optional
import discord

from .config import REFRESH_FAILED_TEXT, POST_FAILED_TEXT
from .embeds import price_embed, lookup_error_text
from .helpers import clean_address, short_ca
from .logging_setup import log
from .models import InteractionContext
from .moralis import TokenDataClient
from .refresh import RefreshScheduler
from .views import CheckPriceModal, refresh_view


class PriceCheckHandler:
    """Reacts to the three interactions of the price check flow.

    ``/check`` opens the form, the form submission posts the price embed in
    the channel it came from, and the refresh button edits that embed in
    place. Every call works only on the interaction it was given.
    """

    def __init__(self, client: TokenDataClient, scheduler: Optional[RefreshScheduler] = None):
        self.client = client
        self.scheduler = scheduler

    async def open_form(self, interaction: discord.Interaction):
        await interaction.response.send_modal(CheckPriceModal(self))

    async def submit_form(self, interaction: discord.Interaction, raw_address: Optional[str]) -> InteractionContext:
        ctx = InteractionContext(channel_id=interaction.channel_id, address=clean_address(raw_address))
        await interaction.response.defer(ephemeral=True, thinking=True)

        lookup = await self.client.lookup_token(ctx.address)
        if not lookup.ok:
            log.info(f"Lookup for {short_ca(ctx.address)} by {interaction.user}: {lookup.status.value} ({lookup.detail})")
            await interaction.followup.send(lookup_error_text(lookup, ctx.address), ephemeral=True)
            return ctx

        channel = interaction.channel
        if channel is None:
            log.error(f"Channel {ctx.channel_id} is not available; price for {short_ca(ctx.address)} not posted")
            await interaction.followup.send(POST_FAILED_TEXT, ephemeral=True)
            return ctx
        try:
            msg = await channel.send(embed=price_embed(lookup.info, ctx.address, mode="new"),
                                     view=refresh_view(ctx.address))
        except discord.HTTPException:
            log.exception(f"Error sending price message to channel {ctx.channel_id}")
            await interaction.followup.send(POST_FAILED_TEXT, ephemeral=True)
            return ctx

        ctx.message_id = msg.id
        log.info(f"Posted {lookup.info.name} ({short_ca(ctx.address)}) in channel {ctx.channel_id}, message {msg.id}")
        try:
            await interaction.delete_original_response()
        except discord.HTTPException as e:
            log.warning(f"Could not clear the pending response: {e}")
        return ctx

    async def refresh(self, interaction: discord.Interaction, address: str):
        # ack first: Discord drops interactions not answered within 3 seconds
        await interaction.response.defer()
        log.info(f"Refresh pressed for {short_ca(address)} by {interaction.user}")

        message = interaction.message
        lookup = await self.client.lookup_token(address)
        if not lookup.ok or message is None:
            log.warning(f"Refresh for {short_ca(address)} failed: {lookup.status.value} ({lookup.detail})")
            await interaction.followup.send(REFRESH_FAILED_TEXT, ephemeral=True)
            return
        try:
            await message.edit(embed=price_embed(lookup.info, address, mode="refreshed"))
        except discord.HTTPException:
            log.exception(f"Error editing message {message.id}")
            await interaction.followup.send(REFRESH_FAILED_TEXT, ephemeral=True)
            return

        if self.scheduler is not None:
            self.scheduler.schedule(message.id, lambda: self.auto_refresh(message, address))

    async def auto_refresh(self, message: discord.Message, address: str):
        lookup = await self.client.lookup_token(address)
        if not lookup.ok:
            log.warning(f"Auto refresh for {short_ca(address)} skipped: {lookup.status.value} ({lookup.detail})")
            return
        await message.edit(embed=price_embed(lookup.info, address, mode="auto"))
        log.info(f"Price updated for {short_ca(address)}")
