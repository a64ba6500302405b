import re
import discord

from .config import (MODAL_ID, MODAL_TITLE, ADDRESS_FIELD_ID, ADDRESS_FIELD_LABEL,
                     REFRESH_PREFIX, REFRESH_LABEL)
from .helpers import refresh_custom_id
from .logging_setup import log


class CheckPriceModal(discord.ui.Modal, title=MODAL_TITLE):
    address = discord.ui.TextInput(
        label=ADDRESS_FIELD_LABEL, custom_id=ADDRESS_FIELD_ID,
        style=discord.TextStyle.short, required=False, max_length=100,
    )

    def __init__(self, handler):
        super().__init__(custom_id=MODAL_ID)
        self.handler = handler

    async def on_submit(self, interaction: discord.Interaction):
        await self.handler.submit_form(interaction, self.address.value)

    async def on_error(self, interaction: discord.Interaction, error: Exception):
        log.error("Price form submission failed", exc_info=error)


class RefreshButton(discord.ui.DynamicItem[discord.ui.Button], template=re.escape(REFRESH_PREFIX) + r"(?P<address>.+)"):
    """Refresh control; the address rides in the custom id so it survives restarts."""

    def __init__(self, address: str):
        super().__init__(discord.ui.Button(
            label=REFRESH_LABEL, style=discord.ButtonStyle.primary, custom_id=refresh_custom_id(address),
        ))
        self.address = address

    @classmethod
    async def from_custom_id(cls, interaction: discord.Interaction, item: discord.ui.Button, match: re.Match[str], /):
        return cls(match["address"])

    async def callback(self, interaction: discord.Interaction):
        await interaction.client.price_handler.refresh(interaction, self.address)


def refresh_view(address: str) -> discord.ui.View:
    view = discord.ui.View(timeout=None)
    view.add_item(RefreshButton(address))
    return view
