from typing import Optional
import discord
from .config import EMBED_COLOR, NEW_COIN_BANNER, PRICE_FIELD
from .helpers import format_price
from .models import TokenInfo, PriceLookup, LookupStatus

MODES = ("new", "refreshed", "auto")

def price_embed(info: TokenInfo, address: str, *, mode: str = "new") -> discord.Embed:
    if mode not in MODES: raise ValueError(f"unknown embed mode: {mode!r}")
    embed = discord.Embed(title=info.name, color=EMBED_COLOR, timestamp=discord.utils.utcnow())
    if mode == "new":
        embed.set_author(name=NEW_COIN_BANNER)
    elif mode == "refreshed":
        embed.description = f"Updated price of **{info.name}**:"
    else:
        embed.description = f"Auto-updated price of **{info.name}**:"
    embed.add_field(name=PRICE_FIELD, value=format_price(info.usd_price), inline=True)
    embed.set_footer(text=f"Address: {address}")
    return embed

def lookup_error_text(lookup: PriceLookup, address: Optional[str] = None) -> str:
    if lookup.status is LookupStatus.NOT_FOUND:
        if not address:
            return "❌ Please enter a contract address."
        return f"❌ Couldn’t find a token with a price for `{address}`."
    return "⚠️ The price service is unavailable right now. Please try again later."
