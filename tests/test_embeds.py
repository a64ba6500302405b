import pytest

from pricecheckbot.embeds import price_embed, lookup_error_text
from pricecheckbot.models import PriceLookup, TokenInfo

INFO = TokenInfo(name="FooCoin", usd_price=1.23)


def test_new_embed():
    embed = price_embed(INFO, "ABC123", mode="new")
    assert embed.title == "FooCoin"
    assert embed.color.value == 0x00ff00
    assert embed.author.name == "New Coin Added! 🚀"
    assert [(f.name, f.value, f.inline) for f in embed.fields] == [("Price Now", "$1.23", True)]
    assert embed.footer.text == "Address: ABC123"
    assert embed.timestamp is not None
    assert embed.description is None


def test_refreshed_and_auto_embeds_have_no_banner():
    refreshed = price_embed(INFO, "ABC123", mode="refreshed")
    auto = price_embed(INFO, "ABC123", mode="auto")
    assert refreshed.author.name is None
    assert refreshed.description == "Updated price of **FooCoin**:"
    assert auto.description == "Auto-updated price of **FooCoin**:"
    assert auto.fields[0].value == "$1.23"


def test_unknown_mode():
    with pytest.raises(ValueError):
        price_embed(INFO, "ABC123", mode="loud")


def test_lookup_error_texts():
    assert "contract address" in lookup_error_text(PriceLookup.not_found(), None)
    assert "`ABC123`" in lookup_error_text(PriceLookup.not_found(), "ABC123")
    assert "try again later" in lookup_error_text(PriceLookup.error(), "ABC123")
