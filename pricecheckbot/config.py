import os
from typing import Optional
from dotenv import load_dotenv

load_dotenv()

def _int_env(name: str, default: Optional[int]) -> Optional[int]:
    v = (os.getenv(name) or "").strip()
    return int(v) if v else default

# ---- Config / Env ----
TOKEN             = os.getenv("DISCORD_TOKEN")
CLIENT_ID         = _int_env("CLIENT_ID", None)
API_KEY           = os.getenv("API_KEY", "").strip()

LOG_LEVEL         = os.getenv("LOG_LEVEL", "INFO").upper()

MORALIS_GATEWAY   = os.getenv("MORALIS_GATEWAY", "https://solana-gateway.moralis.io").rstrip("/")
MORALIS_NETWORK   = os.getenv("MORALIS_NETWORK", "mainnet")
HTTP_TIMEOUT_SEC  = _int_env("HTTP_TIMEOUT_SEC", 12)

AUTO_REFRESH_SEC  = _int_env("AUTO_REFRESH_SEC", 300)   # 0 disables auto refresh

KEEPALIVE_URL     = os.getenv("KEEPALIVE_URL", "").strip()
KEEPALIVE_MINUTES = _int_env("KEEPALIVE_MINUTES", 10)
PORT              = _int_env("PORT", None)

# ---- Discord UI ----
COMMAND_NAME        = "check"
COMMAND_DESCRIPTION = "Check price by address"
MODAL_ID            = "check_price"
MODAL_TITLE         = "Check price by address"
ADDRESS_FIELD_ID    = "crypto_address"
ADDRESS_FIELD_LABEL = "Contract Address (optional)"
REFRESH_PREFIX      = "refresh_price_"
REFRESH_LABEL       = "🔄 Refresh Price"

EMBED_COLOR       = 0x00ff00
NEW_COIN_BANNER   = "New Coin Added! 🚀"
PRICE_FIELD       = "Price Now"

REFRESH_FAILED_TEXT = "There was an issue updating the price. Please try again later."
POST_FAILED_TEXT    = "⚠️ I couldn’t post in this channel. Check my permissions."
