import asyncio, math
from typing import Any, Optional, Tuple
from urllib.parse import quote

import aiohttp

from .config import API_KEY, MORALIS_GATEWAY, MORALIS_NETWORK, HTTP_TIMEOUT_SEC
from .helpers import short_ca
from .logging_setup import log
from .models import TokenInfo, PriceLookup

# Moralis answers 400 for malformed mints and 404 for unknown / unpriced tokens
NOT_FOUND_STATUSES = {400, 404}


class TokenDataClient:
    """Moralis Solana gateway: token metadata and USD price by mint address.

    The HTTP session is opened once by ``start()`` during bot start-up and
    shared by every lookup; nothing is cached between calls.
    """

    def __init__(self, api_key: str = API_KEY, base_url: str = MORALIS_GATEWAY,
                 network: str = MORALIS_NETWORK, timeout: float = HTTP_TIMEOUT_SEC):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.network = network
        self.timeout = timeout
        self._session: Optional[aiohttp.ClientSession] = None

    @property
    def started(self) -> bool:
        return self._session is not None and not self._session.closed

    async def start(self):
        if self.started: return
        if not self.api_key:
            log.warning("API_KEY is empty; Moralis requests will be rejected.")
        self._session = aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=self.timeout),
            headers={"accept": "application/json", "X-API-Key": self.api_key},
        )
        log.info(f"Moralis client ready ({self.base_url}, network={self.network})")

    async def close(self):
        if self._session is not None:
            await self._session.close()
            self._session = None

    async def __aenter__(self):
        await self.start(); return self

    async def __aexit__(self, *exc):
        await self.close()

    def _url(self, address: str, endpoint: str) -> str:
        return f"{self.base_url}/token/{self.network}/{quote(address, safe='')}/{endpoint}"

    async def _get_json(self, address: str, endpoint: str) -> Tuple[Optional[int], Any]:
        """Return ``(http_status, body)``; status is None when no response arrived."""
        if not self.started:
            raise RuntimeError("TokenDataClient.start() must be called before making requests")
        try:
            async with self._session.get(self._url(address, endpoint)) as r:
                if not 200 <= r.status < 300:
                    log.warning(f"Moralis {endpoint} for {short_ca(address)} -> HTTP {r.status}")
                    return r.status, None
                return r.status, await r.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            log.warning(f"Moralis {endpoint} for {short_ca(address)} failed: {e!r}")
            return None, None
        except ValueError as e:
            log.warning(f"Moralis {endpoint} for {short_ca(address)} returned invalid JSON: {e}")
            return None, None

    async def _token_name(self, address: str) -> Tuple[Optional[str], Optional[int]]:
        status, data = await self._get_json(address, "metadata")
        if data is None: return None, status
        name = data.get("name") if isinstance(data, dict) else None
        if not isinstance(name, str) or not name.strip():
            log.warning(f"Moralis metadata for {short_ca(address)} has no name")
            return None, status
        return name.strip(), status

    async def _token_price(self, address: str) -> Tuple[Optional[float], Optional[int]]:
        status, data = await self._get_json(address, "price")
        if data is None: return None, status
        raw = data.get("usdPrice") if isinstance(data, dict) else None
        try:
            price = float(raw)
        except (TypeError, ValueError):
            log.warning(f"Moralis price for {short_ca(address)} has no usable usdPrice: {raw!r}")
            return None, status
        if not math.isfinite(price):
            log.warning(f"Moralis price for {short_ca(address)} is not finite: {raw!r}")
            return None, status
        return price, status

    async def fetch_token_name(self, address: str) -> Optional[str]:
        name, _ = await self._token_name(address)
        return name

    async def fetch_token_price(self, address: str) -> Optional[float]:
        price, _ = await self._token_price(address)
        return price

    async def lookup_token(self, address: Optional[str]) -> PriceLookup:
        if not address:
            return PriceLookup.not_found("no address given")
        (name, name_status), (price, price_status) = await asyncio.gather(
            self._token_name(address), self._token_price(address)
        )
        if name_status in NOT_FOUND_STATUSES or price_status in NOT_FOUND_STATUSES:
            return PriceLookup.not_found(f"metadata={name_status} price={price_status}")
        if name is None or price is None:
            return PriceLookup.error(f"metadata={name_status} price={price_status}")
        return PriceLookup.success(TokenInfo(name=name, usd_price=price))
