from dataclasses import dataclass
from enum import Enum
from typing import Optional

@dataclass(frozen=True)
class TokenInfo:
    name: str
    usd_price: Optional[float]

class LookupStatus(Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    ERROR = "error"          # transient: network, timeout, 5xx, malformed body

@dataclass(frozen=True)
class PriceLookup:
    status: LookupStatus
    info: Optional[TokenInfo] = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.status is LookupStatus.OK

    @classmethod
    def success(cls, info: TokenInfo) -> "PriceLookup":
        return cls(LookupStatus.OK, info)

    @classmethod
    def not_found(cls, detail: str = "") -> "PriceLookup":
        return cls(LookupStatus.NOT_FOUND, None, detail)

    @classmethod
    def error(cls, detail: str = "") -> "PriceLookup":
        return cls(LookupStatus.ERROR, None, detail)

@dataclass
class InteractionContext:
    channel_id: Optional[int]
    address: Optional[str]
    message_id: Optional[int] = None
