import math
from typing import Optional
from .config import REFRESH_PREFIX

def short_ca(ca: Optional[str]) -> str:
    if not ca: return "<none>"
    return ca if len(ca) <= 10 else f"{ca[:4]}…{ca[-4:]}"

def clean_address(raw: Optional[str]) -> Optional[str]:
    v = (raw or "").strip()
    return v or None

def format_price(x: Optional[float]) -> str:
    """Dollar string for the "Price Now" field; 1.23 -> "$1.23"."""
    if x is None: return "$—"
    n = float(x)
    if n == 0: return "$0"
    if abs(n) >= 1:
        return f"${n:,.2f}"
    # keep 4 significant digits for sub-dollar tokens
    decimals = -int(math.floor(math.log10(abs(n)))) + 3
    return f"${n:.{decimals}f}".rstrip("0").rstrip(".")

def refresh_custom_id(address: str) -> str:
    return f"{REFRESH_PREFIX}{address}"

def address_from_custom_id(custom_id: Optional[str]) -> Optional[str]:
    if not custom_id or not custom_id.startswith(REFRESH_PREFIX): return None
    return custom_id[len(REFRESH_PREFIX):] or None
