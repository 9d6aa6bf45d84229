"""Display Formatting Utilities
=============================

Pure helpers that turn upstream DexPaprika values into display strings.
Every helper renders ``"N/A"`` for missing or unusable input instead of
raising, so a sparse upstream payload never breaks a formatted response.
"""

import math
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

__all__ = [
    "NOT_AVAILABLE",
    "MAX_POOLS_DISPLAY",
    "MAX_SEARCH_RESULTS_DISPLAY",
    "MAX_DEXES_DISPLAY",
    "format_currency",
    "format_number",
    "format_percentage_change",
    "format_fee",
    "title_case_identifier",
    "token_pair_name",
    "token_list_display",
    "pagination_summary",
    "format_timestamp",
]

NOT_AVAILABLE = "N/A"

MAX_POOLS_DISPLAY = 5
MAX_SEARCH_RESULTS_DISPLAY = 3
MAX_DEXES_DISPLAY = 10

# Fraction digits per field semantics
VOLUME_DIGITS = 2
POOL_PRICE_DIGITS = 4
TOKEN_PRICE_DIGITS = 6


def _is_number(value: Any) -> bool:
    """True for finite ints and floats; bools are not numbers here."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def format_currency(value: Any, fraction_digits: int = 2, prefix: str = "$") -> str:
    """Format a USD amount with thousands separators and fixed precision.

    >>> format_currency(1234567.891)
    '$1,234,567.89'
    >>> format_currency(0.5, fraction_digits=4)
    '$0.5000'
    """
    if not _is_number(value):
        return NOT_AVAILABLE
    return f"{prefix}{value:,.{fraction_digits}f}"


def format_number(value: Any) -> str:
    """Format a count or supply with thousands separators and no prefix."""
    if not _is_number(value):
        return NOT_AVAILABLE
    if isinstance(value, int) or float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.3f}".rstrip("0").rstrip(".")


def format_percentage_change(value: Any) -> str:
    """Format a fractional change (``0.0215`` -> ``"+2.15%"``).

    Only absence renders as N/A; a change that rounds to zero renders
    ``"0.00%"`` with no sign.
    """
    if not _is_number(value):
        return NOT_AVAILABLE
    rounded = f"{value * 100:.2f}"
    if float(rounded) == 0:
        return "0.00%"
    sign = "+" if value > 0 else ""
    return f"{sign}{rounded}%"


def format_fee(value: Any) -> str:
    """Format a fractional pool fee with three decimals (``0.003`` -> ``"0.300%"``)."""
    if not _is_number(value):
        return NOT_AVAILABLE
    return f"{value * 100:.3f}%"


def title_case_identifier(identifier: Any) -> str:
    """Render a slug like ``"uniswap_v3"`` as ``"Uniswap V3"``.

    The identifier itself is never modified; callers keep using the raw
    slug for path construction.
    """
    if not isinstance(identifier, str) or not identifier.strip():
        return NOT_AVAILABLE
    words = [word for word in identifier.strip().split("_") if word]
    return " ".join(word[0].upper() + word[1:] for word in words)


def _token_at(tokens: Any, index: int) -> Optional[Dict[str, Any]]:
    if isinstance(tokens, list) and len(tokens) > index and isinstance(tokens[index], dict):
        return tokens[index]
    return None


def token_pair_name(tokens: Any) -> str:
    """Pool display name from its first two token symbols (``"WETH-USDC"``)."""
    first = _token_at(tokens, 0)
    second = _token_at(tokens, 1)
    first_symbol = (first or {}).get("symbol") or "Token1"
    second_symbol = (second or {}).get("symbol") or "Token2"
    return f"{first_symbol}-{second_symbol}"


def token_list_display(tokens: Any) -> str:
    """Join every token as ``"Name (SYMBOL)"``; ``"Unknown"`` when there are none."""
    if not isinstance(tokens, list):
        return "Unknown"
    labels: List[str] = []
    for token in tokens:
        if not isinstance(token, dict):
            continue
        name = token.get("name") or "Unknown"
        symbol = token.get("symbol") or "?"
        labels.append(f"{name} ({symbol})")
    return " - ".join(labels) or "Unknown"


def pagination_summary(page_info: Any) -> str:
    """Render 0-indexed page metadata as ``"Page 3 of 3"``.

    ``total_pages`` is derived from ``total_items``/``limit`` when upstream
    omits it. Out-of-range pages are rendered as given.
    """
    if not isinstance(page_info, dict):
        return NOT_AVAILABLE

    page = page_info.get("page")
    if not isinstance(page, int) or isinstance(page, bool):
        page = 0

    total_pages = page_info.get("total_pages")
    if not _is_number(total_pages):
        total_items = page_info.get("total_items")
        limit = page_info.get("limit")
        if _is_number(total_items) and _is_number(limit) and limit > 0:
            total_pages = math.ceil(total_items / limit)
        else:
            return NOT_AVAILABLE

    return f"Page {page + 1} of {int(total_pages)}"


def format_timestamp(now: Optional[datetime] = None) -> str:
    """Wall-clock time of formatting as ``"YYYY-MM-DD at HH:MM:SS"`` (UTC)."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now.strftime("%Y-%m-%d at %H:%M:%S")
