"""
Price parsing and change computation.

Pure functions shared by the update use case and its tests.
"""

import math
from typing import Any

from ekram_prices.core.entities import Direction, HistoryEntry, PriceChange
from ekram_prices.core.exceptions import ValidationError


def parse_price(raw: Any) -> float:
    """
    Parse a reported price.

    Accepts numbers and numeric strings. The result must be finite and
    strictly positive.

    Raises:
        ValidationError: "invalid price" for anything else.
    """
    if isinstance(raw, bool) or raw is None:
        raise ValidationError("price", "invalid price", raw)
    try:
        value = float(raw.strip() if isinstance(raw, str) else raw)
    except (TypeError, ValueError):
        raise ValidationError("price", "invalid price", raw) from None
    if not math.isfinite(value) or value <= 0:
        raise ValidationError("price", "invalid price", raw)
    return value


def compute_change(price: float, prev_price: float) -> PriceChange:
    """
    Compare a new price with the previous one.

    The percentage is rounded to one decimal and carries an explicit "+"
    when the price went up, e.g. "+10.0%", "-10.0%", "0.0%". A zero
    previous price yields "0%".
    """
    if price > prev_price:
        direction = Direction.UP
    elif price < prev_price:
        direction = Direction.DOWN
    else:
        direction = Direction.STABLE

    if prev_price == 0:
        change = "0%"
    else:
        pct = (price - prev_price) / prev_price * 100
        sign = "+" if direction == Direction.UP else ""
        change = f"{sign}{pct:.1f}%"

    return PriceChange(
        price=price,
        prev_price=prev_price,
        change=change,
        direction=direction,
    )


def prepend_history(history: list, entry: HistoryEntry, limit: int) -> list:
    """Insert entry at the head of history and drop everything past limit."""
    return [entry.model_dump(by_alias=True, mode="json"), *history][:limit]
