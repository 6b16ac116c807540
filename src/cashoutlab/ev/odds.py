"""American odds conversions."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, places: int) -> float:
    """Round like fixed-point currency formatting (0.125 -> 0.13)."""

    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def american_to_decimal(odds: float) -> float:
    """Convert American odds to decimal odds, rounded to 2 places."""

    if odds > 0:
        return round_half_up(odds / 100 + 1, 2)
    return round_half_up(100 / abs(odds) + 1, 2)


def american_to_probability(odds: float) -> float:
    """Convert American odds to the implied (vig-inclusive) win probability.

    Rounded to 4 places.
    """

    if odds > 0:
        return round_half_up(100 / (odds + 100), 4)
    return round_half_up(abs(odds) / (abs(odds) + 100), 4)


def parse_american_odds(raw: int | float | str | None) -> float | None:
    """Parse user-supplied American odds such as ``"+150"``, ``"-110"`` or ``120``.

    Returns ``None`` for missing, unparsable, non-finite or zero values.
    """

    if raw is None or isinstance(raw, bool):
        return None
    text = str(raw).strip()
    if text.startswith("+"):
        text = text[1:]
    try:
        odds = float(text)
    except ValueError:
        return None
    if not math.isfinite(odds) or odds == 0:
        return None
    return odds
