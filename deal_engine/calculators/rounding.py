"""
Money rounding for calculator outputs.
"""

import math
from decimal import ROUND_HALF_UP, Decimal

# Beyond this magnitude a float cannot hold cents anyway.
_MAX_ROUNDABLE = 1e15


def round_money(value: float) -> float:
    """Round to 2 decimal places, half-up, for returned fields only."""
    if not math.isfinite(value) or abs(value) >= _MAX_ROUNDABLE:
        return float(value)
    return float(Decimal(repr(value)).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP))
