# settleup/utils/money.py
# -----------------------------------------------------------------------------
# MONEY HELPERS
# -----------------------------------------------------------------------------
#   • All arithmetic is Decimal; floats are converted through str() so that
#     0.1 stays 0.1 instead of its binary approximation.
#   • Rounding is ROUND_HALF_UP, i.e. half away from zero for Decimal.
# -----------------------------------------------------------------------------

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from settleup import config
from settleup.errors import SettingsError

ZERO = Decimal("0")


def to_decimal(x) -> Decimal:
    if isinstance(x, Decimal):
        return x
    return Decimal(str(x))


def quantum(decimals: int) -> Decimal:
    return Decimal("1").scaleb(-decimals)


def round_money(d, decimals: int) -> Decimal:
    q = to_decimal(d).quantize(quantum(decimals), rounding=ROUND_HALF_UP)
    # no "-0.00" in results
    return abs(q) if q == 0 else q


def minor_unit(decimals: int) -> Decimal:
    # display threshold: never finer than a cent
    return Decimal("1").scaleb(-max(decimals, 2))


def resolve_precision(precision: Optional[int]) -> int:
    decimals = config.DEFAULT_PRECISION if precision is None else int(precision)
    if decimals < 0:
        raise SettingsError(f"precision must be >= 0, got {decimals}")
    return decimals
