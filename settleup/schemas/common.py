# settleup/schemas/common.py
# -----------------------------------------------------------------------------
# SHARED Pydantic BUILDING BLOCKS
# -----------------------------------------------------------------------------
#   • Money carries no fixed number of decimal places; the scale is applied
#     by the computation layer (precision argument), not by the schemas.
#   • JSON uses camelCase field names (paidBy, splitBetween, memberId ...),
#     Python attributes are snake_case. Both are accepted on input.
# -----------------------------------------------------------------------------

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer

# Decimal inside the engine, a plain number in JSON (as the teacher sends float(amount))
AsNumber = PlainSerializer(float, return_type=float, when_used="json")

# Derived amounts (nets, suggestions, pairwise cells)
JsonMoney = Annotated[Decimal, AsNumber]

# Allocation amounts inside paidBy / splitBetween
Money = Annotated[Decimal, Field(max_digits=18, ge=0), AsNumber]

# Totals of expenses and settlements
PositiveMoney = Annotated[Decimal, Field(max_digits=18, gt=0), AsNumber]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class LedgerModel(BaseModel):
    """Immutable record: callers build a new value instead of mutating one."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)
