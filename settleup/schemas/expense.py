# settleup/schemas/expense.py
# -----------------------------------------------------------------------------
# SCHEMA: Expense
# -----------------------------------------------------------------------------
#   • paid_by       - member_id -> amount the member personally contributed
#   • split_between - member_id -> the member's share of the expense
#   • By convention Σ paid_by == Σ split_between == amount. The schema does
#     NOT check it; see settleup.utils.validation.validate_expense.
# -----------------------------------------------------------------------------

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Dict, Optional

from pydantic import Field

from settleup.schemas.common import LedgerModel, Money, PositiveMoney, utc_now


class Expense(LedgerModel):
    id: str = Field(..., description="Expense id")
    group_id: Optional[str] = Field(default=None, alias="groupId")
    description: str = ""
    amount: PositiveMoney = Field(..., description="Total value of the expense")

    paid_by: Dict[str, Money] = Field(default_factory=dict, alias="paidBy")
    split_between: Dict[str, Money] = Field(default_factory=dict, alias="splitBetween")

    date: datetime = Field(default_factory=utc_now)
    created_by: Optional[str] = Field(default=None, alias="createdBy")
    notes: Optional[str] = None

    @property
    def total_paid(self) -> Decimal:
        return sum(self.paid_by.values(), Decimal("0"))

    @property
    def total_split(self) -> Decimal:
        return sum(self.split_between.values(), Decimal("0"))
