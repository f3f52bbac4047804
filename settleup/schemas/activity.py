# settleup/schemas/activity.py
# -----------------------------------------------------------------------------
# SCHEMA: Activity - one timeline entry, either an expense or a settlement.
# Tagged union with the "kind" discriminator.
# -----------------------------------------------------------------------------

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import Field

from settleup.schemas.common import LedgerModel
from settleup.schemas.expense import Expense
from settleup.schemas.settlement import Settlement


class ExpenseActivity(LedgerModel):
    kind: Literal["expense"] = "expense"
    id: str
    date: datetime
    expense: Expense


class SettlementActivity(LedgerModel):
    kind: Literal["settlement"] = "settlement"
    id: str
    date: datetime
    settlement: Settlement


Activity = Annotated[Union[ExpenseActivity, SettlementActivity], Field(discriminator="kind")]
