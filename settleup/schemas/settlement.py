# settleup/schemas/settlement.py
# -----------------------------------------------------------------------------
# SCHEMAS: Settlement (recorded payment) and SettlementSuggestion (plan item)
# -----------------------------------------------------------------------------
#   • Settlement - a real-world payment already made: from -> to, amount > 0.
#   • SettlementSuggestion - produced by the settle-up algorithms, not executed.
#     The debtor is "from", the creditor is "to".
# -----------------------------------------------------------------------------

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from settleup.schemas.common import JsonMoney, LedgerModel, PositiveMoney, utc_now


class Settlement(LedgerModel):
    id: str = Field(..., description="Settlement id")
    from_member_id: str = Field(..., alias="from", description="Who paid")
    to_member_id: str = Field(..., alias="to", description="Who received the payment")
    amount: PositiveMoney

    date: datetime = Field(default_factory=utc_now)
    created_by: Optional[str] = Field(default=None, alias="createdBy")
    notes: Optional[str] = None


class SettlementSuggestion(LedgerModel):
    from_member_id: str = Field(..., alias="from", description="Debtor, makes the transfer")
    to_member_id: str = Field(..., alias="to", description="Creditor, receives the transfer")
    amount: JsonMoney = Field(..., description="Transfer amount, rounded to precision (> 0)")
