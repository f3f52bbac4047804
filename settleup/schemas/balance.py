# settleup/schemas/balance.py
# Derived, request-scoped values returned by the engine. Nothing here is stored.

from __future__ import annotations

from typing import Literal, Optional

from pydantic import Field

from settleup.schemas.common import JsonMoney, LedgerModel


class NetBalance(LedgerModel):
    """net > 0 - the group owes the member; net < 0 - the member owes the group."""

    member_id: str = Field(..., alias="memberId")
    net: JsonMoney


class MemberBreakdownItem(LedgerModel):
    """
    One counterparty row of a member's breakdown:
      • type="owes" - the counterparty owes the selected member `amount`;
      • type="owed" - the selected member owes the counterparty `amount`.
    """

    member_id: str = Field(..., alias="memberId")
    amount: JsonMoney
    type: Literal["owes", "owed"]


ReferenceSource = Literal["paid_by", "split_between", "settlement_from", "settlement_to"]


class UnknownReference(LedgerModel):
    member_id: str = Field(..., alias="memberId")
    source: ReferenceSource
    record_id: Optional[str] = Field(default=None, alias="recordId")
