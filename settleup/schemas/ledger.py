# settleup/schemas/ledger.py
# -----------------------------------------------------------------------------
# SCHEMA: LedgerSnapshot
# -----------------------------------------------------------------------------
# The full set of members, expenses and settlements handed to every engine
# call. Frozen: a writer produces a NEW snapshot (copy-on-write helpers below)
# instead of mutating one that a reader may be traversing.
# -----------------------------------------------------------------------------

from __future__ import annotations

from typing import Iterable, List, Optional

from pydantic import Field

from settleup.schemas.common import LedgerModel
from settleup.schemas.expense import Expense
from settleup.schemas.member import Member
from settleup.schemas.settlement import Settlement


class LedgerSnapshot(LedgerModel):
    name: Optional[str] = None
    currency: Optional[str] = None

    members: List[Member] = Field(default_factory=list)
    expenses: List[Expense] = Field(default_factory=list)
    settlements: List[Settlement] = Field(default_factory=list)

    def member_ids(self) -> List[str]:
        return [m.id for m in self.members]

    def get_member(self, member_id: str) -> Optional[Member]:
        for m in self.members:
            if m.id == member_id:
                return m
        return None

    # --- copy-on-write ---

    def with_expense(self, expense: Expense) -> "LedgerSnapshot":
        return self.model_copy(update={"expenses": [*self.expenses, expense]})

    def with_settlement(self, settlement: Settlement) -> "LedgerSnapshot":
        return self.with_settlements([settlement])

    def with_settlements(self, settlements: Iterable[Settlement]) -> "LedgerSnapshot":
        return self.model_copy(update={"settlements": [*self.settlements, *settlements]})
