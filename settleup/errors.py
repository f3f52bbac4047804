# settleup/errors.py
# Exceptions raised by the ledger engine. Routers map them to HTTP 422.

from __future__ import annotations

from typing import Optional


class LedgerError(ValueError):
    pass


class UnknownMemberError(LedgerError):
    """A snapshot record references a member id that is not in snapshot.members."""

    def __init__(self, member_id: str, source: str, record_id: Optional[str] = None):
        self.member_id = member_id
        self.source = source
        self.record_id = record_id
        where = f"{source} of {record_id}" if record_id else source
        super().__init__(f"Unknown member id {member_id!r} in {where}")


class AllocationError(LedgerError):
    """An expense whose paidBy / splitBetween do not add up to its amount."""

    def __init__(self, expense_id: str, message: str):
        self.expense_id = expense_id
        super().__init__(f"Expense {expense_id}: {message}")


class SettingsError(LedgerError):
    """An unusable engine setting: unknown policy name, negative precision."""
