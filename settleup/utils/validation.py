# settleup/utils/validation.py
# -----------------------------------------------------------------------------
# ADMISSION HELPERS FOR THE CRUD LAYER
# -----------------------------------------------------------------------------
# The engine itself never validates allocations: a malformed expense simply
# leaves a nonzero residual on the next computation. These helpers are for
# callers that want to reject such an expense before it enters the ledger.
# -----------------------------------------------------------------------------

from __future__ import annotations

from decimal import Decimal, ROUND_DOWN
from typing import Dict, Iterable, Optional, Sequence

from settleup.errors import AllocationError, UnknownMemberError
from settleup.schemas.expense import Expense
from settleup.utils.money import quantum, resolve_precision, to_decimal


def validate_expense(
    expense: Expense,
    precision: Optional[int] = None,
    member_ids: Optional[Iterable[str]] = None,
) -> None:
    """
    Raise AllocationError unless Σ paidBy and Σ splitBetween both match the
    amount within one minor unit. With `member_ids`, every referenced member
    must also be one of them (UnknownMemberError otherwise).
    """
    decimals = resolve_precision(precision)
    tolerance = quantum(decimals)
    amount = to_decimal(expense.amount)

    if amount <= 0:
        raise AllocationError(expense.id, "amount must be positive")
    if not expense.paid_by:
        raise AllocationError(expense.id, "paidBy is empty")
    if not expense.split_between:
        raise AllocationError(expense.id, "splitBetween is empty")

    if abs(expense.total_paid - amount) > tolerance:
        raise AllocationError(expense.id, f"paidBy sums to {expense.total_paid}, expected {amount}")
    if abs(expense.total_split - amount) > tolerance:
        raise AllocationError(expense.id, f"splitBetween sums to {expense.total_split}, expected {amount}")

    if member_ids is not None:
        known = set(member_ids)
        for mid in expense.paid_by:
            if mid not in known:
                raise UnknownMemberError(mid, "paid_by", expense.id)
        for mid in expense.split_between:
            if mid not in known:
                raise UnknownMemberError(mid, "split_between", expense.id)


def split_equally(amount, member_ids: Sequence[str], precision: Optional[int] = None) -> Dict[str, Decimal]:
    """
    Equal shares that add up exactly to `amount` (rounded to precision).
    Leftover minor units go one each to the first members.
    """
    if not member_ids:
        return {}

    decimals = resolve_precision(precision)
    q = quantum(decimals)
    total = to_decimal(amount).quantize(q)
    n = len(member_ids)

    base = (total / n).quantize(q, rounding=ROUND_DOWN)
    leftover = int((total - base * n) / q)

    return {mid: base + (q if idx < leftover else 0) for idx, mid in enumerate(member_ids)}
