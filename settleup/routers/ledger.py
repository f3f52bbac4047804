# settleup/routers/ledger.py
# -----------------------------------------------------------------------------
# ROUTER: Ledger computations
# -----------------------------------------------------------------------------
# The caller posts the whole snapshot; nothing is stored server-side.
# Every route takes ?precision= and ?policy= (ignore|collect|reject).
# -----------------------------------------------------------------------------

from __future__ import annotations

from contextlib import contextmanager
from typing import Annotated, Dict, List, Optional

from fastapi import APIRouter, HTTPException, Query, Response
from pydantic import BaseModel, ConfigDict, Field
from starlette import status

from settleup.errors import LedgerError
from settleup.schemas.activity import Activity
from settleup.schemas.balance import MemberBreakdownItem, NetBalance
from settleup.schemas.common import JsonMoney
from settleup.schemas.expense import Expense
from settleup.schemas.ledger import LedgerSnapshot
from settleup.schemas.settlement import SettlementSuggestion
from settleup.utils.activity import apply_suggestions, build_activity, member_breakdown
from settleup.utils.balance import build_settle_plan, compute_nets, compute_pairwise_debts
from settleup.utils.references import UnknownMemberPolicy
from settleup.utils.validation import validate_expense

router = APIRouter()

PrecisionParam = Annotated[
    Optional[int], Query(ge=0, le=8, description="Decimal places (default from SETTLEUP_PRECISION)")
]
PolicyParam = Annotated[
    Optional[UnknownMemberPolicy], Query(description="Unknown member ids: ignore | collect | reject")
]
AlgorithmParam = Annotated[
    str, Query(pattern="^(greedy|pairs)$", description="'greedy' (fewer transfers) | 'pairs'")
]


@contextmanager
def _ledger_errors():
    try:
        yield
    except LedgerError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e


class ExpenseCheckIn(BaseModel):
    expense: Expense
    member_ids: Optional[List[str]] = Field(default=None, alias="memberIds")

    model_config = ConfigDict(populate_by_name=True)


# ===== Balances / settle-up ==================================================

@router.post("/balances", response_model=List[NetBalance])
def get_balances(
    snapshot: LedgerSnapshot,
    precision: PrecisionParam = None,
    policy: PolicyParam = None,
):
    with _ledger_errors():
        return compute_nets(snapshot, precision, policy=policy)


@router.post("/settle-up", response_model=List[SettlementSuggestion])
def get_settle_up(
    snapshot: LedgerSnapshot,
    precision: PrecisionParam = None,
    policy: PolicyParam = None,
    algorithm: AlgorithmParam = "greedy",
):
    """
    Settle-up plan.
      • greedy - global netting, usually the fewest transfers.
      • pairs  - one transfer per pair, no netting through third parties.
    """
    with _ledger_errors():
        return build_settle_plan(snapshot, precision, algorithm=algorithm, policy=policy)


@router.post("/pairwise-debts", response_model=Dict[str, Dict[str, JsonMoney]])
def get_pairwise_debts(
    snapshot: LedgerSnapshot,
    precision: PrecisionParam = None,
    policy: PolicyParam = None,
):
    with _ledger_errors():
        return compute_pairwise_debts(snapshot, precision, policy=policy)


@router.post("/members/{member_id}/breakdown", response_model=List[MemberBreakdownItem])
def get_member_breakdown(
    member_id: str,
    snapshot: LedgerSnapshot,
    precision: PrecisionParam = None,
    policy: PolicyParam = None,
):
    if snapshot.get_member(member_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Member not found")
    with _ledger_errors():
        return member_breakdown(snapshot, member_id, precision, policy=policy)


# ===== Timeline / mutations (copy-on-write) ==================================

@router.post("/activity", response_model=List[Activity])
def get_activity(snapshot: LedgerSnapshot, limit: Optional[int] = Query(None, ge=1)):
    return build_activity(snapshot, limit)


@router.post("/apply-suggestions", response_model=LedgerSnapshot)
def post_apply_suggestions(
    snapshot: LedgerSnapshot,
    precision: PrecisionParam = None,
    policy: PolicyParam = None,
    algorithm: AlgorithmParam = "greedy",
    created_by: Optional[str] = Query(None, alias="createdBy"),
):
    """Returns the snapshot with the current settle-up plan recorded as settlements."""
    with _ledger_errors():
        plan = build_settle_plan(snapshot, precision, algorithm=algorithm, policy=policy)
        return apply_suggestions(snapshot, plan, created_by=created_by)


@router.post("/validate-expense", status_code=status.HTTP_204_NO_CONTENT)
def post_validate_expense(payload: ExpenseCheckIn, precision: PrecisionParam = None):
    with _ledger_errors():
        validate_expense(payload.expense, precision, payload.member_ids)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
