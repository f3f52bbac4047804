# settleup/utils/activity.py
# -----------------------------------------------------------------------------
# VIEWS OVER A SNAPSHOT
# -----------------------------------------------------------------------------
#   • build_activity     - expenses and settlements merged into one timeline.
#   • member_breakdown   - who owes a member / whom the member owes (pairwise).
#   • apply_suggestions  - record a settle-up plan as settlements (new snapshot).
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, Iterable, List, Optional

from settleup.schemas.activity import Activity, ExpenseActivity, SettlementActivity
from settleup.schemas.balance import MemberBreakdownItem
from settleup.schemas.common import utc_now
from settleup.schemas.ledger import LedgerSnapshot
from settleup.schemas.settlement import Settlement, SettlementSuggestion
from settleup.utils.balance import compute_pairwise_debts
from settleup.utils.money import minor_unit, resolve_precision

log = logging.getLogger(__name__)

APPLIED_NOTE = "applied from settlement suggestions"


def _sort_key(moment: datetime) -> datetime:
    # naive timestamps are taken as UTC so they compare with aware ones
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def build_activity(snapshot: LedgerSnapshot, limit: Optional[int] = None) -> List[Activity]:
    """Newest first. `limit` keeps only the first N entries."""
    items: List[Activity] = []
    for exp in snapshot.expenses:
        items.append(ExpenseActivity(id=exp.id, date=exp.date, expense=exp))
    for s in snapshot.settlements:
        items.append(SettlementActivity(id=s.id, date=s.date, settlement=s))

    items.sort(key=lambda a: _sort_key(a.date), reverse=True)
    if limit is not None:
        items = items[: max(limit, 0)]
    return items


def member_breakdown(
    snapshot: LedgerSnapshot,
    member_id: str,
    precision: Optional[int] = None,
    **kwargs,
) -> List[MemberBreakdownItem]:
    decimals = resolve_precision(precision)
    threshold = minor_unit(decimals)
    debts = compute_pairwise_debts(snapshot, decimals, **kwargs)

    rows: List[MemberBreakdownItem] = []
    for other in snapshot.member_ids():
        if other == member_id:
            continue

        owes = debts.get(other, {}).get(member_id)
        if owes is not None and owes > threshold:
            rows.append(MemberBreakdownItem(member_id=other, amount=owes, type="owes"))

        owed = debts.get(member_id, {}).get(other)
        if owed is not None and owed > threshold:
            rows.append(MemberBreakdownItem(member_id=other, amount=owed, type="owed"))

    rows.sort(key=lambda r: r.amount, reverse=True)
    return rows


def apply_suggestions(
    snapshot: LedgerSnapshot,
    suggestions: Iterable[SettlementSuggestion],
    *,
    created_by: Optional[str] = None,
    notes: Optional[str] = APPLIED_NOTE,
    now: Optional[datetime] = None,
    id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
) -> LedgerSnapshot:
    """
    Record every suggestion as a settlement and return the NEW snapshot.
    created_by defaults to the first member of the group.
    """
    if created_by is None and snapshot.members:
        created_by = snapshot.members[0].id
    moment = now or utc_now()

    recorded = [
        Settlement(
            id=id_factory(),
            from_member_id=s.from_member_id,
            to_member_id=s.to_member_id,
            amount=s.amount,
            date=moment,
            created_by=created_by,
            notes=notes,
        )
        for s in suggestions
    ]
    log.info("Recording %d suggested settlements", len(recorded))
    return snapshot.with_settlements(recorded)
