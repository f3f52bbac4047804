# settleup/utils/balance.py
# -----------------------------------------------------------------------------
# BALANCES / SETTLE-UP
# -----------------------------------------------------------------------------
# Policy:
#   • Pure functions over a LedgerSnapshot; every call recomputes from the full
#     history, nothing is cached.
#   • Decimal internally, rounding by `precision` (decimal places).
#   • Net semantics:
#       net > 0 - the group owes the member; net < 0 - the member owes the group.
#   • A settlement from -> to on X is a debt repayment: from's net += X,
#     to's net -= X.
#   • Settle-up algorithms:
#       1) "greedy" - few transfers (matching debtors against creditors by net).
#       2) "pairs"  - pairwise debts as recorded (no netting through third parties).
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Dict, List, Optional

from settleup import config
from settleup.schemas.balance import NetBalance, UnknownReference
from settleup.schemas.expense import Expense
from settleup.schemas.ledger import LedgerSnapshot
from settleup.schemas.settlement import SettlementSuggestion
from settleup.utils.money import ZERO, resolve_precision, round_money, to_decimal
from settleup.utils.references import MemberGuard, PolicyArg

log = logging.getLogger(__name__)

# debts[a][b] = how much of a's obligation traces to payments made by b
PairwiseDebts = Dict[str, Dict[str, Decimal]]


# =========================
# NET BALANCES
# =========================

def compute_nets(
    snapshot: LedgerSnapshot,
    precision: Optional[int] = None,
    *,
    policy: PolicyArg = None,
    unknown_refs: Optional[List[UnknownReference]] = None,
) -> List[NetBalance]:
    """
    One signed balance per member, in snapshot.members order.

    paidBy credits the member, splitBetween debits them; settlements move the
    payer towards positive and the receiver towards negative. Rounding happens
    once, after the whole fold.
    """
    decimals = resolve_precision(precision)
    guard = MemberGuard(snapshot.member_ids(), policy, unknown_refs)

    nets: Dict[str, Decimal] = {mid: ZERO for mid in snapshot.member_ids()}

    for exp in snapshot.expenses:
        for mid, amount in exp.paid_by.items():
            if guard.known(mid, "paid_by", exp.id):
                nets[mid] += to_decimal(amount)
        for mid, share in exp.split_between.items():
            if guard.known(mid, "split_between", exp.id):
                nets[mid] -= to_decimal(share)

    for s in snapshot.settlements:
        amount = to_decimal(s.amount)
        if guard.known(s.from_member_id, "settlement_from", s.id):
            nets[s.from_member_id] += amount
        if guard.known(s.to_member_id, "settlement_to", s.id):
            nets[s.to_member_id] -= amount

    log.debug(
        "Nets folded: members=%d expenses=%d settlements=%d",
        len(nets), len(snapshot.expenses), len(snapshot.settlements),
    )
    return [NetBalance(member_id=mid, net=round_money(net, decimals)) for mid, net in nets.items()]


def preview_nets(
    snapshot: LedgerSnapshot,
    expense: Expense,
    precision: Optional[int] = None,
    **kwargs,
) -> List[NetBalance]:
    """Nets as if `expense` were already admitted. The snapshot is left untouched."""
    return compute_nets(snapshot.with_expense(expense), precision, **kwargs)


def has_debts(snapshot: LedgerSnapshot, precision: Optional[int] = None, **kwargs) -> bool:
    return any(n.net != 0 for n in compute_nets(snapshot, precision, **kwargs))


# =========================
# SETTLE-UP: GREEDY
# =========================

def suggest_settlements(
    snapshot: LedgerSnapshot,
    precision: Optional[int] = None,
    *,
    policy: PolicyArg = None,
    unknown_refs: Optional[List[UnknownReference]] = None,
) -> List[SettlementSuggestion]:
    """
    Greedy settle-up: largest creditor against largest debtor until one side
    runs out. Not a minimum-transfers solver.

    Ties keep snapshot.members order (stable sort), so the plan is deterministic.
    """
    decimals = resolve_precision(precision)
    eps = config.SETTLE_EPSILON

    nets = compute_nets(snapshot, decimals, policy=policy, unknown_refs=unknown_refs)

    creditors = [[n.member_id, n.net] for n in nets if n.net > 0]
    debtors = [[n.member_id, n.net] for n in nets if n.net < 0]
    creditors.sort(key=lambda c: -c[1])
    debtors.sort(key=lambda d: d[1])

    suggestions: List[SettlementSuggestion] = []
    i, j = 0, 0
    while i < len(creditors) and j < len(debtors):
        creditor_id, credit = creditors[i]
        debtor_id, debt = debtors[j]

        amount = round_money(min(credit, -debt), decimals)

        if amount <= eps:
            # remainder below the noise floor: drop the smaller side
            if credit <= -debt:
                i += 1
            else:
                j += 1
            continue

        suggestions.append(
            SettlementSuggestion(from_member_id=debtor_id, to_member_id=creditor_id, amount=amount)
        )
        credit = round_money(credit - amount, decimals)
        debt = round_money(debt + amount, decimals)
        creditors[i][1] = credit
        debtors[j][1] = debt

        if abs(credit) <= eps:
            i += 1
        if abs(debt) <= eps:
            j += 1

    return suggestions


# =========================
# PAIRWISE DEBTS
# =========================

def compute_pairwise_debts(
    snapshot: LedgerSnapshot,
    precision: Optional[int] = None,
    *,
    policy: PolicyArg = None,
    unknown_refs: Optional[List[UnknownReference]] = None,
) -> PairwiseDebts:
    """
    debts[S][P] = Σ over expenses of (s / Σ splitBetween) × p, where s is S's
    share and p is P's contribution; both axes prorated, so multiple payers and
    multiple splitters are handled.

    A settlement from -> to only reduces debts[from][to]; debts[to][from] is
    left alone. Net between A and B is pairwise_net(debts, A, B).

    Every cell is rounded as it accumulates, not at the end.
    """
    decimals = resolve_precision(precision)
    guard = MemberGuard(snapshot.member_ids(), policy, unknown_refs)

    ids = snapshot.member_ids()
    zero = round_money(ZERO, decimals)
    debts: PairwiseDebts = {a: {b: zero for b in ids if b != a} for a in ids}

    for exp in snapshot.expenses:
        total_paid = exp.total_paid
        total_split = exp.total_split
        if total_split == 0 or total_paid == 0:
            continue

        payers = {
            mid: to_decimal(paid)
            for mid, paid in exp.paid_by.items()
            if guard.known(mid, "paid_by", exp.id)
        }
        splitters = {
            mid: to_decimal(share)
            for mid, share in exp.split_between.items()
            if guard.known(mid, "split_between", exp.id)
        }

        for splitter_id, split_amount in splitters.items():
            for payer_id, paid in payers.items():
                if payer_id == splitter_id or paid <= 0:
                    continue
                share = round_money(split_amount / total_split * paid, decimals)
                row = debts[splitter_id]
                row[payer_id] = round_money(row[payer_id] + share, decimals)

    for s in snapshot.settlements:
        from_known = guard.known(s.from_member_id, "settlement_from", s.id)
        to_known = guard.known(s.to_member_id, "settlement_to", s.id)
        if not (from_known and to_known) or s.from_member_id == s.to_member_id:
            continue
        row = debts[s.from_member_id]
        row[s.to_member_id] = round_money(row[s.to_member_id] - to_decimal(s.amount), decimals)

    return debts


def pairwise_net(debts: PairwiseDebts, a: str, b: str) -> Decimal:
    """How much a owes b after netting both directions (negative: b owes a)."""
    return debts.get(a, {}).get(b, ZERO) - debts.get(b, {}).get(a, ZERO)


# =========================
# SETTLE-UP: PAIRS
# =========================

def suggest_pairwise_settlements(
    snapshot: LedgerSnapshot,
    precision: Optional[int] = None,
    *,
    policy: PolicyArg = None,
    unknown_refs: Optional[List[UnknownReference]] = None,
) -> List[SettlementSuggestion]:
    """
    Pairwise settle-up "as recorded":
      • only mutual debts inside a pair A↔B are netted;
      • no netting through third parties.
    """
    decimals = resolve_precision(precision)
    eps = config.SETTLE_EPSILON

    debts = compute_pairwise_debts(snapshot, decimals, policy=policy, unknown_refs=unknown_refs)
    ids = snapshot.member_ids()

    suggestions: List[SettlementSuggestion] = []
    for i, a in enumerate(ids):
        for b in ids[i + 1:]:
            diff = pairwise_net(debts, a, b)
            amount = round_money(abs(diff), decimals)
            if amount <= eps:
                continue
            if diff > 0:
                suggestions.append(SettlementSuggestion(from_member_id=a, to_member_id=b, amount=amount))
            else:
                suggestions.append(SettlementSuggestion(from_member_id=b, to_member_id=a, amount=amount))

    return suggestions


def build_settle_plan(
    snapshot: LedgerSnapshot,
    precision: Optional[int] = None,
    *,
    algorithm: str = "greedy",  # "greedy" | "pairs"
    policy: PolicyArg = None,
    unknown_refs: Optional[List[UnknownReference]] = None,
) -> List[SettlementSuggestion]:
    algorithm = (algorithm or "greedy").lower().strip()
    if algorithm == "pairs":
        return suggest_pairwise_settlements(snapshot, precision, policy=policy, unknown_refs=unknown_refs)
    if algorithm != "greedy":
        raise ValueError("algorithm must be 'greedy' or 'pairs'")
    return suggest_settlements(snapshot, precision, policy=policy, unknown_refs=unknown_refs)
