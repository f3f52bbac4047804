"""Tests for the settle-up planners (greedy and pairs)."""

from decimal import Decimal

import pytest

from settleup.utils.activity import apply_suggestions
from settleup.utils.balance import (
    build_settle_plan,
    compute_nets,
    suggest_pairwise_settlements,
    suggest_settlements,
)


def _plan(suggestions):
    return [(s.from_member_id, s.to_member_id, s.amount) for s in suggestions]


class TestSuggestSettlements:

    def test_already_settled_group(self, make_snapshot):
        assert suggest_settlements(make_snapshot(["A", "B", "C"])) == []

    def test_two_member_single_expense(self, two_member_snapshot):
        assert _plan(suggest_settlements(two_member_snapshot)) == [("B", "A", Decimal("50"))]

    def test_nothing_left_after_settlement(self, two_member_snapshot, make_settlement):
        snapshot = two_member_snapshot.with_settlement(make_settlement("B", "A", 50))
        assert suggest_settlements(snapshot) == []

    def test_triangle_collapses_to_one_transfer(self, triangle_snapshot):
        assert _plan(suggest_settlements(triangle_snapshot)) == [("A", "C", Decimal("30"))]

    def test_largest_balances_matched_first(self, group_snapshot):
        assert _plan(suggest_settlements(group_snapshot)) == [
            ("D", "A", Decimal("54.69")),
            ("C", "A", Decimal("19.69")),
            ("E", "A", Decimal("1.88")),
            ("E", "B", Decimal("5.31")),
        ]

    def test_ties_follow_member_order(self, make_snapshot, make_expense):
        snapshot = make_snapshot(
            ["A", "B", "C", "D"],
            [make_expense(20, {"A": 20}, {"C": 20}), make_expense(20, {"B": 20}, {"D": 20})],
        )
        assert _plan(suggest_settlements(snapshot)) == [
            ("C", "A", Decimal("20")),
            ("D", "B", Decimal("20")),
        ]

    def test_transfer_count_bound(self, group_snapshot):
        nets = compute_nets(group_snapshot)
        creditors = sum(1 for n in nets if n.net > 0)
        debtors = sum(1 for n in nets if n.net < 0)
        assert len(suggest_settlements(group_snapshot)) <= creditors + debtors - 1

    def test_amounts_are_positive_and_rounded(self, group_snapshot):
        for s in suggest_settlements(group_snapshot):
            assert s.amount > 0
            assert s.amount == s.amount.quantize(Decimal("0.01"))

    def test_executing_the_plan_zeroes_every_balance(self, group_snapshot):
        settled = apply_suggestions(group_snapshot, suggest_settlements(group_snapshot))
        assert all(n.net == 0 for n in compute_nets(settled))
        assert suggest_settlements(settled) == []

    def test_idempotent(self, group_snapshot):
        assert suggest_settlements(group_snapshot) == suggest_settlements(group_snapshot)


class TestPairwiseSettleUp:

    def test_no_netting_through_third_parties(self, triangle_snapshot):
        assert _plan(suggest_pairwise_settlements(triangle_snapshot)) == [
            ("A", "B", Decimal("30")),
            ("B", "C", Decimal("30")),
        ]

    def test_mutual_debts_are_netted(self, make_snapshot, make_expense):
        snapshot = make_snapshot(
            ["A", "B"],
            [make_expense(100, {"A": 100}, {"A": 50, "B": 50}), make_expense(30, {"B": 30}, {"A": 30})],
        )
        assert _plan(suggest_pairwise_settlements(snapshot)) == [("B", "A", Decimal("20"))]

    def test_executing_the_plan_zeroes_every_balance(self, group_snapshot):
        settled = apply_suggestions(group_snapshot, suggest_pairwise_settlements(group_snapshot))
        assert all(n.net == 0 for n in compute_nets(settled))


class TestBuildSettlePlan:

    def test_defaults_to_greedy(self, triangle_snapshot):
        assert build_settle_plan(triangle_snapshot) == suggest_settlements(triangle_snapshot)

    def test_pairs(self, triangle_snapshot):
        assert build_settle_plan(triangle_snapshot, algorithm="Pairs ") == suggest_pairwise_settlements(triangle_snapshot)

    def test_unknown_algorithm(self, triangle_snapshot):
        with pytest.raises(ValueError):
            build_settle_plan(triangle_snapshot, algorithm="optimal")
