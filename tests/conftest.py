"""
Pytest configuration and shared fixtures for the settleup tests.

Fixtures follow the "factory as fixture" pattern: the builders return
callables so each test spells out its own ledger.
"""

import os

# Pin engine settings before any settleup import reads them
os.environ.setdefault("SETTLEUP_PRECISION", "2")
os.environ.setdefault("SETTLEUP_UNKNOWN_MEMBER_POLICY", "ignore")

from datetime import datetime, timezone

import pytest

from settleup.schemas.expense import Expense
from settleup.schemas.ledger import LedgerSnapshot
from settleup.schemas.member import Member
from settleup.schemas.settlement import Settlement


@pytest.fixture
def make_expense():
    counter = {"n": 0}

    def _make(amount, paid_by, split_between, *, id=None, date=None, **extra):
        counter["n"] += 1
        return Expense(
            id=id or f"e{counter['n']}",
            amount=amount,
            paid_by=paid_by,
            split_between=split_between,
            date=date or datetime(2025, 1, counter["n"], tzinfo=timezone.utc),
            **extra,
        )

    return _make


@pytest.fixture
def make_settlement():
    counter = {"n": 0}

    def _make(from_id, to_id, amount, *, id=None, date=None):
        counter["n"] += 1
        return Settlement(
            id=id or f"s{counter['n']}",
            from_member_id=from_id,
            to_member_id=to_id,
            amount=amount,
            date=date or datetime(2025, 2, counter["n"], tzinfo=timezone.utc),
        )

    return _make


@pytest.fixture
def make_snapshot():
    def _make(member_ids, expenses=(), settlements=()):
        return LedgerSnapshot(
            members=[Member(id=mid, name=mid.lower()) for mid in member_ids],
            expenses=list(expenses),
            settlements=list(settlements),
        )

    return _make


@pytest.fixture
def two_member_snapshot(make_snapshot, make_expense):
    """A paid 100, split evenly with B."""
    return make_snapshot(["A", "B"], [make_expense(100, {"A": 100}, {"A": 50, "B": 50})])


@pytest.fixture
def triangle_snapshot(make_snapshot, make_expense):
    """A owes B 30 and B owes C 30, via two independent expenses."""
    return make_snapshot(
        ["A", "B", "C"],
        [
            make_expense(30, {"B": 30}, {"A": 30}),
            make_expense(30, {"C": 30}, {"B": 30}),
        ],
    )


@pytest.fixture
def group_snapshot(make_snapshot, make_expense, make_settlement):
    """Five members, multi-payer / multi-splitter expenses and one settlement."""
    return make_snapshot(
        ["A", "B", "C", "D", "E"],
        [
            make_expense(
                "123.45",
                {"A": "123.45"},
                {"A": "24.69", "B": "24.69", "C": "24.69", "D": "24.69", "E": "24.69"},
            ),
            make_expense(80, {"B": 50, "C": 30}, {"B": 20, "D": 40, "E": 20}),
            make_expense("37.5", {"E": "37.5"}, {"A": "12.5", "C": 25}),
        ],
        [make_settlement("D", "A", 10)],
    )
