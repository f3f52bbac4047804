# settleup/__init__.py
# Ledger settlement engine: net balances, settle-up plan, pairwise debts.

from settleup.utils.balance import (
    compute_nets,
    compute_pairwise_debts,
    suggest_settlements,
)

__all__ = ["compute_nets", "suggest_settlements", "compute_pairwise_debts"]
