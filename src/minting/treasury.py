"""Treasury - funds held by a collection

Mint payments are credited here in full (overpayment is kept, never
refunded). The only way funds leave is a withdrawal of the entire
balance to the owner through a payout callable.

The payout callable stands in for the fund-transfer mechanism: it
receives (recipient, amount) and returns True if the transfer went
through. Balances are integers in the smallest currency unit.
"""

from __future__ import annotations

from typing import Callable

Payout = Callable[[str, int], bool]


def accept_all_payouts(recipient: str, amount: int) -> bool:
    """Default payout: every transfer succeeds."""
    return True


class Treasury:
    """Held balance plus cumulative deposit/withdrawal totals.

    balance == total_deposited - total_withdrawn at all times.

    Thread-safety: NOT thread-safe; callers serialize access.
    """

    balance: int
    total_deposited: int
    total_withdrawn: int

    def __init__(self, payout: Payout | None = None) -> None:
        self.balance = 0
        self.total_deposited = 0
        self.total_withdrawn = 0
        self._payout = payout or accept_all_payouts

    def deposit(self, amount: int) -> None:
        """Credit an accepted payment."""
        if amount < 0:
            raise ValueError(f"deposit amount must be non-negative, got {amount}")
        self.balance += amount
        self.total_deposited += amount

    def withdraw_all(self, recipient: str) -> int | None:
        """Pay the entire balance to recipient.

        Returns:
            The amount paid, or None if the payout reported failure. On
            failure the balance is left unchanged.
        """
        amount = self.balance
        if not self._payout(recipient, amount):
            return None
        self.balance = 0
        self.total_withdrawn += amount
        return amount
