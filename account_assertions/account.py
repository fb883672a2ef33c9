from __future__ import annotations

import enum
import logging
from typing import Optional

from account_assertions.invariant_checker import InvariantChecker

logger = logging.getLogger(__name__)


DEFAULT_STARTING_BALANCE = 1000.0


class WithdrawalOutcome(str, enum.Enum):
    SUCCESS = "success"
    INSUFFICIENT_FUNDS = "insufficient_funds"


class AccountState:
    """A single balance with a checked withdrawal operation.

    Precondition and postcondition checks only run when ``debug_assertions``
    is enabled. When they are off, ``withdraw`` applies no validation at all,
    so a non-positive amount still goes through the balance comparison.
    """

    def __init__(
        self,
        starting_balance: float = DEFAULT_STARTING_BALANCE,
        *,
        debug_assertions: bool = False,
        invariant_checker: Optional[InvariantChecker] = None,
    ) -> None:
        self.balance = float(starting_balance)
        self.debug_assertions = debug_assertions
        self.invariant_checker = invariant_checker or InvariantChecker()

    def withdraw(self, amount: float) -> WithdrawalOutcome:
        amount = float(amount)

        if self.debug_assertions:
            self.invariant_checker.enforce(self.invariant_checker.check_amount_positive(amount))

        if amount <= self.balance:
            self.balance -= amount
            outcome = WithdrawalOutcome.SUCCESS
            logger.debug("Withdrew %.2f, balance now %.2f", amount, self.balance)
        else:
            # Rejected without raising; the outcome is the only signal.
            outcome = WithdrawalOutcome.INSUFFICIENT_FUNDS
            logger.info(
                "Insufficient funds: requested %.2f, balance %.2f", amount, self.balance
            )

        if self.debug_assertions:
            self.invariant_checker.enforce(self.invariant_checker.check_balance_positive(self.balance))

        return outcome

    def get_balance(self) -> float:
        return self.balance

    def __repr__(self) -> str:
        return (
            f"AccountState(balance={self.balance!r}, "
            f"debug_assertions={self.debug_assertions!r})"
        )
