from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


AMOUNT_POSITIVE_MESSAGE = "Withdrawal amount must be positive!"
BALANCE_POSITIVE_MESSAGE = "System Error: Balance dropped zero!"


class InvariantViolation(AssertionError):
    """A precondition or postcondition of an account operation did not hold.

    Signals a logic defect rather than bad user input, so callers are not
    expected to recover from it.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


@dataclass
class InvariantResult:
    name: str
    passed: bool
    message: str


class InvariantChecker:
    def check_amount_positive(self, amount: float) -> InvariantResult:
        if amount > 0:
            return InvariantResult(
                name="amount_positive",
                passed=True,
                message=f"Withdrawal amount is positive ({amount:.2f})",
            )
        return InvariantResult(
            name="amount_positive",
            passed=False,
            message=AMOUNT_POSITIVE_MESSAGE,
        )

    def check_balance_positive(self, balance: float) -> InvariantResult:
        if balance > 0:
            return InvariantResult(
                name="balance_positive",
                passed=True,
                message=f"Balance is positive ({balance:.2f})",
            )
        return InvariantResult(
            name="balance_positive",
            passed=False,
            message=BALANCE_POSITIVE_MESSAGE,
        )

    def enforce(self, result: InvariantResult) -> InvariantResult:
        if not result.passed:
            logger.error("Invariant %s violated: %s", result.name, result.message)
            raise InvariantViolation(result.message)
        return result
