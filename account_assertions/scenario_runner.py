from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence, Tuple

from account_assertions.account import AccountState, WithdrawalOutcome
from account_assertions.config_loader import AccountConfig, Scenario
from account_assertions.harness import (
    Check,
    GroupResult,
    expect_equal,
    expect_true,
    run_grouped,
)
from account_assertions.invariant_checker import InvariantChecker, InvariantViolation
from account_assertions.reporter import Reporter

logger = logging.getLogger(__name__)


@dataclass
class ScenarioResult:
    scenario: Scenario
    final_balance: Optional[float]
    group: GroupResult
    outcomes: List[WithdrawalOutcome] = field(default_factory=list)
    violation: Optional[InvariantViolation] = None
    debug_assertions: bool = False

    @property
    def passed(self) -> bool:
        return self.group.passed

    @property
    def message(self) -> str:
        if self.passed:
            return (
                f"{self.group.total} check(s) passed in `{self.group.heading}`, "
                f"balance={self.final_balance:.2f}"
            )
        return (
            f"{len(self.group.failures)} of {self.group.total} check(s) failed in "
            f"`{self.group.heading}`: {self.group.render_failures()}"
        )


class ScenarioRunner:
    def __init__(
        self,
        account_config: AccountConfig,
        invariant_checker: Optional[InvariantChecker] = None,
    ) -> None:
        self.account_config = account_config
        self.invariant_checker = invariant_checker or InvariantChecker()

    def build_account(self, scenario: Scenario) -> AccountState:
        debug_assertions = self.account_config.debug_assertions
        if scenario.debug_assertions is not None:
            debug_assertions = scenario.debug_assertions

        return AccountState(
            self.account_config.starting_balance,
            debug_assertions=debug_assertions,
            invariant_checker=self.invariant_checker,
        )

    def run_scenario(self, scenario: Scenario) -> ScenarioResult:
        account = self.build_account(scenario)
        logger.info("Running scenario %r (%r)", scenario.name, account)

        outcomes: List[WithdrawalOutcome] = []
        violation: Optional[InvariantViolation] = None

        for amount in scenario.withdrawals:
            try:
                outcomes.append(account.withdraw(amount))
            except InvariantViolation as exc:
                violation = exc
                logger.info("Scenario %r stopped by invariant violation: %s", scenario.name, exc)
                break

        checks = self._build_checks(scenario, account, outcomes, violation)
        group = run_grouped(scenario.group, checks)

        return ScenarioResult(
            scenario=scenario,
            final_balance=account.get_balance(),
            group=group,
            outcomes=outcomes,
            violation=violation,
            debug_assertions=account.debug_assertions,
        )

    def run(self, scenarios: Sequence[Scenario], reporter: Reporter) -> List[ScenarioResult]:
        results: List[ScenarioResult] = []

        for scenario in scenarios:
            result = self.run_scenario(scenario)
            reporter.add_scenario("scenario", result)

            # Only accounts running with debug assertions promise a positive balance.
            if result.debug_assertions and result.violation is None:
                reporter.add_invariant(
                    "invariants",
                    self.invariant_checker.check_balance_positive(result.final_balance),
                    label=scenario.name,
                )

            results.append(result)

        return results

    def _build_checks(
        self,
        scenario: Scenario,
        account: AccountState,
        outcomes: List[WithdrawalOutcome],
        violation: Optional[InvariantViolation],
    ) -> List[Tuple[str, Check]]:
        expect = scenario.expect
        checks: List[Tuple[str, Check]] = []

        if violation is not None and "violation" not in expect:
            def _unexpected_violation(exc: InvariantViolation = violation) -> None:
                raise AssertionError(f"Unexpected invariant violation: {exc.message}")

            checks.append(("no_violation", _unexpected_violation))

        if "violation" in expect:
            expected_text = str(expect["violation"])

            def _violation_raised() -> None:
                expect_true(
                    violation is not None and expected_text in violation.message,
                    f"Invariant violation containing {expected_text!r} should be raised "
                    f"(got {violation.message if violation else None!r})",
                )

            checks.append(("violation", _violation_raised))

        if "balance" in expect:
            expected_balance = float(expect["balance"])
            checks.append(
                (
                    "balance",
                    lambda: expect_equal(
                        expected_balance,
                        account.get_balance(),
                        f"Balance should be {expected_balance:.2f}",
                    ),
                )
            )

        if "balance_positive" in expect:
            expected_positive = bool(expect["balance_positive"])
            checks.append(
                (
                    "balance_positive",
                    lambda: expect_equal(expected_positive, account.get_balance() > 0),
                )
            )

        if "account_present" in expect:
            expected_present = bool(expect["account_present"])
            checks.append(
                (
                    "account_present",
                    lambda: expect_equal(expected_present, account is not None),
                )
            )

        if "outcomes" in expect:
            expected_outcomes: Any = [str(o) for o in expect["outcomes"]]
            checks.append(
                (
                    "outcomes",
                    lambda: expect_equal(expected_outcomes, [o.value for o in outcomes]),
                )
            )

        return checks
