from account_assertions.account import DEFAULT_STARTING_BALANCE, AccountState, WithdrawalOutcome
from account_assertions.config_loader import (
    AccountConfig,
    Scenario,
    ScenarioSpec,
    SpecValidationError,
    load_account_config,
    load_scenario_spec,
)
from account_assertions.harness import (
    CheckFailure,
    GroupedAssertionsMixin,
    GroupResult,
    MultipleFailuresError,
    assert_all,
    display_name,
    expect_equal,
    expect_not_none,
    expect_true,
    label_of,
    run_grouped,
)
from account_assertions.invariant_checker import InvariantChecker, InvariantResult, InvariantViolation
from account_assertions.reporter import Reporter
from account_assertions.scenario_runner import ScenarioResult, ScenarioRunner

__all__ = [
    "DEFAULT_STARTING_BALANCE",
    "AccountConfig",
    "AccountState",
    "CheckFailure",
    "GroupResult",
    "GroupedAssertionsMixin",
    "InvariantChecker",
    "InvariantResult",
    "InvariantViolation",
    "MultipleFailuresError",
    "Reporter",
    "Scenario",
    "ScenarioResult",
    "ScenarioRunner",
    "ScenarioSpec",
    "SpecValidationError",
    "WithdrawalOutcome",
    "assert_all",
    "display_name",
    "expect_equal",
    "expect_not_none",
    "expect_true",
    "label_of",
    "load_account_config",
    "load_scenario_spec",
    "run_grouped",
]
