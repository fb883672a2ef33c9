from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from account_assertions.account import DEFAULT_STARTING_BALANCE, WithdrawalOutcome

logger = logging.getLogger(__name__)


DEBUG_ASSERTIONS_ENV = "ACCOUNT_DEBUG_ASSERTIONS"

_ALLOWED_EXPECTATIONS = {"balance", "balance_positive", "account_present", "outcomes", "violation"}


@dataclass
class AccountConfig:
    starting_balance: float = DEFAULT_STARTING_BALANCE
    debug_assertions: bool = False


@dataclass
class Scenario:
    name: str
    withdrawals: List[float] = field(default_factory=list)
    group: str = ""
    debug_assertions: Optional[bool] = None
    expect: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.group:
            self.group = self.name


@dataclass
class ScenarioSpec:
    account: AccountConfig
    scenarios: List[Scenario]


class SpecValidationError(ValueError):
    pass


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def load_account_config(raw: Any) -> AccountConfig:
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise SpecValidationError("`account` must be a mapping")

    starting_balance = raw.get("starting_balance", DEFAULT_STARTING_BALANCE)
    if not _is_number(starting_balance):
        raise SpecValidationError("`account.starting_balance` must be numeric")

    debug_assertions = raw.get("debug_assertions", False)
    if not isinstance(debug_assertions, bool):
        raise SpecValidationError("`account.debug_assertions` must be a boolean")

    debug_assertions = _env_flag(DEBUG_ASSERTIONS_ENV, default=debug_assertions)
    logger.debug(
        "Account config: starting_balance=%.2f debug_assertions=%s",
        float(starting_balance),
        debug_assertions,
    )

    return AccountConfig(
        starting_balance=float(starting_balance),
        debug_assertions=debug_assertions,
    )


def load_scenario_spec(path: str | Path) -> ScenarioSpec:
    spec_path = Path(path)
    if not spec_path.exists():
        raise SpecValidationError(f"Scenario file not found: {spec_path}")

    raw = yaml.safe_load(spec_path.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise SpecValidationError("Scenario file root must be a YAML mapping")

    account = load_account_config(raw.get("account"))

    scenarios_raw = raw.get("scenarios")
    if not isinstance(scenarios_raw, list) or not scenarios_raw:
        raise SpecValidationError("`scenarios` is required and must be a non-empty list")

    scenarios = [_parse_scenario(idx, conf) for idx, conf in enumerate(scenarios_raw)]
    logger.info("Loaded %d scenario(s) from %s", len(scenarios), spec_path)

    return ScenarioSpec(account=account, scenarios=scenarios)


def _parse_scenario(idx: int, conf: Any) -> Scenario:
    if not isinstance(conf, dict):
        raise SpecValidationError(f"scenarios[{idx}] must be a mapping")

    name = conf.get("name")
    if not isinstance(name, str) or not name.strip():
        raise SpecValidationError(f"scenarios[{idx}] is missing string `name`")

    withdrawals = conf.get("withdrawals", [])
    if not isinstance(withdrawals, list) or not all(_is_number(w) for w in withdrawals):
        raise SpecValidationError(f"Scenario `{name}` withdrawals must be a list of numbers")

    group = conf.get("group", "")
    if not isinstance(group, str):
        raise SpecValidationError(f"Scenario `{name}` group must be a string")

    debug_assertions = conf.get("debug_assertions")
    if debug_assertions is not None and not isinstance(debug_assertions, bool):
        raise SpecValidationError(f"Scenario `{name}` debug_assertions must be a boolean")

    expect = conf.get("expect", {})
    if not isinstance(expect, dict):
        raise SpecValidationError(f"Scenario `{name}` expect must be a mapping")
    unknown = sorted(set(expect) - _ALLOWED_EXPECTATIONS)
    if unknown:
        raise SpecValidationError(
            f"Scenario `{name}` has unknown expectation(s) {', '.join(unknown)}. "
            f"Allowed: {', '.join(sorted(_ALLOWED_EXPECTATIONS))}"
        )
    _validate_expectations(name, expect)

    return Scenario(
        name=name,
        withdrawals=[float(w) for w in withdrawals],
        group=group,
        debug_assertions=debug_assertions,
        expect=expect,
    )


def _validate_expectations(name: str, expect: Dict[str, Any]) -> None:
    if "balance" in expect and not _is_number(expect["balance"]):
        raise SpecValidationError(f"Scenario `{name}` expect.balance must be numeric")

    for key in ("balance_positive", "account_present"):
        if key in expect and not isinstance(expect[key], bool):
            raise SpecValidationError(f"Scenario `{name}` expect.{key} must be a boolean")

    if "outcomes" in expect:
        outcomes = expect["outcomes"]
        allowed = {outcome.value for outcome in WithdrawalOutcome}
        if not isinstance(outcomes, list) or not all(
            isinstance(o, str) and o in allowed for o in outcomes
        ):
            raise SpecValidationError(
                f"Scenario `{name}` expect.outcomes must be a list of "
                f"{', '.join(sorted(allowed))}"
            )

    if "violation" in expect and not isinstance(expect["violation"], str):
        raise SpecValidationError(f"Scenario `{name}` expect.violation must be a string")
