"""Grouped comparisons and scenario labels for account tests.

``run_grouped`` evaluates every check in a group even after earlier ones
fail; ``assert_all`` turns the collected failures into a single
``MultipleFailuresError``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Sequence, Tuple, TypeVar, Union

logger = logging.getLogger(__name__)

Check = Callable[[], Any]
LabeledCheck = Union[Check, Tuple[str, Check]]

_T = TypeVar("_T")

DISPLAY_NAME_ATTR = "display_name"


@dataclass
class CheckFailure:
    index: int
    label: str
    message: str


@dataclass
class GroupResult:
    heading: str
    total: int = 0
    failures: List[CheckFailure] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.failures

    def render_failures(self) -> str:
        return "; ".join(f"{failure.label}: {failure.message}" for failure in self.failures)


class MultipleFailuresError(AssertionError):
    def __init__(self, heading: str, failures: List[CheckFailure]) -> None:
        self.heading = heading
        self.failures = failures
        lines = [f"{heading} ({len(failures)} failure{'s' if len(failures) != 1 else ''})"]
        for failure in failures:
            lines.append(f"    {failure.label}: {failure.message}")
        super().__init__("\n".join(lines))


def _split_check(index: int, check: LabeledCheck) -> Tuple[str, Check]:
    if isinstance(check, tuple):
        label, func = check
        return label, func
    return f"check[{index}]", check


def run_grouped(heading: str, checks: Sequence[LabeledCheck]) -> GroupResult:
    result = GroupResult(heading=heading, total=len(checks))

    for index, check in enumerate(checks):
        label, func = _split_check(index, check)
        try:
            func()
        except Exception as exc:
            message = str(exc) or exc.__class__.__name__
            logger.debug("Check %s in group %r failed: %s", label, heading, message)
            result.failures.append(CheckFailure(index=index, label=label, message=message))

    return result


def assert_all(heading: str, *checks: LabeledCheck) -> GroupResult:
    result = run_grouped(heading, checks)
    if not result.passed:
        raise MultipleFailuresError(heading, result.failures)
    return result


def expect_equal(expected: Any, actual: Any, message: Optional[str] = None) -> None:
    if expected != actual:
        detail = f"expected: <{expected!r}> but was: <{actual!r}>"
        raise AssertionError(f"{message} ==> {detail}" if message else detail)


def expect_true(condition: bool, message: Optional[str] = None) -> None:
    if not condition:
        detail = "expected: <True> but was: <False>"
        raise AssertionError(f"{message} ==> {detail}" if message else detail)


def expect_not_none(value: Any, message: Optional[str] = None) -> None:
    if value is None:
        detail = "expected: not <None>"
        raise AssertionError(f"{message} ==> {detail}" if message else detail)


def display_name(name: str) -> Callable[[_T], _T]:
    """Attach a human-readable label to a test function or class."""

    def decorator(obj: _T) -> _T:
        setattr(obj, DISPLAY_NAME_ATTR, name)
        return obj

    return decorator


def label_of(obj: Any) -> str:
    label = getattr(obj, DISPLAY_NAME_ATTR, None)
    if isinstance(label, str):
        return label
    return getattr(obj, "__name__", repr(obj))


class GroupedAssertionsMixin:
    """Adds ``assertAll`` to a ``unittest.TestCase``.

    Test methods decorated with ``display_name`` report that label as their
    short description, which is what unittest prints in verbose runs.
    """

    def shortDescription(self) -> Optional[str]:  # noqa: N802
        method = getattr(self, self._testMethodName, None)  # type: ignore[attr-defined]
        if method is not None and hasattr(method, DISPLAY_NAME_ATTR):
            return label_of(method)
        return super().shortDescription()  # type: ignore[misc]

    def assertAll(self, heading: str, *checks: LabeledCheck) -> GroupResult:  # noqa: N802
        result = run_grouped(heading, checks)
        if not result.passed:
            self.fail(str(MultipleFailuresError(heading, result.failures)))  # type: ignore[attr-defined]
        return result
