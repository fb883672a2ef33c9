from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Dict, List, Optional

from colorama import Fore, Style, init

from account_assertions.invariant_checker import InvariantResult

if TYPE_CHECKING:
    from account_assertions.scenario_runner import ScenarioResult


@dataclass
class ReportEntry:
    phase: str
    name: str
    passed: bool
    message: str


class Reporter:
    def __init__(self, use_color: bool = True) -> None:
        init(autoreset=True)
        self.use_color = use_color
        self.entries: List[ReportEntry] = []

    def add_scenario(self, phase: str, result: "ScenarioResult") -> None:
        self.entries.append(
            ReportEntry(
                phase=phase,
                name=result.scenario.name,
                passed=result.passed,
                message=result.message,
            )
        )

    def add_invariant(
        self, phase: str, invariant: InvariantResult, label: Optional[str] = None
    ) -> None:
        name = f"Invariant {invariant.name}"
        if label:
            name += f" [{label}]"
        self.entries.append(
            ReportEntry(
                phase=phase,
                name=name,
                passed=invariant.passed,
                message=invariant.message,
            )
        )

    def add_custom(self, phase: str, name: str, passed: bool, message: str) -> None:
        self.entries.append(ReportEntry(phase=phase, name=name, passed=passed, message=message))

    @property
    def failures(self) -> List[ReportEntry]:
        return [entry for entry in self.entries if not entry.passed]

    @property
    def has_failures(self) -> bool:
        return bool(self.failures)

    def by_phase(self) -> Dict[str, List[ReportEntry]]:
        phases: Dict[str, List[ReportEntry]] = {}
        for entry in self.entries:
            phases.setdefault(entry.phase, []).append(entry)
        return phases

    def _marker(self, passed: bool, color: bool) -> str:
        marker = "[PASS]" if passed else "[FAIL]"
        if color:
            return f"{Fore.GREEN if passed else Fore.RED}{marker}{Style.RESET_ALL}"
        return marker

    def render(self, color: Optional[bool] = None) -> str:
        if color is None:
            color = self.use_color

        lines = ["========== ACCOUNT REPORT =========="]
        for phase, entries in self.by_phase().items():
            failed = sum(1 for entry in entries if not entry.passed)
            lines.append(f"-- {phase} (passed={len(entries) - failed}, failed={failed})")
            for entry in entries:
                lines.append(f"{self._marker(entry.passed, color)} {entry.name} - {entry.message}")

        failed_count = len(self.failures)
        lines.append("====================================")
        lines.append(
            f"Summary: passed={len(self.entries) - failed_count}, "
            f"failed={failed_count}, total={len(self.entries)}"
        )
        return "\n".join(lines)

    def print(self) -> None:
        print(self.render())

    def write(self, path: str | Path) -> None:
        # Report files never carry ANSI colour codes.
        Path(path).write_text(self.render(color=False), encoding="utf-8")
