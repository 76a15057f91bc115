"""Violation and Report — the only things the checker produces."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable


@dataclass(frozen=True)
class Violation:
    subject: str  # hostname, username or principal the problem belongs to
    message: str

    def __str__(self) -> str:
        return f"[{self.subject}] {self.message}"


@dataclass
class Report:
    """Ordered violation accumulator. Order is discovery order; no dedup."""

    violations: list[Violation] = field(default_factory=list)

    def extend(self, violations: Iterable[Violation]) -> None:
        self.violations.extend(violations)

    @property
    def ok(self) -> bool:
        return not self.violations

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1

    def __len__(self) -> int:
        return len(self.violations)
