from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence


@dataclass(frozen=True)
class ValidationIssue:
    """One problem found in user input or stored data; code is stable, message is user-facing."""
    code: str
    message: str


class ValidationError(Exception):
    """Raised with every issue found, not just the first."""

    def __init__(self, issues: Sequence[ValidationIssue]):
        self.issues: List[ValidationIssue] = list(issues)
        super().__init__("; ".join(f"{i.code}: {i.message}" for i in self.issues))

    @property
    def codes(self) -> List[str]:
        return [i.code for i in self.issues]

    @property
    def user_message(self) -> str:
        return self.issues[0].message if self.issues else str(self)
