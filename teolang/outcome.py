"""Result of running a Teo program.

A run ends in one of three ways: the statements ran to the end, a
top-level ``return(...)`` stopped the program with an exit code, or an
evaluation error aborted it. Only the outermost driver (the CLI) turns
an outcome into a process exit.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .environment import Environment
from .errors import TeoError


class OutcomeKind(Enum):
    COMPLETED = 'completed'
    RETURNED = 'returned'
    FAILED = 'failed'


@dataclass
class Outcome:
    kind: OutcomeKind
    env: Environment
    exit_code: Optional[int] = None
    error: Optional[TeoError] = None

    @classmethod
    def completed(cls, env: Environment) -> 'Outcome':
        return cls(OutcomeKind.COMPLETED, env)

    @classmethod
    def returned(cls, env: Environment, code: int) -> 'Outcome':
        return cls(OutcomeKind.RETURNED, env, exit_code=code)

    @classmethod
    def failed(cls, env: Environment, error: TeoError) -> 'Outcome':
        return cls(OutcomeKind.FAILED, env, error=error)

    @property
    def ok(self) -> bool:
        return self.kind is not OutcomeKind.FAILED

    @property
    def exit_status(self) -> int:
        """Process exit status for this outcome."""
        if self.kind is OutcomeKind.RETURNED:
            return self.exit_code
        if self.kind is OutcomeKind.FAILED:
            return 1
        return 0
