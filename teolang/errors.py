from dataclasses import dataclass
from typing import Optional


@dataclass
class ErrorVal:
    """Describes a Teo runtime failure by kind name and message."""
    name: str
    message: str

    def __repr__(self) -> str:
        return f"Error(name={self.name!r}, message={self.message!r})"


class TeoError(Exception):
    """Exception type used to propagate Teo runtime errors."""
    def __init__(self, err: ErrorVal):
        super().__init__(f"{err.name}: {err.message}")
        self.err = err

    @property
    def name(self) -> str:
        return self.err.name


class ParseError(Exception):
    """Raised when source text does not match the Teo grammar."""
    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        if line is not None and line > 0:
            super().__init__(f"{message} at {line}:{column}")
        else:
            super().__init__(message)
        self.message = message
        self.line = line if line is not None and line > 0 else None
        self.column = column if self.line is not None else None


class ReturnSignal(Exception):
    """Internal exception unwinding the current run on return(...)."""
    def __init__(self, code: int):
        super().__init__('return')
        self.code = code
