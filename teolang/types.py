"""Runtime values and helpers for Teo.

Teo has three kinds of value: integers, strings and arrays. They are
represented by the dataclasses below, which together form the closed
`Value` union. The narrowing helpers (`as_int`, `as_text`, `as_array`)
raise a `TeoError` carrying `TypeMismatch` instead of a Python
exception, so the interpreter can report them like any other runtime
failure.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Union

from .errors import ErrorVal, TeoError


@dataclass(frozen=True)
class IntVal:
    value: int

    def __repr__(self) -> str:
        return f"Int({self.value})"


@dataclass(frozen=True)
class StrVal:
    text: str

    def __repr__(self) -> str:
        return f"String({self.text!r})"


@dataclass
class ArrayVal:
    """Represents a Teo array value.

    Arrays are heterogeneous and mutable through index assignment. The
    interpreter copies them whenever they are stored, so two names never
    share one array.
    """
    items: List['Value'] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"Array({self.items!r})"


Value = Union[IntVal, StrVal, ArrayVal]


def type_name(value: Value) -> str:
    """Return the Teo type name of a runtime value."""
    if isinstance(value, IntVal):
        return 'Int'
    if isinstance(value, StrVal):
        return 'String'
    if isinstance(value, ArrayVal):
        return 'Array'
    return type(value).__name__


def _mismatch(expected: str, value: Value, what: str) -> TeoError:
    return TeoError(ErrorVal('TypeMismatch', f'{what} expects {expected}, got {type_name(value)}'))


def as_int(value: Value, what: str = 'operation') -> int:
    if isinstance(value, IntVal):
        return value.value
    raise _mismatch('Int', value, what)


def as_text(value: Value, what: str = 'operation') -> str:
    if isinstance(value, StrVal):
        return value.text
    raise _mismatch('String', value, what)


def as_array(value: Value, what: str = 'operation') -> ArrayVal:
    if isinstance(value, ArrayVal):
        return value
    raise _mismatch('Array', value, what)


def to_exit_code(value: Value) -> int:
    """Convert the argument of return(...) to an integer status."""
    if isinstance(value, IntVal):
        return value.value
    if isinstance(value, StrVal):
        try:
            return int(value.text.strip())
        except ValueError:
            raise TeoError(ErrorVal('TypeMismatch', f'return expects an integer, got {value.text!r}'))
    raise _mismatch('Int', value, 'return')


def to_string(value: Value) -> str:
    """Convert a Teo value to its string representation for printing."""
    if isinstance(value, IntVal):
        return str(value.value)
    if isinstance(value, StrVal):
        return value.text
    if isinstance(value, ArrayVal):
        return '[' + ', '.join(to_string(item) for item in value.items) + ']'
    return str(value)


def is_truthy(value: Value) -> bool:
    if isinstance(value, IntVal):
        return value.value != 0
    if isinstance(value, StrVal):
        return len(value.text) > 0
    if isinstance(value, ArrayVal):
        return len(value.items) > 0
    return bool(value)


def copy_value(value: Value) -> Value:
    # ints and strings are immutable
    if isinstance(value, ArrayVal):
        return ArrayVal([copy_value(item) for item in value.items])
    return value


def truncating_div(a: int, b: int) -> int:
    """Integer division rounding toward zero, as opposed to Python's floor."""
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient
