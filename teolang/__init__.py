# Teo language package
# This package provides a parser and tree-walking interpreter for the Teo language.
from .errors import ParseError, TeoError
from .interpreter import Interpreter, run_program
from .outcome import Outcome, OutcomeKind
from .parser import parse_program

__all__ = [
    'parse_program',
    'run_program',
    'Interpreter',
    'Outcome',
    'OutcomeKind',
    'ParseError',
    'TeoError',
]
