from typing import Dict, Iterator, Optional
from teolang.errors import ErrorVal, TeoError
from teolang.types import Value


class Environment:
    """Maps variable names to values for one program run or one function call.

    There is no parent chain: a function call starts from an empty
    environment holding only its parameters.
    """
    def __init__(self, values: Optional[Dict[str, Value]] = None):
        self.values: Dict[str, Value] = dict(values) if values else {}

    def get(self, name: str) -> Value:
        if name in self.values:
            return self.values[name]
        raise TeoError(ErrorVal('UndefinedVariable', f'undefined variable {name}'))

    def set(self, name: str, value: Value):
        self.values[name] = value

    def __contains__(self, name: str) -> bool:
        return name in self.values

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __repr__(self) -> str:
        return f"Environment({self.values!r})"
