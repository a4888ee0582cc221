from .basic_io import BasicIO
from teolang.builtin_function import BuiltinFunction
from teolang.errors import ErrorVal, TeoError
from teolang.types import ArrayVal, IntVal, StrVal, as_text, to_string
from typing import Any, Dict, List

def populate_io_builtins(basic_io: BasicIO) -> Dict[str, BuiltinFunction]:
    def std_print(args: List[Any]) -> Any:
        for arg in args:
            basic_io.write_line(to_string(arg))
        return None

    def std_input(args: List[Any]) -> Any:
        return StrVal(basic_io.read_line())

    def std_inputf(args: List[Any]) -> Any:
        fmt = as_text(args[0], 'inputf format')
        fields = fmt.split()
        for field in fields:
            if field not in ('%Number', '%String'):
                raise TeoError(ErrorVal('InvalidFormat', f'inputf: unknown field {field!r} in format {fmt!r}'))
        items = []
        for field in fields:
            line = basic_io.read_line()
            if field == '%Number':
                try:
                    items.append(IntVal(int(line.strip())))
                except ValueError:
                    raise TeoError(ErrorVal('InvalidInput', f'inputf: cannot read {line!r} as Number'))
            else:
                items.append(StrVal(line))
        return ArrayVal(items)

    return {
        'print': BuiltinFunction('print', None, std_print),
        'input': BuiltinFunction('input', 0, std_input),
        'inputf': BuiltinFunction('inputf', 1, std_inputf),
    }
