"""Tree-walking interpreter for the Teo language.

The interpreter executes a parsed `Program` statement by statement
against an `Environment` and a registry of user-defined functions.
Each function call runs its body in a brand-new environment that holds
only the bound parameters, with a copy of the caller's registry.

``return(v)`` ends the innermost run: at the top level that is the whole
program and ``v`` becomes the exit status; inside a function body it
ends the call and ``v`` becomes the call's value. Runtime errors are
fatal and are reported through the `Outcome` returned by `run`.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional, TextIO, Union

from .ast import (
    Program, IntLiteral, StringLiteral, ArrayLiteral, Identifier, BinaryOp,
    IndexAccess, IndexAssign, Assign, FunctionDefinition, FunctionCall,
    IfStmt, ForStmt, ExprStmt, Node
)
from .builtin_function import BuiltinFunction
from .environment import Environment
from .errors import ErrorVal, ReturnSignal, TeoError
from .outcome import Outcome
from .parser import parse_program
from .std.io import BasicIO, populate_io_builtins
from .types import (
    Value, IntVal, StrVal, ArrayVal, as_int, as_text, copy_value, is_truthy,
    to_exit_code, to_string, truncating_div, type_name,
)

DEFAULT_MAX_CALL_DEPTH = 64

FunctionRegistry = Dict[str, FunctionDefinition]


class Interpreter:
    """Core interpreter that executes Teo AST."""
    def __init__(self, output: Optional[TextIO] = None, input_source: Optional[TextIO] = None,
                 echo: bool = True, debug_level: int = 0, debug_file: str = 'debug.txt',
                 max_call_depth: int = DEFAULT_MAX_CALL_DEPTH):
        self.io = BasicIO(output, input_source, echo)
        self.global_env = Environment()
        self.functions: FunctionRegistry = {}
        self.builtins: Dict[str, BuiltinFunction] = {}
        self.debug_level = debug_level
        self.debug_file = debug_file
        self.debug_fp = None
        self.max_call_depth = max_call_depth
        self.call_depth = 0
        self.load_standard_module()

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    def load_standard_module(self):
        def std_return(args: List[Any]) -> Any:
            raise ReturnSignal(to_exit_code(args[0]))

        def std_split(args: List[Any]) -> Any:
            text = as_text(args[0], 'split text')
            delimiters = as_text(args[1], 'split delimiters')
            if not delimiters:
                return ArrayVal([StrVal(text)])
            pieces = re.split('[' + re.escape(delimiters) + ']', text)
            return ArrayVal([StrVal(p) for p in pieces])

        self.builtins.update(populate_io_builtins(self.io))
        self.builtins['return'] = BuiltinFunction('return', 1, std_return)
        self.builtins['split'] = BuiltinFunction('split', 2, std_split)

    # Public API
    def run(self, program: Union[Program, List[Node]], env: Optional[Environment] = None) -> Outcome:
        """Execute a program and report how it ended.

        Runtime errors never escape this method; they come back as a
        failed `Outcome`, and so does an `OSError` from the debug file or
        the output sink. The output sink is flushed in every case.
        """
        statements = program.body if isinstance(program, Program) else program
        if env is None:
            env = self.global_env
        self.call_depth = 0
        outcome: Optional[Outcome] = None
        try:
            if self.debug_level > 0 and self.debug_file:
                self.debug_fp = open(self.debug_file, 'w', encoding='utf-8')
            self.debug(f"run {len(statements)} statements")
            self.execute_block(statements, env, self.functions)
            outcome = Outcome.completed(env)
        except ReturnSignal as signal:
            outcome = Outcome.returned(env, signal.code)
        except TeoError as ex:
            outcome = Outcome.failed(env, ex)
        except RecursionError:
            outcome = Outcome.failed(env, TeoError(ErrorVal('RecursionLimitExceeded', 'host recursion limit reached')))
        except OSError as ex:
            outcome = Outcome.failed(env, TeoError(ErrorVal('IOError', str(ex))))
        finally:
            self.io.flush()
            if outcome is not None:
                message = f"outcome {outcome.kind.value} (exit status {outcome.exit_status})"
                if outcome.error is not None:
                    message += f": {outcome.error}"
                self.debug(message)
            if self.debug_fp:
                self.debug_fp.close()
                self.debug_fp = None
        return outcome

    def execute_block(self, statements: List[Node], env: Environment, functions: FunctionRegistry):
        for stmt in statements:
            self.execute(stmt, env, functions)

    def execute(self, node: Node, env: Environment, functions: FunctionRegistry):
        if self.debug_level >= 4:
            self.debug(f"execute {type(node).__name__}")
        if isinstance(node, Assign):
            value = copy_value(self.evaluate(node.expr, env, functions))
            env.set(node.name, value)
            if self.debug_level >= 2:
                self.debug(f"assign {node.name}: {type_name(value)} = {to_string(value)}")
            return
        if isinstance(node, IndexAssign):
            container = self.evaluate(node.target, env, functions)
            index = self.evaluate(node.index, env, functions)
            value = copy_value(self.evaluate(node.value, env, functions))
            if not isinstance(container, ArrayVal):
                raise TeoError(ErrorVal('TypeMismatch', f'cannot assign to index on type {type_name(container)}'))
            idx = self.check_index(container.items, index)
            container.items[idx] = value
            return
        if isinstance(node, FunctionDefinition):
            if node.name in self.builtins:
                raise TeoError(ErrorVal('DuplicateFunctionDefinition', f'{node.name} is a built-in function'))
            if node.name in functions:
                raise TeoError(ErrorVal('DuplicateFunctionDefinition', f'function {node.name} is already defined'))
            functions[node.name] = node
            if self.debug_level >= 2:
                self.debug(f"define function {node.signature()}")
            return
        if isinstance(node, FunctionCall):
            # the call's value, if any, is discarded
            self.call_function(node, env, functions)
            return
        if isinstance(node, IfStmt):
            cond = self.evaluate(node.condition, env, functions)
            truthy = is_truthy(cond)
            if self.debug_level >= 3:
                self.debug(f"if condition {to_string(cond)} -> {truthy}")
            if truthy:
                self.execute_block(node.then_body, env, functions)
            elif node.else_body is not None:
                self.execute_block(node.else_body, env, functions)
            return
        if isinstance(node, ForStmt):
            iterable = self.evaluate(node.iterable, env, functions)
            if isinstance(iterable, ArrayVal):
                items: List[Value] = list(iterable.items)
            elif isinstance(iterable, StrVal):
                items = [StrVal(ch) for ch in iterable.text]
            else:
                raise TeoError(ErrorVal('TypeMismatch', f'cannot iterate over {type_name(iterable)}'))
            for item in items:
                env.set(node.var, copy_value(item))
                self.execute_block(node.body, env, functions)
            return
        if isinstance(node, ExprStmt):
            self.evaluate(node.expr, env, functions)
            return
        raise TeoError(ErrorVal('UnhandledNodeKind', f'cannot execute {type(node).__name__}'))

    def evaluate(self, node: Node, env: Environment, functions: FunctionRegistry) -> Value:
        if isinstance(node, IntLiteral):
            return IntVal(node.value)
        if isinstance(node, StringLiteral):
            return StrVal(node.text)
        if isinstance(node, ArrayLiteral):
            return ArrayVal([copy_value(self.evaluate(el, env, functions)) for el in node.elements])
        if isinstance(node, Identifier):
            return env.get(node.name)
        if isinstance(node, BinaryOp):
            left = self.evaluate(node.left, env, functions)
            right = self.evaluate(node.right, env, functions)
            return self.apply_binary_op(node.op, left, right)
        if isinstance(node, IndexAccess):
            target = self.evaluate(node.target, env, functions)
            index = self.evaluate(node.index, env, functions)
            if isinstance(target, ArrayVal):
                return target.items[self.check_index(target.items, index)]
            if isinstance(target, StrVal):
                return StrVal(target.text[self.check_index(target.text, index)])
            raise TeoError(ErrorVal('TypeMismatch', f'cannot index type {type_name(target)}'))
        if isinstance(node, FunctionCall):
            result = self.call_function(node, env, functions)
            if result is None:
                raise TeoError(ErrorVal('MissingReturnValue', f'{node.name}(...) produced no value'))
            return result
        raise TeoError(ErrorVal('UnhandledNodeKind', f'cannot evaluate {type(node).__name__}'))

    def check_index(self, items, index: Value) -> int:
        idx = as_int(index, 'index')
        if idx < 0 or idx >= len(items):
            raise TeoError(ErrorVal('IndexOutOfBounds', f'index {idx} out of range for length {len(items)}'))
        return idx

    def call_function(self, node: FunctionCall, env: Environment, functions: FunctionRegistry) -> Optional[Value]:
        builtin = self.builtins.get(node.name)
        if builtin is not None:
            if builtin.arity is not None and len(node.args) != builtin.arity:
                raise TeoError(ErrorVal('ArityMismatch', f"{node.name} expects {builtin.arity} arguments, got {len(node.args)}"))
            args = [self.evaluate(arg, env, functions) for arg in node.args]
            return builtin.fn(args)
        func = functions.get(node.name)
        if func is None:
            raise TeoError(ErrorVal('UndefinedFunction', f'undefined function {node.name}'))
        if len(node.args) != len(func.params):
            raise TeoError(ErrorVal('ArityMismatch', f"{func.signature()} expects {len(func.params)} arguments, got {len(node.args)}"))
        # arguments are evaluated in the caller's environment before binding
        args = [self.evaluate(arg, env, functions) for arg in node.args]
        if self.call_depth >= self.max_call_depth:
            raise TeoError(ErrorVal('RecursionLimitExceeded', f'call depth exceeded {self.max_call_depth} in {node.name}'))
        call_env = Environment()
        for param, arg in zip(func.params, args):
            call_env.set(param.name, copy_value(arg))
        if self.debug_level >= 3:
            self.debug(f"call {node.name}({', '.join(to_string(a) for a in args)})")
        self.call_depth += 1
        try:
            self.execute_block(func.body, call_env, dict(functions))
        except ReturnSignal as signal:
            return IntVal(signal.code)
        finally:
            self.call_depth -= 1
        return None

    def apply_binary_op(self, op: str, a: Value, b: Value) -> Value:
        if op == '==':
            return IntVal(1 if a == b else 0)
        left = as_int(a, f'operator {op}')
        right = as_int(b, f'operator {op}')
        if op == '+':
            return IntVal(left + right)
        if op == '-':
            return IntVal(left - right)
        if op == '*':
            return IntVal(left * right)
        if op == '/':
            if right == 0:
                raise TeoError(ErrorVal('DivisionByZero', 'division by zero'))
            return IntVal(truncating_div(left, right))
        if op == '<': return IntVal(1 if left < right else 0)
        if op == '>': return IntVal(1 if left > right else 0)
        if op == '<=': return IntVal(1 if left <= right else 0)
        if op == '>=': return IntVal(1 if left >= right else 0)
        raise TeoError(ErrorVal('UnhandledNodeKind', f'unknown operator {op}'))


def run_program(source: str, **options: Any) -> Outcome:
    """Convenience function to parse and run a Teo program from source string.

    Keyword options are passed to `Interpreter`. A `ParseError` is raised
    before anything executes if the source is malformed.
    """
    ast_program = parse_program(source)
    interpreter = Interpreter(**options)
    return interpreter.run(ast_program)
