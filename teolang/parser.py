"""Parser for the Teo language.

Source text is fed into a Lark LALR parser configured with the Teo
grammar below. The resulting parse tree is transformed into an abstract
syntax tree (AST) using a custom transformer.

Every statement, including ``def``/``if``/``for`` blocks, is terminated
by a semicolon. Built-in operations (``print``, ``return``, ``input``,
``inputf``, ``split``) are not keywords; they parse as ordinary calls.

The `parse_program` function is the public entry point and returns a
`Program` AST node representing the entire source. Lark exceptions are
translated into `ParseError` so callers only ever see one error type.
"""

from __future__ import annotations

from typing import List
import ast as py_ast

from lark import Lark, Transformer, v_args
from lark.exceptions import (
    UnexpectedCharacters, UnexpectedInput, UnexpectedToken, VisitError,
)

from .ast import (
    Program, IntLiteral, StringLiteral, ArrayLiteral, Identifier, BinaryOp,
    IndexAccess, IndexAssign, Assign, Param, FunctionDefinition,
    FunctionCall, IfStmt, ForStmt, ExprStmt, Node
)
from .errors import ParseError


TEO_GRAMMAR = r"""
    start: (_statement? ";")*

    // Statements
    _statement: func_def
              | if_stmt
              | for_stmt
              | assign
              | expr_stmt

    func_def: "def" NAME "(" [param ("," param)*] ")" block
    param: NAME ":" NAME
    block: "{" (_statement? ";")* "}"

    if_stmt: "if" "(" expression ")" block ["else" block]
    for_stmt: "for" NAME "in" expression block

    assign: postfix "=" expression
    expr_stmt: expression

    // Expressions, loosest binding first
    ?expression: comparison

    ?comparison: sum
               | comparison "<" sum   -> lt
               | comparison ">" sum   -> gt
               | comparison "<=" sum  -> le
               | comparison ">=" sum  -> ge
               | comparison "==" sum  -> eq

    ?sum: product
        | sum "+" product  -> add
        | sum "-" product  -> sub

    ?product: postfix
            | product "*" postfix  -> mul
            | product "/" postfix  -> div

    ?postfix: atom
            | postfix "[" expression "]"  -> index

    ?atom: INT                        -> int_lit
         | STRING                     -> string_lit
         | "true"                     -> true_lit
         | "false"                    -> false_lit
         | NAME                       -> var
         | NAME "(" [_arguments] ")"  -> call
         | "[" [_arguments] "]"       -> array_lit
         | "(" expression ")"

    _arguments: expression ("," expression)*

    // Tokens
    %import common.INT
    %import common.CNAME -> NAME
    %import common.ESCAPED_STRING -> STRING
    %import common.WS
    %ignore WS

    // Comments
    COMMENT: /#[^\n]*/ | /\/\/[^\n]*/
    %ignore COMMENT
"""


TEO_PARSER = Lark(
    TEO_GRAMMAR,
    parser='lalr',
    propagate_positions=True,
    maybe_placeholders=False,
)


class ASTTransformer(Transformer):
    """Transforms the raw parse tree into an AST."""

    def start(self, items):
        return Program(body=list(items))

    def block(self, items):
        return list(items)

    def param(self, items):
        return Param(name=str(items[0]), type_tag=str(items[1]))

    def func_def(self, items):
        # items: NAME, param*, block
        name = str(items[0])
        params: List[Param] = list(items[1:-1])
        body = items[-1]
        return FunctionDefinition(name=name, params=params, body=body)

    def if_stmt(self, items):
        condition = items[0]
        then_body = items[1]
        else_body = items[2] if len(items) > 2 else None
        return IfStmt(condition, then_body, else_body)

    def for_stmt(self, items):
        return ForStmt(var=str(items[0]), iterable=items[1], body=items[2])

    @v_args(meta=True)
    def assign(self, meta, items):
        target, value = items
        if isinstance(target, Identifier):
            return Assign(name=target.name, expr=value)
        if isinstance(target, IndexAccess):
            return IndexAssign(target=target.target, index=target.index, value=value)
        raise ParseError('invalid assignment target', getattr(meta, 'line', None), getattr(meta, 'column', None))

    def expr_stmt(self, items):
        expr = items[0]
        # a bare call is a statement in its own right
        if isinstance(expr, FunctionCall):
            return expr
        return ExprStmt(expr)

    # Expressions
    def lt(self, items):
        return BinaryOp('<', items[0], items[1])

    def gt(self, items):
        return BinaryOp('>', items[0], items[1])

    def le(self, items):
        return BinaryOp('<=', items[0], items[1])

    def ge(self, items):
        return BinaryOp('>=', items[0], items[1])

    def eq(self, items):
        return BinaryOp('==', items[0], items[1])

    def add(self, items):
        return BinaryOp('+', items[0], items[1])

    def sub(self, items):
        return BinaryOp('-', items[0], items[1])

    def mul(self, items):
        return BinaryOp('*', items[0], items[1])

    def div(self, items):
        return BinaryOp('/', items[0], items[1])

    def index(self, items):
        return IndexAccess(target=items[0], index=items[1])

    def int_lit(self, items):
        return IntLiteral(int(items[0]))

    def string_lit(self, items):
        token = items[0]
        try:
            value = py_ast.literal_eval(str(token))
        except (SyntaxError, ValueError):
            raise ParseError(f'invalid string literal {token}', token.line, token.column)
        return StringLiteral(value)

    def true_lit(self, items):
        return IntLiteral(1)

    def false_lit(self, items):
        return IntLiteral(0)

    def var(self, items):
        return Identifier(str(items[0]))

    def call(self, items):
        name = str(items[0])
        return FunctionCall(name=name, args=list(items[1:]))

    def array_lit(self, items):
        return ArrayLiteral(list(items))


def _translate(error: UnexpectedInput) -> ParseError:
    if isinstance(error, UnexpectedToken):
        token = error.token
        if token.type == '$END':
            return ParseError('unexpected end of input', error.line, error.column)
        expected = ', '.join(sorted(error.expected))
        return ParseError(f'unexpected token {token.value!r}, expected one of {expected}', error.line, error.column)
    if isinstance(error, UnexpectedCharacters):
        return ParseError(f'unexpected character {error.char!r}', error.line, error.column)
    return ParseError('unexpected end of input', getattr(error, 'line', None), getattr(error, 'column', None))


def parse_program(source: str) -> Program:
    """Parse Teo source code into an AST Program.

    Parsing stops at the first structural error, which is raised as a
    `ParseError`; no partial AST is produced. Source nested deeper than
    the host recursion limit allows is rejected the same way.
    """
    try:
        tree = TEO_PARSER.parse(source)
    except UnexpectedInput as e:
        raise _translate(e) from None
    except RecursionError:
        raise ParseError('expression nested too deeply') from None
    try:
        return ASTTransformer().transform(tree)
    except RecursionError:
        raise ParseError('expression nested too deeply') from None
    except VisitError as e:
        if isinstance(e.orig_exc, ParseError):
            raise e.orig_exc from None
        if isinstance(e.orig_exc, RecursionError):
            raise ParseError('expression nested too deeply') from None
        raise


def parse_statements(source: str) -> List[Node]:
    """Parse source and return its top-level statements in order."""
    return parse_program(source).body
