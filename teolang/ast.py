"""Abstract Syntax Tree (AST) definitions for the Teo language.

The AST classes defined in this module represent the syntactic structure
of parsed Teo programs. Nodes are created once by the parser and never
modified afterwards; a function body is executed many times against the
same node objects.

Built-in operations such as ``print(...)`` and ``return(...)`` have no
dedicated node: they are ordinary `FunctionCall` nodes that the
interpreter resolves against its built-in table.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional


@dataclass
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass
class Program(Node):
    body: List[Node]


@dataclass
class IntLiteral(Node):
    value: int


@dataclass
class StringLiteral(Node):
    text: str


@dataclass
class ArrayLiteral(Node):
    elements: List[Node]


@dataclass
class Identifier(Node):
    name: str


@dataclass
class BinaryOp(Node):
    op: str  # one of + - * / < > <= >= ==
    left: Node
    right: Node


@dataclass
class IndexAccess(Node):
    target: Node
    index: Node


@dataclass
class IndexAssign(Node):
    target: Node
    index: Node
    value: Node


@dataclass
class Assign(Node):
    name: str
    expr: Node


@dataclass
class Param:
    name: str
    type_tag: str  # advisory, only reported in messages


@dataclass
class FunctionDefinition(Node):
    name: str
    params: List[Param]
    body: List[Node]

    def signature(self) -> str:
        params = ', '.join(f"{p.name}: {p.type_tag}" for p in self.params)
        return f"{self.name}({params})"


@dataclass
class FunctionCall(Node):
    name: str
    args: List[Node]


@dataclass
class IfStmt(Node):
    condition: Node
    then_body: List[Node]
    else_body: Optional[List[Node]] = None


@dataclass
class ForStmt(Node):
    var: str
    iterable: Node
    body: List[Node]


@dataclass
class ExprStmt(Node):
    expr: Node
