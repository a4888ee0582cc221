"""JSON serialization/deserialization for Teo AST.

This module converts between Teo AST dataclasses and plain Python
dict/list structures suitable for JSON encoding, so a parsed program
can be stored with ``--emit-ast`` and executed later with ``--ast``.
"""

from __future__ import annotations

from typing import Any

from .ast import (
    Program,
    IntLiteral,
    StringLiteral,
    ArrayLiteral,
    Identifier,
    BinaryOp,
    IndexAccess,
    IndexAssign,
    Assign,
    Param,
    FunctionDefinition,
    FunctionCall,
    IfStmt,
    ForStmt,
    ExprStmt,
)


def _body_to_obj(body: Any) -> Any:
    if body is None:
        return None
    return [ast_to_obj(s) for s in body]


def _body_from_obj(obj: Any) -> Any:
    if obj is None:
        return None
    return [ast_from_obj(s) for s in obj]


def ast_to_obj(node: Any) -> Any:
    if isinstance(node, Program):
        return {"type": "Program", "body": _body_to_obj(node.body)}
    if isinstance(node, IntLiteral):
        return {"type": "IntLiteral", "value": node.value}
    if isinstance(node, StringLiteral):
        return {"type": "StringLiteral", "text": node.text}
    if isinstance(node, ArrayLiteral):
        return {"type": "ArrayLiteral", "elements": [ast_to_obj(e) for e in node.elements]}
    if isinstance(node, Identifier):
        return {"type": "Identifier", "name": node.name}
    if isinstance(node, BinaryOp):
        return {"type": "BinaryOp", "op": node.op, "left": ast_to_obj(node.left), "right": ast_to_obj(node.right)}
    if isinstance(node, IndexAccess):
        return {"type": "IndexAccess", "target": ast_to_obj(node.target), "index": ast_to_obj(node.index)}
    if isinstance(node, IndexAssign):
        return {
            "type": "IndexAssign",
            "target": ast_to_obj(node.target),
            "index": ast_to_obj(node.index),
            "value": ast_to_obj(node.value),
        }
    if isinstance(node, Assign):
        return {"type": "Assign", "name": node.name, "expr": ast_to_obj(node.expr)}
    if isinstance(node, Param):
        return {"type": "Param", "name": node.name, "type_tag": node.type_tag}
    if isinstance(node, FunctionDefinition):
        return {
            "type": "FunctionDefinition",
            "name": node.name,
            "params": [ast_to_obj(p) for p in node.params],
            "body": _body_to_obj(node.body),
        }
    if isinstance(node, FunctionCall):
        return {"type": "FunctionCall", "name": node.name, "args": [ast_to_obj(a) for a in node.args]}
    if isinstance(node, IfStmt):
        return {
            "type": "IfStmt",
            "condition": ast_to_obj(node.condition),
            "then_body": _body_to_obj(node.then_body),
            "else_body": _body_to_obj(node.else_body),
        }
    if isinstance(node, ForStmt):
        return {
            "type": "ForStmt",
            "var": node.var,
            "iterable": ast_to_obj(node.iterable),
            "body": _body_to_obj(node.body),
        }
    if isinstance(node, ExprStmt):
        return {"type": "ExprStmt", "expr": ast_to_obj(node.expr)}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    if t == "Program":
        return Program(body=_body_from_obj(obj["body"]))
    if t == "IntLiteral":
        return IntLiteral(value=int(obj["value"]))
    if t == "StringLiteral":
        return StringLiteral(text=obj["text"])
    if t == "ArrayLiteral":
        return ArrayLiteral(elements=[ast_from_obj(e) for e in obj["elements"]])
    if t == "Identifier":
        return Identifier(name=obj["name"])
    if t == "BinaryOp":
        return BinaryOp(op=obj["op"], left=ast_from_obj(obj["left"]), right=ast_from_obj(obj["right"]))
    if t == "IndexAccess":
        return IndexAccess(target=ast_from_obj(obj["target"]), index=ast_from_obj(obj["index"]))
    if t == "IndexAssign":
        return IndexAssign(
            target=ast_from_obj(obj["target"]),
            index=ast_from_obj(obj["index"]),
            value=ast_from_obj(obj["value"]),
        )
    if t == "Assign":
        return Assign(name=obj["name"], expr=ast_from_obj(obj["expr"]))
    if t == "Param":
        return Param(name=obj["name"], type_tag=obj["type_tag"])
    if t == "FunctionDefinition":
        return FunctionDefinition(
            name=obj["name"],
            params=[ast_from_obj(p) for p in obj["params"]],
            body=_body_from_obj(obj["body"]),
        )
    if t == "FunctionCall":
        return FunctionCall(name=obj["name"], args=[ast_from_obj(a) for a in obj["args"]])
    if t == "IfStmt":
        return IfStmt(
            condition=ast_from_obj(obj["condition"]),
            then_body=_body_from_obj(obj["then_body"]),
            else_body=_body_from_obj(obj.get("else_body")),
        )
    if t == "ForStmt":
        return ForStmt(
            var=obj["var"],
            iterable=ast_from_obj(obj["iterable"]),
            body=_body_from_obj(obj["body"]),
        )
    if t == "ExprStmt":
        return ExprStmt(expr=ast_from_obj(obj["expr"]))

    raise ValueError(f"Unknown AST node type: {t}")
