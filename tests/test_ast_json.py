import io
import json
from pathlib import Path

import pytest

from teolang.ast_json import ast_from_obj, ast_to_obj
from teolang.interpreter import Interpreter
from teolang.parser import parse_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_example_program_survives_json():
    with open(EXAMPLES / 'program_4.teo', 'r', encoding='utf-8') as f:
        program = parse_program(f.read())
    encoded = json.dumps(ast_to_obj(program))
    assert ast_from_obj(json.loads(encoded)) == program


def test_loaded_ast_runs_like_parsed_source():
    source = 'def f(n: Number) { if (n < 2) { return(n); } else { return(f(n - 1) + f(n - 2)); }; }; print(f(10));'
    obj = json.loads(json.dumps(ast_to_obj(parse_program(source))))
    out = io.StringIO()
    Interpreter(output=out, echo=False).run(ast_from_obj(obj))
    assert out.getvalue() == '55\n'


def test_node_shape():
    obj = ast_to_obj(parse_program('x[0] = "a";'))
    assert obj == {
        'type': 'Program',
        'body': [{
            'type': 'IndexAssign',
            'target': {'type': 'Identifier', 'name': 'x'},
            'index': {'type': 'IntLiteral', 'value': 0},
            'value': {'type': 'StringLiteral', 'text': 'a'},
        }],
    }


def test_unknown_node_type():
    with pytest.raises(ValueError):
        ast_from_obj({'type': 'WhileStmt'})
    with pytest.raises(TypeError):
        ast_from_obj(['not', 'a', 'node'])
    with pytest.raises(TypeError):
        ast_to_obj(object())
