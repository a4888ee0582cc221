"""CLI entry point for the Teo interpreter.

Usage:
    python -m teolang [-v|-vv|-vvv|-vvvv] <program_file>
    python -m teolang [-v...] --emit-ast <program_file>
    python -m teolang [-v...] --ast <ast_json_file>

Options:
  -v                  Increase debug verbosity (can be repeated)
  --emit-ast          Parse the given .teo file and emit an AST JSON file
  --ast               Execute a previously emitted AST JSON file
  --output FILE       Write program output to FILE (lines are echoed to stdout)
  --max-call-depth N  Limit nested function calls

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero. The process exits with the status given
to a top-level return(...), 0 when the program runs to the end, and 1 on
parse or runtime errors.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from .ast_json import ast_to_obj, ast_from_obj
from .errors import ParseError
from .interpreter import DEFAULT_MAX_CALL_DEPTH, Interpreter
from .parser import parse_program


def read_source(path: Path) -> str:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def parse_or_exit(source: str):
    try:
        return parse_program(source)
    except ParseError as e:
        print(f"Parse error: {e}", file=sys.stderr)
        sys.exit(1)


def execute(ast_program, args) -> int:
    output = open(args.output, 'w', encoding='utf-8') if args.output else None
    try:
        interpreter = Interpreter(
            output=output,
            echo=output is not None,
            debug_level=args.v,
            max_call_depth=args.max_call_depth,
        )
        outcome = interpreter.run(ast_program)
    finally:
        if output is not None:
            output.close()
    if outcome.error is not None:
        print(f"Runtime error: {outcome.error}", file=sys.stderr)
    return outcome.exit_status


def main(argv: Optional[list] = None) -> None:
    parser = argparse.ArgumentParser(description="Teo language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='TEO_FILE', help='emit AST JSON for the given .teo file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('--output', metavar='FILE', help='write program output to FILE')
    parser.add_argument('--max-call-depth', type=int, default=DEFAULT_MAX_CALL_DEPTH,
                        help='maximum nesting of function calls')
    parser.add_argument('program', nargs='?', help='Teo program file (.teo) to execute')
    args = parser.parse_args(argv)

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        ast_program = parse_or_exit(read_source(program_file))
        try:
            text = json.dumps(ast_to_obj(ast_program), ensure_ascii=False, indent=2)
        except RecursionError:
            print(f"Error: {program_file} is nested too deeply to emit as JSON", file=sys.stderr)
            sys.exit(1)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            out.write(text)
        print(str(out_path))
        return

    # Execute from AST JSON
    if args.ast:
        ast_path = Path(args.ast)
        if not ast_path.exists():
            print(f"Error: file {ast_path} not found", file=sys.stderr)
            sys.exit(1)
        try:
            with open(ast_path, 'r', encoding='utf-8') as f:
                ast_program = ast_from_obj(json.load(f))
        except RecursionError:
            print(f"Error: invalid AST file {ast_path}: nested too deeply", file=sys.stderr)
            sys.exit(1)
        except (TypeError, ValueError, KeyError) as e:
            print(f"Error: invalid AST file {ast_path}: {e}", file=sys.stderr)
            sys.exit(1)
        sys.exit(execute(ast_program, args))

    # Default: execute source file
    if not args.program:
        parser.error('missing program file; or use --emit-ast/--ast')
    ast_program = parse_or_exit(read_source(Path(args.program)))
    sys.exit(execute(ast_program, args))


if __name__ == '__main__':
    main()
