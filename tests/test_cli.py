import json

import pytest

from teolang.__main__ import main


def write(tmp_path, name: str, source: str):
    path = tmp_path / name
    path.write_text(source, encoding='utf-8')
    return path


def test_runs_program_and_exits_with_return_status(tmp_path, capsys):
    program = write(tmp_path, 'prog.teo', 'print("hi"); return(7); print("no");')
    with pytest.raises(SystemExit) as info:
        main([str(program)])
    assert info.value.code == 7
    assert capsys.readouterr().out == 'hi\n'


def test_completed_program_exits_zero(tmp_path, capsys):
    program = write(tmp_path, 'prog.teo', 'print(1 + 1);')
    with pytest.raises(SystemExit) as info:
        main([str(program)])
    assert info.value.code == 0
    assert capsys.readouterr().out == '2\n'


def test_runtime_error(tmp_path, capsys):
    program = write(tmp_path, 'prog.teo', 'print(1 / 0);')
    with pytest.raises(SystemExit) as info:
        main([str(program)])
    assert info.value.code == 1
    assert 'Runtime error: DivisionByZero' in capsys.readouterr().err


def test_parse_error(tmp_path, capsys):
    program = write(tmp_path, 'prog.teo', 'print(1')
    with pytest.raises(SystemExit) as info:
        main([str(program)])
    assert info.value.code == 1
    assert 'Parse error:' in capsys.readouterr().err


def test_missing_file(tmp_path, capsys):
    with pytest.raises(SystemExit) as info:
        main([str(tmp_path / 'absent.teo')])
    assert info.value.code == 1
    assert 'not found' in capsys.readouterr().err


def test_output_file_and_echo(tmp_path, capsys):
    program = write(tmp_path, 'prog.teo', 'print("both");')
    target = tmp_path / 'out.txt'
    with pytest.raises(SystemExit):
        main(['--output', str(target), str(program)])
    assert target.read_text(encoding='utf-8') == 'both\n'
    assert capsys.readouterr().out == 'both\n'


def test_emit_and_run_ast(tmp_path, capsys):
    program = write(tmp_path, 'prog.teo', 'x = [1, 2]; print(x[1]);')
    main(['--emit-ast', str(program)])
    ast_path = tmp_path / 'prog.teo.ast.json'
    assert capsys.readouterr().out.strip() == str(ast_path)
    assert json.loads(ast_path.read_text(encoding='utf-8'))['type'] == 'Program'
    with pytest.raises(SystemExit) as info:
        main(['--ast', str(ast_path)])
    assert info.value.code == 0
    assert capsys.readouterr().out == '2\n'


def test_max_call_depth_flag(tmp_path, capsys):
    program = write(tmp_path, 'prog.teo', 'def f(n: Number) { f(n + 1); }; f(0);')
    with pytest.raises(SystemExit) as info:
        main(['--max-call-depth', '5', str(program)])
    assert info.value.code == 1
    assert 'RecursionLimitExceeded' in capsys.readouterr().err


def test_verbose_writes_debug_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    program = write(tmp_path, 'prog.teo', 'x = 1;')
    with pytest.raises(SystemExit):
        main(['-vv', str(program)])
    assert 'assign x: Int = 1' in (tmp_path / 'debug.txt').read_text(encoding='utf-8')


def test_deeply_nested_source_is_a_parse_error(tmp_path, capsys):
    program = write(tmp_path, 'prog.teo', 'print(' + '+'.join(['1'] * 1000) + ');')
    with pytest.raises(SystemExit) as info:
        main([str(program)])
    assert info.value.code == 1
    assert 'Parse error: expression nested too deeply' in capsys.readouterr().err
