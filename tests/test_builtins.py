import builtins
import io

import pytest

from teolang.interpreter import Interpreter, run_program
from teolang.parser import parse_program
from teolang.std.io import BasicIO


def run_with_input(source: str, text: str):
    out = io.StringIO()
    outcome = run_program(source, output=out, input_source=io.StringIO(text), echo=False)
    return outcome, out.getvalue()


def test_print_writes_to_sink_and_echoes_to_stdout(capsys):
    out = io.StringIO()
    run_program('print("hello", 5);', output=out)
    assert out.getvalue() == 'hello\n5\n'
    assert capsys.readouterr().out == 'hello\n5\n'


def test_print_without_echo(capsys):
    out = io.StringIO()
    run_program('print("quiet");', output=out, echo=False)
    assert out.getvalue() == 'quiet\n'
    assert capsys.readouterr().out == ''


def test_default_sink_is_stdout_without_duplicates(capsys):
    run_program('print("once");')
    assert capsys.readouterr().out == 'once\n'


def test_sink_is_flushed_when_run_ends():
    class Sink(io.StringIO):
        flushed = 0

        def flush(self):
            self.flushed += 1
            super().flush()

    sink = Sink()
    outcome = run_program('print(1); return(4); print(2);', output=sink, echo=False)
    assert sink.flushed >= 1
    assert sink.getvalue() == '1\n'
    assert outcome.exit_status == 4


def test_input_reads_one_line():
    _, out = run_with_input('a = input(); b = input(); print(b, a);', 'first\nsecond\n')
    assert out == 'second\nfirst\n'


def test_input_at_end_of_stream_is_empty():
    _, out = run_with_input('a = input(); print(a == "");', '')
    assert out == '1\n'


def test_input_uses_builtin_input_by_default(monkeypatch, capsys):
    monkeypatch.setattr(builtins, 'input', lambda prompt='': 'typed')
    run_program('print(input());')
    assert capsys.readouterr().out == 'typed\n'


def test_input_eof_from_console(monkeypatch, capsys):
    def raise_eof(prompt=''):
        raise EOFError

    monkeypatch.setattr(builtins, 'input', raise_eof)
    run_program('print(input() == "");')
    assert capsys.readouterr().out == '1\n'


def test_inputf_reads_one_line_per_field():
    _, out = run_with_input('x = inputf("%Number %String"); print(x[0] + 1, x[1]);', ' 41 \nsome words\n')
    assert out == '42\nsome words\n'


def test_inputf_rejects_bad_number():
    outcome, _ = run_with_input('x = inputf("%Number");', 'forty\n')
    assert outcome.error.name == 'InvalidInput'


def test_inputf_rejects_unknown_field():
    outcome, _ = run_with_input('x = inputf("%Number %Float");', '1\n2.5\n')
    assert outcome.error.name == 'InvalidFormat'


def test_inputf_format_must_be_text():
    outcome, _ = run_with_input('x = inputf(5);', '')
    assert outcome.error.name == 'TypeMismatch'


@pytest.mark.parametrize('text, delimiters, expected', [
    ('a1b2c', '1234', '[a, b, c]'),
    ('a,,b', ',', '[a, , b]'),
    ('x-y.z', '.-', '[x, y, z]'),
    ('abc', '', '[abc]'),
    ('', ',', '[]'),
])
def test_split(text, delimiters, expected):
    out = io.StringIO()
    run_program(f'print(split("{text}", "{delimiters}"));', output=out, echo=False)
    assert out.getvalue() == expected + '\n'


def test_split_requires_strings():
    out = io.StringIO()
    outcome = run_program('x = split(12, ",");', output=out, echo=False)
    assert outcome.error.name == 'TypeMismatch'


def test_builtins_cannot_be_shadowed_by_definitions():
    interp = Interpreter(output=io.StringIO(), echo=False)
    outcome = interp.run(parse_program('def split(a: String, b: String) { };'))
    assert outcome.error.name == 'DuplicateFunctionDefinition'
    assert 'split' not in interp.functions


def test_basic_io_strips_line_endings():
    console = BasicIO(output=io.StringIO(), input_source=io.StringIO('one\r\ntwo'), echo=False)
    assert console.read_line() == 'one'
    assert console.read_line() == 'two'
    assert console.read_line() == ''
