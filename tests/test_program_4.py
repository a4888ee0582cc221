import builtins
from pathlib import Path
from teolang.interpreter import parse_program, Interpreter
from teolang.outcome import OutcomeKind

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_4_full_tour(monkeypatch, capsys):
    """Test program 4: every language feature in one script.

    The script reads four lines: one discarded by input(), a number and
    a string through inputf, and a line that is split on digits. It ends
    with return(0), so the final print never runs.
    """
    lines = iter(['ignored', '42', 'hello', 'a1b2c'])
    monkeypatch.setattr(builtins, 'input', lambda prompt='': next(lines))
    with open(EXAMPLES / 'program_4.teo', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    outcome = interp.run(ast)
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == [
        '14', '9', '3', '1',
        'Should get called after here',
        '1', '7', '42', 'hello',
        'a', 'b', 'c', '3',
        'done splitting', 'a', '81',
    ]
    assert outcome.kind is OutcomeKind.RETURNED
    assert outcome.exit_status == 0
