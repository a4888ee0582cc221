import builtins
import sys
from typing import Optional, TextIO


class BasicIO:
    """Line-oriented console for a Teo run.

    Program output goes to `output` (the current ``sys.stdout`` when
    None). With `echo` on, every line written to a caller-supplied sink
    is also printed to standard output. Input comes from `input_source`,
    or from the builtin ``input()`` when None.
    """
    def __init__(self, output: Optional[TextIO] = None, input_source: Optional[TextIO] = None, echo: bool = True):
        self.output = output
        self.input_source = input_source
        self.echo = echo

    @property
    def sink(self) -> TextIO:
        return self.output if self.output is not None else sys.stdout

    def write_line(self, text: str):
        sink = self.sink
        sink.write(text + '\n')
        if self.echo and sink is not sys.stdout:
            print(text)

    def read_line(self) -> str:
        if self.input_source is None:
            try:
                return builtins.input()
            except EOFError:
                return ''
        line = self.input_source.readline()
        return line.rstrip('\r\n')

    def flush(self):
        flush = getattr(self.sink, 'flush', None)
        if flush is not None:
            flush()
        if self.echo:
            sys.stdout.flush()
