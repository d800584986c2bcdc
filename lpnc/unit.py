from lpnc.data import *
from rich.console import Console
from typing import cast
import os

def fix_message(message: str) -> str:
  return message.replace('[', '\\[')

def print_error(message: str, loc: Loc | None) -> None:
  console = Console(stderr=True, emoji=False, highlight=False, soft_wrap=True)
  prefix = str(loc) if loc else 'error'

  console.print(
    f'[b][red]{fix_message(prefix)}[/red][/b]: {fix_message(message)}'
  )

class TranslationUnit:
  '''
  owns everything a single compilation needs, so that
  two units never share lexer or instruction state
  '''

  def __init__(self, source: str, filepath: str = '<source>') -> None:
    self.console = Console(
      emoji=False, highlight=False, markup=False, soft_wrap=True
    )

    self.filepath: str = filepath
    self.source: str = source
    self.instrs: InstrList = InstrList()
    self.trace: list[str] = []
    self.asm: str | None = None

  @staticmethod
  def from_file(filepath: str) -> 'TranslationUnit':
    try:
      with open(filepath, 'r', encoding='utf-8') as f:
        source: str = f.read()
    except OSError as e:
      raise SourceError(f'cannot read "{filepath}": {e.strerror or e}', None) from e
    except UnicodeDecodeError as e:
      raise SourceError(
        f'cannot read "{filepath}": byte 0x{e.object[e.start]:02x} '
        f'at offset {e.start} is not valid utf-8',
        None
      ) from e

    return TranslationUnit(source, filepath)

  def trace_line(self, line: str) -> None:
    self.trace.append(line)
    self.console.print(line)

  def comment(self, text: str) -> None:
    self.trace_line(f'; {text}')

  def dparse(self) -> None:
    from lpnc.dparser import DParser

    d = DParser(self)
    d.program()

  def asmgen(self) -> None:
    from lpnc.asmgen import AsmGen

    g = AsmGen(self)
    self.asm = g.gen_whole_unit()

  def compile(self, output_path: str) -> None:
    if self.asm is None:
      raise CompilationException('nothing to write, the unit was not lowered', None)

    from tempfile import NamedTemporaryFile

    # the target only ever appears complete
    directory: str = os.path.dirname(os.path.abspath(output_path))
    tmp_path: str | None = None

    try:
      with NamedTemporaryFile(
        'w', encoding='utf-8', dir=directory,
        prefix='.lpnc-', suffix='.tmp', delete=False
      ) as f:
        tmp_path = f.name
        f.write(self.asm)

      os.replace(tmp_path, output_path)
    except OSError as e:
      if tmp_path is not None and os.path.exists(tmp_path):
        os.remove(tmp_path)

      raise SourceError(f'cannot write "{output_path}": {e.strerror or e}', None) from e

  def dump_tokens(self) -> None:
    from lpnc.lexer import Lexer

    self.console.print('\n-- TOKENS --\n')

    for token in Lexer(self.source, self.filepath).tokens():
      self.console.print(f'  {token.loc}: {token}')

  def dump_instrs(self) -> None:
    self.console.print('\n-- INSTRS --')
    self.console.print(repr(self.instrs))

def compile_text(source: str, filepath: str = '<source>') -> str:
  t = TranslationUnit(source, filepath)
  t.dparse()
  t.asmgen()

  return cast(str, t.asm)
