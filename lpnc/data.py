from enum import IntEnum, auto
from typing import Iterator
from bidict import bidict

# lexeme buffers of the language are 64 bytes wide
MAX_LEXEME_LEN: int = 63

BLANK: str = ' '
RESULT_VAR: str = 'R'

class Loc:
  def __init__(self, filepath: str, line: int, col: int) -> None:
    self.filepath: str = filepath
    self.line: int = line
    self.col: int = col

  def __eq__(self, other: object) -> bool:
    if not isinstance(other, Loc):
      return NotImplemented

    return (
      self.filepath == other.filepath and
      self.line == other.line and
      self.col == other.col
    )

  def __repr__(self) -> str:
    return f'{self.filepath}:{self.line}:{self.col}'

class CompilationException(Exception):
  def __init__(self, message: str, loc: Loc | None) -> None:
    super().__init__(message)
    self.message: str = message
    self.loc: Loc | None = loc

class LexingError(CompilationException):
  pass

class ParsingError(CompilationException):
  pass

class LoweringError(CompilationException):
  pass

class MalformedStreamError(LoweringError):
  '''
  a rule needed an instruction past the end of the list
  '''

class NoRuleMatchedError(LoweringError):
  pass

class SourceError(CompilationException):
  pass

class ConfigError(CompilationException):
  pass

class TokenKind(IntEnum):
  PROGRAM_KW = auto()
  BEGIN      = auto()
  END        = auto()
  RES_KW     = auto()
  ID         = auto()
  NUM        = auto()
  ASSIGN     = auto()
  PLUS       = auto()
  MINUS      = auto()
  MULT       = auto()
  DIV        = auto()
  LPAREN     = auto()
  RPAREN     = auto()
  QUOTE      = auto()
  COLON      = auto()
  EOF        = auto()
  UNKNOWN    = auto()

KEYWORDS = bidict({
  'PROGRAMA': TokenKind.PROGRAM_KW,
  'INICIO':   TokenKind.BEGIN,
  'FIM':      TokenKind.END,
  'RES':      TokenKind.RES_KW,
})

PUNCTUATION = bidict({
  '=': TokenKind.ASSIGN,
  '+': TokenKind.PLUS,
  '-': TokenKind.MINUS,
  '*': TokenKind.MULT,
  '/': TokenKind.DIV,
  '(': TokenKind.LPAREN,
  ')': TokenKind.RPAREN,
  '"': TokenKind.QUOTE,
  ':': TokenKind.COLON,
})

class Token:
  __slots__ = ('kind', 'lexeme', 'loc')

  kind: TokenKind
  lexeme: str
  loc: Loc

  def __init__(self, kind: TokenKind, lexeme: str, loc: Loc) -> None:
    object.__setattr__(self, 'kind', kind)
    object.__setattr__(self, 'lexeme', lexeme)
    object.__setattr__(self, 'loc', loc)

  def __setattr__(self, name: str, value: object) -> None:
    raise AttributeError(f'token is immutable (tried to set "{name}")')

  def __eq__(self, other: object) -> bool:
    if not isinstance(other, Token):
      return NotImplemented

    return self.kind == other.kind and self.lexeme == other.lexeme

  def __hash__(self) -> int:
    return hash((self.kind, self.lexeme))

  def __repr__(self) -> str:
    return f'{self.kind.name}({repr(self.lexeme)})'

class Opcode(IntEnum):
  LDC = auto()
  LDA = auto()
  STA = auto()
  ADD = auto()
  SUB = auto()
  MUL = auto()
  DIV = auto()

ARITHMETIC_OPCODES = bidict({
  TokenKind.PLUS:  Opcode.ADD,
  TokenKind.MINUS: Opcode.SUB,
  TokenKind.MULT:  Opcode.MUL,
  TokenKind.DIV:   Opcode.DIV,
})

def is_arithmetic(op: Opcode) -> bool:
  return op in ARITHMETIC_OPCODES.inverse

class Instr:
  __slots__ = ('op', 'var', 'loc')

  def __init__(self, op: Opcode, var: str, loc: Loc | None = None) -> None:
    assert len(var) == 1, var

    self.op: Opcode = op
    self.var: str = var
    self.loc: Loc | None = loc

  def __eq__(self, other: object) -> bool:
    if not isinstance(other, Instr):
      return NotImplemented

    return self.op == other.op and self.var == other.var

  def __repr__(self) -> str:
    return f'{self.op.name} {self.var}'

class InstrList:
  '''
  append only log of pseudo instructions built while parsing;
  nodes are never removed nor changed, the lowering walks it
  forward from the head
  '''

  def __init__(self) -> None:
    self.instructions: list[Instr] = []

  def __len__(self) -> int:
    return len(self.instructions)

  def __iter__(self) -> Iterator[Instr]:
    return iter(self.instructions)

  def __repr__(self) -> str:
    r = '\n'

    for label, i in enumerate(self.instructions):
      r += f'  {label}: {i}\n'

    return r

  def peek(self, index: int) -> Instr | None:
    if index < 0 or index >= len(self.instructions):
      return None

    return self.instructions[index]

  def emit(self, op: Opcode, var: str = BLANK, loc: Loc | None = None) -> None:
    self.instructions.append(Instr(op, var, loc))

  def ldc(self, loc: Loc, digit: str) -> None:
    self.emit(Opcode.LDC, digit, loc)

  def lda(self, loc: Loc, var: str) -> None:
    self.emit(Opcode.LDA, var, loc)

  def sta(self, loc: Loc, var: str) -> None:
    self.emit(Opcode.STA, var, loc)

  def arith(self, loc: Loc, op: Opcode) -> None:
    assert is_arithmetic(op), op
    self.emit(op, BLANK, loc)
