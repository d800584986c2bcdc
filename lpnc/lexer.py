from lpnc.data import *
from typing import Iterator

def is_letter(c: str) -> bool:
  return c.isascii() and c.isalpha()

def is_digit(c: str) -> bool:
  return c.isascii() and c.isdigit()

def is_word_char(c: str) -> bool:
  return c.isascii() and c.isalnum()

class Lexer:
  def __init__(self, source: str, filepath: str = '<source>') -> None:
    self.source: str = source
    self.filepath: str = filepath
    self.index: int = 0
    self.index_of_linestart: int = 0
    self.line: int = 0

  @property
  def cur(self) -> str:
    return self.char(0)

  @property
  def loc(self) -> Loc:
    return Loc(
      self.filepath,
      self.line + 1,
      self.calculate_col() + 1
    )

  def calculate_col(self) -> int:
    return self.index - self.index_of_linestart

  def char(self, offset: int) -> str:
    return self.source[self.index + offset]

  def has_char(self, offset: int = 0) -> bool:
    return self.index + offset < len(self.source)

  def skip(self, count: int = 1) -> None:
    self.index += count

  def eat_white(self) -> None:
    # carriage returns are not whitespace in this language
    while self.has_char():
      match self.cur:
        case '\t' | ' ':
          pass

        case '\n':
          self.line += 1
          self.index_of_linestart = self.index + 1

        case _:
          return

      self.skip()

  def collect_while(self, predicate) -> str:
    start: int = self.index

    while self.has_char() and predicate(self.cur):
      self.skip()

    return self.source[start:self.index]

  def make_token(self, kind: TokenKind, lexeme: str, loc: Loc) -> Token:
    if len(lexeme) > MAX_LEXEME_LEN:
      raise LexingError(
        f'lexeme "{lexeme[:16]}..." is longer than {MAX_LEXEME_LEN} characters',
        loc
      )

    return Token(kind, lexeme, loc)

  def collect_word_token(self, loc: Loc) -> Token:
    value: str = self.collect_while(is_word_char)
    # keywords are case sensitive
    kind: TokenKind = KEYWORDS.get(value, TokenKind.ID)

    return self.make_token(kind, value, loc)

  def collect_number_token(self, loc: Loc) -> Token:
    return self.make_token(TokenKind.NUM, self.collect_while(is_digit), loc)

  def collect_punctuation_token(self, loc: Loc) -> Token:
    single: str = self.cur
    self.skip()

    # unknown characters are handed to the parser,
    # which fails as soon as it expects anything else
    kind: TokenKind = PUNCTUATION.get(single, TokenKind.UNKNOWN)

    return Token(kind, single, loc)

  def next_token(self) -> Token:
    self.eat_white()

    if not self.has_char():
      return Token(TokenKind.EOF, '', self.loc)

    if is_letter(self.cur):
      return self.collect_word_token(self.loc)

    if is_digit(self.cur):
      return self.collect_number_token(self.loc)

    return self.collect_punctuation_token(self.loc)

  def tokens(self) -> Iterator[Token]:
    while True:
      token: Token = self.next_token()
      yield token

      if token.kind == TokenKind.EOF:
        return
