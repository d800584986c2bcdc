from lpnc.data import *
from lpnc.lexer import Lexer

class DParser:
  '''
  recursive descent parser for the language, one token of lookahead;
  it doesn't build a tree, every rule emits its instructions
  (and the matching trace line) while it's being parsed:

    program := "PROGRAMA" '"' id '"' ':' "INICIO" stmt* "RES" '=' expr "FIM"
    stmt    := id '=' expr
    expr    := term (('+' | '-') term)*
    term    := factor (('*' | '/') factor)*
    factor  := num | id | '(' expr ')'
  '''

  def __init__(self, unit) -> None:
    from lpnc.unit import TranslationUnit
    self.unit: TranslationUnit = unit
    self.lexer: Lexer = Lexer(unit.source, unit.filepath)
    self.cur: Token = self.lexer.next_token()

  @property
  def instrs(self) -> InstrList:
    return self.unit.instrs

  def advance(self) -> None:
    self.cur = self.lexer.next_token()

  def token(self, *kinds: TokenKind) -> Token | None:
    tok: Token = self.cur

    if tok.kind in kinds:
      self.advance()
      return tok

    return None

  def expect_token(self, kind: TokenKind) -> Token:
    token: Token | None = self.token(kind)

    if token is None:
      raise ParsingError(
        f'expected token "{kind.name}", matched "{self.cur.kind.name}" '
        f'({repr(self.cur.lexeme)})',
        self.cur.loc
      )

    return token

  def program(self) -> None:
    self.expect_token(TokenKind.PROGRAM_KW)
    self.expect_token(TokenKind.QUOTE)

    name: Token = self.expect_token(TokenKind.ID)
    self.unit.comment(f'program: {name.lexeme}')

    self.expect_token(TokenKind.QUOTE)
    self.expect_token(TokenKind.COLON)
    self.expect_token(TokenKind.BEGIN)

    while self.cur.kind == TokenKind.ID:
      self.statement()

    self.res_statement()
    self.expect_token(TokenKind.END)
    self.expect_token(TokenKind.EOF)

  def statement(self) -> None:
    target: Token = self.expect_token(TokenKind.ID)
    self.expect_token(TokenKind.ASSIGN)
    self.unit.comment(f'assignment to {target.lexeme}')

    self.expr()

    # only the first character identifies the variable
    self.unit.trace_line(f'STA {target.lexeme}')
    self.instrs.sta(target.loc, target.lexeme[0])

  def res_statement(self) -> None:
    res: Token = self.expect_token(TokenKind.RES_KW)
    self.expect_token(TokenKind.ASSIGN)
    self.unit.comment('RES statement')

    self.expr()

    self.unit.trace_line(f'STA {res.lexeme}')
    self.instrs.sta(res.loc, RESULT_VAR)

  def binary(self, operand, *kinds: TokenKind) -> None:
    operand()

    while (op := self.token(*kinds)) is not None:
      operand()

      opcode: Opcode = ARITHMETIC_OPCODES[op.kind]
      self.unit.trace_line(opcode.name)
      self.instrs.arith(op.loc, opcode)

  def expr(self) -> None:
    self.binary(self.term, TokenKind.PLUS, TokenKind.MINUS)

  def term(self) -> None:
    self.binary(self.factor, TokenKind.MULT, TokenKind.DIV)

  def factor(self) -> None:
    tok: Token = self.cur

    match tok.kind:
      case TokenKind.NUM:
        self.advance()
        self.unit.trace_line(f'LDC {tok.lexeme}')
        self.instrs.ldc(tok.loc, tok.lexeme[0])

      case TokenKind.ID:
        self.advance()
        self.unit.trace_line(f'LDA {tok.lexeme}')
        self.instrs.lda(tok.loc, tok.lexeme[0])

      case TokenKind.LPAREN:
        self.advance()
        self.expr()
        self.expect_token(TokenKind.RPAREN)

      case _:
        raise ParsingError(
          f'unexpected token in factor: "{tok.kind.name}" ({repr(tok.lexeme)})',
          tok.loc
        )
