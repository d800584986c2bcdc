from lpnc.data import *
from typing import Callable

'''
lowering of the instruction list into the accumulator assembly;

the list produced by the parser is naive: every constant is loaded
with `LDC` and every operator works on the last loaded value,
here it gets walked twice:

  - the first walk collects the `.DATA` declarations, constants
    loaded right before a store become initializers of that store
  - the second walk matches small fixed patterns over the list
    and emits the `.CODE` section

the pattern rules only know the shapes the parser emits for the
simple cases, anything else is reported instead of guessed
'''

# a rule gets the cursor and the output lines,
# returns the next cursor or `None` when it doesn't apply
Rule = Callable[[int, list[str]], int | None]

class AsmGen:
  def __init__(self, unit) -> None:
    from lpnc.unit import TranslationUnit
    self.unit: TranslationUnit = unit

    # priority ordered
    self.rules: list[tuple[str, Rule]] = [
      ('skip-constant', self.rule_skip_constant),
      ('double-load',   self.rule_double_load),
      ('load-then-op',  self.rule_load_then_op),
      ('store',         self.rule_store),
      # extension past the four pattern rules, lowers `RES = A`
      ('copy',          self.rule_copy),
    ]

  @property
  def instrs(self) -> InstrList:
    return self.unit.instrs

  def expect_instr(self, index: int, reason: str) -> Instr:
    instr: Instr | None = self.instrs.peek(index)

    if instr is None:
      at: Instr | None = self.instrs.peek(index - 1)

      raise MalformedStreamError(
        f'malformed instruction stream: {reason}, '
        f'but the list ends after {len(self.instrs)} instructions',
        at.loc if at is not None else None
      )

    return instr

  def gen_data(self) -> list[str]:
    lines: list[str] = []
    declared: set[str] = set()

    for index, instr in enumerate(self.instrs):
      if instr.op == Opcode.LDC:
        store: Instr = self.expect_instr(
          index + 1, f'"{instr}" at {index} has no paired store'
        )

        lines.append(f'{store.var} = {int(instr.var)}')
        declared.add(store.var)
      elif instr.op == Opcode.STA and instr.var not in declared:
        lines.append(f'{instr.var} = ?')
        declared.add(instr.var)
      elif instr.var == RESULT_VAR:
        # declared again even when it's already there
        lines.append(f'{instr.var} = ?')
        declared.add(instr.var)

    return lines

  def rule_skip_constant(self, index: int, out: list[str]) -> int | None:
    instr: Instr = self.expect_instr(index, 'cursor past the end')

    if instr.op != Opcode.LDC:
      return None

    # the pair is already an initializer in `.DATA`
    self.expect_instr(index + 1, f'"{instr}" at {index} has no paired store')
    return index + 2

  def rule_double_load(self, index: int, out: list[str]) -> int | None:
    instr: Instr = self.expect_instr(index, 'cursor past the end')
    nxt: Instr | None = self.instrs.peek(index + 1)

    if instr.op != Opcode.LDA or nxt is None or nxt.op != Opcode.LDA:
      return None

    third: Instr = self.expect_instr(
      index + 2, f'"{instr}", "{nxt}" at {index} are not followed by an operator'
    )

    out.append(f'{instr.op.name} {instr.var}')
    out.append(f'{third.op.name} {nxt.var}')
    return index + 3

  def rule_load_then_op(self, index: int, out: list[str]) -> int | None:
    instr: Instr = self.expect_instr(index, 'cursor past the end')
    nxt: Instr | None = self.instrs.peek(index + 1)

    if instr.op != Opcode.LDA or nxt is None or not is_arithmetic(nxt.op):
      return None

    # the operator takes the loaded variable as operand
    out.append(f'{nxt.op.name} {instr.var}')
    return index + 2

  def rule_store(self, index: int, out: list[str]) -> int | None:
    instr: Instr = self.expect_instr(index, 'cursor past the end')

    if instr.op != Opcode.STA:
      return None

    out.append(f'{instr.op.name} {instr.var}')
    return index + 1

  def rule_copy(self, index: int, out: list[str]) -> int | None:
    instr: Instr = self.expect_instr(index, 'cursor past the end')
    nxt: Instr | None = self.instrs.peek(index + 1)

    if instr.op != Opcode.LDA or nxt is None or nxt.op != Opcode.STA:
      return None

    out.append(f'{instr.op.name} {instr.var}')
    return index + 1

  def apply_rules(self, index: int, out: list[str]) -> int:
    for _, rule in self.rules:
      next_index: int | None = rule(index, out)

      if next_index is not None:
        return next_index

    instr: Instr = self.expect_instr(index, 'cursor past the end')
    raise NoRuleMatchedError(
      f'no lowering rule matches "{instr}" at {index}',
      instr.loc
    )

  def gen_code(self) -> list[str]:
    lines: list[str] = []
    index: int = 0

    while index < len(self.instrs):
      index = self.apply_rules(index, lines)

    return lines

  def gen_whole_unit(self) -> str:
    data: list[str] = self.gen_data()
    code: list[str] = self.gen_code()

    out: list[str] = ['.DATA', '']
    out.extend(data)
    out.extend(['', '.CODE', '.ORG 0'])
    out.extend(code)

    return ''.join(f'{line}\n' for line in out)
