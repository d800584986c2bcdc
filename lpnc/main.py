from lpnc.config import Config
from lpnc.data import CompilationException
from lpnc.unit import TranslationUnit, print_error
import sys

def main(argv: list[str] | None = None) -> int:
  if argv is None:
    argv = sys.argv

  try:
    c = Config.from_argv(argv)
    t = TranslationUnit.from_file(c.source_path)

    if c.dump_tokens:
      t.dump_tokens()

    t.dparse()

    if c.dump_instrs:
      t.dump_instrs()

    t.asmgen()
    t.compile(c.output_path)
  except CompilationException as e:
    print_error(e.message, e.loc)
    return 1

  return 0

if __name__ == '__main__':
  sys.exit(main())
