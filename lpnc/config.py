from lpnc.data import ConfigError

DEFAULT_SOURCE: str = 'programa.lpn'
DEFAULT_OUTPUT: str = 'assembly.asm'

USAGE: str = 'usage: lpnc [SOURCE] [-o OUTPUT] [--dump] [--tokens]'

class Config:
  def __init__(
    self,
    source_path: str = DEFAULT_SOURCE,
    output_path: str = DEFAULT_OUTPUT,
    dump_instrs: bool = False,
    dump_tokens: bool = False
  ) -> None:
    self.source_path: str = source_path
    self.output_path: str = output_path
    self.dump_instrs: bool = dump_instrs
    self.dump_tokens: bool = dump_tokens

  def __repr__(self) -> str:
    return \
      f'Config(source_path: {repr(self.source_path)}, ' \
      f'output_path: {repr(self.output_path)}, ' \
      f'dump_instrs: {self.dump_instrs}, dump_tokens: {self.dump_tokens})'

  @staticmethod
  def from_argv(argv: list[str]) -> 'Config':
    '''
    `argv[0]` is the program name; the source path is the
    first argument, when it's missing or it's an option the
    default source file is compiled
    '''

    c = Config()
    args: list[str] = argv[1:]

    if len(args) > 0 and not args[0].startswith('-'):
      c.source_path = args.pop(0)

    while len(args) > 0:
      arg: str = args.pop(0)

      match arg:
        case '-o' | '--output':
          if len(args) == 0:
            raise ConfigError(f'option "{arg}" needs a path; {USAGE}', None)

          c.output_path = args.pop(0)

        case '--dump':
          c.dump_instrs = True

        case '--tokens':
          c.dump_tokens = True

        case _:
          raise ConfigError(f'unknown argument "{arg}"; {USAGE}', None)

    return c
