import sys

from ..asm.position import PositionIndex
from ..asm.ast import SourceLocation
from ..errors import AssemblerError, MalformedTreeError, diagnostic_text
from ..lint import CONFIG_FILENAME, LintStyle, Linter
from ..util import relative_path

STYLE_NOTE = 'See the style guide for more information on formatting rules.'

def violation_text(index, filename, violation):
  """
  Render violation as a diagnostic anchored at the offending token.
  """

  lineno, column = index.location(violation.span.start)
  location = SourceLocation(filename = filename, lineno = lineno, column = column, length = len(violation.span))

  return diagnostic_text(location, violation.message, line = index.line(lineno)) + ['note: ' + STYLE_NOTE]

def lint_file(logger, path, style, summary):
  from . import read_source
  from ..asm import get_ast

  logger.debug('Linting %s', path)

  summary.files += 1

  text = read_source(logger, path, summary)
  if text is None:
    return

  filename = relative_path(path)

  try:
    program = get_ast(text, filename = filename, logger = logger)

  except AssemblerError as exc:
    exc.log(logger.error)
    summary.add_failure(path)
    return

  except MalformedTreeError as exc:
    logger.critical('%s: internal error: %s', filename, exc.message)
    summary.add_failure(path)
    return

  violations = Linter(style = style, logger = logger).check(program)

  if violations:
    index = PositionIndex(text)

    for violation in violations:
      logger.warning('')

      for line in violation_text(index, filename, violation):
        logger.warning('%s', line)

  else:
    logger.debug('  %s is clean', filename)

  summary.add_violations(path, len(violations))

def main(args = None):
  import optparse
  from . import add_common_options, add_config_options, parse_options, load_style, print_config, get_source_files, RunSummary

  parser = optparse.OptionParser(usage = 'usage: %prog [options] <file or directory> ...')
  add_common_options(parser)
  add_config_options(parser, CONFIG_FILENAME)

  options, args, logger = parse_options(parser, args = args)

  style = load_style(logger, LintStyle, options.config_path, CONFIG_FILENAME)

  if options.print_config:
    print_config(style)
    sys.exit(0)

  if not args:
    parser.print_help()
    sys.exit(1)

  summary = RunSummary()

  for path in get_source_files(logger, args, summary):
    lint_file(logger, path, style, summary)

  summary.log(logger)

  sys.exit(summary.exit_code)

if __name__ == '__main__':
  main()
