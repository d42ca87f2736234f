import difflib
import sys

from ..errors import AssemblerError, MalformedTreeError
from ..fmt import CONFIG_FILENAME, FormatStyle, Formatter
from ..util import relative_path

def get_diff(path, original, formatted):
  """
  Create unified diff between original and formatted text.

  :rtype: list of str
  :returns: diff lines, without line breaks. Empty when texts are equal.
  """

  name = relative_path(path)

  return list(difflib.unified_diff(original.splitlines(), formatted.splitlines(), fromfile = name, tofile = name + ' (formatted)', lineterm = ''))

def format_file(logger, path, style, options, summary):
  from . import read_source
  from ..asm import get_ast

  logger.debug('Formatting %s', path)

  summary.files += 1

  original = read_source(logger, path, summary)
  if original is None:
    return

  try:
    program = get_ast(original, filename = relative_path(path), logger = logger)

  except AssemblerError as exc:
    exc.log(logger.error)
    summary.add_failure(path)
    return

  except MalformedTreeError as exc:
    logger.critical('%s: internal error: %s', relative_path(path), exc.message)
    summary.add_failure(path)
    return

  formatted = Formatter(style = style, logger = logger).format(program)

  if formatted == original:
    logger.debug('  %s already formatted', relative_path(path))
    return

  summary.add_change(path)

  if options.check:
    logger.diff(get_diff(path, original, formatted))

    summary.add_failure(path)
    return

  with open(path, 'w') as f_out:
    f_out.write(formatted)

  logger.info('Formatted %s', relative_path(path))

def main(args = None):
  import optparse
  from . import add_common_options, add_config_options, parse_options, load_style, print_config, get_source_files, RunSummary

  parser = optparse.OptionParser(usage = 'usage: %prog [options] <file or directory> ...')
  add_common_options(parser)
  add_config_options(parser, CONFIG_FILENAME)

  group = optparse.OptionGroup(parser, 'Formatting options')
  parser.add_option_group(group)
  group.add_option('--check', dest = 'check', action = 'store_true', default = False, help = 'Do not modify files, print diff of changes formatting would make')

  options, args, logger = parse_options(parser, args = args)

  style = load_style(logger, FormatStyle, options.config_path, CONFIG_FILENAME)

  if options.print_config:
    print_config(style)
    sys.exit(0)

  if not args:
    parser.print_help()
    sys.exit(1)

  summary = RunSummary()

  for path in get_source_files(logger, args, summary):
    format_file(logger, path, style, options, summary)

  summary.log(logger, changed_label = 'Unformatted' if options.check else 'Formatted')

  sys.exit(summary.exit_code)

if __name__ == '__main__':
  main()
