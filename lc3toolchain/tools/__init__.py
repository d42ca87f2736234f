import logging
import optparse
import os
import sys

from ..config import load_config, StyleConfig
from ..errors import ConfigError
from ..log import create_logger, StreamHandler, LogFormatter, ColorizedLogFormatter
from ..util import collect_source_files, relative_path

def setup_logger(stream = None, debug = False, quiet = None, verbose = None, default_loglevel = logging.INFO, colorize = None):
  stream = stream or sys.stdout

  if colorize is None:
    colorize = stream.isatty()

  formatter = ColorizedLogFormatter() if colorize is True else LogFormatter()
  handler = StreamHandler(stream = stream, formatter = formatter)
  logger = create_logger(handler = handler)

  logger.setLevel(logging.INFO)

  if debug:
    logger.setLevel(logging.DEBUG)

  else:
    levels = [logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR, logging.CRITICAL]
    quiet = quiet or 0
    verbose = verbose or 0

    level = levels.index(default_loglevel) + quiet - verbose
    level = max(0, level)
    level = min(4, level)

    logger.setLevel(levels[level])

  return logger

def add_common_options(parser):
  group = optparse.OptionGroup(parser, 'Tool verbosity')
  parser.add_option_group(group)

  group.add_option('-d', '--debug', dest = 'debug', action = 'store_true', default = False, help = 'Debug mode')
  group.add_option('-q', '--quiet', dest = 'quiet', action = 'count', default = 0, help = 'Decrease verbosity. This option can be used multiple times')
  group.add_option('-v', '--verbose', dest = 'verbose', action = 'count', default = 0, help = 'Increase verbosity. This option can be used multiple times')

def add_config_options(parser, default_filename):
  group = optparse.OptionGroup(parser, 'Configuration')
  parser.add_option_group(group)

  group.add_option('--config-path', dest = 'config_path', action = 'store', default = None, metavar = 'FILE',
                   help = 'Read style from FILE. By default, %s in current directory is used when it exists' % default_filename)
  group.add_option('--print-config', dest = 'print_config', action = 'store_true', default = False,
                   help = 'Print effective configuration and exit')

def parse_options(parser, default_loglevel = logging.INFO, stream = None, args = None):
  stream = stream or sys.stdout

  options, args = parser.parse_args(args = args)

  logger = setup_logger(stream = stream, debug = options.debug, quiet = options.quiet, verbose = options.verbose, default_loglevel = default_loglevel)

  return options, args, logger

def load_style(logger, style_class, config_path, default_filename):
  """
  Find and read style settings. Explicit ``config_path`` wins, then
  ``default_filename`` in current directory. When no file exists, or it
  cannot be used, default style is returned.
  """

  if config_path is None:
    candidate = os.path.join(os.getcwd(), default_filename)

    if not os.path.isfile(candidate):
      logger.debug('No config file found, using default style')
      return style_class()

    config_path = candidate

  logger.debug('Reading config file %s', config_path)

  try:
    return style_class.from_config(load_config(config_path))

  except ConfigError as exc:
    logger.warning('%s', exc.message)
    logger.warning('Falling back to default style')

    return style_class()

def print_config(style, stream = None):
  stream = stream or sys.stdout

  stream.write(style.to_config(StyleConfig()).dumps())

def read_source(logger, path, summary):
  """
  Read source file. Failure to read it is logged and recorded in ``summary``.

  :returns: file content, or ``None`` when the file cannot be read.
  """

  try:
    with open(path, 'r') as f:
      return f.read()

  except (IOError, OSError, UnicodeDecodeError) as exc:
    logger.error('%s: cannot read file: %s', relative_path(path), exc)
    summary.add_failure(path)

    return None

def get_source_files(logger, args, summary):
  """
  Expand positional arguments into list of source files. Missing paths are
  recorded in ``summary`` as failures.
  """

  files = []

  for arg in args:
    if not os.path.exists(arg):
      logger.error('No such file or directory: %s', arg)
      summary.add_failure(arg)
      continue

    files += collect_source_files(arg, logger = logger)

  return files

class RunSummary(object):
  """
  Accumulates results of one tool run.
  """

  def __init__(self):
    self.files = 0
    self.failed = []
    self.changed = []
    self.violations = 0

  def add_failure(self, path):
    self.failed.append(path)

  def add_change(self, path):
    self.changed.append(path)

  def add_violations(self, path, count):
    self.violations += count

    if count:
      self.failed.append(path)

  @property
  def exit_code(self):
    return 1 if self.failed else 0

  def log(self, logger, changed_label = None):
    headers = ['Files', 'Failed']
    row = [self.files, len(set(self.failed))]

    if changed_label is not None:
      headers.append(changed_label)
      row.append(len(self.changed))

    else:
      headers.append('Violations')
      row.append(self.violations)

    table = [headers, row]

    logger.table(table)

    for path in sorted(set(self.failed)):
      logger.debug('  failed: %s', relative_path(path))
