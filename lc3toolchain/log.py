"""
Logging of the command line tools. Every output line carries a level tag,
optionally coloured, and loggers created here know how to print summary
tables and unified diffs.
"""

import colorama
import logging
import tabulate

LEVELS = {
  logging.DEBUG:    'DEBG',
  logging.INFO:     'INFO',
  logging.WARNING:  'WARN',
  logging.ERROR:    'ERRR',
  logging.CRITICAL: 'CRIT'
}

LEVEL_COLORS = {
  logging.DEBUG:    colorama.Fore.WHITE,
  logging.INFO:     colorama.Fore.GREEN,
  logging.WARNING:  colorama.Fore.YELLOW,
  logging.ERROR:    colorama.Fore.RED,
  logging.CRITICAL: colorama.Fore.RED + colorama.Style.BRIGHT
}

# Checked in this order, file headers before plain removals and additions
DIFF_COLORS = (
  ('+++', colorama.Fore.WHITE),
  ('---', colorama.Fore.WHITE),
  ('@@',  colorama.Fore.BLUE),
  ('+',   colorama.Fore.GREEN),
  ('-',   colorama.Fore.RED)
)

RESET = colorama.Style.RESET_ALL

LOGGER_NAME = 'lc3toolchain'

class LogFormatter(logging.Formatter):
  """
  Plain formatter. Message and traceback lines are prefixed with the level
  tag, e.g. ``[WARN] test.asm:1:1: ...``.
  """

  def paint(self, s, color):
    return s

  def level_tag(self, record):
    return '[%s]' % LEVELS.get(record.levelno, record.levelname)

  def format(self, record):
    lines = record.getMessage().split('\n')

    if record.exc_info:
      lines += self.formatException(record.exc_info).split('\n')

    tag = self.level_tag(record)

    return '\n'.join('%s %s' % (tag, line) for line in lines)

  def diff_line(self, line):
    for prefix, color in DIFF_COLORS:
      if line.startswith(prefix):
        return self.paint(line, color)

    return line

class ColorizedLogFormatter(LogFormatter):
  def paint(self, s, color):
    return color + s + RESET

  def level_tag(self, record):
    return self.paint(super(ColorizedLogFormatter, self).level_tag(record), LEVEL_COLORS.get(record.levelno, ''))

class StreamHandler(logging.StreamHandler):
  def __init__(self, formatter = None, *args, **kwargs):
    super(StreamHandler, self).__init__(*args, **kwargs)

    self.setFormatter(formatter or ColorizedLogFormatter())

def create_logger(name = None, handler = None, level = logging.INFO):
  """
  Set up logger of a tool. Existing handlers are replaced by ``handler``.

  The logger gets two helpers: ``table(rows)`` logs ``rows`` as a table, first
  row being the headers, and ``diff(lines)`` logs lines of a unified diff,
  coloured when the handler's formatter uses colours.
  """

  logger = logging.getLogger(name or LOGGER_NAME)

  if handler is not None:
    for old_handler in list(logger.handlers):
      logger.removeHandler(old_handler)

    logger.addHandler(handler)

  formatter = (handler.formatter if handler is not None else None) or LogFormatter()

  def __table(rows, fn = None):
    fn = fn or logger.info

    for line in tabulate.tabulate(rows, headers = 'firstrow', tablefmt = 'simple', numalign = 'right').split('\n'):
      fn('%s', line)

  def __diff(lines, fn = None):
    fn = fn or logger.info

    for line in lines:
      fn('%s', formatter.diff_line(line))

  logger.table = __table
  logger.diff = __diff

  logger.setLevel(level)

  return logger

def get_logger(name = None):
  """
  Return logger used by library code. Children of the tool logger inherit
  its handlers, so anything logged here ends up in the same stream.
  """

  return logging.getLogger(LOGGER_NAME if name is None else '%s.%s' % (LOGGER_NAME, name))
