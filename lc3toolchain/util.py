import os

from .log import get_logger

SOURCE_EXTENSION = 'asm'

class LoggingCapable(object):
  def __init__(self, logger, *args, **kwargs):
    super(LoggingCapable, self).__init__(*args, **kwargs)

    self._logger = logger or get_logger()

    self.DEBUG = self._logger.debug
    self.INFO = self._logger.info
    self.WARN = self._logger.warning
    self.ERROR = self._logger.error
    self.EXCEPTION = self._logger.exception

def relative_path(path):
  """
  Shorten ``path`` for messages, when it lies under current working directory.
  """

  path = os.path.abspath(path)
  cwd = os.getcwd()

  if os.path.commonprefix([path, cwd + os.sep]) == cwd + os.sep:
    return os.path.relpath(path, cwd)

  return path

def has_extension(path, extension = SOURCE_EXTENSION):
  return os.path.splitext(path)[1].lower() == '.' + extension.lower()

def collect_source_files(path, extension = SOURCE_EXTENSION, logger = None):
  """
  Find source files to process.

  :param str path: file or directory. Directories are not searched recursively.
  :param str extension: accepted file extension, without the leading dot.
  :rtype: list of str
  :returns: sorted list of paths. Empty list when ``path`` does not exist.
  """

  logger = logger or get_logger()

  if os.path.isfile(path):
    if has_extension(path, extension):
      return [path]

    logger.debug('Skipping %s: not a .%s file', relative_path(path), extension)
    return []

  if not os.path.isdir(path):
    logger.error('No such file or directory: %s', path)
    return []

  files = []

  for name in sorted(os.listdir(path)):
    filepath = os.path.join(path, name)

    if not os.path.isfile(filepath):
      continue

    if not has_extension(filepath, extension):
      logger.debug('Skipping %s: not a .%s file', relative_path(filepath), extension)
      continue

    files.append(filepath)

  return files
