def diagnostic_text(location, message, line = None):
  """
  Create lines of a diagnostic message: location and message, the source
  line, and a marker pointing to the offending part of the line.

  :rtype: list of str
  """

  text = ['{coor}: {message}'.format(coor = str(location), message = message)]

  if line is not None:
    text.append(line)

    if location is not None and location.column is not None:
      length = max(1, min(location.length or 1, len(line) - location.column + 1))
      text.append(' ' * (location.column - 1) + '^' + '~' * (length - 1))

  return text

def format_choices(choices):
  """
  Join token descriptions into a readable enumeration, e.g. ```a`, `b` or `c```.
  """

  choices = ['`%s`' % c for c in choices]

  if len(choices) == 1:
    return choices[0]

  return '%s or %s' % (', '.join(choices[:-1]), choices[-1])

class Error(Exception):
  """
  Base class for all lc3toolchain exceptions.

  :param str message: optional description.
  """

  def __init__(self, message = None):
    super(Error, self).__init__()

    self.message = message or ''

  def __str__(self):
    return self.message

  def log(self, logger):
    logger(self.message)

class ConfigError(Error):
  """
  Raised when a configuration file cannot be read, or contains a value that
  cannot be used.
  """

  pass

class MalformedTreeError(Error):
  """
  Raised when the concrete syntax tree does not have the shape the adapter
  expects. This is never caused by the user's input, it means the grammar
  and the adapter disagree.

  :param node: offending tree node, if known.
  """

  def __init__(self, message, node = None):
    super(MalformedTreeError, self).__init__(message = 'Malformed syntax tree: %s' % message)

    self.node = node

class AssemblerError(Error):
  """
  Base class for all errors reported against the assembly source. Provides
  common properties, helping to locate related input in the source file.

  :param lc3toolchain.asm.ast.SourceLocation location: if set, points to the
    location in the source file that was processed when the exception occured.
  :param str message: more detailed description, kept in ``description``.
    ``message`` of the exception holds the complete first line of the
    diagnostic, location included.
  :param str line: input source line.
  :param info: additional details of the exception. This value is usually part
    of the ``message``, but is stored as well.
  """

  def __init__(self, location = None, message = None, line = None, info = None):
    self.location    = location
    self.description = message
    self.line        = line
    self.info        = info

    self.create_text()

    super(AssemblerError, self).__init__(message = self.text[0])

  def create_text(self):
    self.text = diagnostic_text(self.location, self.description, line = self.line)

  def log(self, logger):
    logger('')
    for line in self.text:
      logger(line)

class AssemblySyntaxError(AssemblerError):
  def __init__(self, c = None, **kwargs):
    super(AssemblySyntaxError, self).__init__(message = 'Illegal character: "{}"'.format(c), info = c, **kwargs)

class UnknownDirectiveError(AssemblerError):
  def __init__(self, **kwargs):
    super(UnknownDirectiveError, self).__init__(message = 'Unknown directive: "{info}"'.format(**kwargs), **kwargs)

class AssemblyParseError(AssemblerError):
  """
  Raised when the parser meets a token it did not expect, or when the input
  ends too early.

  :param str found: text of the offending token, ``None`` when the input
    ended.
  :param list expected: descriptions of tokens acceptable at that point.
  """

  def __init__(self, found = None, expected = None, **kwargs):
    self.found = found
    self.expected = sorted(expected or [])

    parts = []

    if self.expected:
      parts.append('Expected ' + format_choices(self.expected))

    parts.append('Unexpected `%s`' % found if found is not None else 'Unexpected end of input')

    super(AssemblyParseError, self).__init__(message = ', '.join(parts), info = found, **kwargs)
