"""
Attachment pass: turns abstract program into a processed one, where labels
belong to the statement they precede, same-line comments belong to their
statement, and every item knows its line and column.
"""

from .ast import Comment, Label, Instruction, Directive, SourceLocation
from .position import PositionIndex
from ..errors import MalformedTreeError

class CommentItem(object):
  """
  Standalone comment.
  """

  __slots__ = ('comment', 'location')

  def __init__(self, comment, location):
    self.comment = comment
    self.location = location

  def __repr__(self):
    return '<CommentItem: %s, "%s">' % (self.location, self.comment.content)

class StatementItem(object):
  """
  Base class of processed instructions and directives.

  :param list labels: labels preceding the statement, in source order.
  :param statement: instruction or directive.
  :param lc3toolchain.asm.ast.Comment comment: trailing comment, if any.
  :param SourceLocation location: location of the mnemonic.
  """

  __slots__ = ('labels', 'statement', 'comment', 'location')

  def __init__(self, labels, statement, comment, location):
    self.labels = list(labels)
    self.statement = statement
    self.comment = comment
    self.location = location

  def with_comment(self, comment):
    return self.__class__(self.labels, self.statement, comment, self.location)

  def __repr__(self):
    return '<%s: %s, labels=[%s], statement=%r, comment=%s>' % (self.__class__.__name__, self.location, ', '.join(l.content for l in self.labels),
                                                               self.statement, '"%s"' % self.comment.content if self.comment is not None else None)

class InstructionItem(StatementItem):
  __slots__ = StatementItem.__slots__

  @property
  def instruction(self):
    return self.statement

class DirectiveItem(StatementItem):
  __slots__ = StatementItem.__slots__

  @property
  def directive(self):
    return self.statement

class TrailingLabelsItem(object):
  """
  Labels left at the end of the file, with no statement to attach to.
  """

  __slots__ = ('labels',)

  def __init__(self, labels):
    self.labels = list(labels)

  def __repr__(self):
    return '<TrailingLabelsItem: [%s]>' % ', '.join(l.content for l in self.labels)

class ProcessedProgram(object):
  __slots__ = ('items', 'filename')

  def __init__(self, items = None, filename = None):
    self.items = list(items or [])
    self.filename = filename

  def __iter__(self):
    return iter(self.items)

  def __len__(self):
    return len(self.items)

  def __repr__(self):
    return '<ProcessedProgram: filename=%s, items=%d>' % (self.filename, len(self.items))

def attach_labels(program, locate):
  """
  Attach every run of labels to the following statement. Labels keep their
  source order.
  """

  pending = []

  for item in program:
    if isinstance(item, Label):
      pending.append(item)

    elif isinstance(item, Comment):
      yield CommentItem(item, locate(item.span))

    elif isinstance(item, (Instruction, Directive)):
      klass = InstructionItem if isinstance(item, Instruction) else DirectiveItem

      yield klass(pending, item, None, locate(item.span))
      pending = []

    else:
      raise MalformedTreeError('unexpected program item %r' % item, node = item)

  if pending:
    yield TrailingLabelsItem(pending)

def adopts(item, following):
  """
  Return ``True`` when ``following`` is a comment written on the same line as
  statement ``item``.
  """

  return isinstance(item, StatementItem) and isinstance(following, CommentItem) and item.location.same_line(following.location)

def windows(items):
  """
  Yield ``(previous, current, next)`` triplets, with ``None`` beyond both ends.
  """

  padded = [None] + list(items) + [None]

  for i in range(1, len(padded) - 1):
    yield padded[i - 1], padded[i], padded[i + 1]

def attach_comments(items):
  for previous, current, following in windows(items):
    if adopts(previous, current):
      continue

    if adopts(current, following):
      current = current.with_comment(following.comment)

    yield current

class AttachmentTransform(object):
  """
  Single transformation of one source file.

  :param str text: source text, spans of the program point into it.
  :param str filename: name used in locations.
  :param bool hybrid_inline_comment: when set, same-line comments are merged
    into their statements. Otherwise every comment stays standalone.
  """

  def __init__(self, text, filename = None, hybrid_inline_comment = True, logger = None):
    self.index = PositionIndex(text)
    self.filename = filename
    self.hybrid_inline_comment = hybrid_inline_comment
    self._logger = logger

  def locate(self, span):
    lineno, column = self.index.location(span.start)

    return SourceLocation(filename = self.filename, lineno = lineno, column = column, length = len(span))

  def transform(self, program):
    """
    :param lc3toolchain.asm.ast.Program program: program parsed from the
      source text.
    :rtype: ProcessedProgram
    """

    items = attach_labels(program, self.locate)

    if self.hybrid_inline_comment:
      items = attach_comments(items)

    processed = ProcessedProgram(items, filename = self.filename)

    if self._logger is not None:
      for item in processed:
        self._logger.debug('  %r', item)

    return processed
