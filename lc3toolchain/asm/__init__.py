"""
Source-model pipeline: text -> concrete syntax tree -> abstract program ->
processed program.
"""

from .lexer import AssemblyLexer
from .parser import AssemblyParser
from .adapter import build_program
from .transform import AttachmentTransform
from ..util import LoggingCapable

class SourceProcess(LoggingCapable, object):
  """
  Processing of a single source file. Steps can be called one by one, or all
  at once by :py:meth:`process`.

  :param str text: source text.
  :param str filename: name used in error messages and locations.
  :param bool hybrid_inline_comment: merge same-line comments into their
    statements.
  """

  def __init__(self, text, filename = None, hybrid_inline_comment = True, logger = None):
    super(SourceProcess, self).__init__(logger)

    self.text = text
    self.filename = filename
    self.hybrid_inline_comment = hybrid_inline_comment

    self.tree = None
    self.program = None
    self.processed = None

  def parse(self):
    D = self.DEBUG

    D('Parsing %s', self.filename or '<input>')

    lexer = AssemblyLexer(filename = self.filename)
    parser = AssemblyParser(lexer)

    self.tree = parser.parse(self.text)

    D('  %r', self.tree)

  def adapt(self):
    assert self.tree is not None

    self.DEBUG('Building program')

    self.program = build_program(self.tree, logger = self._logger)

  def transform(self):
    assert self.program is not None

    self.DEBUG('Attaching labels and comments')

    transform = AttachmentTransform(self.text, filename = self.filename, hybrid_inline_comment = self.hybrid_inline_comment, logger = self._logger)
    self.processed = transform.transform(self.program)

  def process(self):
    self.parse()
    self.adapt()
    self.transform()

    return self.processed

def get_ast(text, filename = None, hybrid_inline_comment = True, logger = None):
  """
  Parse source text and return its processed program.

  :raises lc3toolchain.errors.AssemblerError: on syntax error.
  :raises lc3toolchain.errors.MalformedTreeError: when grammar and tree
    adapter disagree.
  """

  return SourceProcess(text, filename = filename, hybrid_inline_comment = hybrid_inline_comment, logger = logger).process()
