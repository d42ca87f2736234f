"""
Style linter. Checks case style of labels, instruction mnemonics and
directives, and presence of colons after labels.
"""

import enum
import re

from .asm import get_ast
from .asm.transform import CommentItem, InstructionItem, DirectiveItem, TrailingLabelsItem
from .config import Style
from .util import LoggingCapable

CONFIG_FILENAME = 'lc3-lint.conf'

class CaseStyle(enum.Enum):
  LowerCamelCase = 'lowerCamelCase'
  UpperCamelCase = 'UpperCamelCase'
  SnakeCase = 'snake_case'
  ScreamingSnakeCase = 'SCREAMING_SNAKE_CASE'

PATTERNS = {
  CaseStyle.SnakeCase:          re.compile(r'^[a-z]+(?:_[a-z0-9]+)*$'),
  CaseStyle.ScreamingSnakeCase: re.compile(r'^[A-Z0-9]+(?:_[A-Z0-9]+)*$'),
  CaseStyle.LowerCamelCase:     re.compile(r'^[a-z]+(?:[A-Z][a-z0-9]*)*$'),
  CaseStyle.UpperCamelCase:     re.compile(r'^[A-Z][a-z0-9]*(?:[A-Z][a-z0-9]*)*$')
}

# First matching style wins
CLASSIFICATION_ORDER = (CaseStyle.SnakeCase, CaseStyle.ScreamingSnakeCase, CaseStyle.LowerCamelCase, CaseStyle.UpperCamelCase)

def classify(word):
  """
  Find case style of a word.

  :rtype: CaseStyle
  :returns: style, or ``None`` when the word does not follow any of them.
  """

  for style in CLASSIFICATION_ORDER:
    if PATTERNS[style].match(word):
      return style

  return None

def conforms(word, style):
  """
  Word conforms to ``style`` when it is classified as that style. Single
  lowercase word without underscores, e.g. ``loop``, is classified as
  ``snake_case`` but is a valid ``lowerCamelCase`` word as well.
  """

  found = classify(word)

  if found == style:
    return True

  return found == CaseStyle.SnakeCase and style == CaseStyle.LowerCamelCase and '_' not in word

class LintStyle(Style):
  SECTION = 'lint-style'
  OPTIONS = (
    ('colon-after-label', 'colon_after_label', False),
    ('label-style',       'label_style',       CaseStyle.ScreamingSnakeCase),
    ('instruction-style', 'instruction_style', CaseStyle.ScreamingSnakeCase),
    ('directive-style',   'directive_style',   CaseStyle.ScreamingSnakeCase)
  )

class StyleViolation(object):
  """
  Base class of style violations. Violations are reported, never raised.

  :param lc3toolchain.asm.ast.Span span: position of the offending token.
  :param str token: text of the offending token.
  """

  __slots__ = ('span', 'token')

  def __init__(self, span, token):
    self.span = span
    self.token = token

  @property
  def message(self):
    raise NotImplementedError()

  def __repr__(self):
    return '<%s: token="%s", span=%r, message="%s">' % (self.__class__.__name__, self.token, self.span, self.message)

class CaseStyleError(StyleViolation):
  """
  :param CaseStyle expected: required style.
  :param CaseStyle found: style of the token, ``None`` if it follows no
    known style.
  """

  __slots__ = StyleViolation.__slots__ + ('expected', 'found')

  def __init__(self, span, token, expected, found):
    super(CaseStyleError, self).__init__(span, token)

    self.expected = expected
    self.found = found

  @property
  def message(self):
    if self.found is None:
      return 'Unknown case style, expected %s' % self.expected.value

    return 'Invalid case style: found %s, expected %s' % (self.found.value, self.expected.value)

class ColonStyleError(StyleViolation):
  __slots__ = StyleViolation.__slots__ + ('expected_colon',)

  def __init__(self, span, token, expected_colon):
    super(ColonStyleError, self).__init__(span, token)

    self.expected_colon = expected_colon

  @property
  def message(self):
    return 'Invalid colon style: label %s be followed by a colon' % ('should' if self.expected_colon else 'should not')

class StyleCheckerVisitor(object):
  """
  Visits every item of processed program once, in order, and collects all
  violations.
  """

  def __init__(self, style):
    self.style = style
    self.errors = []

    self.handler_map = {
      CommentItem:        self.visit_comment,
      InstructionItem:    self.visit_instruction,
      DirectiveItem:      self.visit_directive,
      TrailingLabelsItem: self.visit_trailing_labels
    }

  def check_case(self, word, span, token, expected):
    if conforms(word, expected):
      return

    self.errors.append(CaseStyleError(span, token, expected, classify(word)))

  def check_labels(self, labels):
    for label in labels:
      self.check_case(label.name, label.span, label.content, self.style.label_style)

      if label.has_colon != self.style.colon_after_label:
        self.errors.append(ColonStyleError(label.span, label.content, self.style.colon_after_label))

  def visit_comment(self, item):
    pass

  def visit_instruction(self, item):
    self.check_labels(item.labels)

    instruction = item.instruction
    self.check_case(instruction.content, instruction.span, instruction.content, self.style.instruction_style)

  def visit_directive(self, item):
    self.check_labels(item.labels)

    directive = item.directive
    self.check_case(directive.name, directive.span, directive.content, self.style.directive_style)

  def visit_trailing_labels(self, item):
    self.check_labels(item.labels)

  def visit(self, item):
    self.handler_map[item.__class__](item)

class Linter(LoggingCapable, object):
  def __init__(self, style = None, logger = None):
    super(Linter, self).__init__(logger)

    self.style = style or LintStyle()

  def check(self, program):
    """
    Check processed program.

    :rtype: list of StyleViolation
    :returns: all violations, in source order. Empty list means the program
      is clean.
    """

    visitor = StyleCheckerVisitor(self.style)

    for item in program:
      visitor.visit(item)

    self.DEBUG('Linter: %d items, %d violations', len(program), len(visitor.errors))

    return visitor.errors

def lint_source(text, style = None, filename = None, logger = None):
  """
  Parse source text and return its style violations.

  :raises lc3toolchain.errors.AssemblerError: on syntax error.
  """

  return Linter(style = style, logger = logger).check(get_ast(text, filename = filename, logger = logger))
