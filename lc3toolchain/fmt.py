"""
Layout formatter. Renders processed program in canonical layout: one
statement per line, labels on their own lines, all trailing comments aligned
to a single column, and blank lines between blocks.
"""

from .asm import get_ast
from .asm.ast import DirectiveType
from .asm.lexer import is_plain_identifier
from .asm.transform import CommentItem, InstructionItem, DirectiveItem, TrailingLabelsItem, StatementItem
from .config import Style
from .util import LoggingCapable

CONFIG_FILENAME = 'lc3-fmt.conf'

class FormatStyle(Style):
  """
  Layout settings. Indentations are counted in spaces, spacings in blank
  lines.
  """

  SECTION = 'format-style'
  OPTIONS = (
    ('indent-directive',              'indent_directive',              3),
    ('indent-instruction',            'indent_instruction',            4),
    ('indent-label',                  'indent_label',                  0),
    ('indent-min-comment-from-block', 'indent_min_comment_from_block', 1),
    ('space-block-to-comment',        'space_block_to_comment',        1),
    ('space-comment-stick-to-body',   'space_comment_stick_to_body',   0),
    ('space-from-label-block',        'space_from_label_block',        1),
    ('space-from-start-end-block',    'space_from_start_end_block',    1),
    ('colon-after-label',             'colon_after_label',             True)
  )

def is_directive(item, directive_type):
  return isinstance(item, DirectiveItem) and item.directive.type == directive_type

def render_comment(comment):
  return ';' + comment.text

def render_statement(statement):
  if not statement.operands:
    return statement.content

  return statement.content + ' ' + ', '.join(operand.content for operand in statement.operands)

class Formatter(LoggingCapable, object):
  """
  :param FormatStyle style: layout settings, defaults are used when not set.
  """

  def __init__(self, style = None, logger = None):
    super(Formatter, self).__init__(logger)

    self.style = style or FormatStyle()
    self.contents = None

    self.handler_map = {
      CommentItem:        self.render_comment_item,
      InstructionItem:    self.render_instruction_item,
      DirectiveItem:      self.render_directive_item,
      TrailingLabelsItem: self.render_trailing_labels_item
    }

  def render_label(self, label):
    # without colon, keywords and hex numbers would not be read back as labels
    if self.style.colon_after_label or not is_plain_identifier(label.name):
      name = label.name + ':'

    else:
      name = label.name

    return ' ' * self.style.indent_label + name

  def render_labels(self, item):
    return [self.render_label(label) for label in item.labels]

  def render_comment_item(self, item):
    return [], render_comment(item.comment), None

  def render_statement_item(self, item, indent):
    comment = render_comment(item.comment) if item.comment is not None else None

    return self.render_labels(item), ' ' * indent + render_statement(item.statement), comment

  def render_instruction_item(self, item):
    return self.render_statement_item(item, self.style.indent_instruction)

  def render_directive_item(self, item):
    if item.directive.type in (DirectiveType.ORIG, DirectiveType.END):
      return self.render_statement_item(item, 0)

    return self.render_statement_item(item, self.style.indent_directive)

  def render_trailing_labels_item(self, item):
    return self.render_labels(item), '', None

  def render(self, item):
    """
    Render single item.

    :rtype: tuple
    :returns: ``(label lines, body, trailing comment or None)``.
    """

    return self.handler_map[item.__class__](item)

  def padding(self, current, following):
    """
    Count blank lines between two consecutive items. Each rule contributes
    independently, contributions are summed.
    """

    style = self.style
    lines = 0

    if isinstance(current, CommentItem) and isinstance(following, StatementItem):
      lines += style.space_comment_stick_to_body

    if isinstance(current, StatementItem) and not is_directive(current, DirectiveType.ORIG) and isinstance(following, CommentItem):
      lines += style.space_block_to_comment

    if isinstance(current, StatementItem) and not current.labels and isinstance(following, StatementItem) and following.labels:
      lines += style.space_from_label_block

    if is_directive(current, DirectiveType.ORIG) or is_directive(following, DirectiveType.END):
      lines += style.space_from_start_end_block

    return lines

  def format(self, program):
    """
    Format processed program.

    :param lc3toolchain.asm.transform.ProcessedProgram program: program to format.
    :rtype: str
    :returns: formatted source text. It is stored in ``contents`` as well.
    """

    items = list(program)
    lines = []

    for i, item in enumerate(items):
      following = items[i + 1] if i + 1 < len(items) else None

      labels, body, comment = self.render(item)
      lines.append((labels, body, comment, self.padding(item, following)))

    column = max([len(body) for _, body, _, _ in lines] or [0]) + self.style.indent_min_comment_from_block

    self.DEBUG('Formatter: %d items, comment column %d', len(items), column)

    buff = []

    for labels, body, comment, padding in lines:
      for label in labels:
        buff.append(label + '\n')

      buff.append(body + ' ' * (column - len(body)))

      if comment is not None:
        buff.append(comment)

      buff.append('\n' * (padding + 1))

    self.contents = ''.join(buff)

    return self.contents

def format_source(text, style = None, filename = None, logger = None):
  """
  Parse source text and return it formatted.

  :raises lc3toolchain.errors.AssemblerError: on syntax error.
  """

  return Formatter(style = style, logger = logger).format(get_ast(text, filename = filename, logger = logger))
