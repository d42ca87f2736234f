import enum

class Span(object):
  """
  Half-open range ``[start, end)`` of character offsets into the source text.
  """

  __slots__ = ('start', 'end')

  def __init__(self, start, end):
    self.start = start
    self.end = end

  def __len__(self):
    return self.end - self.start

  def __eq__(self, other):
    return isinstance(other, Span) and self.start == other.start and self.end == other.end

  def __ne__(self, other):
    return not self.__eq__(other)

  def __hash__(self):
    return hash((self.start, self.end))

  def __repr__(self):
    return '<Span: %d-%d>' % (self.start, self.end)

class SourceLocation(object):
  __slots__ = ('filename', 'lineno', 'column', 'length')

  def __init__(self, filename = None, lineno = None, column = None, length = None):
    self.filename = filename
    self.lineno = lineno
    self.column = column
    self.length = length

  def copy(self):
    return SourceLocation(filename = self.filename, lineno = self.lineno, column = self.column, length = self.length)

  def same_line(self, other):
    return other is not None and self.lineno == other.lineno

  def __eq__(self, other):
    return isinstance(other, SourceLocation) and (self.filename, self.lineno, self.column) == (other.filename, other.lineno, other.column)

  def __ne__(self, other):
    return not self.__eq__(other)

  def __hash__(self):
    return hash((self.filename, self.lineno, self.column))

  def __str__(self):
    t = [str(self.filename) if self.filename is not None else '<input>', str(self.lineno)]

    if self.column is not None:
      t.append(str(self.column))

    return ':'.join(t)

  def __repr__(self):
    return self.__str__()

class Token(object):
  """
  Base class of all leaves of the abstract tree. Carries the verbatim source
  text, no value is ever computed from it.

  :param str content: text as written in the source.
  :param Span span: where the text lies in the source.
  """

  __slots__ = ('content', 'span')

  def __init__(self, content, span):
    self.content = content
    self.span = span

  def __eq__(self, other):
    return type(self) is type(other) and self.content == other.content and self.span == other.span

  def __ne__(self, other):
    return not self.__eq__(other)

  def __hash__(self):
    return hash((self.__class__.__name__, self.content, self.span))

  def __repr__(self):
    return '<%s: "%s">' % (self.__class__.__name__, self.content)

class Comment(Token):
  __slots__ = Token.__slots__

  @property
  def text(self):
    """
    Comment text without the leading ``;`` and surrounding whitespace.
    """

    return self.content[1:].strip()

class Label(Token):
  __slots__ = Token.__slots__

  @property
  def name(self):
    return self.content[:-1] if self.content.endswith(':') else self.content

  @property
  def has_colon(self):
    return self.content.endswith(':')

  def __repr__(self):
    return '<Label: name="%s">' % self.name

class RegisterType(enum.Enum):
  R0 = 0
  R1 = 1
  R2 = 2
  R3 = 3
  R4 = 4
  R5 = 5
  R6 = 6
  R7 = 7

class Register(Token):
  __slots__ = Token.__slots__ + ('register_type',)

  def __init__(self, content, span, register_type):
    super(Register, self).__init__(content, span)

    self.register_type = register_type

  def __repr__(self):
    return '<Register: %s>' % self.register_type.name

class Immediate(Token):
  __slots__ = Token.__slots__

class HexAddress(Token):
  __slots__ = Token.__slots__

class StringLiteral(Token):
  __slots__ = Token.__slots__

class LabelReference(Token):
  __slots__ = Token.__slots__

class BrType(enum.Enum):
  """
  Condition codes tested by a branch. ``NONE`` stands for bare ``BR``.
  """

  N = 'n'
  Z = 'z'
  P = 'p'
  NZ = 'nz'
  ZP = 'zp'
  NP = 'np'
  NZP = 'nzp'
  NONE = ''

  @classmethod
  def from_flags(cls, n, z, p):
    return cls(('n' if n else '') + ('z' if z else '') + ('p' if p else ''))

class InstructionType(enum.Enum):
  ADD = 'ADD'
  AND = 'AND'
  NOT = 'NOT'
  LD = 'LD'
  LDI = 'LDI'
  LDR = 'LDR'
  LEA = 'LEA'
  ST = 'ST'
  STI = 'STI'
  STR = 'STR'
  BR = 'BR'
  JMP = 'JMP'
  JSR = 'JSR'
  JSRR = 'JSRR'
  NOP = 'NOP'
  RET = 'RET'
  HALT = 'HALT'
  PUTS = 'PUTS'
  GETC = 'GETC'
  OUT = 'OUT'
  IN = 'IN'
  TRAP = 'TRAP'

class DirectiveType(enum.Enum):
  ORIG = 'ORIG'
  END = 'END'
  BLKW = 'BLKW'
  FILL = 'FILL'
  STRINGZ = 'STRINGZ'

class Statement(object):
  """
  Base class of instructions and directives.

  :param type: member of ``InstructionType`` or ``DirectiveType``.
  :param str content: mnemonic, as written in the source.
  :param Span span: span of the mnemonic.
  :param tuple operands: operand tokens, in source order.
  """

  __slots__ = ('type', 'content', 'span', 'operands')

  def __init__(self, type, content, span, operands = None):
    self.type = type
    self.content = content
    self.span = span
    self.operands = tuple(operands or ())

  def __eq__(self, other):
    return type(self) is type(other) and (self.type, self.content, self.span, self.operands) == (other.type, other.content, other.span, other.operands)

  def __ne__(self, other):
    return not self.__eq__(other)

  def __hash__(self):
    return hash((self.type, self.content, self.span))

  def __repr__(self):
    return '<%s: %s %s>' % (self.__class__.__name__, self.content, ', '.join(o.content for o in self.operands))

class Instruction(Statement):
  """
  :param BrType condition: condition codes of ``BR`` instruction, ``None``
    for all other instructions.
  """

  __slots__ = Statement.__slots__ + ('condition',)

  def __init__(self, type, content, span, operands = None, condition = None):
    super(Instruction, self).__init__(type, content, span, operands = operands)

    self.condition = condition

class Directive(Statement):
  __slots__ = Statement.__slots__

  @property
  def name(self):
    """
    Directive name without the leading dot.
    """

    return self.content[1:]

class Program(object):
  """
  Ordered list of comments, labels, instructions and directives of one
  source file. Labels are separate items, not yet attached to anything.
  """

  __slots__ = ('items',)

  def __init__(self, items = None):
    self.items = list(items or [])

  def __iter__(self):
    return iter(self.items)

  def __len__(self):
    return len(self.items)

  def __repr__(self):
    return '<Program: items=%d>' % len(self.items)
