"""
Conversion of the concrete syntax tree into the typed abstract program.
"""

from .ast import Comment, Label, Register, RegisterType, Immediate, HexAddress, StringLiteral, LabelReference
from .ast import BrType, InstructionType, DirectiveType, Instruction, Directive, Program
from .lexer import is_branch
from ..errors import MalformedTreeError

def build_register(node):
  try:
    register_type = RegisterType[node.text.upper()]

  except KeyError:
    raise MalformedTreeError('unknown register "%s"' % node.text, node = node) from None

  return Register(node.text, node.span, register_type)

def build_token(klass):
  def __build(node):
    return klass(node.text, node.span)

  return __build

OPERAND_BUILDERS = {
  'Register':       build_register,
  'Immediate':      build_token(Immediate),
  'HexAddress':     build_token(HexAddress),
  'StringLiteral':  build_token(StringLiteral),
  'LabelReference': build_token(LabelReference)
}

REGISTER = ('Register',)
IMMEDIATE = ('Immediate',)
REGISTER_OR_IMMEDIATE = ('Register', 'Immediate')
HEX_ADDRESS = ('HexAddress',)
LABEL_REFERENCE = ('LabelReference',)
STRING_LITERAL = ('StringLiteral',)

#: Instruction tag -> (instruction type, accepted tags of each operand)
INSTRUCTION_SHAPES = {
  'ADD':  (InstructionType.ADD,  (REGISTER, REGISTER, REGISTER_OR_IMMEDIATE)),
  'AND':  (InstructionType.AND,  (REGISTER, REGISTER, REGISTER_OR_IMMEDIATE)),
  'NOT':  (InstructionType.NOT,  (REGISTER, REGISTER)),
  'LD':   (InstructionType.LD,   (REGISTER, LABEL_REFERENCE)),
  'LDI':  (InstructionType.LDI,  (REGISTER, LABEL_REFERENCE)),
  'LDR':  (InstructionType.LDR,  (REGISTER, REGISTER, IMMEDIATE)),
  'LEA':  (InstructionType.LEA,  (REGISTER, LABEL_REFERENCE)),
  'ST':   (InstructionType.ST,   (REGISTER, LABEL_REFERENCE)),
  'STI':  (InstructionType.STI,  (REGISTER, LABEL_REFERENCE)),
  'STR':  (InstructionType.STR,  (REGISTER, REGISTER, IMMEDIATE)),
  'BR':   (InstructionType.BR,   (LABEL_REFERENCE,)),
  'JMP':  (InstructionType.JMP,  (REGISTER,)),
  'JSR':  (InstructionType.JSR,  (LABEL_REFERENCE,)),
  'JSRR': (InstructionType.JSRR, (REGISTER,)),
  'NOP':  (InstructionType.NOP,  ()),
  'RET':  (InstructionType.RET,  ()),
  'HALT': (InstructionType.HALT, ()),
  'PUTS': (InstructionType.PUTS, ()),
  'GETC': (InstructionType.GETC, ()),
  'OUT':  (InstructionType.OUT,  ()),
  'IN':   (InstructionType.IN,   ()),
  'TRAP': (InstructionType.TRAP, (HEX_ADDRESS,))
}

#: Directive tag -> (directive type, accepted tags of each operand)
DIRECTIVE_SHAPES = {
  'ORIG':    (DirectiveType.ORIG,    (HEX_ADDRESS,)),
  'END':     (DirectiveType.END,     ()),
  'BLKW':    (DirectiveType.BLKW,    (IMMEDIATE,)),
  'FILL':    (DirectiveType.FILL,    (IMMEDIATE,)),
  'STRINGZ': (DirectiveType.STRINGZ, (STRING_LITERAL,))
}

def branch_condition(node):
  """
  Classify condition codes of a branch mnemonic, e.g. ``BRnz``.
  """

  if not is_branch(node.text):
    raise MalformedTreeError('invalid branch mnemonic "%s"' % node.text, node = node)

  flags = node.text[2:].upper()

  return BrType.from_flags('N' in flags, 'Z' in flags, 'P' in flags)

def build_operands(node, shape):
  operands = node.children[1:]

  if len(operands) != len(shape):
    raise MalformedTreeError('%s expects %d operands, %d found' % (node.children[0].rule, len(shape), len(operands)), node = node)

  built = []

  for operand, accepted in zip(operands, shape):
    if operand.rule not in accepted:
      raise MalformedTreeError('%s operand expected, %s found' % (' or '.join(accepted), operand.rule), node = operand)

    built.append(OPERAND_BUILDERS[operand.rule](operand))

  return built

def get_keyword(node):
  if not node.children:
    raise MalformedTreeError('%s without mnemonic' % node.rule, node = node)

  return node.children[0]

def build_instruction(node):
  keyword = get_keyword(node)

  if keyword.rule not in INSTRUCTION_SHAPES:
    raise MalformedTreeError('unknown instruction "%s"' % keyword.rule, node = keyword)

  instruction_type, shape = INSTRUCTION_SHAPES[keyword.rule]
  condition = branch_condition(keyword) if instruction_type == InstructionType.BR else None

  return Instruction(instruction_type, keyword.text, keyword.span, operands = build_operands(node, shape), condition = condition)

def build_directive(node):
  keyword = get_keyword(node)

  if keyword.rule not in DIRECTIVE_SHAPES:
    raise MalformedTreeError('unknown directive "%s"' % keyword.rule, node = keyword)

  directive_type, shape = DIRECTIVE_SHAPES[keyword.rule]

  return Directive(directive_type, keyword.text, keyword.span, operands = build_operands(node, shape))

ITEM_BUILDERS = {
  'Comment':     build_token(Comment),
  'Label':       build_token(Label),
  'Instruction': build_instruction,
  'Directive':   build_directive
}

def build_program(root, logger = None):
  """
  Translate concrete syntax tree into an abstract program.

  :param lc3toolchain.asm.parser.ParseNode root: tree with ``Program`` root.
  :rtype: lc3toolchain.asm.ast.Program
  :raises lc3toolchain.errors.MalformedTreeError: when the tree does not have
    expected shape.
  """

  if root is None or root.rule != 'Program':
    raise MalformedTreeError('root is not a program: %r' % root, node = root)

  items = []

  for node in root.children:
    if node.rule == 'EOI':
      break

    if node.rule not in ITEM_BUILDERS:
      raise MalformedTreeError('unexpected item "%s"' % node.rule, node = node)

    item = ITEM_BUILDERS[node.rule](node)

    if logger is not None:
      logger.debug('  %r', item)

    items.append(item)

  return Program(items)
