"""
Grammar of the assembly language. The parser produces a generic concrete
syntax tree of ``ParseNode`` objects, typed tree is built from it by
:py:mod:`lc3toolchain.asm.adapter`.
"""

import ply.yacc

from .lexer import tokens  # NOQA
from .lexer import instructions, directives, describe_token
from .ast import Span

start = 'program'

class ParseNode(object):
  """
  Node of concrete syntax tree.

  :param str rule: name of the grammar rule, or token type for leaves.
  :param str text: source text covered by the node.
  :param Span span: position of the text.
  :param list children: child nodes, in source order.
  """

  __slots__ = ('rule', 'text', 'span', 'children')

  def __init__(self, rule, text, span, children = None):
    self.rule = rule
    self.text = text
    self.span = span
    self.children = children or []

  def __repr__(self):
    return '<ParseNode: rule=%s, text="%s", children=%d>' % (self.rule, self.text, len(self.children))

def leaf(p, n, rule = None):
  value = p[n]
  pos = p.lexpos(n)

  return ParseNode(rule or p.slice[n].type, value, Span(pos, pos + len(value)))

def branch(p, rule, children):
  span = Span(children[0].span.start, children[-1].span.end)

  return ParseNode(rule, p.lexer.lexdata[span.start:span.end], span, children = children)

def p_program(p):
  '''program : items
             | empty
             '''

  items = p[1] or []
  end = len(p.lexer.lexdata)

  p[0] = ParseNode('Program', p.lexer.lexdata, Span(0, end), children = items + [ParseNode('EOI', '', Span(end, end))])

def p_empty(p):
  'empty :'

  p[0] = None

def p_items_1(p):
  'items : item'

  p[0] = [p[1]]

def p_items_2(p):
  'items : items item'

  p[1].append(p[2])
  p[0] = p[1]

def p_item(p):
  '''item : comment
          | label
          | instruction
          | directive
          '''

  p[0] = p[1]

def p_comment(p):
  'comment : COMMENT'

  p[0] = leaf(p, 1, rule = 'Comment')

def p_label(p):
  '''label : LABEL
           | ID
           '''

  p[0] = leaf(p, 1, rule = 'Label')

# Operands
def p_register(p):
  'register : REGISTER'

  p[0] = leaf(p, 1, rule = 'Register')

def p_immediate(p):
  '''immediate : IMMEDIATE
               | HEX
               '''

  p[0] = leaf(p, 1, rule = 'Immediate')

def p_register_or_immediate(p):
  '''register-or-immediate : register
                           | immediate
                           '''

  p[0] = p[1]

def p_hex_address(p):
  'hex-address : HEX'

  p[0] = leaf(p, 1, rule = 'HexAddress')

def p_label_reference(p):
  'label-reference : ID'

  p[0] = leaf(p, 1, rule = 'LabelReference')

def p_string_literal(p):
  'string-literal : STRING'

  p[0] = leaf(p, 1, rule = 'StringLiteral')

# Mnemonics
def p_mnemonic(p):
  '''arith-name           : ADD
                          | AND
     not-name             : NOT
     mem-name             : LD
                          | LDI
                          | LEA
                          | ST
                          | STI
     mem-offset-name      : LDR
                          | STR
     reference-name       : BR
                          | JSR
     jump-name            : JMP
                          | JSRR
     noop-name            : NOP
                          | RET
                          | HALT
                          | PUTS
                          | GETC
                          | OUT
                          | IN
     trap-name            : TRAP
     orig-name            : ORIG
     end-name             : END
     value-directive-name : BLKW
                          | FILL
     stringz-name         : STRINGZ
     '''

  p[0] = leaf(p, 1)

# Instructions
def p_instruction(p):
  '''instruction : arith-instr
                 | not-instr
                 | mem-instr
                 | mem-offset-instr
                 | reference-instr
                 | jump-instr
                 | noop-instr
                 | trap-instr
                 '''

  p[0] = p[1]

def p_instruction_shape(p):
  '''arith-instr      : arith-name register register register-or-immediate
     not-instr        : not-name register register
     mem-instr        : mem-name register label-reference
     mem-offset-instr : mem-offset-name register register immediate
     reference-instr  : reference-name label-reference
     jump-instr       : jump-name register
     noop-instr       : noop-name
     trap-instr       : trap-name hex-address
     '''

  p[0] = branch(p, 'Instruction', p[1:])

# Assembler directives
def p_directive(p):
  '''directive         : orig-directive
                       | end-directive
                       | value-directive
                       | stringz-directive
     '''

  p[0] = p[1]

def p_directive_shape(p):
  '''orig-directive    : orig-name hex-address
     end-directive     : end-name
     value-directive   : value-directive-name immediate
     stringz-directive : stringz-name string-literal
     '''

  p[0] = branch(p, 'Directive', p[1:])

class _SyntaxAbort(Exception):
  def __init__(self, token):
    super(_SyntaxAbort, self).__init__()

    self.token = token

def p_error(t):
  raise _SyntaxAbort(t)

def summarize_expected(token_types):
  """
  Turn list of token types acceptable by the parser into readable
  descriptions. When every mnemonic (or every directive) is acceptable,
  they are replaced by a single ``instruction`` (``directive``) entry.
  """

  token_types = set(token_types)
  descriptions = []

  for group, name in ((instructions, 'instruction'), (directives, 'directive')):
    if token_types.issuperset(group):
      token_types.difference_update(group)
      descriptions.append(name)

  return sorted(descriptions + [describe_token(token_type) for token_type in token_types])

_parser = None

class AssemblyParser(object):
  def __init__(self, lexer):
    global _parser

    self._lexer = lexer

    if _parser is None:
      _parser = ply.yacc.yacc(debug = False, write_tables = False, errorlog = ply.yacc.NullLogger())

    self._parser = _parser

  def expected_tokens(self):
    state = self._parser.statestack[-1]

    return [token_type for token_type in self._parser.action[state].keys() if token_type != 'error']

  def get_error(self, token):
    from ..errors import AssemblyParseError

    expected = summarize_expected(self.expected_tokens())

    if token is None:
      offset = len(self._lexer.index.text) - 1
      return AssemblyParseError(expected = expected, location = self._lexer.get_location(offset, 1), line = self._lexer.get_line(offset))

    return AssemblyParseError(found = token.value, expected = expected, location = self._lexer.get_location(token.lexpos, len(token.value)), line = self._lexer.get_line(token.lexpos))

  def parse(self, s):
    """
    Parse source text.

    :param str s: source text.
    :rtype: ParseNode
    :returns: root of concrete syntax tree, with ``Program`` rule.
    :raises lc3toolchain.errors.AssemblerError: when the text is not a valid
      program.
    """

    try:
      return self._parser.parse(s, lexer = self._lexer)

    except _SyntaxAbort as exc:
      raise self.get_error(exc.token) from None
