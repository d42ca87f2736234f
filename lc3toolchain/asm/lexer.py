import re

import ply.lex

from .ast import SourceLocation
from .position import PositionIndex

#
# Lexer setup
#
instructions = (
  'ADD', 'AND', 'NOT',
  'LD', 'LDI', 'LDR', 'LEA', 'ST', 'STI', 'STR',
  'BR', 'JMP', 'JSR', 'JSRR',
  'NOP', 'RET', 'HALT', 'PUTS', 'GETC', 'OUT', 'IN', 'TRAP'
)

directives = (
  'ORIG', 'END', 'BLKW', 'FILL', 'STRINGZ'
)

tokens = instructions + directives + (
  'COMMENT', 'LABEL', 'ID', 'REGISTER',
  'IMMEDIATE', 'HEX', 'STRING'
)

# Branch mnemonics are matched separately, see ``classify_word``
reserved_map = {i.lower(): i for i in instructions if i != 'BR'}
reserved_map.update({'.' + d.lower(): d for d in directives})

REGISTER_PATTERN = re.compile(r'^[rR][0-7]$')
BRANCH_PATTERN = re.compile(r'^[bB][rR]([nNzZpP]*)$')
HEX_PATTERN = re.compile(r'^[xX]-?[0-9a-fA-F]+$')

TOKEN_DESCRIPTIONS = {
  'COMMENT':   'comment',
  'LABEL':     'label',
  'ID':        'identifier',
  'REGISTER':  'register',
  'IMMEDIATE': 'immediate',
  'HEX':       'hex address',
  'STRING':    'string literal',
  '$end':      'end of input'
}

TOKEN_DESCRIPTIONS.update({d: '.' + d for d in directives})

def describe_token(token_type):
  return TOKEN_DESCRIPTIONS.get(token_type, token_type)

def is_branch(word):
  m = BRANCH_PATTERN.match(word)
  if m is None:
    return False

  flags = m.group(1).upper()
  return len(set(flags)) == len(flags)

def classify_word(word):
  """
  Decide token type of a word. Words are matched case-insensitively, and the
  trailing colon always makes a label, even of a mnemonic.
  """

  if word.endswith(':'):
    return 'LABEL'

  if REGISTER_PATTERN.match(word):
    return 'REGISTER'

  if is_branch(word):
    return 'BR'

  return reserved_map.get(word.lower(), 'ID')

def is_plain_identifier(word):
  """
  Return ``True`` when ``word`` standing alone is lexed as an identifier. Other
  words, e.g. ``ADD``, ``R6`` or ``xAB``, need a colon to be a label.
  """

  return classify_word(word) == 'ID' and not HEX_PATTERN.match(word)

# Newlines
def t_NEWLINE(t):
  r'\n+'

  t.lexer.lineno += t.value.count('\n')

def t_COMMENT(t):
  r';[^\n]*'

  t.value = t.value.rstrip('\r')
  return t

def t_STRING(t):
  r'"([^"\\\n]|\\.)*"'

  return t

def t_DIRECTIVE(t):
  r'\.[A-Za-z]+'

  t.type = reserved_map.get(t.value.lower())

  if t.type is None:
    from ..errors import UnknownDirectiveError

    raise UnknownDirectiveError(info = t.value, location = t.lexer.owner.get_location(t.lexpos, len(t.value)), line = t.lexer.owner.get_line(t.lexpos))

  return t

def t_HEX(t):
  r'[xX]-?[0-9a-fA-F]+(?![A-Za-z0-9_:])'

  return t

def t_WORD(t):
  r'[A-Za-z_][A-Za-z0-9_]*:?'

  t.type = classify_word(t.value)
  return t

def t_IMMEDIATE(t):
  r'\#?[+-]?[0-9]+'

  return t

# Commas between operands are optional
t_ignore = ' \t\r,'

def t_error(t):
  from ..errors import AssemblySyntaxError

  raise AssemblySyntaxError(c = t.value[0], location = t.lexer.owner.get_location(t.lexpos, 1), line = t.lexer.owner.get_line(t.lexpos))

_lexer = None

class AssemblyLexer(object):
  """
  Tokenizer of one source text.

  :param str filename: name used in error locations.
  """

  def __init__(self, filename = None):
    global _lexer

    if _lexer is None:
      _lexer = ply.lex.lex()

    self._lexer = _lexer.clone()
    self._lexer.owner = self

    self.filename = filename
    self.index = None

  def get_location(self, offset, length = None):
    lineno, column = self.index.location(min(offset, len(self.index.text) - 1))

    return SourceLocation(filename = self.filename, lineno = lineno, column = column, length = length)

  def get_line(self, offset):
    lineno, _ = self.index.location(min(offset, len(self.index.text) - 1))

    return self.index.line(lineno)

  @property
  def lexdata(self):
    return self._lexer.lexdata

  def token(self, *args, **kwargs):
    return self._lexer.token(*args, **kwargs)

  def input(self, text, *args, **kwargs):
    self.index = PositionIndex(text)

    self._lexer.lineno = 1

    return self._lexer.input(text, *args, **kwargs)

  def tokenize(self, text):
    """
    Return list of all tokens of ``text``.
    """

    self.input(text)

    return list(iter(self.token, None))
