import re

from hypothesis import given
from hypothesis.strategies import lists, from_regex, booleans, tuples

from lc3toolchain.asm.ast import InstructionType, DirectiveType
from lc3toolchain.asm.lexer import classify_word
from lc3toolchain.asm.transform import CommentItem, InstructionItem, DirectiveItem, TrailingLabelsItem

from . import process

HEX_WORD = re.compile(r'^[xX][0-9a-fA-F]+$')

def label_names():
  return from_regex(r'\A[A-Za-z_][A-Za-z0-9_]{0,8}\Z').filter(lambda name: classify_word(name) == 'ID' and not HEX_WORD.match(name))

def label_names_of(item):
  return [label.name for label in item.labels]

def test_labels_attach_to_next_statement():
  program = process('FIRST\nSECOND:\nTHIRD ADD R1, R2, R3\nHALT')

  assert [type(item) for item in program] == [InstructionItem, InstructionItem]
  assert label_names_of(program.items[0]) == ['FIRST', 'SECOND', 'THIRD']
  assert program.items[1].labels == []

def test_labels_attach_to_directive():
  program = process('DATA .FILL x10')

  item = program.items[0]

  assert isinstance(item, DirectiveItem)
  assert item.directive.type == DirectiveType.FILL
  assert label_names_of(item) == ['DATA']

def test_trailing_labels():
  program = process('HALT\nEND_A\nEND_B:\n')

  assert [type(item) for item in program] == [InstructionItem, TrailingLabelsItem]
  assert label_names_of(program.items[1]) == ['END_A', 'END_B']

def test_trailing_comment_is_adopted():
  program = process('ADD R1, R2, R3 ; sum\n; standalone\nNOT R1, R2\n')

  assert [type(item) for item in program] == [InstructionItem, CommentItem, InstructionItem]
  assert program.items[0].comment.content == '; sum'
  assert program.items[1].comment.content == '; standalone'
  assert program.items[2].comment is None

def test_comment_on_next_line_stays_standalone():
  program = process('HALT\n; not mine')

  assert [type(item) for item in program] == [InstructionItem, CommentItem]
  assert program.items[0].comment is None

def test_directive_adopts_comment():
  program = process('.ORIG x3000 ; start')

  assert isinstance(program.items[0], DirectiveItem)
  assert program.items[0].comment.content == '; start'

def test_comment_after_label_stays_standalone():
  program = process('LOOP ; the loop\nBR LOOP')

  assert [type(item) for item in program] == [CommentItem, InstructionItem]
  assert label_names_of(program.items[1]) == ['LOOP']
  assert program.items[1].comment is None

def test_label_between_statement_and_comment():
  program = process('HALT NEXT ; comment\nNOP')

  assert [type(item) for item in program] == [InstructionItem, InstructionItem]
  assert program.items[0].comment.content == '; comment'
  assert label_names_of(program.items[1]) == ['NEXT']

def test_hybrid_comments_disabled():
  program = process('ADD R1, R2, R3 ; sum\nHALT', hybrid_inline_comment = False)

  assert [type(item) for item in program] == [InstructionItem, CommentItem, InstructionItem]
  assert program.items[0].comment is None

def test_locations():
  program = process('; header\n\n  LOOP:  ADD R1, R2, R3\n   .END')

  comment, instruction, directive = program.items

  assert (comment.location.lineno, comment.location.column) == (1, 1)
  assert (instruction.location.lineno, instruction.location.column) == (3, 10)
  assert instruction.location.filename == 'test.asm'
  assert instruction.instruction.type == InstructionType.ADD
  assert (directive.location.lineno, directive.location.column) == (4, 4)

def test_empty_program():
  assert len(process('')) == 0
  assert len(process('\n\n   \n')) == 0

@given(labels = lists(label_names(), min_size = 1, max_size = 8), colons = lists(booleans(), min_size = 8, max_size = 8))
def test_label_order_is_preserved(labels, colons):
  lines = [label + (':' if colon else '') for label, colon in zip(labels, colons)]

  program = process('\n'.join(lines) + '\nNOP\n')

  assert len(program) == 1
  assert label_names_of(program.items[0]) == labels

@given(labels = lists(label_names(), min_size = 1, max_size = 8))
def test_trailing_label_run(labels):
  program = process('NOP\n' + ' '.join(labels) + '\n')

  trailing = [item for item in program if isinstance(item, TrailingLabelsItem)]

  assert len(trailing) == 1
  assert program.items[-1] is trailing[0]
  assert label_names_of(trailing[0]) == labels

@given(statements = lists(tuples(booleans(), booleans()), max_size = 10))
def test_comment_attachment(statements):
  # (has trailing comment, followed by standalone comment)
  lines = []

  for i, (trailing, standalone) in enumerate(statements):
    lines.append('NOP' + (' ; trailing %d' % i if trailing else ''))

    if standalone:
      lines.append('; standalone %d' % i)

  program = process('\n'.join(lines))

  instructions = [item for item in program if isinstance(item, InstructionItem)]
  comments = [item for item in program if isinstance(item, CommentItem)]

  assert len(instructions) == len(statements)
  assert [item.comment is not None for item in instructions] == [trailing for trailing, _ in statements]
  assert len(comments) == len([standalone for _, standalone in statements if standalone])
  assert all(item.comment.content.startswith('; standalone') for item in comments)
