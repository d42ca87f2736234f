import pytest

from lc3toolchain.asm import SourceProcess
from lc3toolchain.asm.adapter import build_program
from lc3toolchain.asm.ast import Span, Comment, Label, Register, Immediate, HexAddress, StringLiteral, LabelReference
from lc3toolchain.asm.ast import Instruction, Directive, InstructionType, DirectiveType, RegisterType, BrType
from lc3toolchain.asm.parser import ParseNode
from lc3toolchain.errors import MalformedTreeError

from . import LOGGER

def adapt(code):
  process = SourceProcess(code, filename = 'test.asm', logger = LOGGER)
  process.parse()
  process.adapt()

  return process.program

def node(rule, text = '', children = None, start = 0):
  return ParseNode(rule, text, Span(start, start + len(text)), children = children)

def test_item_order():
  program = adapt('; header\nLOOP:\nNOT R1, R2\n.END\n')

  assert [type(item) for item in program] == [Comment, Label, Instruction, Directive]

def test_end_of_input_is_dropped():
  assert len(adapt('')) == 0
  assert len(adapt('HALT')) == 1

def test_add_register_and_immediate():
  register, immediate = adapt('ADD R1, R2, R3\nadd r1, r2, #-7').items

  assert register.type == InstructionType.ADD
  assert register.content == 'ADD'
  assert register.span == Span(0, 3)
  assert [type(o) for o in register.operands] == [Register, Register, Register]
  assert [o.register_type for o in register.operands] == [RegisterType.R1, RegisterType.R2, RegisterType.R3]

  assert immediate.content == 'add'
  assert [type(o) for o in immediate.operands] == [Register, Register, Immediate]
  assert immediate.operands[0].content == 'r1'
  assert immediate.operands[0].register_type == RegisterType.R1
  assert immediate.operands[2].content == '#-7'

@pytest.mark.parametrize('code, instruction_type, operand_types', [
  ('NOT R1, R2', InstructionType.NOT, [Register, Register]),
  ('LD R0, VALUE', InstructionType.LD, [Register, LabelReference]),
  ('LDI R1, PTR', InstructionType.LDI, [Register, LabelReference]),
  ('LDR R2, R0, #0', InstructionType.LDR, [Register, Register, Immediate]),
  ('LEA R3, MSG', InstructionType.LEA, [Register, LabelReference]),
  ('ST R0, VALUE', InstructionType.ST, [Register, LabelReference]),
  ('STI R1, PTR', InstructionType.STI, [Register, LabelReference]),
  ('STR R2, R0, x1', InstructionType.STR, [Register, Register, Immediate]),
  ('JMP R3', InstructionType.JMP, [Register]),
  ('JSR SUB', InstructionType.JSR, [LabelReference]),
  ('JSRR R3', InstructionType.JSRR, [Register]),
  ('NOP', InstructionType.NOP, []),
  ('RET', InstructionType.RET, []),
  ('HALT', InstructionType.HALT, []),
  ('PUTS', InstructionType.PUTS, []),
  ('GETC', InstructionType.GETC, []),
  ('OUT', InstructionType.OUT, []),
  ('IN', InstructionType.IN, []),
  ('TRAP x25', InstructionType.TRAP, [HexAddress])
])
def test_instruction_variants(code, instruction_type, operand_types):
  instruction = adapt(code).items[0]

  assert instruction.type == instruction_type
  assert [type(o) for o in instruction.operands] == operand_types
  assert instruction.condition is None

@pytest.mark.parametrize('mnemonic, condition', [
  ('BR', BrType.NONE),
  ('BRn', BrType.N),
  ('BRz', BrType.Z),
  ('BRp', BrType.P),
  ('BRnz', BrType.NZ),
  ('brZP', BrType.ZP),
  ('BRpn', BrType.NP),
  ('BRnzp', BrType.NZP),
  ('BRpzn', BrType.NZP)
])
def test_branch_conditions(mnemonic, condition):
  instruction = adapt('%s TARGET' % mnemonic).items[0]

  assert instruction.type == InstructionType.BR
  assert instruction.content == mnemonic
  assert instruction.condition == condition
  assert instruction.operands[0].content == 'TARGET'

@pytest.mark.parametrize('code, directive_type, operand_types', [
  ('.ORIG x3000', DirectiveType.ORIG, [HexAddress]),
  ('.END', DirectiveType.END, []),
  ('.BLKW #10', DirectiveType.BLKW, [Immediate]),
  ('.FILL x2A', DirectiveType.FILL, [Immediate]),
  ('.STRINGZ "Hi"', DirectiveType.STRINGZ, [StringLiteral])
])
def test_directive_variants(code, directive_type, operand_types):
  directive = adapt(code).items[0]

  assert directive.type == directive_type
  assert directive.content == code.split()[0]
  assert directive.name == code.split()[0][1:]
  assert [type(o) for o in directive.operands] == operand_types

def test_label_colon():
  with_colon, without_colon = adapt('START:\nLOOP\nHALT').items[:2]

  assert with_colon.content == 'START:'
  assert with_colon.name == 'START'
  assert with_colon.has_colon is True
  assert without_colon.name == 'LOOP'
  assert without_colon.has_colon is False

def test_root_must_be_program():
  with pytest.raises(MalformedTreeError):
    build_program(node('Instruction', 'NOP', children = [node('NOP', 'NOP')]))

  with pytest.raises(MalformedTreeError):
    build_program(None)

def test_unknown_item():
  root = node('Program', children = [node('Macro', '.macro'), node('EOI')])

  with pytest.raises(MalformedTreeError):
    build_program(root)

def test_wrong_arity():
  root = node('Program', children = [node('Instruction', 'NOT R1', children = [node('NOT', 'NOT'), node('Register', 'R1', start = 4)]), node('EOI')])

  with pytest.raises(MalformedTreeError) as excinfo:
    build_program(root)

  assert 'NOT expects 2 operands, 1 found' in excinfo.value.message

def test_wrong_operand_kind():
  root = node('Program', children = [node('Instruction', 'JMP LOOP', children = [node('JMP', 'JMP'), node('LabelReference', 'LOOP', start = 4)]), node('EOI')])

  with pytest.raises(MalformedTreeError):
    build_program(root)

def test_unknown_register():
  root = node('Program', children = [node('Instruction', 'JMP R9', children = [node('JMP', 'JMP'), node('Register', 'R9', start = 4)]), node('EOI')])

  with pytest.raises(MalformedTreeError):
    build_program(root)

def test_invalid_branch_suffix():
  root = node('Program', children = [node('Instruction', 'BRq L', children = [node('BR', 'BRq'), node('LabelReference', 'L', start = 4)]), node('EOI')])

  with pytest.raises(MalformedTreeError):
    build_program(root)

def test_unknown_mnemonic():
  root = node('Program', children = [node('Instruction', 'MUL', children = [node('MUL', 'MUL')]), node('EOI')])

  with pytest.raises(MalformedTreeError):
    build_program(root)

def test_statement_without_mnemonic():
  root = node('Program', children = [node('Directive', ''), node('EOI')])

  with pytest.raises(MalformedTreeError):
    build_program(root)
