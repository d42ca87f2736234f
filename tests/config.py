import os
import pytest

from lc3toolchain.config import StyleConfig, bool2option, option2enum, load_config
from lc3toolchain.errors import ConfigError
from lc3toolchain.fmt import FormatStyle
from lc3toolchain.lint import CaseStyle, LintStyle

def create_config(text):
  config = StyleConfig()
  config.read_string(text)
  return config

def test_bool2option():
  assert bool2option(True) == 'yes'
  assert bool2option(False) == 'no'

@pytest.mark.parametrize('value', ['snake_case', 'SnakeCase', 'snake-case', 'SNAKE_CASE', 'snakecase'])
def test_option2enum(value):
  assert option2enum(CaseStyle, value) == CaseStyle.SnakeCase

@pytest.mark.parametrize('value, member', [
  ('lowerCamelCase',       CaseStyle.LowerCamelCase),
  ('UpperCamelCase',       CaseStyle.UpperCamelCase),
  ('SCREAMING_SNAKE_CASE', CaseStyle.ScreamingSnakeCase)
])
def test_option2enum_style_names(value, member):
  assert option2enum(CaseStyle, value) == member

def test_option2enum_unknown():
  with pytest.raises(ValueError):
    option2enum(CaseStyle, 'kebab-case')

def test_missing_values():
  config = create_config('[format-style]\n')

  assert config.get('format-style', 'foo') is None
  assert config.get('format-style', 'foo', default = 'bar') == 'bar'
  assert config.get('missing-section', 'foo', default = 'bar') == 'bar'
  assert config.getint('format-style', 'foo', default = 7) == 7
  assert config.getbool('format-style', 'foo', default = True) is True

@pytest.mark.parametrize('value, expected', [
  ('yes', True), ('on', True), ('1', True), ('True', True),
  ('no', False), ('off', False), ('0', False), ('FALSE', False)
])
def test_getbool(value, expected):
  config = create_config('[s]\nflag = %s\n' % value)

  assert config.getbool('s', 'flag') is expected

def test_set_adds_section():
  config = StyleConfig()
  config.set('lint-style', 'colon-after-label', 'yes')

  assert config.has_section('lint-style')
  assert config.getbool('lint-style', 'colon-after-label') is True

def test_partial_format_config():
  style = FormatStyle.from_config(create_config('[format-style]\nindent-instruction = 8\ncolon-after-label = no\n'))

  assert style.indent_instruction == 8
  assert style.colon_after_label is False
  assert style.indent_directive == 3
  assert style.space_from_label_block == 1

def test_empty_config():
  assert FormatStyle.from_config(StyleConfig()) == FormatStyle()
  assert LintStyle.from_config(StyleConfig()) == LintStyle()

def test_other_section_ignored():
  style = FormatStyle.from_config(create_config('[lint-style]\nlabel-style = snake_case\n[format-style]\nindent-label = 2\n'))

  assert style == FormatStyle(indent_label = 2)

@pytest.mark.parametrize('text', [
  '[format-style]\ncolon-after-label = maybe\n',
  '[format-style]\nindent-instruction = four\n',
  '[format-style]\nspace-block-to-comment = -1\n'
])
def test_invalid_format_config(text):
  with pytest.raises(ConfigError):
    FormatStyle.from_config(create_config(text))

def test_invalid_case_style():
  with pytest.raises(ConfigError) as excinfo:
    LintStyle.from_config(create_config('[lint-style]\nlabel-style = kebab-case\n'))

  assert 'lint-style.label-style' in excinfo.value.message

@pytest.mark.parametrize('style', [
  FormatStyle(),
  FormatStyle(indent_directive = 0, indent_instruction = 2, indent_label = 4, space_comment_stick_to_body = 1, colon_after_label = False),
  LintStyle(),
  LintStyle(colon_after_label = True, label_style = CaseStyle.SnakeCase, directive_style = CaseStyle.LowerCamelCase)
])
def test_round_trip(style):
  config = create_config(style.to_config().dumps())

  assert style.__class__.from_config(config) == style

def test_unknown_style_setting():
  with pytest.raises(TypeError):
    FormatStyle(indent_everything = 2)

def test_load_config(tmp_path):
  path = tmp_path / 'lc3-fmt.conf'
  path.write_text('[format-style]\nindent-label = 1\n')

  config = load_config(str(path))

  assert FormatStyle.from_config(config).indent_label == 1

def test_load_missing_config(tmp_path):
  with pytest.raises(ConfigError) as excinfo:
    load_config(os.path.join(str(tmp_path), 'lc3-fmt.conf'))

  assert 'Cannot read config file' in excinfo.value.message

def test_load_broken_config(tmp_path):
  path = tmp_path / 'lc3-fmt.conf'
  path.write_text('indent-label = 1\n')

  with pytest.raises(ConfigError) as excinfo:
    load_config(str(path))

  assert 'Cannot parse config file' in excinfo.value.message
