import os
import logging

import lc3toolchain.asm
import lc3toolchain.fmt
import lc3toolchain.lint

LOGGER = logging.getLogger()

DATA_DIR = os.path.join(os.path.dirname(__file__), 'data')


#
# Hypothesis setup
#
from hypothesis import settings, HealthCheck

DEFAULT_EXAMPLES = 200

PROFILES = {
  'quick':    20,
  'default':  DEFAULT_EXAMPLES,
  'thorough': 1000
}

def _create_profile(max_examples):
  return settings(max_examples = max_examples, deadline = None, suppress_health_check = [HealthCheck.too_slow])

if 'HYPOTHESIS_PROFILE' in os.environ:
  profile = os.environ['HYPOTHESIS_PROFILE'].lower()

  if profile not in PROFILES:
    LOGGER.warning('Unknown hypothesis profile "%s"', profile)
    profile = _create_profile(DEFAULT_EXAMPLES)

  else:
    profile = _create_profile(PROFILES[profile])

  settings.register_profile('lc3toolchain-profile', profile)

else:
  settings.register_profile('lc3toolchain-profile', _create_profile(DEFAULT_EXAMPLES))

settings.load_profile('lc3toolchain-profile')


def data_path(*parts):
  return os.path.join(DATA_DIR, *parts)

def read_data(*parts):
  with open(data_path(*parts), 'r') as f:
    return f.read()

def process(code, hybrid_inline_comment = True):
  LOGGER.debug('process code:')
  LOGGER.debug(code)
  LOGGER.debug('~~~~~')

  return lc3toolchain.asm.get_ast(code, filename = 'test.asm', hybrid_inline_comment = hybrid_inline_comment, logger = LOGGER)

def format_code(code, **kwargs):
  return lc3toolchain.fmt.format_source(code, style = lc3toolchain.fmt.FormatStyle(**kwargs), filename = 'test.asm', logger = LOGGER)

def lint_code(code, **kwargs):
  return lc3toolchain.lint.lint_source(code, style = lc3toolchain.lint.LintStyle(**kwargs), filename = 'test.asm', logger = LOGGER)

def assert_raises(callable, exc_class, message = ''):
  try:
    callable()

  except exc_class as exc:
    return exc

  else:
    assert False, message
