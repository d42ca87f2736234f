"""
Style configuration management
"""

import configparser
import enum
import io

from configparser import ConfigParser, NoSectionError, NoOptionError

from .errors import ConfigError

def bool2option(b):
  """
  Get config-file-usable string representation of boolean value.

  :param bool b: value to convert.
  :rtype: string
  :returns: ``yes`` if input is ``True``, ``no`` otherwise.
  """

  return 'yes' if b else 'no'

def option2enum(enum_class, value):
  """
  Find enum member by its name. Case, dashes and underscores are ignored, so
  ``snake_case``, ``SnakeCase`` and ``snake-case`` are all the same member.
  """

  normalized = value.replace('_', '').replace('-', '').lower()

  for member in enum_class:
    if member.name.lower() == normalized:
      return member

  raise ValueError('Not a valid %s: %s' % (enum_class.__name__, value))

class StyleConfig(ConfigParser):
  """
  Configuration of the tools, read from an INI file. Getters return given
  default instead of raising an exception when section or option is missing.
  """

  _boolean_states = {'1': True, 'yes': True, 'true': True, 'on': True, '0': False, 'no': False, 'false': False, 'off': False}

  def __init__(self, *args, **kwargs):
    kwargs.setdefault('interpolation', None)

    ConfigParser.__init__(self, *args, **kwargs)

  def get(self, section, option, default = None, **kwargs):
    """
    Get value for an option.

    :param string section: config section.
    :param string option: option name,
    :param default: this value will be returned, if no such option exists.
    :rtype: string
    :returns: value of config option.
    """

    try:
      return ConfigParser.get(self, section, option, **kwargs)

    except (NoSectionError, NoOptionError):
      return default

  def set(self, section, option, value, *args, **kwargs):
    if section != configparser.DEFAULTSECT and not self.has_section(section):
      self.add_section(section)

    ConfigParser.set(self, section, option, str(value), *args, **kwargs)

  def getint(self, section, option, default = None):
    v = self.get(section, option)
    if v is None:
      return default

    try:
      return int(v.strip())

    except ValueError:
      raise ConfigError('%s.%s: not an integer: %s' % (section, option, v)) from None

  def getcount(self, section, option, default = None):
    """
    Get value of option that must be a non-negative integer.
    """

    v = self.getint(section, option, default = default)

    if v is not None and v < 0:
      raise ConfigError('%s.%s: must not be negative: %s' % (section, option, v))

    return v

  def getbool(self, section, option, default = None):
    v = self.get(section, option)
    if v is None:
      return default

    v = v.strip().lower()

    if v not in self._boolean_states:
      raise ConfigError('%s.%s: not a boolean: %s' % (section, option, v))

    return self._boolean_states[v]

  def getenum(self, section, option, enum_class, default = None):
    v = self.get(section, option)
    if v is None:
      return default

    try:
      return option2enum(enum_class, v.strip())

    except ValueError as exc:
      raise ConfigError('%s.%s: %s' % (section, option, exc)) from None

  def dumps(self):
    s = io.StringIO()
    self.write(s)
    return s.getvalue()

def load_config(path):
  """
  Read configuration file.

  :raises ConfigError: when the file cannot be read or parsed.
  """

  config = StyleConfig()

  try:
    with open(path, 'r') as f:
      config.read_file(f)

  except (IOError, OSError) as exc:
    raise ConfigError('Cannot read config file %s: %s' % (path, exc.strerror or exc)) from None

  except configparser.Error as exc:
    raise ConfigError('Cannot parse config file %s: %s' % (path, exc)) from None

  return config

class Style(object):
  """
  Base class of style settings stored in a config section. Children list
  their settings in ``OPTIONS`` as ``(option, attribute, default)``; type of
  the default decides how the option is parsed.
  """

  SECTION = None
  OPTIONS = ()

  def __init__(self, **kwargs):
    for option, attr, default in self.OPTIONS:
      setattr(self, attr, kwargs.pop(attr, default))

    if kwargs:
      raise TypeError('Unknown style settings: %s' % ', '.join(sorted(kwargs)))

  def __eq__(self, other):
    return type(self) is type(other) and all(getattr(self, attr) == getattr(other, attr) for _, attr, _ in self.OPTIONS)

  def __ne__(self, other):
    return not self.__eq__(other)

  def __repr__(self):
    return '<%s: %s>' % (self.__class__.__name__, ', '.join('%s=%s' % (attr, getattr(self, attr)) for _, attr, _ in self.OPTIONS))

  @classmethod
  def from_config(cls, config):
    """
    Create style from config section. Missing options fall back to defaults.

    :raises ConfigError: when an option has invalid value.
    """

    kwargs = {}

    for option, attr, default in cls.OPTIONS:
      if isinstance(default, bool):
        value = config.getbool(cls.SECTION, option, default = default)

      elif isinstance(default, enum.Enum):
        value = config.getenum(cls.SECTION, option, type(default), default = default)

      else:
        value = config.getcount(cls.SECTION, option, default = default)

      kwargs[attr] = value

    return cls(**kwargs)

  def to_config(self, config = None):
    config = config or StyleConfig()

    for option, attr, _ in self.OPTIONS:
      value = getattr(self, attr)

      if isinstance(value, bool):
        value = bool2option(value)

      elif isinstance(value, enum.Enum):
        value = value.name

      config.set(self.SECTION, option, value)

    return config
