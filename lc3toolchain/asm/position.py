"""
Mapping of character offsets to human-facing line and column numbers.
"""

import bisect

class PositionIndex(object):
  """
  Index of line starts of a single source text, built once and then only
  queried.

  :param str text: complete source text.
  """

  __slots__ = ('text', 'line_starts')

  def __init__(self, text):
    self.text = text

    starts = [0]
    offset = text.find('\n')

    while offset != -1:
      starts.append(offset + 1)
      offset = text.find('\n', offset + 1)

    self.line_starts = starts

  def __repr__(self):
    return '<PositionIndex: length=%d, lines=%d>' % (len(self.text), len(self.line_starts))

  def location(self, offset):
    """
    Find line and column of a character.

    :param int offset: offset of the character.
    :rtype: tuple of ints
    :returns: ``(line, column)``, both counted from 1.
    :raises ValueError: when ``offset`` lies outside the text.
    """

    if offset < 0 or offset >= len(self.text):
      raise ValueError('Offset %d out of range <0, %d)' % (offset, len(self.text)))

    i = bisect.bisect_right(self.line_starts, offset) - 1

    return i + 1, offset - self.line_starts[i] + 1

  def line(self, lineno):
    """
    Return text of a line, without its line break.

    :param int lineno: line number, counted from 1.
    """

    start = self.line_starts[lineno - 1]
    end = self.text.find('\n', start)

    if end == -1:
      end = len(self.text)

    return self.text[start:end].rstrip('\r')
