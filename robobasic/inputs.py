"""
Whitespace-delimited tokens from a text stream, consumed one at a time by
`read` statements. Lines are only pulled from the stream on demand, so an
interactive stdin works as expected.
"""
import re
from collections import deque
from typing import Optional, TextIO
from .diagnostics import FormatError

INTEGER = re.compile(r"[+-]?[0-9]+")

class TokenReader:
	def __init__(self, stream:TextIO):
		self._stream = stream
		self._pending = deque()

	def next_token(self) -> Optional[str]:
		""" The next token, or None at end of input. """
		while not self._pending:
			line = self._stream.readline()
			if not line: return None
			self._pending.extend(line.split())
		return self._pending.popleft()

	def next_integer(self) -> int:
		token = self.next_token()
		if token is None or not INTEGER.fullmatch(token):
			raise FormatError(token)
		return int(token)
