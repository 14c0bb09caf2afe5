"""
Optional call-trace writer.

Each call gets a line on entry and another on return, indented by nesting
depth, e.g.:

	main() <entry point>
	|   swap(&a=1, &b=2) <line 4>
	|   return, &a=2, &b=1 <line 9>
	return <line 5>

The stream closes itself once the outermost call returns.
"""
from pathlib import Path
from typing import Sequence, TextIO, Union
from . import syntax
from .values import Value, Cell

NESTING = "|   "

class Tracer:
	_stream: TextIO

	def __init__(self, path:Union[str, Path]):
		self._stream = open(path, "w", encoding="utf-8")
		self._nesting = -1

	@property
	def closed(self) -> bool: return self._stream.closed

	def call(self, fn:syntax.Function, args:Sequence[Cell], call_line:int):
		self._nesting += 1
		parts = []
		for param, cell in zip(fn.params, args):
			parts.append(("&" if param.by_reference else "") + param.name + "=" + cell.value.display())
		where = "<entry point>" if self._nesting == 0 else "<line %d>"%call_line
		self._write(NESTING * self._nesting + fn.name + "(" + ", ".join(parts) + ") " + where)

	def ret(self, fn:syntax.Function, result:Value, args:Sequence[Cell], return_line:int):
		text = NESTING * self._nesting + "return"
		self._nesting -= 1
		if not result.is_void(): text += " " + result.display()
		for param, cell in zip(fn.params, args):
			if param.by_reference:
				text += ", &" + param.name + "=" + cell.value.display()
		self._write(text + " <line %d>"%return_line)
		if self._nesting < 0: self.close()

	def _write(self, text:str):
		if not self._stream.closed:
			print(text, file=self._stream)

	def close(self):
		if not self._stream.closed: self._stream.close()
