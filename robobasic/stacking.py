"""
Activation records and the call stack.

The language has no nesting and no closures, so a name only ever means
something in the frame on top. Frames bind names to Cells (see values.py)
rather than to values, so that a reference parameter can share storage with
its caller's variable.
"""
from typing import Optional
from .values import Value, Cell
from .diagnostics import UndefinedVariable

class Frame:
	_bindings: dict[str, Cell]

	def __init__(self, function_name:str, caller_line:int):
		self._bindings = {}
		self.function_name = function_name
		self.line = caller_line  # Updated as statements execute.

	def __repr__(self): return "<Frame %s @%d>"%(self.function_name, self.line)
	def holds(self, name:str) -> bool: return name in self._bindings
	def fetch(self, name:str) -> Cell: return self._bindings[name]
	def bind(self, name:str, cell:Cell): self._bindings[name] = cell

class CallStack:
	def __init__(self):
		self._frames: list[Frame] = []

	def __len__(self): return len(self._frames)

	@property
	def depth(self) -> int: return len(self._frames)

	def top(self) -> Frame: return self._frames[-1]

	def push_frame(self, function_name:str, caller_line:int) -> Frame:
		frame = Frame(function_name, caller_line)
		self._frames.append(frame)
		return frame

	def pop_frame(self):
		self._frames.pop()

	def current_line(self) -> int:
		return self._frames[-1].line if self._frames else -1

	def define_variable(self, name:str, value:Value):
		"""
		Create a binding, or else overwrite what the existing Cell holds.
		The latter is what makes assignment to a reference parameter visible
		to the caller.
		"""
		frame = self.top()
		if frame.holds(name): frame.fetch(name).value = value
		else: frame.bind(name, Cell(value))

	def bind_cell(self, name:str, cell:Cell):
		self.top().bind(name, cell)

	def get_cell(self, name:str) -> Cell:
		frame = self.top()
		if not frame.holds(name): raise UndefinedVariable(name)
		return frame.fetch(name)

	def find_cell(self, name:str) -> Optional[Cell]:
		frame = self.top()
		return frame.fetch(name) if frame.holds(name) else None

	def get_variable(self, name:str) -> Value:
		return self.get_cell(name).value

	def stack_trace(self, current_line:int, limit:Optional[int]=None) -> str:
		""" One line per frame, most recent first, at most `limit` of them. """
		lines = []
		size = len(self._frames)
		bottom = 0 if limit is None else max(0, size - limit)
		for i in range(size - 1, bottom - 1, -1):
			frame = self._frames[i]
			line = current_line if i == size - 1 else frame.line
			lines.append("|> %s: line %d"%(frame.function_name, line))
		return "".join(line + "\n" for line in lines)
