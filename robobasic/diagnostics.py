"""
Everything that can go wrong at run-time, and the means to explain it.

The interpreter runs one fixed program per run, so every error here is fatal.
The run stops where the problem was noticed. The facade stamps the current
line on the exception on its way out, and the call stack stays as it was,
so a Report can still describe the failure.
"""
import sys
from typing import Optional
from boozetools.support.failureprone import illustration

class InterpreterError(Exception):
	""" Root of the run-time taxonomy. """
	line: Optional[int] = None

	def __init__(self, message:str, line:Optional[int]=None):
		super().__init__(message)
		self.message = message
		if line is not None: self.line = line

	def __str__(self):
		if self.line is None: return self.message
		return "%s (line %d)"%(self.message, self.line)

class DuplicateDefinition(InterpreterError):
	def __init__(self, name:str, line:Optional[int]=None):
		super().__init__("Multiple definitions of function " + name, line)
		self.name = name

class UndeclaredFunction(InterpreterError):
	def __init__(self, name:str):
		super().__init__("Function " + name + " not declared")
		self.name = name

class ArityMismatch(InterpreterError):
	def __init__(self, name:str, need:int, got:int):
		plural = '' if need == 1 else 's'
		super().__init__("%s takes %d argument%s, but got %d instead."%(name, need, plural, got))
		self.name, self.need, self.got = name, need, got

class InvalidArgument(InterpreterError):
	pass

class TypeMismatch(InterpreterError):
	pass

class FormatError(InterpreterError):
	def __init__(self, token:Optional[str]):
		if token is None: message = "Ran out of input when reading a number"
		else: message = "Format error when reading a number: " + token
		super().__init__(message)
		self.token = token

class UndefinedVariable(InterpreterError):
	def __init__(self, name:str):
		super().__init__("Variable " + name + " not defined")
		self.name = name

class VoidResultUsed(InterpreterError):
	def __init__(self, name:str):
		super().__init__("Function " + name + " expected to return a value")
		self.name = name

class DivisionByZero(InterpreterError):
	pass

class IndexOutOfBounds(InterpreterError):
	pass


class Report:
	""" Talks to the console (stderr) on behalf of an interpreter. """

	def __init__(self, *, verbose:int=0, trace_items:int=5):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._trace_items = trace_items

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def runtime_error(self, ex:InterpreterError, interpreter, source:Optional[str]=None):
		"""
		Explain a failed run: what happened, where, and how we got there.
		Given the program text, also show the offending line.
		"""
		print("*"*60, file=sys.stderr)
		print(type(ex).__name__ + ": " + ex.message, file=sys.stderr)
		if ex.line is not None:
			print("At line %d"%ex.line, file=sys.stderr)
			if source is not None:
				print(self.illustrate(source, ex.line), file=sys.stderr)
		print(interpreter.stack_trace(self._trace_items), end="", file=sys.stderr)
		sys.stderr.flush()

	@staticmethod
	def illustrate(source:str, line:int, caption:str="") -> str:
		rows = source.splitlines()
		if not 0 < line <= len(rows): return ""
		text = rows[line-1]
		return illustration(text, 0, len(text), prefix='% 6d |' % line, caption=caption)
