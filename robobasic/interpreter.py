"""
The public face of the interpreter.

One Interpreter serves one run of one program. It executes `main` against
its own call stack and, in the same pass, writes the RoboBASIC translation:

	MainProgram:
	  ...the body of main...
	End
	helper:
	  ...the body of helper...
	Return

`run` produces the first part. `prepare_functions` produces the labelled
subroutines. `translate` does both in the customary order.
"""
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Optional, TextIO, Union
from . import syntax
from .emitter import label, TRANSCRIBE
from .evaluator import Machine, Context
from .inputs import TokenReader
from .tracer import Tracer
from .diagnostics import InterpreterError, Report

ENTRY_POINT = "main"

class Interpreter:
	def __init__(self, program:syntax.Program, trace:Union[str, Path, None]=None, *, stdin:Optional[TextIO]=None, verbose:int=0):
		self.report = Report(verbose=verbose)
		functions = program.function_table()  # Raises DuplicateDefinition
		self.report.info("Loaded %d function(s)"%len(functions))
		reader = TokenReader(sys.stdin if stdin is None else stdin)
		tracer = None if trace is None else Tracer(trace)
		self._machine = Machine(functions, reader, tracer)

	def run(self):
		""" Execute main with no arguments, writing its translation between MainProgram: and End. """
		m = self._machine
		m.log.append("MainProgram:")
		with self._stamping():
			self.report.info("Running", ENTRY_POINT)
			ctx = Context(emit=True, indent="")
			main = m.lookup(ENTRY_POINT)
			m.execute_function(main, m.gather_arguments(main, (), ctx), ctx)
		m.log.append("End")

	def prepare_functions(self):
		"""
		Write each function except main as a labelled block ending in Return,
		once each, however often main calls it. The bodies are transcribed from
		the tree rather than executed: parameters have no values here, and the
		input belongs to the live run.
		"""
		m = self._machine
		for fn in m.functions.values():
			if fn.name == ENTRY_POINT: continue
			self.report.info("Preparing", fn.name)
			m.log.append(label(fn.name))
			TRANSCRIBE.block(fn.body, "", m.log)
			m.log.append("Return")

	def translate(self) -> list[str]:
		self.run()
		self.prepare_functions()
		return self.instruction_log()

	def instruction_log(self) -> list[str]:
		return self._machine.log.lines()

	def current_line(self) -> int:
		return self._machine.stack.current_line()

	def stack_trace(self, limit:Optional[int]=None) -> str:
		return self._machine.stack.stack_trace(self.current_line(), limit)

	def explain(self, ex:InterpreterError, source:Optional[str]=None):
		self.report.runtime_error(ex, self, source)

	def close(self):
		if self._machine.tracer is not None: self._machine.tracer.close()

	@contextmanager
	def _stamping(self):
		""" Errors leave with the line they happened on. The stack stays put for the post-mortem. """
		try: yield
		except InterpreterError as ex:
			if ex.line is None: ex.line = self.current_line()
			raise
