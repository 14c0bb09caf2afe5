"""
The tree-walk proper: statements by the Executor, expressions by the
Evaluator, and the calling convention in between (the Machine).

Everything here runs and emits at the same time. Whether a statement writes
its instruction depends on the Context handed down through each visit:

	emit:   write instructions for the statements as they execute.
	indent: prefix for the current statement's line.

Every actual call also leaves an inline marker in the log, emitting or not,
so the listing shows each jump the robot will make (a call trace of sorts).

A statement yields None to mean "carry on", or else the Value of an executed
`return` (possibly VOID). The first such Value ends the enclosing block and
rises through any `if` and `while` up to the function, with no exceptions
involved.
"""
from typing import NamedTuple, Optional, Sequence
from boozetools.support.foundation import Visitor
from . import syntax, values
from .values import Value, Cell, check_boolean
from .stacking import CallStack
from .emitter import (
	InstructionLog, TRANSCRIBE, INDENT,
	infix, prefix, parenthesized, indexed, call_text, assignment, sensor_text,
	actuator_text, target_text,
)
from .robot import ACTUATORS, SENSORS, check_argument, symbols_for
from .inputs import TokenReader
from .tracer import Tracer
from .diagnostics import UndeclaredFunction, ArityMismatch, InvalidArgument, VoidResultUsed

SHORTCUT = {
	"and": False,
	"or": True,
}

class Context(NamedTuple):
	emit: bool
	indent: str

	def deeper(self) -> "Context": return self._replace(indent=self.indent + INDENT)
	def quiet(self) -> "Context": return self._replace(emit=False)

###############################################################################

class Evaluator(Visitor):
	""" Expressions produce fresh Values, each with its reconstructed text. """

	def __init__(self, machine:"Machine"):
		self._m = machine

	def visit_Literal(self, expr:syntax.Literal, ctx:Context) -> Value:
		return values.from_literal(expr.value)

	def visit_ColorName(self, expr:syntax.ColorName, ctx:Context) -> Value:
		return values.color(expr.name)

	def visit_Variable(self, expr:syntax.Variable, ctx:Context) -> Value:
		return self._m.stack.get_variable(expr.name).copy(text=expr.name)

	def visit_Index(self, expr:syntax.Index, ctx:Context) -> Value:
		array = self._m.stack.get_variable(expr.name)
		index = self.visit(expr.index, ctx)
		return values.element(array, index, indexed(expr.name, index.text))

	def visit_Paren(self, expr:syntax.Paren, ctx:Context) -> Value:
		inner = self.visit(expr.inner, ctx)
		return inner.with_text(parenthesized(inner.text))

	def visit_UnaryExp(self, expr:syntax.UnaryExp, ctx:Context) -> Value:
		arg = self.visit(expr.arg, ctx)
		return values.UNARY[expr.op](arg, prefix(expr.op, arg.text))

	def visit_BinExp(self, expr:syntax.BinExp, ctx:Context) -> Value:
		lhs = self.visit(expr.lhs, ctx)
		rhs = self.visit(expr.rhs, ctx)
		return values.binary(expr.op, lhs, rhs, infix(lhs.text, expr.op, rhs.text))

	def visit_ShortCutExp(self, expr:syntax.ShortCutExp, ctx:Context) -> Value:
		lhs = self.visit(expr.lhs, ctx)
		check_boolean(lhs)
		if lhs.payload == SHORTCUT[expr.op]: return lhs
		rhs = self.visit(expr.rhs, ctx)
		check_boolean(rhs)
		return values.boolean(rhs.payload, infix(lhs.text, expr.op, rhs.text))

	def visit_Call(self, expr:syntax.Call, ctx:Context) -> Value:
		result = self._m.call(expr, ctx)
		if result.is_void(): raise VoidResultUsed(expr.name)
		return result.with_text(call_text(expr.name))

	def visit_Sensor(self, expr:syntax.Sensor, ctx:Context) -> Value:
		spec = SENSORS[expr.sensor]
		if spec.argument is values.Kind.VOID:
			assert expr.arg is None, expr
			text = sensor_text(spec.instruction)
		else:
			arg = self.visit(expr.arg, ctx)
			check_argument(spec.argument, arg, expr.sensor)
			text = sensor_text(spec.instruction, arg.text)
		return spec.reading.with_text(text)

###############################################################################

class Executor(Visitor):
	""" Statements: run them, and emit them when the context says so. """

	def __init__(self, machine:"Machine"):
		self._m = machine
		self._log = machine.log

	def execute_block(self, statements:Sequence[syntax.Statement], ctx:Context) -> Optional[Value]:
		inner = ctx.deeper()
		for i, s in enumerate(statements):
			result = self.visit(s, inner)
			if result is not None:
				if ctx.emit:
					for rest in statements[i+1:]: TRANSCRIBE.visit(rest, inner.indent, self._log)
				return result
		return None

	def _skip_block(self, statements:Sequence[syntax.Statement], ctx:Context):
		if ctx.emit: TRANSCRIBE.block(statements, ctx.indent, self._log)

	def _emit(self, ctx:Context, text:str):
		if ctx.emit: self._log.append(ctx.indent + text)

	def _at(self, s:syntax.Statement):
		self._m.stack.top().line = s.line

	def _evaluate(self, expr:syntax.ValueExpression, ctx:Context) -> Value:
		return self._m.evaluator.visit(expr, ctx)

	def _condition(self, expr:syntax.ValueExpression, ctx:Context) -> Value:
		cond = self._evaluate(expr, ctx)
		check_boolean(cond)
		return cond

	def visit_Assign(self, s:syntax.Assign, ctx:Context):
		self._at(s)
		value = self._evaluate(s.expr, ctx)
		target, stack = s.target, self._m.stack
		if isinstance(target, syntax.Index):
			index = self._evaluate(target.index, ctx)
			cell = values.store(stack.find_cell(target.name), index, value)
			if not stack.top().holds(target.name): stack.bind_cell(target.name, cell)
			text = target_text(target, index.text)
		else:
			stack.define_variable(target.name, value)
			text = target.name
		self._emit(ctx, assignment(text, value.text))

	def visit_If(self, s:syntax.If, ctx:Context):
		self._at(s)
		cond = self._condition(s.cond, ctx)
		self._emit(ctx, "if " + cond.text)
		result = None
		if cond.payload: result = self.execute_block(s.then_part, ctx)
		else: self._skip_block(s.then_part, ctx)
		if s.else_part is not None:
			self._emit(ctx, "else")
			if cond.payload: self._skip_block(s.else_part, ctx)
			else: result = self.execute_block(s.else_part, ctx)
		self._emit(ctx, "endif")
		return result

	def visit_While(self, s:syntax.While, ctx:Context):
		self._at(s)
		cond = self._condition(s.cond, ctx)
		self._emit(ctx, "while " + cond.text)
		result = None
		if not cond.payload:
			self._skip_block(s.body, ctx)
		else:
			# Only the first pass through the body writes the translation.
			body_ctx = ctx
			while cond.payload:
				result = self.execute_block(s.body, body_ctx)
				if result is not None: break
				body_ctx = body_ctx.quiet()
				self._at(s)
				cond = self._condition(s.cond, body_ctx)
		self._emit(ctx, "wend")
		return result

	def visit_Return(self, s:syntax.Return, ctx:Context):
		self._at(s)
		result = values.void() if s.expr is None else self._evaluate(s.expr, ctx)
		self._emit(ctx, "Return")
		return result

	def visit_Read(self, s:syntax.Read, ctx:Context):
		self._at(s)
		number = self._m.reader.next_integer()
		self._m.stack.define_variable(s.name, values.integer(number))

	def visit_Write(self, s:syntax.Write, ctx:Context):
		self._at(s)
		value = self._evaluate(s.expr, ctx)
		self._emit(ctx, "print " + value.display())

	def visit_Actuate(self, s:syntax.Actuate, ctx:Context):
		self._at(s)
		spec = ACTUATORS[s.command]
		spec.check_arity(s.command, len(s.args))
		symbols = symbols_for(s.command)
		texts = []
		for i, arg in enumerate(s.args):
			value = self._evaluate(arg, ctx)
			check_argument(spec.kind_at(i), value, s.command, symbols)
			texts.append(value.text)
		self._emit(ctx, actuator_text(s.command, texts))

	def visit_Sensor(self, s:syntax.Sensor, ctx:Context):
		self._at(s)
		self._emit(ctx, self._evaluate(s, ctx).text)

	def visit_Call(self, s:syntax.Call, ctx:Context):
		self._at(s)
		self._m.call(s, ctx)

###############################################################################

class Machine:
	"""
	Owns the mutable state of one run: call stack, instruction log, input,
	and the optional tracer. Also knows the calling convention.
	"""

	def __init__(self, functions:dict[str, syntax.Function], reader:TokenReader, tracer:Optional[Tracer]):
		self.functions = functions
		self.reader = reader
		self.tracer = tracer
		self.stack = CallStack()
		self.log = InstructionLog()
		self.evaluator = Evaluator(self)
		self.executor = Executor(self)

	def lookup(self, name:str) -> syntax.Function:
		try: return self.functions[name]
		except KeyError: raise UndeclaredFunction(name) from None

	def call(self, site:syntax.Call, ctx:Context) -> Value:
		fn = self.lookup(site.name)
		if site.line and len(self.stack): self.stack.top().line = site.line
		cells = self.gather_arguments(fn, site.args, ctx)
		self.log.append(ctx.indent + call_text(fn.name))
		# The body is written out once, by prepare_functions.
		return self.execute_function(fn, cells, ctx.quiet())

	def gather_arguments(self, fn:syntax.Function, args:Sequence[syntax.ValueExpression], ctx:Context) -> list[Cell]:
		"""
		By-value parameters get a fresh Cell holding the argument's value.
		By-reference parameters get the caller's own Cell, so the argument
		must name a variable.
		"""
		if len(args) != len(fn.params):
			raise ArityMismatch(fn.name, len(fn.params), len(args))
		cells = []
		for param, arg in zip(fn.params, args):
			if param.by_reference:
				if not isinstance(arg, syntax.Variable):
					raise InvalidArgument("Wrong argument for pass by reference: %s of %s"%(param.name, fn.name))
				cells.append(self.stack.get_cell(arg.name))
			else:
				cells.append(Cell(self.evaluator.visit(arg, ctx)))
		return cells

	def execute_function(self, fn:syntax.Function, cells:Sequence[Cell], ctx:Context) -> Value:
		caller_line = self.stack.current_line()
		if self.tracer is not None: self.tracer.call(fn, cells, caller_line)
		self.stack.push_frame(fn.name, caller_line)
		if fn.line: self.stack.top().line = fn.line
		for param, cell in zip(fn.params, cells):
			self.stack.bind_cell(param.name, cell)
		result = self.executor.execute_block(fn.body, ctx)
		if result is None: result = values.void()
		if self.tracer is not None: self.tracer.ret(fn, result, cells, self.stack.current_line())
		self.stack.pop_frame()
		return result
