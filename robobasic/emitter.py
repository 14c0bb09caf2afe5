"""
The emitter side of the interpreter: an append-only log of RoboBASIC
instructions, the little text-builders that reconstruct source-ish text for
values and instructions, and a Transcriber that renders statements straight
from the tree.

The executor emits while it runs. Statements it does not run (the branch not
taken, a loop body never entered, whatever follows a `return`) still belong
in the translated program, so the Transcriber writes them without evaluating
anything. Both paths share the text-builders below, which is what keeps the
two renderings in agreement.
"""
from typing import Iterator, Optional, Sequence
from boozetools.support.foundation import Visitor
from . import syntax, values
from .robot import ACTUATORS, SENSORS

INDENT = "  "

GLYPH = {
	"=": "==",
	"and": "&&",
	"or": "||",
	"not": "!",
}

class InstructionLog:
	""" Ordered, append-only. Lines never change once written. """
	def __init__(self):
		self._lines = []
	def append(self, line:str): self._lines.append(line)
	def lines(self) -> list[str]: return list(self._lines)
	def __len__(self): return len(self._lines)
	def __iter__(self) -> Iterator[str]: return iter(list(self._lines))

###############################################################################
#
#  Text builders

def glyph(op:str) -> str: return GLYPH.get(op, op)
def infix(lhs:str, op:str, rhs:str) -> str: return lhs + " " + glyph(op) + " " + rhs
def prefix(op:str, text:str) -> str: return glyph(op) + text
def parenthesized(text:str) -> str: return "(" + text + ")"
def indexed(name:str, index_text:str) -> str: return name + "[" + index_text + "]"
def call_text(name:str) -> str: return name + "()"
def assignment(target_text:str, expr_text:str) -> str: return target_text + " = " + expr_text
def label(name:str) -> str: return name + ":"

def sensor_text(instruction:str, arg_text:Optional[str]=None) -> str:
	return instruction + "(" + (arg_text or "") + ")"

def negated(text:str) -> str:
	return "-" + text if text.isalnum() else "-(" + text + ")"

def instruction(name:str, arg_texts:Sequence[str]) -> str:
	if not arg_texts: return name
	return name + " " + ", ".join(arg_texts)

def actuator_text(command:str, arg_texts:Sequence[str]) -> str:
	spec = ACTUATORS[command]
	if spec.negated: arg_texts = [negated(t) for t in arg_texts]
	return instruction(spec.instruction, arg_texts)

###############################################################################

class ExpressionText(Visitor):
	""" Source-ish text of an expression, computed from the tree alone. """

	def visit_Literal(self, expr:syntax.Literal): return values.from_literal(expr.value).text
	def visit_ColorName(self, expr:syntax.ColorName): return expr.name
	def visit_Variable(self, expr:syntax.Variable): return expr.name
	def visit_Index(self, expr:syntax.Index): return indexed(expr.name, self.visit(expr.index))
	def visit_Paren(self, expr:syntax.Paren): return parenthesized(self.visit(expr.inner))
	def visit_UnaryExp(self, expr:syntax.UnaryExp): return prefix(expr.op, self.visit(expr.arg))
	def visit_BinExp(self, expr:syntax.BinExp): return infix(self.visit(expr.lhs), expr.op, self.visit(expr.rhs))
	def visit_ShortCutExp(self, expr:syntax.ShortCutExp): return infix(self.visit(expr.lhs), expr.op, self.visit(expr.rhs))
	def visit_Call(self, expr:syntax.Call): return call_text(expr.name)

	def visit_Sensor(self, expr:syntax.Sensor):
		spec = SENSORS[expr.sensor]
		return sensor_text(spec.instruction, None if expr.arg is None else self.visit(expr.arg))

TEXT = ExpressionText()

def target_text(target:syntax.Target, index_text:Optional[str]=None) -> str:
	if isinstance(target, syntax.Index):
		return indexed(target.name, TEXT.visit(target.index) if index_text is None else index_text)
	return target.name

class Transcriber(Visitor):
	"""
	Writes statements into the log without executing them.
	Each visit method takes the statement, the indent for its own line, and the log.
	"""

	def block(self, statements:Sequence[syntax.Statement], indent:str, log:InstructionLog):
		""" Statements of a block sit one level deeper than whatever owns the block. """
		for s in statements: self.visit(s, indent + INDENT, log)

	def visit_Assign(self, s:syntax.Assign, indent:str, log:InstructionLog):
		log.append(indent + assignment(target_text(s.target), TEXT.visit(s.expr)))

	def visit_If(self, s:syntax.If, indent:str, log:InstructionLog):
		log.append(indent + "if " + TEXT.visit(s.cond))
		self.block(s.then_part, indent, log)
		if s.else_part is not None:
			log.append(indent + "else")
			self.block(s.else_part, indent, log)
		log.append(indent + "endif")

	def visit_While(self, s:syntax.While, indent:str, log:InstructionLog):
		log.append(indent + "while " + TEXT.visit(s.cond))
		self.block(s.body, indent, log)
		log.append(indent + "wend")

	def visit_Return(self, s:syntax.Return, indent:str, log:InstructionLog):
		log.append(indent + "Return")

	def visit_Read(self, s:syntax.Read, indent:str, log:InstructionLog):
		pass

	def visit_Write(self, s:syntax.Write, indent:str, log:InstructionLog):
		log.append(indent + "print " + TEXT.visit(s.expr))

	def visit_Actuate(self, s:syntax.Actuate, indent:str, log:InstructionLog):
		log.append(indent + actuator_text(s.command, [TEXT.visit(a) for a in s.args]))

	def visit_Call(self, s:syntax.Call, indent:str, log:InstructionLog):
		log.append(indent + call_text(s.name))

	def visit_Sensor(self, s:syntax.Sensor, indent:str, log:InstructionLog):
		log.append(indent + TEXT.visit(s))

TRANSCRIBE = Transcriber()
