"""
The set of parse-nodes in simple form.

Whatever front-end reads RoboBASIC source calls these constructors and hands
over a complete Program, with literal values already resolved into plain
Python values. Every node remembers the source line it came from, so that
run-time errors and call traces can point somewhere.

Operator glyphs as they appear in the tree:
	arithmetic:  +  -  *  /  %
	relational:  =  !=  <  <=  >  >=
	bitwise:     &  |
	short-cut:   and  or
	unary:       -  +  not
"""
from typing import Optional, Sequence, Union
from .diagnostics import DuplicateDefinition

class Phrase:
	line: int = 0
	def __repr__(self): return "<%s@%d>"%(type(self).__name__, self.line)

class Statement(Phrase): pass
class ValueExpression(Phrase): pass

###############################################################################

class Parameter(Phrase):
	def __init__(self, name:str, by_reference:bool=False, line:int=0):
		self.name, self.by_reference, self.line = name, by_reference, line
	def __repr__(self): return "<param %s%s>"%("&" if self.by_reference else "", self.name)

class Function(Phrase):
	def __init__(self, name:str, params:Sequence[Parameter], body:Sequence[Statement], line:int=0):
		self.name = name
		self.params = tuple(params)
		self.body = tuple(body)
		self.line = line
	def __repr__(self): return "<func %s/%d>"%(self.name, len(self.params))

class Program(Phrase):
	def __init__(self, functions:Sequence[Function]):
		self.functions = tuple(functions)

	def function_table(self) -> dict[str, Function]:
		""" Name -> Function, in definition order. Names must be unique. """
		table = {}
		for fn in self.functions:
			assert isinstance(fn, Function), fn
			if fn.name in table: raise DuplicateDefinition(fn.name, fn.line)
			table[fn.name] = fn
		return table

###############################################################################
#
#  Expressions

class Literal(ValueExpression):
	def __init__(self, value:Union[int, bool, str], line:int=0):
		self.value, self.line = value, line

class ColorName(ValueExpression):
	""" red, green, ... and also the pen states up/down """
	def __init__(self, name:str, line:int=0):
		self.name, self.line = name, line

class Variable(ValueExpression):
	def __init__(self, name:str, line:int=0):
		self.name, self.line = name, line
	def __repr__(self): return "<var %s>"%self.name

class Index(ValueExpression):
	def __init__(self, name:str, index:ValueExpression, line:int=0):
		self.name, self.index, self.line = name, index, line

class Paren(ValueExpression):
	def __init__(self, inner:ValueExpression, line:int=0):
		self.inner, self.line = inner, line

class UnaryExp(ValueExpression):
	def __init__(self, op:str, arg:ValueExpression, line:int=0):
		self.op, self.arg, self.line = op, arg, line

class BinExp(ValueExpression):
	def __init__(self, lhs:ValueExpression, op:str, rhs:ValueExpression, line:int=0):
		self.lhs, self.op, self.rhs, self.line = lhs, op, rhs, line

class ShortCutExp(ValueExpression):
	def __init__(self, lhs:ValueExpression, op:str, rhs:ValueExpression, line:int=0):
		assert op in ("and", "or"), op
		self.lhs, self.op, self.rhs, self.line = lhs, op, rhs, line

class Call(ValueExpression, Statement):
	""" Appears as a statement and as an expression. """
	def __init__(self, name:str, args:Sequence[ValueExpression]=(), line:int=0):
		self.name, self.args, self.line = name, tuple(args), line
	def __repr__(self): return "<call %s@%d>"%(self.name, self.line)

class Sensor(ValueExpression, Statement):
	""" feel, sense, bump, compass, beacon(color), look(n): also usable as a statement. """
	def __init__(self, sensor:str, arg:Optional[ValueExpression]=None, line:int=0):
		self.sensor, self.arg, self.line = sensor, arg, line

###############################################################################
#
#  Statements

Target = Union[Variable, Index]

class Assign(Statement):
	def __init__(self, target:Target, expr:ValueExpression, line:int=0):
		assert isinstance(target, (Variable, Index)), target
		self.target, self.expr, self.line = target, expr, line

class If(Statement):
	def __init__(self, cond:ValueExpression, then_part:Sequence[Statement], else_part:Optional[Sequence[Statement]]=None, line:int=0):
		self.cond = cond
		self.then_part = tuple(then_part)
		self.else_part = None if else_part is None else tuple(else_part)
		self.line = line

class While(Statement):
	def __init__(self, cond:ValueExpression, body:Sequence[Statement], line:int=0):
		self.cond, self.body, self.line = cond, tuple(body), line

class Return(Statement):
	def __init__(self, expr:Optional[ValueExpression]=None, line:int=0):
		self.expr, self.line = expr, line

class Read(Statement):
	def __init__(self, name:str, line:int=0):
		self.name, self.line = name, line

class Write(Statement):
	def __init__(self, expr:ValueExpression, line:int=0):
		self.expr, self.line = expr, line

class Actuate(Statement):
	""" locate, forward, backward, turn, pen, invisible, obstacle """
	def __init__(self, command:str, args:Sequence[ValueExpression], line:int=0):
		self.command, self.args, self.line = command, tuple(args), line
