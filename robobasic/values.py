"""
The run-time value model.

A Value is a closed sum over the kinds in `Kind`. Each one carries its
payload together with the reconstructed source text ("equivalent") that the
emitter splices into instructions. Scalars play themselves as Python ints,
bools and strs; arrays are Python lists.

Storage is explicit: a frame binds names to Cells, and a by-reference
parameter binds the very Cell its caller uses. Nothing in this module
mutates a Value except array-element assignment.
"""
import enum
import operator
from typing import Any, Optional
from .diagnostics import TypeMismatch, DivisionByZero, IndexOutOfBounds

class Kind(enum.Enum):
	VOID = "void"
	INTEGER = "integer"
	BOOLEAN = "boolean"
	STRING = "string"
	ARRAY_INT = "array of integer"
	ARRAY_BOOL = "array of boolean"
	COLOR = "color"

ELEMENT_KIND = {Kind.ARRAY_INT: Kind.INTEGER, Kind.ARRAY_BOOL: Kind.BOOLEAN}
ARRAY_KIND = {element: array for array, element in ELEMENT_KIND.items()}
DEFAULT_ELEMENT = {Kind.INTEGER: 0, Kind.BOOLEAN: False}

COLORS = frozenset(["red", "green", "yellow", "blue", "black", "white"])
PEN_STATES = frozenset(["up", "down"])


class Value:
	__slots__ = ("kind", "payload", "text")

	def __init__(self, kind:Kind, payload:Any=None, text:Optional[str]=None):
		self.kind = kind
		self.payload = payload
		self.text = display(kind, payload) if text is None else text

	def __repr__(self): return "<%s %s: %r>"%(self.kind.name, self.display(), self.text)
	def __str__(self): return self.display()

	def display(self) -> str: return display(self.kind, self.payload)
	def is_void(self) -> bool: return self.kind is Kind.VOID

	def copy(self, text:Optional[str]=None) -> "Value":
		""" Independent copy; arrays get their own list. """
		payload = list(self.payload) if self.kind in ELEMENT_KIND else self.payload
		return Value(self.kind, payload, self.text if text is None else text)

	def with_text(self, text:str) -> "Value":
		return Value(self.kind, self.payload, text)


def integer(n:int, text:Optional[str]=None) -> Value: return Value(Kind.INTEGER, n, text)
def boolean(b:bool, text:Optional[str]=None) -> Value: return Value(Kind.BOOLEAN, b, text)
def string(s:str, text:Optional[str]=None) -> Value: return Value(Kind.STRING, s, text)
def color(name:str, text:Optional[str]=None) -> Value: return Value(Kind.COLOR, name, text)
def void() -> Value: return Value(Kind.VOID, None, "")

def from_literal(literal:Any) -> Value:
	""" The parser delivers literals as plain Python values. """
	if isinstance(literal, bool): return boolean(literal)
	if isinstance(literal, int): return integer(literal)
	if isinstance(literal, str): return string(literal, '"%s"'%literal)
	raise TypeError(type(literal))

def display(kind:Kind, payload) -> str:
	if kind is Kind.VOID: return "void"
	if kind is Kind.BOOLEAN: return "true" if payload else "false"
	if kind is Kind.INTEGER: return str(payload)
	if kind in (Kind.STRING, Kind.COLOR): return payload
	if kind in ELEMENT_KIND:
		return "[" + ", ".join(display(ELEMENT_KIND[kind], e) for e in payload) + "]"
	assert False, kind


class Cell:
	""" A storage location. Two bindings share storage exactly when they share a Cell. """
	__slots__ = ("value",)
	def __init__(self, value:Value): self.value = value
	def __repr__(self): return "<Cell %r>"%self.value

###############################################################################
#
#  Type checks

def _expect(v:Value, kind:Kind, what:str):
	if v.kind is not kind:
		raise TypeMismatch("Expecting %s expression, found %s: %s"%(what, v.kind.value, v.text))

def check_integer(v:Value): _expect(v, Kind.INTEGER, "numerical")
def check_boolean(v:Value): _expect(v, Kind.BOOLEAN, "Boolean")

###############################################################################
#
#  Operators. Each entry knows the kinds it accepts; anything else is a
#  TypeMismatch. Texts are assembled by the caller, since the emitter owns
#  the glyphs.

def _truncating_div(a:int, b:int) -> int:
	if b == 0: raise DivisionByZero("Division by zero")
	q = abs(a) // abs(b)
	return q if (a < 0) == (b < 0) else -q

def _truncating_mod(a:int, b:int) -> int:
	if b == 0: raise DivisionByZero("Modulo by zero")
	return a - b * _truncating_div(a, b)

ARITHMETIC = {
	"+": operator.add,
	"-": operator.sub,
	"*": operator.mul,
	"/": _truncating_div,
	"%": _truncating_mod,
}

EQUALITY = {
	"=": operator.eq,
	"!=": operator.ne,
}

ORDERING = {
	"<": operator.lt,
	"<=": operator.le,
	">": operator.gt,
	">=": operator.ge,
}

BITWISE = {
	"&": operator.and_,
	"|": operator.or_,
}

RELATIONAL = {**EQUALITY, **ORDERING}
ORDERED_KINDS = frozenset([Kind.INTEGER, Kind.STRING])

def arithmetic(op:str, a:Value, b:Value, text:str) -> Value:
	check_integer(a)
	check_integer(b)
	return integer(ARITHMETIC[op](a.payload, b.payload), text)

def relational(op:str, a:Value, b:Value, text:str) -> Value:
	if a.kind is not b.kind:
		raise TypeMismatch("Incompatible types in relational expression: %s vs. %s"%(a.kind.value, b.kind.value))
	if a.kind is Kind.VOID:
		raise TypeMismatch("Void values cannot be compared")
	if op in ORDERING and a.kind not in ORDERED_KINDS:
		raise TypeMismatch("Values of kind %s have no ordering"%a.kind.value)
	return boolean(RELATIONAL[op](a.payload, b.payload), text)

def bitwise(op:str, a:Value, b:Value, text:str) -> Value:
	if a.kind is not b.kind or a.kind not in (Kind.INTEGER, Kind.BOOLEAN):
		raise TypeMismatch("Incompatible types in bitwise expression: %s vs. %s"%(a.kind.value, b.kind.value))
	result = BITWISE[op](a.payload, b.payload)
	return Value(a.kind, bool(result) if a.kind is Kind.BOOLEAN else result, text)

def binary(op:str, a:Value, b:Value, text:str) -> Value:
	if op in ARITHMETIC: return arithmetic(op, a, b, text)
	if op in RELATIONAL: return relational(op, a, b, text)
	if op in BITWISE: return bitwise(op, a, b, text)
	raise ValueError(op)

def negate(v:Value, text:str) -> Value:
	check_integer(v)
	return integer(-v.payload, text)

def affirm(v:Value, text:str) -> Value:
	check_integer(v)
	return integer(v.payload, text)

def logical_not(v:Value, text:str) -> Value:
	check_boolean(v)
	return boolean(not v.payload, text)

UNARY = {
	"-": negate,
	"+": affirm,
	"not": logical_not,
}

###############################################################################
#
#  Arrays

def element(array:Value, index:Value, text:str) -> Value:
	if array.kind not in ELEMENT_KIND:
		raise TypeMismatch("Indexing something that is not an array: " + array.text)
	check_integer(index)
	i = index.payload
	if not 0 <= i < len(array.payload):
		raise IndexOutOfBounds("Index %d out of bounds for %s of length %d"%(i, array.text, len(array.payload)))
	return Value(ELEMENT_KIND[array.kind], array.payload[i], text)

def store(cell:Optional[Cell], index:Value, item:Value) -> Cell:
	"""
	Assign one array element. An absent (None) cell gets a brand-new array
	of the item's kind. Writing at or past the end grows the array.
	"""
	check_integer(index)
	i = index.payload
	if i < 0: raise IndexOutOfBounds("Negative index %d"%i)
	if item.kind not in ARRAY_KIND:
		raise TypeMismatch("Arrays hold integers or Booleans, not %s"%item.kind.value)
	if cell is None:
		cell = Cell(Value(ARRAY_KIND[item.kind], []))
	array = cell.value
	if array.kind not in ELEMENT_KIND:
		raise TypeMismatch("Indexing something that is not an array: " + array.text)
	if ELEMENT_KIND[array.kind] is not item.kind:
		raise TypeMismatch("Cannot store %s in %s"%(item.kind.value, array.kind.value))
	payload = array.payload
	if i >= len(payload):
		payload.extend([DEFAULT_ELEMENT[item.kind]] * (i + 1 - len(payload)))
	payload[i] = item.payload
	return cell
