"""
The robot's repertoire: which commands and sensors exist, what RoboBASIC
instruction each one becomes, and what arguments each accepts.

Sensors never consult a device. The translated program will read the real
sensors when it runs in the simulator; here we only need a deterministic
preview, so each sensor reads a fixed placeholder.
"""
from typing import NamedTuple, Sequence
from .values import Kind, Value, COLORS, PEN_STATES, integer, boolean, color
from .diagnostics import ArityMismatch, TypeMismatch

class Actuator(NamedTuple):
	instruction: str
	required: Sequence[Kind]
	optional: Sequence[Kind] = ()
	variadic: bool = False   # Repeat the last required kind indefinitely
	negated: bool = False    # Emit the (single) argument with its sign flipped

	def check_arity(self, command:str, given:int):
		need = len(self.required)
		if given < need or (not self.variadic and given > need + len(self.optional)):
			raise ArityMismatch(command, need, given)

	def kind_at(self, position:int) -> Kind:
		if position < len(self.required): return self.required[position]
		if self.variadic: return self.required[-1]
		return self.optional[position - len(self.required)]

ACTUATORS = {
	"locate": Actuator("rLocate", (Kind.INTEGER, Kind.INTEGER), (Kind.INTEGER,)),
	"forward": Actuator("rForward", (Kind.INTEGER,)),
	"backward": Actuator("rForward", (Kind.INTEGER,), negated=True),
	"turn": Actuator("rTurn", (Kind.INTEGER,)),
	"pen": Actuator("rPen", (Kind.COLOR,)),
	"invisible": Actuator("rInvisible", (Kind.COLOR,), variadic=True),
	"obstacle": Actuator("CircleWH", (Kind.INTEGER,)*4, (Kind.COLOR,)),
}

class SensorSpec(NamedTuple):
	instruction: str
	argument: Kind    # VOID means the sensor takes no argument
	reading: Value

SENSORS = {
	"feel": SensorSpec("rFeel", Kind.VOID, integer(0)),
	"sense": SensorSpec("rSense", Kind.VOID, integer(0)),
	"bump": SensorSpec("rBumper", Kind.VOID, boolean(True)),
	"compass": SensorSpec("rCompass", Kind.VOID, integer(0)),
	"beacon": SensorSpec("rBeacon", Kind.COLOR, integer(0)),
	"look": SensorSpec("rLook", Kind.INTEGER, color("green")),
}

def check_argument(kind:Kind, v:Value, command:str, symbols=COLORS):
	if v.kind is not kind:
		raise TypeMismatch("%s expects %s, found %s: %s"%(command, kind.value, v.kind.value, v.text))
	if kind is Kind.COLOR and v.payload not in symbols:
		raise TypeMismatch("%s does not understand %s"%(command, v.payload))

def symbols_for(command:str):
	""" The pen accepts up/down as well as colors. """
	return COLORS | PEN_STATES if command == "pen" else COLORS
