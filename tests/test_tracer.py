import io
import tempfile
import unittest
from pathlib import Path

from robobasic import Interpreter
from robobasic.syntax import Program, Function, Parameter, Variable, Literal, BinExp, Call, Assign, Write, Return

def swap_program():
	swap = Function("swap", [Parameter("a", True), Parameter("b", True)], [
		Assign(Variable("t"), Variable("a"), line=2),
		Assign(Variable("a"), Variable("b"), line=3),
		Assign(Variable("b"), Variable("t"), line=4),
	], line=1)
	twice = Function("twice", [Parameter("n")], [
		Return(BinExp(Variable("n"), "*", Literal(2)), line=13),
	], line=12)
	main = Function("main", [], [
		Assign(Variable("x"), Literal(1), line=7),
		Assign(Variable("y"), Literal(2), line=8),
		Call("swap", [Variable("x"), Variable("y")], line=9),
		Write(Call("twice", [Variable("x")]), line=10),
	], line=6)
	return Program([swap, main, twice])

class TracerTests(unittest.TestCase):

	def setUp(self):
		self.tmp = tempfile.TemporaryDirectory()
		self.path = Path(self.tmp.name) / "trace.txt"

	def tearDown(self):
		self.tmp.cleanup()

	def test_trace_format(self):
		interp = Interpreter(swap_program(), self.path, stdin=io.StringIO(""))
		interp.run()
		self.assertEqual([
			"main() <entry point>",
			"|   swap(&a=1, &b=2) <line 9>",
			"|   return, &a=2, &b=1 <line 4>",
			"|   twice(n=2) <line 10>",
			"|   return 4 <line 13>",
			"return <line 10>",
		], self.path.read_text(encoding="utf-8").splitlines())
		self.assertTrue(interp._machine.tracer.closed)

	def test_preparation_is_not_traced(self):
		interp = Interpreter(swap_program(), self.path, stdin=io.StringIO(""))
		interp.translate()
		self.assertEqual(6, len(self.path.read_text(encoding="utf-8").splitlines()))

	def test_no_trace_requested(self):
		interp = Interpreter(swap_program(), stdin=io.StringIO(""))
		interp.run()
		interp.close()
		self.assertFalse(self.path.exists())


if __name__ == '__main__':
	unittest.main()
