import unittest

from robobasic.stacking import CallStack
from robobasic.values import Cell, integer
from robobasic.diagnostics import UndefinedVariable

class CallStackTests(unittest.TestCase):

	def setUp(self):
		self.stack = CallStack()
		self.stack.push_frame("main", -1)

	def test_define_then_get(self):
		self.stack.define_variable("x", integer(4))
		self.assertEqual(4, self.stack.get_variable("x").payload)
		self.stack.define_variable("x", integer(5))
		self.assertEqual(5, self.stack.get_variable("x").payload)

	def test_undefined(self):
		with self.assertRaises(UndefinedVariable):
			self.stack.get_variable("nope")
		self.assertIsNone(self.stack.find_cell("nope"))

	def test_names_are_local_to_a_frame(self):
		self.stack.define_variable("x", integer(1))
		self.stack.push_frame("f", 3)
		with self.assertRaises(UndefinedVariable):
			self.stack.get_cell("x")
		self.stack.pop_frame()
		self.assertEqual(1, self.stack.get_variable("x").payload)

	def test_shared_cell(self):
		self.stack.define_variable("x", integer(1))
		cell = self.stack.get_cell("x")
		self.stack.push_frame("f", 3)
		self.stack.bind_cell("n", cell)
		self.stack.define_variable("n", integer(2))
		self.stack.pop_frame()
		self.assertEqual(2, self.stack.get_variable("x").payload)

	def test_private_cell(self):
		self.stack.define_variable("x", integer(1))
		self.stack.push_frame("f", 3)
		self.stack.bind_cell("n", Cell(integer(1)))
		self.stack.define_variable("n", integer(2))
		self.stack.pop_frame()
		self.assertEqual(1, self.stack.get_variable("x").payload)

	def test_current_line(self):
		self.assertEqual(-1, self.stack.current_line())
		self.stack.top().line = 12
		self.assertEqual(12, self.stack.current_line())
		self.stack.pop_frame()
		self.assertEqual(-1, self.stack.current_line())

	def test_stack_trace(self):
		self.stack.top().line = 10
		for i, name in enumerate(["a", "b", "c", "d"]):
			self.stack.push_frame(name, 10 + i)
			self.stack.top().line = 20 + i
		self.assertEqual(5, self.stack.depth)
		full = self.stack.stack_trace(99)
		self.assertEqual([
			"|> d: line 99",
			"|> c: line 22",
			"|> b: line 21",
			"|> a: line 20",
			"|> main: line 10",
		], full.splitlines())
		self.assertEqual(full, self.stack.stack_trace(99, limit=5))
		self.assertEqual(full, self.stack.stack_trace(99, limit=50))
		self.assertEqual(["|> d: line 99", "|> c: line 22"], self.stack.stack_trace(99, limit=2).splitlines())
		self.assertEqual("", self.stack.stack_trace(99, limit=0))


if __name__ == '__main__':
	unittest.main()
