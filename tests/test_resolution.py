import unittest

from lox.diagnostics import Report, RESOLVE
from lox.front_end import parse_text
from lox.resolution import resolve, Yuck

def _parse(text):
	report = Report()
	statements = parse_text(text, report)
	report.assert_no_issues("Test is subverted.")
	return statements, report

class DistanceTests(unittest.TestCase):

	def test_globals_are_left_out(self):
		statements, report = _parse("var g = 1; print g; g = 2;")
		self.assertEqual({}, resolve(statements, report))

	def test_nested_blocks(self):
		statements, report = _parse("{ var a = 1; { print a; a = 2; } }")
		distances = resolve(statements, report)
		inner = statements[0].statements[1].statements
		self.assertEqual(1, distances[inner[0].expr.serial])
		self.assertEqual(1, distances[inner[1].expr.serial])

	def test_parameters_live_with_the_body(self):
		statements, report = _parse("fun f(x) { var y = x; return y; }")
		distances = resolve(statements, report)
		body = statements[0].body
		self.assertEqual(0, distances[body[0].initializer.serial])
		self.assertEqual(0, distances[body[1].value.serial])

	def test_this_and_super(self):
		statements, report = _parse("class A {} class B < A { m() { return this; } n() { return super.m; } }")
		distances = resolve(statements, report)
		m, n = statements[1].methods
		self.assertEqual(1, distances[m.body[0].value.serial])
		self.assertEqual(2, distances[n.body[0].value.serial])

	def test_closure_sees_binding_at_declaration(self):
		statements, report = _parse("var x; { fun show() { print x; } var x; }")
		distances = resolve(statements, report)
		show = statements[1].statements[0]
		self.assertNotIn(show.body[0].expr.serial, distances)

	def test_global_redeclaration_is_fine(self):
		statements, report = _parse("var a = 1; var a = a;")
		resolve(statements, report)
		self.assertTrue(report.ok())

class ResolutionErrorTests(unittest.TestCase):

	def test_messages(self):
		for text, expect in [
			("{ var a = a; }", "[line 1] Error at 'a': Can't read local variable in its own initializer."),
			("{ var a; var a; }", "[line 1] Error at 'a': Already a variable with this name in this scope."),
			("fun f(a, a) {}", "[line 1] Error at 'a': Already a variable with this name in this scope."),
			("return 1;", "[line 1] Error at 'return': Can't return from top-level code."),
			("class A { init() { return 1; } }", "[line 1] Error at 'return': Can't return a value from an initializer."),
			("print this;", "[line 1] Error at 'this': Can't use 'this' outside of a class."),
			("fun f() { return super.m; }", "[line 1] Error at 'super': Can't use 'super' outside of a class."),
			("class A { m() { super.m(); } }", "[line 1] Error at 'super': Can't use 'super' in a class with no superclass."),
			("class A < A {}", "[line 1] Error at 'A': A class can't inherit from itself."),
		]:
			with self.subTest(text):
				statements, report = _parse(text)
				with self.assertRaises(Yuck) as context:
					resolve(statements, report)
				self.assertEqual("resolve", context.exception.args[0])
				self.assertEqual([RESOLVE], [d.phase for d in report.diagnostics])
				self.assertEqual(expect, str(report.diagnostics[0]))

	def test_initializer_may_return_early(self):
		statements, report = _parse("class A { init() { return; } }")
		resolve(statements, report)
		self.assertTrue(report.ok())

	def test_nesting_beyond_the_stack_is_a_resolution_error(self):
		# Sums chain leftward without deep recursion in the parser.
		statements, report = _parse("print 0;\nprint " + " + ".join(["1"] * 5000) + ";")
		with self.assertRaises(Yuck) as context:
			resolve(statements, report)
		self.assertEqual("resolve", context.exception.args[0])
		self.assertEqual([(RESOLVE, 2, "Too much nesting.")], [(d.phase, d.line, d.message) for d in report.diagnostics])


if __name__ == '__main__':
	unittest.main()
