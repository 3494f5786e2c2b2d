from pathlib import Path
import unittest

from lox.diagnostics import Report
from lox.executive import Session

base_folder = Path(__file__).parent.parent
examples = base_folder/"examples"

def _good(which) -> list[str]:
	report = Report(verbose=False)
	outcome = Session(report=report).run((examples / (which + ".lox")).read_text())
	report.assert_no_issues("Ostensibly-good example %s failed." % which)
	return outcome.output

class ExampleSmokeTests(unittest.TestCase):
	""" Run all the examples; Test for no smoke. """

	def test_examples_run_clean(self):
		for path in sorted(examples.glob("*.lox")):
			with self.subTest(path.stem):
				_good(path.stem)

	def test_example_output(self):
		for name, expect in [
			("hello_world", ["Hello, World!"]),
			("arithmetic", ["14", "20", "2.5", "2", "Infinity", "0.30000000000000004", "concatenation", "true", "default", "true"]),
			("counter", ["1", "2", "1"]),
			("scopes", ["inner a", "global b", "outer a", "global a", "global", "global"]),
			("fibonacci", ["0", "1", "1", "2", "3", "5", "8", "13", "21", "34"]),
			("inheritance", ["Fry until golden brown.", "Pipe full of custard and coat with chocolate.", "BostonCream", "BostonCream instance"]),
			("classes", ["-2", "2", "(negative, positive)", "(negative, positive)", "a field now"]),
			("while_loop", ["5050", "true"]),
		]:
			with self.subTest(name):
				self.assertEqual(expect, _good(name))


if __name__ == '__main__':
	unittest.main()
