from pathlib import Path
import unittest
from unittest import mock

from lox.diagnostics import Report
from lox.executive import Session

class Silence(Report):
	def __init__(self):
		super().__init__(verbose=False)
		self.complain_to_console = mock.Mock()
	pass

base_folder = Path(__file__).parent.parent
zoo_fail = base_folder/"zoo/fail"

def _identify_problem(folder:Path, filename:str):
	specimen_path = folder / filename
	assert specimen_path.exists(), specimen_path
	report = Silence()
	outcome = Session(report=report).run(specimen_path.read_text())
	assert 0 == report.complain_to_console.call_count
	if outcome.ok: return "failed to fail"
	assert report.sick()
	return outcome.diagnostics[0].phase

class ZooOfFail(unittest.TestCase):
	""" Tests that assert about failure modes. """

	def expect(self, folder, cases):
		for basename in cases:
			with self.subTest(basename):
				self.assertEqual(folder, _identify_problem(zoo_fail / folder, basename + ".lox"))

	def test_00_scan(self):
		self.expect("scan", [
			"unexpected_character",
			"unterminated_string",
		])

	def test_01_parse(self):
		self.expect("parse", [
			"bad_parameters",
			"declaration_in_branch",
			"invalid_assignment",
			"missing_operand",
			"missing_semicolon",
		])

	def test_02_resolve(self):
		self.expect("resolve", [
			"defined_twice",
			"inherit_from_self",
			"own_initializer",
			"return_from_initializer",
			"super_without_superclass",
			"this_outside_class",
			"top_level_return",
		])

	def test_03_runtime(self):
		self.expect("runtime", [
			"add_string_to_number",
			"call_a_string",
			"negate_string",
			"property_of_number",
			"stack_overflow",
			"superclass_not_a_class",
			"undefined_property",
			"undefined_variable",
			"wrong_arity",
		])


if __name__ == '__main__':
	unittest.main()
