import unittest

from lox.diagnostics import Report, SCAN
from lox.ontology import Token
from lox.scanner import scan
from lox.tree_walker.types import stringify

def _scan(text):
	report = Report()
	tokens = list(scan(text, report))
	return tokens, report

def _kinds(text):
	tokens, report = _scan(text)
	report.assert_no_issues("Scanning should have worked.")
	return [t.kind for t in tokens]

class ScannerTests(unittest.TestCase):

	def test_empty_text_is_just_eof(self):
		tokens, report = _scan("")
		self.assertEqual(["EOF"], [t.kind for t in tokens])
		self.assertTrue(report.ok())

	def test_maximal_munch(self):
		self.assertEqual(
			["BANG_EQUAL", "EQUAL_EQUAL", "LESS_EQUAL", "GREATER_EQUAL", "BANG", "EQUAL", "LESS", "GREATER", "EOF"],
			_kinds("!= == <= >= ! = < >"),
		)
		self.assertEqual(["EQUAL_EQUAL", "EQUAL", "EOF"], _kinds("==="))

	def test_punctuation(self):
		self.assertEqual(
			["LEFT_PAREN", "RIGHT_PAREN", "LEFT_BRACE", "RIGHT_BRACE", "COMMA", "DOT", "MINUS", "PLUS", "SEMICOLON", "STAR", "SLASH", "EOF"],
			_kinds("(){},.-+;*/"),
		)

	def test_comments_and_lines(self):
		tokens, report = _scan("// nothing to see here\n+ // or here\n\n-")
		self.assertTrue(report.ok())
		self.assertEqual([("PLUS", 2), ("MINUS", 4), ("EOF", 4)], [(t.kind, t.line) for t in tokens])

	def test_numbers(self):
		tokens, _ = _scan("12.25 7")
		self.assertEqual([12.25, 7.0, None], [t.literal for t in tokens])
		self.assertEqual(["DOT", "NUMBER", "EOF"], _kinds(".5"))
		self.assertEqual(["NUMBER", "DOT", "EOF"], _kinds("5."))

	def test_only_ascii_digits_make_numbers(self):
		tokens, report = _scan("١")
		self.assertEqual(["EOF"], [t.kind for t in tokens])
		self.assertEqual(1, len(report.diagnostics))

	def test_keywords_and_identifiers(self):
		self.assertEqual(
			["IDENTIFIER", "OR", "IDENTIFIER", "CLASS", "IDENTIFIER", "EOF"],
			_kinds("orchid or _under class Class"),
		)

	def test_string_literal(self):
		tokens, report = _scan('"hi there"')
		self.assertTrue(report.ok())
		self.assertEqual("STRING", tokens[0].kind)
		self.assertEqual('"hi there"', tokens[0].lexeme)
		self.assertEqual("hi there", tokens[0].literal)

	def test_two_unterminated_strings_are_two_errors(self):
		tokens, report = _scan('var a = "one\nvar b = "two\n')
		issues = report.diagnostics
		self.assertEqual(2, len(issues))
		self.assertEqual([SCAN, SCAN], [d.phase for d in issues])
		self.assertEqual([1, 2], [d.line for d in issues])
		self.assertEqual("Unterminated string.", issues[0].message)
		# Scanning picks up again on the next line.
		self.assertEqual(["VAR", "IDENTIFIER", "EQUAL", "VAR", "IDENTIFIER", "EQUAL", "EOF"], [t.kind for t in tokens])

	def test_unexpected_characters_are_all_reported(self):
		tokens, report = _scan("@\n#")
		self.assertEqual(["EOF"], [t.kind for t in tokens])
		self.assertEqual(
			["[line 1] Error: Unexpected character: @", "[line 2] Error: Unexpected character: #"],
			[str(d) for d in report.diagnostics],
		)

	def test_token_text(self):
		self.assertEqual("NUMBER 1 1.0", str(Token("NUMBER", "1", 1.0, 1)))
		self.assertEqual('STRING "x" x', str(Token("STRING", '"x"', "x", 1)))
		self.assertEqual("EOF  null", str(Token("EOF", "", None, 1)))

	def test_printed_values_scan_back_the_same(self):
		for number in [0.1, 3.0, 2.5, 1e21, 1e-7, 123456.789]:
			with self.subTest(number):
				tokens, report = _scan(stringify(number))
				self.assertTrue(report.ok())
				self.assertEqual(["NUMBER", "EOF"], [t.kind for t in tokens])
				self.assertEqual(number, tokens[0].literal)
		for text in ["", "hello, world", "1 + 2"]:
			with self.subTest(text):
				tokens, report = _scan('"%s"' % stringify(text))
				self.assertTrue(report.ok())
				self.assertEqual(text, tokens[0].literal)


if __name__ == '__main__':
	unittest.main()
