"""
Hand-written scanner for Lox.

It works lazily: tokens come out of a generator as the parser asks for them.
Lexical errors go to the report and scanning carries on,
so that one pass finds every lexical error in the text.
"""
import sys
from typing import Iterator
from .ontology import Token
from .diagnostics import Report

RESERVED = frozenset("""
	and class else false for fun if nil or
	print return super this true var while
""".split())

DIGITS = frozenset("0123456789")

PUNCTUATION = {
	"(": "LEFT_PAREN",
	")": "RIGHT_PAREN",
	"{": "LEFT_BRACE",
	"}": "RIGHT_BRACE",
	",": "COMMA",
	".": "DOT",
	"-": "MINUS",
	"+": "PLUS",
	";": "SEMICOLON",
	"*": "STAR",
}

# One character, or that character followed by '='.
RELATIONAL = {
	"!": ("BANG", "BANG_EQUAL"),
	"=": ("EQUAL", "EQUAL_EQUAL"),
	"<": ("LESS", "LESS_EQUAL"),
	">": ("GREATER", "GREATER_EQUAL"),
}

WHITESPACE = frozenset(" \r\t")

def is_word_start(c:str) -> bool: return (c.isascii() and c.isalpha()) or c == "_"
def is_word_part(c:str) -> bool: return (c.isascii() and c.isalnum()) or c == "_"


class Scanner:
	def __init__(self, text:str, report:Report):
		self._text = text
		self._report = report
		self._start = 0
		self._current = 0
		self._line = 1

	def tokens(self) -> Iterator[Token]:
		while not self._at_end():
			self._start = self._current
			token = self._scan_token()
			if token is not None:
				yield token
		yield Token("EOF", "", None, self._line, len(self._text))

	def _scan_token(self):
		c = self._advance()
		if c in PUNCTUATION:
			return self._token(PUNCTUATION[c])
		if c in RELATIONAL:
			single, double = RELATIONAL[c]
			return self._token(double if self._match("=") else single)
		if c == "/":
			if self._match("/"): self._skip_comment()
			else: return self._token("SLASH")
		elif c == "\n": self._line += 1
		elif c in WHITESPACE: pass
		elif c == '"': return self._scan_string()
		elif c in DIGITS: return self._scan_number()
		elif is_word_start(c): return self._scan_word()
		else: self._report.unexpected_character(self._line, self._start, c)

	def _skip_comment(self):
		while self._peek() not in ("\n", ""):
			self._current += 1

	def _scan_string(self):
		# String literals end at the line. That keeps an unterminated string
		# from swallowing the rest of the file, so later errors still surface.
		while self._peek() not in ('"', "\n", ""):
			self._current += 1
		if self._peek() != '"':
			self._report.unterminated_string(self._line, self._start)
			return
		self._current += 1
		return self._token("STRING", self._text[self._start+1:self._current-1])

	def _scan_number(self):
		while self._peek() in DIGITS:
			self._current += 1
		if self._peek() == "." and self._peek(1) in DIGITS:
			self._current += 1
			while self._peek() in DIGITS:
				self._current += 1
		return self._token("NUMBER", float(self._text[self._start:self._current]))

	def _scan_word(self):
		while is_word_part(self._peek()):
			self._current += 1
		word = self._text[self._start:self._current]
		if word in RESERVED: return self._token(word.upper())
		else: return self._token("IDENTIFIER")

	def _token(self, kind:str, literal=None) -> Token:
		lexeme = sys.intern(self._text[self._start:self._current])
		return Token(kind, lexeme, literal, self._line, self._start)

	def _match(self, expected:str) -> bool:
		if self._peek() == expected:
			self._current += 1
			return True
		return False

	def _advance(self) -> str:
		c = self._text[self._current]
		self._current += 1
		return c

	def _peek(self, ahead:int=0) -> str:
		index = self._current + ahead
		return self._text[index] if index < len(self._text) else ""

	def _at_end(self) -> bool:
		return self._current >= len(self._text)


def scan(text:str, report:Report) -> Iterator[Token]:
	""" The contract the parser relies on: a lazy stream of tokens ending with EOF. """
	return Scanner(text, report).tokens()
