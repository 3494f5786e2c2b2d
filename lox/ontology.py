"""
These most-fundamental classes in the syntax class hierarchy
are separate from the rest to avoid circular imports.
The scanner produces tokens; the parser builds phrases out of them.
"""
from itertools import count
from typing import NamedTuple, Optional, Union

LITERAL = Optional[Union[float, str]]

class Token(NamedTuple):
	""" Immutable once produced. The offset only serves to illustrate diagnostics. """
	kind: str
	lexeme: str
	literal: LITERAL
	line: int
	offset: int = 0

	def __str__(self):
		if self.literal is None: shown = "null"
		elif isinstance(self.literal, float): shown = repr(self.literal)
		else: shown = self.literal
		return "%s %s %s" % (self.kind, self.lexeme, shown)

def synthetic(kind:str, lexeme:str, line:int) -> Token:
	""" For nodes the parser makes up, such as the 'true' of a condition-less for-loop. """
	return Token(kind, lexeme, None, line)

class Phrase:
	def line(self) -> int:
		""" Return the source line to blame if something goes wrong here """
		raise NotImplementedError(type(self))

_serial_numbers = count(1)

class Expr(Phrase):
	"""
	Every expression gets a serial number, unique for the life of the process.
	The resolver keys its side-table of scope distances on that number,
	so several interactive lines can share one table without confusion.
	"""
	serial: int
	def __init__(self):
		self.serial = next(_serial_numbers)

class Stmt(Phrase):
	pass
