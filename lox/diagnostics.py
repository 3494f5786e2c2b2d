import sys, random
from pathlib import Path
from typing import NamedTuple, Optional
from boozetools.support.failureprone import SourceText, illustration

from .ontology import Token

SCAN, PARSE, RESOLVE, RUNTIME = "scan", "parse", "resolve", "runtime"

def _outburst():
	particle = ["Oh, ", "Well, ", "Hmm. ", "", ""]

	exclamations = [
		'Blast', 'Bother', 'Crumbs', 'Dang', 'Drat', 'Fiddlesticks',
		'Gadzooks', 'Good Grief', 'Great Scott', 'Heavens', 'Nuts',
		'Oh Dear', 'Rats', 'Shucks', 'Sufferin\' Succotash', 'Zounds',
	]

	resignations = [
		'Something is amiss.',
		'That did not go as planned.',
		'The program cannot proceed.',
		'Have a look at the following:',
	]

	return "%s%s! %s"%tuple(map(random.choice, (particle, exclamations, resignations)))

class Diagnostic(NamedTuple):
	"""
	One complaint. Every failure the interpreter detects
	ends up as exactly one of these.
	"""
	phase: str
	line: int
	message: str
	where: str = ""
	offset: Optional[int] = None

	def __str__(self):
		if self.phase == RUNTIME:
			return "%s\n[line %d]" % (self.message, self.line)
		return "[line %d] Error%s: %s" % (self.line, self.where, self.message)

def _where(token:Token) -> str:
	if token.kind == "EOF": return " at end"
	return " at '%s'" % token.lexeme

class Report:
	"""
	Collects diagnostics in the order they happen.
	There is one method per situation, so the wording lives in one place.
	"""
	_issues : list[Diagnostic]

	def __init__(self, *, verbose:int=0):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._text = ""
		self._source = None

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)

	@property
	def diagnostics(self) -> list[Diagnostic]:
		return list(self._issues)

	def issue(self, it:Diagnostic):
		self._issues.append(it)

	def reset(self):
		self._issues.clear()

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def set_source(self, text:str, path:Optional[Path]=None):
		""" Remember the text being processed, so complaints can show the offending line. """
		self._text = text
		self._source = SourceText(text, filename=str(path) if path else None)

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self._issues, self._text, self._source)

	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(_outburst()+" "+message)

	# Methods the scanner calls:
	def unexpected_character(self, line:int, offset:int, char:str):
		self.issue(Diagnostic(SCAN, line, "Unexpected character: %s" % char, offset=offset))

	def unterminated_string(self, line:int, offset:int):
		self.issue(Diagnostic(SCAN, line, "Unterminated string.", offset=offset))

	# Methods the parser calls:
	def syntax_error(self, token:Token, message:str):
		self.issue(Diagnostic(PARSE, token.line, message, _where(token), token.offset))

	# Methods the resolver calls:
	def resolution_error(self, token:Token, message:str):
		self.issue(Diagnostic(RESOLVE, token.line, message, _where(token), token.offset))

	# The run-time calls this one, by way of the executive:
	def runtime_error(self, token:Token, message:str):
		self.issue(Diagnostic(RUNTIME, token.line, message, offset=token.offset))

	def stack_overflow(self, line:int):
		self.issue(Diagnostic(RUNTIME, line, "Stack overflow."))

	# Either static pass may hit this one:
	def nesting_too_deep(self, phase:str, line:int):
		self.issue(Diagnostic(phase, line, "Too much nesting."))

class Annotation:
	def __init__(self, source:SourceText, offset:int, caption:str=""):
		self.source = source
		self.offset = offset
		self.caption = caption
	def illustrate(self):
		row, col = self.source.find_row_col(self.offset)
		single_line = self.source.line_of_text(row)
		return illustration(single_line, col, 1, prefix='% 6d |' % row, caption=self.caption)

def _annotate(text:str, source:Optional[SourceText], issue:Diagnostic) -> Optional[Annotation]:
	if source is None or issue.offset is None or not text:
		return None
	offset = min(issue.offset, len(text) - 1)
	return Annotation(source, offset)

def _bemoan(issues, text, source):
	""" Emit all the issues to the console. """
	if issues:
		print("*"*60, file=sys.stderr)
		print(_outburst(), file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(str(i), file=sys.stderr)
		ann = _annotate(text, source, i)
		if ann is not None:
			print(ann.illustrate(), file=sys.stderr)
	sys.stderr.flush()
