"""
Overall control: text goes in, printed lines and diagnostics come out.

A Session owns one interpreter, and therefore one global environment,
for as long as it lives. The command line makes one per program run
or one for the whole life of the interactive prompt.
"""
import sys
from threading import Thread, stack_size
from typing import Callable, NamedTuple, Optional
from . import syntax
from .diagnostics import Report, Diagnostic
from .front_end import Parser
from .scanner import scan
from .resolution import resolve, Yuck
from .tree_walker.runtime import Interpreter, LoxRuntimeError
from .tree_walker.types import stringify

# Every Lox call costs the tree-walker about ten Python frames.
RECURSION_LIMIT = 100_000
STACK_BYTES = 512 * 1024 * 1024

def on_deep_stack(fn, *args):
	"""
	Call fn(*args) on a worker thread with room for deep recursion, and wait.
	The result comes back, or else the exception propagates as if raised here.
	"""
	result, trouble = [], []
	def work():
		try: result.append(fn(*args))
		except BaseException as ex: trouble.append(ex)
	former_limit = sys.getrecursionlimit()
	former_size = stack_size(STACK_BYTES)
	sys.setrecursionlimit(max(former_limit, RECURSION_LIMIT))
	try:
		worker = Thread(target=work, name="lox evaluator")
		worker.start()
		worker.join()
	finally:
		sys.setrecursionlimit(former_limit)
		stack_size(former_size)
	if trouble: raise trouble[0]
	return result[0]

class Outcome(NamedTuple):
	output: list[str]
	diagnostics: list[Diagnostic]

	@property
	def ok(self) -> bool:
		return not self.diagnostics

class Session:
	"""
	Each call to run or evaluate_line reports only its own diagnostics,
	but definitions made by earlier calls stay visible to later ones.

	If you pass an echo function, it sees each printed line as it happens,
	which matters for a long-running program at the console.
	"""
	report: Report

	def __init__(self, *, report:Optional[Report]=None, echo:Optional[Callable[[str], None]]=None, verbose:int=0):
		self.report = Report(verbose=verbose) if report is None else report
		self._echo = echo
		self._output = []
		self._line = 1
		self.interpreter = Interpreter(emit=self._emit)

	def run(self, source:str) -> Outcome:
		return self._submit(source, interactive=False)

	def evaluate_line(self, line:str) -> Outcome:
		""" Like run, but a bare expression at the end needs no semicolon and its value is shown. """
		return self._submit(line, interactive=True)

	def _emit(self, text:str):
		self._output.append(text)
		if self._echo is not None:
			self._echo(text)

	def _submit(self, text:str, *, interactive:bool) -> Outcome:
		return on_deep_stack(self._process, text, interactive)

	def _process(self, text:str, interactive:bool) -> Outcome:
		report = self.report
		report.reset()
		report.set_source(text)
		self._output = []
		self._line = 1
		try:
			statements = self._front_end(text, interactive)
			self.interpreter.note_distances(resolve(statements, report))
			self._execute(statements, interactive)
		except Yuck as ex:
			report.info("Stopped in the", ex.args[0], "phase.")
		except LoxRuntimeError as ex:
			report.runtime_error(ex.token, ex.message)
		except RecursionError:
			report.stack_overflow(self._line)
		return Outcome(self._output, report.diagnostics)

	def _front_end(self, text:str, interactive:bool) -> list[syntax.Stmt]:
		statements = Parser(scan(text, self.report), self.report, interactive=interactive).parse()
		if self.report.sick():
			raise Yuck(self.report.diagnostics[0].phase)
		self.report.info("Parsed", len(statements), "statement(s).")
		return statements

	def _execute(self, statements:list[syntax.Stmt], interactive:bool):
		interpreter = self.interpreter
		trailing = None
		if interactive and statements and isinstance(statements[-1], syntax.ExpressionStmt):
			*statements, trailing = statements
		for stmt in statements:
			self._line = stmt.line()
			interpreter.execute(stmt, interpreter.globals)
		if trailing is not None:
			self._line = trailing.line()
			self._emit(stringify(interpreter.evaluate(trailing.expr, interpreter.globals)))
		self.report.info("Finished with", len(self._output), "line(s) of output.")
