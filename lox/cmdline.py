"""
This is an interpreter for the Lox programming language.

{0}

For example:

    lox program.lox

will run program.lox if possible, or else try to explain why not.

    lox

with no program starts an interactive prompt. End it with end-of-file.

    lox -h

will explain all the arguments.
"""
import sys, argparse
from pathlib import Path

COMPILE_ERROR = 65
NO_INPUT = 66
RUNTIME_ERROR = 70

parser = argparse.ArgumentParser(
	prog="lox",
	description="Interpreter for the Lox programming language.",
)
parser.add_argument("program", nargs="?", help="try examples/hello_world.lox for example.")
parser.add_argument('-v', "--verbose", action="count", default=0, help="Say more about what's going on. Repeat for more.")
mode = parser.add_mutually_exclusive_group()
mode.add_argument('-t', "--tokenize", action="store_true", help="Print the program's tokens, one per line.")
mode.add_argument('-p', "--parse", action="store_true", help="Parse the program as a single expression and print its tree.")
mode.add_argument('-e', "--evaluate", action="store_true", help="Evaluate the program as a single expression and print its value.")
mode.add_argument('-c', "--check", action="store_true", help="Check the program but do not actually execute it.")

def run(args):
	from .diagnostics import Report
	if args.program is None:
		if args.tokenize or args.parse or args.evaluate or args.check:
			parser.error("that mode needs a program to work on.")
		return prompt(args.verbose)
	path = Path(args.program)
	try: text = path.read_text(encoding="utf-8")
	except OSError as ex:
		print("Could not read %s: %s" % (path, ex.strerror), file=sys.stderr)
		return NO_INPUT
	report = Report(verbose=args.verbose)
	report.set_source(text, path)
	report.info("Read", len(text), "characters from", path)
	if args.tokenize: return tokenize(text, report)
	from .executive import on_deep_stack
	if args.parse: return on_deep_stack(parse, text, report)
	if args.evaluate: return on_deep_stack(evaluate, text, report)
	if args.check: return on_deep_stack(check, text, report)
	return execute(text, report)

def _complain(report, status:int) -> int:
	report.complain_to_console()
	return status

def tokenize(text, report):
	from .scanner import scan
	count = 0
	for token in scan(text, report):
		print(token)
		count += 1
	report.info("Scanned", count, "token(s).")
	if report.sick(): return _complain(report, COMPILE_ERROR)

def parse(text, report):
	from .front_end import parse_expression_text
	from .rendering import render
	expr = parse_expression_text(text, report)
	if report.sick(): return _complain(report, COMPILE_ERROR)
	print(render(expr))

def evaluate(text, report):
	from .front_end import parse_expression_text
	from .tree_walker.runtime import Interpreter, LoxRuntimeError
	from .tree_walker.types import stringify
	expr = parse_expression_text(text, report)
	if report.sick(): return _complain(report, COMPILE_ERROR)
	# A lone expression opens no scopes, so every name in it is global.
	interpreter = Interpreter()
	try: value = interpreter.evaluate(expr, interpreter.globals)
	except LoxRuntimeError as ex:
		report.runtime_error(ex.token, ex.message)
		return _complain(report, RUNTIME_ERROR)
	print(stringify(value))

def check(text, report):
	from .front_end import parse_text
	from .resolution import resolve, Yuck
	statements = parse_text(text, report)
	if report.ok():
		try: resolve(statements, report)
		except Yuck: pass
	if report.sick(): return _complain(report, COMPILE_ERROR)
	print("Looks plausible to me.", file=sys.stderr)

def execute(text, report):
	from .diagnostics import RUNTIME
	from .executive import Session
	outcome = Session(report=report, echo=print).run(text)
	if outcome.ok: return
	report.complain_to_console()
	if any(d.phase == RUNTIME for d in outcome.diagnostics): return RUNTIME_ERROR
	return COMPILE_ERROR

def prompt(verbose:int):
	""" Read-evaluate-print until end of input. Mistakes are forgiven; definitions persist. """
	from .executive import Session
	session = Session(echo=print, verbose=verbose)
	if sys.stdin.isatty():
		print(__doc__.strip().format(parser.format_usage()))
	while True:
		try: line = input("> ")
		except EOFError:
			print()
			return
		outcome = session.evaluate_line(line)
		if not outcome.ok:
			session.report.complain_to_console()

def main():
	exit(run(parser.parse_args()))
