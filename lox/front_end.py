"""
Recursive-descent parser: one method per grammar rule,
with precedence encoded in the order the methods call each other.

On a syntax error, the parser reports it, then skips ahead to a likely
statement boundary and carries on. That way one pass finds every
independent syntax error in the text.
"""
from typing import Iterable, Iterator, Optional
from . import syntax
from .ontology import Token, synthetic
from .diagnostics import Report, PARSE
from .scanner import scan

MAX_ARGUMENTS = 255

# A statement probably starts at any of these.
STATEMENT_LEADERS = frozenset(["CLASS", "FUN", "VAR", "FOR", "IF", "WHILE", "PRINT", "RETURN"])

class Panic(Exception):
	""" Unwinds the parser to the nearest declaration so it can resynchronize. """

class Parser:
	_current: Token
	_previous: Optional[Token]

	def __init__(self, tokens: Iterable[Token], report: Report, *, interactive=False):
		self._tokens: Iterator[Token] = iter(tokens)
		self._report = report
		self._interactive = interactive
		self._previous = None
		self._current = next(self._tokens)

	def parse(self) -> list[syntax.Stmt]:
		statements = []
		while not self._at_end():
			try: stmt = self._declaration()
			except RecursionError:
				# Nowhere sensible to resynchronize from, so stop here.
				self._report.nesting_too_deep(PARSE, self._current.line)
				break
			if stmt is not None:
				statements.append(stmt)
		return statements

	def parse_expression(self) -> Optional[syntax.Expr]:
		""" A single expression filling the whole text, for the command-line's expression modes. """
		try:
			expr = self._expression()
			self._consume("EOF", "Expect end of expression.")
			return expr
		except Panic:
			return None
		except RecursionError:
			self._report.nesting_too_deep(PARSE, self._current.line)
			return None

	# Declarations and statements

	def _declaration(self) -> Optional[syntax.Stmt]:
		try:
			if self._match("CLASS"): return self._class_declaration()
			if self._match("FUN"): return self._function("function")
			if self._match("VAR"): return self._var_declaration()
			return self._statement()
		except Panic:
			self._synchronize()
			return None

	def _class_declaration(self) -> syntax.ClassDecl:
		name = self._consume("IDENTIFIER", "Expect class name.")
		superclass = None
		if self._match("LESS"):
			superclass = syntax.Variable(self._consume("IDENTIFIER", "Expect superclass name."))
		self._consume("LEFT_BRACE", "Expect '{' before class body.")
		methods = []
		while not self._check("RIGHT_BRACE") and not self._at_end():
			methods.append(self._function("method"))
		self._consume("RIGHT_BRACE", "Expect '}' after class body.")
		return syntax.ClassDecl(name, superclass, methods)

	def _function(self, kind:str) -> syntax.FunctionDecl:
		name = self._consume("IDENTIFIER", "Expect %s name." % kind)
		self._consume("LEFT_PAREN", "Expect '(' after %s name." % kind)
		params = []
		if not self._check("RIGHT_PAREN"):
			params.append(self._consume("IDENTIFIER", "Expect parameter name."))
			while self._match("COMMA"):
				if len(params) >= MAX_ARGUMENTS:
					self._error(self._current, "Can't have more than %d parameters." % MAX_ARGUMENTS)
				params.append(self._consume("IDENTIFIER", "Expect parameter name."))
		self._consume("RIGHT_PAREN", "Expect ')' after parameters.")
		self._consume("LEFT_BRACE", "Expect '{' before %s body." % kind)
		return syntax.FunctionDecl(name, params, self._block_contents())

	def _var_declaration(self) -> syntax.VarDecl:
		name = self._consume("IDENTIFIER", "Expect variable name.")
		initializer = self._expression() if self._match("EQUAL") else None
		self._consume("SEMICOLON", "Expect ';' after variable declaration.")
		return syntax.VarDecl(name, initializer)

	def _statement(self) -> syntax.Stmt:
		if self._match("FOR"): return self._for_statement()
		if self._match("IF"): return self._if_statement()
		if self._match("PRINT"): return self._print_statement()
		if self._match("RETURN"): return self._return_statement()
		if self._match("WHILE"): return self._while_statement()
		if self._match("LEFT_BRACE"):
			brace = self._previous
			return syntax.Block(self._block_contents(), brace)
		return self._expression_statement()

	def _for_statement(self) -> syntax.Stmt:
		keyword = self._previous
		self._consume("LEFT_PAREN", "Expect '(' after 'for'.")
		if self._match("SEMICOLON"): initializer = None
		elif self._match("VAR"): initializer = self._var_declaration()
		else: initializer = self._expression_statement()

		condition = None if self._check("SEMICOLON") else self._expression()
		self._consume("SEMICOLON", "Expect ';' after loop condition.")
		increment = None if self._check("RIGHT_PAREN") else self._expression()
		self._consume("RIGHT_PAREN", "Expect ')' after for clauses.")
		body = self._statement()

		# Desugar into a while-loop, so the rest of the system never sees a for-loop.
		if increment is not None:
			body = syntax.Block([body, syntax.ExpressionStmt(increment)], keyword)
		if condition is None:
			condition = syntax.Literal(True, synthetic("TRUE", "true", keyword.line))
		body = syntax.While(keyword, condition, body)
		if initializer is not None:
			body = syntax.Block([initializer, body], keyword)
		return body

	def _if_statement(self) -> syntax.If:
		keyword = self._previous
		self._consume("LEFT_PAREN", "Expect '(' after 'if'.")
		condition = self._expression()
		self._consume("RIGHT_PAREN", "Expect ')' after if condition.")
		then_part = self._statement()
		else_part = self._statement() if self._match("ELSE") else None
		return syntax.If(keyword, condition, then_part, else_part)

	def _print_statement(self) -> syntax.Print:
		keyword = self._previous
		value = self._expression()
		self._consume("SEMICOLON", "Expect ';' after value.")
		return syntax.Print(keyword, value)

	def _return_statement(self) -> syntax.ReturnStmt:
		keyword = self._previous
		value = None if self._check("SEMICOLON") else self._expression()
		self._consume("SEMICOLON", "Expect ';' after return value.")
		return syntax.ReturnStmt(keyword, value)

	def _while_statement(self) -> syntax.While:
		keyword = self._previous
		self._consume("LEFT_PAREN", "Expect '(' after 'while'.")
		condition = self._expression()
		self._consume("RIGHT_PAREN", "Expect ')' after condition.")
		return syntax.While(keyword, condition, self._statement())

	def _block_contents(self) -> list[syntax.Stmt]:
		statements = []
		while not self._check("RIGHT_BRACE") and not self._at_end():
			stmt = self._declaration()
			if stmt is not None:
				statements.append(stmt)
		self._consume("RIGHT_BRACE", "Expect '}' after block.")
		return statements

	def _expression_statement(self) -> syntax.ExpressionStmt:
		expr = self._expression()
		if not (self._interactive and self._at_end()):
			self._consume("SEMICOLON", "Expect ';' after expression.")
		return syntax.ExpressionStmt(expr)

	# Expressions, from lowest precedence to highest

	def _expression(self) -> syntax.Expr:
		return self._assignment()

	def _assignment(self) -> syntax.Expr:
		expr = self._or()
		if self._match("EQUAL"):
			equals = self._previous
			value = self._assignment()
			if isinstance(expr, syntax.Variable):
				return syntax.Assign(expr.name, value)
			if isinstance(expr, syntax.Get):
				return syntax.Set(expr.lhs, expr.field_name, value)
			# Report, but no need to panic: the parser knows where it is.
			self._error(equals, "Invalid assignment target.")
		return expr

	def _or(self) -> syntax.Expr:
		expr = self._and()
		while self._match("OR"):
			op = self._previous
			expr = syntax.Logical(expr, op, self._and())
		return expr

	def _and(self) -> syntax.Expr:
		expr = self._equality()
		while self._match("AND"):
			op = self._previous
			expr = syntax.Logical(expr, op, self._equality())
		return expr

	def _left_associative(self, operand, *kinds) -> syntax.Expr:
		expr = operand()
		while self._match(*kinds):
			op = self._previous
			expr = syntax.Binary(expr, op, operand())
		return expr

	def _equality(self) -> syntax.Expr:
		return self._left_associative(self._comparison, "BANG_EQUAL", "EQUAL_EQUAL")

	def _comparison(self) -> syntax.Expr:
		return self._left_associative(self._term, "GREATER", "GREATER_EQUAL", "LESS", "LESS_EQUAL")

	def _term(self) -> syntax.Expr:
		return self._left_associative(self._factor, "MINUS", "PLUS")

	def _factor(self) -> syntax.Expr:
		return self._left_associative(self._unary, "SLASH", "STAR")

	def _unary(self) -> syntax.Expr:
		if self._match("BANG", "MINUS"):
			op = self._previous
			return syntax.Unary(op, self._unary())
		return self._call()

	def _call(self) -> syntax.Expr:
		expr = self._primary()
		while True:
			if self._match("LEFT_PAREN"):
				expr = self._finish_call(expr)
			elif self._match("DOT"):
				name = self._consume("IDENTIFIER", "Expect property name after '.'.")
				expr = syntax.Get(expr, name)
			else:
				return expr

	def _finish_call(self, callee: syntax.Expr) -> syntax.Call:
		args = []
		if not self._check("RIGHT_PAREN"):
			args.append(self._expression())
			while self._match("COMMA"):
				if len(args) >= MAX_ARGUMENTS:
					self._error(self._current, "Can't have more than %d arguments." % MAX_ARGUMENTS)
				args.append(self._expression())
		paren = self._consume("RIGHT_PAREN", "Expect ')' after arguments.")
		return syntax.Call(callee, paren, args)

	def _primary(self) -> syntax.Expr:
		token = self._current
		if self._match("FALSE"): return syntax.Literal(False, token)
		if self._match("TRUE"): return syntax.Literal(True, token)
		if self._match("NIL"): return syntax.Literal(None, token)
		if self._match("NUMBER", "STRING"): return syntax.Literal(token.literal, token)
		if self._match("THIS"): return syntax.This(token)
		if self._match("IDENTIFIER"): return syntax.Variable(token)
		if self._match("SUPER"):
			self._consume("DOT", "Expect '.' after 'super'.")
			method = self._consume("IDENTIFIER", "Expect superclass method name.")
			return syntax.Super(token, method)
		if self._match("LEFT_PAREN"):
			expr = self._expression()
			self._consume("RIGHT_PAREN", "Expect ')' after expression.")
			return syntax.Grouping(expr)
		raise self._panic(token, "Expect expression.")

	# The dreary bits

	def _synchronize(self):
		self._advance()
		while not self._at_end():
			if self._previous.kind == "SEMICOLON": return
			if self._current.kind in STATEMENT_LEADERS: return
			self._advance()

	def _consume(self, kind:str, message:str) -> Token:
		if self._check(kind): return self._advance()
		raise self._panic(self._current, message)

	def _match(self, *kinds:str) -> bool:
		if self._current.kind in kinds:
			self._advance()
			return True
		return False

	def _check(self, kind:str) -> bool:
		return self._current.kind == kind

	def _advance(self) -> Token:
		self._previous = self._current
		if not self._at_end():
			self._current = next(self._tokens)
		return self._previous

	def _at_end(self) -> bool:
		return self._current.kind == "EOF"

	def _error(self, token:Token, message:str):
		self._report.syntax_error(token, message)

	def _panic(self, token:Token, message:str) -> Panic:
		self._error(token, message)
		return Panic()


def parse_text(text:str, report:Report, *, interactive=False) -> list[syntax.Stmt]:
	""" Submit text to scanner and parser together. Check the report before trusting the result. """
	return Parser(scan(text, report), report, interactive=interactive).parse()

def parse_expression_text(text:str, report:Report) -> Optional[syntax.Expr]:
	return Parser(scan(text, report), report).parse_expression()
