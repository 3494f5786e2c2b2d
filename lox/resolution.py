"""
All the scope resolution stuff goes here.

The resolver walks the syntax tree mirroring the nesting of environments
the interpreter will build later. For each variable reference, it records
how many environments out the binding lives. References it cannot find in
any local scope are left out of the table, which means "look in globals".

This decouples where a name lives (decided once, here) from what value it
holds (decided at run-time).
"""
from enum import Enum
from typing import Iterable
from boozetools.support.foundation import Visitor
from . import syntax
from .ontology import Token
from .diagnostics import Report, RESOLVE

DISTANCES = dict[int, int]

class Yuck(Exception):
	"""
	The first argument will be the name of the phase fraught with error.
	The end-user might not care about this, but it's handy for testing.
	"""
	pass

class FunctionKind(Enum):
	NONE = "none"
	FUNCTION = "function"
	METHOD = "method"
	INITIALIZER = "initializer"

class ClassKind(Enum):
	NONE = "none"
	CLASS = "class"
	SUBCLASS = "subclass"

class TopDown(Visitor):
	"""
	Convenience base-class to handle the dreary bits of a
	perfectly ordinary top-down walk through a syntax tree.
	"""

	def tour(self, items:Iterable):
		for i in items:
			self.visit(i)

	def visit_Literal(self, expr:syntax.Literal): pass

	def visit_Unary(self, expr:syntax.Unary):
		self.visit(expr.arg)

	def visit_Binary(self, expr:syntax.Binary):
		self.visit(expr.lhs)
		self.visit(expr.rhs)

	def visit_Logical(self, expr:syntax.Logical):
		self.visit(expr.lhs)
		self.visit(expr.rhs)

	def visit_Call(self, expr:syntax.Call):
		self.visit(expr.fn_exp)
		self.tour(expr.args)

	def visit_Get(self, expr:syntax.Get):
		# Properties are looked up dynamically, so only the object matters here.
		self.visit(expr.lhs)

	def visit_Set(self, expr:syntax.Set):
		self.visit(expr.value)
		self.visit(expr.lhs)

	def visit_Grouping(self, expr:syntax.Grouping):
		self.visit(expr.expr)

	def visit_ExpressionStmt(self, stmt:syntax.ExpressionStmt):
		self.visit(stmt.expr)

	def visit_Print(self, stmt:syntax.Print):
		self.visit(stmt.expr)

	def visit_If(self, stmt:syntax.If):
		self.visit(stmt.condition)
		self.visit(stmt.then_part)
		if stmt.else_part is not None:
			self.visit(stmt.else_part)

	def visit_While(self, stmt:syntax.While):
		self.visit(stmt.condition)
		self.visit(stmt.body)

class _Trouble(Exception):
	""" Raised after reporting a resolution error; the first one ends the pass. """

class Resolver(TopDown):
	"""
	This single top-down tree-walk does several things:

	* Work out the scope distance of every local variable reference.
	* Reject reading a local variable in its own initializer.
	* Reject declaring the same name twice in one local scope.
	* Reject 'return' outside a function, or with a value inside an initializer.
	* Reject 'this' and 'super' where there is no suitable class around them.
	"""
	distances: DISTANCES
	_scopes: list[dict[str, bool]]
	_current_function: FunctionKind
	_current_class: ClassKind

	def __init__(self, report:Report):
		self.report = report
		self.distances = {}
		self._scopes = []
		self._current_function = FunctionKind.NONE
		self._current_class = ClassKind.NONE

	def _complain(self, token:Token, message:str):
		self.report.resolution_error(token, message)
		raise _Trouble

	def _begin_scope(self, *predefined:str):
		self._scopes.append(dict.fromkeys(predefined, True))

	def _end_scope(self):
		self._scopes.pop()

	def _declare(self, name:Token):
		if not self._scopes: return
		scope = self._scopes[-1]
		if name.lexeme in scope:
			self._complain(name, "Already a variable with this name in this scope.")
		scope[name.lexeme] = False

	def _define(self, name:Token):
		if self._scopes:
			self._scopes[-1][name.lexeme] = True

	def _resolve_local(self, expr:syntax.Expr, name:str):
		for depth, scope in enumerate(reversed(self._scopes)):
			if name in scope:
				self.distances[expr.serial] = depth
				return

	def _resolve_function(self, fn:syntax.FunctionDecl, kind:FunctionKind):
		enclosing = self._current_function
		self._current_function = kind
		self._begin_scope()
		for param in fn.params:
			self._declare(param)
			self._define(param)
		self.tour(fn.body)
		self._end_scope()
		self._current_function = enclosing

	def visit_Block(self, stmt:syntax.Block):
		self._begin_scope()
		self.tour(stmt.statements)
		self._end_scope()

	def visit_VarDecl(self, stmt:syntax.VarDecl):
		self._declare(stmt.name)
		if stmt.initializer is not None:
			self.visit(stmt.initializer)
		self._define(stmt.name)

	def visit_FunctionDecl(self, stmt:syntax.FunctionDecl):
		# Defined before the body is resolved, so a function may call itself.
		self._declare(stmt.name)
		self._define(stmt.name)
		self._resolve_function(stmt, FunctionKind.FUNCTION)

	def visit_ReturnStmt(self, stmt:syntax.ReturnStmt):
		if self._current_function is FunctionKind.NONE:
			self._complain(stmt.keyword, "Can't return from top-level code.")
		if stmt.value is not None:
			if self._current_function is FunctionKind.INITIALIZER:
				self._complain(stmt.keyword, "Can't return a value from an initializer.")
			self.visit(stmt.value)

	def visit_ClassDecl(self, stmt:syntax.ClassDecl):
		enclosing = self._current_class
		self._current_class = ClassKind.CLASS
		self._declare(stmt.name)
		self._define(stmt.name)

		if stmt.superclass is not None:
			if stmt.superclass.name.lexeme == stmt.name.lexeme:
				self._complain(stmt.superclass.name, "A class can't inherit from itself.")
			self._current_class = ClassKind.SUBCLASS
			self.visit(stmt.superclass)
			self._begin_scope("super")

		self._begin_scope("this")
		for method in stmt.methods:
			kind = FunctionKind.INITIALIZER if method.name.lexeme == "init" else FunctionKind.METHOD
			self._resolve_function(method, kind)
		self._end_scope()

		if stmt.superclass is not None:
			self._end_scope()
		self._current_class = enclosing

	def visit_Variable(self, expr:syntax.Variable):
		if self._scopes and self._scopes[-1].get(expr.name.lexeme) is False:
			self._complain(expr.name, "Can't read local variable in its own initializer.")
		self._resolve_local(expr, expr.name.lexeme)

	def visit_Assign(self, expr:syntax.Assign):
		self.visit(expr.value)
		self._resolve_local(expr, expr.name.lexeme)

	def visit_This(self, expr:syntax.This):
		if self._current_class is ClassKind.NONE:
			self._complain(expr.keyword, "Can't use 'this' outside of a class.")
		self._resolve_local(expr, "this")

	def visit_Super(self, expr:syntax.Super):
		if self._current_class is ClassKind.NONE:
			self._complain(expr.keyword, "Can't use 'super' outside of a class.")
		if self._current_class is ClassKind.CLASS:
			self._complain(expr.keyword, "Can't use 'super' in a class with no superclass.")
		self._resolve_local(expr, "super")


def resolve(statements:Iterable[syntax.Stmt], report:Report) -> DISTANCES:
	""" Static pass over a whole program (or interactive line). Raises Yuck on the first problem. """
	resolver = Resolver(report)
	for stmt in statements:
		try: resolver.visit(stmt)
		except _Trouble: raise Yuck("resolve")
		except RecursionError:
			report.nesting_too_deep(RESOLVE, stmt.line())
			raise Yuck("resolve")
	report.info("Resolved", len(resolver.distances), "local reference(s).")
	return resolver.distances
