"""
The tree-walking interpreter proper.

Statements execute and expressions evaluate against an explicit environment,
passed down the walk. Scope distances come from the resolver's side-table;
anything not in that table lives in the global environment.
"""
import math
import operator
from typing import Callable, Iterable
from boozetools.support.foundation import Visitor
from .. import syntax
from ..ontology import Token
from ..environment import Environment, Undefined
from ..primitive import install_natives
from ..resolution import DISTANCES
from .types import VALUE, is_truthy, is_equal, stringify
from .values import Function, Closure, LoxClass, Instance, Return, Absent

class LoxRuntimeError(Exception):
	""" Fatal to the current run. The token says where to point the finger. """
	def __init__(self, token:Token, message:str):
		super().__init__(message)
		self.token = token
		self.message = message

def _divide(a:float, b:float) -> float:
	# IEEE semantics, where Python would raise ZeroDivisionError.
	if b == 0:
		if a == 0 or math.isnan(a): return math.nan
		return math.copysign(math.inf, a) * math.copysign(1.0, b)
	return a / b

ARITHMETIC = {
	"MINUS": operator.sub,
	"STAR": operator.mul,
	"SLASH": _divide,
	"GREATER": operator.gt,
	"GREATER_EQUAL": operator.ge,
	"LESS": operator.lt,
	"LESS_EQUAL": operator.le,
}

def _is_number(x) -> bool:
	# bool is not a float, so true and false stay out of arithmetic.
	return isinstance(x, float)

class Interpreter(Visitor):
	"""
	One of these lives as long as a session does: the global environment
	and the table of scope distances both accumulate across interactive lines.
	"""
	globals: Environment
	distances: DISTANCES

	def __init__(self, emit:Callable[[str], None]=print):
		self.globals = Environment()
		self.distances = {}
		self._emit = emit
		install_natives(self.globals)

	def note_distances(self, distances:DISTANCES):
		self.distances.update(distances)

	def execute(self, stmt:syntax.Stmt, env:Environment):
		self.visit(stmt, env)

	def execute_block(self, statements:Iterable[syntax.Stmt], env:Environment):
		for stmt in statements:
			self.visit(stmt, env)

	def evaluate(self, expr:syntax.Expr, env:Environment) -> VALUE:
		return self.visit(expr, env)

	###########################################################################
	# Statements

	def visit_ExpressionStmt(self, stmt:syntax.ExpressionStmt, env:Environment):
		self.evaluate(stmt.expr, env)

	def visit_Print(self, stmt:syntax.Print, env:Environment):
		self._emit(stringify(self.evaluate(stmt.expr, env)))

	def visit_VarDecl(self, stmt:syntax.VarDecl, env:Environment):
		value = None if stmt.initializer is None else self.evaluate(stmt.initializer, env)
		env.define(stmt.name.lexeme, value)

	def visit_Block(self, stmt:syntax.Block, env:Environment):
		self.execute_block(stmt.statements, env.child())

	def visit_If(self, stmt:syntax.If, env:Environment):
		if is_truthy(self.evaluate(stmt.condition, env)):
			self.execute(stmt.then_part, env)
		elif stmt.else_part is not None:
			self.execute(stmt.else_part, env)

	def visit_While(self, stmt:syntax.While, env:Environment):
		while is_truthy(self.evaluate(stmt.condition, env)):
			self.execute(stmt.body, env)

	def visit_FunctionDecl(self, stmt:syntax.FunctionDecl, env:Environment):
		env.define(stmt.name.lexeme, Closure(stmt, env))

	def visit_ReturnStmt(self, stmt:syntax.ReturnStmt, env:Environment):
		value = None if stmt.value is None else self.evaluate(stmt.value, env)
		raise Return(value)

	def visit_ClassDecl(self, stmt:syntax.ClassDecl, env:Environment):
		superclass = None
		if stmt.superclass is not None:
			superclass = self.evaluate(stmt.superclass, env)
			if not isinstance(superclass, LoxClass):
				raise LoxRuntimeError(stmt.superclass.name, "Superclass must be a class.")

		env.define(stmt.name.lexeme, None)
		natal = env
		if superclass is not None:
			natal = env.child()
			natal.define("super", superclass)

		methods = {
			method.name.lexeme: Closure(method, natal, method.name.lexeme == "init")
			for method in stmt.methods
		}
		env.assign(stmt.name.lexeme, LoxClass(stmt.name.lexeme, superclass, methods))

	###########################################################################
	# Expressions

	def visit_Literal(self, expr:syntax.Literal, env:Environment):
		return expr.value

	def visit_Grouping(self, expr:syntax.Grouping, env:Environment):
		return self.evaluate(expr.expr, env)

	def visit_Variable(self, expr:syntax.Variable, env:Environment):
		return self._look_up(expr, expr.name, env)

	def visit_This(self, expr:syntax.This, env:Environment):
		return self._look_up(expr, expr.keyword, env)

	def visit_Assign(self, expr:syntax.Assign, env:Environment):
		value = self.evaluate(expr.value, env)
		name = expr.name.lexeme
		if expr.serial in self.distances:
			env.assign_at(self.distances[expr.serial], name, value)
		else:
			try: self.globals.assign(name, value)
			except Undefined: raise LoxRuntimeError(expr.name, "Undefined variable '%s'." % name)
		return value

	def visit_Unary(self, expr:syntax.Unary, env:Environment):
		arg = self.evaluate(expr.arg, env)
		if expr.op.kind == "BANG":
			return not is_truthy(arg)
		if not _is_number(arg):
			raise LoxRuntimeError(expr.op, "Operand must be a number.")
		return -arg

	def visit_Binary(self, expr:syntax.Binary, env:Environment):
		lhs = self.evaluate(expr.lhs, env)
		rhs = self.evaluate(expr.rhs, env)
		kind = expr.op.kind
		if kind == "EQUAL_EQUAL": return is_equal(lhs, rhs)
		if kind == "BANG_EQUAL": return not is_equal(lhs, rhs)
		if kind == "PLUS":
			if _is_number(lhs) and _is_number(rhs): return lhs + rhs
			if isinstance(lhs, str) and isinstance(rhs, str): return lhs + rhs
			raise LoxRuntimeError(expr.op, "Operands must be two numbers or two strings.")
		if not (_is_number(lhs) and _is_number(rhs)):
			raise LoxRuntimeError(expr.op, "Operands must be numbers.")
		return ARITHMETIC[kind](lhs, rhs)

	def visit_Logical(self, expr:syntax.Logical, env:Environment):
		lhs = self.evaluate(expr.lhs, env)
		if expr.op.kind == "OR":
			if is_truthy(lhs): return lhs
		elif not is_truthy(lhs):
			return lhs
		return self.evaluate(expr.rhs, env)

	def visit_Call(self, expr:syntax.Call, env:Environment):
		callee = self.evaluate(expr.fn_exp, env)
		args = [self.evaluate(a, env) for a in expr.args]
		if not isinstance(callee, Function):
			raise LoxRuntimeError(expr.paren, "Can only call functions and classes.")
		if len(args) != callee.arity():
			message = "Expected %d arguments but got %d." % (callee.arity(), len(args))
			raise LoxRuntimeError(expr.paren, message)
		try: return callee.apply(self, args)
		except RecursionError: raise LoxRuntimeError(expr.paren, "Stack overflow.")

	def visit_Get(self, expr:syntax.Get, env:Environment):
		subject = self.evaluate(expr.lhs, env)
		if not isinstance(subject, Instance):
			raise LoxRuntimeError(expr.field_name, "Only instances have properties.")
		try: return subject.get(expr.field_name.lexeme)
		except Absent: raise self._undefined_property(expr.field_name)

	def visit_Set(self, expr:syntax.Set, env:Environment):
		subject = self.evaluate(expr.lhs, env)
		if not isinstance(subject, Instance):
			raise LoxRuntimeError(expr.field_name, "Only instances have fields.")
		value = self.evaluate(expr.value, env)
		subject.set(expr.field_name.lexeme, value)
		return value

	def visit_Super(self, expr:syntax.Super, env:Environment):
		# Start from the superclass of the class where the method was written,
		# not the class of the instance: the resolver's distance says where that is.
		distance = self.distances[expr.serial]
		superclass = env.get_at(distance, "super")
		receiver = env.get_at(distance - 1, "this")
		method = superclass.find_method(expr.method.lexeme)
		if method is None:
			raise self._undefined_property(expr.method)
		return method.bind(receiver)

	###########################################################################

	def _look_up(self, expr:syntax.Expr, name:Token, env:Environment) -> VALUE:
		if expr.serial in self.distances:
			return env.get_at(self.distances[expr.serial], name.lexeme)
		try: return self.globals.get(name.lexeme)
		except Undefined: raise LoxRuntimeError(name, "Undefined variable '%s'." % name.lexeme)

	@staticmethod
	def _undefined_property(name:Token) -> LoxRuntimeError:
		return LoxRuntimeError(name, "Undefined property '%s'." % name.lexeme)
