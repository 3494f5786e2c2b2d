"""
The set of parse-nodes in simple form.
The parser calls these constructors as it recognizes each phrase.
Nodes never change once built. What the resolver learns about them
goes in a side-table keyed on each expression's serial number.
"""
from typing import Optional, Sequence
from .ontology import Token, Expr, Stmt, LITERAL

###############################################################################
# Expressions

class Literal(Expr):
	def __init__(self, value: LITERAL, token: Token):
		super().__init__()
		self.value, self._token = value, token
	def __repr__(self): return "<Literal %r>" % self.value
	def line(self): return self._token.line

class Variable(Expr):
	def __init__(self, name: Token):
		super().__init__()
		self.name = name
	def __repr__(self): return "<ref:%s>" % self.name.lexeme
	def line(self): return self.name.line

class Assign(Expr):
	def __init__(self, name: Token, value: Expr):
		super().__init__()
		self.name, self.value = name, value
	def line(self): return self.name.line

class Unary(Expr):
	def __init__(self, op: Token, arg: Expr):
		super().__init__()
		self.op, self.arg = op, arg
	def line(self): return self.op.line

class Binary(Expr):
	def __init__(self, lhs: Expr, op: Token, rhs: Expr):
		super().__init__()
		self.lhs, self.op, self.rhs = lhs, op, rhs
	def line(self): return self.op.line

class Logical(Binary):
	""" Short-cut 'and' / 'or'. The right side may never be evaluated. """

class Call(Expr):
	def __init__(self, fn_exp: Expr, paren: Token, args: Sequence[Expr]):
		super().__init__()
		self.fn_exp, self.paren, self.args = fn_exp, paren, args
	def line(self): return self.paren.line

class Get(Expr):
	def __init__(self, lhs: Expr, field_name: Token):
		super().__init__()
		self.lhs, self.field_name = lhs, field_name
	def __repr__(self): return "(%r.%s)" % (self.lhs, self.field_name.lexeme)
	def line(self): return self.field_name.line

class Set(Expr):
	def __init__(self, lhs: Expr, field_name: Token, value: Expr):
		super().__init__()
		self.lhs, self.field_name, self.value = lhs, field_name, value
	def line(self): return self.field_name.line

class This(Expr):
	def __init__(self, keyword: Token):
		super().__init__()
		self.keyword = keyword
	def line(self): return self.keyword.line

class Super(Expr):
	def __init__(self, keyword: Token, method: Token):
		super().__init__()
		self.keyword, self.method = keyword, method
	def line(self): return self.keyword.line

class Grouping(Expr):
	def __init__(self, expr: Expr):
		super().__init__()
		self.expr = expr
	def line(self): return self.expr.line()

###############################################################################
# Statements

class ExpressionStmt(Stmt):
	def __init__(self, expr: Expr):
		self.expr = expr
	def line(self): return self.expr.line()

class Print(Stmt):
	def __init__(self, keyword: Token, expr: Expr):
		self.keyword, self.expr = keyword, expr
	def line(self): return self.keyword.line

class VarDecl(Stmt):
	def __init__(self, name: Token, initializer: Optional[Expr]):
		self.name, self.initializer = name, initializer
	def line(self): return self.name.line

class Block(Stmt):
	def __init__(self, statements: Sequence[Stmt], brace: Token):
		self.statements, self._brace = statements, brace
	def line(self): return self._brace.line

class If(Stmt):
	def __init__(self, keyword: Token, condition: Expr, then_part: Stmt, else_part: Optional[Stmt]):
		self._keyword = keyword
		self.condition, self.then_part, self.else_part = condition, then_part, else_part
	def line(self): return self._keyword.line

class While(Stmt):
	def __init__(self, keyword: Token, condition: Expr, body: Stmt):
		self._keyword = keyword
		self.condition, self.body = condition, body
	def line(self): return self._keyword.line

class FunctionDecl(Stmt):
	def __init__(self, name: Token, params: Sequence[Token], body: Sequence[Stmt]):
		self.name, self.params, self.body = name, params, body
	def __repr__(self):
		return "{fun|%s(%s)}" % (self.name.lexeme, ", ".join(p.lexeme for p in self.params))
	def line(self): return self.name.line

class ReturnStmt(Stmt):
	def __init__(self, keyword: Token, value: Optional[Expr]):
		self.keyword, self.value = keyword, value
	def line(self): return self.keyword.line

class ClassDecl(Stmt):
	def __init__(self, name: Token, superclass: Optional[Variable], methods: Sequence[FunctionDecl]):
		self.name, self.superclass, self.methods = name, superclass, methods
	def __repr__(self): return "{class|%s}" % self.name.lexeme
	def line(self): return self.name.line

EXPRESSIONS = (Literal, Variable, Assign, Unary, Binary, Logical, Call, Get, Set, This, Super, Grouping)
STATEMENTS = (ExpressionStmt, Print, VarDecl, Block, If, While, FunctionDecl, ReturnStmt, ClassDecl)
