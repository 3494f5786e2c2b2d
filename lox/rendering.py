"""
Renders syntax trees in a fully-parenthesized prefix form, such as

    (* (- 123.0) (group 45.67))

which makes precedence and associativity plain to see.
"""
from boozetools.support.foundation import Visitor
from . import syntax

class Render(Visitor):

	def _wrap(self, head, *parts):
		# Plain strings go in as they are; anything else is a node to render.
		words = [head]
		for p in parts:
			words.append(p if isinstance(p, str) else self.visit(p))
		return "(%s)" % " ".join(words)

	def visit_Literal(self, expr:syntax.Literal):
		value = expr.value
		if value is None: return "nil"
		if isinstance(value, bool): return "true" if value else "false"
		if isinstance(value, float): return repr(value)
		return value

	def visit_Variable(self, expr:syntax.Variable): return expr.name.lexeme
	def visit_Assign(self, expr:syntax.Assign): return self._wrap("=", expr.name.lexeme, expr.value)
	def visit_Unary(self, expr:syntax.Unary): return self._wrap(expr.op.lexeme, expr.arg)
	def visit_Binary(self, expr:syntax.Binary): return self._wrap(expr.op.lexeme, expr.lhs, expr.rhs)
	def visit_Logical(self, expr:syntax.Logical): return self._wrap(expr.op.lexeme, expr.lhs, expr.rhs)
	def visit_Call(self, expr:syntax.Call): return self._wrap("call", expr.fn_exp, *expr.args)
	def visit_Get(self, expr:syntax.Get): return self._wrap(".", expr.lhs, expr.field_name.lexeme)
	def visit_Set(self, expr:syntax.Set): return self._wrap("=", self._wrap(".", expr.lhs, expr.field_name.lexeme), expr.value)
	def visit_This(self, expr:syntax.This): return "this"
	def visit_Super(self, expr:syntax.Super): return self._wrap("super", expr.method.lexeme)
	def visit_Grouping(self, expr:syntax.Grouping): return self._wrap("group", expr.expr)

	def visit_ExpressionStmt(self, stmt:syntax.ExpressionStmt): return self._wrap(";", stmt.expr)
	def visit_Print(self, stmt:syntax.Print): return self._wrap("print", stmt.expr)

	def visit_VarDecl(self, stmt:syntax.VarDecl):
		if stmt.initializer is None: return self._wrap("var", stmt.name.lexeme)
		return self._wrap("var", stmt.name.lexeme, "=", stmt.initializer)

	def visit_Block(self, stmt:syntax.Block): return self._wrap("block", *stmt.statements)

	def visit_If(self, stmt:syntax.If):
		if stmt.else_part is None: return self._wrap("if", stmt.condition, stmt.then_part)
		return self._wrap("if-else", stmt.condition, stmt.then_part, stmt.else_part)

	def visit_While(self, stmt:syntax.While): return self._wrap("while", stmt.condition, stmt.body)

	def visit_FunctionDecl(self, stmt:syntax.FunctionDecl):
		params = "(%s)" % " ".join(p.lexeme for p in stmt.params)
		return self._wrap("fun", stmt.name.lexeme, params, *stmt.body)

	def visit_ReturnStmt(self, stmt:syntax.ReturnStmt):
		if stmt.value is None: return "(return)"
		return self._wrap("return", stmt.value)

	def visit_ClassDecl(self, stmt:syntax.ClassDecl):
		if stmt.superclass is None: head = [stmt.name.lexeme]
		else: head = [stmt.name.lexeme, "<", stmt.superclass.name.lexeme]
		return self._wrap("class", *head, *stmt.methods)

def render(node) -> str:
	return Render().visit(node)
