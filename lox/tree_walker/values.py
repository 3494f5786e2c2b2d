"""
This module defines the specialized value-types that the tree-walker operates in terms of.
Basic primitive values play themselves, but callables and objects need more help.
"""
from abc import abstractmethod
from typing import Callable, Optional, TYPE_CHECKING
from .. import syntax
from ..environment import Environment
from .types import ARGS, VALUE, LoxValue

if TYPE_CHECKING:
	from .runtime import Interpreter

class Return(Exception):
	""" Control-flow signal carrying a function's result up to the nearest enclosing call. """
	def __init__(self, value:VALUE):
		super().__init__(value)
		self.value = value

###############################################################################

class Function(LoxValue):
	""" A run-time object that can be applied with arguments. """
	@abstractmethod
	def arity(self) -> int: pass

	@abstractmethod
	def apply(self, runtime:"Interpreter", args: ARGS) -> VALUE:
		""" The caller has already checked that len(args) == self.arity() """

class Primitive(Function):
	""" A host-provided function. """
	def __init__(self, name:str, arity:int, fn:Callable):
		self.name = name
		self._arity = arity
		self._fn = fn

	def __str__(self): return "<native fn>"
	def __repr__(self): return "<native fn %s>" % self.name

	def arity(self) -> int: return self._arity

	def apply(self, runtime:"Interpreter", args: ARGS) -> VALUE:
		return self._fn(*args)

class Closure(Function):
	""" The run-time manifestation of a user-defined function: a callable value tied to its natal environment. """
	def __init__(self, declaration:syntax.FunctionDecl, natal:Environment, is_initializer:bool=False):
		self._decl = declaration
		self.natal = natal
		self.is_initializer = is_initializer

	def __str__(self): return "<fn %s>" % self._decl.name.lexeme

	def arity(self) -> int: return len(self._decl.params)

	def bind(self, receiver:"Instance") -> "BoundMethod":
		return BoundMethod(self, receiver)

	def apply(self, runtime:"Interpreter", args: ARGS) -> VALUE:
		return self.invoke(runtime, args, self.natal)

	def invoke(self, runtime:"Interpreter", args: ARGS, natal:Environment) -> VALUE:
		frame = natal.child()
		for param, arg in zip(self._decl.params, args):
			frame.define(param.lexeme, arg)
		try:
			runtime.execute_block(self._decl.body, frame)
			result = None
		except Return as signal:
			result = signal.value
		# An initializer always hands back the instance, whatever it says.
		if self.is_initializer:
			return natal.get_at(0, "this")
		return result

class BoundMethod(Function):
	""" A method closed over a specific instance, which it sees as 'this'. """
	def __init__(self, method:Closure, receiver:"Instance"):
		self.method = method
		self.receiver = receiver
		self._natal = method.natal.child()
		self._natal.define("this", receiver)

	def __str__(self): return str(self.method)

	def arity(self) -> int: return self.method.arity()

	def apply(self, runtime:"Interpreter", args: ARGS) -> VALUE:
		return self.method.invoke(runtime, args, self._natal)

class LoxClass(Function):
	"""
	Calling a class makes an instance, then runs the initializer (if any)
	with the same arguments. So the class takes as many arguments as 'init' does.
	"""
	def __init__(self, name:str, superclass:Optional["LoxClass"], methods:dict[str, Closure]):
		self.name = name
		self.superclass = superclass
		self._methods = methods

	def __str__(self): return self.name

	def find_method(self, name:str) -> Optional[Closure]:
		klass = self
		while klass is not None:
			if name in klass._methods: return klass._methods[name]
			klass = klass.superclass

	def arity(self) -> int:
		initializer = self.find_method("init")
		return 0 if initializer is None else initializer.arity()

	def apply(self, runtime:"Interpreter", args: ARGS) -> "Instance":
		instance = Instance(self)
		initializer = self.find_method("init")
		if initializer is not None:
			initializer.bind(instance).apply(runtime, args)
		return instance

class Absent(KeyError):
	""" No field or method by that name. """

class Instance(LoxValue):
	def __init__(self, klass:LoxClass):
		self.klass = klass
		self.fields = {}

	def __str__(self): return "%s instance" % self.klass.name

	def get(self, name:str) -> VALUE:
		""" Fields shadow methods. """
		if name in self.fields: return self.fields[name]
		method = self.klass.find_method(name)
		if method is None: raise Absent(name)
		return method.bind(self)

	def set(self, name:str, value:VALUE):
		self.fields[name] = value
