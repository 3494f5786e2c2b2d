"""
Simplest possible environment concept.

This is the canonical list-structured search: each frame maps names
to values and links to the frame around it. Closures keep a reference
to the frame they were born in, so frames outlive their blocks whenever
something still refers to them. Frames are shared, never copied.
"""
from typing import Any, Optional

class Undefined(KeyError):
	""" The name is bound nowhere along the chain. """

class Environment:
	values: dict[str, Any]
	enclosing: Optional["Environment"]

	def __init__(self, enclosing:Optional["Environment"]=None):
		self.values = {}
		self.enclosing = enclosing

	def __repr__(self):
		return "<Environment %s>" % sorted(self.values)

	def child(self) -> "Environment":
		return Environment(self)

	def define(self, name:str, value:Any):
		""" Binding the same name again in the same frame simply replaces it. """
		self.values[name] = value

	def get(self, name:str) -> Any:
		env = self
		while env is not None:
			if name in env.values: return env.values[name]
			env = env.enclosing
		raise Undefined(name)

	def assign(self, name:str, value:Any):
		env = self
		while env is not None:
			if name in env.values:
				env.values[name] = value
				return
			env = env.enclosing
		raise Undefined(name)

	def ancestor(self, distance:int) -> "Environment":
		env = self
		for _ in range(distance):
			env = env.enclosing
		return env

	def get_at(self, distance:int, name:str) -> Any:
		return self.ancestor(distance).values[name]

	def assign_at(self, distance:int, name:str, value:Any):
		self.ancestor(distance).values[name] = value
