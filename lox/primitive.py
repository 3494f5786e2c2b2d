"""
Build the primitive namespace: the host-provided functions
every program finds waiting in the global environment.
"""
import time
from .environment import Environment
from .tree_walker.values import Primitive

def _clock() -> float:
	return time.time()

NATIVES = [
	Primitive("clock", 0, _clock),
]

def install_natives(env:Environment):
	for native in NATIVES:
		env.define(native.name, native)
