"""
This module aims to express an interface agreement
between the evaluator and various kinds of data.

Numbers, strings, booleans and nil play themselves (as float, str, bool, None).
Callables and instances are LoxValue objects defined in .values
"""
import math
from abc import ABC
from decimal import Decimal
from typing import Sequence, Union

class LoxValue(ABC):
	""" Root for classes that implement specialized run-time data structures """

NATIVE_DATA = Union[None, bool, float, str]
VALUE = Union[NATIVE_DATA, LoxValue]
ARGS = Sequence[VALUE]

def is_truthy(value:VALUE) -> bool:
	if value is None: return False
	if isinstance(value, bool): return value
	return True

def is_equal(a:VALUE, b:VALUE) -> bool:
	"""
	Never raises. Values of different types are never equal,
	which matters because Python thinks True == 1.0.
	Callables and instances compare by identity.
	"""
	if isinstance(a, LoxValue) or isinstance(b, LoxValue): return a is b
	return type(a) is type(b) and a == b

def stringify(value:VALUE) -> str:
	if value is None: return "nil"
	if isinstance(value, bool): return "true" if value else "false"
	if isinstance(value, float): return _number_text(value)
	return str(value)

def _number_text(x:float) -> str:
	if math.isnan(x): return "NaN"
	if math.isinf(x): return "Infinity" if x > 0 else "-Infinity"
	if x.is_integer():
		if x == 0 and math.copysign(1.0, x) < 0: return "-0"
		return "%d" % x
	text = repr(x)
	if "e" in text:
		# Spell it out, so the text scans back as the same number.
		text = format(Decimal(text), "f")
	return text
