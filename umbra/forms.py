"""
The expression model: what a shader program looks like before it becomes text.

An expression is either an atom or a Form. Atoms are Symbols, string literals (plain str),
numbers, and booleans. A Form is an immutable ordered sequence of expressions, and its
first element (the head) is normally a Symbol naming an operator, keyword, or function.

Nothing here checks that a form has the right number of parts. That comes out only
when some handler reaches for a part that isn't there, at which point the positional
accessors raise ArityError.
"""
from typing import Any, Optional, Union

Expression = Any  # Symbol, Form, str, int, float, or bool

MEMBER_SIGIL = "."

class TranslationError(Exception):
	""" Base class for everything that can abort a translation. """

class ArityError(TranslationError):
	"""
	The first argument is the offending expression;
	the second says what was missing.
	"""
	def __init__(self, expr, complaint:str):
		super().__init__(expr, complaint)
		self.expr, self.complaint = expr, complaint
	def __str__(self): return "%s: %s"%(self.complaint, self.expr)

class Symbol:
	""" A name, possibly carrying a type-tag like the `float` in `^float x`. """
	__slots__ = ("name", "tag")

	def __init__(self, name:str, tag:Optional[str]=None):
		assert isinstance(name, str), type(name)
		self.name, self.tag = name, tag
	def __repr__(self):
		return self.name if self.tag is None else "^%s %s"%(self.tag, self.name)
	def __str__(self): return self.name
	def __eq__(self, other):
		return isinstance(other, Symbol) and self.name == other.name and self.tag == other.tag
	def __hash__(self): return hash((self.name, self.tag))

	def tagged(self, tag:Optional[str]) -> "Symbol":
		return Symbol(self.name, tag)

class Form(tuple):
	""" An ordered, immutable sequence of expressions. Prints back as an S-expression. """
	def __repr__(self): return "(%s)"%" ".join(map(_spell, self))
	__str__ = __repr__

def _spell(expr) -> str:
	if isinstance(expr, str): return '"%s"'%expr
	if isinstance(expr, bool): return "true" if expr else "false"
	return repr(expr)

def sym(name:str, tag:Optional[str]=None) -> Symbol:
	return Symbol(name, tag)

def form(*items) -> Form:
	"""
	Convenience constructor for building programs in Python.
	Bare strings become symbols here. If you mean a string literal,
	build the Form directly.
	"""
	return Form(Symbol(x) if isinstance(x, str) else x for x in items)

def is_form(expr) -> bool:
	return isinstance(expr, Form)

def head_key(expr) -> Optional[str]:
	""" The dispatch key for a form: the name of its head symbol, if it has one. """
	if isinstance(expr, Form) and expr and isinstance(expr[0], Symbol):
		return expr[0].name

def head_is(expr, name:str) -> bool:
	return head_key(expr) == name

def is_member_access(expr) -> bool:
	"""
	Any form headed by a symbol that starts with a dot is a member access.
	(.xyz position) -> position.xyz
	"""
	key = head_key(expr)
	return key is not None and key.startswith(MEMBER_SIGIL)

def child(expr:Form, index:int, what:str) -> Expression:
	try: return expr[index]
	except IndexError: raise ArityError(expr, "missing the "+what) from None

def first(expr:Form) -> Expression: return child(expr, 0, "head")
def second(expr:Form) -> Expression: return child(expr, 1, "second part")
def third(expr:Form) -> Expression: return child(expr, 2, "third part")
def fourth(expr:Form) -> Expression: return child(expr, 3, "fourth part")

def name_of(expr:Union[Symbol, str]) -> str:
	""" Library locations and fragment names may be written as symbols or as strings. """
	if isinstance(expr, Symbol): return expr.name
	if isinstance(expr, str): return expr
	raise ArityError(expr, "expected a name")
