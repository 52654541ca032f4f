"""
Each stage of the translator picks a handler by looking at the head of a form.
The tables here are how that works, and how you teach the translator new tricks.

A table maps head-symbol names to handlers and has a default for every other head.
Tables layer: a child sees everything its parent has, but registering something
in the child does not disturb the parent. The built-in handlers live in one table
per stage. The standard dialect is a child of those, so that callers can override a
built-in without losing the ability to get it back.

Handlers always get the stage object as the first argument, so they can recur
through whichever tables are active for the translation at hand.
"""
from typing import Callable, Optional, Union
from boozetools.support.symtab import NameSpace, NoSuchSymbol
from .forms import Symbol

Handler = Callable  # (stage, form) -> whatever the stage produces

def _key(head:Union[Symbol, str]) -> str:
	if isinstance(head, Symbol): return head.name
	assert isinstance(head, str), type(head)
	return head

class DispatchTable:
	def __init__(self, place:str, default:Handler, parent:Optional["DispatchTable"]=None):
		self.place = place
		self.default = default
		self._space : NameSpace[Handler] = NameSpace(place=place, parent=None if parent is None else parent._space)

	def __repr__(self): return "<DispatchTable %s>"%self.place

	def __contains__(self, head): return _key(head) in self._space

	def register(self, head:Union[Symbol, str], handler:Handler=None):
		"""
		Use directly as table.register('foo', fn) or as a decorator with @table.register('foo').
		Registering the same head again replaces the earlier handler in this table.
		"""
		if handler is None:
			return lambda fn: self.register(head, fn)
		key = _key(head)
		if key in self._space.local: self._space.replace(key, handler)
		else: self._space[key] = handler
		return handler

	def lookup(self, key:Optional[str]) -> Handler:
		if key is None: return self.default
		try: return self._space[key]
		except NoSuchSymbol: return self.default

	def child(self, place:str) -> "DispatchTable":
		return DispatchTable(place, self.default, self)

class Dialect:
	""" The three tables that together say how to translate a program. """
	def __init__(self, name:str, transforms:DispatchTable, generators:DispatchTable, parsers:DispatchTable):
		self.name = name
		self.transforms = transforms
		self.generators = generators
		self.parsers = parsers

	def __repr__(self): return "<Dialect %s>"%self.name

	def extend(self, name:str) -> "Dialect":
		""" A new dialect that starts out just like this one. """
		return Dialect(
			name,
			self.transforms.child(name+" transforms"),
			self.generators.child(name+" generators"),
			self.parsers.child(name+" parsers"),
		)

	def transformer(self, head, handler=None): return self.transforms.register(head, handler)
	def generator(self, head, handler=None): return self.generators.register(head, handler)
	def parser(self, head, handler=None): return self.parsers.register(head, handler)
