"""
Where `import` finds things.

A library is a collection of named locations, and each location holds named fragments:
ordinary expressions defined ahead of time, such as helper functions a shader wants to
pull in. If a location was never defined here, the library tries to import a Python
module by that (dotted) name and read the fragment as an attribute.
"""
from importlib import import_module
from typing import Union
from boozetools.support.symtab import NameSpace, NoSuchSymbol
from .forms import TranslationError, ArityError, Form, Symbol, head_is, second, third, name_of

EXPRESSION_TYPES = (Form, Symbol, str, int, float)

class ResolutionError(TranslationError):
	""" Arguments are the location and the name that could not be found there. """
	def __init__(self, location:str, name:str, why:str):
		super().__init__(location, name, why)
		self.location, self.name, self.why = location, name, why
	def __str__(self): return "Cannot import %s from %s: %s"%(self.name, self.location, self.why)

class Library:
	def __init__(self):
		self._locations : dict[str, NameSpace] = {}

	def __contains__(self, location): return name_of(location) in self._locations

	def location(self, location:Union[Symbol, str]) -> NameSpace:
		key = name_of(location)
		if key not in self._locations:
			self._locations[key] = NameSpace(place=key)
		return self._locations[key]

	def define(self, location, name, expr):
		""" Redefinition is allowed: The newest definition wins. """
		space, key = self.location(location), name_of(name)
		if key in space.local: space.replace(key, expr)
		else: space[key] = expr
		return expr

	def fragment(self, location, name=None):
		"""
		Decorator: run the function once and file whatever expression it builds.
		The fragment is named after the function unless you say otherwise.
		"""
		def decorate(fn):
			self.define(location, name or fn.__name__, fn())
			return fn
		return decorate

	def load_text(self, location, text:str):
		"""
		A library file is a sequence of (define name expr) forms.
		Returns the names defined, in order.
		"""
		from .front_end import read
		names = []
		for item in read(text):
			if not head_is(item, "define") or len(item) != 3:
				raise ArityError(item, "library files hold only (define name expr) forms")
			self.define(location, second(item), third(item))
			names.append(name_of(second(item)))
		return names

	def resolve(self, location, name):
		location, name = name_of(location), name_of(name)
		if location in self._locations:
			try: return self._locations[location][name]
			except NoSuchSymbol: raise ResolutionError(location, name, "no such fragment") from None
		try: module = import_module(location)
		except ImportError as ex: raise ResolutionError(location, name, "no such location (%s)"%ex) from None
		try: fragment = getattr(module, name.replace("-", "_"))
		except AttributeError: raise ResolutionError(location, name, "no such fragment") from None
		if not isinstance(fragment, EXPRESSION_TYPES):
			raise ResolutionError(location, name, "found a %s, not an expression"%type(fragment).__name__)
		return fragment

LIBRARY = Library()
