"""
The generate stage collects whole-program material a shader asks for.

The result of generating an expression is a list of extra forms to emit ahead of it.
By default, a form generates whatever its children generate, in order, so that an
`import` buried anywhere in the program still gets noticed. Atoms generate nothing.
"""
from boozetools.support.foundation import Visitor
from .forms import Form, ArityError, is_form, head_key, first, name_of
from .dispatch import DispatchTable
from .library import Library

class Generator(Visitor):
	def __init__(self, table:DispatchTable, library:Library):
		self._table = table
		self.library = library
		self._already = set()

	def generate(self, expr) -> list:
		return self.visit(expr)

	def visit_Form(self, expr:Form) -> list:
		return self._table.lookup(head_key(expr))(self, expr)

	def visit_object(self, atom) -> list:
		return []

	def fetch(self, location, name) -> list:
		""" Resolve a fragment, but only the first time it's asked for in a given translation. """
		key = name_of(location), name_of(name)
		if key in self._already: return []
		fragment = self.library.resolve(*key)
		self._already.add(key)
		return [fragment]

def flatten(generator:Generator, expr:Form) -> list:
	return [item for x in expr for item in generator.generate(x)]

BUILTIN = DispatchTable("built-in generators", flatten)

@BUILTIN.register("import")
def import_fragments(generator:Generator, expr:Form) -> list:
	"""
	(import (location name ...) ...)
	Every name is resolved in its location; failure is a ResolutionError.
	"""
	fragments = []
	for group in expr[1:]:
		if not is_form(group):
			raise ArityError(expr, "import wants (location name ...) groups")
		location = first(group)
		for name in group[1:]:
			fragments.extend(generator.fetch(location, name))
	return fragments
