"""
Main driver for turning Umbra expressions into shader source.

The phases are:

1. transform: rewrite sugar (let, ->, and whatever else is registered) into canonical forms.
2. generate: collect the extra forms the program pulls in (import, mainly).
3. parse/emit: render the collected forms, then the program, as text.

Which handlers run at each phase is decided by a Dialect. Unless you say otherwise,
that's the STANDARD dialect, which starts out as the built-in vocabulary and is the
place to register your own forms:

	@STANDARD.parser("discard")
	def parse_discard(emitter, expr): return "discard"

Registrations made before a translation begins apply to that translation.
Registering during a translation on some other thread is your own lookout.
"""
from typing import Optional
from .forms import TranslationError
from .dispatch import Dialect
from .library import Library, LIBRARY
from . import transform, generate, emit

BUILTIN = Dialect("built-in", transform.BUILTIN, generate.BUILTIN, emit.BUILTIN)
STANDARD = BUILTIN.extend("standard")

class NestingTooDeep(TranslationError):
	"""
	Every stage recurs through the tree, so very deep nesting can exhaust Python's stack.
	Under the default recursion limit, a few hundred levels of nesting is safe.
	"""
	def __str__(self): return "The expression is nested too deeply to translate."

def compile(expr, *, dialect:Optional[Dialect]=None, library:Optional[Library]=None) -> str:
	""" Translate a whole program expression into shading-language text. """
	dialect = dialect or STANDARD
	transformer = transform.Transformer(dialect.transforms)
	generator = generate.Generator(dialect.generators, library or LIBRARY)
	emitter = emit.Emitter(dialect.parsers)
	try:
		program = transformer.transform(expr)
		prelude = _gather(transformer, generator, program)
		return emitter.join(prelude + [program])
	except RecursionError:
		raise NestingTooDeep() from None

def _gather(transformer, generator, expr) -> list:
	"""
	Everything the expression imports, transformed, each fragment preceded by whatever it imports in turn.
	The generator remembers what it has already fetched, so cycles end.
	"""
	found = []
	for fragment in generator.generate(expr):
		fragment = transformer.transform(fragment)
		found.extend(_gather(transformer, generator, fragment))
		found.append(fragment)
	return found

def render(expr, *, dialect:Optional[Dialect]=None) -> str:
	""" Render a single canonical expression, with no statement terminator. """
	dialect = dialect or STANDARD
	try: return emit.Emitter(dialect.parsers).parse(expr)
	except RecursionError: raise NestingTooDeep() from None

def expand(expr, *, dialect:Optional[Dialect]=None):
	""" Just the transform phase, which is handy for seeing what sugar turns into. """
	dialect = dialect or STANDARD
	try: return transform.Transformer(dialect.transforms).transform(expr)
	except RecursionError: raise NestingTooDeep() from None

# Shortcuts for extending the standard dialect:
transformer = STANDARD.transformer
generator = STANDARD.generator
parser = STANDARD.parser
