"""
The transform stage turns convenience-sugar into the canonical forms the parser knows.

This happens top-down: each form goes through the handler for its head. If that
produces something different, the result goes through again from the top, so sugar
may expand into other sugar. Once a form comes out as it went in, its children get
the same treatment. Heads with no handler come through unchanged.
"""
from boozetools.support.foundation import Visitor
from .forms import Form, Symbol, ArityError, is_form, head_key, second
from .dispatch import DispatchTable

DO = Symbol("do")
ASSIGN = Symbol("set!")

class Transformer(Visitor):
	def __init__(self, table:DispatchTable):
		self._table = table

	def transform(self, expr):
		return self.visit(expr)

	def visit_Form(self, expr:Form):
		rewritten = self._table.lookup(head_key(expr))(self, expr)
		if rewritten is expr or rewritten == expr:
			return Form(self.visit(x) for x in expr)
		# Something new may be more sugar.
		return self.visit(rewritten)

	def visit_object(self, atom):
		return atom

def identity(transformer:Transformer, expr):
	return expr

BUILTIN = DispatchTable("built-in transforms", identity)

@BUILTIN.register("let")
def parallel_binding(transformer:Transformer, expr:Form) -> Form:
	"""
	(let [^float a 1.0 b 2] body...) -> (do (set! (float a) 1.0) (set! b 2) body...)
	"""
	bindings = second(expr)
	if not is_form(bindings):
		raise ArityError(expr, "let wants a vector of bindings")
	if len(bindings) % 2:
		raise ArityError(expr, "let wants its bindings in name/value pairs")
	assignments = [
		Form((ASSIGN, _declaration(name), value))
		for name, value in zip(bindings[0::2], bindings[1::2])
	]
	return Form((DO, *assignments, *expr[2:]))

def _declaration(name):
	""" A tagged name is also a declaration of that name's type. """
	if isinstance(name, Symbol) and name.tag is not None:
		return Form((Symbol(name.tag), name.tagged(None)))
	return name

@BUILTIN.register("->")
def thread_first(transformer:Transformer, expr:Form):
	"""
	Each step gets the value so far as its first argument.
	(-> x f (g a)) -> (g (f x) a)
	"""
	value = second(expr)
	for step in expr[2:]:
		if isinstance(step, Form) and step:
			value = Form((step[0], value, *step[1:]))
		else:
			value = Form((step, value))
	return value
