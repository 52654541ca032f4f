"""
The parse/emit stage: canonical forms in, shading-language text out.

Selection goes like this:
	1. A member-access form (head starts with a dot) renders as target.member
	2. An atom renders as its text, with hyphens turned into underscores.
	3. Anything else goes to the handler for its head; unknown heads become function calls.

There is no operator precedence. Infix operators always come out fully parenthesized,
folded left to right, so the text means exactly what the tree says.

Assignment targets go through a separate l-value parser, because the same shapes
mean different things on the left of an equals sign. In particular a form like
(float x) is a declaration there, not a call.

Text is built directly. Statements in a sequence each get a line and a terminator;
scoped constructs (if, defn, etc.) end with their closing brace and a newline,
and don't get a terminator after that.
"""
from boozetools.support.foundation import Visitor
from .forms import (
	Form, Symbol, ArityError, MEMBER_SIGIL,
	head_key, head_is, is_member_access, first, second, third, fourth,
)
from .dispatch import DispatchTable

SEPARATOR = ";"
INDENT = "  "

def normalize(text:str) -> str:
	return text.replace("-", "_")

def indent(text:str) -> str:
	""" One level deeper, but leave blank lines blank """
	return "".join(INDENT+line+"\n" if line else "\n" for line in text.splitlines())

def plain_text(expr) -> str:
	""" Just the printed form, without evaluation or normalization """
	if isinstance(expr, Symbol): return expr.name
	return str(expr)

class Emitter(Visitor):
	def __init__(self, table:DispatchTable):
		self._table = table

	def parse(self, expr) -> str:
		return self.visit(expr)

	def visit_Form(self, expr:Form) -> str:
		if is_member_access(expr):
			return self.parse(second(expr)) + expr[0].name
		if not expr:
			return ""
		return self._table.lookup(head_key(expr))(self, expr)

	def visit_Symbol(self, it:Symbol) -> str: return normalize(it.name)
	def visit_str(self, it:str) -> str: return normalize(it)
	def visit_bool(self, it:bool) -> str: return "true" if it else "false"
	def visit_int(self, it:int) -> str: return str(it)
	def visit_float(self, it:float) -> str: return str(it)
	def visit_object(self, it) -> str: return normalize(str(it))

	def lvalue(self, expr) -> str:
		""" Parses the l-value in an assignment expression. """
		if is_member_access(expr):
			if len(expr) < 2: raise ArityError(expr, "member access without a target")
			member = list(expr[0].name[len(MEMBER_SIGIL):])
			return " ".join(member + [self.lvalue(x) for x in expr[1:]])
		if not isinstance(expr, Form):
			return self.parse(expr)
		if head_is(expr, "nth"):
			return "%s[%s]"%(self.lvalue(second(expr)), self.parse(third(expr)))
		return " ".join(self.lvalue(x) for x in expr)

	def rvalue(self, expr) -> str:
		""" Parses the r-value in an assignment expression. """
		if head_is(expr, "if"):
			return "(%s ? %s : %s)"%(self.parse(second(expr)), self.parse(third(expr)), self.parse(fourth(expr)))
		return self.parse(expr)

	def statement(self, expr) -> str:
		""" Blank, already terminated, or in need of a terminator. """
		text = self.parse(expr)
		if text and not text.endswith("\n"):
			return text+SEPARATOR+"\n"
		return text

	def parse_lines(self, exprs) -> str:
		return "".join(self.statement(x) for x in exprs)

	def scope(self, header:str, body) -> str:
		return "%s\n{\n%s}\n"%(header, indent(self.parse_lines(body)))

	def join(self, exprs) -> str:
		"""
		Statement-separator interposition for a whole program:
		everything but the last statement ends up terminated.
		"""
		texts = [t for t in map(self.parse, exprs) if t]
		return "".join(
			t if t.endswith("\n") else t+SEPARATOR+"\n"
			for t in texts[:-1]
		) + (texts[-1] if texts else "")

def function_call(emitter:Emitter, expr:Form) -> str:
	""" (a b c d) -> a(b, c, d) """
	return "%s(%s)"%(emitter.parse(first(expr)), ", ".join(map(emitter.parse, expr[1:])))

BUILTIN = DispatchTable("built-in parsers", function_call)

###############################################################################
#
#  Operator families, in declarative form:
#

INFIX = {
	"+": "+", "/": "/", "*": "*",
	"=": "==", "not=": "!=",
	"and": "&&", "or": "||", "xor": "^^",
	"<": "<", "<=": "<=", ">": ">", ">=": ">=",
}

UNARY = {"not": "!", "inc": "++", "dec": "--"}

ASSIGNMENT = {"declare": "", "set!": "=", "+=": "+=", "-=": "-=", "*=": "*=", "/=": "/="}

def concat_operators(emitter:Emitter, op:str, operands) -> str:
	"""
	Interposes operators between two or more operands, enforcing left-to-right evaluation.
	The operands arrive in reverse source order: [c, b, a] -> ((a - b) - c)
	"""
	if len(operands) < 2:
		raise ArityError(Form(reversed(operands)), "must be at least two operands for "+op)
	if len(operands) == 2: left = emitter.parse(operands[1])
	else: left = concat_operators(emitter, op, operands[1:])
	return "(%s %s %s)"%(left, op, emitter.parse(operands[0]))

def infix_parser(op:str):
	""" (+ a b) -> (a + b) """
	def parse_infix(emitter:Emitter, expr:Form) -> str:
		return concat_operators(emitter, op, expr[:0:-1])
	return parse_infix

def unary_parser(op:str):
	""" (not a) -> !a """
	def parse_unary(emitter:Emitter, expr:Form) -> str:
		return op + emitter.parse(second(expr))
	return parse_unary

def assignment_parser(op:str):
	""" (set! a b) -> a = b """
	def parse_assignment(emitter:Emitter, expr:Form) -> str:
		left = emitter.lvalue(second(expr))
		if len(expr) == 2: return left
		return "%s %s %s"%(left, op, emitter.rvalue(third(expr)))
	return parse_assignment

def scope_parser(split):
	"""
	Defines a wrapper for any keyword that wraps a scope.
	`split` takes the emitter and form, and returns the header text and the body forms.
	"""
	def parse_scope(emitter:Emitter, expr:Form) -> str:
		header, body = split(emitter, expr)
		return emitter.scope(header, body)
	return parse_scope

for _symbol, _text in INFIX.items(): BUILTIN.register(_symbol, infix_parser(_text))
for _symbol, _text in UNARY.items(): BUILTIN.register(_symbol, unary_parser(_text))
for _symbol, _text in ASSIGNMENT.items(): BUILTIN.register(_symbol, assignment_parser(_text))

###############################################################################
#
#  The rest of the canonical vocabulary:
#

@BUILTIN.register("-")
def parse_minus(emitter:Emitter, expr:Form) -> str:
	""" The - symbol can either be an infix or unary operator. """
	if len(expr) <= 2: return "-" + emitter.parse(second(expr))
	return concat_operators(emitter, "-", expr[:0:-1])

@BUILTIN.register("nth")
def parse_nth(emitter:Emitter, expr:Form) -> str:
	return "%s[%s]"%(emitter.parse(second(expr)), plain_text(third(expr)))

@BUILTIN.register("do")
def parse_do(emitter:Emitter, expr:Form) -> str:
	return emitter.parse_lines(expr[1:])

@BUILTIN.register("if")
def parse_if(emitter:Emitter, expr:Form) -> str:
	text = emitter.scope("if (%s)"%emitter.parse(second(expr)), [third(expr)])
	if len(expr) > 3:
		text += emitter.scope("else", [fourth(expr)])
	return text

@BUILTIN.register("return")
def parse_return(emitter:Emitter, expr:Form) -> str:
	if len(expr) == 1: return "return"
	return "return " + emitter.parse(second(expr))

@BUILTIN.register("import")
def parse_import(emitter:Emitter, expr:Form) -> str:
	return ""

def _defn(emitter:Emitter, expr:Form):
	""" (defn return-type name [params...] body...) """
	params = fourth(expr)
	if not isinstance(params, Form):
		raise ArityError(expr, "defn wants a vector of parameters")
	header = "%s %s(%s)"%(
		plain_text(second(expr)),
		normalize(plain_text(third(expr))),
		", ".join(map(emitter.lvalue, params)),
	)
	return header, expr[4:]

def _while(emitter:Emitter, expr:Form):
	""" (while test body...) """
	return "while (%s)"%emitter.parse(second(expr)), expr[2:]

def _for(emitter:Emitter, expr:Form):
	""" (for init test step body...) """
	clauses = (emitter.parse(second(expr)), emitter.parse(third(expr)), emitter.parse(fourth(expr)))
	return "for (%s; %s; %s)"%clauses, expr[4:]

BUILTIN.register("defn", scope_parser(_defn))
BUILTIN.register("while", scope_parser(_while))
BUILTIN.register("for", scope_parser(_for))
