"""
Reads Umbra programs from S-expression text.

	(defn float brightness [(vec3 color)]
	  (return (+ (.r color) (.g color) (.b color))))

Parentheses and square brackets both make forms. Double-quotes make string literals.
Integers and decimals are numbers. `^float x` is the symbol x tagged with type float.
Semicolons start comments, and commas are whitespace. Anything else is a symbol.
"""
from boozetools.scanning import miniscan
from boozetools.scanning.engine import IterableScanner
from boozetools.scanning.interface import ScannerBlocked
from boozetools.parsing import miniparse
from boozetools.parsing.interface import UnexpectedTokenError, UnexpectedEndOfTextError
from .forms import TranslationError, Form, Symbol

class ReadError(TranslationError):
	""" Arguments are a description of the problem and the slice of text where it happened. """
	def __init__(self, description:str, where:slice):
		super().__init__(description, where)
		self.description, self.slice = description, where
	def __str__(self): return "%s at offset %d"%(self.description, self.slice.start)

LEX = miniscan.Definition()
LEX.ignore(r'[\s,]+')
LEX.ignore(r';[^\n]*')
LEX.token_map('number', r'\-?\d+', int)
LEX.token_map('number', r'\-?\d+\.\d*([eE]\-?\d+)?', float)
LEX.token_map('string', r'"[^"]*"', lambda text:text[1:-1])
LEX.token_map('symbol', r'[^\s,()\][";^]+', Symbol)

@LEX.on(r'[()\[\]^]')
def punctuate(yy:IterableScanner): yy.token(yy.match())

READER = miniparse.MiniParse('program')
READER.rule('program', 'exprs')(None)

@READER.rule('exprs', '')
def _nothing(): return []

@READER.rule('exprs', 'exprs expr')
def _more(some, another):
	some.append(another)
	return some

READER.renaming('expr', 'symbol', 'number', 'string')
READER.rule('expr', '( .exprs )')(Form)
READER.rule('expr', '[ .exprs ]')(Form)

@READER.rule('expr', '^ .symbol .symbol')
def _tagged(tag:Symbol, name:Symbol): return name.tagged(tag.name)

def read(text:str) -> list:
	""" All the top-level expressions in the text, in order. """
	yy = LEX.scan(text)
	try: return READER.parse(yy)
	except ScannerBlocked as ex:
		position = ex.args[0]
		raise ReadError("I don't know what to make of this", slice(position, position+1)) from None
	except UnexpectedTokenError:
		raise ReadError("This seems out of place", yy.slice()) from None
	except UnexpectedEndOfTextError:
		raise ReadError("The text ended before all the brackets were closed", slice(len(text), len(text))) from None

def read_one(text:str):
	""" Exactly one expression, please. """
	exprs = read(text)
	if len(exprs) != 1:
		raise ReadError("Expected exactly one expression but found %d"%len(exprs), slice(0, len(text)))
	return exprs[0]
