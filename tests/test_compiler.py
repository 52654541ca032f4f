import sys, types, unittest
from unittest import mock

from umbra.forms import Form, ArityError, sym, form
from umbra.library import Library, ResolutionError
from umbra.compiler import BUILTIN, STANDARD, NestingTooDeep, compile, render

def lambert():
	return form(
		"defn", "float", "lambert", Form((form("vec3", "n"), form("vec3", "l"))),
		form("return", form("max", form("dot", "n", "l"), 0.0)),
	)

LAMBERT_TEXT = "float lambert(vec3 n, vec3 l)\n{\n  return max(dot(n, l), 0.0);\n}\n"

class DriverTests(unittest.TestCase):

	def test_single_statement_has_no_terminator(self):
		self.assertEqual("head(a, b)", compile(form("head", "a", "b")))

	def test_atoms(self):
		self.assertEqual("x", compile(sym("x")))
		self.assertEqual("1.5", compile(1.5))

	def test_do_program(self):
		expr = form("do", form("set!", form("float", "x"), 1.0), form("set!", "y", form("*", "x", 2)))
		self.assertEqual("float x = 1.0;\ny = (x * 2);\n", compile(expr))

	def test_scopes_are_not_terminated(self):
		expr = form("defn", "void", "main", Form(), form("discard"))
		self.assertEqual("void main()\n{\n  discard();\n}\n", compile(expr))

	def test_deep_nesting(self):
		expr = sym("x")
		for _ in range(5000): expr = form("f", expr)
		with self.assertRaises(NestingTooDeep):
			compile(expr)
		with self.assertRaises(NestingTooDeep):
			render(expr)

	def test_moderate_nesting_is_fine(self):
		expr = sym("x")
		for _ in range(50): expr = form("f", expr)
		self.assertEqual("f("*50 + "x" + ")"*50, compile(expr))

class ImportTests(unittest.TestCase):

	def setUp(self) -> None:
		self.library = Library()
		self.library.define("lighting", "lambert", lambert())

	def test_import_puts_fragment_first(self):
		expr = form(
			"do",
			form("import", form("lighting", "lambert")),
			form("set!", "c", form("lambert", "n", "l")),
		)
		self.assertEqual(LAMBERT_TEXT + "c = lambert(n, l);\n", compile(expr, library=self.library))

	def test_import_alone(self):
		expr = form("import", form("lighting", "lambert"))
		self.assertEqual(LAMBERT_TEXT, compile(expr, library=self.library))

	def test_each_fragment_once(self):
		expr = form(
			"do",
			form("import", form("lighting", "lambert", "lambert")),
			form("if", "c", form("import", form("lighting", "lambert"))),
		)
		self.assertEqual(1, compile(expr, library=self.library).count("float lambert"))

	def test_buried_imports_are_found(self):
		expr = form("defn", "void", "main", Form(), form("if", "c", form("import", form("lighting", "lambert"))))
		self.assertTrue(compile(expr, library=self.library).startswith(LAMBERT_TEXT))

	def test_several_fragments_in_order(self):
		self.library.define("lighting", "ambient", form("set!", form("const", "float", "ambient"), 0.1))
		expr = form("import", form("lighting", "ambient", "lambert"))
		self.assertEqual("const float ambient = 0.1;\n" + LAMBERT_TEXT, compile(expr, library=self.library))

	def test_fragments_are_transformed(self):
		self.library.define("util", "setup", form("let", form(sym("k", "float"), 2.0), form("f", "k")))
		expr = form("do", form("import", form("util", "setup")), form("g"))
		self.assertEqual("float k = 2.0;\nf(k);\ng();\n", compile(expr, library=self.library))

	def test_imports_inside_fragments(self):
		self.library.define("lighting", "shade", form(
			"defn", "float", "shade", Form(),
			form("import", form("lighting", "lambert")),
			form("return", form("lambert", "n", "l")),
		))
		expr = form("do", form("import", form("lighting", "shade")), form("shade"))
		shade_text = "float shade()\n{\n  return lambert(n, l);\n}\n"
		self.assertEqual(LAMBERT_TEXT + shade_text + "shade();\n", compile(expr, library=self.library))

	def test_fragments_importing_each_other(self):
		self.library.define("loop", "a", form("do", form("import", form("loop", "b")), form("f")))
		self.library.define("loop", "b", form("do", form("import", form("loop", "a")), form("g")))
		self.assertEqual("g();\nf();\n", compile(form("import", form("loop", "a")), library=self.library))

	def test_missing_import_inside_fragment(self):
		self.library.define("lighting", "broken", form(
			"defn", "float", "broken", Form(), form("import", form("lighting", "missing")), form("return", 1),
		))
		with self.assertRaises(ResolutionError) as ctx:
			compile(form("do", form("import", form("lighting", "broken")), form("broken")), library=self.library)
		self.assertEqual("missing", ctx.exception.name)

	def test_missing_fragment(self):
		with self.assertRaises(ResolutionError) as ctx:
			compile(form("import", form("lighting", "phong")), library=self.library)
		self.assertEqual("phong", ctx.exception.name)
		self.assertEqual("lighting", ctx.exception.location)

	def test_missing_location(self):
		with self.assertRaises(ResolutionError):
			compile(form("import", form("no-such-place-at-all", "phong")), library=self.library)

	def test_malformed_import(self):
		with self.assertRaises(ArityError):
			compile(form("import", "lighting"), library=self.library)

	def test_python_module_as_location(self):
		module = types.ModuleType("shader_bits")
		module.soft_clamp = form("defn", "float", "soft-clamp", Form((form("float", "x"),)), form("return", "x"))
		with mock.patch.dict(sys.modules, {"shader_bits": module}):
			text = compile(form("import", form("shader_bits", "soft-clamp")), library=self.library)
		self.assertEqual("float soft_clamp(float x)\n{\n  return x;\n}\n", text)

	def test_python_attribute_must_be_an_expression(self):
		module = types.ModuleType("shader_bits")
		module.helper = lambda: None
		module.nested = types
		with mock.patch.dict(sys.modules, {"shader_bits": module}):
			for name in ["helper", "nested"]:
				with self.subTest(name):
					with self.assertRaises(ResolutionError) as ctx:
						compile(form("import", form("shader_bits", name)), library=self.library)
					self.assertIn("not an expression", str(ctx.exception))

class LibraryTests(unittest.TestCase):

	def test_redefinition_wins(self):
		library = Library()
		library.define("lib", "x", 1)
		library.define("lib", "x", 2)
		self.assertEqual(2, library.resolve("lib", "x"))
		self.assertIn("lib", library)
		self.assertIn(sym("lib"), library)

	def test_fragment_decorator(self):
		library = Library()
		@library.fragment("noise")
		def hash_it(): return form("defn", "float", "hash-it", Form((form("float", "n"),)), form("return", form("fract", "n")))
		@library.fragment("noise", "seed")
		def anything(): return 42
		self.assertEqual("float hash_it(float n)\n{\n  return fract(n);\n}\n", render(library.resolve("noise", "hash_it")))
		self.assertEqual(42, library.resolve(sym("noise"), sym("seed")))

class ExtensionTests(unittest.TestCase):

	def test_new_parser(self):
		dialect = STANDARD.extend("discarding")
		dialect.parser("discard", lambda emitter, expr: "discard")
		expr = form("if", form("<", "alpha", 0.5), form("discard"))
		self.assertEqual("if ((alpha < 0.5))\n{\n  discard;\n}\n", compile(expr, dialect=dialect))
		self.assertEqual("discard()", compile(form("discard")))

	def test_override_builtin(self):
		dialect = STANDARD.extend("functional")
		@dialect.parser("+")
		def add(emitter, expr): return "add(%s)"%", ".join(map(emitter.parse, expr[1:]))
		self.assertEqual("add(a, (b * c))", compile(form("+", "a", form("*", "b", "c")), dialect=dialect))
		self.assertEqual("(a + b)", compile(form("+", "a", "b")))

	def test_new_generator(self):
		dialect = BUILTIN.extend("versioned")
		dialect.generator("shader", lambda generator, expr: [form("version", 120)])
		dialect.parser("version", lambda emitter, expr: "#version %s\n"%expr[1])
		self.assertEqual("#version 120\nshader(main())", compile(form("shader", form("main")), dialect=dialect))

	def test_standard_dialect_shortcut(self):
		from umbra import compiler
		with mock.patch.dict(STANDARD.parsers._space.local):
			compiler.parser("scratch", lambda emitter, expr: "ok")
			self.assertEqual("ok", compile(form("scratch")))
		self.assertNotIn("scratch", STANDARD.parsers)
		self.assertEqual("scratch()", compile(form("scratch")))

if __name__ == '__main__':
	unittest.main()
