"""
This is a translator from Umbra S-expressions to shading-language source.

{0}

For example:

    umbra shader.umb

will print the translated shader, or else try to explain why not.

    umbra -L lighting.umb shader.umb

makes the (define name expr) forms in lighting.umb available to
(import (lighting name ...)) in shader.umb.

    umbra -h

will explain all the arguments.
"""
import sys, argparse
from pathlib import Path

parser = argparse.ArgumentParser(
	prog="umbra",
	description="Translate Umbra shader expressions into GLSL-flavored source text.",
)
parser.add_argument("program", help="a file of Umbra expressions; each top-level form is one statement.")
parser.add_argument('-L', "--library", action="append", default=[], help="a file of (define name expr) forms, importable by the file's stem.")
parser.add_argument('-o', "--output", help="write the result here instead of to standard output.")
parser.add_argument('-v', "--verbose", action="count", help="say what's going on along the way.")
parser.add_argument('-x', "--expand", action="store_true", help="stop after expanding sugar, and print the canonical forms instead.")

def _read_text(path:Path, report):
	try: text = path.read_text(encoding="utf-8")
	except FileNotFoundError:
		report.no_such_file(path)
		return None
	report.source(path, text)
	return text

def run(args):
	from .diagnostics import Report, TooManyIssues
	from .forms import Form, Symbol, TranslationError
	from .front_end import read, ReadError
	from .library import Library
	from .compiler import compile, expand
	report = Report(verbose=args.verbose)
	library = Library()
	try:
		for each in args.library:
			path = Path(each)
			text = _read_text(path, report)
			if text is None: continue
			try: names = library.load_text(path.stem, text)
			except ReadError as ex: report.read_error(path, ex)
			except TranslationError as ex: report.translation_error("loading a library", ex, path)
			else: report.info("Loaded %s from %s"%(", ".join(names), path))
		program_path = Path(args.program)
		text = _read_text(program_path, report)
		if text is not None:
			try: exprs = read(text)
			except ReadError as ex: report.read_error(program_path, ex)
		if report.sick():
			report.complain_to_console()
			return 1
		report.info("Read %d top-level forms from %s"%(len(exprs), program_path))
		program = Form((Symbol("do"), *exprs))
		try:
			if args.expand: result = "\n".join(map(str, expand(program)[1:]))
			else: result = compile(program, library=library)
		except TranslationError as ex:
			report.translation_error("translating", ex, program_path)
			report.complain_to_console()
			return 1
	except TooManyIssues:
		report.complain_to_console()
		print("Giving up after a few issues. One crisis at a time, eh?", file=sys.stderr)
		return 1
	if args.output:
		Path(args.output).write_text(result, encoding="utf-8")
		report.info("Wrote %s"%args.output)
	else:
		print(result, end="" if result.endswith("\n") else "\n")
	return 0

def main():
	if len(sys.argv) > 1:
		exit(run(parser.parse_args()))
	else:
		print(__doc__.strip().format(parser.format_usage()))
