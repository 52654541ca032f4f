"""
Collecting and complaining about problems, mostly on behalf of the command line.

The translator proper just raises exceptions. This is where they turn into
something a person can read, with a picture of the offending text when there is one.
"""
import sys
from pathlib import Path
from typing import Optional
from boozetools.support.failureprone import Issue, Evidence, Severity, SourceText

from .forms import TranslationError
from .front_end import ReadError

class TooManyIssues(Exception):
	pass

class Report:
	""" Issues accumulate here until somebody asks to see them. """
	_issues : list[Issue]

	def __init__(self, *, verbose:int=0, max_issues=3):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._sources : dict[str, SourceText] = {}
		self._max_issues = max_issues

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)
	def issues(self): return list(self._issues)

	def issue(self, it:Issue):
		self._issues.append(it)
		if len(self._issues) == self._max_issues:
			raise TooManyIssues(self)

	def reset(self):
		self._issues.clear()

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def source(self, path:Path, text:str):
		""" Remember the text of a file, so complaints about it can show the guilty line. """
		self._sources[str(path)] = SourceText(text, filename=str(path))

	def _fetch(self, key) -> SourceText:
		return self._sources[key]

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		for issue in self._issues:
			issue.emit(self._fetch)

	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(message)

	# Methods the command line is likely to call:

	def no_such_file(self, path:Path):
		self.issue(Issue("reading", Severity.ERROR, "I see no file called %s"%path, {}))

	def read_error(self, path:Path, ex:ReadError):
		key = str(path)
		evidence = {key: [Evidence(ex.slice, "here")]} if key in self._sources else {}
		self.issue(Issue("reading", Severity.ERROR, ex.description, evidence))

	def translation_error(self, phase:str, ex:TranslationError, path:Optional[Path]=None):
		where = "" if path is None else " (in %s)"%path
		self.issue(Issue(phase, Severity.ERROR, str(ex)+where, {}))
