import sys, random, inspect
from pathlib import Path
from traceback import TracebackException
from typing import Any, Optional, Sequence

class CaseError(Exception):
	""" Base for everything this package raises about cases and their handlers. """

class MissingCase(CaseError, LookupError):
	""" A value arrived whose tag has no handler. That's a programming error. """
	def __init__(self, variant, tag:str):
		super().__init__(variant, tag)
		self.variant, self.tag = variant, tag
	def __str__(self):
		return "No case for <%s> in this mapping over <%s>." % (self.tag, _name_of(self.variant))

class UnknownTag(CaseError):
	"""
	The value claims a tag its own variant never declared.
	Constructors cannot make such a thing, so something is corrupt. Not recoverable.
	"""
	def __init__(self, variant, tag):
		super().__init__(variant, tag)
		self.variant, self.tag = variant, tag
	def __str__(self):
		return "The variant <%s> has no case called %r." % (_name_of(self.variant), self.tag)

class WrongVariant(CaseError, TypeError):
	def __init__(self, expected, actual):
		super().__init__(expected, actual)
		self.expected, self.actual = expected, actual
	def __str__(self):
		return "Expected a value of <%s> but got one of <%s>." % (_name_of(self.expected), _name_of(self.actual))

class NotAValue(CaseError, TypeError):
	def __str__(self):
		return "Not a discriminated value: %r" % (self.args[0],)

class IllFormed(CaseError):
	""" Construction-time rejection. Carries the report with all the gory details. """
	def __init__(self, report:"Report"):
		super().__init__(report)
		self.report = report
	def __str__(self):
		return "\n".join(pic.as_text() for pic in self.report.issues)

class TooManyIssues(IllFormed):
	""" The report filled up before the checking was done. """

def _name_of(variant):
	return getattr(variant, "name", variant)

def _outburst():
	particle = ["Oh, ", "Well, ", "Aw, ", "", ""]

	minced_oaths = [
		'Ack', 'Blargh', 'Confound it', 'Crud', 'Curses', 'Drat',
		'Fiddlesticks', 'Good Grief', 'Great Scott', 'Heavens',
		'Jeepers', 'Nuts', 'Rats',
	]

	resignations = [
		'Some case has gone unhandled.',
		'I cannot continue.',
		'I need to ask for help.',
	]

	return "%s%s! %s"%tuple(map(random.choice, (particle, minced_oaths, resignations)))

class Annotation:
	""" Points at some handler (or other object) and says where it lives, if Python knows. """
	caption: str
	where: str
	def __init__(self, thing:Any, caption:str=""):
		self.caption = caption
		self.where = _locate(thing)
	def illustrate(self):
		if self.caption: return "    %s  <-- %s" % (self.where, self.caption)
		else: return "    " + self.where

def _locate(thing) -> str:
	name = getattr(thing, "__qualname__", None) or repr(thing)
	try:
		path = inspect.getsourcefile(thing)
		_, line = inspect.getsourcelines(thing)
	except (TypeError, OSError):
		return name
	return "%s (%s, line %d)" % (name, path, line)

class Pic:
	def __init__(self, intro:str, anns:list[Annotation], footer:Sequence[str]=()):
		self.description, self._anns, self._footer = intro, anns, list(footer)
	def also(self, thing, caption:str=""): self._anns.append(Annotation(thing, caption))
	def as_text(self):
		lines = [self.description]
		lines.extend(ann.illustrate() for ann in self._anns)
		lines.extend(self._footer)
		return '\n'.join(lines)

class Report:
	""" Collects whatever is wrong with a case-mapping or visitor, rather than stopping at the first thing. """
	_issues : list[Pic]

	def __init__(self, *, verbose:int=0, max_issues=10):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._max_issues = max_issues

	@property
	def issues(self) -> list[Pic]: return self._issues

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)

	def issue(self, it:Pic):
		self._issues.append(it)
		if len(self._issues) == self._max_issues:
			raise TooManyIssues(self)

	def reset(self):
		self._issues.clear()

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self._issues)

	def assert_no_issues(self, message:str=""):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(_outburst()+" "+message)

	# Methods the command-line checker calls:
	def no_such_file(self, path:Path):
		self.issue(Pic("I see no file called %s" % path, []))

	def missing_module(self, target:str):
		intro = "Missing Module"
		self.issue(Pic(intro, [], ["The module %r could not be found." % target]))

	def broken_module(self, target:str, tbx:TracebackException):
		intro = "Attempting to import %s threw an exception." % target
		self.issue(Pic(intro, [], [''.join(tbx.format())]))

	# Methods the mapping-checker calls:
	def not_a_variant(self, thing:Any, where:Any=None):
		intro = "Case analysis needs a variant-type, but this is %r." % (thing,)
		problem = [] if where is None else [Annotation(where)]
		self.issue(Pic(intro, problem))

	def not_a_case_of(self, key:str, variant, handler:Any=None):
		pattern = "The key %r is not a case of the variant-type <%s>."
		intro = pattern % (key, variant.name)
		problem = [] if handler is None else [Annotation(handler, "handles nothing")]
		footer = ["The cases are: " + ", ".join(variant.tags)]
		self.issue(Pic(intro, problem, footer))

	def not_exhaustive(self, variant, missing:Sequence[str]):
		pattern = "This case-mapping does not cover all the cases of <%s> and lacks an otherwise-clause."
		intro = pattern % variant.name
		footer = [" - Missing: " + ", ".join(missing)]
		self.issue(Pic(intro, [], footer))

	def redundant_else(self, variant, otherwise:Any):
		intro = "This case-mapping has an extra otherwise-clause."
		problem = [Annotation(otherwise, "cannot happen")]
		footer = ["Every case of <%s> is already handled. That's probably an oversight." % variant.name]
		self.issue(Pic(intro, problem, footer))

	def redundant_case(self, key:str, prior:Any, new:Any):
		intro = "Two handlers were given for the case %r." % (key,)
		problem = [
			Annotation(prior, "First"),
			Annotation(new, "Not First"),
		]
		footer = ["That's probably an oversight."]
		self.issue(Pic(intro, problem, footer))

	def not_callable(self, key:str, handler:Any):
		intro = "The handler for %r is not something I can call: %r" % (key, handler)
		self.issue(Pic(intro, []))

	def wrong_arity(self, key:str, handler:Any, fields:Sequence[str]):
		pattern = "The handler for %r cannot accept the %d payload field(s) of that case."
		intro = pattern % (key, len(fields))
		problem = [Annotation(handler, "here")]
		footer = [" - Fields are: (%s)" % ", ".join(fields)]
		self.issue(Pic(intro, problem, footer))

	def wrong_visit_arity(self, visitor:type, method_name:str):
		pattern = "%s.%s cannot accept (self, value)."
		intro = pattern % (visitor.__name__, method_name)
		problem = [Annotation(getattr(visitor, method_name), "here")]
		self.issue(Pic(intro, problem))

	def stray_method(self, visitor:type, method_name:str, variant):
		pattern = "%s.%s does not correspond to any case of <%s>."
		intro = pattern % (visitor.__name__, method_name, variant.name)
		problem = [Annotation(getattr(visitor, method_name), "typo?")]
		self.issue(Pic(intro, problem))

def _bemoan(issues:Sequence[Pic], stream:Optional[Any]=None):
	""" Emit all the issues to the console. """
	stream = stream or sys.stderr
	if issues:
		print("*"*60, file=stream)
		print(_outburst(), file=stream)
	for i in issues:
		print("  -"*20, file=stream)
		print(i.as_text(), file=stream)
	stream.flush()
