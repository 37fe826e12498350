"""
Case analysis the object-oriented way: one ``visit_<tag>`` method per case.

Every case of a variant is its own class, named for its tag, so the ordinary
boozetools Visitor already knows which method to call. What this adds is the
exhaustiveness check, which happens when the subclass is *defined*.
That's as close to compile-time as Python gets.

	class Describe(CaseVisitor):
		variant = MAYBE
		def visit_absent(self, value): return "nothing"
		def visit_present(self, value): return "just %r" % value.item
"""
import inspect
from typing import Optional
from boozetools.support.foundation import Visitor
from .variant import Variant
from .cases import examine
from .diagnostics import Report, IllFormed, WrongVariant

PREFIX = "visit_"

POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)

def _takes_value(method) -> bool:
	""" Can this be called as (self, value, ...)? Extra arguments are the caller's business. """
	try: params = inspect.signature(method).parameters.values()
	except (TypeError, ValueError): return True
	if any(p.kind == inspect.Parameter.VAR_POSITIONAL for p in params): return True
	return sum(p.kind in POSITIONAL for p in params) >= 2

def check_visitor(cls:type, report:Report):
	variant = cls.variant
	if not isinstance(variant, Variant):
		report.not_a_variant(variant)
		return
	methods = {
		name[len(PREFIX):]: name
		for name in dir(cls)
		if name.startswith(PREFIX) and not hasattr(Visitor, name)
	}
	for tag, name in methods.items():
		if tag not in variant:
			if cls.strict: report.stray_method(cls, name, variant)
		elif not callable(getattr(cls, name)):
			report.not_callable(tag, getattr(cls, name))
		elif not _takes_value(getattr(cls, name)):
			report.wrong_visit_arity(cls, name)
	missing = [tag for tag in variant.tags if tag not in methods]
	if missing: report.not_exhaustive(variant, missing)

class CaseVisitor(Visitor):
	"""
	Subclass with ``variant`` set, and supply a ``visit_<tag>(self, value, *args)``
	for each tag. Leave ``variant`` unset for an abstract intermediate class.
	"""
	variant: Optional[Variant] = None
	strict = True

	def __init_subclass__(cls, **kwargs):
		super().__init_subclass__(**kwargs)
		if cls.variant is None: return
		report = Report()
		check_visitor(cls, report)
		if report.sick(): raise IllFormed(report)

	def __call__(self, value, *args):
		variant, tag, payload = examine(value)
		if variant is not self.variant: raise WrongVariant(self.variant, variant)
		return self.visit(value, *args)
