"""
Case analysis over discriminated values: pick the one handler keyed by the
value's tag, call it with the value's payload, and hand back whatever it returns.

There are two ways to supply the handlers:

* A plain dict, keyed by tag. Nothing checks it until a value shows up,
  and then a missing key is a MissingCase error. Extra keys never get reached.

* A CaseMapping, which checks itself against the variant when you build it.
  If it's ill-formed you find out right then, with the whole list of problems.

Handlers get called directly and synchronously. Whatever they raise goes
straight back to the caller.
"""
import inspect
from collections.abc import Mapping
from functools import partial
from typing import Any, Callable, Optional
from .variant import Variant
from .diagnostics import Report, IllFormed, MissingCase, UnknownTag, WrongVariant, NotAValue

HANDLER = Callable[..., Any]
ABSENT = object()

def examine(value) -> tuple[Variant, str, tuple]:
	""" Return the variant, tag, and payload of a discriminated value, or complain bitterly. """
	try: variant, tag, payload = value.variant, value.tag, value.payload
	except AttributeError: raise NotAValue(value) from None
	if tag not in variant: raise UnknownTag(variant, tag)
	return variant, tag, payload

def accepts(handler:HANDLER, arity:int) -> bool:
	try: signature = inspect.signature(handler)
	except (TypeError, ValueError): return True  # Some builtins will not say.
	try: signature.bind(*range(arity))
	except TypeError: return False
	else: return True

def check_handlers(variant:Variant, handlers:dict, otherwise:Optional[HANDLER], strict:bool, report:Report):
	"""
	Enter an issue into the report for everything wrong with this set of handlers.
	Unknown keys are typos when ``strict``, and merely ignored otherwise.
	"""
	if not isinstance(variant, Variant):
		report.not_a_variant(variant)
		return
	for key, handler in handlers.items():
		if key not in variant:
			if strict: report.not_a_case_of(key, variant, handler)
			else: report.info("Ignoring %r, which is not a case of <%s>." % (key, variant.name))
		elif not callable(handler):
			report.not_callable(key, handler)
		else:
			fields = variant.cases[key].fields
			if not accepts(handler, len(fields)):
				report.wrong_arity(key, handler, fields)
	if otherwise is not None:
		if not callable(otherwise): report.not_callable("otherwise", otherwise)
		elif not accepts(otherwise, 1): report.wrong_arity("otherwise", otherwise, ("value",))

	# Check for exhaustiveness.
	missing = [tag for tag in variant.tags if tag not in handlers]
	exhaustive = not missing
	if      exhaustive and otherwise is not None: report.redundant_else(variant, otherwise)
	if not (exhaustive or otherwise is not None): report.not_exhaustive(variant, missing)

class CaseMapping(Mapping):
	"""
	A checked mapping from every tag of one variant to its handler.
	Calling it dispatches, so it doubles as the partially-applied form of ``dispatch``.

	The ``otherwise`` handler, if given, receives the whole value for any
	case without its own handler. It must be asked for explicitly:
	there is no silent default.
	"""
	variant: Variant
	otherwise: Optional[HANDLER]

	def __init__(
		self, variant:Variant, handlers:Optional[Mapping]=None, /, *,
		otherwise:Optional[HANDLER]=None, strict:bool=True, report:Optional[Report]=None,
		**more_handlers:HANDLER,
	):
		if report is None: report = Report()
		table = dict(handlers or {})
		for key, handler in more_handlers.items():
			if key in table: report.redundant_case(key, table[key], handler)
			else: table[key] = handler
		check_handlers(variant, table, otherwise, strict, report)
		if report.sick(): raise IllFormed(report)
		report.info("Case-mapping over <%s> is well-formed." % variant.name)
		self.variant = variant
		self.otherwise = otherwise
		self._dispatch = {tag: table[tag] for tag in variant.tags if tag in table}

	def __getitem__(self, tag): return self._dispatch[tag]
	def __iter__(self): return iter(self._dispatch)
	def __len__(self): return len(self._dispatch)

	def __repr__(self):
		keys = list(self._dispatch)
		if self.otherwise is not None: keys.append("otherwise")
		return "<CaseMapping over %s: %s>" % (self.variant.name, ", ".join(keys))

	def __call__(self, value):
		variant, tag, payload = examine(value)
		if variant is not self.variant: raise WrongVariant(self.variant, variant)
		handler = self._dispatch.get(tag)
		if handler is None: return self.otherwise(value)
		return handler(*payload)

def dispatch(mapping:Mapping, value=ABSENT):
	"""
	Invoke ``mapping[tag(value)](*payload(value))`` and return the result.
	Leave off the value to get back a reusable one-argument function instead.
	"""
	if value is ABSENT:
		if isinstance(mapping, CaseMapping): return mapping
		return partial(dispatch, mapping)
	if isinstance(mapping, CaseMapping): return mapping(value)
	variant, tag, payload = examine(value)
	try: handler = mapping[tag]
	except KeyError: raise MissingCase(variant, tag) from None
	return handler(*payload)

def matcher(variant:Variant, handlers:Optional[Mapping]=None, /, **kwargs) -> CaseMapping:
	""" Build the checked, reusable ``value -> result`` function for this variant. """
	return CaseMapping(variant, handlers, **kwargs)
