"""
Variant-types: closed sets of named cases, each case with its own payload fields.

Each case gets a generated subclass of Value, and that subclass is named for
the tag. That way a value's class says which case it is, which is exactly
what a Visitor needs to find the right method.

	MAYBE = Variant("maybe", absent=(), present=("item",))
	MAYBE.present(5).item == 5
"""
import inspect, keyword
from types import MappingProxyType
from typing import Iterable, Union
from .diagnostics import UnknownTag

_VALUE_WORDS = frozenset(("variant", "tag", "fields", "payload"))
_VARIANT_WORDS = frozenset(("name", "tags", "cases", "owns", "constructor"))
_MAPPING_WORDS = frozenset(("handlers", "otherwise", "strict", "report"))

FIELD_SPEC = Union[str, Iterable[str]]

def _check_name(kind:str, name, reserved=frozenset()):
	if not isinstance(name, str) or not name.isidentifier() or keyword.iskeyword(name):
		raise ValueError("%s names must be valid identifiers: %r" % (kind, name))
	if name.startswith("_"):
		raise ValueError("%s names cannot start with an underscore: %r" % (kind, name))
	if name in reserved:
		raise ValueError("%r is reserved and cannot be a %s name." % (name, kind.lower()))

def _field_names(spec:FIELD_SPEC) -> tuple[str, ...]:
	# Same conventions as collections.namedtuple.
	if isinstance(spec, str):
		spec = spec.replace(",", " ").split()
	fields = tuple(spec)
	for f in fields: _check_name("Field", f, _VALUE_WORDS)
	if len(set(fields)) < len(fields):
		raise ValueError("Duplicate field name in %r" % (fields,))
	return fields

class Value:
	"""
	One discriminated value: exactly one tag of exactly one variant, plus that tag's payload.
	Immutable once constructed. Don't subclass this yourself; Variant does it for you.
	"""
	__slots__ = ("payload",)
	variant: "Variant"
	tag: str
	fields: tuple[str, ...] = ()
	_signature: inspect.Signature

	def __init__(self, *args, **kwargs):
		if type(self) is Value:
			raise TypeError("Construct values through some variant's case, not Value directly.")
		try: bound = self._signature.bind(*args, **kwargs)
		except TypeError as ex:
			raise TypeError("%s: %s" % (type(self).__qualname__, ex)) from None
		object.__setattr__(self, "payload", tuple(bound.arguments[f] for f in self.fields))

	def __getattr__(self, name):
		# Only called when ordinary lookup fails, so this is just the payload fields.
		try: index = type(self).fields.index(name)
		except ValueError: raise AttributeError(name) from None
		return self.payload[index]

	def __setattr__(self, key, value):
		raise AttributeError("Discriminated values are immutable.")

	def __delattr__(self, key):
		raise AttributeError("Discriminated values are immutable.")

	def __eq__(self, other):
		if not isinstance(other, Value): return NotImplemented
		return self.variant is other.variant and self.tag == other.tag and self.payload == other.payload

	def __hash__(self):
		return hash((id(self.variant), self.tag, self.payload))

	# Values are immutable.
	def __copy__(self): return self
	def __deepcopy__(self, memo): return self

	def __repr__(self):
		return "%s.%s(%s)" % (self.variant.name, self.tag, ", ".join(map(repr, self.payload)))

def _make_case(variant:"Variant", tag:str, fields:tuple[str, ...]) -> type:
	params = [inspect.Parameter(f, inspect.Parameter.POSITIONAL_OR_KEYWORD) for f in fields]
	namespace = {
		"__slots__": (),
		"__qualname__": "%s.%s" % (variant.name, tag),
		"variant": variant,
		"tag": tag,
		"fields": fields,
		"_signature": inspect.Signature(params),
	}
	return type(tag, (Value,), namespace)

class Variant:
	"""
	A variant-type. The set of cases is fixed when you build it: there is no
	way to add one afterward, which is what makes exhaustive matching meaningful.
	Case constructors are available as attributes: ``MAYBE.present(5)``.
	"""
	name: str
	tags: tuple[str, ...]

	def __init__(self, name:str, /, **cases:FIELD_SPEC):
		if not (isinstance(name, str) and name):
			raise ValueError("A variant needs a name.")
		if not cases:
			raise ValueError("The variant <%s> needs at least one case." % name)
		self.name = name
		table = {}
		for tag, spec in cases.items():
			_check_name("Case", tag, _VALUE_WORDS | _VARIANT_WORDS | _MAPPING_WORDS)
			table[tag] = _make_case(self, tag, _field_names(spec))
		self._cases = table
		self.cases = MappingProxyType(table)
		self.tags = tuple(table)

	def __getattr__(self, name):
		cases = self.__dict__.get("_cases", {})
		try: return cases[name]
		except KeyError:
			pattern = "The variant <%s> has no case called %r."
			raise AttributeError(pattern % (self.__dict__.get("name"), name)) from None

	def constructor(self, tag:str) -> type:
		try: return self._cases[tag]
		except KeyError: raise UnknownTag(self, tag) from None

	def owns(self, value) -> bool:
		return isinstance(value, Value) and value.variant is self

	def __contains__(self, tag): return tag in self._cases
	def __iter__(self): return iter(self.tags)
	def __len__(self): return len(self.tags)
	def __repr__(self): return "<Variant %s: %s>" % (self.name, ", ".join(self.tags))
