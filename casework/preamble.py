"""
A few variant-types that nearly everybody ends up wanting,
along with the little conversions to and from plain Python.
"""
from typing import Any, Iterable, Iterator
from .variant import Variant, Value

MAYBE = Variant("maybe", absent=(), present=("item",))
ORDER = Variant("order", less=(), same=(), more=())
LIST = Variant("list", nil=(), cons=("head", "tail"))

def from_optional(x:Any) -> Value:
	return MAYBE.absent() if x is None else MAYBE.present(x)

def compare(a, b) -> Value:
	if a < b: return ORDER.less()
	if a == b: return ORDER.same()
	return ORDER.more()

def as_list(items:Iterable) -> Value:
	lst = LIST.nil()
	for head in reversed(list(items)):
		lst = LIST.cons(head, lst)
	return lst

def iterate_list(lst:Value) -> Iterator:
	assert LIST.owns(lst), lst
	while lst.tag == "cons":
		yield lst.head
		lst = lst.tail
	assert lst.tag == "nil", lst
