import io
import unittest
from unittest import mock

from casework.cases import CaseMapping, matcher
from casework.diagnostics import Report, IllFormed, TooManyIssues, CaseError
from casework.variant import Variant
from casework.preamble import MAYBE, ORDER

def _nothing(): return None
def _just(x): return x

def _problems(variant, handlers=None, **kwargs) -> list[str]:
	report = Report(max_issues=30)
	try: CaseMapping(variant, handlers, report=report, **kwargs)
	except IllFormed as ex:
		assert ex.report is report
		assert report.sick()
		return [pic.description for pic in report.issues]
	else:
		assert report.ok()
		return []

class ZooOfFail(unittest.TestCase):
	""" Tests that assert about ill-formed case-mappings. """

	def expect(self, fragment, problems):
		self.assertEqual(1, len(problems), problems)
		self.assertIn(fragment, problems[0])

	def test_00_well_formed(self):
		self.assertEqual([], _problems(MAYBE, absent=_nothing, present=_just))
		self.assertEqual([], _problems(MAYBE, {"absent": _nothing, "present": _just}))

	def test_01_not_exhaustive(self):
		self.expect("does not cover", _problems(MAYBE, present=_just))
		with self.assertRaises(IllFormed) as cm:
			matcher(ORDER, less=_nothing)
		self.assertIn("same, more", str(cm.exception))

	def test_02_typo(self):
		self.expect("not a case of", _problems(MAYBE, absent=_nothing, present=_just, presnet=_just))

	def test_03_lenient_ignores_typos(self):
		self.assertEqual([], _problems(MAYBE, absent=_nothing, present=_just, presnet=_just, strict=False))
		checked = matcher(MAYBE, absent=_nothing, present=_just, presnet=_just, strict=False)
		self.assertEqual({"absent", "present"}, set(checked))

	def test_04_lenient_still_wants_every_case(self):
		self.expect("does not cover", _problems(MAYBE, present=_just, presnet=_just, strict=False))

	def test_05_not_callable(self):
		self.expect("not something I can call", _problems(MAYBE, absent=_nothing, present=5))
		self.expect("not something I can call", _problems(ORDER, less=_nothing, otherwise="nope"))

	def test_06_wrong_arity(self):
		for handlers in [
			{"absent": _nothing, "present": lambda: 1},
			{"absent": _just, "present": _just},
			{"absent": _nothing, "present": lambda a, b: a},
		]:
			with self.subTest(handlers):
				self.expect("cannot accept", _problems(MAYBE, handlers))
		self.expect("cannot accept", _problems(ORDER, less=_nothing, otherwise=lambda: 0))

	def test_07_flexible_signatures_are_fine(self):
		self.assertEqual([], _problems(MAYBE, absent=lambda x=None: x, present=lambda *a: a))
		self.assertEqual([], _problems(MAYBE, absent=list, present=str))

	def test_08_redundant_else(self):
		self.expect("extra otherwise", _problems(MAYBE, absent=_nothing, present=_just, otherwise=repr))

	def test_09_otherwise_covers_the_rest(self):
		self.assertEqual([], _problems(ORDER, less=_nothing, otherwise=repr))

	def test_10_not_a_variant(self):
		self.expect("needs a variant-type", _problems("maybe", absent=_nothing, present=_just))

	def test_11_defined_twice(self):
		self.expect("Two handlers", _problems(MAYBE, {"absent": _nothing, "present": _just}, absent=lambda: 0))

	def test_12_everything_at_once(self):
		problems = _problems(MAYBE, absent=5, presnet=_just)
		self.assertEqual(3, len(problems), problems)

	def test_13_too_many_issues(self):
		report = Report(max_issues=2)
		with self.assertRaises(TooManyIssues) as cm:
			CaseMapping(MAYBE, absent=5, presnet=_just, report=report)
		self.assertIs(report, cm.exception.report)

	def test_14_a_full_report_is_still_ill_formed(self):
		big = Variant("big", **{"t%d" % i: "x" for i in range(12)})
		with self.assertRaises(IllFormed):
			matcher(big, {"t%d" % i: _nothing for i in range(12)})
		with self.assertRaises(CaseError):
			matcher(big, {"t%d" % i: _nothing for i in range(12)})

	def test_15_handlers_only_by_position(self):
		self.assertEqual([], _problems(MAYBE, {"absent": _nothing, "present": _just}))
		with self.assertRaises(IllFormed) as cm:
			matcher(MAYBE, handlers={"absent": _nothing, "present": _just})
		self.assertIn("'handlers' is not a case", str(cm.exception))

class Console(unittest.TestCase):

	@mock.patch("sys.stderr", new_callable=io.StringIO)
	def test_verbose_report_says_what_it_ignores(self, stderr):
		matcher(MAYBE, absent=_nothing, present=_just, presnet=_just, strict=False, report=Report(verbose=1))
		self.assertIn("Ignoring 'presnet'", stderr.getvalue())

	@mock.patch("sys.stderr", new_callable=io.StringIO)
	def test_quiet_report_says_nothing(self, stderr):
		matcher(MAYBE, absent=_nothing, present=_just, presnet=_just, strict=False)
		self.assertEqual("", stderr.getvalue())

	@mock.patch("sys.stderr", new_callable=io.StringIO)
	def test_complain_to_console(self, stderr):
		with self.assertRaises(IllFormed) as cm:
			matcher(MAYBE, present=_just, presnet=_just)
		cm.exception.report.complain_to_console()
		text = stderr.getvalue()
		self.assertIn("does not cover", text)
		self.assertIn("_just", text)

	@mock.patch("sys.stderr", new_callable=io.StringIO)
	def test_assert_no_issues(self, stderr):
		report = Report()
		report.assert_no_issues("all is well")
		report.not_exhaustive(MAYBE, ["absent"])
		with self.assertRaises(AssertionError) as cm:
			report.assert_no_issues("oops")
		self.assertTrue(str(cm.exception).endswith("oops"))
		report.reset()
		self.assertTrue(report.ok())

if __name__ == '__main__':
	unittest.main()
