"""
This checks the case-analysis in a Python module.

{0}

For example:

	casework my_module.py

will import my_module.py and thereby build every case-mapping and
case-visitor it defines at module level. Each of those checks itself
against its variant-type as it is built, so if anything is missing,
misspelled, or uncallable, you'll hear about it.

	casework -h

will explain all the arguments.
"""
import sys, argparse
from importlib import import_module
from importlib.util import spec_from_file_location, module_from_spec
from pathlib import Path
from traceback import TracebackException

parser = argparse.ArgumentParser(
	prog="casework",
	description="Check the case-mappings and case-visitors in a Python module.",
)
parser.add_argument("target", help="a path to a .py file, or a dotted module name.")
parser.add_argument('-c', "--check", action="count", help="Be verbose about what gets found.")
parser.add_argument('-q', "--quiet", action="store_true", help="Say nothing when all is well.")

def _load(target:str, report):
	path = Path(target)
	if path.suffix != ".py":
		if str(Path.cwd()) not in sys.path: sys.path.insert(0, str(Path.cwd()))
		try: return import_module(target)
		except ModuleNotFoundError: report.missing_module(target)
		except (ImportError, SyntaxError) as ex:
			report.broken_module(target, TracebackException.from_exception(ex))
		return
	if not path.is_file():
		report.no_such_file(path)
		return
	spec = spec_from_file_location(path.stem, path)
	module = module_from_spec(spec)
	try: spec.loader.exec_module(module)
	except (ImportError, SyntaxError) as ex:
		report.broken_module(target, TracebackException.from_exception(ex))
	else: return module

def survey(module) -> dict[str, list[str]]:
	""" What case-analysis things does this module define? By kind, then by name. """
	from .variant import Variant
	from .cases import CaseMapping
	from .visitor import CaseVisitor
	found = {"variants": [], "mappings": [], "visitors": []}
	for name, obj in vars(module).items():
		if isinstance(obj, Variant): found["variants"].append(name)
		elif isinstance(obj, CaseMapping): found["mappings"].append(name)
		elif isinstance(obj, type) and issubclass(obj, CaseVisitor) and obj.variant is not None:
			found["visitors"].append(name)
	return found

def run(args):
	from .diagnostics import Report, IllFormed, TooManyIssues
	report = Report(verbose=args.check)
	try:
		module = _load(args.target, report)
	except TooManyIssues as ex:
		ex.report.complain_to_console()
		print(" *"*35, file=sys.stderr)
		print("Giving up after a few issues. One crisis at a time, eh?", file=sys.stderr)
		return 1
	except IllFormed as ex:
		ex.report.complain_to_console()
		return 1
	if report.sick():
		report.complain_to_console()
		return 1
	for kind, names in survey(module).items():
		report.info("%d %s: %s" % (len(names), kind, ", ".join(names)))
	if not args.quiet:
		print("Looks plausible to me.", file=sys.stderr)
	return 0

def main():
	if len(sys.argv) > 1:
		exit(run(parser.parse_args()))
	else:
		print(__doc__.strip().format(parser.format_usage()))
