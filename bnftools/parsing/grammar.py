"""
A Grammar is an ordered collection of named rules.

Order matters twice over. Each rule's productions are tried in the order written,
and when a whole input is matched, the rules are tried from highest priority to
lowest, with ties going to whichever rule was registered first.

Beyond lookup and ordering, the grammar knows a few static facts about itself,
which it works out lazily and forgets again whenever a rule is added:

	* The minimum number of characters each rule can possibly match. The match engine
	uses this to skip split points which could never work.
	* Which rules can never finish matching anything at all, e.g. <a> ::= <a> "x"
	* Which rule names are mentioned but never defined.

The `validate` method reports such problems to a fault handler. The default
handler raises GrammarFault at the first one; the WarningFaultHandler merely warns.
"""

import collections, inspect, sys, warnings
from typing import Dict, Iterable, Iterator, Optional, Protocol, Tuple

from ..support import foundation, pretty
from ..support.interfaces import LanguageError, CompileErrorListener
from .interface import DuplicateRuleError, UnknownRuleError, NoMatchError
from .symbols import Production, production_text
from .definition import Rule
from . import engine, compiler

INFINITY = float('inf')

class GrammarFault(LanguageError):
	""" Generic exception thrown by the default fault handler. """

class FaultHandler(Protocol):
	"""
	Grammar validation calls one of these methods for each problem it finds.
	This generic handler just raises GrammarFault, funneling everything through `complain`,
	so a subclass can change the policy for every kind of fault by overriding that one method.
	"""
	def complain(self, message:str):
		raise GrammarFault(message)

	def unknown_references(self, rule:Rule, names):
		return self.complain("Rule <%s> at %r refers to undefined rule(s) %s."%(rule.name, rule.provenance, ', '.join('<%s>'%n for n in sorted(names))))

	def ill_founded_rules(self, names):
		return self.complain("Ill-founded rule(s), which can never finish matching: %s."%', '.join('<%s>'%n for n in sorted(names)))

	def duplicate_productions(self, rule:Rule, production:Production):
		return self.complain("Rule <%s> at %r lists the production %s more than once."%(rule.name, rule.provenance, production_text(production)))

	def self_recursive_loop(self, name:str):
		return self.complain("Rule <%s> may be replaced by itself in a recursive loop."%name)

	def mutual_recursive_loop(self, names):
		return self.complain("Rules %s may be replaced by one another in a mutually-recursive loop."%', '.join('<%s>'%n for n in sorted(names)))

class SimpleFaultHandler(FaultHandler):
	""" Protocols cannot be instantiated, so here's a simple way to get "raise for everything" behavior. """
	pass

class WarningFaultHandler(FaultHandler):
	""" Report each fault with `warnings.warn` and carry on. """
	def complain(self, message:str):
		warnings.warn(message)

class Grammar(CompileErrorListener):
	"""
	Construct with an iterable of Rule objects, or empty and `register` them one by one.

	strict: if set, the constructor validates the grammar and raises GrammarFault for
		any problem. Otherwise references to undefined rules just cause a warning here,
		and UnknownRuleError later on if matching ever needs one of them.
	max_steps, max_depth: this grammar's budget for the match engine.
		None means to use the engine's defaults.
	"""
	def __init__(self, rules:Iterable[Rule]=(), *, strict=False, max_steps:int=None, max_depth:int=None):
		self.__rules = []
		self.__by_name:Dict[str, Rule] = {}
		self.__min_length = None
		self.max_steps, self.max_depth = max_steps, max_depth
		for rule in rules: self.register(rule)
		if strict: self.validate()
		elif self.__rules: self.check_references(WarningFaultHandler())

	def register(self, rule:Rule):
		rule.assert_valid()
		if rule.name in self.__by_name:
			raise DuplicateRuleError(rule.name, self.__by_name[rule.name].provenance, rule.provenance)
		self.__rules.append(rule)
		self.__by_name[rule.name] = rule
		self.__min_length = None

	def rule(self, name:str) -> Rule:
		try: return self.__by_name[name]
		except KeyError: raise UnknownRuleError(name) from None

	def productions_of(self, name:str) -> Tuple[Production, ...]:
		return self.rule(name).productions

	@property
	def rules(self) -> Tuple[Rule, ...]:
		""" In declaration order. """
		return tuple(self.__rules)

	def rules_by_priority(self) -> Iterator[Rule]:
		""" Highest priority first; ties go to the earlier declaration. """
		rules = self.__rules
		for i in foundation.grade([r.priority for r in rules], descending=True):
			yield rules[i]

	def __contains__(self, name): return name in self.__by_name
	def __len__(self): return len(self.__rules)
	def __iter__(self): return iter(self.__rules)
	def __str__(self): return '\n'.join(map(str, self.__rules))

	def display(self):
		head = ['priority', 'rule', 'production', 'compile']
		body = []
		for rule in self.rules_by_priority():
			callback = getattr(rule.compile, '__name__', repr(rule.compile)) if rule.compile else ''
			for i, production in enumerate(rule.productions):
				if i: body.append(['', '', '| '+production_text(production), ''])
				else: body.append([rule.priority, '<%s>'%rule.name, '::= '+production_text(production), callback])
		pretty.print_grid([head] + body)

	def min_length(self, name:str) -> Optional[int]:
		"""
		The fewest characters any match of the named rule can consume, or None if the
		rule is ill-founded and so can never finish matching. Unknown names count as zero.
		"""
		if self.__min_length is None: self.__min_length = self._find_min_lengths()
		size = self.__min_length.get(name, 0)
		return None if size == INFINITY else size

	def _find_min_lengths(self) -> dict:
		"""
		Relax toward a fixed point: every rule starts at infinity, and each pass takes,
		for each rule, the cheapest production given the current estimates. Estimates only
		ever fall, and a finite estimate falls in whole steps toward zero, so this terminates.
		Whatever is still infinite at the end can never produce a finite string.
		"""
		known = self.__by_name
		size = dict.fromkeys(known, INFINITY)
		def cost(production):
			return sum(len(s.literal) if s.is_terminal else size.get(s.name, 0) for s in production)
		changed = True
		while changed:
			changed = False
			for rule in self.__rules:
				best = min(map(cost, rule.productions))
				if best < size[rule.name]:
					size[rule.name] = best
					changed = True
		return size

	def ill_founded(self) -> set:
		return {rule.name for rule in self.__rules if self.min_length(rule.name) is None}

	def check_references(self, fault_handler:FaultHandler):
		for rule in self.__rules:
			unknown = {s.name for p in rule.productions for s in p if not s.is_terminal and s.name not in self}
			if unknown: fault_handler.unknown_references(rule, unknown)

	def check_well_founded(self, fault_handler:FaultHandler):
		ill_founded = self.ill_founded()
		if ill_founded: fault_handler.ill_founded_rules(ill_founded)

	def check_duplicate_productions(self, fault_handler:FaultHandler):
		for rule in self.__rules:
			seen = set()
			for production in rule.productions:
				if production in seen: fault_handler.duplicate_productions(rule, production)
				seen.add(production)

	def check_rename_loops(self, fault_handler:FaultHandler):
		""" A rule which may be replaced by itself (possibly indirectly) can never use that alternative: the re-entry always fails. """
		renames = collections.defaultdict(set)
		for rule in self.__rules:
			for production in rule.productions:
				if len(production) == 1 and not production[0].is_terminal:
					if production[0].name == rule.name: fault_handler.self_recursive_loop(rule.name)
					else: renames[rule.name].add(production[0].name)
		for component in foundation.strongly_connected_components(renames):
			if len(component) > 1: fault_handler.mutual_recursive_loop(component)

	def validate(self, fault_handler:FaultHandler=SimpleFaultHandler()):
		"""
		Calls the fault handler with every identified fault. The default fault handler
		raises GrammarFault for the first problem noticed.
		"""
		self.check_references(fault_handler)
		self.check_well_founded(fault_handler)
		self.check_duplicate_productions(fault_handler)
		self.check_rename_loops(fault_handler)

	def match(self, text:str):
		return engine.match_input(self, text, max_steps=self.max_steps, max_depth=self.max_depth)

	def recognizes(self, text:str) -> bool:
		""" True when some rule matches the whole text. Other errors still propagate. """
		try: self.match(text)
		except NoMatchError: return False
		else: return True

	def compile(self, token) -> str:
		return compiler.compile(token, self)

	def compile_token(self, token) -> Optional[str]:
		return compiler.compile_token(token, self)

	def compile_children(self, token) -> str:
		return compiler.compile_children(token, self)

	def compile_string(self, text:str) -> str:
		return compiler.compile_string(self, text)

	def exception_compiling(self, ex:Exception, rule:Rule, token):
		print("\n---\nWhile compiling <%s> over offsets %d to %d: %r"%(rule.name, token.start, token.end, token.text), file=sys.stderr)
		try:
			file_path = inspect.getfile(rule.compile)
			line_number = 1+inspect.findsource(rule.compile)[1]
		except (TypeError, OSError): pass
		else: print("The callback is defined at %s:%d"%(file_path, line_number), file=sys.stderr)
		return super().exception_compiling(ex, rule, token)
