"""
The match engine: memoized recursive descent over the rules of a grammar.

The unit of work is "does rule R match exactly the text between offsets start and end?"
The answer (a Token, or None for failure) is remembered per (rule, start, end) for the
duration of one call to `match_input`, so no such question is ever worked out twice.

A rule matches a span if one of its productions does; productions are tried in the
order written, and the first to succeed is the answer. A production matches a span
by matching its symbols in sequence. A terminal must appear literally at the current
offset. A non-terminal may end anywhere, so each candidate end point is tried in
increasing order, and the first which lets the rest of the production succeed wins.
Once a (rule, span) question has an answer, nobody goes back to ask for a different one.

Candidate end points are pruned using the grammar's minimum-length analysis: a
symbol cannot end before it has had room to match its shortest possible string,
and must leave enough room for the shortest possible match of everything after it.
That pruning is what makes left-recursive rules like

	<number> ::= <digit> | <number> <digit>

behave: each recursive attempt is on a strictly shorter span.

A search may come back around to a (rule, span) question it is already in the middle
of answering, as with <a> ::= <a> | "x" or a pair of rules which rename one another.
That inner attempt simply fails, so the production which led there fails and the next
production gets its turn. Any answer which leaned on such a failure is provisional:
it is only remembered once the question it leaned on has been settled.

Some grammars cannot finish at all. A rule with no finite match can never succeed, and
is reported as RecursionBudgetExceeded the moment it is attempted. So is running past
the step or depth budget, or the interpreter's own recursion limit.
"""

import sys
from typing import Dict, List, Optional, Tuple

from .interface import NoMatchError, RecursionBudgetExceeded
from .symbols import Symbol, NonTerminal, Production
from .tokens import Token

VERBOSE = False
DEFAULT_MAX_STEPS = 5_000_000 # Rule attempts, per call to match_input.
DEFAULT_MAX_DEPTH = 2_000 # Rule attempts nested inside one another.
RECURSION_CEILING = 10_000 # Never raise the interpreter's recursion limit past this.
SETTLED = 1 << 62 # No in-progress question has been leaned on.

def match_input(grammar, text:str, *, max_steps:int=None, max_depth:int=None) -> Token:
	"""
	Try each rule of the grammar, in priority order, against the whole of the text.
	Return the parse tree from the first rule that matches; raise NoMatchError if none does.

	Each nested rule attempt costs a few interpreter frames (one, plus one per symbol of the
	production in play), so the recursion limit is raised to suit the depth budget while
	the match runs, and put back afterward.
	"""
	matcher = Matcher(grammar, text, max_steps=max_steps, max_depth=max_depth)
	widest = max((len(p) for rule in grammar.rules for p in rule.productions), default=1)
	old_limit = sys.getrecursionlimit()
	sys.setrecursionlimit(max(old_limit, min(RECURSION_CEILING, old_limit + matcher.max_depth*(widest+1))))
	try: return matcher.match_whole()
	finally:
		sys.setrecursionlimit(old_limit)
		if VERBOSE: matcher.report()

class Matcher:
	"""
	One of these carries the state of a single attempt to match a text.
	The grammar is only read, never written, so several may share one grammar.

	`in_progress` maps each question currently being worked on to its nesting depth.
	`leaned_on` is the shallowest depth of any in-progress question that the current
	attempt has re-entered, or SETTLED if none.
	"""
	def __init__(self, grammar, text:str, *, max_steps:int=None, max_depth:int=None):
		self.grammar, self.text = grammar, text
		self.max_steps = DEFAULT_MAX_STEPS if max_steps is None else max_steps
		self.max_depth = DEFAULT_MAX_DEPTH if max_depth is None else max_depth
		self.memo:Dict[Tuple[str, int, int], Optional[Token]] = {}
		self.in_progress:Dict[Tuple[str, int, int], int] = {}
		self.leaned_on = SETTLED
		self.suffix_min = {}
		self.steps = 0
		self.furthest = 0

	def report(self):
		print("Matched %d characters in %d steps; %d spans memoized, furthest offset %d."%(
			len(self.text), self.steps, len(self.memo), self.furthest
		), file=sys.stderr)

	def match_whole(self) -> Token:
		end = len(self.text)
		for rule in self.grammar.rules_by_priority():
			token = self.match_rule(rule.name, 0, end)
			if token is not None: return token
		raise NoMatchError(self.text, self.furthest)

	def match_rule(self, name:str, start:int, end:int) -> Optional[Token]:
		key = (name, start, end)
		if key in self.memo: return self.memo[key]
		if key in self.in_progress:
			self.leaned_on = min(self.leaned_on, self.in_progress[key])
			return None
		productions = self.grammar.productions_of(name)
		size = self.grammar.min_length(name)
		if size is None:
			raise RecursionBudgetExceeded("Rule can never finish matching: every alternative recurses forever.", name, start, end)
		if end - start < size:
			self.memo[key] = None
			return None
		self.steps += 1
		if self.steps > self.max_steps:
			raise RecursionBudgetExceeded("Gave up after %d steps."%self.max_steps, name, start, end)
		depth = len(self.in_progress)
		if depth >= self.max_depth:
			raise RecursionBudgetExceeded("Rules nested more than %d deep."%self.max_depth, name, start, end)
		outer, self.leaned_on = self.leaned_on, SETTLED
		self.in_progress[key] = depth
		try:
			result = None
			for production in productions:
				children = self.match_sequence(production, 0, start, end)
				if children is not None:
					result = Token(NonTerminal(name), self.text[start:end], start, children)
					break
		except RecursionError:
			raise RecursionBudgetExceeded("Reached the interpreter's recursion limit.", name, start, end) from None
		finally:
			del self.in_progress[key]
		# Re-entering this very question is settled now; re-entering an enclosing one is not.
		if self.leaned_on < depth: self.leaned_on = min(outer, self.leaned_on)
		else:
			self.leaned_on = outer
			self.memo[key] = result
		return result


	def match_sequence(self, production:Production, index:int, start:int, end:int) -> Optional[List[Token]]:
		""" Match production[index:] against exactly text[start:end]. Returns the child tokens, or None. """
		if index == len(production): return [] if start == end else None
		symbol = production[index]
		if symbol.is_terminal:
			literal = symbol.literal
			if not self.text.startswith(literal, start, end): return None
			after = start + len(literal)
			self.furthest = max(self.furthest, after)
			rest = self.match_sequence(production, index+1, after, end)
			if rest is None: return None
			return [Token(symbol, literal, start)] + rest
		if index + 1 == len(production):
			token = self.match_rule(symbol.name, start, end)
			return None if token is None else [token]
		lo = start + self.symbol_min(symbol)
		hi = end - self.rest_min(production, index+1)
		for split in range(lo, hi+1):
			token = self.match_rule(symbol.name, start, split)
			if token is None: continue
			rest = self.match_sequence(production, index+1, split, end)
			if rest is not None: return [token] + rest
		return None

	def symbol_min(self, symbol:Symbol) -> int:
		"""
		An ill-founded rule counts as zero here so that it still gets attempted,
		whereupon match_rule reports the problem instead of quietly failing.
		"""
		if symbol.is_terminal: return len(symbol.literal)
		return self.grammar.min_length(symbol.name) or 0

	def rest_min(self, production:Production, index:int) -> int:
		key = (production, index)
		if key not in self.suffix_min:
			self.suffix_min[key] = sum(self.symbol_min(s) for s in production[index:])
		return self.suffix_min[key]
