"""
This module turns the text of a single BNF rule into a Rule object.

The definition language is deliberately small:

	<name> ::= production | production | ...

where each production is a whitespace-separated sequence of one or more symbols,
either a quoted terminal like "+" or a non-terminal reference like <digit>.
Whitespace (newlines included) only separates; it never means anything itself.
There are no escapes: a terminal holds every character between its quotes, so it
may contain anything except the double-quote. In particular "|" and "::=" are
perfectly good terminals.

The work proceeds left to right in three passes:
	1. Find the top-level "::=" and "|" marks, skipping over quoted terminals.
	2. Check that the left side is exactly one <name>.
	3. Chop the right side at the bars and tokenize each production.

Every complaint is a RuleSyntaxError pointing at the offending spot in the text.
"""

import re
from typing import NamedTuple, Optional, Tuple

from ..support.failureprone import SourceText
from ..support.interfaces import CompileFunction
from .interface import RuleSyntaxError
from .symbols import Symbol, Terminal, NonTerminal, Production, production_text

DEFINE = '::='
BAR = '|'
QUOTE = '"'
NAME = re.compile(r'[\w-]+')

class Rule(NamedTuple):
	"""
	A non-terminal's complete definition.

	name: The non-terminal being defined (without angle brackets).
	productions: The ordered alternatives; each is a tuple of symbols. Earlier alternatives win.
	priority: Rules with higher priority are tried first when matching a whole input.
	compile: Optional callback (token, grammar) -> str used by the tree compiler.
	provenance: Where the rule came from, for error reports. A line number, perhaps.
	"""
	name: str
	productions: Tuple[Production, ...]
	priority: int = 0
	compile: Optional[CompileFunction] = None
	provenance: object = None

	@classmethod
	def from_text(cls, priority:int, text:str, compile:Optional[CompileFunction]=None, **kwargs) -> "Rule":
		""" Parse a textual definition. Keyword arguments go along to `parse_rule`. """
		return parse_rule(priority, text, compile, **kwargs)

	def __str__(self):
		return "<%s> ::= %s"%(self.name, ' | '.join(map(production_text, self.productions)))

	@property
	def symbol(self) -> NonTerminal:
		return NonTerminal(self.name)

	def with_compile(self, compile:Optional[CompileFunction]) -> "Rule":
		""" The same rule with a different (or no) compile callback. """
		return self._replace(compile=compile)

	def assert_valid(self):
		""" If this check fails, it's held to be a bug in whatever code created the rule object. """
		assert isinstance(self.name, str) and NAME.fullmatch(self.name), self.name
		assert self.productions, "Rule <%s> has no productions."%self.name
		for production in self.productions:
			assert isinstance(production, tuple) and production, (self.name, production)
			assert all(isinstance(s, Symbol) for s in production), (self.name, production)
		assert self.compile is None or callable(self.compile), self.compile


def parse_rule(priority:int, text:str, compile:Optional[CompileFunction]=None, *, provenance=None, filename:str=None, first_line:int=1) -> Rule:
	"""
	Parse one textual rule into a Rule with the given priority and optional compile callback.
	`filename` and `first_line` only affect how a RuleSyntaxError describes its location.
	"""
	source = SourceText(text, filename=filename, first_line=first_line)
	defines, bars = _find_marks(source)
	if not defines:
		raise RuleSyntaxError("The definition mark '::=' is missing.", source, 0, len(text))
	if len(defines) > 1:
		raise RuleSyntaxError("Found a second '::=' in one rule.", source, defines[1], len(DEFINE))
	define = defines[0]
	name = _left_hand_side(source, define)

	productions = []
	left = define + len(DEFINE)
	for right in bars + [len(text)]:
		production = _tokenize(source, left, right)
		if not production:
			# Point at the bar which closes (or opens) the empty alternative.
			where = right if right < len(text) else left - 1
			raise RuleSyntaxError("Empty production: each alternative needs at least one symbol.", source, where)
		productions.append(production)
		left = right + len(BAR)
	return Rule(name, tuple(productions), priority, compile, provenance)

def _find_marks(source:SourceText):
	""" Return the offsets of the top-level "::=" marks and of the "|" marks which follow the first of them. """
	text = source.content
	defines, bars = [], []
	position, size = 0, len(text)
	while position < size:
		if text[position] == QUOTE:
			close = text.find(QUOTE, position+1)
			if close < 0:
				raise RuleSyntaxError("Unterminated terminal: the quote is never closed.", source, position, size-position)
			position = close + 1
		elif text.startswith(DEFINE, position):
			defines.append(position)
			position += len(DEFINE)
		elif text[position] == BAR:
			if defines: bars.append(position)
			else: raise RuleSyntaxError("Alternatives may only appear after '::='.", source, position)
			position += 1
		else:
			position += 1
	return defines, bars

def _left_hand_side(source:SourceText, define:int) -> str:
	lhs = _tokenize(source, 0, define)
	if len(lhs) != 1 or lhs[0].is_terminal:
		raise RuleSyntaxError("The rule must begin with exactly one <name> before '::='.", source, 0, max(define, 1))
	return lhs[0].name

def _tokenize(source:SourceText, left:int, right:int) -> Production:
	""" Break text[left:right] into a tuple of symbols. """
	text = source.content
	symbols = []
	position = left
	while position < right:
		c = text[position]
		if c.isspace():
			position += 1
		elif c == QUOTE:
			# _find_marks has already proven the quote closes before `right`.
			close = text.index(QUOTE, position+1)
			symbols.append(Terminal(text[position+1:close]))
			position = close + 1
		elif c == '<':
			close = text.find('>', position+1, right)
			if close < 0:
				raise RuleSyntaxError("Unterminated non-terminal: expected '>'.", source, position, right-position)
			name = text[position+1:close]
			if not name:
				raise RuleSyntaxError("Empty non-terminal: a name belongs between '<' and '>'.", source, position, 2)
			if not NAME.fullmatch(name):
				raise RuleSyntaxError("Non-terminal names may contain only letters, digits, '_' and '-'.", source, position, close+1-position)
			symbols.append(NonTerminal(name))
			position = close + 1
		else:
			raise RuleSyntaxError("Unexpected %r outside of any symbol."%c, source, position)
	return tuple(symbols)
