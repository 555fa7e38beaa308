"""
A grammar document is just a text file full of rules, for when a grammar is too big
(or too often revised) to live comfortably in string literals. It looks like this:

	# Comments and blank lines are ignored.
	<digit> ::= "0" | "1" | "2" | "3" | "4" | "5" | "6" | "7" | "8" | "9"
	<number> ::= <digit>
		| <number> <digit>
	10 <sum> ::= <number> "+" <number>

A rule begins at the left margin with its <name>, optionally preceded by an integer
priority (default zero). Lines which begin with whitespace or with a "|" continue the
rule before them. The rule text goes to `definition.parse_rule` with the priority
blanked out, so errors point at the right line and column of the document.

Compile callbacks cannot be written in such a document, so `read_grammar` accepts a
dictionary mapping rule names to callbacks.
"""

import re, warnings
from typing import Dict, Iterator

from ..support.failureprone import SourceText
from ..support.interfaces import CompileFunction
from .interface import RuleSyntaxError, UnknownRuleError
from .definition import Rule, parse_rule
from .grammar import Grammar

RULE_START = re.compile(r'(-?\d+\s*)?<')

def each_rule(document:str, *, filename:str=None) -> Iterator[Rule]:
	chunk, priority, first_line = None, 0, 0
	def finish():
		text = '\n'.join(chunk).rstrip()
		return parse_rule(priority, text, provenance=first_line, filename=filename, first_line=first_line)
	offset = 0
	for line_number, line in enumerate(document.splitlines(keepends=True), 1):
		here, offset = offset, offset + len(line)
		line = line.rstrip('\r\n')
		stripped = line.strip()
		if not stripped or stripped.startswith('#'):
			if chunk is not None: chunk.append('')
			continue
		match = RULE_START.match(line)
		if match:
			if chunk is not None: yield finish()
			number = match.group(1)
			priority = int(number.strip()) if number else 0
			prefix = len(number) if number else 0
			chunk, first_line = [' '*prefix + line[prefix:]], line_number
		elif line[0].isspace() or line[0] == '|':
			if chunk is None:
				raise RuleSyntaxError("Continuation line with no rule to continue.", SourceText(document, filename=filename), here, len(line))
			chunk.append(line)
		else:
			raise RuleSyntaxError("Expected a rule of the form '[priority] <name> ::= ...'.", SourceText(document, filename=filename), here, len(line))
	if chunk is not None: yield finish()

def read_grammar(document:str, *, filename:str=None, callbacks:Dict[str, CompileFunction]=None, **kwargs) -> Grammar:
	"""
	Build a Grammar from the rules in a document. Keyword arguments go along to the Grammar
	constructor. A callback named for a rule the document lacks is an error if `strict` is set,
	and a warning otherwise.
	"""
	callbacks = dict(callbacks or {})
	rules = []
	for rule in each_rule(document, filename=filename):
		rules.append(rule.with_compile(callbacks.pop(rule.name, None)))
	for name in callbacks:
		if kwargs.get('strict'): raise UnknownRuleError(name)
		warnings.warn("%s has no rule <%s> for the callback %r."%(filename or "The grammar document", name, callbacks[name]))
	return Grammar(rules, **kwargs)

def load_grammar(path:str, **kwargs) -> Grammar:
	with open(path, encoding='utf-8') as fh: document = fh.read()
	return read_grammar(document, filename=path, **kwargs)
