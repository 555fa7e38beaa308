"""
Parsing Interface Definitions: chiefly the exceptions which rule definitions,
grammars, and the match engine may raise. Each carries enough data to explain
itself politely; see `support.failureprone` for the display machinery.
"""

from ..support.interfaces import LanguageError
from ..support.failureprone import SourceText, illustration

class RuleSyntaxError(LanguageError):
	"""
	A rule definition is malformed. Parameters are:
		a short message,
		the SourceText of the definition,
		the offset within that text where the trouble was noticed,
		and (optionally) how many characters are implicated.
	"""
	def __init__(self, message:str, source:SourceText, position:int, width:int=1):
		super().__init__(message, position)
		self.message, self.source, self.position, self.width = message, source, position, width
	
	def row_col(self):
		return self.source.find_row_col(self.position)
	
	def __str__(self):
		return self.source.complaint(slice(self.position, self.position+self.width), self.message)

class DuplicateRuleError(LanguageError):
	""" A grammar was given two rules by the same name. """
	def __init__(self, name:str, first, second):
		super().__init__(name, first, second)
		self.name, self.first, self.second = name, first, second
	
	def __str__(self):
		return "Rule <%s> is defined twice (at %r and again at %r)."%(self.name, self.first, self.second)

class UnknownRuleError(LanguageError):
	""" Somebody asked after a rule which the grammar does not have. """
	def __init__(self, name:str):
		super().__init__(name)
		self.name = name
	
	def __str__(self):
		return "No rule named <%s> is defined."%self.name

class NoMatchError(LanguageError):
	"""
	No rule, tried in priority order, matched the complete input.
	The `furthest` attribute is the furthest offset into the text that any terminal
	reached while trying, which usually points at (or just past) the trouble.
	"""
	def __init__(self, text:str, furthest:int):
		super().__init__(text, furthest)
		self.text, self.furthest = text, furthest
	
	def __str__(self):
		message = "No rule matches the whole input."
		if '\n' in self.text or '\r' in self.text:
			return SourceText(self.text).complaint(slice(self.furthest, self.furthest+1), message)
		return message + '\n' + illustration(self.text, self.furthest, prefix=' >>> ')

class RecursionBudgetExceeded(LanguageError):
	"""
	The match engine gave up on a search which would otherwise never end,
	or which ran past the configured step or depth budget.
	`name`, `start`, and `end` describe the rule attempt in progress at the time.
	"""
	def __init__(self, message:str, name:str, start:int, end:int):
		super().__init__(message, name, start, end)
		self.message, self.name, self.start, self.end = message, name, start, end
	
	def __str__(self):
		return "%s (while matching <%s> against offsets %d to %d)"%(self.message, self.name, self.start, self.end)
