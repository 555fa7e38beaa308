"""
Symbols are the atoms of a grammar. A terminal stands for literal text which must
appear verbatim in the input; a non-terminal names a rule.

Both kinds are immutable values with structural equality, so they make fine keys
and may be shared freely between productions, rules, and parse trees. The two kinds
never compare equal to each other, even when the literal and the name are spelled alike.
"""

from typing import Tuple, Union

class Symbol:
	""" Common base of Terminal and NonTerminal. Not meant to be instantiated directly. """
	__slots__ = ()
	is_terminal: bool
	
	@property
	def key(self) -> str: raise NotImplementedError(type(self))
	
	def __setattr__(self, key, value): raise TypeError("%s is immutable"%type(self).__name__)
	def __delattr__(self, item): raise TypeError("%s is immutable"%type(self).__name__)
	def __eq__(self, other):
		return type(self) is type(other) and self.key == other.key
	def __ne__(self, other):
		return not self == other
	def __hash__(self):
		return hash((self.is_terminal, self.key))
	def __repr__(self):
		return "%s(%r)"%(type(self).__name__, self.key)

class Terminal(Symbol):
	__slots__ = ('literal',)
	is_terminal = True
	def __init__(self, literal:str):
		object.__setattr__(self, 'literal', literal)
	@property
	def key(self) -> str: return self.literal
	def __str__(self): return '"%s"'%self.literal

class NonTerminal(Symbol):
	__slots__ = ('name',)
	is_terminal = False
	def __init__(self, name:str):
		object.__setattr__(self, 'name', name)
	@property
	def key(self) -> str: return self.name
	def __str__(self): return '<%s>'%self.name

Production = Tuple[Symbol, ...]

def as_symbol(what:Union[Symbol, str]) -> Symbol:
	"""
	Queries against a parse tree may name a non-terminal by a bare string, with or
	without the angle brackets. Symbols pass through unchanged.
	"""
	if isinstance(what, Symbol): return what
	if isinstance(what, str):
		if len(what) > 2 and what.startswith('<') and what.endswith('>'): what = what[1:-1]
		return NonTerminal(what)
	raise TypeError("Expected a Symbol or a rule name, got %r"%(what,))

def production_text(production:Production) -> str:
	return ' '.join(map(str, production))
