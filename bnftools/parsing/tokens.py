"""
Tokens are the nodes of a parse tree.

Each token records which symbol it matched, exactly which text it consumed (and where),
and, for a non-terminal, one child per symbol of the production which matched, in order.
The leaves are terminal tokens. Reading the leaves left to right recovers the text of any
subtree exactly: nothing is dropped or reordered.

Tokens are immutable, and a parent owns its children outright: there are no back-links.
If a compile callback needs to know about siblings or the grammar, it gets told explicitly.

For example, the text "2*4-5" might come out as:

	                 <expression>
	                /      |      \\
	       <expression> <operator> <digit>
	        /   |   \\       |         |
	   <digit> <op> <digit> "-"       "5"
	      |      |     |
	     "2"    "*"   "4"

Most of the methods here are queries a compile callback might want to make, such as
"all the <digit> tokens anywhere below this one."
"""

from typing import Iterator, List, Optional, Sequence, Tuple, Union

from ..support import pretty
from .symbols import Symbol, Terminal, NonTerminal, as_symbol

"""
A TokenIndex is a path of child positions leading from some token down to one of its descendants.
(2, 0) means "the first child of the third child". Any sequence of integers will do.
"""
TokenIndex = Tuple[int, ...]

SymbolQuery = Union[Symbol, str]

class Token:
	__slots__ = ('symbol', 'text', 'start', 'children')

	symbol: Symbol
	text: str
	start: int
	children: Tuple["Token", ...]

	def __init__(self, symbol:Symbol, text:str, start:int=0, children:Sequence["Token"]=()):
		object.__setattr__(self, 'symbol', symbol)
		object.__setattr__(self, 'text', text)
		object.__setattr__(self, 'start', start)
		object.__setattr__(self, 'children', tuple(children))

	@classmethod
	def from_terminal(cls, literal:str, start:int=0) -> "Token":
		return cls(Terminal(literal), literal, start)

	@classmethod
	def from_non_terminal(cls, name:str, children:Sequence["Token"], start:int=None) -> "Token":
		""" Assemble a token by hand. Its text is whatever its children spell. """
		children = tuple(children)
		if start is None: start = children[0].start if children else 0
		return cls(NonTerminal(name), ''.join(c.text for c in children), start, children)

	def __setattr__(self, key, value): raise TypeError("Tokens are immutable.")
	def __delattr__(self, item): raise TypeError("Tokens are immutable.")

	def __eq__(self, other):
		if not isinstance(other, Token): return NotImplemented
		return (self.symbol, self.text, self.start, self.children) == (other.symbol, other.text, other.start, other.children)

	def __hash__(self):
		return hash((self.symbol, self.text, self.start, self.children))

	def __repr__(self):
		return "Token(%s, %r, %d)"%(self.symbol, self.text, self.start)

	@property
	def end(self) -> int: return self.start + len(self.text)

	@property
	def is_terminal(self) -> bool: return self.symbol.is_terminal

	@property
	def name(self) -> Optional[str]:
		""" The rule name of a non-terminal token, or None for a terminal. """
		return None if self.symbol.is_terminal else self.symbol.name

	def is_of_type(self, what:SymbolQuery) -> bool:
		""" A bare string is taken to name a non-terminal. """
		return self.symbol == as_symbol(what)

	def leaves(self) -> Iterator["Token"]:
		""" The terminal tokens of this subtree, left to right. """
		if self.is_terminal: yield self
		else:
			for child in self.children: yield from child.leaves()

	def terminals(self) -> str:
		"""
		All the terminal text under this token, concatenated in order.
		For a token from the match engine this is always the same as `text`.
		"""
		return ''.join(leaf.text for leaf in self.leaves())

	def descendants(self) -> List["Token"]:
		"""
		Every token below this one, in pre-order: each child comes just before its own descendants.

		Beware of rules like `<number> ::= <digit> | <number> <digit>`:
		a <number> has nested <number> tokens among its descendants.
		"""
		result = []
		for child in self.children:
			result.append(child)
			result.extend(child.descendants())
		return result

	def children_of_type(self, what:SymbolQuery) -> List["Token"]:
		what = as_symbol(what)
		return [child for child in self.children if child.symbol == what]

	def descendants_of_type(self, what:SymbolQuery) -> List["Token"]:
		"""
		All the tokens anywhere below this one (not just direct children) which match the given
		symbol, in pre-order. This is how a callback plucks out, say, every <digit> in an <expression>.
		"""
		what = as_symbol(what)
		return [token for token in self.descendants() if token.symbol == what]

	def contains_child(self, what:SymbolQuery) -> bool:
		return self.find_child(what) is not None

	def contains_descendant(self, what:SymbolQuery) -> bool:
		return self.find_descendant(what) is not None

	def find_child(self, what:SymbolQuery) -> Optional["Token"]:
		what = as_symbol(what)
		return next((child for child in self.children if child.symbol == what), None)

	def find_descendant(self, what:SymbolQuery) -> Optional["Token"]:
		""" The first matching token in pre-order, or None. """
		what = as_symbol(what)
		for child in self.children:
			if child.symbol == what: return child
			found = child.find_descendant(what)
			if found is not None: return found
		return None

	def child_indexes(self) -> List[TokenIndex]:
		""" One single-step path per child. """
		return [(i,) for i in range(len(self.children))]

	def get(self, index:Sequence[int]) -> Optional["Token"]:
		"""
		Follow a TokenIndex path down from this token. Returns None if the path is empty,
		runs off the end of some list of children, or tries to descend through a terminal.
		"""
		if not index: return None
		token = self
		for i in index:
			if i < 0 or i >= len(token.children): return None
			token = token.children[i]
		return token

	def pretty(self) -> str:
		def label(token):
			if token.is_terminal: return "%s @%d"%(token.symbol, token.start)
			return "%s @%d: %r"%(token.symbol, token.start, token.text)
		return pretty.indented_tree(self, label, lambda token: token.children)

	def display(self):
		print(self.pretty())
