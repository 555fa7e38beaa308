"""
The tree compiler turns a parse tree back into text, applying each rule's compile
callback (if it has one) at the tokens that rule matched.

Nothing is compiled automatically on a callback's behalf. A callback receives its
own token, unconverted children and all, along with the grammar, and decides for
itself which children to compile (via `grammar.compile(child)` or `compile_children`)
and which to read as raw text. A token whose rule has no callback compiles to its
own text, whatever callbacks its descendants may have.
"""

from typing import Optional

from ..support.interfaces import LanguageError
from .tokens import Token

def compile(token:Token, grammar) -> str:
	if token.is_terminal: return token.text
	rule = grammar.rule(token.name)
	if rule.compile is None: return token.text
	try: result = rule.compile(token, grammar)
	except LanguageError as ex: raise ex from None
	except Exception as ex: result = grammar.exception_compiling(ex, rule, token)
	if not isinstance(result, str):
		raise TypeError("Compile callback for <%s> returned %s, not str."%(rule.name, type(result).__name__))
	return result

def compile_token(token:Token, grammar) -> Optional[str]:
	""" Like compile, but None for a token whose rule has no callback (and for terminals). """
	if token.is_terminal or grammar.rule(token.name).compile is None: return None
	return compile(token, grammar)

def compile_children(token:Token, grammar) -> str:
	""" The compiled direct children, concatenated. A helper for callbacks. """
	return ''.join(compile(child, grammar) for child in token.children)

def compile_string(grammar, text:str) -> str:
	""" Match the text against the grammar (with the grammar's own budget) and compile the result. """
	return compile(grammar.match(text), grammar)
