"""
This file aggregates the abstract types and base exception which BNF-Tools deals in.

The matching and compiling machinery talks to its collaborators through a very small
surface: a rule may carry a compile callback, and the compiler may need somewhere to
send word about a callback that blew up. Those shapes are written down here so that
the various modules can agree on them without importing one another.
"""

from typing import Callable

class LanguageError(ValueError):
	""" Base class of all exceptions arising from the language machinery. """

"""
The Compile Callback Interface is just a function.
	It receives the token being compiled and the grammar it was matched against,
	and returns the compiled text for that token. It may call back into the grammar
	(e.g. grammar.compile(child)) to compile whichever children it cares about.
"""
CompileFunction = Callable[["Token", "Grammar"], str]

class CompileErrorListener:
	"""
	Implement this interface to report/respond to trouble during compilation.
	The default behavior gives a little context on standard error and then re-raises.
	"""
	def exception_compiling(self, ex:Exception, rule, token):
		"""
		Q: If a compile callback raises an exception, what should happen?
		A: It depends.
		
		Maybe the exception should not happen: some extra context might help
		you reproduce and debug the problem. Log the context and re-raise.
		
		Maybe certain exceptions represent non-fatal conditions, but you'd
		rather separate policy from mechanism. Deal with it and return the
		text that should stand in for the failed compilation.
		"""
		raise ex from None # Hide the catch-and-rethrow from the traceback.
