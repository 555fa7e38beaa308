"""
Match a text against a grammar document, and show the result.

The grammar document holds one BNF rule per line (see bnftools.parsing.document).
By default the matched text is compiled and printed; since a document carries no
compile callbacks, that mostly shows whether the text matched at all. Use --tree
to see how it matched, and --display to see the grammar itself.
"""

import sys, argparse

from bnftools.support.interfaces import LanguageError
from bnftools.parsing.document import load_grammar
from bnftools.parsing import engine

def parse_arguments(argv=None):
	parser = argparse.ArgumentParser(prog='py -m bnftools', description=__doc__,)
	parser.add_argument('grammar_path', help='path to grammar document')
	parser.add_argument('input_path', nargs='?', help='path to input text; standard input if omitted')
	parser.add_argument('-e', '--text', help='match this text instead of reading a file')
	parser.add_argument('--tree', action='store_true', help='Print the parse tree instead of the compiled text.')
	parser.add_argument('--display', action='store_true', help='Display the grammar in grid format on STDOUT.')
	parser.add_argument('--strict', action='store_true', help='Treat any fault in the grammar as an error.')
	parser.add_argument('--max-steps', type=int, help='Give up after this many rule attempts.')
	parser.add_argument('--max-depth', type=int, help='Give up when rules nest this deep.')
	parser.add_argument('-v', '--verbose', action='store_true', help="Squawk, mainly about the match statistics.")
	return parser.parse_args(argv)

def read_input(args) -> str:
	if args.text is not None: return args.text
	if args.input_path is None: text = sys.stdin.read()
	else:
		with open(args.input_path, encoding='utf-8') as fh: text = fh.read()
	return text.rstrip('\r\n')

def main(args):
	if args.verbose: engine.VERBOSE = True
	try:
		grammar = load_grammar(args.grammar_path, strict=args.strict, max_steps=args.max_steps, max_depth=args.max_depth)
		if args.display: grammar.display()
		if args.display and args.text is None and args.input_path is None: return
		token = grammar.match(read_input(args))
		if args.tree: token.display()
		else: print(grammar.compile(token))
	except (LanguageError, OSError) as e:
		print(e, file=sys.stderr)
		sys.exit(1)

if __name__ == '__main__': main(parse_arguments())
