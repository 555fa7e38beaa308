import unittest

from bnftools.support.interfaces import LanguageError
from bnftools.parsing.interface import RuleSyntaxError
from bnftools.parsing.symbols import Terminal, NonTerminal
from bnftools.parsing.definition import Rule, parse_rule

def callback(token, grammar): return token.text

class TestParseRule(unittest.TestCase):
	def test_simple_rule(self):
		rule = Rule.from_text(3, '<digit> ::= "1" | "2"', callback)
		self.assertEqual('digit', rule.name)
		self.assertEqual(3, rule.priority)
		self.assertIs(callback, rule.compile)
		self.assertEqual(((Terminal("1"),), (Terminal("2"),)), rule.productions)

	def test_sequence_and_whitespace(self):
		rule = parse_rule(0, '<expression>::=<digit>\n\t"+"   <digit>')
		self.assertEqual(((NonTerminal("digit"), Terminal("+"), NonTerminal("digit")),), rule.productions)

	def test_marks_inside_quotes_are_ordinary(self):
		rule = parse_rule(0, '<weird> ::= "|" | "::=" "<x>"')
		self.assertEqual(((Terminal("|"),), (Terminal("::="), Terminal("<x>"))), rule.productions)

	def test_empty_terminal_is_allowed(self):
		rule = parse_rule(0, '<nothing> ::= ""')
		self.assertEqual(((Terminal(""),),), rule.productions)

	def test_names_may_have_dashes(self):
		self.assertEqual('long-name_2', parse_rule(0, '<long-name_2> ::= "x"').name)

	def test_round_trip_through_str(self):
		text = '<a> ::= "x" <b> | <c>'
		rule = parse_rule(0, text)
		self.assertEqual(text, str(rule))
		self.assertEqual(rule, parse_rule(0, str(rule)))

	def test_provenance(self):
		self.assertEqual(12, parse_rule(0, '<a> ::= "x"', provenance=12).provenance)

	def test_with_compile(self):
		rule = parse_rule(0, '<a> ::= "x"')
		self.assertIsNone(rule.compile)
		self.assertIs(callback, rule.with_compile(callback).compile)

class TestSyntaxErrors(unittest.TestCase):
	def test_malformed_rules(self):
		cases = [
			('<a> <= "x"', 0),
			('<a> ::= "x" ::= "y"', 12),
			('"a" ::= "x"', 0),
			('<a> <b> ::= "x"', 0),
			('::= "x"', 0),
			('<a> ::= "x', 8),
			('<a> ::= <b', 8),
			('<a> ::= <>', 8),
			('<a> ::= <b c>', 8),
			('<a> ::= "x" | ', 12),
			('<a> ::= | "x"', 8),
			('<a> ::= "x" y', 12),
			('<a> | <b> ::= "x"', 4),
		]
		for text, position in cases:
			with self.subTest(text=text):
				with self.assertRaises(RuleSyntaxError) as context:
					parse_rule(0, text)
				self.assertEqual(position, context.exception.position)
				self.assertIsInstance(context.exception, LanguageError)

	def test_error_shows_where(self):
		with self.assertRaises(RuleSyntaxError) as context:
			parse_rule(0, '<a> ::= "x"\n\t| "y" ?', filename='sample.bnf', first_line=10)
		self.assertEqual((11, 7), context.exception.row_col())
		message = str(context.exception)
		self.assertIn('sample.bnf', message)
		self.assertIn('line 11', message)
		self.assertIn('^', message)

if __name__ == '__main__':
	unittest.main()
