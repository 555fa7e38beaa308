import unittest, io, warnings
from contextlib import redirect_stdout

from bnftools.parsing.interface import DuplicateRuleError, UnknownRuleError
from bnftools.parsing.definition import Rule
from bnftools.parsing.grammar import Grammar, GrammarFault, SimpleFaultHandler, WarningFaultHandler

def rules(*texts, priority=0):
	return [Rule.from_text(priority, text, provenance=i) for i, text in enumerate(texts)]

class Recorder(SimpleFaultHandler):
	""" Collects the faults instead of raising. """
	def __init__(self): self.faults = []
	def complain(self, message): self.faults.append(message)

class TestGrammarCollection(unittest.TestCase):
	def test_lookup(self):
		g = Grammar(rules('<digit> ::= "1" | "2"', '<pair> ::= <digit> <digit>'))
		self.assertEqual(2, len(g))
		self.assertIn('digit', g)
		self.assertNotIn('nothing', g)
		self.assertEqual('pair', g.rule('pair').name)
		self.assertEqual(2, len(g.productions_of('digit')))
		self.assertEqual(['digit', 'pair'], [r.name for r in g.rules])
		self.assertEqual(['digit', 'pair'], [r.name for r in g])

	def test_unknown_rule(self):
		g = Grammar(rules('<digit> ::= "1"'))
		with self.assertRaises(UnknownRuleError): g.rule('nope')
		with self.assertRaises(UnknownRuleError): g.productions_of('nope')

	def test_duplicate_rule(self):
		with self.assertRaises(DuplicateRuleError) as context:
			Grammar(rules('<a> ::= "x"', '<b> ::= "y"', '<a> ::= "z"'))
		self.assertEqual('a', context.exception.name)
		self.assertEqual((0, 2), (context.exception.first, context.exception.second))

	def test_priority_order(self):
		g = Grammar([
			Rule.from_text(0, '<low> ::= "x"'),
			Rule.from_text(5, '<high> ::= "x"'),
			Rule.from_text(0, '<also-low> ::= "x"'),
			Rule.from_text(5, '<also-high> ::= "x"'),
		])
		expect = ['high', 'also-high', 'low', 'also-low']
		self.assertEqual(expect, [r.name for r in g.rules_by_priority()])
		self.assertEqual(expect, [r.name for r in g.rules_by_priority()], "Each call should be a fresh generator.")

	def test_register_later(self):
		g = Grammar()
		g.register(Rule.from_text(0, '<a> ::= <b> "x"'))
		self.assertEqual(1, g.min_length('a'))
		g.register(Rule.from_text(0, '<b> ::= "yy"'))
		self.assertEqual(3, g.min_length('a'))

	def test_str_and_display(self):
		g = Grammar(rules('<digit> ::= "1" | "2"', '<pair> ::= <digit> <digit>'))
		self.assertEqual('<digit> ::= "1" | "2"\n<pair> ::= <digit> <digit>', str(g))
		out = io.StringIO()
		with redirect_stdout(out): g.display()
		self.assertIn('<pair>', out.getvalue())
		self.assertIn('| "2"', out.getvalue())

class TestAnalysis(unittest.TestCase):
	def test_min_length(self):
		g = Grammar(rules(
			'<digit> ::= "1" | "2"',
			'<number> ::= <digit> | <number> <digit>',
			'<word> ::= "abc" | "de" "f" | <number> <number> <number> <number>',
			'<nothing> ::= ""',
			'<loop> ::= <loop> "x"',
		))
		for name, size in [('digit', 1), ('number', 1), ('word', 3), ('nothing', 0), ('loop', None)]:
			with self.subTest(name=name):
				self.assertEqual(size, g.min_length(name))
		self.assertEqual({'loop'}, g.ill_founded())

	def test_mutual_ill_founded(self):
		g = Grammar(rules('<a> ::= <b> "y"', '<b> ::= <a> "x"', '<c> ::= "z" | <a>'))
		self.assertEqual({'a', 'b'}, g.ill_founded())
		self.assertEqual(1, g.min_length('c'))

	def test_unknown_reference_warns(self):
		with warnings.catch_warnings(record=True) as caught:
			warnings.simplefilter('always')
			g = Grammar(rules('<a> ::= <ghost> "x"'))
		self.assertEqual(1, len(caught))
		self.assertIn('ghost', str(caught[0].message))
		self.assertEqual(1, g.min_length('a'))

	def test_strict_raises(self):
		with self.assertRaises(GrammarFault):
			Grammar(rules('<a> ::= <ghost> "x"'), strict=True)
		with self.assertRaises(GrammarFault):
			Grammar(rules('<a> ::= <a> "x"'), strict=True)
		Grammar(rules('<digit> ::= "1"', '<number> ::= <digit> | <number> <digit>'), strict=True)

	def test_validate_reports_everything(self):
		g = Grammar(rules(
			'<a> ::= "x" | "x"',
			'<b> ::= <b> "y"',
			'<c> ::= "z" | <c>',
			'<d> ::= <e> | "q"',
			'<e> ::= <d>',
		))
		recorder = Recorder()
		g.validate(recorder)
		self.assertEqual(4, len(recorder.faults), recorder.faults)
		text = '\n'.join(recorder.faults)
		for fragment in ['<b>', 'more than once', 'replaced by itself', 'mutually-recursive']:
			with self.subTest(fragment=fragment):
				self.assertIn(fragment, text)

	def test_warning_fault_handler(self):
		g = Grammar(rules('<a> ::= <a> "y"'))
		with warnings.catch_warnings(record=True) as caught:
			warnings.simplefilter('always')
			g.validate(WarningFaultHandler())
		self.assertEqual(1, len(caught))

if __name__ == '__main__':
	unittest.main()
