import unittest, io, os, tempfile
from contextlib import redirect_stdout, redirect_stderr

from bnftools.__main__ import parse_arguments, main
from bnftools.parsing import engine

GRAMMAR = """
<digit> ::= "0" | "1" | "2" | "3" | "4" | "5" | "6" | "7" | "8" | "9"
1 <sum> ::= <digit> "+" <digit>
"""

class TestCommandLine(unittest.TestCase):
	def setUp(self):
		self.folder = tempfile.TemporaryDirectory()
		self.grammar_path = self.write('sample.bnf', GRAMMAR)

	def tearDown(self):
		self.folder.cleanup()
		engine.VERBOSE = False

	def write(self, name, content):
		path = os.path.join(self.folder.name, name)
		with open(path, 'w', encoding='utf-8') as fh: fh.write(content)
		return path

	def run_main(self, *argv):
		out, err = io.StringIO(), io.StringIO()
		status = 0
		with redirect_stdout(out), redirect_stderr(err):
			try: main(parse_arguments(list(argv)))
			except SystemExit as ex: status = ex.code
		return status, out.getvalue(), err.getvalue()

	def test_compile_text(self):
		status, out, err = self.run_main(self.grammar_path, '-e', '1+2')
		self.assertEqual(0, status)
		self.assertEqual('1+2\n', out)

	def test_input_file(self):
		input_path = self.write('input.txt', '3+4\n')
		status, out, err = self.run_main(self.grammar_path, input_path)
		self.assertEqual((0, '3+4\n'), (status, out))

	def test_tree(self):
		status, out, err = self.run_main(self.grammar_path, '-e', '1+2', '--tree')
		self.assertEqual(0, status)
		self.assertTrue(out.startswith("<sum> @0: '1+2'"))
		self.assertIn('<digit> @2', out)

	def test_display_alone(self):
		status, out, err = self.run_main(self.grammar_path, '--display')
		self.assertEqual(0, status)
		self.assertIn('<sum>', out)

	def test_no_match(self):
		status, out, err = self.run_main(self.grammar_path, '-e', '1*2')
		self.assertEqual(1, status)
		self.assertIn('No rule matches', err)

	def test_bad_grammar(self):
		path = self.write('bad.bnf', '<a> <= "x"\n')
		status, out, err = self.run_main(path, '-e', 'x')
		self.assertEqual(1, status)
		self.assertIn('bad.bnf', err)

	def test_missing_file(self):
		status, out, err = self.run_main(os.path.join(self.folder.name, 'nowhere.bnf'), '-e', 'x')
		self.assertEqual(1, status)

	def test_budget_and_verbose(self):
		status, out, err = self.run_main(self.grammar_path, '-e', '1+2', '--max-steps', '1')
		self.assertEqual(1, status)
		status, out, err = self.run_main(self.grammar_path, '-e', '1+2', '-v')
		self.assertEqual(0, status)
		self.assertIn('steps', err)

if __name__ == '__main__':
	unittest.main()
