""" Bits and bobs in support of visualizing data structures. """

def print_grid(grid):
	lens = list(map(len, grid))
	assert len(set(lens)) == 1, lens
	grid = [[str(cell) for cell in row] for row in grid]
	width = [max(map(len, column)) for column in zip(*grid)]
	horizontal = '\u2500'
	vertical = ' \u2502 '
	upper = horizontal + '\u252c' + horizontal
	inner = horizontal + '\u253c' + horizontal
	lower = horizontal + '\u2534' + horizontal
	segments = [horizontal*w for w in width]
	divider = inner.join(segments)
	print(upper.join(segments))
	for r, row in enumerate(grid):
		if r %5 == 1: print(divider)
		print(vertical.join(s.ljust(w,' ') for s,w in zip(row, width)))
	print(lower.join(segments))

def indented_tree(node, label, children, *, indent='  ') -> str:
	"""
	Render a tree as lines of text, one node per line, children indented beneath their parent.
	``label(node)`` gives the text for a node; ``children(node)`` gives its ordered sub-nodes.
	"""
	lines = []
	def visit(n, depth):
		lines.append(indent*depth + label(n))
		for child in children(n): visit(child, depth+1)
	visit(node, 0)
	return "\n".join(lines)
