""" Small graph and ordering helpers for grammar analysis. """

from collections.abc import Sequence

def grade(seq:Sequence, *, descending=False) -> list:
	"""
	The index permutation which sorts seq. Stable either way, so rules of equal
	priority keep their declaration order.
	"""
	return sorted(range(len(seq)), key=seq.__getitem__, reverse=descending)

def strongly_connected_components(graph:dict) -> list:
	"""
	Tarjan's algorithm over a dictionary from each key to the keys it reaches.
	Arcs to keys absent from the dictionary are ignored. Components come out as
	lists of keys, in reverse topological order. The grammar uses this to find
	rules which may rename one another in a loop.
	"""
	index, on_stack = {}, set()
	stack, output = [], []
	def connect(key) -> int:
		low_link = index[key] = len(stack)
		stack.append(key)
		on_stack.add(key)
		for arc in graph[key]:
			if arc not in graph: continue
			if arc not in index: low_link = min(low_link, connect(arc))
			elif arc in on_stack: low_link = min(low_link, index[arc])
		if low_link == index[key]:
			component = stack[low_link:]
			del stack[low_link:]
			on_stack.difference_update(component)
			output.append(component)
		return low_link
	for key in list(graph):
		if key not in index: connect(key)
	return output
