# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Generic child access for dataclass tree nodes.

A child is any `Node` stored in a dataclass field, either directly or inside a
tuple/list field. Children are visited in field order, so rebuilding a node
from its (possibly replaced) children is well defined. Non-node field values
(names, spans, declarations) are carried over untouched.
"""

from __future__ import annotations

from dataclasses import fields, is_dataclass, replace
from typing import Any, Iterator, List, Sequence

from opprec.syntax import Node, SequenceExpr


def iter_children(node: Node) -> Iterator[Node]:
	"""Yield the direct child nodes of `node` in field order."""
	if not is_dataclass(node):
		return
	for f in fields(node):
		val = getattr(node, f.name)
		if isinstance(val, Node):
			yield val
		elif isinstance(val, (tuple, list)):
			for item in val:
				if isinstance(item, Node):
					yield item


def replace_children(node: Node, children: Sequence[Node]) -> Node:
	"""
	Return `node` with its children replaced, in `iter_children` order.

	When every replacement is the original object, `node` itself is returned.
	"""
	it = iter(children)
	changes: dict[str, Any] = {}
	for f in fields(node):  # type: ignore[arg-type]
		val = getattr(node, f.name)
		if isinstance(val, Node):
			new = next(it)
			if new is not val:
				changes[f.name] = new
		elif isinstance(val, (tuple, list)):
			items: List[Any] = []
			changed = False
			for item in val:
				if isinstance(item, Node):
					new = next(it)
					changed = changed or new is not item
					items.append(new)
				else:
					items.append(item)
			if changed:
				changes[f.name] = type(val)(items)
	if next(it, None) is not None:
		raise ValueError(f"too many children for {type(node).__name__}")
	if not changes:
		return node
	return replace(node, **changes)  # type: ignore[type-var]


def contains_sequence(root: Node) -> bool:
	"""True when an unfolded SequenceExpr remains anywhere under `root`."""
	stack: List[Node] = [root]
	while stack:
		node = stack.pop()
		if isinstance(node, SequenceExpr):
			return True
		stack.extend(iter_children(node))
	return False


__all__ = ["iter_children", "replace_children", "contains_sequence"]
