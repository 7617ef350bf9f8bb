# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Sequence folding: flat operand/operator chains -> nested InfixOperatorExpr trees.

`fold_single` handles one SequenceExpr whose operands are already folded. It is
a single left-to-right scan over a stack of pending operators (shift/reduce in
the operator-precedence style). The stack always holds operators of strictly
increasing binding strength, or equal strength in a right-associative group.
For each incoming operator, compared against the pending operator on top:

  incoming HIGHER                  keep it pending (shift)
  incoming LOWER                   combine the top, then look at the next one
  EQUAL, left-associative          combine the top
  EQUAL, right-associative         shift
  EQUAL, non-associative           report IncomparableOperators, combine the top
  UNORDERED                        report IncomparableOperators, combine the top

Combining the top on an error degrades to left-to-right grouping, which keeps
the scan going and the result a complete tree. Operators without a
declaration report MissingOperator; operators whose group is not declared
report MissingGroup. Both then fold in the implicit default group, below
everything else.

`fold_all` folds every SequenceExpr under a node, innermost first, rebuilding
only the nodes above a change. It is idempotent: a tree without sequences is
returned as is.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple, TypeVar

from opprec.errors import (
	ErrorHandler,
	IncomparableOperators,
	MissingGroup,
	MissingOperator,
	Outcome,
	collecting,
	handler_or_raise,
)
from opprec.graph import Precedence, PrecedenceGraph
from opprec.precedence import DEFAULT_GROUP, Associativity, PrecedenceGroup
from opprec.registry import PrecedenceRegistry
from opprec.syntax import BinaryOperatorExpr, Expr, InfixOperatorExpr, Node, SequenceExpr
from opprec.tree import iter_children, replace_children

logger = logging.getLogger(__name__)

N = TypeVar("N", bound=Node)


@dataclass(frozen=True)
class _PendingOperator:
	op: BinaryOperatorExpr
	group: PrecedenceGroup


class SequenceFolder:
	"""Folds sequences against a finished registry; holds no mutable state."""

	def __init__(self, registry: PrecedenceRegistry, graph: Optional[PrecedenceGraph] = None) -> None:
		self.registry = registry
		self.graph = graph or PrecedenceGraph(registry)

	# --- single sequence -----------------------------------------------

	def fold_single(self, seq: SequenceExpr, on_error: Optional[ErrorHandler] = None) -> Expr:
		"""Fold one sequence; its operands are taken as already folded."""
		handler = handler_or_raise(on_error)
		operands: List[Expr] = [seq.elements[0]]
		pending: List[_PendingOperator] = []
		reported = 0

		def counting(err) -> None:
			nonlocal reported
			reported += 1
			handler(err)

		def combine() -> None:
			top = pending.pop()
			right = operands.pop()
			left = operands.pop()
			operands.append(InfixOperatorExpr(left=left, operator=top.op, right=right, loc=left.loc))

		for idx in range(1, len(seq.elements), 2):
			op = seq.elements[idx]
			assert isinstance(op, BinaryOperatorExpr)
			incoming = _PendingOperator(op, self._operator_group(op, counting))
			while pending and self._should_combine(pending[-1], incoming, counting):
				combine()
			pending.append(incoming)
			operands.append(seq.elements[idx + 1])

		while pending:
			combine()
		assert len(operands) == 1
		logger.debug("folded sequence of %d operators, %d errors", len(seq.operators), reported)
		return operands[0]

	def fold_single_collect(self, seq: SequenceExpr) -> Outcome[Expr]:
		errors, handler = collecting()
		value = self.fold_single(seq, handler)
		return Outcome(value, tuple(errors))

	def _operator_group(self, op: BinaryOperatorExpr, on_error: ErrorHandler) -> PrecedenceGroup:
		decl = self.registry.lookup_operator(op.name)
		if decl is None:
			on_error(MissingOperator(op.name, op.loc))
			return DEFAULT_GROUP
		if decl.group_name is None:
			return DEFAULT_GROUP
		group = self.registry.lookup_group(decl.group_name)
		if group is None:
			on_error(MissingGroup(decl.group_name, op.loc))
			return DEFAULT_GROUP
		return group

	def _should_combine(
		self,
		top: _PendingOperator,
		incoming: _PendingOperator,
		on_error: ErrorHandler,
	) -> bool:
		relation = self.graph.compare(incoming.group, top.group, on_error)
		if relation is Precedence.HIGHER:
			return False
		if relation is Precedence.LOWER:
			return True
		if relation is Precedence.EQUAL:
			assoc = incoming.group.associativity
			if assoc is Associativity.LEFT:
				return True
			if assoc is Associativity.RIGHT:
				return False
		on_error(
			IncomparableOperators(
				left_operator=top.op,
				left_group=top.group.name,
				right_operator=incoming.op,
				right_group=incoming.group.name,
			)
		)
		return True

	# --- whole trees ---------------------------------------------------

	def fold_all(self, root: N, on_error: Optional[ErrorHandler] = None) -> N:
		"""
		Fold every SequenceExpr under `root`, nested ones before their parents.

		Uses an explicit work-list, so nesting depth is not limited by the
		interpreter's recursion limit.
		"""
		handler = handler_or_raise(on_error)
		# (node, children_done) frames; folded results accumulate on `done`.
		work: List[Tuple[Node, bool]] = [(root, False)]
		done: List[Node] = []
		while work:
			node, children_done = work.pop()
			if not children_done:
				kids = list(iter_children(node))
				work.append((node, True))
				for kid in reversed(kids):
					work.append((kid, False))
				continue
			count = sum(1 for _ in iter_children(node))
			new_kids = done[len(done) - count:]
			del done[len(done) - count:]
			rebuilt = replace_children(node, new_kids) if count else node
			if isinstance(rebuilt, SequenceExpr):
				rebuilt = self.fold_single(rebuilt, handler)
			done.append(rebuilt)
		assert len(done) == 1
		return done[0]  # type: ignore[return-value]

	def fold_all_collect(self, root: N) -> Outcome[N]:
		errors, handler = collecting()
		value = self.fold_all(root, handler)
		return Outcome(value, tuple(errors))


__all__ = ["SequenceFolder"]
