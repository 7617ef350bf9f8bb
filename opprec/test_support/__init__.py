# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Shared helpers for tests that fold parsed source.

The central helper compares a fold against an explicitly parenthesized
spelling of the same expression: `(a + (b * c))` is parsed, every parenthesized
single-operator sequence is turned into an InfixOperatorExpr by hand, and the
two trees must be structurally equal (spans never take part in equality).
"""

from __future__ import annotations

from typing import List

from opprec.operator_precedence import OperatorPrecedence
from opprec.parser import parse_expr, parse_source
from opprec.syntax import (
	BinaryOperatorExpr,
	InfixOperatorExpr,
	Node,
	ParenExpr,
	SequenceExpr,
)
from opprec.tree import contains_sequence, iter_children, replace_children


def fold_explicit_parens(node: Node) -> Node:
	"""
	Replace every `(x op y)` ParenExpr with the InfixOperatorExpr it spells.

	Parentheses around anything else are left alone.
	"""
	if isinstance(node, ParenExpr):
		inner = node.inner
		if isinstance(inner, SequenceExpr) and len(inner.elements) == 3:
			left, op, right = inner.elements
			assert isinstance(op, BinaryOperatorExpr)
			return InfixOperatorExpr(
				left=fold_explicit_parens(left),  # type: ignore[arg-type]
				operator=op,
				right=fold_explicit_parens(right),  # type: ignore[arg-type]
			)
	kids = [fold_explicit_parens(kid) for kid in iter_children(node)]
	return replace_children(node, kids)


def assert_expected_fold(prec: OperatorPrecedence, source: str, fully_parenthesized: str) -> None:
	"""Folding `source` must give the tree spelled out by `fully_parenthesized`."""
	folded = prec.fold_all(parse_expr(source))
	assert not contains_sequence(folded)

	expected = fold_explicit_parens(parse_expr(fully_parenthesized))
	assert not contains_sequence(expected)
	assert folded == expected, f"{source!r} folded differently from {fully_parenthesized!r}"


def sequence_of(source: str) -> SequenceExpr:
	"""Parse `source` and return its single top-level SequenceExpr."""
	expr = parse_expr(source)
	assert isinstance(expr, SequenceExpr), f"{source!r} did not parse to a sequence"
	return expr


def load(source: str) -> OperatorPrecedence:
	"""Registry built from declaration source; duplicates raise."""
	prec = OperatorPrecedence()
	prec.add_source_file(parse_source(source))
	return prec


def error_messages(errors) -> List[str]:
	return [err.message for err in errors]


FOLD_ERRORS_DECLS = """
precedencegroup A {
  associativity: none
}

precedencegroup C {
  associativity: none
  lowerThan: B
}

precedencegroup D {
  associativity: none
}

infix operator +: A
infix operator -: A

infix operator *: C

infix operator ++: D
"""


__all__ = [
	"fold_explicit_parens",
	"assert_expected_fold",
	"sequence_of",
	"load",
	"error_messages",
	"FOLD_ERRORS_DECLS",
]
