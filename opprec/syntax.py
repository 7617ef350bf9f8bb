# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Expression tree consumed and produced by the folder.

The folder only distinguishes three shapes:

  SequenceExpr       flat `operand (operator operand)*` chain straight from the parser
  InfixOperatorExpr  a folded binary operation
  anything else      an opaque operand, carried through unexamined

`NameExpr`, `IntegerLiteralExpr` and `ParenExpr` are the opaque operands the
reference parser produces. Other front ends may add their own node classes:
any frozen dataclass deriving `Node` whose child nodes live in fields (directly
or in tuples) is traversed by `fold_all`.

Spans are excluded from equality, so `==` compares structure only.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from opprec.core.span import Span
from opprec.precedence import Declaration


class Node:
	"""Marker base for tree nodes."""

	loc: Span


class Expr(Node):
	pass


@dataclass(frozen=True)
class NameExpr(Expr):
	ident: str
	loc: Span = field(default_factory=Span, compare=False)


@dataclass(frozen=True)
class IntegerLiteralExpr(Expr):
	# Literal text as written (keeps `0x1F`, `1_000` unchanged for rendering).
	text: str
	loc: Span = field(default_factory=Span, compare=False)


@dataclass(frozen=True)
class ParenExpr(Expr):
	inner: Expr
	loc: Span = field(default_factory=Span, compare=False)


@dataclass(frozen=True)
class BinaryOperatorExpr(Expr):
	"""An operator token as it appears between two operands."""

	name: str
	loc: Span = field(default_factory=Span, compare=False)


@dataclass(frozen=True)
class SequenceExpr(Expr):
	"""
	Unfolded chain `[operand0, op0, operand1, ..., operandN]`.

	Operands sit at even indices, `BinaryOperatorExpr` tokens at odd indices.
	"""

	elements: Tuple[Expr, ...]
	loc: Span = field(default_factory=Span, compare=False)

	def __post_init__(self) -> None:
		if len(self.elements) % 2 == 0:
			raise ValueError("sequence must alternate operands and operators, starting and ending with an operand")
		for idx, elem in enumerate(self.elements):
			if (idx % 2 == 1) != isinstance(elem, BinaryOperatorExpr):
				raise ValueError(f"sequence element {idx} is misplaced: {type(elem).__name__}")

	@property
	def operands(self) -> Tuple[Expr, ...]:
		return self.elements[0::2]

	@property
	def operators(self) -> Tuple[BinaryOperatorExpr, ...]:
		return self.elements[1::2]  # type: ignore[return-value]


@dataclass(frozen=True)
class InfixOperatorExpr(Expr):
	left: Expr
	operator: BinaryOperatorExpr
	right: Expr
	loc: Span = field(default_factory=Span, compare=False)


@dataclass(frozen=True)
class ExprStmt(Node):
	expr: Expr
	loc: Span = field(default_factory=Span, compare=False)


@dataclass(frozen=True)
class SourceFile(Node):
	"""Parsed source: declarations and expression statements in source order."""

	items: Tuple[Declaration | ExprStmt, ...]
	file: str | None = None
	loc: Span = field(default_factory=Span, compare=False)

	@property
	def declarations(self) -> Tuple[Declaration, ...]:
		return tuple(item for item in self.items if not isinstance(item, ExprStmt))

	@property
	def statements(self) -> Tuple[ExprStmt, ...]:
		return tuple(item for item in self.items if isinstance(item, ExprStmt))


def render(expr: Node) -> str:
	"""
	Render an expression back to source form.

	Folding only regroups operands, so a sequence and its folded tree render
	to the same text.
	"""
	if isinstance(expr, NameExpr):
		return expr.ident
	if isinstance(expr, IntegerLiteralExpr):
		return expr.text
	if isinstance(expr, ParenExpr):
		return f"({render(expr.inner)})"
	if isinstance(expr, BinaryOperatorExpr):
		return expr.name
	if isinstance(expr, SequenceExpr):
		return " ".join(render(e) for e in expr.elements)
	if isinstance(expr, InfixOperatorExpr):
		return f"{render(expr.left)} {expr.operator.name} {render(expr.right)}"
	if isinstance(expr, ExprStmt):
		return render(expr.expr)
	raise TypeError(f"cannot render {type(expr).__name__}")


def render_parenthesized(expr: Node) -> str:
	"""Render with every folded binary operation wrapped in parentheses."""
	if isinstance(expr, InfixOperatorExpr):
		return f"({render_parenthesized(expr.left)} {expr.operator.name} {render_parenthesized(expr.right)})"
	if isinstance(expr, ParenExpr):
		inner = expr.inner
		# Avoid doubling the parentheses the folded operation already gets.
		if isinstance(inner, InfixOperatorExpr):
			return render_parenthesized(inner)
		return f"({render_parenthesized(inner)})"
	if isinstance(expr, SequenceExpr):
		return " ".join(render_parenthesized(e) for e in expr.elements)
	if isinstance(expr, ExprStmt):
		return render_parenthesized(expr.expr)
	return render(expr)


__all__ = [
	"Node",
	"Expr",
	"NameExpr",
	"IntegerLiteralExpr",
	"ParenExpr",
	"BinaryOperatorExpr",
	"SequenceExpr",
	"InfixOperatorExpr",
	"ExprStmt",
	"SourceFile",
	"render",
	"render_parenthesized",
]
