# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Reference front end: lark grammar -> declarations and unfolded expressions.

The parser knows nothing about precedence. Every `a op b op c` chain becomes a
single flat SequenceExpr, exactly what the folder expects to receive; a lone
operand is returned as itself. Parenthesized sub-expressions stay wrapped in
ParenExpr with their own (unfolded) sequence inside.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from lark import Lark, Token, Tree

from opprec.core.span import Span
from opprec.precedence import (
	Associativity,
	Declaration,
	Fixity,
	Operator,
	PrecedenceGroup,
	PrecedenceRelation,
	RelationKind,
)
from opprec.syntax import (
	BinaryOperatorExpr,
	Expr,
	ExprStmt,
	IntegerLiteralExpr,
	NameExpr,
	ParenExpr,
	SequenceExpr,
	SourceFile,
)

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()

_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="lalr",
	start="start",
	propagate_positions=True,
	maybe_placeholders=False,
)


def parse_source(source: str, file: Optional[str] = None) -> SourceFile:
	"""Parse declarations and expression statements; raises lark's UnexpectedInput."""
	tree = _PARSER.parse(source)
	return _Builder(file).build_source(tree)


def parse_path(path: Path) -> SourceFile:
	return parse_source(path.read_text(), file=str(path))


def parse_expr(source: str, file: Optional[str] = None) -> Expr:
	"""
	Parse a single expression.

	Raises ValueError when the source holds anything other than exactly one
	expression statement.
	"""
	parsed = parse_source(source, file)
	if len(parsed.items) != 1 or not isinstance(parsed.items[0], ExprStmt):
		raise ValueError(f"expected a single expression, got {len(parsed.items)} item(s)")
	return parsed.items[0].expr


class _Builder:
	"""Walks the lark parse tree and builds opprec nodes."""

	def __init__(self, file: Optional[str]) -> None:
		self.file = file

	def build_source(self, tree: Tree) -> SourceFile:
		items: List[Declaration | ExprStmt] = []
		for child in tree.children:
			if not isinstance(child, Tree):
				continue
			kind = _name(child)
			if kind == "group_decl":
				items.append(self._build_group(child))
			elif kind == "operator_decl":
				items.append(self._build_operator(child))
			elif kind == "expr_stmt":
				expr_node = next(c for c in child.children if isinstance(c, Tree))
				items.append(ExprStmt(expr=self._build_expr(expr_node), loc=self._loc(child)))
			else:
				raise ValueError(f"unexpected top-level node '{kind}'")
		return SourceFile(items=tuple(items), file=self.file, loc=Span(file=self.file, line=1, column=1))

	def _build_group(self, tree: Tree) -> PrecedenceGroup:
		name_tok = next(c for c in tree.children if isinstance(c, Token) and c.type == "NAME")
		associativity = Associativity.NONE
		assignment = False
		relations: List[PrecedenceRelation] = []
		for attr in tree.children:
			if not isinstance(attr, Tree):
				continue
			kind = _name(attr)
			if kind == "associativity_attr":
				associativity = Associativity(_keyword(attr, "assoc"))
			elif kind == "assignment_attr":
				assignment = _keyword(attr, "bool") == "true"
			elif kind in ("higher_than_attr", "lower_than_attr"):
				rel_kind = RelationKind.HIGHER_THAN if kind == "higher_than_attr" else RelationKind.LOWER_THAN
				for ref in attr.children:
					if isinstance(ref, Tree) and _name(ref) == "group_ref":
						tok = ref.children[0]
						relations.append(PrecedenceRelation(rel_kind, tok.value, self._loc_from_token(tok)))
		return PrecedenceGroup(
			name=name_tok.value,
			associativity=associativity,
			relations=tuple(relations),
			assignment=assignment,
			loc=self._loc(tree),
		)

	def _build_operator(self, tree: Tree) -> Operator:
		fixity = Fixity(_keyword(tree, "fixity"))
		op_tok = next(c for c in tree.children if isinstance(c, Token) and c.type == "OPERATOR")
		group_tok = next((c for c in tree.children if isinstance(c, Token) and c.type == "NAME"), None)
		return Operator(
			name=op_tok.value,
			fixity=fixity,
			group_name=group_tok.value if group_tok is not None else None,
			loc=self._loc(tree),
		)

	def _build_expr(self, tree: Tree) -> Expr:
		kind = _name(tree)
		if kind == "name":
			tok = tree.children[0]
			return NameExpr(ident=tok.value, loc=self._loc_from_token(tok))
		if kind == "integer":
			tok = tree.children[0]
			return IntegerLiteralExpr(text=tok.value, loc=self._loc_from_token(tok))
		if kind == "paren":
			inner = next(c for c in tree.children if isinstance(c, Tree))
			return ParenExpr(inner=self._build_expr(inner), loc=self._loc(tree))
		if kind == "expr":
			elements: List[Expr] = []
			for child in tree.children:
				if isinstance(child, Token) and child.type == "OPERATOR":
					elements.append(BinaryOperatorExpr(name=child.value, loc=self._loc_from_token(child)))
				elif isinstance(child, Tree):
					elements.append(self._build_expr(child))
			if len(elements) == 1:
				return elements[0]
			return SequenceExpr(elements=tuple(elements), loc=self._loc(tree))
		raise ValueError(f"unexpected expression node '{kind}'")

	def _loc(self, tree: Tree) -> Span:
		meta = tree.meta
		if getattr(meta, "empty", True):
			return Span(file=self.file)
		return Span(
			file=self.file,
			line=meta.line,
			column=meta.column,
			end_line=meta.end_line,
			end_column=meta.end_column,
		)

	def _loc_from_token(self, token: Token) -> Span:
		return Span.from_loc(token, file=self.file)


def _keyword(tree: Tree, rule: str) -> str:
	node = next(c for c in tree.children if isinstance(c, Tree) and _name(c) == rule)
	tok = next(c for c in node.children if isinstance(c, Token))
	return tok.value


def _name(node: Tree | Token) -> str:
	if isinstance(node, Tree):
		data = node.data
		if isinstance(data, Token):
			return data.value
		return data
	if isinstance(node, Token):
		return node.type
	return str(node)


__all__ = ["parse_source", "parse_path", "parse_expr"]
