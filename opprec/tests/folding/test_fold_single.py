# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Folding one flat sequence: precedence, associativity and degraded folds.
"""

from __future__ import annotations

import pytest

from opprec.errors import IncomparableOperators, MissingGroup, MissingOperator
from opprec.operator_precedence import OperatorPrecedence
from opprec.parser import parse_source
from opprec.syntax import InfixOperatorExpr, SequenceExpr, render, render_parenthesized
from opprec.test_support import (
	FOLD_ERRORS_DECLS,
	assert_expected_fold,
	error_messages,
	load,
	sequence_of,
)
from opprec.tree import contains_sequence


def test_logical_exprs_single() -> None:
	prec = OperatorPrecedence.logical_operators()
	folded = prec.fold_single(sequence_of("x && y || w && v || z"))
	assert render(folded) == "x && y || w && v || z"
	assert not isinstance(folded, SequenceExpr)
	assert render_parenthesized(folded) == "(((x && y) || (w && v)) || z)"


def test_logical_exprs() -> None:
	prec = OperatorPrecedence.logical_operators()
	assert_expected_fold(prec, "x && y || w", "((x && y) || w)")
	assert_expected_fold(prec, "x || y && w", "(x || (y && w))")


def test_parsed_logical_declarations() -> None:
	prec = load(
		"""
		precedencegroup LogicalDisjunctionPrecedence {
		  associativity: left
		}
		precedencegroup LogicalConjunctionPrecedence {
		  associativity: left
		  higherThan: LogicalDisjunctionPrecedence
		}
		infix operator &&: LogicalConjunctionPrecedence
		infix operator ||: LogicalDisjunctionPrecedence
		"""
	)
	folded = prec.fold_single(sequence_of("x && y || w && v || z"))
	assert render(folded) == "x && y || w && v || z"
	assert isinstance(folded, InfixOperatorExpr)
	assert folded.operator.name == "||"


def test_swift_exprs_single_leaves_parenthesized_operand_alone() -> None:
	prec = OperatorPrecedence.standard_operators()
	folded = prec.fold_single(sequence_of("(x + y > 17) && x && y || w && v || z"))
	assert render(folded) == "(x + y > 17) && x && y || w && v || z"
	assert isinstance(folded, InfixOperatorExpr)
	# The operand was not folded by fold_single.
	assert contains_sequence(folded)


@pytest.mark.parametrize(
	"source, expected",
	[
		("a + b * c", "(a + (b * c))"),
		("a * b + c", "((a * b) + c)"),
		("a - b - c", "((a - b) - c)"),
		("a = b = c", "(a = (b = c))"),
		("a ?? b ?? c", "(a ?? (b ?? c))"),
		("a + b == c * d", "((a + b) == (c * d))"),
		("x = a || b && c", "(x = (a || (b && c)))"),
		("a << b * c", "((a << b) * c)"),
		("a ..< b + 1", "(a ..< (b + 1))"),
		("a += b * c + d", "(a += ((b * c) + d))"),
		("a && b == c || d", "((a && (b == c)) || d)"),
	],
)
def test_standard_folds(source: str, expected: str) -> None:
	assert_expected_fold(OperatorPrecedence.standard_operators(), source, expected)


def test_right_associative_custom_group() -> None:
	prec = load(
		"""
		precedencegroup Mul { associativity: left }
		precedencegroup Pow {
		  associativity: right
		  higherThan: Mul
		}
		infix operator *: Mul
		infix operator **: Pow
		"""
	)
	assert_expected_fold(prec, "a ** b ** c", "(a ** (b ** c))")
	assert_expected_fold(prec, "a * b ** c ** d * e", "((a * (b ** (c ** d))) * e)")


def test_missing_relation_target() -> None:
	prec = load(FOLD_ERRORS_DECLS)
	outcome = prec.fold_single_collect(sequence_of("a + b * c"))

	assert len(outcome.errors) == 2
	missing = outcome.errors[0]
	assert isinstance(missing, MissingGroup)
	assert missing.group_name == "B"
	assert missing.message == "unknown precedence group 'B'"
	assert isinstance(outcome.errors[1], IncomparableOperators)
	assert outcome.errors[1].message == "adjacent operators are in unordered precedence groups 'A' and 'C'"
	# Degraded fold groups left to right.
	assert render_parenthesized(outcome.value) == "((a + b) * c)"


def test_missing_operator() -> None:
	prec = load(FOLD_ERRORS_DECLS)
	outcome = prec.fold_single_collect(sequence_of("a / c"))

	assert len(outcome.errors) == 1
	err = outcome.errors[0]
	assert isinstance(err, MissingOperator)
	assert err.operator_name == "/"
	assert err.message == "unknown infix operator '/'"
	assert (err.span.line, err.span.column) == (1, 3)
	assert render_parenthesized(outcome.value) == "(a / c)"


def test_non_associative_group() -> None:
	prec = load(FOLD_ERRORS_DECLS)
	outcome = prec.fold_single_collect(sequence_of("a + b - c"))

	assert len(outcome.errors) == 1
	err = outcome.errors[0]
	assert isinstance(err, IncomparableOperators)
	assert (err.left_group, err.right_group) == ("A", "A")
	assert (err.left_operator.name, err.right_operator.name) == ("+", "-")
	assert err.message == "adjacent operators are in non-associative precedence group 'A'"
	assert render_parenthesized(outcome.value) == "((a + b) - c)"


def test_unordered_groups() -> None:
	prec = load(FOLD_ERRORS_DECLS)
	outcome = prec.fold_single_collect(sequence_of("a ++ b - d"))

	assert len(outcome.errors) == 1
	err = outcome.errors[0]
	assert isinstance(err, IncomparableOperators)
	assert (err.left_group, err.right_group) == ("D", "A")
	assert err.message == "adjacent operators are in unordered precedence groups 'D' and 'A'"


def test_errors_reported_in_discovery_order() -> None:
	prec = load(FOLD_ERRORS_DECLS)
	outcome = prec.fold_single_collect(sequence_of("a + b - c ++ d / e"))
	assert error_messages(outcome.errors) == [
		"adjacent operators are in non-associative precedence group 'A'",
		"adjacent operators are in unordered precedence groups 'A' and 'D'",
		"unknown infix operator '/'",
	]
	assert render_parenthesized(outcome.value) == "((((a + b) - c) ++ d) / e)"


def test_fail_fast_raises_first_error() -> None:
	prec = load(FOLD_ERRORS_DECLS)
	with pytest.raises(MissingGroup) as excinfo:
		prec.fold_single(sequence_of("a + b * c"))
	assert excinfo.value.group_name == "B"

	with pytest.raises(IncomparableOperators):
		prec.fold_single(sequence_of("a + b - c"))


def test_callback_receives_every_error() -> None:
	prec = load(FOLD_ERRORS_DECLS)
	seen = []
	folded = prec.fold_single(sequence_of("a + b * c"), seen.append)
	assert [type(e) for e in seen] == [MissingGroup, IncomparableOperators]
	assert isinstance(folded, InfixOperatorExpr)


def test_undeclared_operator_folds_below_everything() -> None:
	prec = OperatorPrecedence.logical_operators()
	outcome = prec.fold_single_collect(sequence_of("a && b / c && d"))
	assert error_messages(outcome.errors) == ["unknown infix operator '/'"]
	assert render_parenthesized(outcome.value) == "((a && b) / (c && d))"


def test_operator_without_group_uses_default_group() -> None:
	prec = OperatorPrecedence.logical_operators()
	prec.add_source_file(parse_source("infix operator <>"))
	assert_expected_fold(prec, "a <> b && c", "(a <> (b && c))")
	assert_expected_fold(prec, "a <> b <> c", "((a <> b) <> c)")


def test_operator_with_undeclared_group() -> None:
	prec = OperatorPrecedence.logical_operators()
	prec.add_source_file(parse_source("infix operator %%: Nowhere"))
	outcome = prec.fold_single_collect(sequence_of("a %% b || c"))
	assert error_messages(outcome.errors) == ["unknown precedence group 'Nowhere'"]
	assert outcome.errors[0].span.column == 3
	assert render_parenthesized(outcome.value) == "(a %% (b || c))"


def test_comparison_chain_is_non_associative() -> None:
	prec = OperatorPrecedence.standard_operators()
	outcome = prec.fold_single_collect(sequence_of("a < b == c"))
	assert error_messages(outcome.errors) == [
		"adjacent operators are in non-associative precedence group 'ComparisonPrecedence'",
	]


def test_folding_does_not_touch_registry() -> None:
	prec = load(FOLD_ERRORS_DECLS)
	groups_before = prec.registry.groups
	operators_before = prec.registry.operators
	prec.fold_single_collect(sequence_of("a + b * c ++ d / e"))
	assert prec.registry.groups == groups_before
	assert prec.registry.operators == operators_before
