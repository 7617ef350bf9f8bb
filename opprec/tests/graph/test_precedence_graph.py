# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Group-vs-group comparisons over the declared relation graph.
"""

from __future__ import annotations

import pytest

from opprec.errors import MissingGroup
from opprec.graph import Precedence, PrecedenceGraph
from opprec.operator_precedence import OperatorPrecedence
from opprec.precedence import DEFAULT_GROUP, PrecedenceGroup
from opprec.test_support import FOLD_ERRORS_DECLS, load


def _graph(*groups: PrecedenceGroup) -> PrecedenceGraph:
	return OperatorPrecedence.from_declarations(groups).graph


def _compare(graph: PrecedenceGraph, a: str, b: str) -> Precedence:
	return graph.compare(graph.registry.lookup_group(a), graph.registry.lookup_group(b))


@pytest.mark.parametrize(
	"a, b, expected",
	[
		("LogicalConjunctionPrecedence", "LogicalDisjunctionPrecedence", Precedence.HIGHER),
		("LogicalDisjunctionPrecedence", "LogicalConjunctionPrecedence", Precedence.LOWER),
		("MultiplicationPrecedence", "ComparisonPrecedence", Precedence.HIGHER),
		("AssignmentPrecedence", "BitwiseShiftPrecedence", Precedence.LOWER),
		("RangeFormationPrecedence", "RangeFormationPrecedence", Precedence.EQUAL),
		("DefaultPrecedence", "LogicalDisjunctionPrecedence", Precedence.UNORDERED),
		("DefaultPrecedence", "TernaryPrecedence", Precedence.HIGHER),
	],
)
def test_standard_table(a: str, b: str, expected: Precedence) -> None:
	prec = OperatorPrecedence.standard_operators()
	assert prec.compare(a, b) is expected


def test_lower_than_edges_are_walked_from_both_ends() -> None:
	graph = _graph(
		PrecedenceGroup.declare("X", lower_than=["Y"]),
		PrecedenceGroup.declare("Y"),
	)
	assert _compare(graph, "Y", "X") is Precedence.HIGHER
	assert _compare(graph, "X", "Y") is Precedence.LOWER


def test_mixed_relation_path() -> None:
	# P -> Q declared by P, Q -> R declared by R.
	graph = _graph(
		PrecedenceGroup.declare("P", higher_than=["Q"]),
		PrecedenceGroup.declare("Q"),
		PrecedenceGroup.declare("R", lower_than=["Q"]),
	)
	assert _compare(graph, "P", "R") is Precedence.HIGHER
	assert _compare(graph, "R", "P") is Precedence.LOWER


def test_cycles_terminate() -> None:
	graph = _graph(
		PrecedenceGroup.declare("E", higher_than=["F"]),
		PrecedenceGroup.declare("F", higher_than=["E"]),
		PrecedenceGroup.declare("G"),
	)
	assert _compare(graph, "E", "G") is Precedence.UNORDERED
	# The first path found decides.
	assert _compare(graph, "E", "F") is Precedence.HIGHER


def test_missing_group_is_reported_and_search_continues() -> None:
	graph = _graph(
		PrecedenceGroup.declare("X", higher_than=["Missing", "Y"]),
		PrecedenceGroup.declare("Y"),
	)
	outcome = graph.compare_collect(graph.registry.lookup_group("X"), graph.registry.lookup_group("Y"))
	assert outcome.value is Precedence.HIGHER
	assert outcome.errors == (MissingGroup("Missing"),)


def test_missing_lower_than_target_degrades_to_unordered() -> None:
	prec = load(FOLD_ERRORS_DECLS)
	c = prec.lookup_group("C")
	a = prec.lookup_group("A")
	outcome = prec.graph.compare_collect(c, a)
	assert outcome.value is Precedence.UNORDERED
	assert [e.message for e in outcome.errors] == ["unknown precedence group 'B'"]
	# The error points at the `lowerThan: B` reference (line 8 of the declarations).
	assert outcome.errors[0].span.line == 8


def test_missing_group_fail_fast() -> None:
	prec = load(FOLD_ERRORS_DECLS)
	with pytest.raises(MissingGroup) as excinfo:
		prec.graph.compare(prec.lookup_group("C"), prec.lookup_group("A"))
	assert excinfo.value.group_name == "B"


def test_each_missing_name_reported_once_per_walk() -> None:
	graph = _graph(
		PrecedenceGroup.declare("X", higher_than=["Gone", "Y"]),
		PrecedenceGroup.declare("Y", higher_than=["Gone"]),
		PrecedenceGroup.declare("Z"),
	)
	outcome = graph.compare_collect(graph.registry.lookup_group("X"), graph.registry.lookup_group("Z"))
	assert outcome.value is Precedence.UNORDERED
	assert outcome.errors == (MissingGroup("Gone"),)


def test_default_group_is_below_everything() -> None:
	graph = OperatorPrecedence.logical_operators().graph
	disj = graph.registry.lookup_group("LogicalDisjunctionPrecedence")
	assert graph.compare(DEFAULT_GROUP, disj) is Precedence.LOWER
	assert graph.compare(disj, DEFAULT_GROUP) is Precedence.HIGHER
	assert graph.compare(DEFAULT_GROUP, DEFAULT_GROUP) is Precedence.EQUAL


def test_compare_names_reports_unknown_names() -> None:
	prec = OperatorPrecedence.logical_operators()
	errors = []
	result = prec.compare("Nope", "LogicalDisjunctionPrecedence", errors.append)
	assert result is Precedence.UNORDERED
	assert errors == [MissingGroup("Nope")]
	assert prec.compare("Nope", "Nope") is Precedence.EQUAL
