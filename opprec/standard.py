# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Built-in declaration sets.

`LOGICAL_DECLARATIONS` is the two-group `&&`/`||` table. `STANDARD_DECLARATIONS`
mirrors the precedence groups and operators of the Swift standard library,
which is the usual reference table for languages with declarable operators:

  AssignmentPrecedence < FunctionArrowPrecedence < TernaryPrecedence
    < DefaultPrecedence
    < LogicalDisjunctionPrecedence < LogicalConjunctionPrecedence
    < ComparisonPrecedence < NilCoalescingPrecedence < CastingPrecedence
    < RangeFormationPrecedence < AdditionPrecedence
    < MultiplicationPrecedence < BitwiseShiftPrecedence

(`DefaultPrecedence` and `LogicalDisjunctionPrecedence` both sit directly
above `TernaryPrecedence` and are unordered relative to each other.)
"""

from __future__ import annotations

from typing import Tuple

from opprec.precedence import Associativity, Declaration, Fixity, Operator, PrecedenceGroup

LEFT = Associativity.LEFT
RIGHT = Associativity.RIGHT
NONE = Associativity.NONE


def _infix(group: str, *names: str) -> Tuple[Operator, ...]:
	return tuple(Operator(name, Fixity.INFIX, group) for name in names)


def _unary(fixity: Fixity, *names: str) -> Tuple[Operator, ...]:
	return tuple(Operator(name, fixity) for name in names)


LOGICAL_DECLARATIONS: Tuple[Declaration, ...] = (
	PrecedenceGroup.declare("LogicalConjunctionPrecedence", LEFT, higher_than=["LogicalDisjunctionPrecedence"]),
	PrecedenceGroup.declare("LogicalDisjunctionPrecedence", LEFT),
	*_infix("LogicalConjunctionPrecedence", "&&"),
	*_infix("LogicalDisjunctionPrecedence", "||"),
)


STANDARD_DECLARATIONS: Tuple[Declaration, ...] = (
	PrecedenceGroup.declare("AssignmentPrecedence", RIGHT, assignment=True),
	PrecedenceGroup.declare("FunctionArrowPrecedence", RIGHT, higher_than=["AssignmentPrecedence"]),
	PrecedenceGroup.declare("TernaryPrecedence", RIGHT, higher_than=["FunctionArrowPrecedence"]),
	PrecedenceGroup.declare("DefaultPrecedence", NONE, higher_than=["TernaryPrecedence"]),
	PrecedenceGroup.declare("LogicalDisjunctionPrecedence", LEFT, higher_than=["TernaryPrecedence"]),
	PrecedenceGroup.declare("LogicalConjunctionPrecedence", LEFT, higher_than=["LogicalDisjunctionPrecedence"]),
	PrecedenceGroup.declare("ComparisonPrecedence", NONE, higher_than=["LogicalConjunctionPrecedence"]),
	PrecedenceGroup.declare("NilCoalescingPrecedence", RIGHT, higher_than=["ComparisonPrecedence"]),
	PrecedenceGroup.declare("CastingPrecedence", NONE, higher_than=["NilCoalescingPrecedence"]),
	PrecedenceGroup.declare("RangeFormationPrecedence", NONE, higher_than=["CastingPrecedence"]),
	PrecedenceGroup.declare("AdditionPrecedence", LEFT, higher_than=["RangeFormationPrecedence"]),
	PrecedenceGroup.declare("MultiplicationPrecedence", LEFT, higher_than=["AdditionPrecedence"]),
	PrecedenceGroup.declare("BitwiseShiftPrecedence", NONE, higher_than=["MultiplicationPrecedence"]),
	# Prefix/postfix operators are recorded but never take part in folding.
	*_unary(Fixity.PREFIX, "!", "~", "+", "-", "..<", "..."),
	*_unary(Fixity.POSTFIX, "..."),
	*_infix("BitwiseShiftPrecedence", "<<", "&<<", ">>", "&>>"),
	*_infix("MultiplicationPrecedence", "*", "&*", "/", "%", "&"),
	*_infix("AdditionPrecedence", "+", "&+", "-", "&-", "|", "^"),
	*_infix("RangeFormationPrecedence", "...", "..<"),
	*_infix("NilCoalescingPrecedence", "??"),
	*_infix(
		"ComparisonPrecedence",
		"<", "<=", ">", ">=", "==", "!=", "===", "!==", "~=",
		".==", ".!=", ".<", ".<=", ".>", ".>=",
	),
	*_infix("LogicalConjunctionPrecedence", "&&", ".&"),
	*_infix("LogicalDisjunctionPrecedence", "||", ".|", ".^"),
	*_infix(
		"AssignmentPrecedence",
		"=", "*=", "&*=", "/=", "%=", "+=", "&+=", "-=", "&-=",
		"<<=", "&<<=", ">>=", "&>>=", "&=", "^=", "|=",
		".&=", ".|=", ".^=",
	),
)


__all__ = ["LOGICAL_DECLARATIONS", "STANDARD_DECLARATIONS"]
