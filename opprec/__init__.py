# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
opprec: resolve flat operator chains into binary-operation trees.

Precedence comes from declared groups ordered by `higherThan`/`lowerThan`
relations rather than a fixed table, so user-defined operators can slot in
anywhere and unrelated groups stay unordered (and are reported as such).
"""

from opprec.errors import (
	ErrorKind,
	GroupAlreadyExists,
	IncomparableOperators,
	MissingGroup,
	MissingOperator,
	OperatorAlreadyExists,
	OperatorPrecedenceError,
	Outcome,
)
from opprec.folding import SequenceFolder
from opprec.graph import Precedence, PrecedenceGraph
from opprec.operator_precedence import OperatorPrecedence
from opprec.precedence import (
	DEFAULT_GROUP,
	Associativity,
	Fixity,
	Operator,
	PrecedenceGroup,
	PrecedenceRelation,
	RelationKind,
)
from opprec.registry import PrecedenceRegistry
from opprec.syntax import (
	BinaryOperatorExpr,
	InfixOperatorExpr,
	SequenceExpr,
	render,
	render_parenthesized,
)
from opprec.tree import contains_sequence

__all__ = [
	"Associativity",
	"BinaryOperatorExpr",
	"DEFAULT_GROUP",
	"ErrorKind",
	"Fixity",
	"GroupAlreadyExists",
	"IncomparableOperators",
	"InfixOperatorExpr",
	"MissingGroup",
	"MissingOperator",
	"Operator",
	"OperatorAlreadyExists",
	"OperatorPrecedence",
	"OperatorPrecedenceError",
	"Outcome",
	"Precedence",
	"PrecedenceGraph",
	"PrecedenceGroup",
	"PrecedenceRegistry",
	"PrecedenceRelation",
	"RelationKind",
	"SequenceExpr",
	"SequenceFolder",
	"contains_sequence",
	"render",
	"render_parenthesized",
]
