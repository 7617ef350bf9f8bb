# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Declared precedence data: groups, relations and operators.

These records are what the declaration front end produces and what the
registry stores. They are immutable; spans are excluded from equality.

    precedencegroup AdditionPrecedence {
      associativity: left
      higherThan: RangeFormationPrecedence
    }
    infix operator +: AdditionPrecedence
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional, Tuple

from opprec.core.span import Span


class Associativity(str, Enum):
	"""How a chain of operators from the same group nests."""

	LEFT = "left"
	RIGHT = "right"
	NONE = "none"


class Fixity(str, Enum):
	INFIX = "infix"
	PREFIX = "prefix"
	POSTFIX = "postfix"


class RelationKind(str, Enum):
	HIGHER_THAN = "higherThan"
	LOWER_THAN = "lowerThan"


@dataclass(frozen=True)
class PrecedenceRelation:
	"""A `higherThan:`/`lowerThan:` reference to another group, by name."""

	kind: RelationKind
	group_name: str
	loc: Span = field(default_factory=Span, compare=False)


@dataclass(frozen=True)
class PrecedenceGroup:
	"""
	A named precedence group.

	`relations` keeps declaration order; targets are plain names and may refer
	to groups that were never declared (reported when a comparison walks them).
	"""

	name: str
	associativity: Associativity = Associativity.NONE
	relations: Tuple[PrecedenceRelation, ...] = ()
	# Declared data only; folding does not look at it.
	assignment: bool = False
	loc: Span = field(default_factory=Span, compare=False)

	@classmethod
	def declare(
		cls,
		name: str,
		associativity: Associativity | str = Associativity.NONE,
		*,
		higher_than: Iterable[str] = (),
		lower_than: Iterable[str] = (),
		assignment: bool = False,
		loc: Optional[Span] = None,
	) -> "PrecedenceGroup":
		"""Convenience constructor used by presets and tests."""
		relations = tuple(
			[PrecedenceRelation(RelationKind.HIGHER_THAN, n, loc or Span()) for n in higher_than]
			+ [PrecedenceRelation(RelationKind.LOWER_THAN, n, loc or Span()) for n in lower_than]
		)
		return cls(
			name=name,
			associativity=Associativity(associativity),
			relations=relations,
			assignment=assignment,
			loc=loc or Span(),
		)

	@property
	def higher_than(self) -> Tuple[PrecedenceRelation, ...]:
		return tuple(r for r in self.relations if r.kind is RelationKind.HIGHER_THAN)

	@property
	def lower_than(self) -> Tuple[PrecedenceRelation, ...]:
		return tuple(r for r in self.relations if r.kind is RelationKind.LOWER_THAN)


@dataclass(frozen=True)
class Operator:
	"""An operator declaration; `group_name` is None when no group was given."""

	name: str
	fixity: Fixity = Fixity.INFIX
	group_name: Optional[str] = None
	loc: Span = field(default_factory=Span, compare=False)

	@property
	def key(self) -> Tuple[str, Fixity]:
		return (self.name, self.fixity)


# Operators declared without a group, and operators that could not be resolved
# during folding, fold in this group. It is never stored in a registry and
# orders below every declared group.
DEFAULT_GROUP = PrecedenceGroup(name="<default>", associativity=Associativity.LEFT)


Declaration = PrecedenceGroup | Operator


__all__ = [
	"Associativity",
	"Fixity",
	"RelationKind",
	"PrecedenceRelation",
	"PrecedenceGroup",
	"Operator",
	"DEFAULT_GROUP",
	"Declaration",
]
