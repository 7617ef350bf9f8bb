# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Precedence graph resolver.

Groups form a directed graph where an edge X -> Y means "X binds tighter than
Y". Edges come from two kinds of declarations:

  precedencegroup X { higherThan: Y }   ->  X -> Y  (owned by X)
  precedencegroup Y { lowerThan: X }    ->  X -> Y  (owned by Y)

Declared order is a partial order, not a table. Two groups with no path
between them are `UNORDERED`, and that answer is always given back to the
caller; the resolver never invents an order for unrelated groups.

`compare(a, b)` answers:

  EQUAL      a and b are the same group
  HIGHER     a path a -> b exists (found walking down from a)
  LOWER      a path b -> a exists (found walking up from a)
  UNORDERED  neither

Walking down from a group follows its own `higherThan` relations and the
groups that declared `lowerThan` it; walking up is the mirror image. A relation
that names an undeclared group reports `MissingGroup` and is a dead end; the
walk continues through the remaining edges. Visited names are tracked per walk,
so cycles terminate and each missing name is reported at most once per walk.

The implicit default group is below every declared group.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterator, List, Optional, Set, Tuple

from opprec.core.span import Span
from opprec.errors import ErrorHandler, MissingGroup, Outcome, collecting, handler_or_raise
from opprec.precedence import DEFAULT_GROUP, PrecedenceGroup
from opprec.registry import PrecedenceRegistry


class Precedence(str, Enum):
	HIGHER = "higher"
	LOWER = "lower"
	EQUAL = "equal"
	UNORDERED = "unordered"


class PrecedenceGraph:
	"""Read-only view of a registry answering group-vs-group questions."""

	def __init__(self, registry: PrecedenceRegistry) -> None:
		self.registry = registry

	def compare(
		self,
		a: PrecedenceGroup,
		b: PrecedenceGroup,
		on_error: Optional[ErrorHandler] = None,
	) -> Precedence:
		"""Relate group `a` to group `b`; see the module docstring."""
		handler = handler_or_raise(on_error)
		if a is b:
			return Precedence.EQUAL
		if a is DEFAULT_GROUP:
			return Precedence.LOWER
		if b is DEFAULT_GROUP:
			return Precedence.HIGHER
		if a.name == b.name:
			return Precedence.EQUAL
		if self._reaches(a, b.name, downward=True, on_error=handler):
			return Precedence.HIGHER
		if self._reaches(a, b.name, downward=False, on_error=handler):
			return Precedence.LOWER
		return Precedence.UNORDERED

	def compare_collect(self, a: PrecedenceGroup, b: PrecedenceGroup) -> Outcome[Precedence]:
		errors, handler = collecting()
		result = self.compare(a, b, handler)
		return Outcome(result, tuple(errors))

	def compare_names(
		self,
		a: str,
		b: str,
		on_error: Optional[ErrorHandler] = None,
	) -> Precedence:
		"""
		Relate two groups given by name.

		A name that is not declared is reported as missing and the result is
		UNORDERED unless both names are the same.
		"""
		handler = handler_or_raise(on_error)
		if a == b:
			return Precedence.EQUAL
		group_a = self.registry.lookup_group(a)
		group_b = self.registry.lookup_group(b)
		if group_a is None:
			handler(MissingGroup(a))
		if group_b is None:
			handler(MissingGroup(b))
		if group_a is None or group_b is None:
			return Precedence.UNORDERED
		return self.compare(group_a, group_b, handler)

	def _edges(self, group: PrecedenceGroup, downward: bool) -> Iterator[Tuple[str, Span]]:
		if downward:
			for rel in group.higher_than:
				yield rel.group_name, rel.loc
			for other in self.registry.groups_lower_than(group.name):
				yield other.name, other.loc
		else:
			for rel in group.lower_than:
				yield rel.group_name, rel.loc
			for other in self.registry.groups_higher_than(group.name):
				yield other.name, other.loc

	def _reaches(
		self,
		start: PrecedenceGroup,
		target: str,
		*,
		downward: bool,
		on_error: ErrorHandler,
	) -> bool:
		seen: Set[str] = {start.name}
		stack: List[PrecedenceGroup] = [start]
		while stack:
			current = stack.pop()
			for name, loc in self._edges(current, downward):
				if name in seen:
					continue
				seen.add(name)
				if name == target:
					return True
				nxt = self.registry.lookup_group(name)
				if nxt is None:
					on_error(MissingGroup(name, loc))
					continue
				stack.append(nxt)
		return False


__all__ = ["Precedence", "PrecedenceGraph"]
