# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Precedence registry: the declared groups and operators, keyed by name.

The registry only grows. Entries are inserted by the declaration loader
(`opprec.loader`), first definition wins, and nothing is ever overwritten or
removed. Once loading is done the registry is read-only: the graph resolver and
the folder only call the lookup methods below, so a finished registry can be
shared by any number of concurrent folds.

Besides the two primary maps the registry keeps reverse relation indexes so
the resolver can walk an edge from either end:

  lower_than_index[X]   groups that declared `lowerThan: X`
  higher_than_index[X]  groups that declared `higherThan: X`
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Tuple

from opprec.precedence import Fixity, Operator, PrecedenceGroup, RelationKind


class PrecedenceRegistry:
	"""Name -> group and (name, fixity) -> operator maps."""

	def __init__(self) -> None:
		self._groups: Dict[str, PrecedenceGroup] = {}
		self._operators: Dict[Tuple[str, Fixity], Operator] = {}
		self._lower_than_index: Dict[str, List[PrecedenceGroup]] = {}
		self._higher_than_index: Dict[str, List[PrecedenceGroup]] = {}

	# --- queries -------------------------------------------------------

	def lookup_group(self, name: str) -> Optional[PrecedenceGroup]:
		return self._groups.get(name)

	def lookup_operator(self, name: str, fixity: Fixity = Fixity.INFIX) -> Optional[Operator]:
		return self._operators.get((name, fixity))

	def groups_lower_than(self, name: str) -> Tuple[PrecedenceGroup, ...]:
		"""Groups that declared `lowerThan: name`, in insertion order."""
		return tuple(self._lower_than_index.get(name, ()))

	def groups_higher_than(self, name: str) -> Tuple[PrecedenceGroup, ...]:
		"""Groups that declared `higherThan: name`, in insertion order."""
		return tuple(self._higher_than_index.get(name, ()))

	@property
	def groups(self) -> Tuple[PrecedenceGroup, ...]:
		return tuple(self._groups.values())

	@property
	def operators(self) -> Tuple[Operator, ...]:
		return tuple(self._operators.values())

	def __contains__(self, name: object) -> bool:
		return name in self._groups

	def __iter__(self) -> Iterator[PrecedenceGroup]:
		return iter(self._groups.values())

	def __len__(self) -> int:
		return len(self._groups)

	# --- insertion (loader only) ---------------------------------------

	def record_group(self, group: PrecedenceGroup) -> Optional[PrecedenceGroup]:
		"""
		Insert `group` unless the name is taken.

		Returns the existing group on a clash (the registry is left untouched),
		None when the group was inserted.
		"""
		existing = self._groups.get(group.name)
		if existing is not None:
			return existing
		self._groups[group.name] = group
		for rel in group.relations:
			index = self._lower_than_index if rel.kind is RelationKind.LOWER_THAN else self._higher_than_index
			index.setdefault(rel.group_name, []).append(group)
		return None

	def record_operator(self, op: Operator) -> Optional[Operator]:
		"""Insert `op` unless (name, fixity) is taken; returns the existing one on a clash."""
		existing = self._operators.get(op.key)
		if existing is not None:
			return existing
		self._operators[op.key] = op
		return None

	def copy(self) -> "PrecedenceRegistry":
		"""Independent registry with the same entries; used to extend presets."""
		other = PrecedenceRegistry()
		other._groups = dict(self._groups)
		other._operators = dict(self._operators)
		other._lower_than_index = {k: list(v) for k, v in self._lower_than_index.items()}
		other._higher_than_index = {k: list(v) for k, v in self._higher_than_index.items()}
		return other


__all__ = ["PrecedenceRegistry"]
