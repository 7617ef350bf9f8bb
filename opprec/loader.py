# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Declaration loader: feeds precedence groups and operators into a registry.

Loading never stops early. A duplicate group or operator is reported through
the error handler and skipped (the first definition stays), then the next
declaration is processed. With the default fail-fast handler the first
duplicate is raised instead, after everything before it has been recorded.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from opprec.errors import (
	ErrorHandler,
	GroupAlreadyExists,
	OperatorAlreadyExists,
	Outcome,
	collecting,
	handler_or_raise,
)
from opprec.precedence import Declaration, Operator, PrecedenceGroup
from opprec.registry import PrecedenceRegistry
from opprec.syntax import SourceFile

logger = logging.getLogger(__name__)


def _declarations(source: SourceFile | Iterable[object]) -> Iterable[object]:
	if isinstance(source, SourceFile):
		return source.items
	return source


def add_source_file(
	registry: PrecedenceRegistry,
	source: SourceFile | Iterable[Declaration],
	on_error: Optional[ErrorHandler] = None,
) -> None:
	"""
	Record every group and operator declaration of `source` in `registry`.

	`source` is a parsed SourceFile or any iterable of declarations; items that
	are not declarations (expression statements) are ignored.
	"""
	handler = handler_or_raise(on_error)
	added = 0
	for decl in _declarations(source):
		if isinstance(decl, PrecedenceGroup):
			existing_group = registry.record_group(decl)
			if existing_group is not None:
				logger.debug("duplicate precedence group %s skipped", decl.name)
				handler(GroupAlreadyExists(existing=existing_group, new=decl))
				continue
		elif isinstance(decl, Operator):
			existing_op = registry.record_operator(decl)
			if existing_op is not None:
				logger.debug("duplicate %s operator %s skipped", decl.fixity.value, decl.name)
				handler(OperatorAlreadyExists(existing=existing_op, new=decl))
				continue
		else:
			continue
		added += 1
	logger.debug("loaded %d declarations (%d groups, %d operators total)", added, len(registry), len(registry.operators))


def add_source_file_collect(
	registry: PrecedenceRegistry,
	source: SourceFile | Iterable[Declaration],
) -> Outcome[PrecedenceRegistry]:
	"""Accumulate-all variant of `add_source_file`; never raises."""
	errors, handler = collecting()
	add_source_file(registry, source, handler)
	return Outcome(registry, tuple(errors))


__all__ = ["add_source_file", "add_source_file_collect"]
