# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
OperatorPrecedence: one object bundling the registry, loader, resolver and folder.

Typical use:

	prec = OperatorPrecedence.standard_operators()
	prec.add_source_file(parse_source(decls_text))
	tree = prec.fold_all(parse_source(program_text))

Every operation that reports errors has two shapes: pass nothing and the first
error is raised; call the `*_collect` variant (or pass `on_error`) and every
error is delivered while a best-effort result is still produced.
"""

from __future__ import annotations

from typing import Iterable, Optional, TypeVar

from opprec import loader
from opprec.errors import ErrorHandler, Outcome
from opprec.folding import SequenceFolder
from opprec.graph import Precedence, PrecedenceGraph
from opprec.precedence import Declaration, Fixity, Operator, PrecedenceGroup
from opprec.registry import PrecedenceRegistry
from opprec.standard import LOGICAL_DECLARATIONS, STANDARD_DECLARATIONS
from opprec.syntax import Expr, Node, SequenceExpr, SourceFile

N = TypeVar("N", bound=Node)


class OperatorPrecedence:
	def __init__(self, registry: Optional[PrecedenceRegistry] = None) -> None:
		self.registry = registry if registry is not None else PrecedenceRegistry()
		self.graph = PrecedenceGraph(self.registry)
		self.folder = SequenceFolder(self.registry, self.graph)

	@classmethod
	def from_declarations(cls, declarations: Iterable[Declaration]) -> "OperatorPrecedence":
		"""Build from trusted declarations; a duplicate raises."""
		prec = cls()
		prec.add_source_file(declarations)
		return prec

	@classmethod
	def logical_operators(cls) -> "OperatorPrecedence":
		return cls.from_declarations(LOGICAL_DECLARATIONS)

	@classmethod
	def standard_operators(cls) -> "OperatorPrecedence":
		return cls.from_declarations(STANDARD_DECLARATIONS)

	def copy(self) -> "OperatorPrecedence":
		return OperatorPrecedence(self.registry.copy())

	# --- declarations --------------------------------------------------

	def add_source_file(
		self,
		source: SourceFile | Iterable[Declaration],
		on_error: Optional[ErrorHandler] = None,
	) -> None:
		loader.add_source_file(self.registry, source, on_error)

	def add_source_file_collect(self, source: SourceFile | Iterable[Declaration]) -> Outcome[None]:
		outcome = loader.add_source_file_collect(self.registry, source)
		return Outcome(None, outcome.errors)

	def lookup_group(self, name: str) -> Optional[PrecedenceGroup]:
		return self.registry.lookup_group(name)

	def lookup_operator(self, name: str, fixity: Fixity = Fixity.INFIX) -> Optional[Operator]:
		return self.registry.lookup_operator(name, fixity)

	# --- comparisons ---------------------------------------------------

	def compare(self, a: str, b: str, on_error: Optional[ErrorHandler] = None) -> Precedence:
		"""Relate two groups by name."""
		return self.graph.compare_names(a, b, on_error)

	# --- folding -------------------------------------------------------

	def fold_single(self, seq: SequenceExpr, on_error: Optional[ErrorHandler] = None) -> Expr:
		return self.folder.fold_single(seq, on_error)

	def fold_single_collect(self, seq: SequenceExpr) -> Outcome[Expr]:
		return self.folder.fold_single_collect(seq)

	def fold_all(self, root: N, on_error: Optional[ErrorHandler] = None) -> N:
		return self.folder.fold_all(root, on_error)

	def fold_all_collect(self, root: N) -> Outcome[N]:
		return self.folder.fold_all_collect(root)


__all__ = ["OperatorPrecedence"]
