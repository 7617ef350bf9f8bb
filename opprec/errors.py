# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Errors reported while loading declarations and folding sequences.

The set of error kinds is closed:

  operatorAlreadyExists   duplicate operator declaration; the first one is kept
  groupAlreadyExists      duplicate precedence group; the first one is kept
  missingGroup            a relation or operator names an undeclared group
  missingOperator         an operator used in an expression was never declared
  incomparableOperators   adjacent operators whose groups cannot be ordered

Every operation that can report errors takes an `on_error` handler and keeps
going after reporting: loading processes every declaration, folding always
produces a complete tree. The two public call shapes are derived from that:

- fail-fast: the default handler `raise_error` raises the first error;
- accumulate-all: `collecting()` hands out a handler that appends to a list,
  and the `*_collect` entry points return an `Outcome(value, errors)`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable, ClassVar, Generic, List, Optional, Tuple, TypeVar

from opprec.core.diagnostics import Diagnostic
from opprec.core.span import Span
from opprec.precedence import Operator, PrecedenceGroup

if TYPE_CHECKING:
	from opprec.syntax import BinaryOperatorExpr


class ErrorKind(str, Enum):
	OPERATOR_ALREADY_EXISTS = "operatorAlreadyExists"
	GROUP_ALREADY_EXISTS = "groupAlreadyExists"
	MISSING_GROUP = "missingGroup"
	MISSING_OPERATOR = "missingOperator"
	INCOMPARABLE_OPERATORS = "incomparableOperators"


@dataclass(frozen=True)
class OperatorPrecedenceError(Exception):
	"""Base class of all precedence errors; not raised directly."""

	kind: ClassVar[ErrorKind]
	# Loader errors belong to the "declarations" phase, folder errors to "fold".
	phase: ClassVar[str]

	@property
	def message(self) -> str:
		raise NotImplementedError

	@property
	def span(self) -> Span:
		raise NotImplementedError

	def notes(self) -> List[str]:
		return []

	def __str__(self) -> str:
		return self.message

	def to_diagnostic(self) -> Diagnostic:
		return Diagnostic(
			message=self.message,
			code=self.kind.value,
			phase=self.phase,
			span=self.span,
			notes=self.notes(),
		)


@dataclass(frozen=True)
class OperatorAlreadyExists(OperatorPrecedenceError):
	kind: ClassVar[ErrorKind] = ErrorKind.OPERATOR_ALREADY_EXISTS
	phase: ClassVar[str] = "declarations"

	existing: Operator
	new: Operator

	@property
	def message(self) -> str:
		return f"redefinition of {self.new.fixity.value} operator '{self.new.name}'"

	@property
	def span(self) -> Span:
		return self.new.loc

	def notes(self) -> List[str]:
		if not self.existing.loc.known:
			return []
		return [f"previous definition of '{self.existing.name}' at {self.existing.loc}"]


@dataclass(frozen=True)
class GroupAlreadyExists(OperatorPrecedenceError):
	kind: ClassVar[ErrorKind] = ErrorKind.GROUP_ALREADY_EXISTS
	phase: ClassVar[str] = "declarations"

	existing: PrecedenceGroup
	new: PrecedenceGroup

	@property
	def message(self) -> str:
		return f"redefinition of precedence group '{self.new.name}'"

	@property
	def span(self) -> Span:
		return self.new.loc

	def notes(self) -> List[str]:
		if not self.existing.loc.known:
			return []
		return [f"previous definition of '{self.existing.name}' at {self.existing.loc}"]


@dataclass(frozen=True)
class MissingGroup(OperatorPrecedenceError):
	kind: ClassVar[ErrorKind] = ErrorKind.MISSING_GROUP
	phase: ClassVar[str] = "fold"

	group_name: str
	loc: Span = field(default_factory=Span, compare=False)

	@property
	def message(self) -> str:
		return f"unknown precedence group '{self.group_name}'"

	@property
	def span(self) -> Span:
		return self.loc


@dataclass(frozen=True)
class MissingOperator(OperatorPrecedenceError):
	kind: ClassVar[ErrorKind] = ErrorKind.MISSING_OPERATOR
	phase: ClassVar[str] = "fold"

	operator_name: str
	loc: Span = field(default_factory=Span, compare=False)

	@property
	def message(self) -> str:
		return f"unknown infix operator '{self.operator_name}'"

	@property
	def span(self) -> Span:
		return self.loc


@dataclass(frozen=True)
class IncomparableOperators(OperatorPrecedenceError):
	"""
	Two adjacent operators whose relative order is undefined: either both are
	in the same non-associative group or their groups are unrelated.
	"""

	kind: ClassVar[ErrorKind] = ErrorKind.INCOMPARABLE_OPERATORS
	phase: ClassVar[str] = "fold"

	left_operator: "BinaryOperatorExpr"
	left_group: str
	right_operator: "BinaryOperatorExpr"
	right_group: str

	@property
	def same_group(self) -> bool:
		return self.left_group == self.right_group

	@property
	def message(self) -> str:
		if self.same_group:
			return f"adjacent operators are in non-associative precedence group '{self.left_group}'"
		return (
			f"adjacent operators are in unordered precedence groups "
			f"'{self.left_group}' and '{self.right_group}'"
		)

	@property
	def span(self) -> Span:
		return self.right_operator.loc

	def notes(self) -> List[str]:
		return [f"left operator '{self.left_operator.name}' at {self.left_operator.loc}"]


ErrorHandler = Callable[[OperatorPrecedenceError], None]


def raise_error(error: OperatorPrecedenceError) -> None:
	"""Fail-fast handler: abort the running operation with the first error."""
	raise error


def collecting() -> Tuple[List[OperatorPrecedenceError], ErrorHandler]:
	"""Return a fresh error list and a handler that appends to it."""
	errors: List[OperatorPrecedenceError] = []
	return errors, errors.append


T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
	"""Best-effort result of an accumulate-all call plus every reported error."""

	value: T
	errors: Tuple[OperatorPrecedenceError, ...] = ()

	@property
	def ok(self) -> bool:
		return not self.errors

	def unwrap(self) -> T:
		"""Return the value, raising the first error if there was any."""
		if self.errors:
			raise self.errors[0]
		return self.value


def handler_or_raise(on_error: Optional[ErrorHandler]) -> ErrorHandler:
	return on_error if on_error is not None else raise_error


__all__ = [
	"ErrorKind",
	"OperatorPrecedenceError",
	"OperatorAlreadyExists",
	"GroupAlreadyExists",
	"MissingGroup",
	"MissingOperator",
	"IncomparableOperators",
	"ErrorHandler",
	"raise_error",
	"collecting",
	"handler_or_raise",
	"Outcome",
]
