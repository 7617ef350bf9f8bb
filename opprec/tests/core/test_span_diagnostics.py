# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from opprec.core.diagnostics import Diagnostic, diag_to_json
from opprec.core.span import Span
from opprec.errors import IncomparableOperators, MissingGroup, Outcome
from opprec.syntax import BinaryOperatorExpr


def test_span_str() -> None:
	assert str(Span()) == "<input>"
	assert str(Span(file="a.txt", line=3)) == "a.txt:3"
	assert str(Span(file="a.txt", line=3, column=7)) == "a.txt:3:7"
	assert str(Span(line=1, column=2)) == "<input>:1:2"


def test_span_from_loc() -> None:
	class _Token:
		line = 4
		column = 9
		end_line = 4
		end_column = 11

	span = Span.from_loc(_Token(), file="t.txt")
	assert span == Span("t.txt", 4, 9, 4, 11)
	assert span.known
	assert Span.from_loc(span) is span
	assert not Span.from_loc(None).known


def test_error_to_diagnostic() -> None:
	left = BinaryOperatorExpr("++", loc=Span("f.txt", 1, 3))
	right = BinaryOperatorExpr("-", loc=Span("f.txt", 1, 8))
	err = IncomparableOperators(left, "D", right, "A")
	diag = err.to_diagnostic()

	assert diag.code == "incomparableOperators"
	assert diag.phase == "fold"
	assert diag.span == right.loc
	assert diag.format_human() == (
		"f.txt:1:8: error: adjacent operators are in unordered precedence groups 'D' and 'A'\n"
		"f.txt:1:8: note: left operator '++' at f.txt:1:3"
	)


def test_diag_to_json() -> None:
	diag = MissingGroup("B", Span(None, 8, 14)).to_diagnostic()
	assert diag_to_json(diag, source="decls.txt") == {
		"phase": "fold",
		"code": "missingGroup",
		"message": "unknown precedence group 'B'",
		"severity": "error",
		"file": "decls.txt",
		"line": 8,
		"column": 14,
		"notes": [],
	}


def test_diagnostic_without_span() -> None:
	diag = Diagnostic(message="boom", span=None)  # type: ignore[arg-type]
	assert diag.span == Span()
	assert diag.format_human() == "<input>: error: boom"


def test_outcome_unwrap() -> None:
	assert Outcome(3).unwrap() == 3
	err = MissingGroup("X")
	outcome = Outcome(None, (err,))
	assert not outcome.ok
	try:
		outcome.unwrap()
	except MissingGroup as exc:
		assert exc is err
	else:
		raise AssertionError("unwrap did not raise")
