"""
Diagnostic records produced from precedence errors.

A Diagnostic is the rendering-neutral form of an error: message, severity,
primary span and free-form notes. The CLI prints them either as
`file:line:col: error: message` lines or as JSON objects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .span import Span


@dataclass
class Diagnostic:
	"""Represents a diagnostic (error/warning/etc.) with an optional stable code."""

	message: str
	code: str | None = None
	# Phase that emitted the diagnostic: "parser", "declarations" or "fold".
	phase: str | None = None
	severity: str = "error"
	span: Span = field(default_factory=Span)  # Span() denotes unknown.
	notes: list[str] = field(default_factory=list)

	def __post_init__(self) -> None:
		if self.span is None:  # type: ignore[unreachable]
			self.span = Span()

	def format_human(self) -> str:
		text = f"{self.span}: {self.severity}: {self.message}"
		for note in self.notes:
			text += f"\n{self.span}: note: {note}"
		return text


def diag_to_json(diag: Diagnostic, phase: str | None = None, source: str | None = None) -> dict[str, Any]:
	"""Render a Diagnostic to a structured JSON-friendly dict."""
	return {
		"phase": diag.phase or phase,
		"code": diag.code,
		"message": diag.message,
		"severity": diag.severity,
		"file": diag.span.file or source,
		"line": diag.span.line,
		"column": diag.span.column,
		"notes": list(diag.notes),
	}


__all__ = ["Diagnostic", "diag_to_json"]
