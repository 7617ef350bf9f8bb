# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
`opprec` command: load operator declarations, fold expressions, print results.

	opprec program.ops
	opprec --preset logical -e "x && y || w"
	opprec --decls custom.ops --parenthesize --json program.ops

Declarations in a source file are loaded before the file's expressions are
folded. Diagnostics go to stderr (or into the JSON payload with --json).
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import structlog
from lark.exceptions import UnexpectedInput

from opprec.core.diagnostics import Diagnostic, diag_to_json
from opprec.core.logging import configure_logging
from opprec.core.span import Span
from opprec.errors import OperatorPrecedenceError
from opprec.operator_precedence import OperatorPrecedence
from opprec.parser import parse_source
from opprec.syntax import ExprStmt, SourceFile, render, render_parenthesized

logger = structlog.get_logger(__name__)

EXIT_OK = 0
EXIT_ERRORS = 1
EXIT_USAGE = 2

_PRESETS = {
	"standard": OperatorPrecedence.standard_operators,
	"logical": OperatorPrecedence.logical_operators,
	"none": OperatorPrecedence,
}


class _FailFast(Exception):
	"""Stops the run at the first precedence error under --fail-fast."""

	def __init__(self, diagnostic: Diagnostic) -> None:
		super().__init__(diagnostic.message)
		self.diagnostic = diagnostic


@dataclass
class _Run:
	prec: OperatorPrecedence
	fail_fast: bool
	parenthesize: bool
	diagnostics: List[Diagnostic] = field(default_factory=list)
	results: List[Dict[str, Any]] = field(default_factory=list)

	def report(self, error: OperatorPrecedenceError) -> None:
		diag = error.to_diagnostic()
		self.diagnostics.append(diag)
		if self.fail_fast:
			raise _FailFast(diag)

	def load(self, source: SourceFile) -> None:
		self.prec.add_source_file(source, self.report)

	def fold(self, source: SourceFile) -> None:
		for stmt in source.statements:
			folded = self.prec.fold_all(stmt, self.report)
			assert isinstance(folded, ExprStmt)
			text = render_parenthesized(folded) if self.parenthesize else render(folded)
			self.results.append(
				{
					"file": source.file,
					"line": stmt.loc.line,
					"source": render(stmt),
					"folded": text,
				}
			)


def _parse_error_diagnostic(exc: UnexpectedInput, file: str) -> Diagnostic:
	line = getattr(exc, "line", None)
	column = getattr(exc, "column", None)
	return Diagnostic(
		message=f"parse error: {str(exc).splitlines()[0]}",
		code="parseError",
		phase="parser",
		span=Span(file=file, line=line if line and line > 0 else None, column=column if column and column > 0 else None),
	)


def _emit(run: _Run, args: argparse.Namespace, exit_code: int) -> int:
	if args.json:
		payload = {
			"exit_code": exit_code,
			"results": run.results,
			"diagnostics": [diag_to_json(d) for d in run.diagnostics],
		}
		print(json.dumps(payload))
		return exit_code
	for result in run.results:
		print(result["folded"])
	for diag in run.diagnostics:
		print(diag.format_human(), file=sys.stderr)
	return exit_code


def build_arg_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(
		prog="opprec",
		description="Fold flat operator sequences using declared precedence groups",
	)
	parser.add_argument("source", type=Path, nargs="*", help="Source file(s) with declarations and expressions")
	parser.add_argument(
		"-e",
		"--expr",
		dest="exprs",
		action="append",
		default=[],
		help="Inline source to fold (repeatable); folded after all files",
	)
	parser.add_argument(
		"--preset",
		choices=sorted(_PRESETS),
		default="standard",
		help="Built-in declarations to start from (default: standard)",
	)
	parser.add_argument(
		"--decls",
		dest="decls",
		action="append",
		type=Path,
		default=[],
		help="Declaration file loaded before any source (repeatable); expressions in it are ignored",
	)
	parser.add_argument(
		"--fail-fast",
		action="store_true",
		help="Stop at the first precedence error instead of reporting all of them",
	)
	parser.add_argument(
		"--parenthesize",
		action="store_true",
		help="Print every folded operation wrapped in parentheses",
	)
	parser.add_argument(
		"--json",
		action="store_true",
		help="Emit results and diagnostics as one JSON object on stdout",
	)
	parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging on stderr")
	parser.add_argument("--log-json", action="store_true", help="Emit log records as JSON lines")
	return parser


def main(argv: Optional[List[str]] = None) -> int:
	"""
	Fold every expression found in the given sources.

	Exit codes: 0 when no errors were reported, 1 when precedence errors were
	reported, 2 on usage or parse errors.
	"""
	parser = build_arg_parser()
	args = parser.parse_args(argv)
	configure_logging(verbose=args.verbose, log_json=args.log_json)

	if not args.source and not args.exprs:
		parser.error("nothing to fold: pass a source file or -e EXPR")

	run = _Run(
		prec=_PRESETS[args.preset](),
		fail_fast=args.fail_fast,
		parenthesize=args.parenthesize,
	)

	inputs: List[tuple[str, str, bool]] = []
	try:
		for path in args.decls:
			inputs.append((str(path), path.read_text(), False))
		for path in args.source:
			inputs.append((str(path), path.read_text(), True))
	except OSError as exc:
		run.diagnostics.append(Diagnostic(message=str(exc), code="io", phase="driver"))
		return _emit(run, args, EXIT_USAGE)
	for idx, text in enumerate(args.exprs):
		inputs.append((f"<expr:{idx + 1}>", text, True))

	try:
		for file, text, fold in inputs:
			try:
				source = parse_source(text, file=file)
			except UnexpectedInput as exc:
				run.diagnostics.append(_parse_error_diagnostic(exc, file))
				return _emit(run, args, EXIT_USAGE)
			logger.debug("source parsed", file=file, items=len(source.items))
			run.load(source)
			if fold:
				run.fold(source)
	except _FailFast:
		return _emit(run, args, EXIT_ERRORS)

	return _emit(run, args, EXIT_ERRORS if run.diagnostics else EXIT_OK)


__all__ = ["main", "build_arg_parser"]
