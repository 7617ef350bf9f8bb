# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Reference front end for operator declarations and unfolded expressions.

Only used by the CLI and tests; the folding core accepts declarations and
SequenceExpr nodes from any producer.
"""

from .parser import parse_expr, parse_path, parse_source

__all__ = ["parse_source", "parse_path", "parse_expr"]
