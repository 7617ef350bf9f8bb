"""
opprec.core: shared primitives used by every component.

Modules:
  - span: source locations attached to declarations, expressions and errors
  - diagnostics: Diagnostic record and its JSON rendering
  - logging: structlog setup for command-line entry points
"""

__all__ = [
    "span",
    "diagnostics",
    "logging",
]
