# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""structlog configuration for the opprec command line.

Two output modes, both routed to stderr so folded output on stdout stays clean:
- Human (default): console renderer, colored when stderr is a terminal
- JSON (--log-json): one JSON object per line

Library modules only call `structlog.get_logger(__name__)`; nothing is
configured until an entry point calls `configure_logging`.
"""

from __future__ import annotations

import logging
import sys

import structlog


def configure_logging(
	*,
	verbose: bool = False,
	log_json: bool = False,
) -> None:
	"""Configure structlog processors and output routing.

	Args:
	  verbose: enable DEBUG-level output for the `opprec` loggers; WARNING otherwise.
	  log_json: use the JSON renderer instead of the console renderer.
	"""
	level = logging.DEBUG if verbose else logging.WARNING

	shared_processors: list[structlog.types.Processor] = [
		structlog.contextvars.merge_contextvars,
		structlog.stdlib.add_log_level,
		structlog.stdlib.add_logger_name,
		structlog.processors.TimeStamper(fmt="iso"),
		structlog.processors.StackInfoRenderer(),
		structlog.processors.UnicodeDecoder(),
	]

	if log_json:
		renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
	else:
		renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

	structlog.configure(
		processors=[
			*shared_processors,
			structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
		],
		logger_factory=structlog.stdlib.LoggerFactory(),
		wrapper_class=structlog.stdlib.BoundLogger,
		cache_logger_on_first_use=False,
	)

	formatter = structlog.stdlib.ProcessorFormatter(
		foreign_pre_chain=shared_processors,
		processors=[
			structlog.stdlib.ProcessorFormatter.remove_processors_meta,
			renderer,
		],
	)

	handler = logging.StreamHandler(sys.stderr)
	handler.setFormatter(formatter)

	root_logger = logging.getLogger()
	root_logger.handlers.clear()
	root_logger.addHandler(handler)
	root_logger.setLevel(logging.WARNING)

	logging.getLogger("opprec").setLevel(level)
	logging.getLogger("lark").setLevel(logging.WARNING)


__all__ = ["configure_logging"]
