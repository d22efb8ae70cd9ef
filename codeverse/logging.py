"""Logging helpers for the codeverse analyzer and service."""

from __future__ import annotations

import logging
from typing import Optional

_LOGGER_NAME = "codeverse"


def get_logger(name: Optional[str] = None) -> logging.Logger:
	full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
	return logging.getLogger(full_name)


def configure_logging(level: str = "INFO", *, verbose: bool = False) -> logging.Logger:
	"""Attach a single console handler to the codeverse logger."""
	resolved = logging.DEBUG if verbose else getattr(logging, level.upper(), logging.INFO)
	logger = logging.getLogger(_LOGGER_NAME)
	logger.setLevel(resolved)
	logger.propagate = False

	# Repeated CLI or app start-up must not stack handlers.
	for handler in list(logger.handlers):
		logger.removeHandler(handler)

	handler = logging.StreamHandler()
	handler.setLevel(resolved)
	handler.setFormatter(logging.Formatter("[codeverse] %(levelname)s %(message)s"))
	logger.addHandler(handler)
	return logger


__all__ = ["configure_logging", "get_logger"]
