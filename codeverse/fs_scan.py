from __future__ import annotations

import os
from typing import AbstractSet, Iterable, List, Optional

from .config import DEFAULT_IGNORE_DIRS, DEFAULT_IGNORE_FILES
from .logging import get_logger
from .model import FileRecord

logger = get_logger("fs_scan")


def to_relative_path(root: str, path: str) -> str:
	return os.path.relpath(path, root).replace(os.sep, "/")


def display_path(path: str) -> str:
	"""Printable form of a filesystem path; undecodable bytes become U+FFFD."""
	return os.fsencode(path).decode("utf-8", "replace")


def walk_repository(
	root: str,
	ignore_dirs: AbstractSet[str] = DEFAULT_IGNORE_DIRS,
	ignore_files: AbstractSet[str] = DEFAULT_IGNORE_FILES,
) -> List[str]:
	"""Return root-relative paths of every file under root, in lexical order."""

	def _on_error(error: OSError) -> None:
		logger.warning("Error reading directory %s: %s", display_path(error.filename or ""), error.strerror or error)

	paths: List[str] = []
	for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
		dirnames[:] = sorted(d for d in dirnames if d not in ignore_dirs)
		for filename in sorted(filenames):
			if filename in ignore_files:
				continue
			paths.append(to_relative_path(root, os.path.join(dirpath, filename)))
	return paths


def read_file(path: str) -> Optional[str]:
	try:
		with open(path, "r", encoding="utf-8", errors="replace") as fh:
			return fh.read()
	except OSError as e:
		logger.warning("Error reading file %s: %s", display_path(path), e.strerror or e)
		return None


def load_files(root: str, rel_paths: Iterable[str]) -> List[FileRecord]:
	records: List[FileRecord] = []
	for rel_path in rel_paths:
		content = read_file(os.path.join(root, *rel_path.split("/")))
		if content is not None:
			# Records carry the printable path; the raw one is only needed for reading.
			records.append(FileRecord(path=display_path(rel_path), content=content))
	return records
