from __future__ import annotations

import posixpath
from typing import Iterable, List, Optional, Sequence

from .model import Link, Node


RESOLVE_EXTENSIONS: Sequence[str] = (".js", ".jsx", ".ts", ".tsx")
INDEX_FILES: Sequence[str] = tuple(f"index{ext}" for ext in RESOLVE_EXTENSIONS)


def normalize_specifier(source_path: str, specifier: str) -> str:
	"""Resolve specifier against the directory of source_path and collapse . and .. segments."""
	base_dir = posixpath.dirname(source_path) or "."
	# A leading "/" is taken relative to the importing file's directory, not the filesystem root.
	return posixpath.normpath(f"{base_dir}/{specifier}")


def candidate_paths(normalized: str) -> List[str]:
	candidates = [normalized]
	candidates.extend(normalized + ext for ext in RESOLVE_EXTENSIONS)
	candidates.extend(posixpath.normpath(posixpath.join(normalized, index)) for index in INDEX_FILES)
	return candidates


class DependencyResolver:
	"""Maps raw import specifiers onto known file paths."""

	def __init__(self, known_paths: Iterable[str]):
		self.known = set(known_paths)
		self._ordered = sorted(self.known)

	def resolve(self, source_path: str, specifier: str) -> Optional[str]:
		normalized = normalize_specifier(source_path, specifier)
		for candidate in candidate_paths(normalized):
			if candidate in self.known:
				return candidate
		# Loose fallback: either string is a suffix of the other; first in sorted order wins.
		for path in self._ordered:
			if path.endswith(normalized) or normalized.endswith(path):
				return path
		return None


def build_links(nodes: Sequence[Node]) -> List[Link]:
	resolver = DependencyResolver(node.path for node in nodes)
	links: List[Link] = []
	for node in nodes:
		for specifier in node.dependencies:
			target = resolver.resolve(node.path, specifier)
			if target is not None and target != node.id:
				links.append(Link(source=node.id, target=target))
	return links
