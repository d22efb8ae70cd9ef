from __future__ import annotations

import re
from typing import Dict, List

# `import x from '...'`, `import '...'`, `export { x } from '...'`.
# Clause tokens are whitespace-separated runs, so each whitespace run has a single match.
IMPORT_PATTERN = re.compile(r"""\b(?:import|export)(?:(?:\s+[\w*{},]+)*?\s+from)?\s*['"]([^'"]+)['"]""")

# `require('...')`
REQUIRE_PATTERN = re.compile(r"""\brequire\s*\(\s*['"]([^'"]+)['"]\s*\)""")


def is_local_specifier(specifier: str) -> bool:
	return specifier.startswith((".", "/"))


def extract_dependencies(content: str) -> List[str]:
	"""Return relative/absolute import specifiers found in content, first occurrence first.

	Bare package names are dropped. This is a lexical scan, so specifiers in
	comments or strings are picked up and computed imports are missed.
	"""
	found: Dict[str, None] = {}
	for pattern in (IMPORT_PATTERN, REQUIRE_PATTERN):
		for match in pattern.finditer(content):
			specifier = match.group(1)
			if is_local_specifier(specifier):
				found.setdefault(specifier, None)
	return list(found)
