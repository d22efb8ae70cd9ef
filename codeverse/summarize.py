from __future__ import annotations

import os
from typing import List, Sequence

from .model import Node, ProjectSummary


def _distinct(values: Sequence[str]) -> List[str]:
	return list(dict.fromkeys(values))


def summarize_project(nodes: Sequence[Node], root: str) -> ProjectSummary:
	name = os.path.basename(os.path.abspath(root))
	languages = _distinct([n.language for n in nodes])
	roles = _distinct([n.role for n in nodes])
	return ProjectSummary(
		project_name=name,
		project_summary=f"{name} project with {len(nodes)} files using {', '.join(languages)}",
		architecture=f"Multi-file project with {', '.join(roles)} components",
		file_count=len(nodes),
		languages=languages,
		roles=roles,
	)
