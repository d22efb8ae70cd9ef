from __future__ import annotations

import os
import posixpath
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from .classify import Classifier, HeuristicClassifier
from .config import Settings
from .deps import extract_dependencies
from .fs_scan import display_path, load_files, walk_repository
from .graph import build_links
from .logging import get_logger
from .model import AnalysisMeta, AnalysisResult, FileRecord, Graph, Node
from .summarize import summarize_project

logger = get_logger("pipeline")


def analyze_file(record: FileRecord, classifier: Classifier) -> Node:
	classification = classifier.classify(record.path, record.content)
	dependencies = extract_dependencies(record.content)
	return Node(
		id=record.path,
		label=posixpath.basename(record.path),
		path=record.path,
		language=classification.language,
		role=classification.role,
		summary=classification.summary,
		dependencies=dependencies,
		size=len(dependencies) + 1,
		content=record.content,
		key_functions=classification.key_functions,
		complexity=classification.complexity,
		insights=classification.insights,
	)


def build_nodes(records: Sequence[FileRecord], classifier: Classifier) -> List[Node]:
	return [analyze_file(record, classifier) for record in records]


def _timestamp() -> str:
	return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def analyze_directory(
	root: str,
	classifier: Optional[Classifier] = None,
	settings: Optional[Settings] = None,
) -> AnalysisResult:
	settings = settings or Settings()
	classifier = classifier or HeuristicClassifier()
	root = os.path.abspath(root)
	if not os.path.isdir(root):
		raise FileNotFoundError(f"Not a directory: {root}")

	shown_root = display_path(root)
	logger.info("Analyzing: %s", shown_root)
	paths = walk_repository(root, settings.ignore_dirs, settings.ignore_files)
	logger.info("Found %d files", len(paths))

	records = load_files(root, paths)
	logger.info("Read %d files", len(records))

	# Every node must be classified before any edge is resolved.
	nodes = build_nodes(records, classifier)
	logger.info("Analyzed %d files", len(nodes))

	links = build_links(nodes)
	logger.info("Created %d dependency links", len(links))

	return AnalysisResult(
		meta=AnalysisMeta(analyzed_at=_timestamp(), analyzer=settings.analyzer_id, directory=shown_root),
		project=summarize_project(nodes, shown_root),
		graph=Graph(nodes=nodes, links=links),
	)
