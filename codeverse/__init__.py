"""Codeverse: turns a source repository into a file dependency graph.

Modules:
- fs_scan.py: Directory traversal with ignore rules and file loading.
- deps.py: Lexical extraction of relative import/require specifiers.
- classify.py: Language detection, role rules and per-file summaries.
- ai_classify.py: Optional hosted-model classifier and error explainer.
- graph.py: Specifier resolution and link construction.
- summarize.py: Project-level summary.
- pipeline.py: End-to-end analysis of one directory.
- repo_fetch.py: Temporary GitHub checkouts.
- model.py: Data structures for nodes, links and the analysis result.
"""

__all__ = [
	"fs_scan",
	"deps",
	"classify",
	"ai_classify",
	"graph",
	"summarize",
	"pipeline",
	"repo_fetch",
	"model",
]
