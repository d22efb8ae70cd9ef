"""Heuristic per-file classification: language, architectural role and summary.

Roles are decided by `ROLE_RULES`, an ordered list evaluated top to bottom
where the first matching rule wins. Rules flagged `needs_content` only run when
the file's content could be read.
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Mapping, Optional, Protocol, Sequence, Tuple

from .model import Classification


UI_COMPONENT = "UI Component"
STYLING = "Styling"
API_SERVICE = "API Service"
UTILITY = "Utility"
STATE_MANAGEMENT = "State Management"
ROUTING = "Routing"
CONFIGURATION = "Configuration"
TESTING = "Testing"
DOCUMENTATION = "Documentation"
OTHER = "Other"

ROLES: Tuple[str, ...] = (
	UI_COMPONENT,
	STYLING,
	API_SERVICE,
	UTILITY,
	STATE_MANAGEMENT,
	ROUTING,
	CONFIGURATION,
	TESTING,
	DOCUMENTATION,
	OTHER,
)

UNKNOWN_LANGUAGE = "Unknown"

EXTENSION_LANGUAGE: Mapping[str, str] = MappingProxyType({
	".js": "JavaScript",
	".jsx": "JavaScript",
	".ts": "TypeScript",
	".tsx": "TypeScript",
	".py": "Python",
	".java": "Java",
	".cpp": "C++",
	".c": "C",
	".cs": "C#",
	".go": "Go",
	".rs": "Rust",
	".rb": "Ruby",
	".php": "PHP",
	".swift": "Swift",
	".kt": "Kotlin",
	".css": "CSS",
	".scss": "SCSS",
	".sass": "Sass",
	".html": "HTML",
	".json": "JSON",
	".xml": "XML",
	".yml": "YAML",
	".yaml": "YAML",
	".md": "Markdown",
	".txt": "Text",
	".sh": "Shell",
	".sql": "SQL",
})

SUMMARY_TEMPLATES: Mapping[str, str] = MappingProxyType({
	UI_COMPONENT: "{name} component handles UI rendering and user interactions",
	STYLING: "Defines visual styles and layout for {name}",
	API_SERVICE: "Manages API calls and data fetching for {name}",
	UTILITY: "Provides helper functions and utilities for {name}",
	STATE_MANAGEMENT: "Manages application state for {name}",
	ROUTING: "Handles routing and navigation for {name}",
	CONFIGURATION: "Configuration settings for {name}",
	TESTING: "Test suite for {name} functionality",
	DOCUMENTATION: "Documentation for {name}",
	OTHER: "{language} file: {name}",
})


def detect_language(path: str) -> str:
	_, ext = posixpath.splitext(path)
	return EXTENSION_LANGUAGE.get(ext.lower(), UNKNOWN_LANGUAGE)


def generate_summary(path: str, role: str, language: str) -> str:
	name, _ = posixpath.splitext(posixpath.basename(path))
	template = SUMMARY_TEMPLATES.get(role, SUMMARY_TEMPLATES[OTHER])
	return template.format(name=name, language=language)


@dataclass(frozen=True)
class FileFacts:
	path: str  # root-relative, anchored with a leading "/"
	filename: str  # lower-cased base name
	ext: str  # lower-cased extension including the dot
	content: Optional[str]

	@classmethod
	def from_file(cls, path: str, content: Optional[str]) -> "FileFacts":
		filename = posixpath.basename(path).lower()
		_, ext = posixpath.splitext(filename)
		anchored = path if path.startswith("/") else "/" + path
		return cls(path=anchored, filename=filename, ext=ext, content=content)

	def content_has(self, *needles: str) -> bool:
		return self.content is not None and any(n in self.content for n in needles)

	def path_has(self, *needles: str) -> bool:
		return any(n in self.path for n in needles)

	def filename_has(self, *needles: str) -> bool:
		return any(n in self.filename for n in needles)


@dataclass(frozen=True)
class RoleRule:
	role: str
	matches: Callable[[FileFacts], bool]
	needs_content: bool = False

	def applies(self, facts: FileFacts) -> bool:
		if self.needs_content and facts.content is None:
			return False
		return self.matches(facts)


ROLE_RULES: Tuple[RoleRule, ...] = (
	RoleRule(
		CONFIGURATION,
		lambda f: f.ext in {".json", ".yml", ".yaml", ".toml", ".ini", ".env"} or f.filename_has("config"),
	),
	RoleRule(
		DOCUMENTATION,
		lambda f: f.ext in {".md", ".txt"} or f.filename == "readme",
	),
	RoleRule(
		TESTING,
		lambda f: f.filename_has("test", "spec") or f.path_has("/test/", "/__tests__/"),
	),
	RoleRule(
		STYLING,
		lambda f: f.ext in {".css", ".scss", ".sass", ".less"},
	),
	RoleRule(
		UI_COMPONENT,
		lambda f: f.ext in {".jsx", ".tsx"}
		and f.content_has("export default", "export const", "export function"),
		needs_content=True,
	),
	RoleRule(
		API_SERVICE,
		lambda f: f.content_has("fetch(", "axios", "http.") or f.path_has("/api/", "/service"),
		needs_content=True,
	),
	RoleRule(
		STATE_MANAGEMENT,
		lambda f: f.content_has("reducer", "dispatch", "createStore")
		or f.path_has("/store/", "/redux/", "/state/"),
		needs_content=True,
	),
	RoleRule(
		ROUTING,
		lambda f: f.content_has("Router", "Route") or f.path_has("/route"),
		needs_content=True,
	),
	RoleRule(
		UTILITY,
		lambda f: f.path_has("/util", "/helper") or f.filename_has("util", "helper"),
		needs_content=True,
	),
)


def infer_role(path: str, content: Optional[str], rules: Sequence[RoleRule] = ROLE_RULES) -> str:
	facts = FileFacts.from_file(path, content)
	for rule in rules:
		if rule.applies(facts):
			return rule.role
	return OTHER


class Classifier(Protocol):
	def classify(self, path: str, content: Optional[str]) -> Classification:
		...


class HeuristicClassifier:
	"""Pattern-based classifier needing no external service."""

	def __init__(self, rules: Sequence[RoleRule] = ROLE_RULES) -> None:
		self.rules = tuple(rules)

	def classify(self, path: str, content: Optional[str]) -> Classification:
		language = detect_language(path)
		role = infer_role(path, content, self.rules)
		return Classification(
			language=language,
			role=role,
			summary=generate_summary(path, role, language),
		)
