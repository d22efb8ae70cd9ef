from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
	model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FileRecord(BaseModel):
	model_config = ConfigDict(frozen=True)

	path: str
	content: str


class Classification(CamelModel):
	language: str
	role: str
	summary: str
	key_functions: Optional[str] = None
	complexity: Optional[str] = None
	insights: Optional[str] = None


class Node(CamelModel):
	id: str
	label: str
	path: str
	language: str
	role: str
	summary: str
	dependencies: List[str] = []
	size: int = 1
	content: str = ""
	key_functions: Optional[str] = None
	complexity: Optional[str] = None
	insights: Optional[str] = None


class Link(CamelModel):
	source: str
	target: str


class Graph(CamelModel):
	nodes: List[Node] = []
	links: List[Link] = []


class ProjectSummary(CamelModel):
	project_name: str
	project_summary: str
	architecture: str
	file_count: int
	languages: List[str] = []
	roles: List[str] = []


class AnalysisMeta(CamelModel):
	analyzed_at: str
	analyzer: str
	directory: str


class AnalysisResult(CamelModel):
	meta: AnalysisMeta
	project: ProjectSummary
	graph: Graph

	def to_dict(self) -> Dict[str, object]:
		return self.model_dump(by_alias=True, exclude_none=True)


class ErrorExplanation(CamelModel):
	error_type: str = "Unknown"
	likely_files: List[str] = []
	explanation: str = ""
	suggestions: str = ""
