"""Hosted-model classification backed by the OpenAI chat completions API.

`AIClassifier` honours the same `classify(path, content)` contract as
`HeuristicClassifier` and falls back to it whenever the model call or its
JSON response cannot be used.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional, Sequence

from openai import OpenAI, OpenAIError

from .classify import OTHER, ROLES, Classifier, HeuristicClassifier, UNKNOWN_LANGUAGE
from .config import Settings
from .exceptions import AIUnavailableError
from .logging import get_logger
from .model import Classification, ErrorExplanation

logger = get_logger("ai_classify")

FILE_SYSTEM_PROMPT = (
	"You are a code analysis expert. Analyze code files and provide structured insights. "
	"Always respond with valid JSON only."
)

FILE_PROMPT = """Analyze this code file and provide a JSON response with the following structure:
{{
  "language": "The programming language (e.g., JavaScript, Python, TypeScript)",
  "role": "Pick ONE from: {roles}",
  "summary": "A concise one-sentence summary (max 15 words) of what this file does",
  "keyFunctions": "Brief list of 2-3 main functions/exports (if applicable)",
  "complexity": "Rate as: Simple, Moderate, or Complex",
  "insights": "One brief insight about code quality, patterns, or potential improvements (optional, 1 sentence)"
}}

File: {path}

Code:
```
{code}
```

Return ONLY valid JSON, no other text."""

ERROR_SYSTEM_PROMPT = "You are a debugging expert. Analyze error traces and identify relevant files."

ERROR_PROMPT = """Analyze this error stack trace and identify which files are likely involved.

Error:
```
{trace}
```

Available files in project:
{files}

Provide JSON response:
{{
  "errorType": "Type of error (e.g., Runtime Error, Type Error)",
  "likelyFiles": ["array", "of", "file", "paths"],
  "explanation": "Brief explanation of what might be causing this error",
  "suggestions": "Suggested fix or where to look"
}}"""


def _complete_json(client: Any, model: str, system: str, prompt: str, *, temperature: float, max_tokens: int) -> Dict[str, Any]:
	completion = client.chat.completions.create(
		model=model,
		messages=[
			{"role": "system", "content": system},
			{"role": "user", "content": prompt},
		],
		temperature=temperature,
		max_tokens=max_tokens,
		response_format={"type": "json_object"},
	)
	data = json.loads(completion.choices[0].message.content.strip())
	if not isinstance(data, dict):
		raise ValueError("model response is not a JSON object")
	return data


def _optional_text(value: Any) -> Optional[str]:
	if value is None or value == "":
		return None
	if isinstance(value, (list, tuple)):
		return ", ".join(str(v) for v in value)
	return str(value)


class AIClassifier:
	def __init__(
		self,
		client: Any,
		model: str = "gpt-4o-mini",
		fallback: Optional[Classifier] = None,
		max_chars: int = 3000,
	) -> None:
		self.client = client
		self.model = model
		self.fallback = fallback or HeuristicClassifier()
		self.max_chars = max_chars

	def classify(self, path: str, content: Optional[str]) -> Classification:
		if content is None:
			return self.fallback.classify(path, content)
		prompt = FILE_PROMPT.format(roles=", ".join(ROLES), path=path, code=content[: self.max_chars])
		try:
			data = _complete_json(
				self.client, self.model, FILE_SYSTEM_PROMPT, prompt, temperature=0.3, max_tokens=300
			)
		except (OpenAIError, ValueError, KeyError, IndexError, AttributeError) as e:
			logger.warning("AI analysis error for %s: %s", path, e)
			return self.fallback.classify(path, content)

		role = data.get("role") or OTHER
		return Classification(
			language=_optional_text(data.get("language")) or UNKNOWN_LANGUAGE,
			role=role if role in ROLES else OTHER,
			summary=_optional_text(data.get("summary")) or "Code file",
			key_functions=_optional_text(data.get("keyFunctions")),
			complexity=_optional_text(data.get("complexity")) or "Unknown",
			insights=_optional_text(data.get("insights")),
		)


def make_client(settings: Settings) -> Optional[OpenAI]:
	if not settings.ai_available:
		return None
	return OpenAI(api_key=settings.openai_api_key)


def build_classifier(settings: Settings, client: Any = None) -> Classifier:
	heuristic = HeuristicClassifier()
	if not settings.use_ai:
		return heuristic
	client = client or make_client(settings)
	if client is None:
		logger.info("AI analysis requested but OPENAI_API_KEY is not set; using heuristics")
		return heuristic
	return AIClassifier(client, settings.ai_model, fallback=heuristic, max_chars=settings.ai_max_chars)


def explain_error(client: Any, model: str, error_trace: str, file_paths: Sequence[str]) -> ErrorExplanation:
	if client is None:
		raise AIUnavailableError("OpenAI API key not configured")
	prompt = ERROR_PROMPT.format(trace=error_trace, files="\n".join(file_paths))
	try:
		data = _complete_json(client, model, ERROR_SYSTEM_PROMPT, prompt, temperature=0.3, max_tokens=400)
		likely = data.get("likelyFiles") or []
		if isinstance(likely, str):
			likely = [likely]
		return ErrorExplanation(
			error_type=_optional_text(data.get("errorType")) or "Unknown",
			likely_files=[str(p) for p in likely],
			explanation=_optional_text(data.get("explanation")) or "",
			suggestions=_optional_text(data.get("suggestions")) or "",
		)
	except (OpenAIError, ValueError, KeyError, IndexError, AttributeError) as e:
		logger.error("Error explanation failed: %s", e)
		raise AIUnavailableError(str(e)) from e
