"""Runtime settings for codeverse.

Every field has a safe default so the analyzer and the service start without
any environment configuration; `Settings.from_env` layers overrides on top.
"""

from __future__ import annotations

import os
import tempfile
from functools import lru_cache
from typing import FrozenSet, Mapping, Optional

from pydantic import BaseModel, ConfigDict

from .logging import get_logger

logger = get_logger("config")


DEFAULT_IGNORE_DIRS: FrozenSet[str] = frozenset(
	{".git", "node_modules", "dist", "build", ".next", "coverage", "temp", ".vercel", "__pycache__"}
)
DEFAULT_IGNORE_FILES: FrozenSet[str] = frozenset(
	{".DS_Store", "package-lock.json", "yarn.lock", ".gitignore"}
)

_TRUTHY = {"1", "true", "yes", "on"}


def _split_list(value: Optional[str]) -> FrozenSet[str]:
	if not value:
		return frozenset()
	return frozenset(item.strip() for item in value.split(",") if item.strip())


def _positive_int(env: Mapping[str, str], name: str, default: int) -> int:
	raw = env.get(name)
	if raw is None or not raw.strip():
		return default
	try:
		value = int(raw)
	except ValueError:
		value = 0
	if value < 1:
		logger.warning("Ignoring %s=%r: expected a positive integer, using %d", name, raw, default)
		return default
	return value


class Settings(BaseModel):
	model_config = ConfigDict(frozen=True)

	analyzer_id: str = "Codeverse Explorer v1.0"
	ignore_dirs: FrozenSet[str] = DEFAULT_IGNORE_DIRS
	ignore_files: FrozenSet[str] = DEFAULT_IGNORE_FILES
	use_ai: bool = False
	openai_api_key: Optional[str] = None
	ai_model: str = "gpt-4o-mini"
	ai_max_chars: int = 3000
	temp_dir: str = os.path.join(tempfile.gettempdir(), "codeverse")
	clone_depth: int = 1
	log_level: str = "INFO"

	@property
	def ai_available(self) -> bool:
		return bool(self.openai_api_key)

	@classmethod
	def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
		env = os.environ if env is None else env
		defaults = cls()
		return cls(
			analyzer_id=env.get("CODEVERSE_ANALYZER_ID", defaults.analyzer_id),
			ignore_dirs=defaults.ignore_dirs | _split_list(env.get("CODEVERSE_EXTRA_IGNORE_DIRS")),
			ignore_files=defaults.ignore_files | _split_list(env.get("CODEVERSE_EXTRA_IGNORE_FILES")),
			use_ai=env.get("CODEVERSE_USE_AI", "").strip().lower() in _TRUTHY,
			openai_api_key=env.get("OPENAI_API_KEY") or None,
			ai_model=env.get("CODEVERSE_AI_MODEL", defaults.ai_model),
			ai_max_chars=_positive_int(env, "CODEVERSE_AI_MAX_CHARS", defaults.ai_max_chars),
			temp_dir=env.get("CODEVERSE_TEMP_DIR", defaults.temp_dir),
			clone_depth=_positive_int(env, "CODEVERSE_CLONE_DEPTH", defaults.clone_depth),
			log_level=env.get("CODEVERSE_LOG_LEVEL", defaults.log_level).upper(),
		)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
	return Settings.from_env()
