from __future__ import annotations

import logging
import textwrap
from pathlib import Path
from typing import Callable, Mapping

import pytest


@pytest.fixture
def make_repo(tmp_path: Path) -> Callable[[Mapping[str, str]], Path]:
	"""Write `path -> contents` entries into a throwaway repository and return its root."""

	def _make(files: Mapping[str, str], name: str = "repo") -> Path:
		root = tmp_path / name
		root.mkdir(exist_ok=True)
		for relative, content in files.items():
			path = root / relative
			path.parent.mkdir(parents=True, exist_ok=True)
			path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")
		return root

	return _make


@pytest.fixture(autouse=True)
def reset_codeverse_logger():
	yield
	logger = logging.getLogger("codeverse")
	for handler in list(logger.handlers):
		logger.removeHandler(handler)
	logger.propagate = True
	logger.setLevel(logging.NOTSET)
