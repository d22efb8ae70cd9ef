"""Temporary GitHub checkouts for analysis runs."""

from __future__ import annotations

import os
import re
import shutil
import time
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from git import GitCommandError, Repo

from .config import Settings
from .exceptions import CloneError, InvalidRepositoryUrlError, RepositoryAccessError, RepositoryNotFoundError
from .logging import get_logger

logger = get_logger("repo_fetch")

GITHUB_URL_PATTERN = re.compile(r"^https?://(www\.)?github\.com/[\w-]+/[\w.-]+")
REPO_NAME_PATTERN = re.compile(r"github\.com/[\w-]+/([\w.-]+)")

Cloner = Callable[[str, str, int], None]


def is_valid_github_url(url: str) -> bool:
	return bool(GITHUB_URL_PATTERN.match(url or ""))


def get_repo_name(url: str) -> Optional[str]:
	match = REPO_NAME_PATTERN.search(url or "")
	if not match:
		return None
	name = match.group(1)
	if name.endswith(".git"):
		name = name[: -len(".git")]
	return name or None


def _translate_clone_error(url: str, error: GitCommandError) -> CloneError:
	message = f"{error.stderr or ''} {error}".strip()
	lowered = message.lower()
	if "not found" in lowered or "404" in lowered:
		return RepositoryNotFoundError(message, url)
	if "authentication" in lowered or "403" in lowered:
		return RepositoryAccessError(message, url)
	return CloneError(message, url)


def clone_repository(url: str, destination: str, depth: int = 1) -> None:
	try:
		repo = Repo.clone_from(url, destination, depth=depth, env={"GIT_TERMINAL_PROMPT": "0"})
	except GitCommandError as e:
		raise _translate_clone_error(url, e) from e
	repo.close()


def cleanup_checkout(path: str) -> None:
	if not os.path.exists(path):
		return
	try:
		shutil.rmtree(path)
		logger.info("Cleaned up: %s", path)
	except OSError as e:
		logger.error("Error cleaning up %s: %s", path, e)


def cleanup_stale_checkouts(temp_dir: str) -> None:
	if not os.path.isdir(temp_dir):
		return
	for entry in sorted(os.listdir(temp_dir)):
		path = os.path.join(temp_dir, entry)
		if os.path.isdir(path):
			cleanup_checkout(path)
	logger.info("Startup cleanup complete")


@contextmanager
def checkout(url: str, settings: Settings, clone: Cloner = clone_repository) -> Iterator[str]:
	"""Clone url into a fresh directory under settings.temp_dir and remove it on exit."""
	if not is_valid_github_url(url):
		raise InvalidRepositoryUrlError(
			"Invalid GitHub URL. Please provide a valid public GitHub repository URL."
		)
	name = get_repo_name(url)
	if not name:
		raise InvalidRepositoryUrlError("Could not extract repository name from URL")

	os.makedirs(settings.temp_dir, exist_ok=True)
	path = os.path.join(settings.temp_dir, f"{name}-{int(time.time() * 1000)}")
	try:
		logger.info("Cloning %s to %s", url, path)
		clone(url, path, settings.clone_depth)
		logger.info("Clone complete")
		yield path
	finally:
		cleanup_checkout(path)
