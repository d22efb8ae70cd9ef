import os

import pytest
from git import GitCommandError

from codeverse import repo_fetch
from codeverse.config import Settings
from codeverse.exceptions import (
	CloneError,
	InvalidRepositoryUrlError,
	RepositoryAccessError,
	RepositoryNotFoundError,
)
from codeverse.repo_fetch import checkout, cleanup_stale_checkouts, get_repo_name, is_valid_github_url


@pytest.mark.parametrize(
	"url, valid",
	[
		("https://github.com/octo/hello-world", True),
		("http://www.github.com/octo/hello.js.git", True),
		("https://gitlab.com/octo/hello", False),
		("github.com/octo/hello", False),
		("https://github.com/octo", False),
		("", False),
	],
)
def test_is_valid_github_url(url, valid):
	assert is_valid_github_url(url) is valid


def test_get_repo_name():
	assert get_repo_name("https://github.com/octo/hello.js.git") == "hello.js"
	assert get_repo_name("https://github.com/octo/site/tree/main") == "site"
	assert get_repo_name("https://example.com/x") is None


def _fake_clone(files):
	calls = []

	def clone(url, destination, depth):
		calls.append((url, destination, depth))
		for relative, content in files.items():
			path = os.path.join(destination, relative)
			os.makedirs(os.path.dirname(path), exist_ok=True)
			with open(path, "w", encoding="utf-8") as fh:
				fh.write(content)

	clone.calls = calls
	return clone


def test_checkout_clones_and_cleans_up(tmp_path):
	settings = Settings(temp_dir=str(tmp_path / "checkouts"), clone_depth=3)
	clone = _fake_clone({"a.js": "import './b'"})
	with checkout("https://github.com/octo/demo.git", settings, clone) as path:
		assert os.path.isfile(os.path.join(path, "a.js"))
		assert os.path.basename(path).startswith("demo-")
	assert not os.path.exists(path)
	assert clone.calls[0][2] == 3


def test_checkout_cleans_up_on_failure(tmp_path):
	settings = Settings(temp_dir=str(tmp_path))
	clone = _fake_clone({"a.js": ""})
	with pytest.raises(RuntimeError):
		with checkout("https://github.com/octo/demo", settings, clone) as path:
			raise RuntimeError("analysis blew up")
	assert not os.path.exists(path)


def test_checkout_rejects_invalid_url(tmp_path):
	with pytest.raises(InvalidRepositoryUrlError):
		with checkout("https://example.com/octo/demo", Settings(temp_dir=str(tmp_path)), _fake_clone({})):
			pass


@pytest.mark.parametrize(
	"stderr, expected",
	[
		("remote: Repository not found.", RepositoryNotFoundError),
		("fatal: Authentication failed", RepositoryAccessError),
		("The requested URL returned error: 403", RepositoryAccessError),
		("fatal: unable to access: Could not resolve host", CloneError),
	],
)
def test_clone_errors_are_translated(monkeypatch, tmp_path, stderr, expected):
	def fail(*args, **kwargs):
		raise GitCommandError(["git", "clone"], 128, stderr=stderr)

	monkeypatch.setattr(repo_fetch.Repo, "clone_from", fail)
	with pytest.raises(expected) as exc_info:
		repo_fetch.clone_repository("https://github.com/octo/demo", str(tmp_path / "d"))
	assert type(exc_info.value) is expected
	assert exc_info.value.url == "https://github.com/octo/demo"


def test_cleanup_stale_checkouts(tmp_path):
	(tmp_path / "old-1" / "src").mkdir(parents=True)
	(tmp_path / "old-1" / "src" / "a.js").write_text("")
	(tmp_path / "old-2").mkdir()
	(tmp_path / "keep.txt").write_text("")
	cleanup_stale_checkouts(str(tmp_path))
	assert sorted(os.listdir(tmp_path)) == ["keep.txt"]


def test_cleanup_stale_checkouts_missing_dir(tmp_path):
	cleanup_stale_checkouts(str(tmp_path / "absent"))
