import json
import os
import sys

import pytest

import cli
from codeverse.repo_fetch import checkout


def test_analyze_prints_json(make_repo, capsys):
	root = make_repo({"a.js": "import './b'\n", "b.js": ""})
	assert cli.main(["analyze", str(root)]) == 0
	data = json.loads(capsys.readouterr().out)
	assert data["meta"]["directory"] == str(root)
	assert data["graph"]["links"] == [{"source": "a.js", "target": "b.js"}]


def test_analyze_writes_output_file(make_repo, tmp_path):
	root = make_repo({"utils/helper.js": "export const x = 1\n"})
	out = tmp_path / "codeverse-data.json"
	assert cli.main(["analyze", str(root), "-o", str(out)]) == 0
	data = json.loads(out.read_text(encoding="utf-8"))
	assert data["graph"]["nodes"][0]["role"] == "Utility"
	assert data["project"]["roles"] == ["Utility"]


def test_analyze_rejects_missing_target(tmp_path):
	assert cli.main(["analyze", str(tmp_path / "missing")]) == 2


def test_analyze_github_url_uses_checkout(monkeypatch, tmp_path, capsys):
	def fake_clone(url, destination, depth):
		os.makedirs(destination)
		with open(os.path.join(destination, "index.js"), "w", encoding="utf-8") as fh:
			fh.write("")

	monkeypatch.setenv("CODEVERSE_TEMP_DIR", str(tmp_path / "checkouts"))
	monkeypatch.setattr(cli, "checkout", lambda url, settings: checkout(url, settings, fake_clone))
	assert cli.main(["analyze", "https://github.com/octo/demo"]) == 0
	data = json.loads(capsys.readouterr().out)
	assert [n["id"] for n in data["graph"]["nodes"]] == ["index.js"]
	assert os.listdir(tmp_path / "checkouts") == []


def test_analyze_unwritable_output_fails_cleanly(make_repo, tmp_path):
	root = make_repo({"a.js": ""})
	out = tmp_path / "missing" / "out.json"
	assert cli.main(["analyze", str(root), "-o", str(out)]) == 1
	assert not out.exists()


@pytest.mark.skipif(sys.platform != "linux", reason="needs a filesystem that accepts non-UTF-8 names")
def test_analyze_undecodable_file_name(make_repo, capsys):
	root = make_repo({"b.js": ""})
	with open(os.path.join(os.fsencode(str(root)), b"caf\xe9.js"), "wb") as fh:
		fh.write(b"require('./b')\n")
	assert cli.main(["analyze", str(root)]) == 0
	data = json.loads(capsys.readouterr().out)
	assert data["graph"]["links"] == [{"source": "caf�.js", "target": "b.js"}]
