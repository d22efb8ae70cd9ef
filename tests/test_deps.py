import time
from textwrap import dedent

import pytest

from codeverse.deps import extract_dependencies


def test_bare_package_specifiers_are_dropped():
	content = "import x from 'lodash'\nimport y from './y'\n"
	assert extract_dependencies(content) == ["./y"]


def test_import_forms_and_require_calls():
	content = dedent(
		"""
		import React, { useState } from "react";
		import * as api from '../api/client';
		import {
			helper,
			other,
		} from './utils/helpers';
		import './styles.css';
		import type { Props } from './types';
		export { thing } from './thing';
		const fs = require('fs');
		const db = require( "./db" );
		const cfg = require('/config/app');
		"""
	)
	assert extract_dependencies(content) == [
		"../api/client",
		"./utils/helpers",
		"./styles.css",
		"./types",
		"./thing",
		"./db",
		"/config/app",
	]


def test_duplicates_collapse():
	content = "import a from './a'\nimport b from './a'\nconst c = require('./a')\n"
	assert extract_dependencies(content) == ["./a"]


def test_lexical_scan_limits():
	# Commented imports are matched; computed specifiers are not.
	content = dedent(
		"""
		// import old from './legacy'
		const mod = require(base + '/dynamic');
		const lazy = import('./lazy');
		"""
	)
	assert extract_dependencies(content) == ["./legacy"]


def test_empty_content():
	assert extract_dependencies("") == []


@pytest.mark.parametrize(
	"content",
	[
		"import" + " " * 20000 + "x",
		"export" + "\n" * 20000 + "{",
		"import " + "a " * 10000 + "x",
	],
)
def test_long_whitespace_runs_scan_in_linear_time(content):
	start = time.perf_counter()
	assert extract_dependencies(content) == []
	assert time.perf_counter() - start < 1.0


def test_padded_import_still_matches():
	assert extract_dependencies("import   x   from   './y'") == ["./y"]
	assert extract_dependencies("import\n\n'./side-effect'") == ["./side-effect"]
