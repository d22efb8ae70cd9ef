from __future__ import annotations

import argparse
import os
import sys
from typing import List, Optional

import uvicorn

from codeverse.ai_classify import build_classifier
from codeverse.config import Settings
from codeverse.exceptions import CloneError, InvalidRepositoryUrlError
from codeverse.logging import configure_logging, get_logger
from codeverse.model import AnalysisResult
from codeverse.pipeline import analyze_directory
from codeverse.repo_fetch import checkout, is_valid_github_url

logger = get_logger("cli")


def _run_analysis(target: str, settings: Settings) -> AnalysisResult:
	classifier = build_classifier(settings)
	if is_valid_github_url(target):
		with checkout(target, settings) as repo_path:
			return analyze_directory(repo_path, classifier, settings)
	return analyze_directory(target, classifier, settings)


def cmd_analyze(args: argparse.Namespace) -> int:
	settings = Settings.from_env()
	if args.ai:
		settings = settings.model_copy(update={"use_ai": True})
	configure_logging(settings.log_level, verbose=args.verbose)

	target = args.target
	if not is_valid_github_url(target) and not os.path.isdir(target):
		logger.error("Not a directory or GitHub URL: %s", target)
		return 2
	try:
		result = _run_analysis(target, settings)
	except InvalidRepositoryUrlError as e:
		logger.error("%s", e)
		return 2
	except CloneError as e:
		logger.error("Failed to clone %s: %s", target, e)
		return 1

	payload = result.model_dump_json(by_alias=True, exclude_none=True, indent=2)
	if args.output:
		try:
			with open(args.output, "w", encoding="utf-8") as fh:
				fh.write(payload)
		except OSError as e:
			logger.error("Cannot write %s: %s", args.output, e.strerror or e)
			return 1
		logger.info("Codeverse data saved to: %s", args.output)
	else:
		print(payload)
	return 0


def cmd_serve(args: argparse.Namespace) -> int:
	uvicorn.run("api:app", host=args.host, port=args.port, reload=args.reload)
	return 0


def main(argv: Optional[List[str]] = None) -> int:
	parser = argparse.ArgumentParser(prog="codeverse")
	sub = parser.add_subparsers(dest="cmd", required=True)

	pa = sub.add_parser("analyze", help="Analyze a directory or GitHub repository and print graph JSON")
	pa.add_argument("target", nargs="?", default=".", help="Directory path or GitHub URL")
	pa.add_argument("-o", "--output", help="Write the JSON to this file instead of stdout")
	pa.add_argument("--ai", action="store_true", help="Classify files with the hosted model when configured")
	pa.add_argument("-v", "--verbose", action="store_true")
	pa.set_defaults(func=cmd_analyze)

	ps = sub.add_parser("serve", help="Run FastAPI server")
	ps.add_argument("--host", default="127.0.0.1")
	ps.add_argument("--port", type=int, default=8000)
	ps.add_argument("--reload", action="store_true")
	ps.set_defaults(func=cmd_serve)

	args = parser.parse_args(argv)
	return args.func(args)


if __name__ == "__main__":
	sys.exit(main())
