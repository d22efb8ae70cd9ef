from __future__ import annotations

import os
from contextlib import asynccontextmanager
from typing import AsyncIterator, List

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

from codeverse.ai_classify import build_classifier, explain_error, make_client
from codeverse.config import Settings, get_settings
from codeverse.exceptions import (
	AIUnavailableError,
	CloneError,
	InvalidRepositoryUrlError,
	RepositoryAccessError,
	RepositoryNotFoundError,
)
from codeverse.logging import configure_logging, get_logger
from codeverse.model import AnalysisResult, ErrorExplanation
from codeverse.pipeline import analyze_directory
from codeverse.repo_fetch import Cloner, checkout, cleanup_stale_checkouts, clone_repository

API_VERSION = "1.1.0"

logger = get_logger("api")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
	settings = get_settings()
	configure_logging(settings.log_level)
	cleanup_stale_checkouts(settings.temp_dir)
	yield


app = FastAPI(title="Codeverse Explorer API", lifespan=lifespan)
app.add_middleware(
	CORSMiddleware,
	allow_origins=["*"],
	allow_methods=["*"],
	allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
	# Clients read `error` (and optionally `details`) at the top level of the body.
	body = exc.detail if isinstance(exc.detail, dict) else {"error": exc.detail}
	return JSONResponse(status_code=exc.status_code, content=body, headers=getattr(exc, "headers", None))


class AnalyzeRequest(BaseModel):
	root_path: str


class RepositoryRequest(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	github_url: str = Field(default="", alias="githubUrl")


class FileRef(BaseModel):
	path: str


class ExplainErrorRequest(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	error_trace: str = Field(default="", alias="errorTrace")
	files: List[FileRef] = []


def get_cloner() -> Cloner:
	return clone_repository


@app.post("/analyze", response_model=AnalysisResult, response_model_exclude_none=True)
def analyze(req: AnalyzeRequest, settings: Settings = Depends(get_settings)) -> AnalysisResult:
	root = os.path.abspath(req.root_path)
	if not os.path.isdir(root):
		raise HTTPException(status_code=400, detail=f"Invalid root_path: {root}")
	return analyze_directory(root, build_classifier(settings), settings)


@app.post("/api/analyze", response_model=AnalysisResult, response_model_exclude_none=True)
def analyze_repository(
	req: RepositoryRequest,
	settings: Settings = Depends(get_settings),
	clone: Cloner = Depends(get_cloner),
) -> AnalysisResult:
	if not req.github_url:
		raise HTTPException(status_code=400, detail="Missing githubUrl parameter")

	logger.info("Analyzing %s", req.github_url)
	try:
		with checkout(req.github_url, settings, clone) as repo_path:
			result = analyze_directory(repo_path, build_classifier(settings), settings)
	except InvalidRepositoryUrlError as e:
		raise HTTPException(status_code=400, detail=str(e))
	except RepositoryNotFoundError:
		raise HTTPException(
			status_code=404,
			detail="Repository not found. Please check the URL and ensure the repository is public.",
		)
	except RepositoryAccessError:
		raise HTTPException(status_code=403, detail="Access denied. This may be a private repository.")
	except CloneError as e:
		logger.error("Error analyzing %s: %s", req.github_url, e)
		raise HTTPException(
			status_code=500,
			detail={"error": "Failed to analyze repository. Please try again.", "details": str(e)},
		)
	logger.info("Analysis complete for %s", req.github_url)
	return result


@app.post("/api/explain-error", response_model=ErrorExplanation)
def explain(req: ExplainErrorRequest, settings: Settings = Depends(get_settings)) -> ErrorExplanation:
	if not req.error_trace:
		raise HTTPException(status_code=400, detail="Missing errorTrace parameter")
	try:
		return explain_error(
			make_client(settings), settings.ai_model, req.error_trace, [f.path for f in req.files]
		)
	except AIUnavailableError as e:
		raise HTTPException(
			status_code=503, detail={"error": "AI analysis not available", "details": str(e)}
		)


@app.get("/api/health")
def health(settings: Settings = Depends(get_settings)) -> dict:
	return {
		"status": "ok",
		"message": "Codeverse Explorer API is running",
		"version": API_VERSION,
		"features": {
			"aiAnalysis": settings.use_ai and settings.ai_available,
			"errorExplainer": settings.ai_available,
		},
	}


def create_app() -> FastAPI:
	return app
