"""FastAPI application exposing the analysis pipeline over HTTP."""

from __future__ import annotations

import argparse
import asyncio
from typing import Any, Callable, Dict, Optional

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from .. import __version__
from ..logging import configure_logging
from ..models import ProjectProfile
from ..pipeline import ProjectAnalyzer


class AnalyzeRequest(BaseModel):
    path: str
    include_git: bool = True
    max_depth: Optional[int] = Field(default=None, ge=0)


class HealthResponse(BaseModel):
    status: str


def _default_analyzer() -> ProjectAnalyzer:
    return ProjectAnalyzer()


def create_app(
    analyzer_factory: Callable[[], ProjectAnalyzer] = _default_analyzer,
) -> FastAPI:
    """Create the FastAPI application exposing wth analysis."""

    app = FastAPI(title="wth Service", version=__version__)

    async def get_analyzer() -> ProjectAnalyzer:
        # Fresh per request: no state is shared between analyses.
        return analyzer_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/analyze")
    async def analyze(
        payload: AnalyzeRequest,
        analyzer: ProjectAnalyzer = Depends(get_analyzer),
    ) -> Dict[str, Any]:
        def _run() -> ProjectProfile:
            return analyzer.run(
                payload.path,
                include_git=payload.include_git,
                max_depth=payload.max_depth,
            )

        loop = asyncio.get_running_loop()
        profile = await loop.run_in_executor(None, _run)
        return profile.to_dict()

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(_: Any, exc: FileNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(NotADirectoryError)
    async def not_a_directory_handler(_: Any, exc: NotADirectoryError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    uvicorn.run(create_app(), host=host, port=port)


def main(argv: list[str] | None = None) -> None:  # pragma: no cover - integration path
    parser = argparse.ArgumentParser(prog="wth-service", description="Serve wth analysis over HTTP.")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("-v", "--verbose", action="store_true", default=False)
    args = parser.parse_args(argv)
    configure_logging(verbose=bool(args.verbose))
    run_service(args.host, args.port)
