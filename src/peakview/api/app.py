"""FastAPI app serving the precomputed viewpoint dataset."""

from __future__ import annotations

import logging
from functools import partial
from typing import Literal

from fastapi import FastAPI, HTTPException, Response
from pydantic import BaseModel

from peakview.errors import PeakviewError
from peakview.ingest.factory import load_elevation_data, resolve_mode, resolve_path
from peakview.orchestrate.batch import resolve_workers
from peakview.state.dataset_resolver import DatasetResolver

logger = logging.getLogger(__name__)


class DatasetStatusResponse(BaseModel):
    """Build status of the served dataset."""

    state: Literal["empty", "pending", "ready"]
    build_count: int


def _build_resolver(elevation_mode: str | None) -> DatasetResolver:
    """Build dataset resolver from argument/environment configuration."""
    mode = resolve_mode(elevation_mode)
    path = resolve_path()
    loader = partial(load_elevation_data, path=path, mode=mode)
    return DatasetResolver(loader=loader, workers=resolve_workers())


def create_app(
    elevation_mode: str | None = None, resolver: DatasetResolver | None = None
) -> FastAPI:
    """Create and configure the FastAPI app."""
    app = FastAPI(title="Peakview API", version="0.1.0")

    dataset = resolver or _build_resolver(elevation_mode)
    app.state.dataset_resolver = dataset

    @app.get("/viewpoints")
    def get_viewpoints() -> Response:
        """Return the gzip-compressed viewpoint dataset, building it on first use."""
        try:
            artifact = dataset.get_artifact()
        except PeakviewError as exc:
            logger.error("Dataset build failed: %s", exc)
            raise HTTPException(status_code=500, detail=str(exc)) from exc
        return Response(
            content=artifact.body_gzip,
            media_type="application/json",
            headers={"Content-Encoding": "gzip"},
        )

    @app.get("/status", response_model=DatasetStatusResponse)
    def get_status() -> DatasetStatusResponse:
        """Report dataset build state without triggering a build."""
        return DatasetStatusResponse(state=dataset.state.value, build_count=dataset.build_count)

    return app


app = create_app()
