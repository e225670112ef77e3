"""API routes exposing the page analyzer."""

from __future__ import annotations

import logging

import requests
from fastapi import APIRouter, HTTPException, Query
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, field_validator

from carbon14.config import AnalyzerConfig
from carbon14.models import Analysis
from carbon14.report import render_report
from carbon14.services.analyzer import PageAnalyzer
from carbon14.urls import InvalidURLError, validate_page_url

logger = logging.getLogger(__name__)

router = APIRouter()


class AnalysisRequest(BaseModel):
    url: str
    author: str | None = None

    @field_validator("url")
    @classmethod
    def _check_url(cls, value: str) -> str:
        return validate_page_url(value)


def _load_config() -> AnalyzerConfig:
    try:
        return AnalyzerConfig.load()
    except (FileNotFoundError, ValueError) as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc


async def _run_analysis(url: str, author: str | None) -> Analysis:
    analyzer = PageAnalyzer(_load_config())
    try:
        return await run_in_threadpool(analyzer.run, url, author)
    except InvalidURLError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except requests.RequestException as exc:
        logger.exception("Failed to fetch %s", url)
        raise HTTPException(status_code=502, detail=f"Failed to fetch {url}: {exc}") from exc


@router.post("/analyses", response_model=Analysis)
async def create_analysis(payload: AnalysisRequest) -> Analysis:
    """Analyse the requested page and return the dated images."""

    return await _run_analysis(payload.url, payload.author)


@router.get("/analyses/report", response_class=PlainTextResponse)
async def analysis_report(
    url: str = Query(..., description="Page to analyse"),
    author: str | None = Query(default=None, description="Author shown in the report"),
) -> str:
    """Analyse the requested page and return the plain text report."""

    analysis = await _run_analysis(url, author)
    return render_report(analysis, color=False)
