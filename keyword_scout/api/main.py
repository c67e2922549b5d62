"""FastAPI application for Keyword Scout."""

from dataclasses import asdict
from datetime import datetime
from functools import lru_cache
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from .. import __version__
from ..errors import EmptyCategoryError, RepositoryError
from ..orchestrator.coordinator import AnalysisCoordinator
from ..storage.database import Database
from ..utils.config import get_config

# Initialize FastAPI app
app = FastAPI(
    title="Keyword Scout API",
    description="API for keyword opportunity scoring and trend analysis",
    version=__version__,
)

# Load configuration
config = get_config()

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.api.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@lru_cache
def get_coordinator() -> AnalysisCoordinator:
    """Build the shared coordinator on first use."""
    db = Database(config.database.url, echo=config.database.echo)
    return AnalysisCoordinator(db, candidate_limit=config.analysis.candidate_limit)


def _repository_unavailable(e: RepositoryError) -> HTTPException:
    logger.error(f"Repository error: {e}")
    return HTTPException(status_code=503, detail=str(e))


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "Keyword Scout API",
        "version": __version__,
        "status": "running",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat(),
    }


@app.get("/opportunities")
def get_opportunities(
    min_volume: int = Query(
        config.analysis.min_search_volume, ge=0, description="Minimum search volume"
    ),
    max_competition: int = Query(
        config.analysis.max_competition_index, ge=0, le=100, description="Maximum competition index"
    ),
    limit: Optional[int] = Query(None, ge=1, le=100, description="Number of results"),
    coordinator: AnalysisCoordinator = Depends(get_coordinator),
):
    """Get keyword opportunities ranked by opportunity score.

    Args:
        min_volume: Minimum search volume
        max_competition: Maximum competition index
        limit: Optional cap on returned results

    Returns:
        Ranked opportunities
    """
    try:
        opportunities = coordinator.find_opportunities(min_volume, max_competition)
    except RepositoryError as e:
        raise _repository_unavailable(e)

    if limit is not None:
        opportunities = opportunities[:limit]

    return {
        "opportunities": [asdict(o) for o in opportunities],
        "count": len(opportunities),
        "generated_at": datetime.utcnow().isoformat(),
    }


@app.get("/trending")
def get_trending(
    category: Optional[str] = Query(None, description="Filter by category"),
    limit: int = Query(config.analysis.trending_limit, ge=1, le=200, description="Number of results"),
    coordinator: AnalysisCoordinator = Depends(get_coordinator),
):
    """Get rising keywords ordered by search volume."""
    try:
        trending = coordinator.get_trending_keywords(category, limit)
    except RepositoryError as e:
        raise _repository_unavailable(e)

    return {"keywords": [asdict(t) for t in trending], "count": len(trending)}


@app.get("/categories/{category}/keywords")
def get_category_keywords(
    category: str, coordinator: AnalysisCoordinator = Depends(get_coordinator)
):
    try:
        keywords = coordinator.get_keywords_by_category(category)
    except RepositoryError as e:
        raise _repository_unavailable(e)

    return {"keywords": [k.model_dump() for k in keywords], "count": len(keywords)}


@app.get("/categories/{category}/competition")
def get_competition(category: str, coordinator: AnalysisCoordinator = Depends(get_coordinator)):
    """Get the competition distribution for a category."""
    try:
        summary = coordinator.get_competition_analysis(category)
    except EmptyCategoryError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except RepositoryError as e:
        raise _repository_unavailable(e)

    return {"category": category, **asdict(summary)}


@app.get("/categories/{category}/seasonal")
def get_seasonal(category: str, coordinator: AnalysisCoordinator = Depends(get_coordinator)):
    """Get the peak-month histogram for a category."""
    try:
        summary = coordinator.get_seasonal_trends(category)
    except RepositoryError as e:
        raise _repository_unavailable(e)

    return asdict(summary)


@app.get("/keywords/search")
def search_keyword(
    q: str = Query(..., min_length=1, description="Text to search for"),
    coordinator: AnalysisCoordinator = Depends(get_coordinator),
):
    try:
        keyword = coordinator.search_keyword(q)
    except RepositoryError as e:
        raise _repository_unavailable(e)

    if keyword is None:
        raise HTTPException(status_code=404, detail="Keyword not found")

    return keyword.model_dump()


@app.get("/keywords/{keyword_id}/related")
def get_related(keyword_id: int, coordinator: AnalysisCoordinator = Depends(get_coordinator)):
    try:
        related = coordinator.get_related_keywords(keyword_id)
    except RepositoryError as e:
        raise _repository_unavailable(e)

    return {"keywords": [k.model_dump() for k in related], "count": len(related)}
