"""
FastAPI server example for production deployment.

Exposes federated search, suggestions, trending searches and health over
REST, backed by in-memory providers loaded from the sample data.
"""

import logging
from contextlib import asynccontextmanager
from typing import List, Optional

import uvicorn
from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from federated_search import FederatedSearchService, SearchRequest
from federated_search.core.exceptions import (
    FederatedSearchError,
    UnsupportedOptionError,
    ValidationError,
)

from basic_usage import SAMPLE_FILE, load_providers

logger = logging.getLogger(__name__)

# Global service instance
search_service: Optional[FederatedSearchService] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize the search service on startup and close it on shutdown."""
    global search_service

    if not SAMPLE_FILE.exists():
        from sample_data.generate_sample_data import save_sample_records
        save_sample_records(SAMPLE_FILE.parent)

    async with FederatedSearchService.create(load_providers(SAMPLE_FILE), log_level="INFO") as service:
        search_service = service
        logger.info("Search service initialized successfully")
        yield
        search_service = None


app = FastAPI(
    title="Federated Search API",
    description="Typo-tolerant search across presentations, volunteers, schools, events and more",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _service() -> FederatedSearchService:
    if not search_service:
        raise HTTPException(status_code=503, detail="Search service not initialized")
    return search_service


@app.get("/", summary="API Root")
async def root():
    """API root endpoint with basic information."""
    return {
        "name": "Federated Search API",
        "version": "1.0.0",
        "status": "running",
        "endpoints": {
            "health": "/health",
            "search": "/search",
            "suggest": "/suggest",
            "trending": "/trending"
        }
    }


@app.get("/health", summary="Health Check")
async def health_check():
    """Check the health of the search service."""
    return await _service().health_check()


@app.post("/search", summary="Federated Search")
async def search(request: SearchRequest):
    """Search every requested entity type and return one page with facets."""
    service = _service()

    try:
        response = await service.search(request.to_options())
        return response.to_dict()

    except (ValidationError, UnsupportedOptionError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except FederatedSearchError as e:
        logger.error(f"Search failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/suggest", summary="Autocomplete")
async def suggest(
    q: str = Query(..., description="Partial query"),
    limit: int = Query(5, ge=1, le=20)
) -> List[str]:
    """Suggest result titles containing the partial query."""
    try:
        return await _service().suggest(q, limit)
    except FederatedSearchError as e:
        logger.error(f"Suggestions failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/trending", summary="Trending Searches")
async def trending(limit: int = Query(10, ge=0, le=50)) -> List[str]:
    """Configured trending searches."""
    return await _service().trending(limit)


@app.get("/types", summary="Get Entity Types")
async def get_entity_types():
    """Get the entity types that can be searched."""
    return {"entity_types": [t.value for t in _service().engine.registry.types()]}


def main():
    """Run the API server."""
    print("Starting Federated Search API Server...")
    print("API Documentation: http://localhost:8000/docs")
    print("Search endpoint: POST http://localhost:8000/search")

    uvicorn.run(
        "api_server:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )


if __name__ == "__main__":
    main()
