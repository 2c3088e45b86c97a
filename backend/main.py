"""
backend/main.py
===============

FastAPI backend for the wellness support assistant.

Provides REST API endpoints for the chat widget and admin tooling:
- POST /chat - Send a message and get one supportive response
- GET /health - Health check endpoint
- GET /stats - Corpus statistics
- POST /responses - Add a single prompt/response record
- POST /dataset - Load a CSV dataset from the data directory or DATASET_URL

Run with:
    uvicorn backend.main:app --reload --port 8000
"""

import logging
from concurrent.futures import Future
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from config import DATA_DIR, DATASET_PATH, DATASET_URL, setup_logging
from support_engine.corpus import CorpusRecord
from support_engine.csv_loader import is_url, resolve_path
from support_engine.keywords import categorize_prompt, extract_domain_keywords
from support_engine.matcher import ResponseMatcher

setup_logging()
logger = logging.getLogger(__name__)


# =============================================================================
# PYDANTIC MODELS
# =============================================================================

class ChatMessage(BaseModel):
    """Request model for chat endpoint."""
    message: str = Field(..., max_length=2000, description="User's message")


class ChatResponse(BaseModel):
    """Response model for chat endpoint."""
    response: str = Field(..., description="Supportive response text")


class HealthResponse(BaseModel):
    """Response model for health check."""
    status: str
    is_loaded: bool
    total_responses: int


class StatsResponse(BaseModel):
    totalResponses: int
    categories: list[str]
    isLoaded: bool


class NewResponse(BaseModel):
    """A record to add; keywords and category are derived when omitted."""
    prompt: str = Field(..., min_length=1)
    response: str = Field(..., min_length=1)
    keywords: Optional[list[str]] = None
    category: Optional[str] = None


class DatasetRequest(BaseModel):
    source: str = Field(..., min_length=1, description="CSV file path or http(s) URL")


class ParseWarningModel(BaseModel):
    line_number: int
    reason: str


class IngestionSummary(BaseModel):
    status: str
    source: str
    records_added: int
    warnings: list[ParseWarningModel] = Field(default_factory=list)
    error: Optional[str] = None
    stats: dict = Field(default_factory=dict)


# =============================================================================
# ENGINE INSTANCE
# =============================================================================

# Global matcher instance (initialized on first use)
_matcher: Optional[ResponseMatcher] = None


def get_matcher() -> ResponseMatcher:
    """Get or create the matcher instance."""
    global _matcher
    if _matcher is None:
        _matcher = ResponseMatcher()
    return _matcher


def log_ingestion_result(future: Future) -> None:
    """Report how a background dataset load ended."""
    error = future.exception()
    if error is not None:
        logger.error("Background dataset load crashed: %s", error)
        return
    result = future.result()
    logger.info(
        "Background dataset load %s: %d responses added, %d rows skipped (%s)",
        result.status, result.records_added, len(result.warnings), result.source,
    )


def check_dataset_source(source: str) -> None:
    """
    Only the configured DATASET_URL or files under DATA_DIR may be loaded.

    Raises:
        HTTPException: 403 for any other source
    """
    if is_url(source):
        if not DATASET_URL or source != DATASET_URL:
            raise HTTPException(status_code=403, detail="Only the configured DATASET_URL can be loaded")
        return

    if not resolve_path(source).is_relative_to(DATA_DIR.resolve()):
        raise HTTPException(status_code=403, detail="Dataset files must live under the data directory")


@asynccontextmanager
async def lifespan(app: FastAPI):
    matcher = get_matcher()
    source = DATASET_URL or DATASET_PATH
    if source:
        # Queries are served from the seed records until this finishes
        future = matcher.load_dataset_in_background(source)
        future.add_done_callback(log_ingestion_result)
    yield
    matcher.close()


# =============================================================================
# FASTAPI APP
# =============================================================================

app = FastAPI(
    title="Support Assistant API",
    description="Dataset-driven supportive responses with crisis triage",
    version="1.0.0",
    lifespan=lifespan,
)

# Allow requests from local development
ALLOWED_ORIGINS = [
    "http://localhost:5173",      # Vite dev server
    "http://127.0.0.1:5173",
    "http://localhost:3000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


# =============================================================================
# ENDPOINTS
# =============================================================================

@app.get("/health", response_model=HealthResponse, tags=["System"])
async def health_check():
    """Health check endpoint. The assistant is usable as soon as it starts."""
    matcher = get_matcher()
    stats = matcher.get_stats()
    return HealthResponse(
        status="healthy",
        is_loaded=stats["isLoaded"],
        total_responses=stats["totalResponses"],
    )


@app.post("/chat", response_model=ChatResponse, tags=["Chat"])
async def chat(request: ChatMessage):
    """
    Send a message and get one response.

    Crisis language always gets a crisis-resource message; everything
    else gets the best corpus match or a generic supportive reply.
    """
    return ChatResponse(response=get_matcher().get_response(request.message))


@app.get("/stats", response_model=StatsResponse, tags=["System"])
async def get_stats():
    """Corpus size, categories present and load state."""
    return StatsResponse(**get_matcher().get_stats())


@app.post("/responses", response_model=StatsResponse, status_code=201, tags=["Admin"])
async def add_response(item: NewResponse):
    """Append one record to the corpus."""
    keywords = item.keywords if item.keywords is not None else extract_domain_keywords(item.prompt)
    category = item.category or categorize_prompt(item.prompt)
    try:
        record = CorpusRecord(
            prompt=item.prompt.strip(),
            response=item.response.strip(),
            keywords=frozenset(keywords),
            category=category,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    matcher = get_matcher()
    matcher.add_response(record)
    return StatsResponse(**matcher.get_stats())


@app.post("/dataset", response_model=IngestionSummary, tags=["Admin"])
def load_dataset(request: DatasetRequest):
    """
    Load a CSV dataset and report what happened.

    Declared sync so FastAPI runs the file/network read in its threadpool.
    Sources are limited to files under DATA_DIR and the configured
    DATASET_URL. A failed load is reported in the body, not as an HTTP error.
    """
    check_dataset_source(request.source)
    result = get_matcher().load_dataset(request.source)
    return IngestionSummary(
        status=result.status,
        source=result.source,
        records_added=result.records_added,
        warnings=[
            ParseWarningModel(line_number=w.line_number, reason=w.reason)
            for w in result.warnings
        ],
        error=result.error,
        stats=result.stats,
    )


# =============================================================================
# MAIN
# =============================================================================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
