"""FastAPI application serving a loaded search index."""

from __future__ import annotations

import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, List, Tuple

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from docindex.config import AppConfig
from docindex.errors import MalformedIndexError
from docindex.index.search import Searcher, SearchResult
from docindex.index.store import IndexStore
from docindex.models import Category
from docindex.web.frontend import router as frontend_router

LOGGER = logging.getLogger(__name__)

app = FastAPI(title="docindex Web", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(frontend_router)
app.state.index_path = None

# resolved path -> (mtime, searcher); a rebuilt index replaces its entry
_SEARCHERS: Dict[str, Tuple[float, Searcher]] = {}


class SearchPayload(BaseModel):
    query: str
    index: Path | None = None
    top_k: int = 10
    categories: List[Category] | None = None


def _resolve_index_path(index: Path | None) -> Path:
    default = app.state.index_path or AppConfig().index_path
    config = AppConfig(index_path=index if index is not None else default)
    return config.resolve_index_path(Path.cwd())


def _get_searcher(index: Path | None) -> Searcher:
    """Load the index once per file version and keep its searcher."""
    resolved = _resolve_index_path(index)
    if not resolved.exists():
        raise HTTPException(status_code=404, detail=f"Index not found at {resolved}")

    key = str(resolved)
    mtime = resolved.stat().st_mtime
    cached = _SEARCHERS.get(key)
    if cached is not None and cached[0] == mtime:
        return cached[1]

    try:
        store = IndexStore.from_path(resolved)
    except MalformedIndexError as exc:
        LOGGER.error("Malformed index %s: %s", resolved, exc)
        raise HTTPException(status_code=422, detail=f"Malformed index: {exc}") from exc
    searcher = Searcher(store, title_boost=AppConfig().title_boost)
    _SEARCHERS[key] = (mtime, searcher)
    LOGGER.info("Loaded %d records from %s", len(store), resolved)
    return searcher


@app.on_event("startup")
async def startup_event() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


@app.get("/records")
async def list_records(
    category: List[Category] | None = Query(None),
    index: Path | None = None,
) -> dict[str, Any]:
    store = _get_searcher(index).store
    records = store.by_category(*category) if category else list(store)
    return {"records": [record.to_dict() for record in records]}


@app.get("/pages")
async def list_pages(index: Path | None = None) -> dict[str, Any]:
    store = _get_searcher(index).store
    return {"pages": [asdict(summary) for summary in store.pages()]}


@app.get("/stats")
async def index_stats(index: Path | None = None) -> dict[str, Any]:
    store = _get_searcher(index).store
    return {"stats": asdict(store.stats()), "fingerprint": store.fingerprint()}


@app.post("/search")
async def search_index(payload: SearchPayload) -> dict[str, List[SearchResult]]:
    query = payload.query.strip()
    if not query:
        return {"results": []}

    top_k = max(1, min(payload.top_k, 50))
    searcher = _get_searcher(payload.index)
    results = searcher.search(query, top_k=top_k, categories=payload.categories)
    return {"results": results}
