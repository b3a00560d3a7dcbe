"""FastAPI host page for the wine search client."""
from __future__ import annotations

import html
import logging
from pathlib import Path

from fastapi import Depends, FastAPI, Query
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles

from .config import settings
from .search import WineSearch

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_LEVEL = logging.getLevelName(settings.log_level.upper())

# ``force=True`` replaces uvicorn's default handlers so dispatcher logs show up.
logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT, force=True)
for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "httpx"):
    logging.getLogger(name).setLevel(LOG_LEVEL)

logger = logging.getLogger(__name__)
logger.info("Logging configured at %s", settings.log_level.upper())

PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8"/>
<title>Winedex</title>
</head>
<body>
<form action="/" method="get" id="search">
<input type="text" id="query" name="q" value="{query}" autocomplete="off"/>
<input type="submit" value="Search"/>
</form>
<div id="results" data-state="{state}">{results}</div>
</body>
</html>
"""

STATIC_DIR = Path(__file__).resolve().parent / "static"

app = FastAPI(title="Winedex")
# Holds the fallback image referenced by settings.no_img.
app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")


def get_session() -> WineSearch:
    return WineSearch(settings)


def render_page(session: WineSearch) -> HTMLResponse:
    return HTMLResponse(
        PAGE_TEMPLATE.format(
            query=html.escape(session.query_field.value, quote=True),
            state=session.state.value,
            results=session.container.html,
        )
    )


@app.get("/", response_class=HTMLResponse)
async def index(
    q: str | None = Query(None, description="Free-text query"),
    session: WineSearch = Depends(get_session),
) -> HTMLResponse:
    if q is not None:
        await session.run_text_search(q)
    return render_page(session)


@app.get(settings.similar_path, response_class=HTMLResponse)
async def similar(
    wine: str = Query(..., description="Wine code to find similar bottles for"),
    session: WineSearch = Depends(get_session),
) -> HTMLResponse:
    await session.run_similarity_search(wine)
    return render_page(session)


@app.get(settings.suggest_path, response_class=HTMLResponse)
async def suggest(
    s: str = Query(..., description="URL-encoded suggested query"),
    session: WineSearch = Depends(get_session),
) -> HTMLResponse:
    await session.run_suggested_query(s)
    return render_page(session)


@app.get("/health")
async def health() -> dict:
    return {
        "service": settings.server_endpoint,
        "search": settings.search_url,
        "similar": settings.similar_url,
    }
