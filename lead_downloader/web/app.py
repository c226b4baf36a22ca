"""FastAPI application exposing search, CSV download and the front page."""

import json
from typing import Any, Dict, Optional
from uuid import uuid4

from fastapi import Depends, FastAPI, Query, Request
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse, Response

from lead_downloader.domain.models import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_TARGET_COUNT,
    MAX_PAGE_SIZE,
    MAX_TARGET_COUNT,
    QueryValidationError,
    SearchQuery,
)
from lead_downloader.export.csv_writer import build_download_filename, leads_to_csv
from lead_downloader.logging import get_logger
from lead_downloader.logging.context import log_context
from lead_downloader.retrieval.runner import LeadRetriever
from lead_downloader.upstream.exceptions import UpstreamError

from .schemas import ErrorResponse, SearchRequest, SearchResponse
from .templates import TemplateRenderer

logger = get_logger(__name__, component="web")

APP_TITLE = "Apollo Lead Downloader"


FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def get_retriever(request: Request) -> LeadRetriever:
    return request.app.state.retriever


async def read_search_body(request: Request) -> Dict[str, Any]:
    """Read the /search body as a flat mapping.

    Accepts JSON and form-encoded bodies. Anything else (no body, malformed
    JSON, a JSON array or scalar) reads as an empty mapping, which the query
    validation then rejects for its missing keywords.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        return dict(form)

    raw = await request.body()
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except ValueError:
        logger.info(
            "Ignoring malformed JSON body",
            extra={"event": "web.search.malformed_body"},
        )
        return {}
    return data if isinstance(data, dict) else {}



def create_app(retriever: LeadRetriever, renderer: Optional[TemplateRenderer] = None) -> FastAPI:
    """
    Build the web application around a configured retriever.

    Args:
        retriever: LeadRetriever shared by all requests; it holds no per-call state
        renderer: Template renderer for the front page

    Returns:
        FastAPI application ready to be served by uvicorn
    """
    app = FastAPI(
        title=APP_TITLE,
        description="Search Apollo contacts and download them as CSV.",
        version="1.0.0",
    )
    app.state.retriever = retriever
    app.state.renderer = renderer or TemplateRenderer()

    @app.middleware("http")
    async def bind_request_context(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or uuid4().hex
        with log_context(request_id=request_id, path=request.url.path):
            response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    @app.get("/", response_class=HTMLResponse)
    def index(request: Request):
        html = request.app.state.renderer.render_index({
            "title": APP_TITLE,
            "default_limit": DEFAULT_TARGET_COUNT,
            "max_limit": MAX_TARGET_COUNT,
            "default_per_page": DEFAULT_PAGE_SIZE,
            "max_per_page": MAX_PAGE_SIZE,
        })
        return HTMLResponse(html)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.post(
        "/search",
        response_model=SearchResponse,
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    def search(
        payload: Dict[str, Any] = Depends(read_search_body),
        retriever: LeadRetriever = Depends(get_retriever),
    ):
        body = SearchRequest.model_validate(payload)
        try:
            query = SearchQuery.from_params(
                body.keywords, body.location, body.limit, body.per_page
            )
            leads = retriever.fetch_leads(query)
        except QueryValidationError as e:
            logger.info(
                f"Rejected search: {e}",
                extra={"event": "web.search.rejected"},
            )
            return JSONResponse(status_code=400, content={"error": str(e)})
        except UpstreamError as e:
            logger.error(
                f"Search failed: {e}",
                extra={"event": "web.search.failed", "error_type": type(e).__name__},
            )
            return JSONResponse(
                status_code=500,
                content={"error": "Search failed", "details": e.detail or str(e)},
            )

        return SearchResponse(results=leads)

    @app.get("/download")
    def download(
        keywords: Optional[str] = Query(None),
        location: Optional[str] = Query(None),
        limit: Optional[str] = Query(None),
        per_page: Optional[str] = Query(None, alias="perPage"),
        retriever: LeadRetriever = Depends(get_retriever),
    ):
        try:
            query = SearchQuery.from_params(keywords, location, limit, per_page)
            leads = retriever.fetch_leads(query)
        except QueryValidationError as e:
            return PlainTextResponse(str(e), status_code=400)
        except UpstreamError as e:
            logger.error(
                f"Download failed: {e}",
                extra={"event": "web.download.failed", "error_type": type(e).__name__},
            )
            return PlainTextResponse("Download failed", status_code=500)

        filename = build_download_filename()
        logger.info(
            f"Serving {len(leads)} leads as {filename}",
            extra={"event": "web.download.served", "lead_count": len(leads)},
        )
        return Response(
            content=leads_to_csv(leads),
            media_type="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    return app
