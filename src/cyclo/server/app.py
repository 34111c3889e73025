"""Starlette ASGI application serving the treemap."""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import TYPE_CHECKING, Optional

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import HTMLResponse, JSONResponse, Response
from starlette.routing import Route

from ..config import ColorScheme
from ..visualization.report import render_page
from ..visualization.treemap import build_plotly_trace, render_treemap_script, tree_to_records

if TYPE_CHECKING:
    from ..api import AnalysisResult

logger = logging.getLogger(__name__)


def create_app(result: AnalysisResult, scheme: Optional[ColorScheme] = None) -> Starlette:
    """Build the Starlette application for one finished analysis.

    The result is rendered once up front; every request serves the same
    read-only data.

    Args:
        result: The analysis to display
        scheme: Colorscale for the treemap
    """
    scheme = scheme or ColorScheme()
    summary = result.summary()
    page = render_page(summary, script_src="/scripts/cyclo.js")
    script = render_treemap_script(build_plotly_trace(result.tree, scheme))
    records = tree_to_records(result.tree)
    files = [asdict(result.metrics[n.id]) for n in result.tree.files()]

    async def homepage(request: Request) -> HTMLResponse:
        return HTMLResponse(page)

    async def treemap_script(request: Request) -> Response:
        return Response(content=script, media_type="application/javascript")

    async def api_tree(request: Request) -> JSONResponse:
        return JSONResponse({"summary": summary, "nodes": records})

    async def api_files(request: Request) -> JSONResponse:
        return JSONResponse(
            {
                "files": files,
                "skipped": [
                    {"path": str(e.filepath), **e.to_dict()}
                    for e in list(result.read_errors) + list(result.anomalies)
                ],
            }
        )

    routes = [
        Route("/", homepage),
        Route("/scripts/cyclo.js", treemap_script),
        Route("/api/tree", api_tree),
        Route("/api/files", api_files),
    ]

    logger.debug(f"Serving {summary['file_count']} files from {summary['root']}")
    return Starlette(routes=routes)
