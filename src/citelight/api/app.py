import asyncio
import json
from typing import Any

import structlog
from aiohttp import web

from citelight.highlight.chunk_store import ChunkFilter
from citelight.highlight.resolver import HighlightResolver
from citelight.highlight.types import (
    ChunkStoreUnavailable,
    HighlightInputError,
    HighlightQuery,
)
from citelight.util.logging import request_context

_logger = structlog.get_logger()

RESOLVER_KEY = web.AppKey("resolver", HighlightResolver)


def _error(message: str, status: int) -> web.Response:
    return web.json_response({"error": message}, status=status)


async def handle_highlight(request: web.Request) -> web.Response:
    resolver = request.app[RESOLVER_KEY]

    try:
        body: Any = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return _error("filename and page are required", 400)
    if not isinstance(body, dict):
        return _error("filename and page are required", 400)

    query = HighlightQuery.from_dict(body)
    with request_context(filename=query.filename, page=query.page, org_url=query.org_url):
        try:
            result = await asyncio.to_thread(resolver.resolve, query)
        except HighlightInputError as e:
            return _error(str(e), 400)
        except ChunkStoreUnavailable:
            return _error("Failed to fetch chunks", 500)
        except Exception:
            _logger.exception("highlight_unexpected_error")
            return _error("Internal server error", 500)

    return web.json_response(result.to_dict())


async def handle_chunks(request: web.Request) -> web.Response:
    """List the chunks stored for one page, without any fallback."""
    resolver = request.app[RESOLVER_KEY]
    filename = request.query.get("filename", "").strip()
    page = request.query.get("page", "").strip()
    org_url = request.query.get("orgUrl") or None

    if not filename or not page:
        return _error("Missing filename or page parameter", 400)

    chunk_filter = ChunkFilter(source=filename, page=page, org_url=org_url)
    with request_context(filename=filename, page=page, org_url=org_url):
        try:
            chunks = await asyncio.to_thread(resolver.locator.chunk_store.find, chunk_filter)
        except ChunkStoreUnavailable:
            return _error("Failed to fetch chunks", 500)
        except Exception:
            _logger.exception("chunks_unexpected_error")
            return _error("Internal server error", 500)

    payload = [chunk.to_dict() for chunk in chunks]
    return web.json_response({"chunks": payload, "count": len(payload)})


def create_app(resolver: HighlightResolver) -> web.Application:
    app = web.Application()
    app[RESOLVER_KEY] = resolver
    app.router.add_post("/highlight", handle_highlight)
    app.router.add_get("/chunks", handle_chunks)
    return app
