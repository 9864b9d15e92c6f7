"""ExpiryAlert Service - Entry point.

Serves the JSON routes used by the mobile client and the MCP server over HTTP.
Uses Starlette with the MCP HTTP app mounted at root.
"""

import json
import logging
import os

import uvicorn
from pydantic import ValidationError
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route, Mount

from .core.models import CatalogKind, parse_food_items
from .shell.device import DEVICE_HEADER, hash_device_id, validate_device_id
from .shell.mcp_server import (
    classify_snapshot,
    current_device_id,
    get_preference_client,
    get_reminder_service,
    mcp,
    optional_str,
    organize_catalog,
    resolve_timezone,
)


logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

_KINDS = {
    "categories": CatalogKind.CATEGORY,
    "locations": CatalogKind.LOCATION,
}


async def _json_body(request: Request) -> dict | None:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    return body if isinstance(body, dict) else None


def _device_or_401() -> str | JSONResponse:
    device_id = current_device_id.get()
    if device_id is None:
        return JSONResponse({"error": f"Valid {DEVICE_HEADER} header required"}, status_code=401)
    return device_id


# ==================== Route Handlers ====================


async def health_check(request: Request) -> JSONResponse:
    """Health check endpoint for Cloud Run."""
    return JSONResponse({"status": "healthy", "service": "expiryalert"})


async def organize_route(request: Request) -> JSONResponse:
    """Organize a category or location snapshot into display sections."""
    kind = _KINDS.get(request.path_params["kind"])
    if kind is None:
        return JSONResponse({"error": "Unknown catalog"}, status_code=404)

    body = await _json_body(request)
    if body is None:
        return JSONResponse({"error": "JSON object body required"}, status_code=400)

    result = organize_catalog(
        kind,
        body.get("entries", []),
        language=body.get("language"),
        mode=body.get("mode", "reclassify"),
        search_text=body.get("search_text", ""),
    )
    if "error" in result:
        return JSONResponse(result, status_code=400)
    return JSONResponse(result)


async def classify_route(request: Request) -> JSONResponse:
    """Classify a food item snapshot."""
    body = await _json_body(request)
    if body is None:
        return JSONResponse({"error": "JSON object body required"}, status_code=400)

    result = classify_snapshot(
        body.get("items", []),
        timezone_name=body.get("timezone"),
        now=body.get("now"),
        language=body.get("language"),
    )
    if "error" in result:
        return JSONResponse(result, status_code=400)
    return JSONResponse(result)


async def reminder_route(request: Request) -> JSONResponse:
    """Run the daily expired reminder check for the calling device.

    The client calls this once, shortly after its main view appears.
    """
    device_id = _device_or_401()
    if isinstance(device_id, JSONResponse):
        return device_id

    body = await _json_body(request)
    if body is None:
        return JSONResponse({"error": "JSON object body required"}, status_code=400)

    try:
        items = parse_food_items(body.get("items", []))
        tz = resolve_timezone(optional_str(body.get("timezone"), "timezone"))
    except (ValidationError, ValueError, TypeError) as e:
        return JSONResponse({"error": f"Invalid request: {e}"}, status_code=400)

    decision = await get_reminder_service().check_now(device_id, items, tz)
    return JSONResponse({
        "should_fire": decision.should_fire,
        "count": decision.count,
        "last_shown_day": decision.state.last_shown_day,
    })


async def selection_route(request: Request) -> JSONResponse:
    """Replace the picker selection for one catalog."""
    kind = _KINDS.get(request.path_params["kind"])
    if kind is None:
        return JSONResponse({"error": "Unknown catalog"}, status_code=404)

    device_id = _device_or_401()
    if isinstance(device_id, JSONResponse):
        return device_id

    body = await _json_body(request)
    ids = body.get("ids") if body else None
    if not isinstance(ids, list) or not all(isinstance(i, str) for i in ids):
        return JSONResponse({"error": "ids must be a list of strings"}, status_code=400)

    saved = get_preference_client().save_selection(hash_device_id(device_id), kind, frozenset(ids))
    if not saved:
        return JSONResponse({"error": "Failed to save selection."}, status_code=500)
    return JSONResponse({"kind": kind.value, "selected": len(set(ids))})


# ==================== Device Middleware ====================


class DeviceMiddleware(BaseHTTPMiddleware):
    """Attach the calling device id from the X-Device-Id header, when valid."""

    async def dispatch(self, request: Request, call_next):
        device_id = request.headers.get(DEVICE_HEADER, "").strip()
        if validate_device_id(device_id):
            current_device_id.set(device_id)
            logger.debug("Request from device: %s", hash_device_id(device_id)[:8])
        return await call_next(request)


# ==================== Create ASGI App ====================


def create_app() -> Starlette:
    """Create the Starlette application with MCP at root.

    The MCP streamable_http_app() handles /mcp/ internally when mounted at root.
    We use its lifespan context to ensure proper initialization.
    """
    mcp_app = mcp.streamable_http_app()

    routes = [
        Route("/health", health_check, methods=["GET"]),
        Route("/catalog/{kind}/organize", organize_route, methods=["POST"]),
        Route("/catalog/{kind}/selection", selection_route, methods=["PUT"]),
        Route("/items/classify", classify_route, methods=["POST"]),
        Route("/reminder/check", reminder_route, methods=["POST"]),
        Mount("/", app=mcp_app),
    ]

    app = Starlette(
        routes=routes,
        middleware=[
            Middleware(
                CORSMiddleware,
                allow_origins=["http://localhost:5173"],
                allow_methods=["GET", "POST", "PUT", "OPTIONS"],
                allow_headers=["*"],
            ),
            Middleware(DeviceMiddleware),
        ],
        lifespan=mcp_app.router.lifespan_context,
    )

    return app


# Create app at module level for Cloud Run
app = create_app()


def main() -> None:
    """Run the server."""
    port = int(os.environ.get("PORT", 8080))
    host = os.environ.get("HOST", "0.0.0.0")

    logger.info("Starting ExpiryAlert service on %s:%d", host, port)

    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
