"""FastAPI server exposing the Notion bridge endpoints.

append_by_title returns a non-null ``warning`` when the only search result was
picked without an exact title match. The Express service this replaces always
sent ``warning: null``.
"""

import json
import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

import uvicorn
from fastapi import APIRouter, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute

from ..config.config_schema import AppConfig
from ..notion.client import NotionClient, normalize_page_id
from ..notion.flattener import BlockFlattener
from ..notion.models import CandidateSelection
from ..notion.resolver import TitleResolver
from ..notion.writer import ContentWriter
from .auth import ApiKeyMiddleware
from .errors import (
    ApiError,
    BadRequestError,
    PayloadTooLargeError,
    Utf8JSONResponse,
    error_response,
)

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "No page found with that title."
AMBIGUOUS_MESSAGE = "Multiple matches. Please specify the exact page title."
AMBIGUOUS_REPLACE_MESSAGE = "Multiple matches. Please specify the exact page title before replacing."
CONFIRM_MESSAGE = "This will clear existing content. Set confirm=true to proceed."
NON_EXACT_WARNING = "Not an exact title match; the only candidate was selected."


class GuardedRoute(APIRoute):
    """Route that turns unexpected failures into a 500 JSON error."""

    def get_route_handler(self):
        handler = super().get_route_handler()

        async def guarded_handler(request: Request):
            try:
                return await handler(request)
            except (ApiError, HTTPException, RequestValidationError):
                raise
            except Exception as e:
                logger.exception(f"{request.method} {request.url.path} failed: {e}")
                return error_response(ApiError(str(e) or e.__class__.__name__))

        return guarded_handler


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value)


class NotionBridgeServer:
    """HTTP front end over the flattener, resolver and writer."""

    def __init__(self, config: AppConfig, notion: NotionClient):
        """
        Initialize server.

        Args:
            config: Application configuration
            notion: NotionClient shared by all requests
        """
        self.config = config
        self.notion = notion
        self.flattener = BlockFlattener(notion, max_depth=config.notion.max_depth)
        self.resolver = TitleResolver(notion, search_limit=config.notion.search_limit)
        self.writer = ContentWriter(
            notion,
            archive_batch_size=config.notion.archive_batch_size,
            archive_pause_seconds=config.notion.archive_pause_seconds,
        )
        self._server: Optional[uvicorn.Server] = None

        self.app = FastAPI(
            title="Notion Bridge",
            default_response_class=Utf8JSONResponse,
            lifespan=self._lifespan,
        )
        self.app.add_middleware(
            ApiKeyMiddleware,
            api_key=config.auth.api_key,
            header_name=config.auth.header_name,
        )
        # Added last so it wraps auth and answers preflight requests itself
        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=config.server.cors_origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )
        self._setup_exception_handlers()
        self._setup_routes()

    @asynccontextmanager
    async def _lifespan(self, app: FastAPI):
        yield
        await self.notion.aclose()

    def _setup_exception_handlers(self):
        """Render domain errors as JSON bodies."""

        @self.app.exception_handler(ApiError)
        async def handle_api_error(request: Request, exc: ApiError):
            return error_response(exc)

    def _setup_routes(self):
        """Configure FastAPI routes."""
        router = APIRouter(route_class=GuardedRoute)

        @router.get("/health")
        async def health():
            return {"ok": True}

        @router.get("/find_page")
        async def find_page(title: Optional[str] = None):
            """List pages whose title matches the query."""
            if not title:
                raise BadRequestError("title required")

            results = await self.resolver.find(title)
            return {
                "ok": True,
                "query": title,
                "results": [candidate.to_dict() for candidate in results],
            }

        @router.get("/read_page")
        async def read_page(page_id: Optional[str] = None):
            """Return the page's text, nested blocks included."""
            if not page_id:
                raise BadRequestError("page_id required")

            text = await self.flattener.flatten(normalize_page_id(page_id))
            return {"ok": True, "text": text}

        @router.post("/update_page")
        async def update_page(request: Request):
            """Append text to a page given by ID."""
            body = await self._json_body(request)
            page_id, content = body.get("page_id"), body.get("content")
            if not _is_text(page_id) or not isinstance(content, str):
                raise BadRequestError("page_id and content required")

            appended = await self.writer.append_text(normalize_page_id(page_id), content)
            return {"ok": True, "appended": appended}

        @router.post("/create_page")
        async def create_page(request: Request):
            """Create a page under a parent page."""
            body = await self._json_body(request)
            parent_page_id = body.get("parent_page_id")
            title, content = body.get("title"), body.get("content")
            if not _is_text(parent_page_id) or not _is_text(title) or not isinstance(content, str):
                raise BadRequestError("parent_page_id, title, content required")

            created = await self.writer.create_page(
                normalize_page_id(parent_page_id), title, content
            )
            return {"ok": True, "page_id": created.page_id, "url": created.url}

        @router.post("/append_by_title")
        async def append_by_title(request: Request):
            """Find a page by title and append text to it."""
            body = await self._json_body(request)
            title, content = body.get("title"), body.get("content")
            if not _is_text(title) or not isinstance(content, str):
                raise BadRequestError("title and content required")

            selection = await self.resolver.resolve(title)
            if not selection.resolved:
                raise self._unresolved(selection, AMBIGUOUS_MESSAGE)

            picked = selection.picked
            appended = await self.writer.append_text(picked.page_id, content)
            return {
                "ok": True,
                "appended": appended,
                "page_id": picked.page_id,
                "page_title": picked.title,
                "page_url": picked.url,
                "warning": None if selection.exact else NON_EXACT_WARNING,
            }

        @router.post("/replace_by_title")
        async def replace_by_title(request: Request):
            """Find a page by title and replace its content."""
            body = await self._json_body(request)
            title, content = body.get("title"), body.get("content")
            if not _is_text(title) or not isinstance(content, str):
                raise BadRequestError("title and content required")

            if body.get("confirm") is not True:
                raise BadRequestError(CONFIRM_MESSAGE)

            selection = await self.resolver.resolve(title)
            if not selection.resolved:
                raise self._unresolved(selection, AMBIGUOUS_REPLACE_MESSAGE)

            picked = selection.picked
            result = await self.writer.replace_text(picked.page_id, content, confirm=True)
            return {
                "ok": True,
                "cleared_blocks": result.cleared_blocks,
                "appended": result.appended,
                "page_id": picked.page_id,
                "page_title": picked.title,
                "page_url": picked.url,
            }

        self.app.include_router(router)

    async def _json_body(self, request: Request) -> Dict[str, Any]:
        """
        Parse the request body as UTF-8 JSON.

        Bodies without a JSON content type, and JSON values that are not
        objects, are treated as empty.

        Raises:
            PayloadTooLargeError: If the body exceeds server.max_body_bytes
            BadRequestError: If the body cannot be parsed
        """
        if "application/json" not in request.headers.get("content-type", ""):
            return {}

        limit = self.config.server.max_body_bytes
        declared = request.headers.get("content-length", "")
        if declared.isdigit() and int(declared) > limit:
            raise PayloadTooLargeError("Request body too large")

        raw = await request.body()
        if len(raw) > limit:
            raise PayloadTooLargeError("Request body too large")
        if not raw:
            return {}

        try:
            body = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError):
            raise BadRequestError("Invalid JSON body")

        return body if isinstance(body, dict) else {}

    @staticmethod
    def _unresolved(selection: CandidateSelection, ambiguous_message: str) -> ApiError:
        """Error answered with HTTP 200 when a title did not resolve to one page."""
        message = ambiguous_message if selection.candidates else NOT_FOUND_MESSAGE
        return ApiError(
            message,
            status_code=200,
            candidates=[candidate.to_dict() for candidate in selection.candidates],
        )

    async def start(self) -> None:
        """Start the web server."""
        config = uvicorn.Config(
            self.app,
            host=self.config.server.host,
            port=self.config.server.port,
            log_level="warning",
            access_log=False,
        )
        self._server = uvicorn.Server(config)
        await self._server.serve()

    async def stop(self) -> None:
        """Stop the web server."""
        if self._server:
            self._server.should_exit = True

    def get_url(self) -> str:
        """Get the base URL of the server."""
        return f"http://{self.config.server.host}:{self.config.server.port}"
