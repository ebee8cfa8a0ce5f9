"""
FastAPI Web Application - 2Chat Chat Checker
============================================

JSON API over the search orchestrator, plus the static browser UI.
Every error leaves as {"success": false, "error": "..."} with an HTTP
status derived from the structured error kind.
"""

import logging
from pathlib import Path
from typing import Optional
from datetime import datetime, timezone
from contextlib import asynccontextmanager

from fastapi import FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from chat_checker import __version__
from chat_checker.application import SearchOrchestrator
from chat_checker.application.assembler import (
    groups_payload,
    history_payload,
    search_all_payload,
    search_payload,
)
from chat_checker.application.demo import demo_payload
from chat_checker.domain import ErrorKind, InvalidPhoneNumberError
from chat_checker.infrastructure.config import get_settings
from chat_checker.infrastructure.export import JsonExporter, sanitize_label
from chat_checker.infrastructure.twochat import TwoChatClient, TwoChatError

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).parent / "static"

# ── Globals ────────────────────────────────────────────────────────
orchestrator: Optional[SearchOrchestrator] = None
exporter: Optional[JsonExporter] = None

STATUS_BY_KIND = {
    ErrorKind.AUTH: 401,
    ErrorKind.ACCESS_DENIED: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INVALID_REQUEST: 422,
    ErrorKind.PROTOCOL: 502,
    ErrorKind.UNKNOWN: 502,
}

AVAILABLE_ENDPOINTS = [
    "GET /health",
    "GET /api/chat/groups/:phoneNumber",
    "GET /api/chat/groups/:groupUuid/messages",
    "POST /api/chat/search",
    "POST /api/chat/search-all",
    "GET /api/chat/demo",
]


def _get_orchestrator() -> SearchOrchestrator:
    global orchestrator
    if orchestrator is None:
        settings = get_settings()
        orchestrator = SearchOrchestrator(
            TwoChatClient(),
            max_workers=settings.search.max_workers,
        )
    return orchestrator


def _get_exporter() -> JsonExporter:
    global exporter
    if exporter is None:
        exporter = JsonExporter(get_settings().export_dir)
    return exporter


def _max_pages(requested: Optional[int]) -> int:
    if requested is None:
        return get_settings().search.default_max_pages
    return requested


# ── Lifespan ───────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    for issue in get_settings().validate():
        logger.warning(issue)
    _get_orchestrator()
    _get_exporter()
    logger.info("2Chat Chat Checker ready")
    yield


app = FastAPI(
    title="2Chat Chat Checker",
    description="WhatsApp group history via the 2Chat API",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info(f"{request.method} {request.url.path}")
    return await call_next(request)


# ── Error handlers ─────────────────────────────────────────────

def _error(status: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status, content={"success": False, "error": message, **extra})


@app.exception_handler(TwoChatError)
async def handle_twochat_error(request: Request, exc: TwoChatError):
    logger.error(f"2Chat error on {request.url.path}: {exc.kind.value} {exc.message}")
    return _error(STATUS_BY_KIND.get(exc.kind, 502), exc.message)


@app.exception_handler(InvalidPhoneNumberError)
async def handle_invalid_phone(request: Request, exc: InvalidPhoneNumberError):
    return _error(400, str(exc))


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    details = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', '')}"
        for err in exc.errors()
    )
    return _error(400, f"Validation Error: {details}")


@app.exception_handler(StarletteHTTPException)
async def handle_http_error(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return _error(404, "Endpoint not found", availableEndpoints=AVAILABLE_ENDPOINTS)
    return _error(exc.status_code, str(exc.detail))


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.url.path}: {exc}")
    return _error(500, str(exc) or "Internal server error")


# ── Request bodies ─────────────────────────────────────────────

class SearchRequest(BaseModel):
    phoneNumber: str
    groupTitle: Optional[str] = None
    maxPages: Optional[int] = None
    export: bool = False


class SearchAllRequest(BaseModel):
    groupTitle: Optional[str] = None
    maxPages: Optional[int] = None
    export: bool = False


# ── Pages ──────────────────────────────────────────────────────

@app.get("/", include_in_schema=False)
async def index():
    return FileResponse(STATIC_DIR / "index.html")


@app.get("/health")
async def health():
    return {
        "success": True,
        "message": "2Chat Chat Checker API is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": __version__,
    }


@app.get("/api")
async def api_index():
    return {
        "success": True,
        "message": "2Chat Chat Checker API",
        "version": __version__,
        "endpoints": {
            "health": "GET /health",
            "listGroups": "GET /api/chat/groups/:phoneNumber",
            "getChatHistory": "GET /api/chat/groups/:groupUuid/messages",
            "searchGroups": "POST /api/chat/search",
            "searchAllNumbers": "POST /api/chat/search-all",
            "demo": "GET /api/chat/demo",
        },
        "documentation": {
            "listGroups": "List all WhatsApp groups for a phone number",
            "getChatHistory": "Get chat history for a specific group (use ?export=true to save to file)",
            "searchGroups": "Search groups by title and get chat history (use export: true in body to save to file)",
            "searchAllNumbers": "Search all predefined numbers for groups and chat history",
            "demo": "Static demo data for trying the UI",
        },
    }


# ── Chat API ───────────────────────────────────────────────────

@app.get("/api/chat/groups/{phone_number}")
def list_groups(phone_number: str):
    groups = _get_orchestrator().list_groups(phone_number)
    return {"success": True, "data": groups_payload(phone_number, groups)}


@app.get("/api/chat/groups/{group_uuid}/messages")
def get_chat_history(
    group_uuid: str,
    max_pages: Optional[int] = Query(None, alias="maxPages"),
    export: bool = False,
):
    messages = _get_orchestrator().aggregator.aggregate(group_uuid, _max_pages(max_pages))
    result = {"success": True, "data": history_payload(group_uuid, messages)}

    if export:
        info = _get_exporter().export(result, "chat-history", group_uuid)
        result["export"] = info.to_dict()
    return result


@app.post("/api/chat/search")
def search_groups(body: SearchRequest):
    results = _get_orchestrator().search_number(
        body.phoneNumber, body.groupTitle, _max_pages(body.maxPages)
    )
    result = {"success": True, "data": search_payload(body.phoneNumber, body.groupTitle, results)}

    if body.export:
        label = sanitize_label(body.groupTitle or "all-groups")
        info = _get_exporter().export(result, "search-results", label)
        result["export"] = info.to_dict()
    return result


@app.post("/api/chat/search-all")
def search_all_numbers(body: SearchAllRequest):
    numbers = get_settings().search.predefined_numbers
    logger.info(f"Starting search across {len(numbers)} predefined numbers")

    search_result = _get_orchestrator().search(numbers, body.groupTitle, _max_pages(body.maxPages))
    result = {"success": True, "data": search_all_payload(search_result, body.groupTitle)}

    if body.export:
        label = sanitize_label(body.groupTitle or "all-groups")
        info = _get_exporter().export(result, "search-all-numbers", label)
        result["export"] = info.to_dict()
    return result


@app.get("/api/chat/demo")
async def get_demo_data():
    return {"success": True, "data": demo_payload()}
