from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, JSONResponse

from bugtracker.routers.bugs import get_bug_service

router = APIRouter(prefix="", tags=["pages"])


def _templates(request: Request):
    tpl = getattr(getattr(request.app, "state", None), "templates", None)
    if tpl:
        return tpl
    raise RuntimeError("Templates not configured")


@router.get("/", response_class=HTMLResponse)
def index(request: Request):
    templates = _templates(request)
    return templates.TemplateResponse(request, "index.html", {"api_base": "/api/bugs"})


@router.get("/health")
def health(request: Request):
    get_bug_service(request).ping()
    return JSONResponse({"status": "ok"})
