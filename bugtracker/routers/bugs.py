from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Request
from fastapi.responses import JSONResponse, Response

from bugtracker.services.bug_service import BugService

router = APIRouter(prefix="/api/bugs", tags=["bugs"])


def get_bug_service(request: Request) -> BugService:
    svc = getattr(getattr(request.app, "state", None), "bug_service", None)
    if not svc:
        raise RuntimeError("BugService not configured")
    return svc


@router.post("")
def create_bug(request: Request, payload: Any = Body(None)):
    bug = get_bug_service(request).create(payload)
    return JSONResponse(bug.to_dict(), status_code=201)


@router.get("")
def list_bugs(request: Request):
    bugs = get_bug_service(request).list()
    return JSONResponse([bug.to_dict() for bug in bugs])


@router.put("/{bug_id}")
def update_bug(bug_id: str, request: Request, payload: Any = Body(None)):
    bug = get_bug_service(request).update(bug_id, payload)
    return JSONResponse(bug.to_dict() if bug else None)


@router.delete("/{bug_id}")
def delete_bug(bug_id: str, request: Request):
    get_bug_service(request).delete(bug_id)
    return Response(status_code=204)
