"""
HTTP routes for the FastAPI deployment of the spa admin API.
"""

from __future__ import annotations

import json
from typing import Any

from fastapi import APIRouter, Depends, Header, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse

from spa_backend import handlers
from spa_backend.activity import ActivityStore
from spa_backend.dependencies import (
    get_activity_store,
    get_appointment_toggle,
    get_identity_provider,
    get_media_store,
)
from spa_backend.handlers import HandlerResult
from spa_backend.identity import IdentityProvider
from spa_backend.media import MediaStore
from spa_backend.toggle import AppointmentToggle

router = APIRouter()

# Routes accept every method so the handlers, not the router, decide which
# ones are allowed and how a rejection looks.
ANY_METHOD = ["GET", "HEAD", "OPTIONS", "POST", "PUT", "PATCH", "DELETE"]


def to_response(result: HandlerResult) -> Response:
    if result.body is None:
        return Response(status_code=result.status, headers=result.headers)
    if isinstance(result.body, str):
        return PlainTextResponse(
            result.body, status_code=result.status, headers=result.headers
        )
    return JSONResponse(result.body, status_code=result.status, headers=result.headers)


async def _read_body(request: Request) -> tuple[Any, bytes]:
    raw_body = await request.body()
    try:
        payload = json.loads(raw_body) if raw_body else None
    except ValueError:
        payload = None
    return payload, raw_body


@router.get("/health", tags=["System"])
def health_check():
    return {"status": "healthy"}


@router.api_route("/admin/profile", methods=ANY_METHOD)
def admin_profile(
    authorization: str | None = Header(default=None),
    identity: IdentityProvider = Depends(get_identity_provider),
):
    return to_response(handlers.admin_profile(identity.caller_id(authorization)))


@router.api_route("/admin/dashboard/activity", methods=ANY_METHOD)
def dashboard_activity(
    request: Request,
    authorization: str | None = Header(default=None),
    identity: IdentityProvider = Depends(get_identity_provider),
    store: ActivityStore = Depends(get_activity_store),
):
    caller_id = identity.caller_id(authorization)
    return to_response(handlers.dashboard_activity(request.method, caller_id, store))


@router.api_route("/appointment", methods=ANY_METHOD)
def appointment(
    request: Request,
    toggle: AppointmentToggle = Depends(get_appointment_toggle),
):
    return to_response(handlers.appointment(request.method, toggle))


@router.api_route("/media/staffs/list", methods=ANY_METHOD)
def staffs_list(request: Request, media: MediaStore = Depends(get_media_store)):
    return to_response(handlers.staffs_list(request.method, media))


@router.api_route("/media/staffs/upload", methods=ANY_METHOD)
async def staffs_upload(
    request: Request, media: MediaStore = Depends(get_media_store)
):
    payload, raw_body = await _read_body(request)
    return to_response(
        handlers.staffs_upload(request.method, payload, raw_body, media)
    )


@router.api_route("/media/staffs/delete", methods=ANY_METHOD)
async def staffs_delete(
    request: Request, media: MediaStore = Depends(get_media_store)
):
    payload, _ = await _read_body(request)
    return to_response(handlers.staffs_delete(request.method, payload, media))


@router.api_route("/media/staffs/create-folder", methods=ANY_METHOD)
async def staffs_create_folder(
    request: Request, media: MediaStore = Depends(get_media_store)
):
    payload, _ = await _read_body(request)
    return to_response(
        handlers.staffs_create_folder(request.method, payload, media)
    )


@router.api_route("/media/staffs/move", methods=ANY_METHOD)
async def staffs_move(
    request: Request, media: MediaStore = Depends(get_media_store)
):
    payload, _ = await _read_body(request)
    return to_response(handlers.staffs_move(request.method, payload, media))
