# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# ==============================================================================

# Cloud functions for the spa admin backend: appointment toggle, admin
# profile, dashboard activity feed and staff photo management.
#
# This file containing Python cloud functions must be named main.py.
# See https://cloud.google.com/run/docs/write-functions#python for more info.

# Standard library imports
import json

# Third-party library imports
from firebase_functions import https_fn, logger, options

# Local application imports
from spa_backend import handlers
from spa_backend.dependencies import (
    get_activity_store,
    get_appointment_toggle,
    get_identity_provider,
    get_media_store,
)
from spa_backend.handlers import HandlerResult


def _to_response(result: HandlerResult) -> https_fn.Response:
    """Converts a handler result into a Flask response."""
    if result.body is None:
        return https_fn.Response(status=result.status, headers=result.headers)
    if isinstance(result.body, str):
        return https_fn.Response(
            result.body,
            status=result.status,
            headers=result.headers,
            mimetype="text/plain",
        )
    return https_fn.Response(
        json.dumps(result.body),
        status=result.status,
        headers=result.headers,
        mimetype="application/json",
    )


def _caller_id(req: https_fn.Request):
    return get_identity_provider().caller_id(req.headers.get("Authorization"))


@https_fn.on_request(memory=options.MemoryOption.MB_256)
def admin_profile(req: https_fn.Request) -> https_fn.Response:
    """
    Returns the admin profile of the authenticated caller.

    Args:
        req (https_fn.Request): The request, carrying a Firebase ID token in
            the Authorization header.

    Returns:
        200 with the profile, or 401 when no caller identity is present.
    """
    return _to_response(handlers.admin_profile(_caller_id(req)))


@https_fn.on_request(memory=options.MemoryOption.MB_256)
def dashboard_activity(req: https_fn.Request) -> https_fn.Response:
    """Returns the activity entries of the last 48 hours, newest first."""
    result = handlers.dashboard_activity(
        req.method, _caller_id(req), get_activity_store()
    )
    return _to_response(result)


@https_fn.on_request(memory=options.MemoryOption.MB_256)
def appointment(req: https_fn.Request) -> https_fn.Response:
    """
    Reads (GET) or flips (POST) the appointments-enabled flag.

    The flag is held in memory by each function instance; it resets on cold
    start and is not shared between instances.
    """
    result = handlers.appointment(req.method, get_appointment_toggle())
    if req.method == "POST":
        logger.info(f"Appointments enabled set to {result.body['enabled']}")
    return _to_response(result)


@https_fn.on_request(memory=options.MemoryOption.MB_256)
def staffs_list(req: https_fn.Request) -> https_fn.Response:
    return _to_response(handlers.staffs_list(req.method, get_media_store()))


@https_fn.on_request(memory=options.MemoryOption.MB_256)
def staffs_upload(req: https_fn.Request) -> https_fn.Response:
    """
    Uploads a staff photo. The body is either JSON with a `file` field or the
    file payload itself.
    """
    result = handlers.staffs_upload(
        req.method,
        req.get_json(silent=True),
        req.get_data(),
        get_media_store(),
    )
    if result.status == 200:
        logger.info(f"Uploaded staff photo {result.body['publicId']}")
    return _to_response(result)


@https_fn.on_request(memory=options.MemoryOption.MB_256)
def staffs_delete(req: https_fn.Request) -> https_fn.Response:
    result = handlers.staffs_delete(
        req.method, req.get_json(silent=True), get_media_store()
    )
    return _to_response(result)


@https_fn.on_request(memory=options.MemoryOption.MB_256)
def staffs_create_folder(req: https_fn.Request) -> https_fn.Response:
    result = handlers.staffs_create_folder(
        req.method, req.get_json(silent=True), get_media_store()
    )
    return _to_response(result)


@https_fn.on_request(memory=options.MemoryOption.MB_256)
def staffs_move(req: https_fn.Request) -> https_fn.Response:
    result = handlers.staffs_move(
        req.method, req.get_json(silent=True), get_media_store()
    )
    return _to_response(result)
