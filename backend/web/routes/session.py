"""
Wafer session endpoints for mini-program clients using the wafer SDK.

Why:
    The front-end wafer SDK sends its credentials as `X-WX-*` headers and
    expects a magic-tagged JSON body back. These routes run the adapter in
    Embedded mode and hand the vendor payload back verbatim.

Notes:
    - Echoed payloads are returned with status 200; the front-end SDK reads
      the outcome from the body, not the status.
    - Errors without an echo payload (local validation, misconfiguration) map
      to 400/500 with `{"code": code, "message": ...}`.
    - Handlers are sync so the blocking session-server call runs in the
      threadpool.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Optional
import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from wafer_session import ConfigurationError, InputError, WaferError, WaferSDK, load_wafer_config

session_router = APIRouter(tags=["Session"])
logger = logging.getLogger("wafer.web.session")

_SDK: Optional[WaferSDK] = None


def get_sdk() -> WaferSDK:
    """Return the shared SDK, building it from WAFER_* env vars on first use.

    These routes serve the front-end wafer SDK, so Embedded mode is forced
    regardless of WAFER_USE_SDK.
    """
    global _SDK
    if _SDK is None:
        _SDK = WaferSDK.from_config(replace(load_wafer_config(), use_sdk=True))
    return _SDK


def set_sdk(sdk: Optional[WaferSDK]) -> None:
    """Replace the shared SDK (tests, custom wiring). None resets to env config."""
    global _SDK
    _SDK = sdk


def _private_response(body: dict, *, status_code: int = 200) -> JSONResponse:
    return JSONResponse(body, status_code=status_code, headers={"Cache-Control": "private, no-store"})


def _error_response(err: WaferError) -> JSONResponse:
    if isinstance(err, ConfigurationError):
        status = 500
    elif isinstance(err, InputError):
        status = 400
    else:
        status = 502
    return _private_response(err.to_dict(), status_code=status)


@session_router.get("/login")
def wafer_login(request: Request):
    """Log a mini-program user in with the X-WX-Code/Encrypted-Data/IV headers."""
    result = get_sdk().login(headers=request.headers)
    if result.must_echo:
        return _private_response(result.vendor_payload or {})
    if result.error is not None:
        logger.info("wafer login failed code=%s", result.error.code)
        return _error_response(result.error)
    return _private_response({"code": 0, "data": result.data.to_wire()})


@session_router.get("/user")
def wafer_user(request: Request):
    """Check the session carried in X-WX-Id/X-WX-Skey and return the user."""
    result = get_sdk().check(headers=request.headers)
    if result.must_echo:
        return _private_response(result.vendor_payload or {})
    if result.error is not None:
        logger.info("wafer check failed code=%s", result.error.code)
        return _error_response(result.error)
    return _private_response({"code": 0, "data": result.data.to_wire()})
