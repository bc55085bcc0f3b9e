"""
Caller-facing results and the vendor echo payload.

With the front-end wafer SDK (Embedded mode) the embedding application must
return `vendor_payload` verbatim as the JSON body whenever `must_echo` is set.
The SDK recognizes the payload by the WX_SESSION_MAGIC_ID key.

Echo rules:
- login success: echo `{magic: "1", session: {id, skey}}`
- login failure: echo `{magic: "1", error: ERR_LOGIN_FAILED, message}`
- check success: never echoed
- check failure: echo `{magic: "1", error: <category>, message}`
Standalone mode never echoes. The error is always also set on `error`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from .domain import (
    INVALID_SESSION_CODES,
    WX_SESSION_MAGIC_ID,
    ErrorCategory,
    InputMode,
    Operation,
)
from .envelope import SessionData
from .errors import WaferError


@dataclass(frozen=True)
class CallerResult:
    must_echo: bool = False
    vendor_payload: Optional[Dict[str, Any]] = None
    data: SessionData = field(default_factory=SessionData)
    error: Optional[WaferError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> "CallerResult":
        """Raise the carried error, if any; return self otherwise."""
        if self.error is not None:
            raise self.error
        return self

    @classmethod
    def failed(cls, error: WaferError) -> "CallerResult":
        """Plain failure without any echo payload (local validation errors)."""
        return cls(error=error)


def check_error_category(error: WaferError) -> ErrorCategory:
    """Remap a check failure to the category the front-end SDK understands."""
    if error.code in INVALID_SESSION_CODES:
        return ErrorCategory.INVALID_SESSION
    return ErrorCategory.CHECK_LOGIN_FAILED


def error_category(operation: Operation, error: WaferError) -> ErrorCategory:
    if operation is Operation.LOGIN:
        return ErrorCategory.LOGIN_FAILED
    return check_error_category(error)


def _error_payload(category: ErrorCategory, error: WaferError) -> Dict[str, Any]:
    return {WX_SESSION_MAGIC_ID: "1", "error": category.value, "message": str(error)}


def _session_payload(data: SessionData) -> Dict[str, Any]:
    return {WX_SESSION_MAGIC_ID: "1", "session": {"id": data.session_id, "skey": data.session_key}}


def shape(
    operation: Union[Operation, str],
    mode: InputMode,
    *,
    data: Optional[SessionData] = None,
    error: Optional[WaferError] = None,
) -> CallerResult:
    """Build the CallerResult for one finished remote call."""
    op = operation if isinstance(operation, Operation) else Operation(operation)
    embedded = mode is InputMode.EMBEDDED

    if error is not None:
        if not embedded:
            return CallerResult.failed(error)
        return CallerResult(
            must_echo=True,
            vendor_payload=_error_payload(error_category(op, error), error),
            error=error,
        )

    data = data if data is not None else SessionData()
    if op is Operation.LOGIN and embedded:
        return CallerResult(must_echo=True, vendor_payload=_session_payload(data), data=data)
    return CallerResult(data=data)


__all__ = ["CallerResult", "check_error_category", "error_category", "shape"]
