"""
Wafer session domain constants and enumerations.

Why:
- Centralize header names, interface identifiers and return codes so the
  resolver, client and result shaper cannot drift apart.
- Model the remote service's numeric codes as a named enumeration with an
  explicit unknown fallback instead of bare integers.
"""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Optional

# Inbound headers set by the front-end wafer SDK (Embedded mode).
WX_HEADER_CODE = "X-WX-Code"
WX_HEADER_ENCRYPTED_DATA = "X-WX-Encrypted-Data"
WX_HEADER_IV = "X-WX-IV"
WX_HEADER_ID = "X-WX-Id"
WX_HEADER_SKEY = "X-WX-Skey"

# Key the front-end SDK uses to recognize a session payload.
WX_SESSION_MAGIC_ID = "F2C224D4-2BCE-4C64-AF9F-A6D872000D1A"

# Outbound envelope constants.
PROTOCOL_VERSION = 1
COMPONENT_NAME = "MA"

INTERFACE_LOGIN = "qcloud.cam.id_skey"
INTERFACE_CHECK = "qcloud.cam.auth"


class Operation(str, Enum):
    LOGIN = "login"
    CHECK = "check"

    @property
    def interface_name(self) -> str:
        return INTERFACE_LOGIN if self is Operation.LOGIN else INTERFACE_CHECK

    @classmethod
    def parse(cls, value: "Operation | str") -> Optional["Operation"]:
        """Return the matching operation, or None for anything unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


class InputMode(str, Enum):
    EMBEDDED = "embedded"  # credentials from inbound request headers
    STANDALONE = "standalone"  # credentials passed as arguments


class ReturnCode(IntEnum):
    SUCCESS = 0
    PARAM_ERR = 1001
    HEADER_ERR = 1002
    SERVE_ERR = 2000
    SKEY_EXPIRED = 60011
    WX_SESSION_FAILED = 60012

    @classmethod
    def classify(cls, code: int) -> Optional["ReturnCode"]:
        """Map a raw code to a known member; None means unknown/other."""
        try:
            return cls(int(code))
        except (TypeError, ValueError):
            return None


class ErrorCategory(str, Enum):
    LOGIN_FAILED = "ERR_LOGIN_FAILED"
    INVALID_SESSION = "ERR_INVALID_SESSION"
    CHECK_LOGIN_FAILED = "ERR_CHECK_LOGIN_FAILED"


# Remote codes that mean the session itself is no longer usable.
INVALID_SESSION_CODES = frozenset({ReturnCode.SKEY_EXPIRED, ReturnCode.WX_SESSION_FAILED})

__all__ = [
    "WX_HEADER_CODE",
    "WX_HEADER_ENCRYPTED_DATA",
    "WX_HEADER_IV",
    "WX_HEADER_ID",
    "WX_HEADER_SKEY",
    "WX_SESSION_MAGIC_ID",
    "PROTOCOL_VERSION",
    "COMPONENT_NAME",
    "INTERFACE_LOGIN",
    "INTERFACE_CHECK",
    "Operation",
    "InputMode",
    "ReturnCode",
    "ErrorCategory",
    "INVALID_SESSION_CODES",
]
