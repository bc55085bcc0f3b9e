"""
Error values for the wafer session adapter.

Every failure carries a numeric `code` and a `message`. Local failures use
the small fixed set of local codes (PARAM_ERR, HEADER_ERR, SERVE_ERR); remote
rejections forward the session server's code and message verbatim.
"""

from __future__ import annotations

from typing import Dict, Optional

from .domain import ReturnCode


class WaferError(Exception):
    """Base error carrying a numeric code and a human readable message."""

    def __init__(self, code: int, message: str):
        super().__init__(code, message)
        self.code = int(code)
        self.message = message

    def __str__(self) -> str:
        return f"code: {self.code}, message: {self.message}"

    def to_dict(self) -> Dict[str, object]:
        return {"code": self.code, "message": self.message}


class ConfigurationError(WaferError):
    """Adapter misconfigured (blank appid or auth server URL)."""

    def __init__(self, message: str):
        super().__init__(ReturnCode.PARAM_ERR, message)


class InputError(WaferError):
    """Caller-supplied headers or arguments are missing or malformed.

    `field` names the offending credential when one can be pinpointed.
    """

    def __init__(self, code: int, message: str, *, field: Optional[str] = None):
        super().__init__(code, message)
        self.field = field


class RemoteTransportError(WaferError):
    """Serializing, sending or decoding the remote call failed."""

    def __init__(self, message: str):
        super().__init__(ReturnCode.SERVE_ERR, message)


class RemoteProtocolError(WaferError):
    """The session server answered with a non-success return code."""

    @property
    def return_code(self) -> Optional[ReturnCode]:
        return ReturnCode.classify(self.code)


__all__ = [
    "WaferError",
    "ConfigurationError",
    "InputError",
    "RemoteTransportError",
    "RemoteProtocolError",
]
