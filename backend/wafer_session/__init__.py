"""Wafer session adapter: login and session check against a wafer session server."""

from .config import WaferConfig, load_wafer_config
from .credentials import CheckCredentials, HeaderLookup, LoginCredentials, PositionalArgs, resolve
from .domain import ErrorCategory, InputMode, Operation, ReturnCode, WX_SESSION_MAGIC_ID
from .envelope import RequestEnvelope, ResponseEnvelope, SessionData, UserInfo, build_envelope
from .errors import (
    ConfigurationError,
    InputError,
    RemoteProtocolError,
    RemoteTransportError,
    WaferError,
)
from .results import CallerResult, shape
from .sdk import WaferSDK

__all__ = [
    "WaferSDK",
    "WaferConfig",
    "load_wafer_config",
    "HeaderLookup",
    "PositionalArgs",
    "LoginCredentials",
    "CheckCredentials",
    "resolve",
    "Operation",
    "InputMode",
    "ReturnCode",
    "ErrorCategory",
    "WX_SESSION_MAGIC_ID",
    "RequestEnvelope",
    "ResponseEnvelope",
    "SessionData",
    "UserInfo",
    "build_envelope",
    "WaferError",
    "ConfigurationError",
    "InputError",
    "RemoteTransportError",
    "RemoteProtocolError",
    "CallerResult",
    "shape",
]
