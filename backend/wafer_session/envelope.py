"""
Wire models for the wafer session server.

Request:
    {"version": 1, "componentName": "MA",
     "interface": {"appid": ..., "interfaceName": ..., "para": {...}}}

Response:
    {"returnCode": 0, "returnMessage": "...",
     "returnData": {"id", "skey", "user_info": {...}, "duration"}}

`returnData` only carries meaning when `returnCode` is 0.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Union

from .domain import COMPONENT_NAME, PROTOCOL_VERSION, Operation, ReturnCode


@dataclass(frozen=True)
class RequestEnvelope:
    appid: str
    interface_name: str
    params: Dict[str, str] = field(default_factory=dict)
    version: int = PROTOCOL_VERSION
    component_name: str = COMPONENT_NAME

    def to_wire(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "componentName": self.component_name,
            "interface": {
                "appid": self.appid,
                "interfaceName": self.interface_name,
                "para": dict(self.params),
            },
        }


def build_envelope(operation: Union[Operation, str], appid: str, params: Mapping[str, str]) -> RequestEnvelope:
    """Pack params into the outbound envelope for `operation`."""
    op = operation if isinstance(operation, Operation) else Operation(operation)
    return RequestEnvelope(appid=appid, interface_name=op.interface_name, params=dict(params))


def _str(raw: Mapping[str, Any], key: str) -> str:
    """Read a string field; missing or null yields "", other types are rejected."""
    value = raw.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string")
    return value


def _int(raw: Mapping[str, Any], key: str) -> int:
    """Read an integer field; missing or null yields 0, other types are rejected."""
    value = raw.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{key} must be an integer")
    return value


def _object(raw: Any, key: str) -> Mapping[str, Any]:
    """Nested objects: missing or null yields {}, anything but an object is rejected."""
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise ValueError(f"{key} must be a JSON object")
    return raw


@dataclass(frozen=True)
class UserInfo:
    open_id: str = ""
    union_id: str = ""
    nick_name: str = ""
    gender: int = 0
    language: str = ""
    city: str = ""
    province: str = ""
    country: str = ""
    avatar_url: str = ""

    @classmethod
    def from_wire(cls, raw: Any) -> "UserInfo":
        raw = _object(raw, "user_info")
        return cls(
            open_id=_str(raw, "openId"),
            union_id=_str(raw, "unionId"),
            nick_name=_str(raw, "nickName"),
            gender=_int(raw, "gender"),
            language=_str(raw, "language"),
            city=_str(raw, "city"),
            province=_str(raw, "province"),
            country=_str(raw, "country"),
            avatar_url=_str(raw, "avatarUrl"),
        )

    def to_wire(self) -> Dict[str, Any]:
        return {
            "openId": self.open_id,
            "unionId": self.union_id,
            "nickName": self.nick_name,
            "gender": self.gender,
            "language": self.language,
            "city": self.city,
            "province": self.province,
            "country": self.country,
            "avatarUrl": self.avatar_url,
        }


@dataclass(frozen=True)
class SessionData:
    """Session returned by the server.

    session_id/session_key together identify the session; duration is the
    login validity in seconds and can usually be ignored by callers.
    """

    session_id: str = ""
    session_key: str = field(default="", repr=False)
    user_info: UserInfo = field(default_factory=UserInfo)
    duration: int = 0

    @property
    def is_empty(self) -> bool:
        return self == SessionData()

    @classmethod
    def from_wire(cls, raw: Any) -> "SessionData":
        raw = _object(raw, "returnData")
        return cls(
            session_id=_str(raw, "id"),
            session_key=_str(raw, "skey"),
            user_info=UserInfo.from_wire(raw.get("user_info")),
            duration=_int(raw, "duration"),
        )

    def to_wire(self) -> Dict[str, Any]:
        return {
            "id": self.session_id,
            "skey": self.session_key,
            "user_info": self.user_info.to_wire(),
            "duration": self.duration,
        }


@dataclass(frozen=True)
class ResponseEnvelope:
    code: int
    message: str = ""
    data: SessionData = field(default_factory=SessionData)

    @property
    def ok(self) -> bool:
        return self.code == ReturnCode.SUCCESS

    @classmethod
    def from_wire(cls, raw: Any) -> "ResponseEnvelope":
        """Parse a decoded response body.

        Raises ValueError when the body is not an object, carries no integer
        `returnCode`, or a present field has the wrong JSON type. Missing or
        null fields take zero values.
        """
        if not isinstance(raw, Mapping):
            raise ValueError("response body is not a JSON object")
        code = raw.get("returnCode")
        if isinstance(code, bool) or not isinstance(code, int):
            raise ValueError("response returnCode missing or not an integer")
        return cls(
            code=code,
            message=_str(raw, "returnMessage"),
            data=SessionData.from_wire(raw.get("returnData")),
        )


__all__ = [
    "RequestEnvelope",
    "build_envelope",
    "UserInfo",
    "SessionData",
    "ResponseEnvelope",
]
