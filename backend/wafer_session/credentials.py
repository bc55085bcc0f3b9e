"""
Credential resolution for the login and check operations.

Why: The adapter accepts credentials from two places. With the front-end
wafer SDK (Embedded mode) they arrive as `X-WX-*` request headers; without it
(Standalone mode) the embedding application passes them as positional
arguments. Both sources are modelled as an `InputSource` variant and consumed
by a single table-driven routine, so the per-field presence rules live in one
place.

Behavior:
- Checks run in a fixed order and fail fast with a distinct, stable code.
- A credential set is only returned once every required field is non-empty.
- Nothing here performs I/O; the resolver runs before any request is built.

Security: Credential values are excluded from dataclass reprs. Do not log them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Mapping, Optional, Sequence, Tuple, Union

from .config import WaferConfig
from .domain import (
    WX_HEADER_CODE,
    WX_HEADER_ENCRYPTED_DATA,
    WX_HEADER_ID,
    WX_HEADER_IV,
    WX_HEADER_SKEY,
    InputMode,
    Operation,
    ReturnCode,
)
from .errors import ConfigurationError, InputError


@dataclass(frozen=True)
class HeaderLookup:
    """Header bag of the inbound request (Embedded mode)."""

    headers: Optional[Mapping[str, Any]]

    @classmethod
    def from_request(cls, request: Any) -> "HeaderLookup":
        """Wrap any request-like object exposing `.headers` (FastAPI, requests, ...)."""
        if request is None:
            return cls(None)
        return cls(getattr(request, "headers", request))

    def get(self, name: str) -> str:
        if self.headers is None:
            return ""
        value = self.headers.get(name)
        if value is None:
            # Plain dicts are case-sensitive; HTTP header names are not.
            lowered = name.lower()
            for key, candidate in self.headers.items():
                if str(key).lower() == lowered:
                    value = candidate
                    break
        return "" if value is None else str(value)


@dataclass(frozen=True)
class PositionalArgs:
    """Explicit credential arguments (Standalone mode)."""

    values: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", tuple(self.values))


InputSource = Union[HeaderLookup, PositionalArgs]


@dataclass(frozen=True)
class LoginCredentials:
    code: str = field(repr=False)
    encrypted_data: str = field(repr=False)
    iv: str = field(repr=False)

    operation: ClassVar[Operation] = Operation.LOGIN

    def params(self) -> Dict[str, str]:
        return {"code": self.code, "encrypt_data": self.encrypted_data, "iv": self.iv}


@dataclass(frozen=True)
class CheckCredentials:
    session_id: str
    session_key: str = field(repr=False)

    operation: ClassVar[Operation] = Operation.CHECK

    def params(self) -> Dict[str, str]:
        return {"id": self.session_id, "skey": self.session_key}


Credentials = Union[LoginCredentials, CheckCredentials]


@dataclass(frozen=True)
class _Field:
    name: str  # name used in error messages and InputError.field
    header: str


_FIELDS: Dict[Operation, Tuple[_Field, ...]] = {
    Operation.LOGIN: (
        _Field("code", WX_HEADER_CODE),
        _Field("encryptData", WX_HEADER_ENCRYPTED_DATA),
        _Field("iv", WX_HEADER_IV),
    ),
    Operation.CHECK: (
        _Field("id", WX_HEADER_ID),
        _Field("skey", WX_HEADER_SKEY),
    ),
}

_CREDENTIAL_TYPES = {
    Operation.LOGIN: LoginCredentials,
    Operation.CHECK: CheckCredentials,
}


def required_fields(operation: Operation) -> Tuple[str, ...]:
    """Names of the credential fields an operation requires, in argument order."""
    return tuple(f.name for f in _FIELDS[operation])


def resolve(
    operation: Union[Operation, str],
    config: WaferConfig,
    source: Optional[InputSource],
) -> Credentials:
    """Validate the configuration and pull the credentials for `operation`.

    Raises
    ------
    ConfigurationError:
        appid or auth server URL is blank.
    InputError:
        Embedded mode without a header bag, unknown operation, or a missing
        header/argument. `field` names the missing credential.
    """
    if not config.appid:
        raise ConfigurationError("appid is empty")
    if not config.auth_server_url:
        raise ConfigurationError("AuthServerUrl is empty")

    embedded = config.mode is InputMode.EMBEDDED
    if embedded and not (isinstance(source, HeaderLookup) and source.headers is not None):
        raise InputError(ReturnCode.PARAM_ERR, "use wafer sdk, http request required")

    op = Operation.parse(operation)
    if op is None:
        raise InputError(ReturnCode.PARAM_ERR, "invalid act, must in [login,check]")

    fields = _FIELDS[op]
    if embedded:
        values = _from_headers(fields, source)  # type: ignore[arg-type]
    else:
        args = source.values if isinstance(source, PositionalArgs) else ()
        values = _from_positional(op, fields, args)
    return _CREDENTIAL_TYPES[op](*values)


def _from_headers(fields: Sequence[_Field], source: HeaderLookup) -> Tuple[str, ...]:
    values = []
    for f in fields:
        value = source.get(f.header)
        if not value:
            raise InputError(
                ReturnCode.HEADER_ERR,
                f"use wafer sdk, request header {f.header} is empty",
                field=f.name,
            )
        values.append(value)
    return tuple(values)


def _from_positional(op: Operation, fields: Sequence[_Field], args: Sequence[Any]) -> Tuple[str, ...]:
    # Count mismatch is reported before any individual value is inspected.
    if len(args) < len(fields):
        raise InputError(
            ReturnCode.PARAM_ERR,
            f"{op.value} func require {len(fields)} params, {len(args)} params given",
        )
    values = []
    for idx, f in enumerate(fields):
        value = args[idx]
        if value is None or value == "":
            raise InputError(
                ReturnCode.PARAM_ERR,
                f"{op.value} func params[{idx}] {f.name} is empty",
                field=f.name,
            )
        values.append(str(value))
    return tuple(values)


__all__ = [
    "HeaderLookup",
    "PositionalArgs",
    "InputSource",
    "LoginCredentials",
    "CheckCredentials",
    "Credentials",
    "required_fields",
    "resolve",
]
