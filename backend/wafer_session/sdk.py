"""
WaferSDK: login and session check against the wafer session server.

Usage (Standalone, credentials passed explicitly):

    sdk = WaferSDK("wx-appid", "http://auth.local/mina_auth/")
    result = sdk.login(code, encrypted_data, iv)
    if not result.ok:
        ...

Usage (Embedded, front-end uses the wafer SDK and sends X-WX-* headers):

    sdk = WaferSDK("wx-appid", "http://auth.local/mina_auth/", use_sdk=True)
    result = sdk.login(headers=request.headers)
    if result.must_echo:
        return JSONResponse(result.vendor_payload)

The instance keeps only its configuration. Credentials, envelope and
response stay local to each call, so one instance may serve concurrent
requests.
"""

from __future__ import annotations

from typing import Any, Optional
import logging

from .client import SessionClient
from .config import DEFAULT_TIMEOUT_SECONDS, WaferConfig
from .credentials import HeaderLookup, InputSource, PositionalArgs, resolve
from .domain import InputMode, Operation
from .envelope import build_envelope
from .errors import WaferError
from .results import CallerResult, shape

logger = logging.getLogger("wafer.session.sdk")


class WaferSDK:
    def __init__(
        self,
        appid: str,
        auth_server_url: str,
        use_sdk: bool = False,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        self.cfg = WaferConfig(
            appid=appid,
            auth_server_url=auth_server_url,
            use_sdk=use_sdk,
            timeout_seconds=timeout_seconds,
        )
        self.client = SessionClient(self.cfg)

    @classmethod
    def from_config(cls, config: WaferConfig) -> "WaferSDK":
        return cls(
            appid=config.appid,
            auth_server_url=config.auth_server_url,
            use_sdk=config.use_sdk,
            timeout_seconds=config.timeout_seconds,
        )

    @property
    def mode(self) -> InputMode:
        return self.cfg.mode

    def login(self, *params: str, headers: Any = None) -> CallerResult:
        """Exchange a wx.login code plus encrypted user data for a session.

        Standalone: `params` are (code, encrypted_data, iv).
        Embedded: `headers` is the inbound header bag or request object.
        """
        return self._run(Operation.LOGIN, params, headers)

    def check(self, *params: str, headers: Any = None) -> CallerResult:
        """Verify a session previously returned by `login`.

        Standalone: `params` are (session_id, session_key).
        Embedded: `headers` is the inbound header bag or request object.
        """
        return self._run(Operation.CHECK, params, headers)

    def _source(self, params: tuple, headers: Any) -> Optional[InputSource]:
        if self.mode is InputMode.EMBEDDED:
            return HeaderLookup.from_request(headers) if headers is not None else None
        return PositionalArgs(params)

    def _run(self, operation: Operation, params: tuple, headers: Any) -> CallerResult:
        try:
            credentials = resolve(operation, self.cfg, self._source(params, headers))
        except WaferError as exc:
            logger.debug("wafer %s rejected locally code=%s", operation.value, exc.code)
            return CallerResult.failed(exc)

        envelope = build_envelope(operation, self.cfg.appid, credentials.params())
        try:
            data = self.client.call(envelope)
        except WaferError as exc:
            return shape(operation, self.mode, error=exc)
        return shape(operation, self.mode, data=data)


__all__ = ["WaferSDK"]
