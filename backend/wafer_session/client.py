"""
HTTP client for the wafer session server.

Why: Keep the single outbound call (serialize, POST, decode, classify) in one
framework-agnostic place so the SDK facade only deals with values.

Behavior:
- Transport, serialization and decoding failures raise RemoteTransportError
  (SERVE_ERR) chained to the underlying exception.
- A non-zero `returnCode` raises RemoteProtocolError with the server's code
  and message unchanged. Category remapping happens in results.py.
- No retries. The HTTP status is not consulted; `returnCode` is authoritative.

Security: Never log request params or the returned session key.
"""

from __future__ import annotations

from typing import Dict, Optional
import json
import logging

# Small indirection to ease monkeypatching in tests
import requests as http

from .config import DEFAULT_TIMEOUT_SECONDS, WaferConfig
from .envelope import RequestEnvelope, ResponseEnvelope, SessionData
from .errors import RemoteProtocolError, RemoteTransportError

logger = logging.getLogger("wafer.session.client")

JSON_CONTENT_TYPE = "application/json;charset=utf-8"


def http_post(url: str, data: bytes, headers: Dict[str, str], timeout: Optional[float] = None):
    return http.post(url, data=data, headers=headers, timeout=DEFAULT_TIMEOUT_SECONDS if timeout is None else timeout)


class SessionClient:
    def __init__(self, config: WaferConfig):
        self.cfg = config

    def call(self, envelope: RequestEnvelope) -> SessionData:
        """Send `envelope` to the session server and return its session data.

        Raises
        ------
        RemoteTransportError:
            Encoding the request, the POST itself or decoding the response failed.
        RemoteProtocolError:
            The server answered with a non-success return code.
        """
        try:
            body = json.dumps(envelope.to_wire()).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise RemoteTransportError(str(exc)) from exc

        logger.debug("wafer call interface=%s url=%s", envelope.interface_name, self.cfg.auth_server_url)
        try:
            resp = http_post(
                self.cfg.auth_server_url,
                data=body,
                headers={"Content-Type": JSON_CONTENT_TYPE},
                timeout=self.cfg.timeout_seconds,
            )
        except http.RequestException as exc:
            logger.warning("wafer call failed interface=%s error=%s", envelope.interface_name, type(exc).__name__)
            raise RemoteTransportError(str(exc)) from exc

        try:
            parsed = ResponseEnvelope.from_wire(resp.json())
        except ValueError as exc:
            logger.warning(
                "wafer response undecodable interface=%s status=%s",
                envelope.interface_name,
                getattr(resp, "status_code", None),
            )
            raise RemoteTransportError(str(exc)) from exc

        if not parsed.ok:
            logger.info("wafer call rejected interface=%s code=%s", envelope.interface_name, parsed.code)
            raise RemoteProtocolError(parsed.code, parsed.message)
        return parsed.data


__all__ = ["SessionClient", "http_post", "JSON_CONTENT_TYPE"]
