"""
WaferSDK end to end against a recording fake session server.

Focus:
- local validation failures never reach the network
- success data passes through untransformed
- both error channels (error value and echo payload) agree
- repeated calls with identical input yield identical results
- one instance keeps no per-call state
"""
from __future__ import annotations

import json

import pytest
import requests

from wafer_session import CallerResult, SessionData, WaferConfig, WaferSDK
from wafer_session.domain import WX_SESSION_MAGIC_ID, ReturnCode
from wafer_session.errors import ConfigurationError, InputError, RemoteProtocolError, RemoteTransportError

from conftest import APPID, AUTH_URL, SESSION_WIRE


LOGIN_HEADERS = {"X-WX-Code": "c", "X-WX-Encrypted-Data": "e", "X-WX-IV": "i"}
CHECK_HEADERS = {"X-WX-Id": "id-1", "X-WX-Skey": "skey-1"}


def _embedded() -> WaferSDK:
    return WaferSDK(APPID, AUTH_URL, use_sdk=True)


def _standalone() -> WaferSDK:
    return WaferSDK(APPID, AUTH_URL)


def _sent_para(fake_server, idx: int = 0):
    return json.loads(fake_server.calls[idx]["data"])["interface"]["para"]


# --- Happy paths ------------------------------------------------------------------


def test_login_standalone(fake_server):
    result = _standalone().login("c", "e", "i")
    assert result.ok
    assert result.must_echo is False
    assert result.vendor_payload is None
    assert result.data.to_wire() == SESSION_WIRE
    assert _sent_para(fake_server) == {"code": "c", "encrypt_data": "e", "iv": "i"}


def test_login_embedded_echoes_session(fake_server):
    result = _embedded().login(headers=LOGIN_HEADERS)
    assert result.ok and result.must_echo
    assert result.vendor_payload == {WX_SESSION_MAGIC_ID: "1", "session": {"id": "session-uuid-1", "skey": "skey-abc"}}
    assert result.data.to_wire() == SESSION_WIRE


def test_check_standalone(fake_server):
    result = _standalone().check("id-1", "skey-1")
    assert result.ok
    assert result.data.user_info.open_id == "o-123"
    assert _sent_para(fake_server) == {"id": "id-1", "skey": "skey-1"}
    assert json.loads(fake_server.calls[0]["data"])["interface"]["interfaceName"] == "qcloud.cam.auth"


def test_check_embedded_success_does_not_echo(fake_server):
    result = _embedded().check(headers=CHECK_HEADERS)
    assert result.ok
    assert result.must_echo is False
    assert result.vendor_payload is None
    assert result.data.to_wire() == SESSION_WIRE


def test_embedded_accepts_request_objects(fake_server):
    class _Req:
        headers = CHECK_HEADERS

    assert _embedded().check(headers=_Req()).ok


def test_from_config_matches_constructor(fake_server):
    cfg = WaferConfig(appid=APPID, auth_server_url=AUTH_URL, use_sdk=True, timeout_seconds=2.0)
    sdk = WaferSDK.from_config(cfg)
    assert sdk.cfg == cfg
    sdk.check(headers=CHECK_HEADERS)
    assert fake_server.calls[0]["timeout"] == 2.0


# --- Local failures never hit the network ----------------------------------------


@pytest.mark.parametrize("missing", list(LOGIN_HEADERS))
def test_embedded_login_missing_header_makes_no_call(fake_server, missing):
    headers = {k: v for k, v in LOGIN_HEADERS.items() if k != missing}
    result = _embedded().login(headers=headers)
    assert isinstance(result.error, InputError)
    assert result.error.code == ReturnCode.HEADER_ERR
    assert missing in result.error.message
    assert result.must_echo is False and result.vendor_payload is None
    assert result.data == SessionData()
    assert fake_server.calls == []


@pytest.mark.parametrize("args", [("", "skey-1"), ("id-1", ""), ("id-1",)])
def test_standalone_check_bad_args_makes_no_call(fake_server, args):
    result = _standalone().check(*args)
    assert isinstance(result.error, InputError)
    assert result.error.code == ReturnCode.PARAM_ERR
    assert fake_server.calls == []


def test_embedded_without_headers_makes_no_call(fake_server):
    result = _embedded().login()
    assert result.error.message == "use wafer sdk, http request required"
    assert fake_server.calls == []


def test_misconfigured_sdk_makes_no_call(fake_server):
    result = WaferSDK("", AUTH_URL).login("c", "e", "i")
    assert isinstance(result.error, ConfigurationError)
    assert result.error.message == "appid is empty"
    assert fake_server.calls == []


# --- Remote failures ----------------------------------------------------------------


def test_embedded_check_expired_skey_is_invalid_session(fake_server):
    fake_server.body = {"returnCode": 60011, "returnMessage": "skey expired", "returnData": SESSION_WIRE}
    result = _embedded().check(headers=CHECK_HEADERS)
    assert isinstance(result.error, RemoteProtocolError)
    assert result.error.code == 60011
    assert result.must_echo
    assert result.vendor_payload["error"] == "ERR_INVALID_SESSION"
    assert result.vendor_payload["message"] == "code: 60011, message: skey expired"
    # returnData is ignored on failure
    assert result.data == SessionData()


def test_embedded_check_other_code_is_check_login_failed(fake_server):
    fake_server.body = {"returnCode": 1, "returnMessage": "boom"}
    result = _embedded().check(headers=CHECK_HEADERS)
    assert result.vendor_payload["error"] == "ERR_CHECK_LOGIN_FAILED"


def test_embedded_login_failure_payload(fake_server):
    fake_server.body = {"returnCode": 60012, "returnMessage": "wx session failed"}
    result = _embedded().login(headers=LOGIN_HEADERS)
    assert result.vendor_payload == {
        WX_SESSION_MAGIC_ID: "1",
        "error": "ERR_LOGIN_FAILED",
        "message": "code: 60012, message: wx session failed",
    }
    assert result.error.code == 60012


def test_standalone_timeout_is_serve_err_without_payload(fake_server):
    fake_server.exc = requests.Timeout("read timed out")
    result = _standalone().login("c", "e", "i")
    assert isinstance(result.error, RemoteTransportError)
    assert result.error.code == ReturnCode.SERVE_ERR
    assert result.vendor_payload is None
    assert len(fake_server.calls) == 1  # no retry


# --- Idempotence & call-local state ---------------------------------------------------


def test_identical_calls_yield_identical_results(fake_server):
    sdk = _embedded()
    first = sdk.login(headers=LOGIN_HEADERS)
    second = sdk.login(headers=LOGIN_HEADERS)
    assert first == second
    assert len(fake_server.calls) == 2


def test_instance_keeps_no_credentials_between_calls(fake_server):
    sdk = _standalone()
    sdk.check("id-1", "skey-1")
    result = sdk.check("id-2", "")
    assert isinstance(result.error, InputError)
    assert len(fake_server.calls) == 1
    assert not any("skey-1" in repr(v) for v in vars(sdk).values())


def test_failed_result_shape():
    err = InputError(1001, "x")
    assert CallerResult.failed(err) == CallerResult(must_echo=False, vendor_payload=None, data=SessionData(), error=err)


@pytest.mark.parametrize("return_data", ["oops", [1, 2], {"id": 5, "skey": {"x": 1}, "duration": "abc"}])
def test_embedded_login_with_malformed_session_data_fails(fake_server, return_data):
    fake_server.body = {"returnCode": 0, "returnData": return_data}
    result = _embedded().login(headers=LOGIN_HEADERS)
    assert isinstance(result.error, RemoteTransportError)
    assert result.error.code == ReturnCode.SERVE_ERR
    assert result.vendor_payload[WX_SESSION_MAGIC_ID] == "1"
    assert result.vendor_payload["error"] == "ERR_LOGIN_FAILED"
    assert "session" not in result.vendor_payload
    assert result.data == SessionData()
