"""
Static configuration for the wafer session adapter.

The adapter itself never reads the environment; `load_wafer_config` exists
for embedding applications (see web/main.py) that prefer env-driven setup.
"""

from __future__ import annotations

from dataclasses import dataclass
import os

from .domain import InputMode

DEFAULT_TIMEOUT_SECONDS = 5.0


@dataclass(frozen=True)
class WaferConfig:
    appid: str  # mini-program appid sent with every remote call
    auth_server_url: str  # wafer session server endpoint, e.g. http://auth:9993/mina_auth/
    use_sdk: bool = False  # front-end uses the wafer SDK -> read credentials from headers
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    @property
    def mode(self) -> InputMode:
        return InputMode.EMBEDDED if self.use_sdk else InputMode.STANDALONE


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def load_wafer_config() -> WaferConfig:
    """Build a WaferConfig from WAFER_* environment variables."""
    raw_timeout = (os.getenv("WAFER_TIMEOUT_SECONDS", "") or "").strip()
    try:
        timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT_SECONDS
    except ValueError:
        timeout = DEFAULT_TIMEOUT_SECONDS
    return WaferConfig(
        appid=(os.getenv("WAFER_APPID", "") or "").strip(),
        auth_server_url=(os.getenv("WAFER_AUTH_SERVER_URL", "") or "").strip(),
        use_sdk=_env_flag("WAFER_USE_SDK"),
        timeout_seconds=timeout,
    )


__all__ = ["WaferConfig", "load_wafer_config", "DEFAULT_TIMEOUT_SECONDS"]
