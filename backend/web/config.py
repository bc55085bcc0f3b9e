"""
Startup configuration checks for the wafer session web service.

Why: A misconfigured adapter answers every request with PARAM_ERR, which is
easy to miss in production. This guard aborts startup on obviously broken
settings in production/staging while keeping local development permissive.

Permissions: The caller needs no special privileges. The function simply reads
environment variables and raises `SystemExit` on fatal misconfiguration.
"""
from __future__ import annotations

import os


def _is_prod_like(env: str) -> bool:
    env_l = (env or "").lower()
    return env_l in {"prod", "production", "stage", "staging"}


def ensure_secure_config_on_startup() -> None:
    """Fail fast on broken production configuration.

    Checks:
    - WAFER_APPID must be set.
    - WAFER_AUTH_SERVER_URL must be set and use https.
    - WAFER_TIMEOUT_SECONDS, when set, must be a positive number.
    """

    env = os.getenv("WAFER_ENV", "dev")
    if not _is_prod_like(env):
        return  # dev/test remain permissive

    if not (os.getenv("WAFER_APPID", "") or "").strip():
        raise SystemExit("Refusing to start: WAFER_APPID is unset in production.")

    url = (os.getenv("WAFER_AUTH_SERVER_URL", "") or "").strip()
    if not url:
        raise SystemExit("Refusing to start: WAFER_AUTH_SERVER_URL is unset in production.")
    if url.lower().startswith("http://"):
        raise SystemExit(
            "Refusing to start: WAFER_AUTH_SERVER_URL must use https in production (got http)."
        )

    raw_timeout = (os.getenv("WAFER_TIMEOUT_SECONDS", "") or "").strip()
    if raw_timeout:
        try:
            ok = float(raw_timeout) > 0
        except ValueError:
            ok = False
        if not ok:
            raise SystemExit("Refusing to start: WAFER_TIMEOUT_SECONDS must be a positive number.")
