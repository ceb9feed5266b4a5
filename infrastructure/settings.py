"""Runtime configuration for the admin console (Streamlit secrets + env)."""

import logging
import os
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlsplit, urlunsplit

import streamlit as st

log = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "https://alemam-backend.vercel.app/api"
DEFAULT_API_TIMEOUT = 15.0
DEFAULT_HEALTH_TIMEOUT = 3.0
DEFAULT_FLASH_TTL = 3.0
TOKEN_KEY = "adminToken"


def get_secret(key):
    try:
        return st.secrets.get(key)
    except FileNotFoundError:
        return None


def _lookup(key: str) -> Optional[str]:
    value = get_secret(key) or os.getenv(key)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _lookup_float(key: str, default: float) -> float:
    raw = _lookup(key)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        log.warning(f"Ignoring non-numeric {key}={raw!r}, using {default}")
        return default
    return value if value > 0 else default


def derive_health_url(base_url: str) -> str:
    """Health endpoint lives at the host root, next to the `/api` prefix."""
    parts = urlsplit(base_url)
    path = parts.path.rstrip("/")
    if path.endswith("/api"):
        path = path[: -len("/api")]
    return urlunsplit((parts.scheme, parts.netloc, f"{path}/health", "", ""))


@dataclass(frozen=True)
class ApiSettings:
    base_url: str = DEFAULT_API_BASE_URL
    health_url: str = derive_health_url(DEFAULT_API_BASE_URL)
    timeout: float = DEFAULT_API_TIMEOUT
    health_timeout: float = DEFAULT_HEALTH_TIMEOUT
    token_key: str = TOKEN_KEY
    flash_ttl: float = DEFAULT_FLASH_TTL


def load_settings() -> ApiSettings:
    base_url = (_lookup("API_BASE_URL") or DEFAULT_API_BASE_URL).rstrip("/")
    return ApiSettings(
        base_url=base_url,
        health_url=_lookup("API_HEALTH_URL") or derive_health_url(base_url),
        timeout=_lookup_float("API_TIMEOUT", DEFAULT_API_TIMEOUT),
        health_timeout=_lookup_float("HEALTH_TIMEOUT", DEFAULT_HEALTH_TIMEOUT),
        flash_ttl=_lookup_float("FLASH_TTL_SECONDS", DEFAULT_FLASH_TTL),
    )
