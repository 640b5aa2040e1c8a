import os
from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from dashboard.constants import DEFAULT_TIMEZONE

RETRY_STATUSES = (502, 503, 504)
WRITE_METHODS = ("POST", "PUT", "PATCH", "DELETE")

_SECRET_GETTER = None


def _build_session(retries: int = 2):
    session = requests.Session()
    adapter = HTTPAdapter(
        max_retries=Retry(
            total=retries,
            backoff_factor=0.5,
            status_forcelist=RETRY_STATUSES,
            allowed_methods=("GET",) + WRITE_METHODS,
            raise_on_status=False,
        ),
        pool_connections=10,
        pool_maxsize=10,
    )
    for scheme in ("https://", "http://"):
        session.mount(scheme, adapter)
    return session


_SESSION = _build_session()


def configure(secret_getter):
    global _SECRET_GETTER
    _SECRET_GETTER = secret_getter


def _setting(name, default=""):
    """Looks in ``[app]`` secrets, then top-level secrets, then the environment."""
    if _SECRET_GETTER is not None:
        for path in (("app", name), (name,)):
            value = _SECRET_GETTER(path, None)
            if value:
                return value
    return os.getenv(name) or default


def api_base_url():
    return _setting("API_BASE_URL")


def dashboard_timezone():
    return _setting("DASHBOARD_TIMEZONE", DEFAULT_TIMEZONE)


def is_enabled():
    return bool(api_base_url())


def _decode(response) -> Any:
    if response.status_code == 204:
        return None
    if "text/csv" in response.headers.get("content-type", ""):
        return response.text
    return response.json()


def request(
    method: str,
    path: str,
    params: dict | None = None,
    json: dict | None = None,
    timeout: int = 10,
    session: requests.Session | None = None,
) -> Any:
    base = api_base_url().rstrip("/")
    if not base:
        raise RuntimeError("API_BASE_URL not configured")
    response = (session or _SESSION).request(method, base + path, params=params, json=json, timeout=timeout)
    if not response.ok:
        try:
            detail = response.json()
        except ValueError:
            detail = response.text
        raise RuntimeError(f"API error {response.status_code} {response.reason}: {detail}")
    return _decode(response)
