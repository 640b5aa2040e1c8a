from __future__ import annotations

import logging
from urllib.parse import parse_qsl, urlencode, urlparse, urlunparse

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

from backend.settings import Settings, get_settings

logger = logging.getLogger(__name__)

# Sync or bare URL schemes and the async driver each one maps to.
ASYNC_DRIVERS = {
    "sqlite://": "sqlite+aiosqlite://",
    "postgres://": "postgresql+asyncpg://",
    "postgresql://": "postgresql+asyncpg://",
    "postgresql+psycopg2://": "postgresql+asyncpg://",
}
LOCAL_HOSTS = {"localhost", "127.0.0.1"}


def _asyncpg_query(query: str) -> str:
    """asyncpg understands ``ssl`` but not libpq's ``sslmode``/``channel_binding``."""
    clean = []
    ssl_requested = False
    for key, value in parse_qsl(query, keep_blank_values=True):
        if key == "sslmode":
            ssl_requested = True
        elif key not in {"channel_binding", "ssl"}:
            clean.append((key, value))
    if ssl_requested:
        clean.append(("ssl", "true"))
    return urlencode(clean)


def _normalize_database_url(database_url: str) -> str:
    url = str(database_url or "").strip()
    for prefix, replacement in ASYNC_DRIVERS.items():
        if url.startswith(prefix):
            url = replacement + url[len(prefix) :]
            break
    if not url.startswith("postgresql+asyncpg://"):
        return url
    try:
        parsed = urlparse(url)
        return urlunparse(parsed._replace(query=_asyncpg_query(parsed.query)))
    except ValueError:
        return url


def _engine_options(settings: Settings, db_url: str) -> dict:
    options = {"pool_pre_ping": True, "future": True}
    if db_url.startswith("sqlite"):
        return options
    options.update(pool_size=settings.db_pool_size, max_overflow=settings.db_max_overflow)
    host = urlparse(db_url).hostname or ""
    if host and host not in LOCAL_HOSTS:
        options["connect_args"] = {"ssl": True}
    return options


_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker | None = None


def get_engine() -> AsyncEngine:
    global _engine
    if _engine is None:
        settings = get_settings()
        db_url = _normalize_database_url(settings.database_url)
        _engine = create_async_engine(db_url, **_engine_options(settings, db_url))
        logger.info("Database engine created (%s)", urlparse(db_url).scheme)
    return _engine


def get_sessionmaker() -> async_sessionmaker:
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(get_engine(), expire_on_commit=False)
    return _session_factory


async def dispose_engine() -> None:
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None
