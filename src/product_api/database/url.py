"""
Connection-string helpers.

Operators hand us libpq-style URLs (`postgres://user:pw@host/db?sslmode=require`)
because that is what hosting providers print. SQLAlchemy's async engine needs
an explicit async driver, and asyncpg rejects the libpq-only `sslmode` option,
so both are normalised here before the engine is built.
"""

from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

ASYNC_POSTGRES_SCHEME = "postgresql+asyncpg"
_PLAIN_POSTGRES_SCHEMES = {"postgres", "postgresql"}


def _strip_sslmode(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def to_async_url(dsn: str) -> str:
    """
    Return `dsn` rewritten for SQLAlchemy's asyncio engine.

    Examples:
        postgres://u:p@db/app?sslmode=disable  -> postgresql+asyncpg://u:p@db/app
        postgresql+asyncpg://u:p@db/app         -> unchanged
        sqlite+aiosqlite:///./dev.db            -> unchanged
    """
    dsn = dsn.strip()
    scheme, sep, rest = dsn.partition("://")
    if not sep:
        return dsn

    if scheme.lower() in _PLAIN_POSTGRES_SCHEMES:
        return _strip_sslmode(f"{ASYNC_POSTGRES_SCHEME}://{rest}")
    if scheme.lower() == ASYNC_POSTGRES_SCHEME:
        return _strip_sslmode(dsn)
    return dsn
