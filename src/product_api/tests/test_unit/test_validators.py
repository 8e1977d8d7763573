import pytest

from product_api.database.url import to_async_url
from product_api.validators.config_validators import blank_to_none, parse_int, positive_int_or_default


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("42", 42),
        ("+7", 7),
        ("-3", -3),
        ("007", 7),
        (5, 5),
        ("", None),
        (" 5", None),
        ("5_0", None),
        ("2.0", None),
        ("abc", None),
        ("١٢", None),  # non-ASCII digits
        (None, None),
        (True, None),
        (str(2**63 - 1), 2**63 - 1),
        (str(-(2**63)), -(2**63)),
        (str(2**63), None),
        ("99999999999999999999", None),
        (2**64, None),
    ],
)
def test_parse_int(raw, expected):
    assert parse_int(raw) == expected


@pytest.mark.parametrize("raw, expected", [("3", 3), ("0", 20), ("-1", 20), ("x", 20), (None, 20), ("99999999999999999999", 20)])
def test_positive_int_or_default(raw, expected):
    assert positive_int_or_default(raw, 20) == expected


def test_blank_to_none():
    assert blank_to_none("  ") is None
    assert blank_to_none(" x ") == "x"
    assert blank_to_none(None) is None


@pytest.mark.parametrize(
    "dsn, expected",
    [
        ("postgres://u:p@db/app?sslmode=disable", "postgresql+asyncpg://u:p@db/app"),
        ("postgresql://u:p@db/app?sslmode=require&application_name=api", "postgresql+asyncpg://u:p@db/app?application_name=api"),
        ("postgresql+asyncpg://u:p@db/app", "postgresql+asyncpg://u:p@db/app"),
        ("sqlite+aiosqlite:///./dev.db", "sqlite+aiosqlite:///./dev.db"),
        ("  postgres://u@db/app  ", "postgresql+asyncpg://u@db/app"),
    ],
)
def test_to_async_url(dsn, expected):
    assert to_async_url(dsn) == expected
