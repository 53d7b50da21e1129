"""Database Error Translation — tests for SQLAlchemy → DatabaseError mapping."""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError

from acme_dashboard.core.errors import DatabaseError
from acme_dashboard.infrastructure.database import guard_db_errors, to_database_error


def test_integrity_error_message():
    err = to_database_error(IntegrityError("INSERT", {}, Exception("fk")), "insert")
    assert err.message == "Database insert failed: Integrity constraint violated"
    assert err.http_status == 503


def test_operational_error_message():
    err = to_database_error(OperationalError("SELECT", {}, Exception("down")), "query")
    assert "Connection or operational error" in err.message


def test_generic_sqlalchemy_error_message():
    err = to_database_error(SQLAlchemyError("boom"), "delete")
    assert err.message == "Database delete failed: Database operation failed"
    assert err.operation == "delete"


async def test_guard_rolls_back_and_chains():
    session = AsyncMock()
    original = SQLAlchemyError("boom")
    with pytest.raises(DatabaseError) as exc_info:
        async with guard_db_errors(session, "update"):
            raise original
    session.rollback.assert_awaited_once()
    assert exc_info.value.__cause__ is original


async def test_guard_leaves_other_exceptions_alone():
    session = AsyncMock()
    with pytest.raises(KeyError):
        async with guard_db_errors(session, "update"):
            raise KeyError("x")
    session.rollback.assert_not_awaited()
