"""Unit tests for HoagieRepository statements.

The counter and collaborator commands must each be a single statement
evaluated by the database. These tests inspect the SQL that reaches the
session rather than the results.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.dialects import mysql, postgresql, sqlite

from catalog.domain.value_objects import HoagieId
from catalog.infrastructure.hoagie_repository import HoagieRepository
from infrastructure.database.exceptions import UnsupportedDialectError
from shared_kernel.identity import UserId


def _session(rowcount: int = 1, dialect=None) -> AsyncMock:
    session = AsyncMock()
    session.execute = AsyncMock(return_value=MagicMock(rowcount=rowcount))
    bind = MagicMock()
    bind.dialect = dialect if dialect is not None else postgresql.dialect()
    session.get_bind = MagicMock(return_value=bind)
    return session


def _executed_sql(session: AsyncMock, dialect=None) -> str:
    (stmt,), _ = session.execute.call_args
    return str(stmt.compile(dialect=dialect or postgresql.dialect()))


class TestCommentCountStatements:
    """Tests for the atomic counter updates."""

    @pytest.mark.asyncio
    async def test_increment_is_relative_update(self):
        session = _session()
        repository = HoagieRepository(session=session)

        assert await repository.increment_comment_count(HoagieId.generate()) is True

        sql = _executed_sql(session)
        assert sql.startswith("UPDATE hoagies SET")
        assert "hoagies.comment_count + " in sql
        session.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_decrement_is_guarded_at_zero(self):
        session = _session()
        repository = HoagieRepository(session=session)

        assert await repository.decrement_comment_count(HoagieId.generate()) is True

        sql = _executed_sql(session)
        assert "hoagies.comment_count - " in sql
        assert "hoagies.comment_count > " in sql

    @pytest.mark.asyncio
    async def test_no_matching_row_reports_false(self):
        repository = HoagieRepository(session=_session(rowcount=0))

        assert await repository.increment_comment_count(HoagieId.generate()) is False
        assert await repository.decrement_comment_count(HoagieId.generate()) is False

    @pytest.mark.asyncio
    async def test_recount_uses_correlated_count(self):
        session = _session(rowcount=0)
        repository = HoagieRepository(session=session)

        assert await repository.recount_comments(HoagieId.generate()) is None

        sql = _executed_sql(session)
        assert "count(comments.id)" in sql
        assert "comments.hoagie_id = hoagies.id" in sql


class TestCollaboratorStatements:
    """Tests for insert-if-absent and delete of collaborator rows."""

    @pytest.mark.asyncio
    async def test_postgresql_insert_ignores_conflicts(self):
        session = _session()
        repository = HoagieRepository(session=session)

        inserted = await repository.add_collaborator(
            HoagieId.generate(), UserId.generate()
        )

        assert inserted is True
        sql = _executed_sql(session)
        assert "INSERT INTO hoagie_collaborators" in sql
        assert "ON CONFLICT (hoagie_id, user_id) DO NOTHING" in sql

    @pytest.mark.asyncio
    async def test_sqlite_insert_ignores_conflicts(self):
        session = _session(dialect=sqlite.dialect())
        repository = HoagieRepository(session=session)

        await repository.add_collaborator(HoagieId.generate(), UserId.generate())

        sql = _executed_sql(session, dialect=sqlite.dialect())
        assert "ON CONFLICT (hoagie_id, user_id) DO NOTHING" in sql

    @pytest.mark.asyncio
    async def test_existing_collaborator_reports_no_insert(self):
        repository = HoagieRepository(session=_session(rowcount=0))

        assert (
            await repository.add_collaborator(HoagieId.generate(), UserId.generate())
            is False
        )

    @pytest.mark.asyncio
    async def test_unsupported_dialect_raises(self):
        repository = HoagieRepository(session=_session(dialect=mysql.dialect()))

        with pytest.raises(UnsupportedDialectError):
            await repository.add_collaborator(HoagieId.generate(), UserId.generate())

    @pytest.mark.asyncio
    async def test_remove_reports_whether_row_existed(self):
        repository = HoagieRepository(session=_session(rowcount=0))

        assert (
            await repository.remove_collaborator(HoagieId.generate(), UserId.generate())
            is False
        )
