"""Tests for the SQLAlchemy-backed UserRepository."""

import sqlite3

import pytest
from sqlalchemy import event
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from userdb.core.exceptions import StorageReadError, StorageWriteError
from userdb.models import User
from userdb.repositories import SqlAlchemyUserRepository, UserRepository


def _failing_cursor(verb):
    """before_cursor_execute listener that fails statements starting with verb."""
    def listener(conn, cursor, statement, parameters, context, executemany):
        if statement.lstrip().upper().startswith(verb):
            raise OperationalError(statement, parameters, sqlite3.OperationalError("disk I/O error"))
    return listener


def _rows(repo):
    return sorted((u.id, u.name, u.email) for u in repo.get_all_users())


class TestInterface:

    def test_implements_interface(self, repo):
        assert isinstance(repo, UserRepository)
        assert isinstance(repo, SqlAlchemyUserRepository)

    def test_interface_is_abstract(self):
        with pytest.raises(TypeError):
            UserRepository()


class TestInsertAndRead:

    def test_empty_store_returns_empty_list(self, repo):
        assert repo.get_all_users() == []

    def test_insert_then_read(self, repo):
        repo.insert(User(name="Rute", email="rute@gmail.com"))

        users = repo.get_all_users()
        assert len(users) == 1
        user = users[0]
        assert user.name == "Rute"
        assert user.email == "rute@gmail.com"
        assert isinstance(user.id, int)
        assert user.id > 0

    def test_insert_returns_assigned_id(self, repo):
        user_id = repo.insert(User(name="Rute", email="rute@gmail.com"))
        assert [u.id for u in repo.get_all_users()] == [user_id]

    def test_insert_leaves_record_untouched(self, repo):
        record = User(name="Rute", email="rute@gmail.com")
        repo.insert(record)
        assert record.id is None

    def test_ids_are_unique(self, repo):
        ids = [repo.insert(User(name=f"user{i}", email=f"u{i}@example.com")) for i in range(5)]
        assert len(set(ids)) == 5

    def test_duplicate_emails_allowed(self, repo):
        first = repo.insert(User(name="Rute", email="same@example.com"))
        second = repo.insert(User(name="Ana", email="same@example.com"))

        assert first != second
        assert _rows(repo) == [
            (first, "Rute", "same@example.com"),
            (second, "Ana", "same@example.com"),
        ]

    def test_replace_on_conflict(self, repo):
        user_id = repo.insert(User(name="Rute", email="rute@gmail.com"))

        returned = repo.insert(User(id=user_id, name="Ana", email="ana@example.com"))

        assert returned == user_id
        assert _rows(repo) == [(user_id, "Ana", "ana@example.com")]

    def test_zero_id_is_assigned_by_store(self, repo):
        user_id = repo.insert(User(id=0, name="Rute", email="rute@gmail.com"))

        users = repo.get_all_users()
        assert user_id > 0
        assert [(u.id, u.name) for u in users] == [(user_id, "Rute")]

    def test_ids_not_reused_after_delete(self, handle, repo):
        first = repo.insert(User(name="Rute", email="rute@gmail.com"))
        with handle.engine.begin() as conn:
            conn.exec_driver_sql("DELETE FROM users")

        second = repo.insert(User(name="Ana", email="ana@example.com"))
        assert second > first

    def test_insert_with_new_explicit_id(self, repo):
        repo.insert(User(id=42, name="Rute", email="rute@gmail.com"))
        assert _rows(repo) == [(42, "Rute", "rute@gmail.com")]

    def test_results_are_detached_snapshots(self, repo):
        repo.insert(User(name="Rute", email="rute@gmail.com"))

        snapshot = repo.get_all_users()[0]
        snapshot.name = "changed"

        assert repo.get_all_users()[0].name == "Rute"


class TestErrors:

    def test_insert_failure_raises_write_error(self, handle, repo):
        listener = _failing_cursor("INSERT")
        event.listen(handle.engine, "before_cursor_execute", listener)
        try:
            with pytest.raises(StorageWriteError) as excinfo:
                repo.insert(User(name="Rute", email="rute@gmail.com"))
        finally:
            event.remove(handle.engine, "before_cursor_execute", listener)

        assert isinstance(excinfo.value.__cause__, SQLAlchemyError)

    def test_failed_insert_leaves_table_unchanged(self, handle, repo):
        user_id = repo.insert(User(name="Rute", email="rute@gmail.com"))
        before = _rows(repo)

        listener = _failing_cursor("INSERT")
        event.listen(handle.engine, "before_cursor_execute", listener)
        try:
            with pytest.raises(StorageWriteError):
                repo.insert(User(id=user_id, name="Ana", email="ana@example.com"))
            with pytest.raises(StorageWriteError):
                repo.insert(User(name="Bruno", email="bruno@example.com"))
        finally:
            event.remove(handle.engine, "before_cursor_execute", listener)

        assert _rows(repo) == before

    def test_read_failure_raises_read_error(self, handle, repo):
        listener = _failing_cursor("SELECT")
        event.listen(handle.engine, "before_cursor_execute", listener)
        try:
            with pytest.raises(StorageReadError):
                repo.get_all_users()
        finally:
            event.remove(handle.engine, "before_cursor_execute", listener)

    def test_missing_table_raises_read_error(self, handle, repo):
        with handle.engine.begin() as conn:
            conn.exec_driver_sql("DROP TABLE users")

        with pytest.raises(StorageReadError):
            repo.get_all_users()

    def test_missing_table_raises_write_error(self, handle, repo):
        with handle.engine.begin() as conn:
            conn.exec_driver_sql("DROP TABLE users")

        with pytest.raises(StorageWriteError):
            repo.insert(User(name="Rute", email="rute@gmail.com"))
