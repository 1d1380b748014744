"""Tests for the schema bootstrap CLI."""

import userdb.database.init_db as init_db
from userdb.core.constants import SCHEMA_VERSION
from userdb.database.init_db import SAMPLE_USERS, initialize_database, print_database_status
from userdb.models import User


class TestInitializeDatabase:

    def test_creates_empty_schema(self, test_settings):
        handle = initialize_database(settings=test_settings)

        assert handle.schema_version() == SCHEMA_VERSION
        assert handle.repository().get_all_users() == []

    def test_sample_data(self, test_settings):
        handle = initialize_database(sample_data=True, settings=test_settings)

        users = handle.repository().get_all_users()
        assert sorted(u.name for u in users) == sorted(d["name"] for d in SAMPLE_USERS)

    def test_reset_drops_existing_rows(self, test_settings):
        handle = initialize_database(sample_data=True, settings=test_settings)

        initialize_database(reset=True, settings=test_settings)

        assert handle.repository().get_all_users() == []
        assert handle.schema_version() == SCHEMA_VERSION

    def test_status_counts_rows(self, handle):
        handle.repository().insert(User(name="Rute", email="rute@gmail.com"))
        assert print_database_status(handle) == 1


class TestCli:

    def test_main_with_sample_data(self, monkeypatch, test_settings):
        monkeypatch.setattr(init_db, "get_settings", lambda: test_settings)

        assert init_db.main(["--sample-data"]) == 0

        handle = init_db.DatabaseHandle.get()
        assert len(handle.repository().get_all_users()) == len(SAMPLE_USERS)

    def test_reset_aborts_without_confirmation(self, monkeypatch, test_settings):
        monkeypatch.setattr(init_db, "get_settings", lambda: test_settings)
        monkeypatch.setattr("builtins.input", lambda prompt: "no")

        assert init_db.main(["--reset"]) == 1
        assert not test_settings.database_path.exists()

    def test_reset_confirmed(self, monkeypatch, test_settings):
        monkeypatch.setattr(init_db, "get_settings", lambda: test_settings)
        init_db.main(["--sample-data"])
        monkeypatch.setattr("builtins.input", lambda prompt: "yes")

        assert init_db.main(["--reset"]) == 0
        assert init_db.DatabaseHandle.get().repository().get_all_users() == []

    def test_unsupported_store_returns_error_code(self, monkeypatch, test_settings):
        handle = init_db.DatabaseHandle.get(test_settings)
        with handle.engine.begin() as conn:
            conn.exec_driver_sql(f"PRAGMA user_version = {SCHEMA_VERSION + 1}")
        init_db.DatabaseHandle.reset()
        monkeypatch.setattr(init_db, "get_settings", lambda: test_settings)

        assert init_db.main([]) == 1
