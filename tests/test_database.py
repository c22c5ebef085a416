"""
Tests for engine configuration.
"""
from sqlalchemy.pool import StaticPool

from chessfed.database import SQLITE_PRAGMAS, engine_options, is_memory_database


class TestEngineOptions:

    def test_memory_database_shares_one_connection(self):
        options = engine_options("sqlite+aiosqlite:///:memory:")

        assert options["poolclass"] is StaticPool
        assert options["connect_args"] == {"check_same_thread": False}

    def test_file_database_is_pooled(self):
        options = engine_options("sqlite+aiosqlite:///./chessfed.db", echo=True)

        assert "poolclass" not in options
        assert options["pool_pre_ping"] is True
        assert options["echo"] is True

    def test_memory_detection(self):
        assert is_memory_database("sqlite+aiosqlite:///file:test?mode=memory&cache=shared")
        assert not is_memory_database("sqlite+aiosqlite:////data/chessfed.db")

    def test_foreign_keys_enforced_on_file_databases(self):
        assert SQLITE_PRAGMAS["foreign_keys"] == "ON"
