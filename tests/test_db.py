import pytest

from scicalc.db import Database, DatabaseError


def _tables(database):
    rows = database.connection().execute(
        "SELECT name FROM sqlite_master WHERE type = 'table'"
    ).fetchall()
    return {row[0] for row in rows}


def test_initialize_creates_tables():
    database = Database()
    database.initialize(":memory:")
    assert {"calculations", "currency_rates"} <= _tables(database)
    database.close()


def test_is_initialized_follows_lifecycle():
    database = Database()
    assert database.is_initialized() is False
    database.initialize(":memory:")
    assert database.is_initialized() is True
    database.close()
    assert database.is_initialized() is False


def test_connection_before_initialize_raises():
    with pytest.raises(DatabaseError):
        Database().connection()


def test_initialize_twice_keeps_connection():
    database = Database()
    database.initialize(":memory:")
    first = database.connection()
    database.initialize(":memory:")
    assert database.connection() is first
    database.close()


def test_context_manager_closes():
    with Database() as database:
        database.initialize(":memory:")
        assert database.is_initialized()
    assert not database.is_initialized()
    with pytest.raises(DatabaseError):
        database.connection()


def test_unopenable_path_raises(tmp_path):
    database = Database()
    with pytest.raises(DatabaseError):
        database.initialize(tmp_path / "missing" / "calc.db")
    assert not database.is_initialized()


def test_file_database_persists(tmp_path):
    path = tmp_path / "calc.db"
    with Database() as database:
        database.initialize(path)
        with database.connection() as connection:
            connection.execute(
                "INSERT INTO calculations (expression, result) VALUES ('1+1', '2')"
            )
    with Database() as database:
        database.initialize(path)
        row = database.connection().execute(
            "SELECT expression, result FROM calculations"
        ).fetchone()
        assert tuple(row) == ("1+1", "2")