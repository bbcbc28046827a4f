"""
Database registry tests - table registration, lookup and seeding.
"""

import threading

import pytest

from sproutdb import Database, create, table
from sproutdb.core.errors import TableExistsError, TableNotFoundError, ValidationError
from sproutdb.core.validation import PydanticValidator
from pydantic import BaseModel


class Account(BaseModel):
    id: int
    owner: str


class TestRegistry:
    """Test creating and looking up tables."""

    def test_create_from_table_definitions(self):
        """Test that create registers tables in the given order."""
        db = create({"users": table(), "posts": table()})
        assert db.names() == ["users", "posts"]
        assert db["users"].name == "users"

    def test_tables_are_independent(self):
        """Test that writes to one table do not reach another."""
        db = create({"users": table(), "posts": table()})
        db["users"].insert({"id": 1})
        assert db["posts"].all() == []

    def test_create_table_dynamically(self):
        """Test that create_table registers and returns a new table."""
        db = Database()
        created = db.create_table("events")
        assert "events" in db
        assert db.get_table("events") is created
        assert len(db) == 1

    def test_duplicate_name_rejected(self):
        """Test that a taken name raises TableExistsError."""
        db = Database()
        db.create_table("events")
        with pytest.raises(TableExistsError):
            db.create_table("events")

    def test_empty_name_rejected(self):
        """Test that an empty name is rejected."""
        with pytest.raises(ValueError):
            Database().create_table("")

    def test_unknown_table(self):
        """Test that an unknown name raises TableNotFoundError."""
        with pytest.raises(TableNotFoundError) as exc_info:
            Database()["ghosts"]
        assert exc_info.value.name == "ghosts"
        assert "ghosts" in str(exc_info.value)

    def test_unknown_table_is_a_key_error(self):
        """Test that TableNotFoundError is also a KeyError."""
        with pytest.raises(KeyError):
            Database().get_table("ghosts")

    def test_create_table_with_validator(self):
        """Test that a schema passed to create_table validates inserts."""
        db = Database()
        accounts = db.create_table("accounts", validator=Account)
        assert isinstance(accounts.validator, PydanticValidator)
        with pytest.raises(ValidationError):
            accounts.insert({"id": "not-a-number"})

    def test_iteration_and_counts(self):
        """Test iteration order and record counts."""
        db = create({"a": table(), "b": table()})
        db["a"].load([{"x": 1}, {"x": 2}])
        assert list(db) == ["a", "b"]
        assert db.record_counts() == {"a": 2, "b": 0}
        assert db.total_records() == 2


class TestSeed:
    """Test loading seed mappings."""

    def test_load_seed_creates_missing_tables(self):
        """Test that seeding creates tables that are not registered."""
        db = create({"users": table()})
        db.load_seed({
            "users": [{"id": 1, "name": "Alice"}],
            "orders": [{"id": 10, "user_id": 1}, {"id": 11, "user_id": 1}],
        })
        assert db.names() == ["users", "orders"]
        assert len(db["orders"].all()) == 2

    def test_load_seed_appends_to_existing_table(self):
        """Test that seeding appends to a registered table."""
        db = create({"users": table()})
        db["users"].insert({"id": 0})
        db.load_seed({"users": [{"id": 1}]})
        assert [r["id"] for r in db["users"].all()] == [0, 1]

    def test_load_seed_into_empty_registered_table(self):
        """An empty registered table is reused, not recreated."""
        users = table()
        db = create({"users": users})
        db.load_seed({"users": [{"id": 1}]})
        assert db["users"] is users


class TestConcurrentRegistry:
    """Test the registry under parallel callers."""

    def test_parallel_seeding_of_a_new_table(self):
        """Test that seeding one new table from many threads creates it once."""
        db = Database()
        errors = []

        def seed(worker):
            try:
                db.load_seed({"events": [{"worker": worker}]})
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=seed, args=(w,)) for w in range(16)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        assert db.names() == ["events"]
        assert sorted(r["worker"] for r in db["events"].all()) == list(range(16))

    def test_parallel_create_table_registers_one(self):
        """Test that racing create_table calls leave exactly one table."""
        db = Database()
        created, rejected = [], []

        def create_events():
            try:
                created.append(db.create_table("events"))
            except TableExistsError:
                rejected.append(True)

        threads = [threading.Thread(target=create_events) for _ in range(16)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(created) == 1
        assert len(rejected) == 15
        assert db["events"] is created[0]
