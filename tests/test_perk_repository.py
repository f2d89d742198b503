"""Tests for the SQLite perk repository."""
import sqlite3

import pytest

from perks_api.app.core.db import get_connection, init_db
from perks_api.app.core.exceptions import UniqueConstraintViolation


def _perk(**overrides):
    record = {
        "title": "Coffee",
        "description": "",
        "category": "food",
        "discount_percent": 10,
        "merchant": "Bean Bar",
    }
    record.update(overrides)
    return record


def test_insert_assigns_id_and_created_at(repository):
    record = repository.insert(_perk())
    assert record["id"]
    assert record["created_at"]
    assert record["title"] == "Coffee"
    assert record["discount_percent"] == 10


def test_insert_ignores_caller_supplied_id(repository):
    record = repository.insert(_perk(id="chosen", created_at="1999-01-01T00:00:00+00:00"))
    assert record["id"] != "chosen"
    assert not record["created_at"].startswith("1999")


def test_insert_duplicate_merchant_title_raises(repository):
    repository.insert(_perk())
    with pytest.raises(UniqueConstraintViolation):
        repository.insert(_perk(description="another"))


def test_same_title_for_other_merchant_is_allowed(repository):
    repository.insert(_perk())
    other = repository.insert(_perk(merchant="Cup Co"))
    assert other["merchant"] == "Cup Co"


def test_check_constraint_errors_are_not_conflicts(repository):
    with pytest.raises(sqlite3.IntegrityError):
        repository.insert(_perk(discount_percent=500))


def test_find_by_id(repository):
    created = repository.insert(_perk())
    assert repository.find_by_id(created["id"]) == created
    assert repository.find_by_id("missing") is None


def test_find_all_newest_first(repository):
    first = repository.insert(_perk(title="First"))
    second = repository.insert(_perk(title="Second"))
    third = repository.insert(_perk(title="Third"))
    assert [r["id"] for r in repository.find_all()] == [third["id"], second["id"], first["id"]]


def test_find_all_empty(repository):
    assert repository.find_all() == []


def test_find_exact_matches_whole_value(repository):
    repository.insert(_perk(title="Exact Name"))
    repository.insert(_perk(title="Exact Name Extra"))
    repository.insert(_perk(title="Exact Name", merchant="Cup Co"))
    found = repository.find_exact("title", "Exact Name")
    assert len(found) == 2
    assert {r["title"] for r in found} == {"Exact Name"}
    assert found[0]["merchant"] == "Cup Co"


def test_find_exact_rejects_unknown_column(repository):
    with pytest.raises(ValueError):
        repository.find_exact("title; DROP TABLE perks", "x")


def test_update_by_id_changes_only_given_fields(repository):
    created = repository.insert(_perk(discount_percent=50))
    updated = repository.update_by_id(created["id"], {"discount_percent": 0})
    assert updated["discount_percent"] == 0
    assert updated["title"] == created["title"]
    assert updated["created_at"] == created["created_at"]


def test_update_by_id_with_no_fields_returns_record(repository):
    created = repository.insert(_perk())
    assert repository.update_by_id(created["id"], {}) == created


def test_update_by_id_missing_returns_none(repository):
    assert repository.update_by_id("missing", {"title": "New"}) is None


def test_update_by_id_rejects_immutable_columns(repository):
    created = repository.insert(_perk())
    with pytest.raises(ValueError):
        repository.update_by_id(created["id"], {"created_at": "2000-01-01"})


def test_update_by_id_duplicate_raises(repository):
    repository.insert(_perk(title="Coffee"))
    tea = repository.insert(_perk(title="Tea"))
    with pytest.raises(UniqueConstraintViolation):
        repository.update_by_id(tea["id"], {"title": "Coffee"})


def test_delete_by_id(repository):
    created = repository.insert(_perk())
    assert repository.delete_by_id(created["id"]) == created
    assert repository.find_by_id(created["id"]) is None
    assert repository.delete_by_id(created["id"]) is None


def test_init_db_is_idempotent():
    init_db()
    conn = get_connection()
    try:
        versions = [row["version"] for row in conn.execute("SELECT version FROM migrations")]
    finally:
        conn.close()
    assert versions == [1, 2]
