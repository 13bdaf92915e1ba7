import sqlite3

import pytest

from budgetkeeper.db import DocumentStore, StorageError


def test_collection_round_trips_documents(store):
    with store.collection("Things") as things:
        assert things.insert("a", {"id": "a", "value": 1})
        assert things.insert("b", {"id": "b", "value": 2})

    with store.collection("Things") as things:
        assert things.find_by_id("a") == {"id": "a", "value": 1}
        assert [doc["id"] for doc in things.all()] == ["a", "b"]
        assert things.find_by_id("missing") is None


def test_insert_rejects_duplicate_id(store):
    with store.collection("Things") as things:
        assert things.insert("a", {"id": "a"})
        assert not things.insert("a", {"id": "a", "other": True})
        assert things.find_by_id("a") == {"id": "a"}


def test_upsert_reports_insert_then_replace(store):
    with store.collection("Things") as things:
        assert things.upsert("a", {"id": "a", "v": 1}) is True
        assert things.upsert("a", {"id": "a", "v": 2}) is False
        assert things.find_by_id("a")["v"] == 2
        assert len(things.all()) == 1


def test_update_and_delete_missing_return_false(store):
    with store.collection("Things") as things:
        assert not things.update("nope", {"id": "nope"})
        assert not things.delete("nope")


def test_find_filters_on_top_level_fields(store):
    with store.collection("Things") as things:
        things.insert("a", {"id": "a", "owner": "x"})
        things.insert("b", {"id": "b", "owner": "y"})
        things.insert("c", {"id": "c", "owner": "x"})
        assert [d["id"] for d in things.find(owner="x")] == ["a", "c"]
        assert things.find(owner="z") == []


def test_connection_is_closed_after_block(store, monkeypatch):
    opened = []
    real_connect = sqlite3.connect

    def tracking_connect(*args, **kwargs):
        conn = real_connect(*args, **kwargs)
        opened.append(conn)
        return conn

    monkeypatch.setattr(sqlite3, "connect", tracking_connect)

    store.with_collection("Things", lambda things: things.all())

    assert len(opened) == 1
    with pytest.raises(sqlite3.ProgrammingError):
        opened[0].execute("SELECT 1")


def test_failure_rolls_back_and_propagates(store):
    with pytest.raises(RuntimeError):
        with store.collection("Things") as things:
            things.insert("a", {"id": "a"})
            raise RuntimeError("boom")

    with store.collection("Things") as things:
        assert things.find_by_id("a") is None


def test_with_collection_returns_result(store):
    store.with_collection("Things", lambda c: c.insert("a", {"id": "a"}))
    assert store.with_collection("Things", lambda c: len(c.all())) == 1


def test_corrupt_file_raises_storage_error(tmp_path):
    path = tmp_path / "corrupt.db"
    path.write_bytes(b"this is not a database file at all" * 100)
    store = DocumentStore(str(path))

    with pytest.raises(StorageError):
        store.with_collection("Things", lambda c: c.all())


def test_unopenable_path_raises_storage_error(tmp_path):
    # A directory cannot be opened as a database file
    store = DocumentStore(str(tmp_path))

    with pytest.raises(StorageError):
        store.with_collection("Things", lambda c: c.all())


def test_corrupt_document_raises_storage_error(store):
    conn = sqlite3.connect(store.connection_string)
    conn.execute('CREATE TABLE "Things" (id TEXT PRIMARY KEY, body TEXT NOT NULL)')
    conn.execute("INSERT INTO \"Things\" VALUES ('a', '{not json')")
    conn.commit()
    conn.close()

    with pytest.raises(StorageError):
        store.with_collection("Things", lambda c: c.find_by_id("a"))


def test_relative_path_is_created(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    store = DocumentStore("nested/dir/store.db")
    store.with_collection("Things", lambda c: c.insert("a", {"id": "a"}))
    assert (tmp_path / "nested" / "dir" / "store.db").exists()


@pytest.mark.parametrize("name", ["", "bad name", 'x"; DROP TABLE y; --', "1abc"])
def test_invalid_collection_name_rejected(store, name):
    with pytest.raises(ValueError):
        with store.collection(name):
            pass
