"""
Incident Store Tests

Validates that every backend:
1. Starts empty (no persisted state → empty collection)
2. Appends in arrival order and preserves every field across load cycles
3. Refuses to mask corrupt state as "no incidents"
4. Propagates write failures
5. Writes the human-inspectable JSON format of incidents.json
"""

import json
import tempfile
import threading
from datetime import datetime, timezone
from pathlib import Path

import pytest

from incidents import (
    IncidentRecord,
    InMemoryIncidentStore,
    JsonFileIncidentStore,
    MediaAttachment,
    SerializedIncidentStore,
    SQLiteIncidentStore,
    StorageReadError,
    StorageWriteError,
)


def make_record(i: int, attachments: int = 0) -> IncidentRecord:
    return IncidentRecord(
        reporter_address=f"whatsapp:+97798000000{i:02d}",
        description=f"incident number {i} – गिरफ्तार",
        attachments=[
            MediaAttachment(url=f"https://api.twilio.com/media/{i}/{j}", content_type="image/jpeg")
            for j in range(attachments)
        ],
        recorded_at=datetime(2024, 5, 1, 10, 0, i, tzinfo=timezone.utc),
    )


@pytest.fixture
def tmpdir_path():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(params=["json", "sqlite", "memory"])
def store(request, tmpdir_path):
    if request.param == "json":
        return JsonFileIncidentStore(tmpdir_path / "incidents.json")
    if request.param == "sqlite":
        return SQLiteIncidentStore(str(tmpdir_path / "incidents.db"))
    return InMemoryIncidentStore()


# ═══════════════════════════════════════════════════════════════════════════════
# CONTRACT: shared by every backend
# ═══════════════════════════════════════════════════════════════════════════════


class TestStoreContract:

    def test_first_use_loads_empty(self, store):
        assert store.load() == []

    def test_sequential_appends_preserve_order_and_fields(self, store):
        records = [make_record(i, attachments=i % 3) for i in range(5)]

        for record in records:
            store.append(record)

        loaded = store.load()
        assert loaded == records
        assert [r.to_document() for r in loaded] == [r.to_document() for r in records]

    def test_load_does_not_expose_mutable_state(self, store):
        store.append(make_record(1))
        loaded = store.load()
        loaded.append(make_record(2))

        assert len(store.load()) == 1


class TestRecordImmutability:

    def test_record_cannot_be_mutated(self):
        record = make_record(1)
        with pytest.raises(Exception):
            record.description = "edited"  # type: ignore

    def test_recorded_at_defaults_to_creation_time(self):
        before = datetime.now(timezone.utc)
        record = IncidentRecord(reporter_address="whatsapp:+1")
        assert record.recorded_at >= before
        assert record.description == "No description"
        assert record.attachments == ()

    def test_attachments_cannot_be_appended(self):
        record = make_record(1, attachments=1)
        with pytest.raises(AttributeError):
            record.attachments.append(MediaAttachment(url="https://example.com/x"))  # type: ignore
        assert len(record.attachments) == 1


# ═══════════════════════════════════════════════════════════════════════════════
# JSON FILE BACKEND
# ═══════════════════════════════════════════════════════════════════════════════


class TestJsonFileStore:

    def test_file_format_matches_incidents_json(self, tmpdir_path):
        path = tmpdir_path / "incidents.json"
        store = JsonFileIncidentStore(path)

        store.append(make_record(1, attachments=1))

        documents = json.loads(path.read_text(encoding="utf-8"))
        assert documents == [{
            "user_number": "whatsapp:+9779800000001",
            "description": "incident number 1 – गिरफ्तार",
            "media": [{"url": "https://api.twilio.com/media/1/0", "type": "image/jpeg"}],
            "timestamp": "2024-05-01T10:00:01Z",
        }]

    def test_reads_file_written_by_previous_version(self, tmpdir_path):
        path = tmpdir_path / "incidents.json"
        path.write_text(json.dumps([
            {
                "user_number": "whatsapp:+9779811111111",
                "description": "car broke down",
                "media": [{"url": "https://x/1"}],
                "timestamp": "2024-01-02T03:04:05.678Z",
            }
        ], indent=2))

        loaded = JsonFileIncidentStore(path).load()

        assert len(loaded) == 1
        assert loaded[0].reporter_address == "whatsapp:+9779811111111"
        assert loaded[0].attachments[0].content_type is None

    def test_file_is_indented_json(self, tmpdir_path):
        path = tmpdir_path / "incidents.json"
        JsonFileIncidentStore(path).append(make_record(1))
        assert path.read_text(encoding="utf-8").startswith("[\n  {")

    @pytest.mark.parametrize("content", [
        "{not json",
        '{"user_number": "x"}',
        '[{"description": "missing reporter"}]',
        "",
    ])
    def test_corrupt_state_raises_read_error(self, tmpdir_path, content):
        path = tmpdir_path / "incidents.json"
        path.write_text(content)

        with pytest.raises(StorageReadError):
            JsonFileIncidentStore(path).load()

    def test_invalid_utf8_raises_read_error(self, tmpdir_path):
        path = tmpdir_path / "incidents.json"
        path.write_bytes(b'[{"user_number": "x", "description": "\xff\xfe"}]')

        with pytest.raises(StorageReadError):
            JsonFileIncidentStore(path).load()

    def test_append_on_corrupt_state_does_not_overwrite(self, tmpdir_path):
        path = tmpdir_path / "incidents.json"
        path.write_text("{not json")

        with pytest.raises(StorageReadError):
            JsonFileIncidentStore(path).append(make_record(1))

        assert path.read_text() == "{not json"

    def test_write_failure_raises_write_error(self, tmpdir_path):
        blocker = tmpdir_path / "not-a-dir"
        blocker.write_text("file in the way")
        store = JsonFileIncidentStore(blocker / "incidents.json")

        with pytest.raises(StorageWriteError):
            store.append(make_record(1))

    def test_failed_write_keeps_previous_state(self, tmpdir_path, monkeypatch):
        path = tmpdir_path / "incidents.json"
        store = JsonFileIncidentStore(path)
        store.append(make_record(1))

        def broken_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr("incidents.json_file.os.replace", broken_replace)

        with pytest.raises(StorageWriteError):
            store.append(make_record(2))

        assert store.load() == [make_record(1)]
        assert [p.name for p in tmpdir_path.iterdir()] == ["incidents.json"]

    def test_creates_missing_parent_directory(self, tmpdir_path):
        store = JsonFileIncidentStore(tmpdir_path / "data" / "incidents.json")
        store.append(make_record(1))
        assert len(store.load()) == 1


# ═══════════════════════════════════════════════════════════════════════════════
# SQLITE BACKEND
# ═══════════════════════════════════════════════════════════════════════════════


class TestSQLiteStore:

    def test_in_memory_database_keeps_records(self):
        store = SQLiteIncidentStore()
        store.append(make_record(1))
        store.append(make_record(2))
        assert store.load() == [make_record(1), make_record(2)]

    def test_in_memory_database_handles_concurrent_appends(self):
        store = SQLiteIncidentStore()
        records = [make_record(i) for i in range(20)]

        threads = [threading.Thread(target=store.append, args=(r,)) for r in records]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        loaded = store.load()
        assert len(loaded) == 20
        assert sorted(r.description for r in loaded) == sorted(r.description for r in records)

    def test_state_survives_reopen(self, tmpdir_path):
        db_path = str(tmpdir_path / "incidents.db")
        SQLiteIncidentStore(db_path).append(make_record(1))

        assert SQLiteIncidentStore(db_path).load() == [make_record(1)]

    def test_corrupt_row_raises_read_error(self, tmpdir_path):
        import sqlite3

        db_path = str(tmpdir_path / "incidents.db")
        store = SQLiteIncidentStore(db_path)
        conn = sqlite3.connect(db_path)
        conn.execute("INSERT INTO incidents (data) VALUES (?)", ("{broken",))
        conn.commit()
        conn.close()

        with pytest.raises(StorageReadError):
            store.load()

    def test_unusable_database_raises_write_error(self, tmpdir_path):
        store = SQLiteIncidentStore(str(tmpdir_path / "missing" / "incidents.db"))

        with pytest.raises(StorageWriteError):
            store.append(make_record(1))


# ═══════════════════════════════════════════════════════════════════════════════
# SERIALIZED WRAPPER
# ═══════════════════════════════════════════════════════════════════════════════


class TestSerializedStore:

    def test_delegates_to_inner_store(self):
        inner = InMemoryIncidentStore()
        store = SerializedIncidentStore(inner)

        store.append(make_record(1))

        assert inner.load() == [make_record(1)]
        assert store.load() == [make_record(1)]

    def test_concurrent_appends_lose_nothing(self, tmpdir_path):
        store = SerializedIncidentStore(JsonFileIncidentStore(tmpdir_path / "incidents.json"))
        records = [make_record(i) for i in range(20)]

        threads = [threading.Thread(target=store.append, args=(r,)) for r in records]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        loaded = store.load()
        assert len(loaded) == 20
        assert sorted(r.reporter_address for r in loaded) == sorted(
            r.reporter_address for r in records
        )
