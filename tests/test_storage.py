"""Tests para JsonSubmissionStore."""

import json
from datetime import date

import pytest

from formwizard.errors import SubmissionStoreError
from formwizard.models import Identity, SubmissionRecord
from formwizard.storage import JsonSubmissionStore


@pytest.fixture
def store(tmp_path):
    return JsonSubmissionStore(submissions_dir=tmp_path / "submissions")


@pytest.fixture
def record():
    return SubmissionRecord(
        form_id="registration",
        form_title="Student Registration",
        version="1.2",
        answers={"name": "Ana", "start": date(2024, 3, 1), "terms": True, "phone": ""},
        identity=Identity(roll_number="42", name="Ana"),
    )


class TestJsonSubmissionStore:
    """Tests para JsonSubmissionStore."""

    def test_creates_directory(self, tmp_path):
        JsonSubmissionStore(tmp_path / "a" / "b")
        assert (tmp_path / "a" / "b").is_dir()

    def test_submit_writes_json(self, store, record):
        path = store.submit(record)

        assert path.name == f"{record.id}.json"
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        assert data["form_id"] == "registration"
        assert data["answers"]["start"] == "2024-03-01"
        assert data["identity"]["roll_number"] == "42"

    def test_load(self, store, record):
        store.submit(record)
        loaded = store.load(record.id)
        assert loaded.id == record.id
        assert loaded.answers["terms"] is True
        assert loaded.answers["name"] == "Ana"

    def test_load_missing(self, store):
        with pytest.raises(FileNotFoundError):
            store.load("nope")

    def test_get_record_partial_id(self, store, record):
        store.submit(record)
        assert store.get_record(record.id[:4]).id == record.id
        assert store.get_record("zzzzzzzz") is None

    def test_list_submissions(self, store, record):
        store.submit(record)
        newer = SubmissionRecord(
            form_id="feedback",
            timestamp="2999-01-01T00:00:00",
            answers={"comment": "ok"},
        )
        store.submit(newer)

        listing = store.list_submissions()

        assert [s["id"] for s in listing] == [newer.id, record.id]
        assert listing[1]["roll_number"] == "42"
        assert listing[1]["n_answers"] == 4
        assert listing[0]["roll_number"] == ""

    def test_list_skips_unreadable(self, store, record):
        store.submit(record)
        (store.submissions_dir / "broken.json").write_text("{", encoding="utf-8")
        assert len(store.list_submissions()) == 1

    def test_list_skips_non_object(self, store, record):
        """Un JSON válido que no es un objeto no se lista."""
        store.submit(record)
        (store.submissions_dir / "array.json").write_text("[1, 2]", encoding="utf-8")
        assert [s["id"] for s in store.list_submissions()] == [record.id]


class TestCorruptRecords:
    """Tests para registros ilegibles en disco."""

    def test_invalid_json(self, store):
        (store.submissions_dir / "abcd.json").write_text("{", encoding="utf-8")
        with pytest.raises(SubmissionStoreError, match="abcd.json"):
            store.load("abcd")

    def test_invalid_record(self, store):
        """JSON bien formado que no es un SubmissionRecord."""
        (store.submissions_dir / "abcd.json").write_text(
            json.dumps({"form_id": "x", "answers": "not a dict"}), encoding="utf-8"
        )
        with pytest.raises(SubmissionStoreError):
            store.get_record("ab")

    def test_invalid_encoding(self, store):
        (store.submissions_dir / "abcd.json").write_bytes(b"\xff\xfe{")
        with pytest.raises(SubmissionStoreError):
            store.load("abcd")
        assert store.list_submissions() == []
