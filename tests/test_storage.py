import logging

import pytest

from resume_parser.tracker import InMemoryStorage, JsonFileStorage


@pytest.fixture(params=["memory", "json"])
def backend(request, tmp_path):
    if request.param == "memory":
        return InMemoryStorage()
    return JsonFileStorage(str(tmp_path))


def test_put_get_delete(backend):
    backend.put("things", "a", {"id": "a", "n": 1})

    assert backend.get("things", "a") == {"id": "a", "n": 1}
    assert backend.get("things", "b") is None
    assert backend.delete("things", "a") is True
    assert backend.delete("things", "a") is False


def test_list_by_collection(backend):
    backend.put("things", "a", {"id": "a"})
    backend.put("things", "b", {"id": "b"})
    backend.put("others", "c", {"id": "c"})

    assert sorted(r["id"] for r in backend.list("things")) == ["a", "b"]
    assert backend.list("missing") == []


def test_records_are_copies(backend):
    record = {"id": "a", "tags": ["x"]}
    backend.put("things", "a", record)
    record["tags"].append("y")

    fetched = backend.get("things", "a")
    fetched["tags"].append("z")

    assert backend.get("things", "a")["tags"] == ["x"]


def test_unsafe_keys_stay_inside_root(tmp_path):
    storage = JsonFileStorage(str(tmp_path / "data"))
    storage.put("things", "../../escape", {"id": "x"})

    assert storage.get("things", "../../escape") == {"id": "x"}
    assert not (tmp_path / "escape.json").exists()


def test_corrupt_file_is_skipped(tmp_path, caplog):
    storage = JsonFileStorage(str(tmp_path))
    storage.put("things", "a", {"id": "a"})
    (tmp_path / "things" / "broken.json").write_text("{not json")

    with caplog.at_level(logging.ERROR):
        records = storage.list("things")

    assert records == [{"id": "a"}]
    assert "broken.json" in caplog.text


def test_similar_keys_get_separate_files(tmp_path):
    storage = JsonFileStorage(str(tmp_path))
    storage.put("things", "a/b", {"id": "slash"})
    storage.put("things", "a_b", {"id": "underscore"})

    assert storage.get("things", "a/b") == {"id": "slash"}
    assert storage.get("things", "a_b") == {"id": "underscore"}
    assert len(storage.list("things")) == 2
