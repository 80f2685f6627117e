import json

import pytest

from fastfour.archive import InMemoryHistoryArchive, JsonHistoryArchive
from fastfour.controllers.tournament import finalize, record_result
from fastfour.exceptions import (
    FileLoadException,
    FileSaveException,
    InvalidTournamentDataException,
)


def _records(started, count):
    return [finalize(started, record_id=f"t-{i}")[0] for i in range(count)]


@pytest.fixture(params=["memory", "json"])
def archive(request, tmp_path):
    if request.param == "memory":
        return InMemoryHistoryArchive()
    return JsonHistoryArchive(tmp_path / "history.json")


def test_new_archive_is_empty(archive):
    assert archive.list_all() == []
    assert len(archive) == 0
    assert archive.get("t-0") is None


def test_list_is_newest_first(archive, started):
    for record in _records(started, 3):
        archive.append(record)

    assert [r.id for r in archive.list_all()] == ["t-2", "t-1", "t-0"]
    assert archive.get("t-1").id == "t-1"


def test_append_never_rewrites_existing_entries(archive, started):
    first, second = _records(started, 2)
    archive.append(first)
    before = archive.list_all()

    archive.append(second)

    assert archive.list_all()[1:] == before


def test_duplicate_record_id_is_rejected(archive, started):
    (record,) = _records(started, 1)
    archive.append(record)

    with pytest.raises(InvalidTournamentDataException):
        archive.append(record)
    assert len(archive) == 1


def test_archived_record_is_independent_of_later_states(archive, started):
    record, _ = finalize(started, record_id="t-0")
    archive.append(record)

    record_result(started, "m-r1-A", 4, 0)

    stored = archive.get("t-0")
    assert not stored.matches[0].completed


def test_json_archive_persists_across_instances(tmp_path, started):
    path = tmp_path / "history.json"
    JsonHistoryArchive(path).append(finalize(started, record_id="t-a")[0])
    JsonHistoryArchive(path).append(finalize(started, record_id="t-b")[0])

    reopened = JsonHistoryArchive(path)

    assert [r.id for r in reopened.list_all()] == ["t-b", "t-a"]
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data[0]["id"] == "t-b"
    assert data[0]["players"][0]["gamesWon"] == 0


def test_json_archive_creates_parent_directory(tmp_path, started):
    path = tmp_path / "nested" / "dir" / "history.json"
    JsonHistoryArchive(path).append(finalize(started, record_id="t-a")[0])
    assert path.exists()


def test_json_archive_leaves_no_temp_files(tmp_path, started):
    path = tmp_path / "history.json"
    JsonHistoryArchive(path).append(finalize(started, record_id="t-a")[0])
    assert [p.name for p in tmp_path.iterdir()] == ["history.json"]


def test_json_archive_rejects_corrupt_file(tmp_path):
    path = tmp_path / "history.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(FileLoadException):
        JsonHistoryArchive(path).list_all()


def test_json_archive_rejects_non_list(tmp_path):
    path = tmp_path / "history.json"
    path.write_text('{"id": "t-1"}', encoding="utf-8")

    with pytest.raises(FileLoadException):
        JsonHistoryArchive(path).list_all()


def test_json_archive_reports_write_failure(tmp_path, started):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    archive = JsonHistoryArchive(blocker / "history.json")

    with pytest.raises(FileSaveException):
        archive.append(finalize(started, record_id="t-a")[0])


@pytest.mark.parametrize(
    "content",
    [
        [{"id": "t-1", "players": ["oops"]}],
        [{"id": "t-1", "matches": [7]}],
        ["not a record"],
    ],
)
def test_json_archive_rejects_corrupt_records(tmp_path, content):
    path = tmp_path / "history.json"
    path.write_text(json.dumps(content), encoding="utf-8")

    with pytest.raises(FileLoadException):
        JsonHistoryArchive(path).list_all()
