"""Unit tests for the JSON snapshot gateway."""

import json

import pytest

from keepnotes.core.errors import PersistenceError
from keepnotes.core.models import Note, RevokedToken, Tag, User
from keepnotes.core.persistence import (
    BLACKLIST_FILE,
    NOTES_FILE,
    TAGS_FILE,
    USERS_FILE,
    Snapshot,
    SnapshotGateway,
)


@pytest.fixture
def gateway(tmp_path):
    return SnapshotGateway(tmp_path / "data")


def _snapshot():
    user = User(username="alice", password="digest")
    tag = Tag(user_id=user.id, name="work")
    note = Note(user_id=user.id, title="t", tag_ids=[tag.id])
    revoked = RevokedToken(token="abc", expires_at=note.created_at)
    return Snapshot(users=[user], notes=[note], tags=[tag], revocations=[revoked])


def test_missing_directory_loads_empty(gateway):
    snapshot = gateway.load()
    assert snapshot == Snapshot()
    assert gateway.data_dir.is_dir()


def test_save_then_load(gateway):
    original = _snapshot()
    gateway.save(original)
    assert gateway.load() == original


def test_files_use_camel_case_names(gateway):
    gateway.save(_snapshot())

    notes = json.loads((gateway.data_dir / NOTES_FILE).read_text())
    assert set(notes[0]) == {
        "id", "title", "content", "tagIds", "userId", "createdAt", "updatedAt", "archived", "color"
    }
    blacklist = json.loads((gateway.data_dir / BLACKLIST_FILE).read_text())
    assert set(blacklist[0]) == {"token", "expiresAt"}
    users = json.loads((gateway.data_dir / USERS_FILE).read_text())
    assert "password" in users[0]


def test_save_leaves_no_temp_files(gateway):
    gateway.save(_snapshot())
    gateway.save(_snapshot())
    names = sorted(p.name for p in gateway.data_dir.iterdir())
    assert names == sorted([USERS_FILE, NOTES_FILE, TAGS_FILE, BLACKLIST_FILE])


def test_empty_file_counts_as_empty(gateway):
    gateway.data_dir.mkdir(parents=True)
    (gateway.data_dir / TAGS_FILE).write_text("")
    assert gateway.load().tags == []


def test_corrupt_file_fails_loudly(gateway):
    gateway.data_dir.mkdir(parents=True)
    (gateway.data_dir / NOTES_FILE).write_text("{not json")
    with pytest.raises(PersistenceError):
        gateway.load()


def test_save_failure_is_persistence_error(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("a file, not a directory")
    with pytest.raises(PersistenceError):
        SnapshotGateway(blocker).save(_snapshot())


def test_is_writable(gateway):
    assert gateway.is_writable() is False
    gateway.load()
    assert gateway.is_writable() is True


def test_undecodable_file_fails_loudly(gateway):
    gateway.data_dir.mkdir(parents=True)
    (gateway.data_dir / USERS_FILE).write_bytes(b"\xff\xfe\x80 not utf-8")
    with pytest.raises(PersistenceError):
        gateway.load()
