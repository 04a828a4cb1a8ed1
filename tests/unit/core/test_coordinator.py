"""Unit tests for the consistency coordinator: cascades and write-through."""

import asyncio
from datetime import timedelta

import pytest

from keepnotes.core.coordinator import ConsistencyCoordinator
from keepnotes.core.errors import NotFound, PersistenceError
from keepnotes.core.models import utcnow


async def _user(core, name="alice"):
    async with core.mutation():
        return await core.users.register(name, "pw1")


async def test_open_loads_previous_snapshot(core, test_settings):
    user = await _user(core)
    async with core.mutation():
        core.notes.create(user.id, {"title": "kept"})

    reopened = ConsistencyCoordinator.open(test_settings)
    assert user.id in reopened.users
    assert [n.title for n in reopened.notes.list(user.id)] == ["kept"]


async def test_mutation_persists(core):
    user = await _user(core)
    async with core.mutation() as txn:
        core.tags.create(user.id, {"name": "work"})
    assert txn.persisted is True
    assert txn.warning is None
    assert len(core.gateway.load().tags) == 1


async def test_failed_mutation_is_not_persisted(core):
    user = await _user(core)
    with pytest.raises(NotFound):
        async with core.mutation():
            core.notes.get("missing", user.id)
    assert core.gateway.load().notes == []


async def test_persistence_failure_becomes_warning(core, monkeypatch):
    user = await _user(core)

    def broken_save(snapshot):
        raise PersistenceError("Error saving data: disk full")

    monkeypatch.setattr(core.gateway, "save", broken_save)

    async with core.mutation() as txn:
        note = core.notes.create(user.id, {"title": "only in memory"})

    assert txn.persisted is False
    assert "disk full" in txn.warning
    # memory is not rolled back
    assert core.notes.get(note.id, user.id).title == "only in memory"


async def test_delete_tag_strips_references(core):
    user = await _user(core)
    async with core.mutation():
        work = core.tags.create(user.id, {"name": "work"})
        home = core.tags.create(user.id, {"name": "home"})
        tagged = core.notes.create(user.id, {"tag_ids": [work.id, home.id]})
        untagged = core.notes.create(user.id, {"title": "plain"})

    result = await core.delete_tag_cascading(work.id, user.id)

    assert result.tags_removed == 1
    assert result.notes_rewritten == 1
    assert core.notes.get(tagged.id, user.id).tag_ids == [home.id]
    # housekeeping does not count as an edit
    assert core.notes.get(tagged.id, user.id).updated_at == tagged.updated_at
    assert core.notes.get(untagged.id, user.id) == untagged
    with pytest.raises(NotFound):
        core.tags.get(work.id, user.id)


async def test_delete_tag_leaves_other_owners_alone(core):
    alice = await _user(core, "alice")
    bob = await _user(core, "bob")
    async with core.mutation():
        tag = core.tags.create(alice.id, {"name": "work"})
        # tag ids are not validated, so bob can carry the same id
        bobs_note = core.notes.create(bob.id, {"tag_ids": [tag.id]})

    await core.delete_tag_cascading(tag.id, alice.id)

    assert core.notes.get(bobs_note.id, bob.id).tag_ids == [tag.id]


async def test_delete_foreign_tag_changes_nothing(core):
    alice = await _user(core, "alice")
    bob = await _user(core, "bob")
    async with core.mutation():
        tag = core.tags.create(alice.id, {"name": "work"})
        note = core.notes.create(alice.id, {"tag_ids": [tag.id]})

    with pytest.raises(NotFound):
        await core.delete_tag_cascading(tag.id, bob.id)

    assert core.tags.get(tag.id, alice.id)
    assert core.notes.get(note.id, alice.id).tag_ids == [tag.id]


async def test_delete_user_cascades(core):
    alice = await _user(core, "alice")
    bob = await _user(core, "bob")
    async with core.mutation():
        for i in range(3):
            core.notes.create(alice.id, {"title": str(i)})
        core.tags.create(alice.id, {"name": "work"})
        bobs = core.notes.create(bob.id, {"title": "bob"})

    result = await core.delete_user_cascading(alice.id)

    assert (result.notes_removed, result.tags_removed) == (3, 1)
    assert alice.id not in core.users
    assert core.notes.list(alice.id) == []
    assert core.tags.list(alice.id) == []
    assert core.notes.get(bobs.id, bob.id)

    on_disk = core.gateway.load()
    assert [u.username for u in on_disk.users] == ["bob"]
    assert [n.id for n in on_disk.notes] == [bobs.id]


async def test_delete_missing_user_changes_nothing(core):
    alice = await _user(core)
    async with core.mutation():
        core.notes.create(alice.id, {})

    with pytest.raises(NotFound):
        await core.delete_user_cascading("nobody")
    assert len(core.notes) == 1


async def test_purge_revocations(core):
    user = await _user(core)
    async with core.mutation():
        token = core.tokens.issue(user)
        core.tokens.revoke(token)

    assert await core.purge_revocations() == 0
    assert await core.purge_revocations(now=utcnow() + timedelta(hours=25)) == 1
    assert core.gateway.load().revocations == []


async def test_purge_loop_runs_until_cancelled(core, monkeypatch):
    calls = []

    async def fake_purge(now=None):
        calls.append(now)
        return 0

    monkeypatch.setattr(core, "purge_revocations", fake_purge)
    task = asyncio.create_task(core.run_purge_loop(0.01))
    await asyncio.sleep(0.05)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
    assert calls


async def test_operations_are_serialized(core):
    users = await asyncio.gather(*[_user(core, f"user{i}") for i in range(5)])
    assert len({u.id for u in users}) == 5
    assert len(core.gateway.load().users) == 5
