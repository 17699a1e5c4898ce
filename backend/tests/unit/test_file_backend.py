import asyncio
import json
from pathlib import Path

import pytest

from backend.company_notes.models.note import NoteCreate, NoteUpdate
from backend.company_notes.services.backends import select_backends
from backend.company_notes.services.config import AppConfig
from backend.company_notes.services.file_backend import FileNoteBackend
from backend.company_notes.services.note_store import NoteErrorKind, NoteStore, NoteStoreError

NOTE_FIELDS = {"id", "companyId", "content", "isPrivate", "userId", "createdAt"}


@pytest.fixture
def notes_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "notes.json"


@pytest.fixture
def store(notes_path: Path) -> NoteStore:
    return NoteStore(FileNoteBackend(notes_path))


def _read(path: Path):
    return json.loads(path.read_text(encoding="utf-8"))


@pytest.mark.asyncio
async def test_missing_file_is_created_empty(notes_path: Path) -> None:
    backend = FileNoteBackend(notes_path)

    assert await backend.list_notes(1) == []
    assert notes_path.exists()
    assert _read(notes_path) == []


@pytest.mark.asyncio
async def test_create_writes_pretty_printed_camel_case_records(store, notes_path: Path) -> None:
    note = await store.create_note(NoteCreate(company_id=1, content="Hello"), "user-1")

    raw = notes_path.read_text(encoding="utf-8")
    records = json.loads(raw)

    assert raw.startswith("[\n  {")
    assert len(records) == 1
    assert set(records[0]) == NOTE_FIELDS
    assert records[0]["id"] == note.id
    assert records[0]["userId"] == "user-1"
    assert records[0]["isPrivate"] is False


@pytest.mark.asyncio
async def test_update_and_delete_rewrite_the_file(store, notes_path: Path) -> None:
    keep = await store.create_note(NoteCreate(company_id=1, content="keep"), "user-1")
    drop = await store.create_note(NoteCreate(company_id=1, content="drop"), "user-1")

    await store.update_note(keep.id, NoteUpdate(content="kept"), "user-1")
    await store.delete_note(drop.id, "user-1")

    records = _read(notes_path)
    assert [r["id"] for r in records] == [keep.id]
    assert records[0]["content"] == "kept"
    assert records[0]["createdAt"] == keep.created_at


@pytest.mark.asyncio
async def test_update_of_note_deleted_after_lookup_is_not_found(notes_path: Path) -> None:
    class DeletedAfterLookup(FileNoteBackend):
        async def get_note(self, note_id):
            found = await super().get_note(note_id)
            await self.remove_note(note_id)
            return found

    seed = NoteStore(FileNoteBackend(notes_path))
    note = await seed.create_note(NoteCreate(company_id=1, content="a"), "user-1")
    store = NoteStore(DeletedAfterLookup(notes_path))

    with pytest.raises(NoteStoreError) as excinfo:
        await store.update_note(note.id, NoteUpdate(content="b"), "user-1")

    assert excinfo.value.kind is NoteErrorKind.NOT_FOUND
    assert _read(notes_path) == []


@pytest.mark.asyncio
async def test_concurrent_delete_and_update_never_fail_unexpectedly(store, notes_path: Path) -> None:
    note = await store.create_note(NoteCreate(company_id=1, content="a"), "user-1")

    results = await asyncio.gather(
        store.delete_note(note.id, "user-1"),
        store.update_note(note.id, NoteUpdate(content="b"), "user-1"),
        return_exceptions=True,
    )

    for result in results:
        if isinstance(result, Exception):
            assert isinstance(result, NoteStoreError)
            assert result.kind is NoteErrorKind.NOT_FOUND
    assert _read(notes_path) == []


@pytest.mark.asyncio
async def test_reads_existing_records_and_defaults_privacy(notes_path: Path) -> None:
    notes_path.parent.mkdir(parents=True)
    notes_path.write_text(
        json.dumps(
            [
                {"id": "a", "companyId": 7, "content": "old", "createdAt": "2024-01-01T00:00:00.000Z"},
                {"id": "b", "companyId": 8, "content": "other", "createdAt": "2024-01-01T00:00:00.000Z"},
            ]
        ),
        encoding="utf-8",
    )
    store = NoteStore(FileNoteBackend(notes_path))

    notes = await store.list_notes_for_company(7, None)

    assert [n.id for n in notes] == ["a"]
    assert notes[0].is_private is False
    assert notes[0].user_id is None


@pytest.mark.asyncio
async def test_state_survives_a_new_backend_instance(notes_path: Path) -> None:
    first = NoteStore(FileNoteBackend(notes_path))
    note = await first.create_note(
        NoteCreate(company_id=2, content="persisted", is_private=True), "user-1"
    )

    second = NoteStore(FileNoteBackend(notes_path))

    assert [n.id for n in await second.list_notes_for_company(2, "user-1")] == [note.id]
    assert await second.list_notes_for_company(2, "user-2") == []


def test_select_backends_falls_back_to_file(tmp_path: Path) -> None:
    config = AppConfig(notes_file_path=tmp_path / "notes.json")

    backends = select_backends(config, None)

    assert isinstance(backends.notes, FileNoteBackend)
    assert backends.notes.file_path == (tmp_path / "notes.json").resolve()
    assert backends.companies is None
