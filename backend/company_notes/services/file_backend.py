"""Local JSON file storage for notes."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..models.note import Note
from .backends import NoteBackend

logger = logging.getLogger(__name__)

NoteRecord = Dict[str, Any]


def read_json_file(file_path: Path, fallback: Any) -> Any:
    """
    Load JSON from ``file_path``.

    A missing file is created with ``fallback`` and ``fallback`` is returned.
    """
    try:
        raw = file_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        write_json_file(file_path, fallback)
        return fallback
    return json.loads(raw)


def write_json_file(file_path: Path, data: Any) -> None:
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(json.dumps(data, indent=2), encoding="utf-8")


class FileNoteBackend(NoteBackend):
    """
    Stores every note in one pretty-printed JSON array.

    The whole file is read before each operation and rewritten after each
    mutation. Mutations are serialized per instance; other processes writing
    the same file are not coordinated with.
    """

    def __init__(self, file_path: Path) -> None:
        self.file_path = Path(file_path)
        self._write_lock = asyncio.Lock()

    def _load(self) -> List[Note]:
        records: List[NoteRecord] = read_json_file(self.file_path, [])
        if not isinstance(records, list):
            raise ValueError(f"Notes file must hold a JSON array: {self.file_path}")
        return [Note.model_validate(record) for record in records]

    def _save(self, notes: List[Note]) -> None:
        write_json_file(self.file_path, [note.to_record() for note in notes])

    async def _read_all(self) -> List[Note]:
        return await asyncio.to_thread(self._load)

    async def _write_all(self, notes: List[Note]) -> None:
        await asyncio.to_thread(self._save, notes)

    async def list_notes(self, company_id: int) -> List[Note]:
        notes = await self._read_all()
        return [note for note in notes if note.company_id == company_id]

    async def get_note(self, note_id: str) -> Optional[Note]:
        notes = await self._read_all()
        return next((note for note in notes if note.id == note_id), None)

    async def insert_note(self, note: Note) -> None:
        async with self._write_lock:
            notes = await self._read_all()
            notes.append(note)
            await self._write_all(notes)

    async def replace_note(self, note: Note) -> bool:
        async with self._write_lock:
            notes = await self._read_all()
            for index, existing in enumerate(notes):
                if existing.id == note.id:
                    notes[index] = note
                    break
            else:
                # Removed since the caller read it
                return False
            await self._write_all(notes)
        return True

    async def remove_note(self, note_id: str) -> None:
        async with self._write_lock:
            notes = await self._read_all()
            remaining = [note for note in notes if note.id != note_id]
            await self._write_all(remaining)
        logger.debug("Rewrote %s with %d notes", self.file_path, len(remaining))


__all__ = ["FileNoteBackend", "read_json_file", "write_json_file"]
