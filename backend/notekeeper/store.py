"""
NoteKeeper — In-Memory Note Store
===================================

What:  Lock-guarded mapping from note id to Note, plus the id generator.
How:   Every operation holds a single threading.Lock for its whole duration,
       so each operation is atomic relative to every other one. There are no
       multi-operation transactions.
Who:   One NoteStore is built per application by create_app() and handed to
       route handlers through FastAPI's dependency injection (get_store).
When:  Lives for the lifetime of the process; contents are lost on restart.

Ownership:
    The store owns every Note instance it holds. get() and update() return
    copies, put() stores a copy, so nothing outside the store can alias a
    stored record and mutate it without the lock.
"""

import threading
import time
from typing import Callable, Dict, Optional

from fastapi import Request

from notekeeper.models.note import Note


class IdGenerator:
    """
    Issues note ids from the nanosecond clock.

    Ids are the decimal rendering of time.time_ns(). If the clock has not
    advanced past the last issued value (same tick, or clock stepped back),
    the last value plus one is issued instead, so ids are strictly increasing
    and never repeat within a process.
    """

    def __init__(self, clock: Callable[[], int] = time.time_ns):
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def __call__(self) -> str:
        return self.next_id()

    def next_id(self) -> str:
        with self._lock:
            candidate = self._clock()
            if candidate <= self._last:
                candidate = self._last + 1
            self._last = candidate
            return str(candidate)


class NoteStore:
    """
    In-memory holder of all notes.

    Operations:
        put(note)               Insert or replace by note.id
        get(id)                 Copy of the note, or None
        update(id, name, text)  Overwrite name/text, return copy, or None
        delete(id)              True if a note was removed
        count()                 Number of stored notes
    """

    def __init__(self) -> None:
        self._notes: Dict[str, Note] = {}
        self._lock = threading.Lock()

    def put(self, note: Note) -> None:
        with self._lock:
            self._notes[note.id] = note.copy()

    def get(self, note_id: str) -> Optional[Note]:
        with self._lock:
            note = self._notes.get(note_id)
            return note.copy() if note is not None else None

    def update(self, note_id: str, name: str, text: str) -> Optional[Note]:
        with self._lock:
            note = self._notes.get(note_id)
            if note is None:
                return None
            # id and created_at are never touched here
            note.name = name
            note.text = text
            return note.copy()

    def delete(self, note_id: str) -> bool:
        with self._lock:
            return self._notes.pop(note_id, None) is not None

    def count(self) -> int:
        with self._lock:
            return len(self._notes)

    def __len__(self) -> int:
        return self.count()

    def __contains__(self, note_id: object) -> bool:
        with self._lock:
            return note_id in self._notes


# ── Store Dependency ──────────────────────────────────────────────────────
def get_store(request: Request) -> NoteStore:
    """
    FastAPI dependency returning the application's NoteStore.

    The store is attached to app.state by create_app(); there is no
    module-level store.
    """
    return request.app.state.store
