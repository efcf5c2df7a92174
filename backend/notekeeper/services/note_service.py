"""
NoteKeeper — Note Service (Business Logic)
============================================

What:  Create, read, update and delete operations over the NoteStore.
How:   Assigns ids and timestamps on create, and turns the store's
       "not found" results into NotFoundError so handlers stay thin.
Who:   Called by the /note route handlers.

Design Decision:
    NoteService holds no state of its own. It receives the store and the id
    generator at construction, and a fresh NoteService is built per request
    by the get_note_service dependency.
"""

import logging
from typing import Callable

from fastapi import Depends

from notekeeper.exceptions import NotFoundError
from notekeeper.models.note import Note, utc_now
from notekeeper.schemas.note import NotePayload
from notekeeper.store import IdGenerator, NoteStore, get_store

logger = logging.getLogger(__name__)

# One generator per process; ids stay unique across every store it feeds.
default_id_generator = IdGenerator()


class NoteService:
    """
    Business logic layer for note operations.

    Responsibilities:
        - create_note(): Assign id + created_at, store, return the new note
        - get_note():    Single note retrieval with not-found handling
        - update_note(): Overwrite name/text of an existing note
        - delete_note(): Remove a note
    """

    def __init__(
        self,
        store: NoteStore,
        id_generator: Callable[[], str] = default_id_generator,
    ):
        self.store = store
        self.id_generator = id_generator

    def create_note(self, payload: NotePayload) -> Note:
        note = Note(
            id=self.id_generator(),
            name=payload.name,
            text=payload.text,
            created_at=utc_now(),
        )
        self.store.put(note)
        logger.info("Note created: %s", note.id)
        return note

    def get_note(self, note_id: str) -> Note:
        """
        Retrieve a single note by ID.

        Raises:
            NotFoundError: Note with given ID does not exist (→ 404)
        """
        note = self.store.get(note_id)
        if note is None:
            raise NotFoundError(resource="note", resource_id=note_id)
        return note

    def update_note(self, note_id: str, payload: NotePayload) -> Note:
        """
        Overwrite name and text of an existing note.

        id and created_at are left untouched. Applying the same payload
        twice leaves the store in the same state as applying it once.

        Raises:
            NotFoundError: Note with given ID does not exist (→ 404)
        """
        note = self.store.update(note_id, name=payload.name, text=payload.text)
        if note is None:
            raise NotFoundError(resource="note", resource_id=note_id)
        logger.info("Note updated: %s", note_id)
        return note

    def delete_note(self, note_id: str) -> None:
        """
        Raises:
            NotFoundError: Note with given ID does not exist (→ 404)
        """
        if not self.store.delete(note_id):
            raise NotFoundError(resource="note", resource_id=note_id)
        logger.info("Note deleted: %s", note_id)


def get_note_service(store: NoteStore = Depends(get_store)) -> NoteService:
    """FastAPI dependency wiring the application's store into a NoteService."""
    return NoteService(store)
