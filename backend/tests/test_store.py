"""
NoteKeeper — Note Store and ID Generator Unit Tests
=====================================================

What we test:
    ✅ Ids are decimal clock readings, strictly increasing, never repeated
    ✅ Concurrent id generation never collides
    ✅ Store hands out copies, never its own records
    ✅ Update touches name/text only
    ✅ Delete reports whether something was removed
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone

from notekeeper.models.note import Note
from notekeeper.store import IdGenerator, NoteStore


class FakeClock:
    """Returns the queued readings in order, repeating the last one."""

    def __init__(self, *readings):
        self.readings = list(readings)

    def __call__(self):
        if len(self.readings) > 1:
            return self.readings.pop(0)
        return self.readings[0]


class TestIdGenerator:

    def test_id_is_clock_reading(self):
        gen = IdGenerator(clock=FakeClock(1_700_000_000_000_000_000))
        assert gen() == "1700000000000000000"

    def test_same_tick_still_unique(self):
        gen = IdGenerator(clock=FakeClock(500))
        assert [gen(), gen(), gen()] == ["500", "501", "502"]

    def test_clock_stepping_back_keeps_increasing(self):
        gen = IdGenerator(clock=FakeClock(1000, 900, 2000))
        assert [gen.next_id(), gen.next_id(), gen.next_id()] == ["1000", "1001", "2000"]

    def test_default_clock_produces_digits(self):
        note_id = IdGenerator()()
        assert note_id.isdigit()

    def test_concurrent_ids_are_unique(self):
        gen = IdGenerator(clock=FakeClock(42))
        with ThreadPoolExecutor(max_workers=8) as pool:
            ids = list(pool.map(lambda _: gen(), range(2000)))
        assert len(set(ids)) == 2000


class TestNoteStore:

    def _note(self, note_id="1", name="a", text="b"):
        return Note(
            id=note_id,
            name=name,
            text=text,
            created_at=datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc),
        )

    def test_put_then_get(self):
        store = NoteStore()
        store.put(self._note())

        note = store.get("1")
        assert note is not None
        assert (note.id, note.name, note.text) == ("1", "a", "b")

    def test_get_unknown_returns_none(self):
        assert NoteStore().get("missing") is None

    def test_get_returns_copy(self):
        store = NoteStore()
        store.put(self._note())

        fetched = store.get("1")
        fetched.name = "changed outside"

        assert store.get("1").name == "a"

    def test_put_stores_copy(self):
        store = NoteStore()
        original = self._note()
        store.put(original)

        original.text = "changed after put"

        assert store.get("1").text == "b"

    def test_update_overwrites_name_and_text_only(self):
        store = NoteStore()
        original = self._note()
        store.put(original)

        updated = store.update("1", name="c", text="d")

        assert updated.name == "c"
        assert updated.text == "d"
        assert updated.id == "1"
        assert updated.created_at == original.created_at
        assert store.get("1").name == "c"

    def test_update_unknown_returns_none(self):
        store = NoteStore()
        assert store.update("missing", name="c", text="d") is None
        assert store.count() == 0

    def test_delete_twice(self):
        store = NoteStore()
        store.put(self._note())

        assert store.delete("1") is True
        assert store.delete("1") is False
        assert store.get("1") is None

    def test_count_len_contains(self):
        store = NoteStore()
        store.put(self._note("1"))
        store.put(self._note("2"))

        assert store.count() == 2
        assert len(store) == 2
        assert "1" in store
        assert "3" not in store

    def test_concurrent_puts_and_deletes(self):
        store = NoteStore()
        barrier = threading.Barrier(4)

        def worker(offset):
            barrier.wait()
            for i in range(250):
                note_id = f"{offset}-{i}"
                store.put(self._note(note_id))
                if i % 2:
                    store.delete(note_id)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert store.count() == 4 * 125
