"""Tests für den JSON-Snapshot-Speicher (data.store)."""

import pytest

from config.schema import DayOfWeek
from data.store import JsonDataStore, StaleSnapshotError
from engine import claim, revalidate_against
from models import Dataset, Mutation, ScheduleItem


def _item(id, room_id="R1", class_name="PDB01", lecturer_ids=None, pjmk=None):
    return ScheduleItem(
        id=id, course_id="mk-1", room_id=room_id, class_name=class_name,
        day=DayOfWeek.SENIN, time_slot="07:00 - 08:40",
        lecturer_ids=lecturer_ids or [], pjmk_lecturer_id=pjmk,
    )


@pytest.fixture
def store(tmp_path) -> JsonDataStore:
    s = JsonDataStore(tmp_path / "dataset.json")
    s.initialize(Dataset(schedule=[_item("E1"), _item("E2", "R2", "PDB02")]))
    return s


class TestJsonDataStore:
    def test_initialize_seeds_classes(self, tmp_path):
        s = JsonDataStore(tmp_path / "neu.json")
        assert not s.exists()
        s.initialize()
        assert s.exists()
        assert len(s.load().classes) == 125

    def test_load_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            JsonDataStore(tmp_path / "fehlt.json").load()

    def test_commit_schedule_update(self, store):
        ds = store.load()
        result = claim(ds.get_schedule_item("E1"), "L1", True, ds.schedule, ds.is_schedule_locked)
        store.commit_schedule(result.item)
        reloaded = store.load()
        assert reloaded.get_schedule_item("E1").lecturer_ids == ["L1"]
        assert reloaded.get_schedule_item("E1").pjmk_lecturer_id == "L1"

    def test_commit_schedule_new(self, store):
        store.commit_schedule(_item("E3", "R3", "PDB03"), is_new=True)
        assert [s.id for s in store.load_schedule()] == ["E1", "E2", "E3"]

    def test_stale_snapshot_rejected(self, store):
        """Zwei Clients mit demselben Snapshot: der zweite Commit scheitert."""
        snapshot = store.load()
        first = snapshot.get_schedule_item("E1").updated(room_id="R9")
        second = snapshot.get_schedule_item("E2").updated(room_id="R9")

        store.commit_schedule(first)
        with pytest.raises(StaleSnapshotError) as exc_info:
            store.commit_schedule(second)
        assert exc_info.value.conflicts[0].schedule_id == "E1"
        assert store.load().get_schedule_item("E2").room_id == "R2"

    def test_revalidation_can_be_disabled(self, tmp_path):
        s = JsonDataStore(tmp_path / "ds.json", revalidate_on_commit=False)
        s.initialize(Dataset(schedule=[_item("E1"), _item("E2", "R2", "PDB02")]))
        s.commit_schedule(s.load().get_schedule_item("E2").updated(room_id="R1"))
        assert s.load().get_schedule_item("E2").room_id == "R1"

    def test_lecturer_capacity_on_commit(self, tmp_path):
        """Mit Kapazität 2 darf ein Dosen parallel in zwei Klassen stehen."""
        s = JsonDataStore(tmp_path / "ds.json", lecturer_capacity=2)
        s.initialize(Dataset(schedule=[
            _item("E1", lecturer_ids=["L1"], pjmk="L1"),
            _item("E2", "R2", "PDB02"),
        ]))
        s.commit_schedule(s.load().get_schedule_item("E2").updated(lecturer_ids=["L1"]))
        assert s.load().get_schedule_item("E2").lecturer_ids == ["L1"]

    def test_set_lock(self, store):
        assert not store.is_locked()
        store.set_lock(True)
        assert store.is_locked()
        store.set_lock(False)
        assert not store.is_locked()
        assert len(store.load().settings) == 1

    def test_revalidate_against_store(self, store):
        """Der Store dient als ScheduleSource für die erneute Prüfung."""
        moved = _item("E2", room_id="R1", class_name="PDB02")
        conflicts = revalidate_against(moved, store)
        assert [c.schedule_id for c in conflicts] == ["E1"]
        assert revalidate_against(_item("E1"), store) == []

    def test_commit_delete(self, store):
        store.commit(Mutation.delete("schedule", "E2"))
        assert [s.id for s in store.load_schedule()] == ["E1"]
