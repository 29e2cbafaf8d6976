"""Tests für das Roster (Team aus max. zwei Dosen)."""

import pytest

from engine import Roster
from models.schedule_item import ScheduleItem


class TestRoster:
    def test_empty(self):
        r = Roster()
        assert r.is_empty
        assert r.lecturer_ids == []
        assert r.coordinator is None

    def test_gap_rejected(self):
        with pytest.raises(ValueError):
            Roster(members=(None, "L1"))

    def test_duplicate_rejected(self):
        with pytest.raises(ValueError):
            Roster(members=("L1", "L1"))

    def test_coordinator_must_be_member(self):
        with pytest.raises(ValueError):
            Roster(members=("L1", None), coordinator="L2")

    def test_from_ids_too_many(self):
        with pytest.raises(ValueError):
            Roster.from_ids(["L1", "L2", "L3"])

    def test_add_and_full(self):
        r = Roster().add("L1", as_coordinator=True).add("L2")
        assert r.is_full
        assert r.lecturer_ids == ["L1", "L2"]
        assert r.coordinator == "L1"
        with pytest.raises(ValueError):
            r.add("L3")

    def test_add_existing_rejected(self):
        with pytest.raises(ValueError):
            Roster.from_ids(["L1"]).add("L1")

    def test_remove_transfers_coordinator(self):
        r = Roster.from_ids(["L1", "L2"], "L1").remove("L1")
        assert r.lecturer_ids == ["L2"]
        assert r.coordinator == "L2"

    def test_remove_last(self):
        r = Roster.from_ids(["L1"], "L1").remove("L1")
        assert r.is_empty
        assert r.coordinator is None

    def test_remove_non_member(self):
        with pytest.raises(ValueError):
            Roster.from_ids(["L1"]).remove("L2")

    def test_immutable(self):
        r = Roster.from_ids(["L1"])
        r.add("L2")
        assert r.lecturer_ids == ["L1"]
        with pytest.raises(AttributeError):
            r.coordinator = "L1"

    def test_apply_to_item(self):
        item = ScheduleItem(
            id="E", course_id="mk-1", room_id="R1", class_name="PDB01",
            day="Jumat", time_slot="15:00 - 16:40",
        )
        updated = Roster.from_ids(["L1", "L2"], "L2").apply_to(item)
        assert updated.lecturer_ids == ["L1", "L2"]
        assert updated.pjmk_lecturer_id == "L2"
        assert updated.room_id == "R1"
        assert Roster.from_item(updated).contains("L2")
