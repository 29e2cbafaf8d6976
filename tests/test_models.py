"""Tests für die Datenmodelle (ScheduleItem, Dataset, Mutation)."""

import pytest
from pydantic import ValidationError

from config.schema import DayOfWeek
from models import AppSetting, ClassName, Course, Dataset, Lecturer, Mutation, ScheduleItem
from models.dataset import DuplicateRecordError, RecordNotFoundError
from models.schedule_item import parse_lecturer_ids


def _item(id="E", **kw) -> ScheduleItem:
    data = dict(
        id=id, course_id="mk-1", room_id="R1", class_name="PDB01",
        day="Senin", time_slot="07:00 - 08:40",
    )
    data.update(kw)
    return ScheduleItem(**data)


# ─── ALT-FORMATE ──────────────────────────────────────────────────────────────

class TestLegacyLecturerIds:
    @pytest.mark.parametrize("raw, expected", [
        (None, []),
        ("", []),
        ('["1", "2"]', ["1", "2"]),
        ("1, 2", ["1", "2"]),
        ("7", ["7"]),
        (7, ["7"]),
        (["a", " ", "b"], ["a", "b"]),
        ('["1", null]', ["1"]),
        ([None, "2"], ["2"]),
        ("[null]", []),
    ])
    def test_parse(self, raw, expected):
        assert parse_lecturer_ids(raw) == expected

    def test_single_lecturer_id_field(self):
        """Alt-Datensätze mit nur "lecturer_id" werden zur Liste."""
        item = ScheduleItem.model_validate({
            "id": "E", "course_id": "mk-1", "day": "Selasa",
            "time_slot": "09:00 - 10:40", "lecturer_id": "L1",
        })
        assert item.lecturer_ids == ["L1"]

    def test_json_string_in_record(self):
        item = _item(lecturer_ids='["L1","L2"]', pjmk_lecturer_id="L2")
        assert item.lecturer_ids == ["L1", "L2"]
        assert item.pjmk_lecturer_id == "L2"

    def test_null_member_does_not_fill_team(self):
        """Ein null-Eintrag im Alt-Format belegt keinen Team-Platz."""
        item = _item(lecturer_ids=[None, "L1"], pjmk_lecturer_id="L1")
        assert item.lecturer_ids == ["L1"]
        assert not item.has_lecturer("None")


# ─── INVARIANTEN ──────────────────────────────────────────────────────────────

class TestScheduleItemInvariants:
    def test_too_many_lecturers(self):
        with pytest.raises(ValidationError):
            _item(lecturer_ids=["L1", "L2", "L3"])

    def test_duplicate_lecturer(self):
        with pytest.raises(ValidationError):
            _item(lecturer_ids=["L1", "L1"])

    def test_pjmk_must_be_member(self):
        with pytest.raises(ValidationError):
            _item(lecturer_ids=["L1"], pjmk_lecturer_id="L2")

    def test_empty_pjmk_is_none(self):
        assert _item(pjmk_lecturer_id="").pjmk_lecturer_id is None

    def test_unknown_time_slot(self):
        with pytest.raises(ValidationError):
            _item(time_slot="08:00 - 09:00")

    def test_unknown_day(self):
        with pytest.raises(ValidationError):
            _item(day="Minggu")

    def test_updated_revalidates(self):
        item = _item(lecturer_ids=["L1"], pjmk_lecturer_id="L1")
        with pytest.raises(ValidationError):
            item.updated(lecturer_ids=[])
        moved = item.updated(day=DayOfWeek.RABU)
        assert moved.day == DayOfWeek.RABU
        assert item.day == DayOfWeek.SENIN

    def test_properties(self):
        item = _item(lecturer_ids=["L1"])
        assert item.slot_key == (DayOfWeek.SENIN, "07:00 - 08:40")
        assert not item.is_open
        assert item.has_lecturer("L1")


class TestOtherModels:
    def test_course_credits_positive(self):
        with pytest.raises(ValidationError):
            Course(id="mk-1", code="IF1", name="X", credits=0)

    def test_course_empty_coordinator(self):
        assert Course(id=1, code="IF1", name="X", credits=2, coordinator_id="").coordinator_id is None

    def test_lecturer_position(self):
        lecturer = Lecturer(id="d1", name="A", nip=1980, position="  lektor   kepala ")
        assert lecturer.nip == "1980"
        assert lecturer.normalized_position == "Lektor Kepala"
        assert Lecturer(id="d2", name="B", nip="1").normalized_position == "Tanpa Jabatan"


# ─── DATASET ──────────────────────────────────────────────────────────────────

class TestDataset:
    def test_lock_flag(self):
        ds = Dataset()
        assert not ds.is_schedule_locked
        locked = ds.apply(Mutation.add("settings", ds.lock_setting(True)))
        assert locked.is_schedule_locked
        unlocked = locked.apply(Mutation.update("settings", locked.lock_setting(False)))
        assert not unlocked.is_schedule_locked
        assert len(unlocked.settings) == 1

    def test_lock_value_case_insensitive(self):
        ds = Dataset(settings=[AppSetting(id="s1", key="schedule_lock", value="TRUE")])
        assert ds.is_schedule_locked
        assert ds.lock_setting(False).id == "s1"

    def test_default_classes(self):
        ds = Dataset().with_default_classes()
        names = [c.name for c in ds.classes]
        assert len(names) == 125
        assert names[0] == "PDB01"
        assert names[8] == "PDB09"
        assert names[-1] == "PDB125"
        assert ds.classes[0].id == "cls-1"

    def test_default_classes_not_overwritten(self):
        ds = Dataset(classes=[ClassName(id="c", name="X")]).with_default_classes()
        assert [c.name for c in ds.classes] == ["X"]

    def test_apply_add_update_delete(self):
        ds = Dataset()
        ds = ds.apply(Mutation.add("schedule", _item("E1")))
        ds = ds.apply(Mutation.add("schedule", _item("E2", room_id="R2", class_name="PDB02")))
        assert [s.id for s in ds.schedule] == ["E1", "E2"]

        ds = ds.apply(Mutation.update("schedule", _item("E1", lecturer_ids=["L1"])))
        assert ds.get_schedule_item("E1").lecturer_ids == ["L1"]

        ds = ds.apply(Mutation.delete("schedule", "E2"))
        assert [s.id for s in ds.schedule] == ["E1"]

        ds = ds.apply(Mutation.clear("schedule"))
        assert ds.schedule == []

    def test_apply_errors(self):
        ds = Dataset(schedule=[_item("E1")])
        with pytest.raises(DuplicateRecordError):
            ds.apply(Mutation.add("schedule", _item("E1")))
        with pytest.raises(RecordNotFoundError):
            ds.apply(Mutation.update("schedule", _item("E9")))
        with pytest.raises(RecordNotFoundError):
            ds.apply(Mutation.delete("schedule", "E9"))

    def test_apply_does_not_mutate_original(self):
        ds = Dataset()
        ds.apply(Mutation.add("schedule", _item("E1")))
        assert ds.schedule == []

    def test_mutation_target_id(self):
        assert Mutation.delete("rooms", "R1").target_id == "R1"
        assert Mutation.add("schedule", _item("E1")).target_id == "E1"
        assert Mutation.clear("rooms").target_id is None

    def test_json_roundtrip(self, tmp_path):
        ds = Dataset(schedule=[_item("E1", lecturer_ids=["L1"], pjmk_lecturer_id="L1")])
        path = tmp_path / "sub" / "ds.json"
        ds.save_json(path)
        loaded = Dataset.load_json(path)
        assert loaded.schedule == ds.schedule
        assert loaded.created_at is not None

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Dataset.load_json(tmp_path / "fehlt.json")

    def test_lookups(self):
        ds = Dataset(lecturers=[Lecturer(id="L1", name="Budi", nip="1")])
        assert ds.lecturer_name("L1") == "Budi"
        assert ds.lecturer_name("L9") == "L9"
        assert ds.get_schedule_item("nix") is None
