"""Tests für den Demo-Datengenerator."""

import pytest

from analysis.schedule_validator import ScheduleValidator
from config.defaults import default_config
from data.fake_data import FakeDataGenerator


@pytest.fixture(scope="module")
def demo_data():
    return FakeDataGenerator(default_config(), seed=42).generate()


class TestFakeDataGenerator:
    def test_counts(self, demo_data):
        assert len(demo_data.courses) == 12
        assert len(demo_data.lecturers) == 20
        assert len(demo_data.rooms) == 8
        assert len(demo_data.classes) == 125
        assert len(demo_data.schedule) == 48

    def test_no_errors(self, demo_data):
        """Generierter Jadwal ist frei von Doppelbelegungen."""
        report = ScheduleValidator().validate(demo_data, default_config().rules)
        errors = [v for v in report.violations if v.severity == "error"]
        assert errors == []

    def test_strictly_conflict_free(self, demo_data):
        """Kein Dosen steht zweimal im selben Slot."""
        rules = default_config().rules.model_copy(update={"max_concurrent_per_lecturer": 1})
        report = ScheduleValidator().validate(demo_data, rules)
        assert report.is_valid

    def test_claimed_entries_have_coordinator(self, demo_data):
        for s in demo_data.schedule:
            if s.lecturer_ids:
                assert s.pjmk_lecturer_id == s.lecturer_ids[0]
            else:
                assert s.pjmk_lecturer_id is None

    def test_seed_reproducible(self):
        a = FakeDataGenerator(default_config(), seed=7).generate()
        b = FakeDataGenerator(default_config(), seed=7).generate()
        assert a.schedule == b.schedule

    def test_claim_ratio_zero(self):
        data = FakeDataGenerator(default_config(), seed=1, claim_ratio=0.0).generate()
        assert all(s.is_open for s in data.schedule)
