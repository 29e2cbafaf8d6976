"""Dataset: Vollständiger Snapshot aller Stammdaten und des Jadwals (Pydantic v2)."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import BaseModel

from config.defaults import SCHEDULE_LOCK_KEY, default_class_names
from models.class_name import ClassName
from models.course import Course
from models.lecturer import Lecturer
from models.room import Room
from models.schedule_item import ScheduleItem
from models.setting import AppSetting
from models.teaching_log import TeachingLog

EntityName = Literal[
    "courses", "lecturers", "rooms", "classes", "schedule", "teaching_logs", "settings"
]

ENTITY_MODELS: dict[str, type[BaseModel]] = {
    "courses": Course,
    "lecturers": Lecturer,
    "rooms": Room,
    "classes": ClassName,
    "schedule": ScheduleItem,
    "teaching_logs": TeachingLog,
    "settings": AppSetting,
}


class RecordNotFoundError(KeyError):
    """Update/Delete auf eine ID, die im Snapshot nicht existiert."""


class DuplicateRecordError(ValueError):
    """Add mit einer ID, die im Snapshot bereits existiert."""


class Mutation(BaseModel):
    """Eine Änderung an genau einer Entität (add/update/delete/clear)."""

    action: Literal["add", "update", "delete", "clear"]
    entity: EntityName
    record: Optional[dict[str, Any]] = None   # für add/update
    record_id: Optional[str] = None           # für delete

    @classmethod
    def add(cls, entity: str, record: BaseModel) -> "Mutation":
        return cls(action="add", entity=entity, record=record.model_dump(mode="json"))

    @classmethod
    def update(cls, entity: str, record: BaseModel) -> "Mutation":
        return cls(action="update", entity=entity, record=record.model_dump(mode="json"))

    @classmethod
    def delete(cls, entity: str, record_id: str) -> "Mutation":
        return cls(action="delete", entity=entity, record_id=record_id)

    @classmethod
    def clear(cls, entity: str) -> "Mutation":
        return cls(action="clear", entity=entity)

    @property
    def target_id(self) -> Optional[str]:
        if self.record_id is not None:
            return self.record_id
        if self.record is not None and "id" in self.record:
            return str(self.record["id"])
        return None


class Dataset(BaseModel):
    """Vollständiger Datensatz: Kurse, Dosen, Räume, Klassen, Jadwal, Logs, Settings."""

    courses: list[Course] = []
    lecturers: list[Lecturer] = []
    rooms: list[Room] = []
    classes: list[ClassName] = []
    schedule: list[ScheduleItem] = []
    teaching_logs: list[TeachingLog] = []
    settings: list[AppSetting] = []
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None
    data_version: str = "1.0"

    # ─── Übersicht ───

    def summary(self) -> str:
        """Kurze Übersicht über den Datensatz."""
        open_slots = sum(1 for s in self.schedule if s.is_open)
        team = sum(1 for s in self.schedule if len(s.lecturer_ids) == 2)
        lines = [
            f"Mata Kuliah: {len(self.courses)}",
            f"Dosen: {len(self.lecturers)}",
            f"Ruangan: {len(self.rooms)}",
            f"Kelas: {len(self.classes)}",
            f"Jadwal: {len(self.schedule)} "
            f"({open_slots} offen, {team} Team-Teaching)",
            f"Anwesenheits-Logs: {len(self.teaching_logs)}",
            f"Jadwal gesperrt: {'ja' if self.is_schedule_locked else 'nein'}",
        ]
        return "\n".join(lines)

    # ─── Lookups ───

    def get_schedule_item(self, schedule_id: str) -> Optional[ScheduleItem]:
        return next((s for s in self.schedule if s.id == schedule_id), None)

    def course_map(self) -> dict[str, Course]:
        return {c.id: c for c in self.courses}

    def lecturer_map(self) -> dict[str, Lecturer]:
        return {l.id: l for l in self.lecturers}

    def room_map(self) -> dict[str, Room]:
        return {r.id: r for r in self.rooms}

    def lecturer_name(self, lecturer_id: str) -> str:
        lecturer = self.lecturer_map().get(lecturer_id)
        return lecturer.name if lecturer else lecturer_id

    # ─── Sperre ───

    @property
    def is_schedule_locked(self) -> bool:
        """Globale Jadwal-Sperre (Setting "schedule_lock" = "true")."""
        return any(s.key == SCHEDULE_LOCK_KEY and s.is_true for s in self.settings)

    def lock_setting(self, locked: bool) -> AppSetting:
        """Setting-Datensatz für die Sperre (bestehende ID wird übernommen)."""
        existing = next((s for s in self.settings if s.key == SCHEDULE_LOCK_KEY), None)
        return AppSetting(
            id=existing.id if existing else "lock_setting",
            key=SCHEDULE_LOCK_KEY,
            value="true" if locked else "false",
        )

    # ─── Klassen-Seed ───

    def with_default_classes(self) -> "Dataset":
        """Legt PDB01…PDB125 an, falls noch keine Klassen existieren."""
        if self.classes:
            return self
        classes = [ClassName(id=cid, name=name) for cid, name in default_class_names()]
        return self.model_copy(update={"classes": classes})

    # ─── Mutationen ───

    def apply(self, mutation: Mutation) -> "Dataset":
        """Wendet eine Mutation an und gibt einen neuen Dataset zurück."""
        model = ENTITY_MODELS[mutation.entity]
        records: list = list(getattr(self, mutation.entity))

        if mutation.action == "clear":
            records = []
        elif mutation.action == "add":
            new = model.model_validate(mutation.record or {})
            if any(r.id == new.id for r in records):
                raise DuplicateRecordError(f"{mutation.entity}: ID {new.id} existiert bereits")
            records.append(new)
        elif mutation.action == "update":
            new = model.model_validate(mutation.record or {})
            idx = next((i for i, r in enumerate(records) if r.id == new.id), None)
            if idx is None:
                raise RecordNotFoundError(f"{mutation.entity}: ID {new.id} nicht gefunden")
            records[idx] = new
        elif mutation.action == "delete":
            target = mutation.target_id
            remaining = [r for r in records if r.id != target]
            if len(remaining) == len(records):
                raise RecordNotFoundError(f"{mutation.entity}: ID {target} nicht gefunden")
            records = remaining

        return self.model_copy(update={mutation.entity: records})

    # ─── Persistenz ────────────────────────────────────────────────────────

    def save_json(self, path: Path) -> None:
        """Speichert den kompletten Datensatz als JSON-Datei."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        now = datetime.now(timezone.utc)
        updated = self.model_copy(update={
            "modified_at": now,
            "created_at": self.created_at or now,
        })
        with open(path, "w", encoding="utf-8") as f:
            f.write(updated.model_dump_json(indent=2))

    @classmethod
    def load_json(cls, path: Path) -> "Dataset":
        """Lädt einen Datensatz aus einer JSON-Datei."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"JSON-Datei nicht gefunden: {path}")
        with open(path, "r", encoding="utf-8") as f:
            return cls.model_validate_json(f.read())
