"""Datenmodell für einen Jadwal-Eintrag (Pydantic v2).

Ein Eintrag belegt genau ein (Tag, Zeitslot)-Paar mit Raum, Klasse,
Lehrveranstaltung und einem Team aus höchstens zwei Dosen.
"""

import json
from typing import Optional

from pydantic import BaseModel, field_validator, model_validator

from config.defaults import TIME_SLOTS
from config.schema import DayOfWeek

MAX_LECTURERS = 2


def parse_lecturer_ids(raw) -> list[str]:
    """Normalisiert Dosen-IDs aus Alt-Daten des Tabellen-Backends.

    Akzeptiert: Liste, JSON-Array als String ('["1","2"]'),
    kommagetrennten String ("1, 2"), Einzelwert. Leere Werte → [].
    """
    if raw is None:
        return []
    if isinstance(raw, (list, tuple)):
        return [str(x).strip() for x in raw if x is not None and str(x).strip()]
    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            return []
        if text.startswith("["):
            try:
                parsed = json.loads(text)
            except json.JSONDecodeError:
                return [text]
            if isinstance(parsed, list):
                return [str(x).strip() for x in parsed if x is not None and str(x).strip()]
            return [text]
        if "," in text:
            return [part.strip() for part in text.split(",") if part.strip()]
        return [text]
    return [str(raw).strip()]


class ScheduleItem(BaseModel):
    """Ein Eintrag im Wochenraster.

    Invarianten (beim Erzeugen geprüft):
    - höchstens 2 Dosen, keine Duplikate
    - pjmk_lecturer_id ist leer oder Mitglied von lecturer_ids
    """

    id: str
    course_id: str
    room_id: str = ""
    class_name: str = ""
    day: DayOfWeek
    time_slot: str
    lecturer_ids: list[str] = []
    pjmk_lecturer_id: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _legacy_single_lecturer(cls, data):
        # Alt-Format: nur "lecturer_id" statt Liste
        if isinstance(data, dict) and "lecturer_id" in data:
            data = dict(data)
            legacy = data.pop("lecturer_id")
            if not data.get("lecturer_ids") and legacy:
                data["lecturer_ids"] = [legacy]
        return data

    @field_validator("id", "course_id", "room_id", "class_name", "time_slot", mode="before")
    @classmethod
    def _coerce_str(cls, v):
        return "" if v is None else str(v).strip()

    @field_validator("time_slot")
    @classmethod
    def _known_time_slot(cls, v: str) -> str:
        if v not in TIME_SLOTS:
            raise ValueError(f"Unbekannter Zeitslot: {v!r} (erlaubt: {', '.join(TIME_SLOTS)})")
        return v

    @field_validator("lecturer_ids", mode="before")
    @classmethod
    def _parse_lecturer_ids(cls, v):
        return parse_lecturer_ids(v)

    @field_validator("pjmk_lecturer_id", mode="before")
    @classmethod
    def _empty_pjmk_to_none(cls, v):
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    @model_validator(mode="after")
    def _check_roster(self):
        if len(self.lecturer_ids) > MAX_LECTURERS:
            raise ValueError(
                f"Eintrag {self.id}: {len(self.lecturer_ids)} Dosen > Maximum {MAX_LECTURERS}"
            )
        if len(set(self.lecturer_ids)) != len(self.lecturer_ids):
            raise ValueError(f"Eintrag {self.id}: Dosen doppelt im Team {self.lecturer_ids}")
        if self.pjmk_lecturer_id is not None and self.pjmk_lecturer_id not in self.lecturer_ids:
            raise ValueError(
                f"Eintrag {self.id}: PJMK {self.pjmk_lecturer_id} ist kein Mitglied des Teams"
            )
        return self

    @property
    def slot_key(self) -> tuple[DayOfWeek, str]:
        """(Tag, Zeitslot) – Schlüssel für alle Konfliktprüfungen."""
        return (self.day, self.time_slot)

    @property
    def is_open(self) -> bool:
        """True wenn noch kein Dosen eingetragen ist (Open Slot)."""
        return not self.lecturer_ids

    def has_lecturer(self, lecturer_id: str) -> bool:
        return lecturer_id in self.lecturer_ids

    def updated(self, **changes) -> "ScheduleItem":
        """Neue, validierte Kopie mit geänderten Feldern.

        Im Gegensatz zu model_copy() läuft die volle Validierung inkl.
        Roster-Invarianten.
        """
        data = self.model_dump()
        data.update(changes)
        return ScheduleItem.model_validate(data)
