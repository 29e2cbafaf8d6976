"""Admin-Pfad: direktes Anlegen und Überschreiben von Jadwal-Einträgen.

Anders als im Dosen-Portal wird das Team hier komplett ersetzt (Hauptdosen/PJMK
+ Team-Dosen), nicht schrittweise aufgebaut. Die Sperre gilt hier nicht,
die Konfliktprüfung über das gesamte neue Tupel aber immer.
"""

import time
from collections.abc import Sequence
from typing import Optional

from pydantic import BaseModel, field_validator

from config.schema import DayOfWeek
from engine.conflicts import Candidate, detect_conflicts
from engine.results import AllocationErrorKind, ScheduleResult
from engine.roster import Roster
from models.schedule_item import ScheduleItem


class DirectEdit(BaseModel):
    """Formularinhalt des Admin-Editors. Leere Felder bedeuten "keine Auswahl"."""

    course_id: Optional[str] = None
    room_id: Optional[str] = None
    class_name: Optional[str] = None
    day: Optional[DayOfWeek] = None
    time_slot: Optional[str] = None
    main_lecturer_id: Optional[str] = None    # "Dosen Utama (PJMK)"
    team_lecturer_id: Optional[str] = None    # "Dosen Team"
    pjmk_lecturer_id: Optional[str] = None    # optional explizit

    @field_validator(
        "course_id", "room_id", "class_name", "time_slot",
        "main_lecturer_id", "team_lecturer_id", "pjmk_lecturer_id",
        mode="before",
    )
    @classmethod
    def _blank_to_none(cls, v):
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    @classmethod
    def from_item(cls, item: ScheduleItem) -> "DirectEdit":
        """Vorbelegung des Editors mit einem bestehenden Eintrag."""
        ids = list(item.lecturer_ids)
        main, team = (ids + [None, None])[:2]
        # PJMK in den Hauptplatz
        if item.pjmk_lecturer_id is not None and item.pjmk_lecturer_id == team:
            main, team = team, main
        return cls(
            course_id=item.course_id,
            room_id=item.room_id,
            class_name=item.class_name,
            day=item.day,
            time_slot=item.time_slot,
            main_lecturer_id=main,
            team_lecturer_id=team,
            pjmk_lecturer_id=item.pjmk_lecturer_id,
        )


def _build_roster(fields: DirectEdit) -> tuple[Optional[Roster], Optional[ScheduleResult]]:
    """Roster aus Haupt-/Team-Platz. PJMK: explizit, sonst Hauptdosen, sonst Team-Dosen."""
    main, team = fields.main_lecturer_id, fields.team_lecturer_id
    if main is not None and main == team:
        return None, ScheduleResult.failure(
            AllocationErrorKind.INVALID_ROSTER,
            f"Dosen {main} kann nicht gleichzeitig Hauptdosen und Team-Dosen sein.",
        )
    ids = [x for x in (main, team) if x is not None]
    pjmk = fields.pjmk_lecturer_id
    if pjmk is not None and pjmk not in ids:
        return None, ScheduleResult.failure(
            AllocationErrorKind.INVALID_ROSTER,
            f"PJMK {pjmk} ist weder Hauptdosen noch Team-Dosen.",
        )
    if pjmk is None and ids:
        pjmk = ids[0]
    return Roster.from_ids(ids, pjmk), None


def _check_and_build(
    item_id: str,
    fields: DirectEdit,
    existing: Sequence[ScheduleItem],
    exclude_id: Optional[str],
    lecturer_capacity: int,
) -> ScheduleResult:
    roster, rejected = _build_roster(fields)
    if rejected is not None:
        return rejected

    try:
        item = ScheduleItem(
            id=item_id,
            course_id=fields.course_id or "",
            room_id=fields.room_id or "",
            class_name=fields.class_name or "",
            day=fields.day,
            time_slot=fields.time_slot,
            lecturer_ids=roster.lecturer_ids,
            pjmk_lecturer_id=roster.coordinator,
        )
    except ValueError as e:
        return ScheduleResult.failure(AllocationErrorKind.INCOMPLETE_ENTRY, str(e))

    conflicts = detect_conflicts(
        Candidate.from_item(item), existing,
        exclude_id=exclude_id, lecturer_capacity=lecturer_capacity,
    )
    if conflicts:
        return ScheduleResult.failure(
            AllocationErrorKind.CONFLICT_DETECTED,
            "Speichern nicht möglich – Jadwal-Konflikt: "
            + "; ".join(c.description for c in conflicts),
            conflicts=conflicts,
        )
    return ScheduleResult.success(item)


def apply_direct_edit(
    entry: ScheduleItem,
    new_fields: DirectEdit,
    existing: Sequence[ScheduleItem],
    lecturer_capacity: int = 1,
) -> ScheduleResult:
    """Überschreibt einen Eintrag nach Admin-Eingabe.

    Nicht gesetzte Felder (None) übernehmen den bisherigen Wert; das Team
    wird immer aus main_lecturer_id/team_lecturer_id neu gebildet.
    """
    merged = new_fields.model_copy(update={
        "course_id": new_fields.course_id or entry.course_id,
        "room_id": new_fields.room_id or entry.room_id,
        "class_name": new_fields.class_name or entry.class_name,
        "day": new_fields.day or entry.day,
        "time_slot": new_fields.time_slot or entry.time_slot,
    })
    return _check_and_build(entry.id, merged, existing, entry.id, lecturer_capacity)


def create_entry(
    new_fields: DirectEdit,
    existing: Sequence[ScheduleItem],
    new_id: Optional[str] = None,
    lecturer_capacity: int = 1,
) -> ScheduleResult:
    """Legt einen neuen Eintrag an (Admin-Formular "Tambah Jadwal").

    Pflichtfelder: Kurs, Raum, Klasse, Tag, Zeitslot. Dosen sind optional
    (Open Slot).
    """
    missing = [
        name for name in ("course_id", "room_id", "class_name", "day", "time_slot")
        if getattr(new_fields, name) is None
    ]
    if missing:
        return ScheduleResult.failure(
            AllocationErrorKind.INCOMPLETE_ENTRY,
            f"Bitte alle Jadwal-Daten ausfüllen (fehlt: {', '.join(missing)}).",
        )
    item_id = new_id or f"sch-{int(time.time() * 1000)}"
    return _check_and_build(item_id, new_fields, existing, None, lecturer_capacity)
