"""Konflikterkennung für Jadwal-Einträge.

Prüft einen Kandidaten (neuer Eintrag oder geänderter bestehender Eintrag)
gegen alle Einträge im selben (Tag, Zeitslot):
  1. Raum doppelt belegt      → RoomConflict
  2. Klasse doppelt belegt    → ClassConflict
  3. Dosen doppelt eingeplant → LecturerConflict (pro Dosen, nach ID sortiert)

Reine Funktion: keine I/O, kein Logging, keine Mutation.
"""

from collections.abc import Iterable
from typing import Optional

from pydantic import BaseModel, field_validator

from config.schema import DayOfWeek
from engine.results import ConflictKind, ConflictReport
from models.schedule_item import ScheduleItem, parse_lecturer_ids


class Candidate(BaseModel):
    """Zu prüfendes Tupel. Leere room_id/class_name überspringen die jeweilige Prüfung."""

    day: DayOfWeek
    time_slot: str
    room_id: Optional[str] = None
    class_name: Optional[str] = None
    lecturer_ids: list[str] = []

    @field_validator("lecturer_ids", mode="before")
    @classmethod
    def _parse_lecturer_ids(cls, v):
        return parse_lecturer_ids(v)

    @classmethod
    def from_item(cls, item: ScheduleItem) -> "Candidate":
        return cls(
            day=item.day,
            time_slot=item.time_slot,
            room_id=item.room_id or None,
            class_name=item.class_name or None,
            lecturer_ids=list(item.lecturer_ids),
        )


def same_slot_entries(
    day: DayOfWeek,
    time_slot: str,
    existing: Iterable[ScheduleItem],
    exclude_id: Optional[str] = None,
) -> list[ScheduleItem]:
    """Alle Einträge im selben (Tag, Slot), ohne exclude_id. Reihenfolge bleibt erhalten."""
    return [
        s for s in existing
        if s.slot_key == (day, time_slot) and s.id != exclude_id
    ]


def detect_conflicts(
    candidate: Candidate,
    existing: Iterable[ScheduleItem],
    exclude_id: Optional[str] = None,
    lecturer_capacity: int = 1,
) -> list[ConflictReport]:
    """Ermittelt alle Konflikte des Kandidaten mit dem bestehenden Jadwal.

    Args:
        candidate: Zu prüfendes (Tag, Slot, Raum, Klasse, Dosen)-Tupel.
        existing: Vollständiger aktueller Jadwal-Snapshot.
        exclude_id: ID des bearbeiteten Eintrags (kollidiert nicht mit sich selbst).
        lecturer_capacity: Ab so vielen anderen parallelen Einträgen gilt ein
            Dosen als doppelt gebucht. 1 = strikt (jede Überschneidung).

    Returns:
        Liste der Konflikte in der Reihenfolge Raum → Klasse → Dosen.
        Leere Liste = kein Konflikt.
    """
    if lecturer_capacity < 1:
        raise ValueError(f"lecturer_capacity muss ≥ 1 sein, nicht {lecturer_capacity}")

    same_slot = same_slot_entries(candidate.day, candidate.time_slot, existing, exclude_id)
    conflicts: list[ConflictReport] = []

    # ── 1. Raum ──────────────────────────────────────────────────────────────
    if candidate.room_id:
        hit = next((s for s in same_slot if s.room_id == candidate.room_id), None)
        if hit is not None:
            conflicts.append(ConflictReport(
                kind=ConflictKind.ROOM,
                day=candidate.day,
                time_slot=candidate.time_slot,
                schedule_id=hit.id,
                class_name=hit.class_name,
                room_id=candidate.room_id,
            ))

    # ── 2. Klasse ────────────────────────────────────────────────────────────
    if candidate.class_name:
        hit = next((s for s in same_slot if s.class_name == candidate.class_name), None)
        if hit is not None:
            conflicts.append(ConflictReport(
                kind=ConflictKind.CLASS,
                day=candidate.day,
                time_slot=candidate.time_slot,
                schedule_id=hit.id,
                class_name=hit.class_name,
            ))

    # ── 3. Dosen ─────────────────────────────────────────────────────────────
    for lecturer_id in sorted(set(candidate.lecturer_ids)):
        hits = [s for s in same_slot if s.has_lecturer(lecturer_id)]
        if len(hits) >= lecturer_capacity:
            conflicts.append(ConflictReport(
                kind=ConflictKind.LECTURER,
                day=candidate.day,
                time_slot=candidate.time_slot,
                schedule_id=hits[0].id,
                class_name=hits[0].class_name,
                lecturer_id=lecturer_id,
                concurrent_count=len(hits),
            ))

    return conflicts


def concurrent_entries(
    lecturer_id: str,
    day: DayOfWeek,
    time_slot: str,
    existing: Iterable[ScheduleItem],
    exclude_id: Optional[str] = None,
) -> list[ScheduleItem]:
    """Andere Einträge im selben (Tag, Slot), in denen der Dosen bereits unterrichtet."""
    return [
        s for s in same_slot_entries(day, time_slot, existing, exclude_id)
        if s.has_lecturer(lecturer_id)
    ]
