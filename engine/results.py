"""Ergebnis- und Fehlertypen der Engine.

Die Engine wirft keine Ausnahmen über ihre Grenze hinaus: jede Operation
liefert ein ScheduleResult mit entweder einem neuen Eintrag oder einem
typisierten Fehler.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel

from config.schema import DayOfWeek
from models.schedule_item import ScheduleItem


class ConflictKind(str, Enum):
    ROOM = "RoomConflict"
    CLASS = "ClassConflict"
    LECTURER = "LecturerConflict"


class ConflictReport(BaseModel):
    """Eine einzelne Kollision mit einem bestehenden Eintrag."""

    kind: ConflictKind
    day: DayOfWeek
    time_slot: str
    schedule_id: str            # kollidierender Eintrag
    class_name: str             # dessen Klassenlabel
    room_id: Optional[str] = None
    lecturer_id: Optional[str] = None
    concurrent_count: int = 1   # Anzahl kollidierender Einträge (Dosen-Check)

    @property
    def description(self) -> str:
        if self.kind == ConflictKind.ROOM:
            return f"RUANGAN: {self.room_id} belegt durch {self.class_name}"
        if self.kind == ConflictKind.CLASS:
            return f"KELAS: {self.class_name} hat bereits einen Eintrag"
        return (
            f"DOSEN: {self.lecturer_id} unterrichtet bereits {self.class_name}"
            + (f" (+{self.concurrent_count - 1} weitere)" if self.concurrent_count > 1 else "")
        )


class AllocationErrorKind(str, Enum):
    CONFLICT_DETECTED = "ConflictDetected"
    SCHEDULE_LIMIT_EXCEEDED = "ScheduleLimitExceeded"
    SCHEDULE_LOCKED = "ScheduleLocked"
    ALREADY_FULL = "AlreadyFull"
    NOT_A_MEMBER = "NotAMember"
    INVALID_ROSTER = "InvalidRoster"
    ALREADY_MEMBER = "AlreadyMember"
    INVALID_TRANSITION = "InvalidTransition"
    INCOMPLETE_ENTRY = "IncompleteEntry"


class AllocationError(BaseModel):
    """Typisierter Ablehnungsgrund."""

    kind: AllocationErrorKind
    message: str
    conflicts: list[ConflictReport] = []
    related_schedule_ids: list[str] = []   # z.B. die 2 parallelen Einträge bei Limit


class ScheduleResult(BaseModel):
    """Ergebnis einer Engine-Operation: entweder item oder error."""

    item: Optional[ScheduleItem] = None
    error: Optional[AllocationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, item: ScheduleItem) -> "ScheduleResult":
        return cls(item=item)

    @classmethod
    def failure(
        cls,
        kind: AllocationErrorKind,
        message: str,
        conflicts: Optional[list[ConflictReport]] = None,
        related_schedule_ids: Optional[list[str]] = None,
    ) -> "ScheduleResult":
        return cls(error=AllocationError(
            kind=kind,
            message=message,
            conflicts=conflicts or [],
            related_schedule_ids=related_schedule_ids or [],
        ))
