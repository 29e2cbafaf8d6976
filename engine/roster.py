"""Roster: Team aus höchstens zwei Dosen mit optionalem PJMK.

Immutable (frozen=True). Alle Helfer liefern ein neues Roster und halten
die Invarianten ein:
  - max. 2 Mitglieder, keine Duplikate, Mitglieder ohne Lücke vorne
  - coordinator (PJMK) ist leer oder Mitglied
"""

from dataclasses import dataclass
from typing import Optional

from models.schedule_item import ScheduleItem


@dataclass(frozen=True)
class Roster:
    """Team eines Jadwal-Eintrags."""

    members: tuple[Optional[str], Optional[str]] = (None, None)
    coordinator: Optional[str] = None

    def __post_init__(self) -> None:
        first, second = self.members
        if first is None and second is not None:
            raise ValueError("Roster: zweiter Platz belegt, erster leer")
        if first is not None and first == second:
            raise ValueError(f"Roster: Dosen {first} doppelt")
        if self.coordinator is not None and self.coordinator not in self.lecturer_ids:
            raise ValueError(f"Roster: PJMK {self.coordinator} ist kein Mitglied")

    @classmethod
    def from_item(cls, item: ScheduleItem) -> "Roster":
        ids = list(item.lecturer_ids)
        return cls.from_ids(ids, item.pjmk_lecturer_id)

    @classmethod
    def from_ids(cls, ids: list[str], coordinator: Optional[str] = None) -> "Roster":
        if len(ids) > 2:
            raise ValueError(f"Roster: {len(ids)} Dosen > 2")
        padded = (ids + [None, None])[:2]
        return cls(members=(padded[0], padded[1]), coordinator=coordinator)

    # ─── Abfragen ───

    @property
    def lecturer_ids(self) -> list[str]:
        return [m for m in self.members if m is not None]

    @property
    def size(self) -> int:
        return len(self.lecturer_ids)

    @property
    def is_empty(self) -> bool:
        return self.size == 0

    @property
    def is_full(self) -> bool:
        return self.size == 2

    def contains(self, lecturer_id: str) -> bool:
        return lecturer_id in self.lecturer_ids

    # ─── Änderungen ───

    def add(self, lecturer_id: str, as_coordinator: bool = False) -> "Roster":
        """Fügt einen Dosen hinzu; optional als PJMK."""
        if self.is_full:
            raise ValueError("Roster: Team ist voll")
        if self.contains(lecturer_id):
            raise ValueError(f"Roster: Dosen {lecturer_id} ist bereits Mitglied")
        ids = self.lecturer_ids + [lecturer_id]
        coordinator = lecturer_id if as_coordinator else self.coordinator
        return Roster.from_ids(ids, coordinator)

    def remove(self, lecturer_id: str) -> "Roster":
        """Entfernt einen Dosen. War er PJMK, geht die Rolle an das verbleibende Mitglied."""
        if not self.contains(lecturer_id):
            raise ValueError(f"Roster: Dosen {lecturer_id} ist kein Mitglied")
        ids = [m for m in self.lecturer_ids if m != lecturer_id]
        coordinator = self.coordinator
        if coordinator == lecturer_id:
            coordinator = ids[0] if ids else None
        return Roster.from_ids(ids, coordinator)

    def apply_to(self, item: ScheduleItem) -> ScheduleItem:
        """Neuer Eintrag mit diesem Roster; alle übrigen Felder bleiben gleich."""
        return item.updated(
            lecturer_ids=self.lecturer_ids,
            pjmk_lecturer_id=self.coordinator,
        )
