"""Erneute Konfliktprüfung vor dem Commit.

Clients arbeiten auf einem lokalen, evtl. veralteten Snapshot (Polling alle
paar Sekunden). Zwei Dosen können denselben Slot gleichzeitig übernehmen.
revalidate() prüft einen berechneten Eintrag erneut gegen einen frisch
geladenen Snapshot; die Persistenzschicht entscheidet, ob sie dann ablehnt.
"""

from collections.abc import Sequence
from typing import Protocol

from engine.conflicts import Candidate, detect_conflicts
from engine.results import ConflictReport
from models.schedule_item import ScheduleItem


class ScheduleSource(Protocol):
    """Alles, was einen aktuellen Jadwal-Snapshot liefern kann."""

    def load_schedule(self) -> list[ScheduleItem]: ...


def revalidate(
    item: ScheduleItem,
    fresh_items: Sequence[ScheduleItem],
    lecturer_capacity: int = 1,
) -> list[ConflictReport]:
    """Konflikte des Eintrags im frischen Snapshot (der Eintrag selbst ausgenommen)."""
    return detect_conflicts(
        Candidate.from_item(item), fresh_items,
        exclude_id=item.id, lecturer_capacity=lecturer_capacity,
    )


def revalidate_against(
    item: ScheduleItem,
    source: ScheduleSource,
    lecturer_capacity: int = 1,
) -> list[ConflictReport]:
    """Wie revalidate(), lädt den Snapshot aber selbst aus der Quelle."""
    return revalidate(item, source.load_schedule(), lecturer_capacity)
