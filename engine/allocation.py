"""Team-Teaching-Zustandsautomat für das Dosen-Portal.

Zustände eines Eintrags:  Empty (0 Dosen) → Solo (1) → Full (2)

Übergänge:
  claim    Empty → Solo   Aufrufer entscheidet, ob der Dosen PJMK wird
  join     Solo  → Full   ohne PJMK wird der Beitretende automatisch PJMK
  release  Solo → Empty / Full → Solo   PJMK geht an das verbleibende Mitglied

Prüfreihenfolge für claim/join:
  1. Sperre (ScheduleLocked)
  2. Roster-Zustand (AlreadyMember, AlreadyFull, InvalidTransition)
  3. Parallel-Limit (ScheduleLimitExceeded), zugleich die Dosen-Konfliktprüfung
     mit dem Dosen als einzigem Kandidaten

Jede Ablehnung lässt den Eintrag unverändert.
"""

from collections.abc import Sequence
from typing import Optional

from engine.conflicts import concurrent_entries
from engine.results import AllocationErrorKind, ScheduleResult
from engine.roster import Roster
from models.schedule_item import ScheduleItem

DEFAULT_MAX_CONCURRENT = 2


def _current(entry: ScheduleItem, existing: Sequence[ScheduleItem]) -> ScheduleItem:
    """Die Snapshot-Version des Eintrags (falls vorhanden) ist maßgeblich."""
    return next((s for s in existing if s.id == entry.id), entry)


def _locked() -> ScheduleResult:
    return ScheduleResult.failure(
        AllocationErrorKind.SCHEDULE_LOCKED,
        "Jadwal ist gesperrt – Änderungen nur durch den Admin.",
    )


def _guard_slot(
    entry: ScheduleItem,
    actor_id: str,
    existing: Sequence[ScheduleItem],
    max_concurrent: int,
) -> Optional[ScheduleResult]:
    """Parallel-Limit für den beitretenden Dosen.

    Der Kandidat enthält nur den Dosen (Raum und Klasse bleiben unverändert),
    daher entspricht das Limit der Dosen-Konfliktprüfung mit
    lecturer_capacity=max_concurrent.
    """
    parallel = concurrent_entries(actor_id, entry.day, entry.time_slot, existing, exclude_id=entry.id)
    if len(parallel) >= max_concurrent:
        return ScheduleResult.failure(
            AllocationErrorKind.SCHEDULE_LIMIT_EXCEEDED,
            f"Dosen {actor_id} hat am {entry.day.value}, {entry.time_slot} bereits "
            f"{len(parallel)} Klassen ({', '.join(s.class_name for s in parallel)}).",
            related_schedule_ids=[s.id for s in parallel],
        )
    return None


def claim(
    entry: ScheduleItem,
    actor_id: str,
    as_coordinator: bool,
    existing: Sequence[ScheduleItem],
    is_locked: bool,
    max_concurrent: int = DEFAULT_MAX_CONCURRENT,
) -> ScheduleResult:
    """Empty → Solo: Dosen übernimmt einen offenen Eintrag."""
    if is_locked:
        return _locked()
    entry = _current(entry, existing)
    roster = Roster.from_item(entry)

    if roster.contains(actor_id):
        return ScheduleResult.failure(
            AllocationErrorKind.ALREADY_MEMBER,
            f"Dosen {actor_id} ist bereits im Team von {entry.class_name}.",
        )
    if not roster.is_empty:
        return ScheduleResult.failure(
            AllocationErrorKind.INVALID_TRANSITION,
            f"{entry.class_name} ist nicht mehr offen – bitte dem Team beitreten (join).",
        )

    rejected = _guard_slot(entry, actor_id, existing, max_concurrent)
    if rejected is not None:
        return rejected

    return ScheduleResult.success(roster.add(actor_id, as_coordinator=as_coordinator).apply_to(entry))


def join(
    entry: ScheduleItem,
    actor_id: str,
    existing: Sequence[ScheduleItem],
    is_locked: bool,
    max_concurrent: int = DEFAULT_MAX_CONCURRENT,
) -> ScheduleResult:
    """Solo → Full: Dosen tritt als zweites Mitglied bei.

    Hat der erste Dosen die PJMK-Rolle abgelehnt, wird der Beitretende PJMK.
    """
    if is_locked:
        return _locked()
    entry = _current(entry, existing)
    roster = Roster.from_item(entry)

    if roster.contains(actor_id):
        return ScheduleResult.failure(
            AllocationErrorKind.ALREADY_MEMBER,
            f"Dosen {actor_id} ist bereits im Team von {entry.class_name}.",
        )
    if roster.is_full:
        return ScheduleResult.failure(
            AllocationErrorKind.ALREADY_FULL,
            f"{entry.class_name} ist voll (max. 2 Dosen).",
        )
    if roster.is_empty:
        return ScheduleResult.failure(
            AllocationErrorKind.INVALID_TRANSITION,
            f"{entry.class_name} ist noch offen – bitte übernehmen (claim).",
        )

    rejected = _guard_slot(entry, actor_id, existing, max_concurrent)
    if rejected is not None:
        return rejected

    as_coordinator = roster.coordinator is None
    return ScheduleResult.success(roster.add(actor_id, as_coordinator=as_coordinator).apply_to(entry))


def take(
    entry: ScheduleItem,
    actor_id: str,
    as_coordinator: bool,
    existing: Sequence[ScheduleItem],
    is_locked: bool,
    max_concurrent: int = DEFAULT_MAX_CONCURRENT,
) -> ScheduleResult:
    """Portal-Button "Ambil": claim bei leerem Team, sonst join.

    as_coordinator wird nur beim claim ausgewertet.
    """
    current = _current(entry, existing)
    if current.is_open:
        return claim(current, actor_id, as_coordinator, existing, is_locked, max_concurrent)
    return join(current, actor_id, existing, is_locked, max_concurrent)


def release(
    entry: ScheduleItem,
    actor_id: str,
    existing: Sequence[ScheduleItem],
    is_locked: bool = False,
    enforce_lock: bool = True,
) -> ScheduleResult:
    """Solo → Empty / Full → Solo: Dosen gibt die eigene Mitgliedschaft ab.

    enforce_lock=True  → Selbstbedienung im Portal (gesperrt = abgelehnt)
    enforce_lock=False → Admin-Freigabe, ignoriert die Sperre
    """
    if enforce_lock and is_locked:
        return _locked()
    entry = _current(entry, existing)
    roster = Roster.from_item(entry)

    if not roster.contains(actor_id):
        return ScheduleResult.failure(
            AllocationErrorKind.NOT_A_MEMBER,
            f"Dosen {actor_id} ist kein Mitglied von {entry.class_name}.",
        )
    return ScheduleResult.success(roster.remove(actor_id).apply_to(entry))


def open_entries_for(lecturer_id: str, existing: Sequence[ScheduleItem]) -> list[ScheduleItem]:
    """Einträge, denen der Dosen noch beitreten kann (nicht voll, noch kein Mitglied)."""
    return [
        s for s in existing
        if len(s.lecturer_ids) < 2 and not s.has_lecturer(lecturer_id)
    ]
