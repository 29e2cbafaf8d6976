"""Engine: Konflikterkennung und Team-Teaching-Zuteilung (reine Funktionen)."""

from .results import (
    AllocationError,
    AllocationErrorKind,
    ConflictKind,
    ConflictReport,
    ScheduleResult,
)
from .conflicts import Candidate, concurrent_entries, detect_conflicts, same_slot_entries
from .roster import Roster
from .allocation import claim, join, open_entries_for, release, take
from .direct_edit import DirectEdit, apply_direct_edit, create_entry
from .revalidation import ScheduleSource, revalidate, revalidate_against

__all__ = [
    "AllocationError",
    "AllocationErrorKind",
    "ConflictKind",
    "ConflictReport",
    "ScheduleResult",
    "Candidate",
    "concurrent_entries",
    "detect_conflicts",
    "same_slot_entries",
    "Roster",
    "claim",
    "join",
    "open_entries_for",
    "release",
    "take",
    "DirectEdit",
    "apply_direct_edit",
    "create_entry",
    "ScheduleSource",
    "revalidate",
    "revalidate_against",
]
