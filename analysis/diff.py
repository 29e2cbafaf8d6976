"""Vergleich zweier Dataset-Snapshots (Polling-Abgleich / Changelog).

Gibt strukturierte Unterschiede im Jadwal zurück, die als Rich-Tabelle oder
JSON ausgegeben werden können.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from models.dataset import Dataset

_COMPARED_FIELDS = (
    "course_id", "room_id", "class_name", "day", "time_slot",
    "lecturer_ids", "pjmk_lecturer_id",
)


@dataclass
class EntryChange:
    """Ein geänderter Jadwal-Eintrag (nur abweichende Felder)."""

    schedule_id: str
    changes: dict[str, tuple[str, str]]


@dataclass
class ScheduleDiff:
    """Vollständiger Diff zwischen zwei Snapshots."""

    entries_added: list[str] = field(default_factory=list)
    entries_removed: list[str] = field(default_factory=list)
    entries_changed: list[EntryChange] = field(default_factory=list)
    lock_changed: tuple[bool, bool] | None = None

    def is_empty(self) -> bool:
        """Gibt True zurück wenn kein Unterschied gefunden wurde."""
        return (
            not self.entries_added
            and not self.entries_removed
            and not self.entries_changed
            and self.lock_changed is None
        )

    def to_dict(self) -> dict:
        """Serialisiert den Diff als Dictionary (für JSON-Ausgabe)."""
        return {
            "entries_added": self.entries_added,
            "entries_removed": self.entries_removed,
            "entries_changed": [
                {
                    "schedule_id": c.schedule_id,
                    "changes": {k: list(v) for k, v in c.changes.items()},
                }
                for c in self.entries_changed
            ],
            "lock_changed": list(self.lock_changed) if self.lock_changed else None,
        }

    def to_json(self, indent: int = 2) -> str:
        """Gibt den Diff als JSON-String zurück."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)


def _fmt(value) -> str:
    if value is None:
        return "-"
    if isinstance(value, list):
        return ", ".join(value) if value else "-"
    return getattr(value, "value", str(value))


def diff_schedules(a: "Dataset", b: "Dataset") -> ScheduleDiff:
    """Vergleicht den Jadwal zweier Snapshots.

    Args:
        a: Älterer Snapshot (lokal).
        b: Neuerer Snapshot (frisch geladen).

    Returns:
        ScheduleDiff mit hinzugefügten, entfernten und geänderten Einträgen
        sowie einer geänderten Sperre.
    """
    diff = ScheduleDiff()

    items_a = {s.id: s for s in a.schedule}
    items_b = {s.id: s for s in b.schedule}
    diff.entries_added = sorted(set(items_b) - set(items_a))
    diff.entries_removed = sorted(set(items_a) - set(items_b))

    for schedule_id in sorted(set(items_a) & set(items_b)):
        old, new = items_a[schedule_id], items_b[schedule_id]
        changes: dict[str, tuple[str, str]] = {}
        for name in _COMPARED_FIELDS:
            v_old, v_new = getattr(old, name), getattr(new, name)
            if v_old != v_new:
                changes[name] = (_fmt(v_old), _fmt(v_new))
        if changes:
            diff.entries_changed.append(EntryChange(schedule_id=schedule_id, changes=changes))

    if a.is_schedule_locked != b.is_schedule_locked:
        diff.lock_changed = (a.is_schedule_locked, b.is_schedule_locked)

    return diff
