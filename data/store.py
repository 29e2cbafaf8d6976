"""JSON-Snapshot-Speicher: Laden des Datensatzes und Commit einzelner Mutationen.

Kein Transaktionsmodell: jeder Commit lädt den aktuellen Stand, wendet die
Mutation an und schreibt die Datei neu (last writer wins). Für Jadwal-Einträge
kann vorher gegen den frischen Stand erneut geprüft werden (revalidate).
"""

import logging
from pathlib import Path
from typing import Optional

from engine.results import ConflictReport
from engine.revalidation import revalidate
from models.dataset import Dataset, Mutation
from models.schedule_item import ScheduleItem

logger = logging.getLogger(__name__)


class StaleSnapshotError(RuntimeError):
    """Der berechnete Eintrag kollidiert mit dem frisch geladenen Snapshot."""

    def __init__(self, item: ScheduleItem, conflicts: list[ConflictReport]) -> None:
        self.item = item
        self.conflicts = conflicts
        details = "; ".join(c.description for c in conflicts)
        super().__init__(
            f"Eintrag {item.id} kollidiert mit dem aktuellen Stand: {details}"
        )


class JsonDataStore:
    """Datenzugriff über eine einzelne JSON-Datei."""

    def __init__(
        self,
        path: Path,
        revalidate_on_commit: bool = True,
        lecturer_capacity: int = 1,
    ) -> None:
        self.path = Path(path)
        self.revalidate_on_commit = revalidate_on_commit
        self.lecturer_capacity = lecturer_capacity

    def exists(self) -> bool:
        return self.path.exists()

    # ─── Lesen ───

    def load(self) -> Dataset:
        """Lädt den vollständigen Snapshot."""
        dataset = Dataset.load_json(self.path)
        logger.debug(
            f"Snapshot geladen: {self.path} "
            f"({len(dataset.schedule)} Jadwal-Einträge)"
        )
        return dataset

    def load_schedule(self) -> list[ScheduleItem]:
        return list(self.load().schedule)

    def is_locked(self) -> bool:
        return self.load().is_schedule_locked

    # ─── Schreiben ───

    def initialize(self, dataset: Optional[Dataset] = None) -> Dataset:
        """Legt die Datei an (mit Standard-Klassen PDB01…PDB125)."""
        dataset = (dataset or Dataset()).with_default_classes()
        dataset.save_json(self.path)
        logger.info(f"Datensatz angelegt: {self.path}")
        return dataset

    def commit(self, mutation: Mutation) -> Dataset:
        """Wendet eine Mutation auf den aktuellen Stand an und speichert."""
        current = self.load()
        updated = current.apply(mutation)
        updated.save_json(self.path)
        logger.info(
            f"Commit: {mutation.action} {mutation.entity}"
            + (f" {mutation.target_id}" if mutation.target_id else "")
        )
        return updated

    def commit_schedule(self, item: ScheduleItem, is_new: bool = False) -> Dataset:
        """Speichert einen von der Engine berechneten Eintrag.

        Raises:
            StaleSnapshotError: wenn revalidate_on_commit aktiv ist und der
                Eintrag im frischen Snapshot kollidiert.
        """
        if self.revalidate_on_commit:
            fresh = self.load_schedule()
            conflicts = revalidate(item, fresh, self.lecturer_capacity)
            if conflicts:
                logger.warning(
                    f"Commit von {item.id} abgelehnt: {len(conflicts)} Konflikt(e) "
                    f"im aktuellen Stand"
                )
                raise StaleSnapshotError(item, conflicts)
        mutation = Mutation.add("schedule", item) if is_new else Mutation.update("schedule", item)
        return self.commit(mutation)

    def set_lock(self, locked: bool) -> Dataset:
        """Setzt die globale Jadwal-Sperre."""
        current = self.load()
        setting = current.lock_setting(locked)
        exists = any(s.id == setting.id for s in current.settings)
        mutation = (
            Mutation.update("settings", setting) if exists
            else Mutation.add("settings", setting)
        )
        return self.commit(mutation)
