"""Validierung des gesamten Jadwal-Datensatzes.

Prüft den Snapshot auf Verletzungen als Sicherheitsnetz unabhängig von der
Engine – z.B. nach Importen oder konkurrierenden Commits mehrerer Clients.
"""

from collections import defaultdict
from typing import Literal

from pydantic import BaseModel

from config.schema import SchedulingRules
from models.dataset import Dataset


class ValidationViolation(BaseModel):
    """Eine einzelne Verletzung."""

    severity: Literal["error", "warning"]
    constraint: str      # z.B. "room_double_booking"
    description: str
    entity: str          # schedule_id / room_id / lecturer_id / class_name


class ValidationReport(BaseModel):
    """Ergebnis der Datensatz-Validierung."""

    violations: list[ValidationViolation]
    is_valid: bool       # True wenn keine Errors (Warnings ok)

    def print_rich(self) -> None:
        """Gibt den Report formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel
        from rich.table import Table
        from rich import box

        console = Console()
        errors = [v for v in self.violations if v.severity == "error"]
        warnings = [v for v in self.violations if v.severity == "warning"]

        status = (
            "[bold green]✓ VALIDE[/bold green]"
            if self.is_valid
            else "[bold red]✗ VERLETZUNGEN GEFUNDEN[/bold red]"
        )
        lines = [status, f"Fehler: {len(errors)} | Warnungen: {len(warnings)}"]
        console.print(Panel("\n".join(lines), title="Jadwal-Validierung", border_style="cyan"))

        if not self.violations:
            console.print("[dim]Keine Verletzungen gefunden.[/dim]")
            return

        table = Table(box=box.ROUNDED, show_lines=True)
        table.add_column("Typ", width=8)
        table.add_column("Constraint", width=28)
        table.add_column("Entität", width=14)
        table.add_column("Beschreibung")

        for v in self.violations:
            color = "red" if v.severity == "error" else "yellow"
            table.add_row(
                f"[{color}]{v.severity.upper()}[/{color}]",
                v.constraint,
                v.entity,
                v.description,
            )
        console.print(table)


class ScheduleValidator:
    """Prüft einen Dataset auf Doppelbelegungen und verwaiste Referenzen."""

    def validate(self, dataset: Dataset, rules: SchedulingRules) -> ValidationReport:
        """Führt alle Checks durch und gibt einen ValidationReport zurück."""
        violations: list[ValidationViolation] = []

        violations.extend(self._check_room_double_booking(dataset))
        violations.extend(self._check_class_double_booking(dataset))
        violations.extend(self._check_lecturer_double_booking(dataset, rules))
        violations.extend(self._check_references(dataset))
        violations.extend(self._check_teaching_logs(dataset))

        has_errors = any(v.severity == "error" for v in violations)
        return ValidationReport(violations=violations, is_valid=not has_errors)

    # ── Einzelne Prüfungen ────────────────────────────────────────────────────

    def _check_room_double_booking(self, dataset: Dataset) -> list[ValidationViolation]:
        """Ein Raum darf pro (Tag, Slot) nur einmal belegt sein."""
        violations: list[ValidationViolation] = []
        seen: dict[tuple, list[str]] = defaultdict(list)
        for s in dataset.schedule:
            if not s.room_id:
                continue
            seen[(s.room_id, s.day, s.time_slot)].append(s.class_name)

        for (room_id, day, ts), classes in seen.items():
            if len(classes) > 1:
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="room_double_booking",
                    entity=room_id,
                    description=f"{day.value}, {ts}: gleichzeitig von {', '.join(classes)} belegt.",
                ))
        return violations

    def _check_class_double_booking(self, dataset: Dataset) -> list[ValidationViolation]:
        """Eine Klasse darf pro (Tag, Slot) nur einen Eintrag haben."""
        violations: list[ValidationViolation] = []
        seen: dict[tuple, list[str]] = defaultdict(list)
        for s in dataset.schedule:
            if not s.class_name:
                continue
            seen[(s.class_name, s.day, s.time_slot)].append(s.id)

        for (class_name, day, ts), ids in seen.items():
            if len(ids) > 1:
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="class_double_booking",
                    entity=class_name,
                    description=f"{day.value}, {ts}: mehrere Einträge ({', '.join(ids)}).",
                ))
        return violations

    def _check_lecturer_double_booking(
        self, dataset: Dataset, rules: SchedulingRules
    ) -> list[ValidationViolation]:
        """Dosen in mehreren parallelen Einträgen.

        Bis max_concurrent_per_lecturer erlaubt (Warnung), darüber Fehler.
        """
        violations: list[ValidationViolation] = []
        seen: dict[tuple, list[str]] = defaultdict(list)
        for s in dataset.schedule:
            for lecturer_id in s.lecturer_ids:
                seen[(lecturer_id, s.day, s.time_slot)].append(s.class_name)

        for (lecturer_id, day, ts), classes in seen.items():
            if len(classes) <= 1:
                continue
            over_limit = len(classes) > rules.max_concurrent_per_lecturer
            violations.append(ValidationViolation(
                severity="error" if over_limit else "warning",
                constraint="lecturer_double_booking" if over_limit else "lecturer_parallel_classes",
                entity=lecturer_id,
                description=(
                    f"{day.value}, {ts}: gleichzeitig in {', '.join(classes)} "
                    f"(erlaubt: {rules.max_concurrent_per_lecturer})."
                ),
            ))
        return violations

    def _check_references(self, dataset: Dataset) -> list[ValidationViolation]:
        """Verweise auf Kurse, Räume, Dosen und Klassen müssen auflösbar sein."""
        violations: list[ValidationViolation] = []
        courses = dataset.course_map()
        rooms = dataset.room_map()
        lecturers = dataset.lecturer_map()
        class_names = {c.name for c in dataset.classes}

        for s in dataset.schedule:
            if s.course_id not in courses:
                violations.append(ValidationViolation(
                    severity="error", constraint="unknown_course", entity=s.id,
                    description=f"Mata Kuliah {s.course_id!r} existiert nicht.",
                ))
            if s.room_id and s.room_id not in rooms:
                violations.append(ValidationViolation(
                    severity="warning", constraint="unknown_room", entity=s.id,
                    description=f"Raum {s.room_id!r} existiert nicht.",
                ))
            if s.class_name and class_names and s.class_name not in class_names:
                violations.append(ValidationViolation(
                    severity="warning", constraint="unknown_class", entity=s.id,
                    description=f"Klasse {s.class_name!r} ist nicht in der Klassenliste.",
                ))
            for lecturer_id in s.lecturer_ids:
                if lecturer_id not in lecturers:
                    violations.append(ValidationViolation(
                        severity="warning", constraint="unknown_lecturer", entity=s.id,
                        description=f"Dosen {lecturer_id!r} existiert nicht.",
                    ))

        for c in dataset.courses:
            if c.coordinator_id and c.coordinator_id not in lecturers:
                violations.append(ValidationViolation(
                    severity="warning", constraint="unknown_coordinator", entity=c.id,
                    description=f"Koordinator {c.coordinator_id!r} existiert nicht.",
                ))
        return violations

    def _check_teaching_logs(self, dataset: Dataset) -> list[ValidationViolation]:
        """Logs müssen auf einen Eintrag zeigen, in dem der Dosen Mitglied ist."""
        violations: list[ValidationViolation] = []
        items = {s.id: s for s in dataset.schedule}
        seen: set[tuple] = set()

        for log in dataset.teaching_logs:
            item = items.get(log.schedule_id)
            if item is None:
                violations.append(ValidationViolation(
                    severity="warning", constraint="orphan_teaching_log", entity=log.id,
                    description=f"Jadwal {log.schedule_id!r} existiert nicht.",
                ))
                continue
            if log.lecturer_id not in item.lecturer_ids:
                violations.append(ValidationViolation(
                    severity="warning", constraint="foreign_teaching_log", entity=log.id,
                    description=(
                        f"Dosen {log.lecturer_id} ist nicht (mehr) im Team von "
                        f"{item.class_name}."
                    ),
                ))
            key = (log.schedule_id, log.lecturer_id, log.week)
            if key in seen:
                violations.append(ValidationViolation(
                    severity="warning", constraint="duplicate_teaching_log", entity=log.id,
                    description=f"Pertemuan {log.week} für {item.class_name} doppelt erfasst.",
                ))
            seen.add(key)
        return violations
