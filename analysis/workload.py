"""SKS-Auslastung und Honorar pro Dosen.

Rencana (geplant):   SKS der Lehrveranstaltung / Teamgröße
Realisasi:           SKS × Anzahl Anwesenheiten / meetings_per_term
Honorar:             Realisasi × honor_multiplier × rate_per_sks
"""

from collections import defaultdict

from pydantic import BaseModel

from config.schema import HonorConfig
from models.dataset import Dataset


class LecturerWorkload(BaseModel):
    """Auslastung einer einzelnen Lehrkraft."""

    lecturer_id: str
    name: str
    sessions: int
    pjmk_sessions: int
    planned_sks: float
    realized_sks: float
    attendance: int
    honor_amount: int


class WorkloadReport(BaseModel):
    """Auslastung aller Dosen mit mindestens einem Eintrag."""

    lecturers: list[LecturerWorkload]

    @property
    def total_honor(self) -> int:
        return sum(l.honor_amount for l in self.lecturers)

    def print_rich(self) -> None:
        """Gibt den Report als Rich-Tabelle aus."""
        from rich.console import Console
        from rich.table import Table
        from rich import box

        console = Console()
        table = Table(title="SKS-Auslastung & Honor", box=box.ROUNDED)
        table.add_column("Dosen", style="bold")
        table.add_column("Kelas", justify="right")
        table.add_column("PJMK", justify="right")
        table.add_column("Rencana SKS", justify="right")
        table.add_column("Hadir", justify="right")
        table.add_column("Realisasi SKS", justify="right")
        table.add_column("Honor (Rp)", justify="right")

        for l in self.lecturers:
            table.add_row(
                l.name,
                str(l.sessions),
                str(l.pjmk_sessions),
                f"{l.planned_sks:.2f}",
                str(l.attendance),
                f"{l.realized_sks:.2f}",
                f"{l.honor_amount:,}".replace(",", "."),
            )
        console.print(table)
        console.print(f"[bold]Total Honor:[/bold] Rp {self.total_honor:,}".replace(",", "."))


class WorkloadAnalyzer:
    """Berechnet geplante und realisierte SKS je Dosen."""

    def __init__(self, honor: HonorConfig) -> None:
        self.honor = honor

    def analyze(self, dataset: Dataset) -> WorkloadReport:
        courses = dataset.course_map()
        lecturers = dataset.lecturer_map()

        attendance: dict[tuple, int] = defaultdict(int)
        for log in dataset.teaching_logs:
            attendance[(log.schedule_id, log.lecturer_id)] += 1

        planned: dict[str, float] = defaultdict(float)
        realized: dict[str, float] = defaultdict(float)
        sessions: dict[str, int] = defaultdict(int)
        pjmk: dict[str, int] = defaultdict(int)
        present: dict[str, int] = defaultdict(int)

        for item in dataset.schedule:
            course = courses.get(item.course_id)
            team_size = len(item.lecturer_ids)
            if course is None or team_size == 0:
                continue
            for lecturer_id in item.lecturer_ids:
                count = attendance.get((item.id, lecturer_id), 0)
                sessions[lecturer_id] += 1
                planned[lecturer_id] += course.credits / team_size
                realized[lecturer_id] += course.credits * count / self.honor.meetings_per_term
                present[lecturer_id] += count
                if item.pjmk_lecturer_id == lecturer_id:
                    pjmk[lecturer_id] += 1

        rows = []
        for lecturer_id in sorted(sessions):
            lecturer = lecturers.get(lecturer_id)
            realized_sks = realized[lecturer_id]
            rows.append(LecturerWorkload(
                lecturer_id=lecturer_id,
                name=lecturer.name if lecturer else lecturer_id,
                sessions=sessions[lecturer_id],
                pjmk_sessions=pjmk[lecturer_id],
                planned_sks=round(planned[lecturer_id], 4),
                realized_sks=round(realized_sks, 4),
                attendance=present[lecturer_id],
                honor_amount=round(
                    realized_sks * self.honor.honor_multiplier * self.honor.rate_per_sks
                ),
            ))
        rows.sort(key=lambda r: r.name)
        return WorkloadReport(lecturers=rows)
