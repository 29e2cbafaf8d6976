"""Testdaten-Generator für Jadwal-Kuliah.

Erzeugt einen konfliktfreien Demo-Datensatz:
  - Mata Kuliah mit 2–4 SKS
  - Dosen mit 18-stelliger NIP
  - Räume in zwei Gebäuden
  - Standard-Klassen PDB01…PDB125
  - Jadwal-Einträge: jeder (Tag, Slot, Raum) höchstens einmal, jede Klasse
    höchstens einmal pro Slot, ein Teil bereits von Dosen übernommen
"""

import random
from typing import Optional

from config.defaults import DAYS, TIME_SLOTS, default_class_names
from config.schema import AppConfig
from models.class_name import ClassName
from models.course import Course
from models.dataset import Dataset
from models.lecturer import Lecturer
from models.room import Room
from models.schedule_item import ScheduleItem

# ─── Namens-Listen ────────────────────────────────────────────────────────────

_FIRST_NAMES = [
    "Agus", "Budi", "Citra", "Dewi", "Eko", "Fitri", "Gilang", "Hendra",
    "Indah", "Joko", "Kartika", "Lestari", "Made", "Nur", "Putri", "Rizky",
    "Sari", "Teguh", "Wahyu", "Yulia",
]

_LAST_NAMES = [
    "Santoso", "Wijaya", "Pratama", "Saputra", "Hidayat", "Kusuma", "Nugroho",
    "Siregar", "Lubis", "Rahmawati", "Setiawan", "Hartono", "Purnomo", "Utami",
]

_POSITIONS = ["Asisten Ahli", "Lektor", "Lektor Kepala", "Guru Besar", "Tenaga Pengajar"]

_EXPERTISE = [
    "Rekayasa Perangkat Lunak", "Jaringan Komputer", "Kecerdasan Buatan",
    "Sistem Informasi", "Matematika Terapan", "Statistika", "Basis Data",
]

# (Kode, Nama, SKS)
_COURSES: list[tuple[str, str, int]] = [
    ("MK101", "Algoritma dan Pemrograman", 3),
    ("MK102", "Matematika Diskrit", 3),
    ("MK103", "Pengantar Teknologi Informasi", 2),
    ("MK201", "Struktur Data", 3),
    ("MK202", "Basis Data", 3),
    ("MK203", "Statistika Dasar", 2),
    ("MK204", "Bahasa Inggris", 2),
    ("MK301", "Jaringan Komputer", 3),
    ("MK302", "Rekayasa Perangkat Lunak", 4),
    ("MK303", "Kecerdasan Buatan", 3),
    ("MK304", "Pendidikan Pancasila", 2),
    ("MK401", "Metodologi Penelitian", 2),
]


class FakeDataGenerator:
    """Generiert einen vollständigen Demo-Datensatz auf Basis der AppConfig."""

    def __init__(
        self,
        config: AppConfig,
        seed: Optional[int] = None,
        num_lecturers: int = 20,
        num_rooms: int = 8,
        sections_per_course: int = 4,
        claim_ratio: float = 0.4,
    ) -> None:
        self.config = config
        self.rng = random.Random(seed)
        self.num_lecturers = num_lecturers
        self.num_rooms = num_rooms
        self.sections_per_course = sections_per_course
        self.claim_ratio = claim_ratio

    # ─── Stammdaten ───────────────────────────────────────────────────────────

    def _generate_lecturers(self) -> list[Lecturer]:
        lecturers = []
        for i in range(1, self.num_lecturers + 1):
            name = f"{self.rng.choice(_FIRST_NAMES)} {self.rng.choice(_LAST_NAMES)}"
            nip = "19" + "".join(str(self.rng.randint(0, 9)) for _ in range(16))
            lecturers.append(Lecturer(
                id=f"dsn-{i}",
                name=name,
                nip=nip,
                position=self.rng.choice(_POSITIONS),
                expertise=self.rng.choice(_EXPERTISE),
            ))
        return lecturers

    def _generate_courses(self, lecturers: list[Lecturer]) -> list[Course]:
        courses = []
        for i, (code, name, credits) in enumerate(_COURSES, start=1):
            coordinator = self.rng.choice(lecturers).id if lecturers else None
            courses.append(Course(
                id=f"mk-{i}", code=code, name=name, credits=credits,
                coordinator_id=coordinator,
            ))
        return courses

    def _generate_rooms(self) -> list[Room]:
        rooms = []
        for i in range(1, self.num_rooms + 1):
            building = "Gedung A" if i <= (self.num_rooms + 1) // 2 else "Gedung B"
            rooms.append(Room(
                id=f"R-{100 + i}",
                name=f"Ruang {100 + i}",
                capacity=self.rng.choice([30, 40, 50]),
                building=building,
                location=f"Lantai {1 + (i - 1) % 3}",
            ))
        return rooms

    # ─── Jadwal ───────────────────────────────────────────────────────────────

    def _generate_schedule(
        self,
        courses: list[Course],
        rooms: list[Room],
        classes: list[ClassName],
        lecturers: list[Lecturer],
    ) -> list[ScheduleItem]:
        """Verteilt Kurs-Sektionen auf freie (Tag, Slot, Raum)-Zellen."""
        cells = [(day, ts, room.id) for day in DAYS for ts in TIME_SLOTS for room in rooms]
        self.rng.shuffle(cells)

        class_names = [c.name for c in classes]
        used_classes: dict[tuple, set[str]] = {}
        busy_lecturers: dict[tuple, set[str]] = {}
        items: list[ScheduleItem] = []
        class_cursor = 0

        sections = [c for c in courses for _ in range(self.sections_per_course)]
        for n, (course, (day, ts, room_id)) in enumerate(zip(sections, cells), start=1):
            slot = (day, ts)
            taken = used_classes.setdefault(slot, set())
            class_name = None
            for _ in range(len(class_names)):
                label = class_names[class_cursor % len(class_names)]
                class_cursor += 1
                if label not in taken:
                    class_name = label
                    break
            if class_name is None:
                continue
            taken.add(class_name)

            lecturer_ids: list[str] = []
            busy = busy_lecturers.setdefault(slot, set())
            if lecturers and self.rng.random() < self.claim_ratio:
                free = [l.id for l in lecturers if l.id not in busy]
                if free:
                    chosen = self.rng.choice(free)
                    busy.add(chosen)
                    lecturer_ids = [chosen]

            items.append(ScheduleItem(
                id=f"sch-{n}",
                course_id=course.id,
                room_id=room_id,
                class_name=class_name,
                day=day,
                time_slot=ts,
                lecturer_ids=lecturer_ids,
                pjmk_lecturer_id=lecturer_ids[0] if lecturer_ids else None,
            ))
        return items

    # ─── Gesamt ───────────────────────────────────────────────────────────────

    def generate(self) -> Dataset:
        """Erzeugt den vollständigen Datensatz."""
        lecturers = self._generate_lecturers()
        courses = self._generate_courses(lecturers)
        rooms = self._generate_rooms()
        classes = [ClassName(id=cid, name=name) for cid, name in default_class_names()]
        schedule = self._generate_schedule(courses, rooms, classes, lecturers)
        return Dataset(
            courses=courses,
            lecturers=lecturers,
            rooms=rooms,
            classes=classes,
            schedule=schedule,
        )

    def print_summary(self, data: Dataset) -> None:
        """Gibt eine Rich-Tabelle mit Übersicht der erzeugten Daten aus."""
        from rich.console import Console
        from rich.table import Table
        from rich import box

        console = Console()
        table = Table(title="Erzeugte Testdaten", box=box.ROUNDED)
        table.add_column("Kategorie", style="bold cyan")
        table.add_column("Anzahl", justify="right")
        table.add_column("Details")

        open_slots = sum(1 for s in data.schedule if s.is_open)
        table.add_row("Mata Kuliah", str(len(data.courses)),
                      f"{sum(c.credits for c in data.courses)} SKS gesamt")
        table.add_row("Dosen", str(len(data.lecturers)), "")
        table.add_row("Ruangan", str(len(data.rooms)),
                      ", ".join(sorted({r.building for r in data.rooms})))
        table.add_row("Kelas", str(len(data.classes)), "")
        table.add_row("Jadwal", str(len(data.schedule)), f"{open_slots} offen")

        console.print(table)
