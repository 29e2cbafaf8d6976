from pydantic import BaseModel, Field, model_validator
from enum import Enum


class DayOfWeek(str, Enum):
    SENIN = "Senin"
    SELASA = "Selasa"
    RABU = "Rabu"
    KAMIS = "Kamis"
    JUMAT = "Jumat"
    SABTU = "Sabtu"


# ─── PLANUNGSREGELN ───

class SchedulingRules(BaseModel):
    """Regeln für Konfliktprüfung und Team-Teaching.

    max_lecturers_per_entry ist durch das Datenmodell auf 2 festgelegt und
    wird hier nur zur Anzeige geführt.
    """
    # Maximale Teamgröße pro Jadwal-Eintrag (fest: 2)
    max_lecturers_per_entry: int = Field(2, ge=2, le=2,
        description="Max. Dosen pro Eintrag (fest)")
    # Max. gleichzeitige Kurse eines Dosen im selben (Tag, Slot).
    # Gilt sowohl für das Dosen-Portal als auch für Admin-Bearbeitungen.
    max_concurrent_per_lecturer: int = Field(2, ge=1, le=2,
        description="Max. gleichzeitige Klassen pro Dosen und Slot")
    # Vor jedem Commit gegen einen frisch geladenen Snapshot erneut prüfen
    revalidate_on_commit: bool = Field(True,
        description="Konfliktprüfung gegen frischen Snapshot vor Commit")


# ─── HONORAR / SKS ───

class HonorConfig(BaseModel):
    """Parameter der SKS-Realisierung und Honorarberechnung."""
    # Anzahl Termine pro Semester (Realisierung = SKS × Anwesenheit / Termine)
    meetings_per_term: int = Field(16, ge=1, le=16,
        description="Termine pro Semester")
    # Faktor für das Honorar (Honorar = realisierte SKS × Faktor × Satz)
    honor_multiplier: int = Field(14, ge=0,
        description="Honorar-Faktor")
    # Satz in Rupiah pro SKS-Einheit
    rate_per_sks: int = Field(100000, ge=0,
        description="Honorarsatz pro SKS (Rp)")


# ─── GESAMT-CONFIG ───

class AppConfig(BaseModel):
    """Gesamtkonfiguration der Anwendung."""
    # Name der Fakultät / Hochschule
    institution_name: str = Field("Fakultas Contoh",
        description="Name der Einrichtung")
    # Pfad zum JSON-Datensatz
    data_path: str = Field("output/dataset.json",
        description="Pfad zum Datensatz (JSON)")
    # Log-Level für die CLI
    log_level: str = Field("INFO",
        description="Log-Level (DEBUG, INFO, WARNING, ERROR)")
    # Planungsregeln
    rules: SchedulingRules = Field(default_factory=SchedulingRules)
    # SKS-/Honorar-Parameter
    honor: HonorConfig = Field(default_factory=HonorConfig)

    @model_validator(mode='after')
    def validate_log_level(self):
        level = self.log_level.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unbekanntes Log-Level: {self.log_level!r}")
        self.log_level = level
        return self
