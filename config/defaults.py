from config.schema import AppConfig, DayOfWeek, HonorConfig, SchedulingRules


# Wochentage in Reihenfolge (Senin = Montag … Sabtu = Samstag)
DAYS: list[DayOfWeek] = list(DayOfWeek)

# Feste Zeitslots pro Tag (je 100 Minuten, 20 Minuten Pause dazwischen)
TIME_SLOTS: list[str] = [
    "07:00 - 08:40",
    "09:00 - 10:40",
    "11:00 - 12:40",
    "13:00 - 14:40",
    "15:00 - 16:40",
]

# Anzahl der Klassen-Labels, die bei leerem Datensatz angelegt werden
DEFAULT_CLASS_COUNT = 125

SCHEDULE_LOCK_KEY = "schedule_lock"


def default_class_names(count: int = DEFAULT_CLASS_COUNT) -> list[tuple[str, str]]:
    """Standard-Klassenlabels PDB01 … PDB125 als (id, name)-Paare.

    Ab 100 wird die Nummer nicht mehr aufgefüllt (PDB100, PDB125).
    """
    return [(f"cls-{i}", f"PDB{i:02d}") for i in range(1, count + 1)]


def default_config() -> AppConfig:
    """Standard-Konfiguration: 2 Dosen pro Eintrag, max. 2 parallele Klassen."""
    return AppConfig(
        institution_name="Fakultas Contoh",
        data_path="output/dataset.json",
        log_level="INFO",
        rules=SchedulingRules(
            max_concurrent_per_lecturer=2,
            revalidate_on_commit=True,
        ),
        honor=HonorConfig(
            meetings_per_term=16,
            honor_multiplier=14,
            rate_per_sks=100000,
        ),
    )
