"""Konfigurationsmanager: Laden, Speichern und Anzeigen der YAML-Konfiguration.

Nutzt ruamel.yaml für YAML-Serialisierung mit Kommentaren.
"""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap

from config.defaults import default_config
from config.schema import AppConfig

logger = logging.getLogger(__name__)

console = Console()
yaml = YAML()
yaml.default_flow_style = False
yaml.width = 120


# ─── YAML-KOMMENTAR-AUFBAU ───

_YAML_HEADER = f"""\
# ============================================
# Jadwal-Kuliah — Konfiguration
# Erstellt: {date.today().isoformat()}
# ============================================
"""

_SECTION_COMMENTS = {
    "data_path": (
        "Datensatz",
        "JSON-Snapshot mit Kursen, Dosen, Räumen, Klassen und Jadwal.",
    ),
    "rules": (
        "Planungsregeln",
        "max_concurrent_per_lecturer: 1 = strikt, 2 = Portal-Verhalten.",
    ),
    "honor": (
        "SKS & Honorar",
        "Realisierung = SKS × Anwesenheit / meetings_per_term.",
    ),
}


class ConfigManager:
    CONFIG_DIR = Path("config")
    DEFAULT_CONFIG = CONFIG_DIR / "jadwal.yaml"

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path) if path is not None else self.DEFAULT_CONFIG

    def first_run_check(self) -> bool:
        """Gibt True zurück wenn noch keine Config existiert (Erstaufruf)."""
        return not self.path.exists()

    # ─── Laden ───

    def load(self, path: Optional[Path] = None) -> AppConfig:
        """Lade Config aus YAML. Validiert automatisch via Pydantic."""
        target = Path(path) if path is not None else self.path
        if not target.exists():
            raise FileNotFoundError(
                f"Konfigurationsdatei nicht gefunden: {target}\n"
                f"Führen Sie 'jadwal config init' aus, um eine Konfiguration anzulegen."
            )
        with open(target, "r", encoding="utf-8") as f:
            raw = yaml.load(f)
        try:
            config = AppConfig.model_validate(dict(raw or {}))
        except Exception as e:
            raise ValueError(
                f"Konfigurationsdatei ungültig: {target}\n"
                f"Pydantic-Fehler: {e}"
            ) from e
        logger.debug(f"Konfiguration geladen: {target}")
        return config

    def load_or_default(self) -> AppConfig:
        """Lädt die Config, oder liefert die Standard-Config beim Erstaufruf."""
        if self.first_run_check():
            logger.info(f"Keine Konfiguration unter {self.path} – verwende Standardwerte.")
            return default_config()
        return self.load()

    # ─── Speichern ───

    def save(self, config: AppConfig, path: Optional[Path] = None) -> Path:
        """Speichere Config als YAML mit Abschnitts-Kommentaren."""
        target = Path(path) if path is not None else self.path
        target.parent.mkdir(parents=True, exist_ok=True)

        data = self._build_commented_yaml(config)

        with open(target, "w", encoding="utf-8") as f:
            f.write(_YAML_HEADER + "\n")
            yaml.dump(data, f)

        logger.info(f"Konfiguration gespeichert: {target}")
        return target

    def _build_commented_yaml(self, config: AppConfig) -> CommentedMap:
        """Baut die YAML-Struktur mit Kommentaren auf."""
        raw = json.loads(config.model_dump_json())
        cm = CommentedMap(raw)

        for field, (label, comment) in _SECTION_COMMENTS.items():
            cm.yaml_set_comment_before_after_key(
                field,
                before=f"\n─── {label} ───" + (f"\n{comment}" if comment else ""),
            )
        return cm

    # ─── Anzeige ───

    def show(self, config: AppConfig) -> None:
        """Gibt die Konfiguration als Rich-Tabellen aus."""
        console.print(Panel(
            f"[bold]{config.institution_name}[/bold]  |  Datensatz: {config.data_path}",
            title="Konfiguration",
            border_style="cyan",
        ))

        table = Table(title="Planungsregeln", box=box.ROUNDED)
        table.add_column("Parameter", style="bold")
        table.add_column("Wert")
        for k, v in config.rules.model_dump().items():
            table.add_row(k, str(v))
        console.print(table)

        table2 = Table(title="SKS & Honorar", box=box.ROUNDED)
        table2.add_column("Parameter", style="bold")
        table2.add_column("Wert")
        for k, v in config.honor.model_dump().items():
            table2.add_row(k, str(v))
        console.print(table2)
