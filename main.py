"""Jadwal-Kuliah — Haupt-CLI.

Verwendung:
  jadwal config init                       Standard-Konfiguration anlegen
  jadwal config show                       Konfiguration anzeigen
  jadwal init                              Leeren Datensatz anlegen (PDB01…PDB125)
  jadwal generate                          Demo-Datensatz erzeugen
  jadwal lock on|off|status                Jadwal-Sperre setzen / anzeigen
  jadwal check --day Senin --time ...      Konflikte eines Kandidaten prüfen
  jadwal open-slots <dosen>                Einträge, die ein Dosen übernehmen kann
  jadwal claim <eintrag> <dosen> [--pjmk]  Offenen Eintrag übernehmen
  jadwal join <eintrag> <dosen>            Team beitreten
  jadwal take <eintrag> <dosen> [--pjmk]   claim oder join (Portal-Button)
  jadwal release <eintrag> <dosen>         Eigene Mitgliedschaft abgeben
  jadwal add ...                           Eintrag anlegen (Admin)
  jadwal edit <eintrag> ...                Eintrag überschreiben (Admin)
  jadwal validate                          Datensatz validieren
  jadwal workload                          SKS-Auslastung & Honor
  jadwal diff <alt.json> <neu.json>        Zwei Snapshots vergleichen
"""

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich import box

from config.defaults import DAYS, TIME_SLOTS

console = Console()
logger = logging.getLogger(__name__)

_DAY_CHOICE = click.Choice([d.value for d in DAYS])
_TIME_CHOICE = click.Choice(TIME_SLOTS)


# ─── Kontext ──────────────────────────────────────────────────────────────────

class AppContext:
    """Konfiguration und Datenspeicher für alle Befehle."""

    def __init__(self, config_path: Path | None, data_path: str | None) -> None:
        from config.manager import ConfigManager
        from data.store import JsonDataStore

        self.config_manager = ConfigManager(config_path)
        try:
            self.config = self.config_manager.load_or_default()
        except (FileNotFoundError, ValueError) as e:
            console.print(f"[red bold]Konfiguration fehlerhaft:[/red bold]\n{e}")
            sys.exit(1)
        rules = self.config.rules
        self.store = JsonDataStore(
            Path(data_path or self.config.data_path),
            revalidate_on_commit=rules.revalidate_on_commit,
            lecturer_capacity=rules.max_concurrent_per_lecturer,
        )

    def load_or_abort(self):
        """Lädt den Datensatz oder bricht mit Fehlermeldung ab."""
        if not self.store.exists():
            console.print(
                f"[red]Kein Datensatz gefunden: {self.store.path}[/red]\n"
                "Führen Sie zunächst [bold]jadwal init[/bold] oder "
                "[bold]jadwal generate[/bold] aus."
            )
            sys.exit(1)
        try:
            return self.store.load()
        except ValueError as e:
            console.print(f"[red bold]Datensatz ungültig:[/red bold] {self.store.path}\n{e}")
            sys.exit(1)


pass_app = click.make_pass_decorator(AppContext)


def _setup_logging(level: str) -> None:
    """Log-Ausgabe über Rich nach stderr; stdout bleibt für Befehlsausgaben."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _item_or_abort(dataset, schedule_id: str):
    item = dataset.get_schedule_item(schedule_id)
    if item is None:
        console.print(f"[red]Jadwal-Eintrag nicht gefunden: {schedule_id}[/red]")
        sys.exit(1)
    return item


# ─── Ausgabe ──────────────────────────────────────────────────────────────────

def _print_conflicts(conflicts, dataset) -> None:
    table = Table(title="Terdeteksi Bentrok Jadwal", box=box.ROUNDED)
    table.add_column("Art", style="bold red")
    table.add_column("Kollidiert mit")
    table.add_column("Details")
    for c in conflicts:
        if c.lecturer_id:
            detail = f"Dosen {dataset.lecturer_name(c.lecturer_id)}"
        elif c.room_id:
            room = dataset.room_map().get(c.room_id)
            detail = f"Ruang {room.name if room else c.room_id}"
        else:
            detail = f"Kelas {c.class_name}"
        table.add_row(c.kind.value, f"{c.class_name} ({c.schedule_id})", detail)
    console.print(table)


def _print_item(item, dataset, title: str) -> None:
    course = dataset.course_map().get(item.course_id)
    team = []
    for lecturer_id in item.lecturer_ids:
        name = dataset.lecturer_name(lecturer_id)
        team.append(f"★ {name} (PJMK)" if lecturer_id == item.pjmk_lecturer_id else name)
    console.print(Panel(
        f"[bold]{course.name if course else item.course_id}[/bold]  |  {item.class_name}\n"
        f"{item.day.value}, {item.time_slot}  |  Ruang {item.room_id}\n"
        f"Team: {', '.join(team) if team else '[dim]offen[/dim]'}",
        title=title,
        border_style="green",
    ))


def _finish(app: AppContext, result, dataset, title: str, is_new: bool = False) -> None:
    """Gibt das Engine-Ergebnis aus und speichert bei Erfolg."""
    from data.store import StaleSnapshotError
    from models.dataset import DuplicateRecordError, RecordNotFoundError

    if not result.ok:
        console.print(
            f"[red bold]✗ {result.error.kind.value}[/red bold]: {result.error.message}"
        )
        if result.error.conflicts:
            _print_conflicts(result.error.conflicts, dataset)
        sys.exit(1)

    try:
        app.store.commit_schedule(result.item, is_new=is_new)
    except StaleSnapshotError as e:
        console.print(f"[red bold]✗ Veralteter Stand:[/red bold] {e}")
        _print_conflicts(e.conflicts, dataset)
        sys.exit(1)
    except (DuplicateRecordError, RecordNotFoundError) as e:
        console.print(f"[red bold]✗ Speichern fehlgeschlagen:[/red bold] {e}")
        sys.exit(1)
    _print_item(result.item, dataset, title)


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Konfiguration anzeigen oder anlegen."""


@cmd_config.command("show")
@pass_app
def config_show(app: AppContext):
    """Zeigt die aktuelle Konfiguration an."""
    if app.config_manager.first_run_check():
        console.print("[dim]Keine Konfigurationsdatei – Standardwerte aktiv.[/dim]")
    app.config_manager.show(app.config)


@cmd_config.command("init")
@click.option("--force", is_flag=True, default=False, help="Bestehende Datei überschreiben.")
@pass_app
def config_init(app: AppContext, force: bool):
    """Schreibt die Standard-Konfiguration als YAML."""
    from config.defaults import default_config

    if not app.config_manager.first_run_check() and not force:
        console.print(
            f"[yellow]Konfiguration existiert bereits: {app.config_manager.path}[/yellow]\n"
            "Mit [bold]--force[/bold] überschreiben."
        )
        return
    path = app.config_manager.save(default_config())
    console.print(f"[green]✓[/green] Konfiguration gespeichert: {path}")


# ─── INIT / GENERATE ──────────────────────────────────────────────────────────

@click.command("init")
@pass_app
def cmd_init(app: AppContext):
    """Legt einen leeren Datensatz mit den Standard-Klassen an."""
    if app.store.exists():
        console.print(f"[yellow]Datensatz existiert bereits: {app.store.path}[/yellow]")
        return
    dataset = app.store.initialize()
    console.print(f"[green]✓[/green] Datensatz angelegt: {app.store.path}")
    console.print(f"\n[dim]{dataset.summary()}[/dim]")


@click.command("generate")
@click.option("--seed", default=42, help="Zufalls-Seed für reproduzierbare Daten.")
@click.option("--claim-ratio", default=0.4, type=click.FloatRange(0.0, 1.0),
              help="Anteil bereits übernommener Einträge.")
@pass_app
def cmd_generate(app: AppContext, seed: int, claim_ratio: float):
    """Erzeugt einen Demo-Datensatz und speichert ihn."""
    from data.fake_data import FakeDataGenerator

    console.print("[bold]Demo-Daten werden generiert...[/bold]")
    gen = FakeDataGenerator(app.config, seed=seed, claim_ratio=claim_ratio)
    data = gen.generate()
    gen.print_summary(data)
    data.save_json(app.store.path)
    console.print(f"[green]✓[/green] JSON gespeichert: {app.store.path}")


# ─── LOCK ─────────────────────────────────────────────────────────────────────

@click.command("lock")
@click.argument("state", type=click.Choice(["on", "off", "status"]), default="status")
@pass_app
def cmd_lock(app: AppContext, state: str):
    """Setzt oder zeigt die globale Jadwal-Sperre."""
    dataset = app.load_or_abort()
    if state != "status":
        dataset = app.store.set_lock(state == "on")
    if dataset.is_schedule_locked:
        console.print("[bold red]🔒 Jadwal gesperrt[/bold red] – Portal-Änderungen abgelehnt.")
    else:
        console.print("[bold green]🔓 Jadwal offen[/bold green]")


# ─── CHECK ────────────────────────────────────────────────────────────────────

@click.command("check")
@click.option("--day", "day", type=_DAY_CHOICE, required=True)
@click.option("--time", "time_slot", type=_TIME_CHOICE, required=True)
@click.option("--room", "room_id", default=None)
@click.option("--class", "class_name", default=None)
@click.option("--lecturer", "lecturer_ids", multiple=True)
@click.option("--exclude", "exclude_id", default=None,
              help="ID des bearbeiteten Eintrags.")
@click.option("--strict/--tolerant", default=True,
              help="Strikt: jede Dosen-Überschneidung ist ein Konflikt.")
@pass_app
def cmd_check(app: AppContext, day, time_slot, room_id, class_name, lecturer_ids,
              exclude_id, strict):
    """Prüft einen Kandidaten auf Konflikte (ohne zu speichern)."""
    from engine import Candidate, detect_conflicts

    dataset = app.load_or_abort()
    candidate = Candidate(
        day=day, time_slot=time_slot, room_id=room_id,
        class_name=class_name, lecturer_ids=list(lecturer_ids),
    )
    capacity = 1 if strict else app.config.rules.max_concurrent_per_lecturer
    conflicts = detect_conflicts(candidate, dataset.schedule, exclude_id, capacity)
    if not conflicts:
        console.print("[bold green]✓ Kein Konflikt[/bold green]")
        return
    _print_conflicts(conflicts, dataset)
    sys.exit(1)


# ─── PORTAL ───────────────────────────────────────────────────────────────────

@click.command("open-slots")
@click.argument("lecturer_id")
@click.option("--course", "course_id", default=None, help="Nur diese Mata Kuliah.")
@pass_app
def cmd_open_slots(app: AppContext, lecturer_id: str, course_id: str | None):
    """Listet Einträge, die ein Dosen übernehmen oder denen er beitreten kann."""
    from engine import open_entries_for

    dataset = app.load_or_abort()
    entries = open_entries_for(lecturer_id, dataset.schedule)
    if course_id:
        entries = [s for s in entries if s.course_id == course_id]

    courses = dataset.course_map()
    table = Table(title=f"Verfügbare Jadwal für {dataset.lecturer_name(lecturer_id)}",
                  box=box.ROUNDED)
    table.add_column("ID", style="bold")
    table.add_column("Mata Kuliah")
    table.add_column("Kelas")
    table.add_column("Hari")
    table.add_column("Jam")
    table.add_column("Team")
    for s in entries:
        course = courses.get(s.course_id)
        team = ", ".join(dataset.lecturer_name(l) for l in s.lecturer_ids) or "-"
        table.add_row(s.id, course.name if course else s.course_id, s.class_name,
                      s.day.value, s.time_slot, team)
    console.print(table)


@click.command("claim")
@click.argument("schedule_id")
@click.argument("lecturer_id")
@click.option("--pjmk/--team", "as_coordinator", default=True,
              help="Als PJMK übernehmen oder die Rolle dem nächsten Dosen überlassen.")
@pass_app
def cmd_claim(app: AppContext, schedule_id: str, lecturer_id: str, as_coordinator: bool):
    """Übernimmt einen offenen Eintrag (Empty → Solo)."""
    from engine import claim

    dataset = app.load_or_abort()
    item = _item_or_abort(dataset, schedule_id)
    result = claim(item, lecturer_id, as_coordinator, dataset.schedule,
                   dataset.is_schedule_locked, app.config.rules.max_concurrent_per_lecturer)
    _finish(app, result, dataset, "Jadwal übernommen")


@click.command("join")
@click.argument("schedule_id")
@click.argument("lecturer_id")
@pass_app
def cmd_join(app: AppContext, schedule_id: str, lecturer_id: str):
    """Tritt einem Team bei (Solo → Full)."""
    from engine import join

    dataset = app.load_or_abort()
    item = _item_or_abort(dataset, schedule_id)
    result = join(item, lecturer_id, dataset.schedule,
                  dataset.is_schedule_locked, app.config.rules.max_concurrent_per_lecturer)
    _finish(app, result, dataset, "Team beigetreten")


@click.command("take")
@click.argument("schedule_id")
@click.argument("lecturer_id")
@click.option("--pjmk/--team", "as_coordinator", default=True,
              help="Nur bei offenem Eintrag: als PJMK übernehmen.")
@pass_app
def cmd_take(app: AppContext, schedule_id: str, lecturer_id: str, as_coordinator: bool):
    """Übernimmt einen offenen Eintrag oder tritt dem Team bei."""
    from engine import take

    dataset = app.load_or_abort()
    item = _item_or_abort(dataset, schedule_id)
    result = take(item, lecturer_id, as_coordinator, dataset.schedule,
                  dataset.is_schedule_locked, app.config.rules.max_concurrent_per_lecturer)
    _finish(app, result, dataset, "Jadwal übernommen")


@click.command("release")
@click.argument("schedule_id")
@click.argument("lecturer_id")
@click.option("--admin", is_flag=True, default=False,
              help="Admin-Freigabe: ignoriert die Jadwal-Sperre.")
@pass_app
def cmd_release(app: AppContext, schedule_id: str, lecturer_id: str, admin: bool):
    """Gibt die Mitgliedschaft eines Dosen ab."""
    from engine import release

    dataset = app.load_or_abort()
    item = _item_or_abort(dataset, schedule_id)
    result = release(item, lecturer_id, dataset.schedule,
                     is_locked=dataset.is_schedule_locked, enforce_lock=not admin)
    _finish(app, result, dataset, "Jadwal freigegeben")


# ─── ADMIN ────────────────────────────────────────────────────────────────────

def _edit_options(func):
    options = [
        click.option("--course", "course_id", default=None),
        click.option("--room", "room_id", default=None),
        click.option("--class", "class_name", default=None),
        click.option("--day", "day", type=_DAY_CHOICE, default=None),
        click.option("--time", "time_slot", type=_TIME_CHOICE, default=None),
        click.option("--main", "main_lecturer_id", default=None,
                     help="Dosen Utama (PJMK); leer = keiner."),
        click.option("--team", "team_lecturer_id", default=None,
                     help="Dosen Team; leer = keiner."),
        click.option("--pjmk", "pjmk_lecturer_id", default=None,
                     help="Expliziter PJMK (muss Haupt- oder Team-Dosen sein)."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.command("add")
@click.option("--id", "new_id", default=None, help="Eigene ID (sonst sch-<zeit>).")
@_edit_options
@pass_app
def cmd_add(app: AppContext, new_id, **fields):
    """Legt einen neuen Jadwal-Eintrag an (Admin)."""
    from engine import DirectEdit, create_entry

    dataset = app.load_or_abort()
    result = create_entry(
        DirectEdit(**fields), dataset.schedule, new_id=new_id,
        lecturer_capacity=app.config.rules.max_concurrent_per_lecturer,
    )
    _finish(app, result, dataset, "Jadwal angelegt", is_new=True)


@click.command("edit")
@click.argument("schedule_id")
@click.option("--keep-team", is_flag=True, default=False,
              help="Team unverändert lassen, wenn --main/--team fehlen.")
@_edit_options
@pass_app
def cmd_edit(app: AppContext, schedule_id: str, keep_team: bool, **fields):
    """Überschreibt einen Jadwal-Eintrag (Admin, ohne Sperre)."""
    from engine import DirectEdit, apply_direct_edit

    dataset = app.load_or_abort()
    item = _item_or_abort(dataset, schedule_id)
    edit = DirectEdit(**fields)
    if keep_team and edit.main_lecturer_id is None and edit.team_lecturer_id is None:
        current = DirectEdit.from_item(item)
        edit = edit.model_copy(update={
            "main_lecturer_id": current.main_lecturer_id,
            "team_lecturer_id": current.team_lecturer_id,
            "pjmk_lecturer_id": edit.pjmk_lecturer_id or current.pjmk_lecturer_id,
        })
    result = apply_direct_edit(
        item, edit, dataset.schedule,
        lecturer_capacity=app.config.rules.max_concurrent_per_lecturer,
    )
    _finish(app, result, dataset, "Jadwal gespeichert")


# ─── ANALYSE ──────────────────────────────────────────────────────────────────

@click.command("validate")
@pass_app
def cmd_validate(app: AppContext):
    """Prüft den gesamten Datensatz auf Doppelbelegungen und verwaiste Verweise."""
    from analysis.schedule_validator import ScheduleValidator

    dataset = app.load_or_abort()
    console.print(f"\n{dataset.summary()}\n")
    report = ScheduleValidator().validate(dataset, app.config.rules)
    report.print_rich()
    sys.exit(0 if report.is_valid else 1)


@click.command("workload")
@pass_app
def cmd_workload(app: AppContext):
    """Zeigt geplante und realisierte SKS sowie das Honorar je Dosen."""
    from analysis.workload import WorkloadAnalyzer

    dataset = app.load_or_abort()
    WorkloadAnalyzer(app.config.honor).analyze(dataset).print_rich()


@click.command("diff")
@click.argument("old", type=click.Path(exists=True, path_type=Path))
@click.argument("new", type=click.Path(exists=True, path_type=Path))
@click.option("--json", "as_json", is_flag=True, default=False, help="Als JSON ausgeben.")
def cmd_diff(old: Path, new: Path, as_json: bool):
    """Vergleicht den Jadwal zweier Snapshot-Dateien."""
    from analysis.diff import diff_schedules
    from models.dataset import Dataset

    diff = diff_schedules(Dataset.load_json(old), Dataset.load_json(new))
    if as_json:
        click.echo(diff.to_json())
        return
    if diff.is_empty():
        console.print("[dim]Keine Unterschiede.[/dim]")
        return

    table = Table(title="Jadwal-Änderungen", box=box.ROUNDED)
    table.add_column("Eintrag", style="bold")
    table.add_column("Änderung")
    for sid in diff.entries_added:
        table.add_row(sid, "[green]hinzugefügt[/green]")
    for sid in diff.entries_removed:
        table.add_row(sid, "[red]entfernt[/red]")
    for change in diff.entries_changed:
        parts = [f"{k}: {old_v} → {new_v}" for k, (old_v, new_v) in change.changes.items()]
        table.add_row(change.schedule_id, "\n".join(parts))
    if diff.lock_changed:
        table.add_row("schedule_lock", f"{diff.lock_changed[0]} → {diff.lock_changed[1]}")
    console.print(table)


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
@click.option("--config", "config_path", type=click.Path(path_type=Path), default=None,
              help="Pfad zur YAML-Konfiguration.")
@click.option("--data", "data_path", default=None, help="Pfad zum JSON-Datensatz.")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Debug-Logging.")
@click.pass_context
def cli(ctx: click.Context, config_path, data_path, verbose: bool):
    """Jadwal-Kuliah: Konfliktprüfung und Team-Teaching für den Vorlesungsplan."""
    _setup_logging("DEBUG" if verbose else "INFO")
    app = AppContext(config_path, data_path)
    if not verbose:
        logging.getLogger().setLevel(app.config.log_level)
    logger.debug(f"Konfiguration: {app.config_manager.path}, Datensatz: {app.store.path}")
    ctx.obj = app


def main():
    """Einstiegspunkt."""
    cli()


# Befehle registrieren
cli.add_command(cmd_config)
cli.add_command(cmd_init)
cli.add_command(cmd_generate)
cli.add_command(cmd_lock)
cli.add_command(cmd_check)
cli.add_command(cmd_open_slots)
cli.add_command(cmd_claim)
cli.add_command(cmd_join)
cli.add_command(cmd_take)
cli.add_command(cmd_release)
cli.add_command(cmd_add)
cli.add_command(cmd_edit)
cli.add_command(cmd_validate)
cli.add_command(cmd_workload)
cli.add_command(cmd_diff)


if __name__ == "__main__":
    main()
