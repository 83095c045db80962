"""bmskeys CLI entry point."""

import sys
from collections.abc import Callable
from pathlib import Path

import click
from loguru import logger

from bmskeys import __version__, config
from bmskeys.audio_files import delete_files, find_orphaned_audio
from bmskeys.chart_file import ChartFile
from bmskeys.editor import merge_keysounds, prune_unused_keysounds
from bmskeys.errors import BmsError, UnknownKeysoundError
from bmskeys.keysound_id import decode, encode, parse_id_list

MENU = """
What would you like to do:
    r - Replace one or more keysounds with another one
    u - Modify unused keysounds
    a - Remove unused audio
    q - Quit the program
"""


def _configure_logging(verbose: bool) -> None:
    logger.remove()
    # Sink looks up stderr at write time.
    logger.add(
        lambda message: click.echo(message, err=True, nl=False),
        level="DEBUG" if verbose else config.LOG_LEVEL,
        format=config.LOG_FORMAT,
        colorize=True,
    )


def _fail(exc: Exception) -> None:
    click.echo(f"  ERROR: {exc}", err=True)
    if isinstance(exc, UnknownKeysoundError):
        for keysound_id in exc.keysound_ids:
            click.echo(f"  ID {encode(keysound_id)} doesn't exist in the bms file.", err=True)


# ── Workflows shared by the subcommands and the interactive shell ─────────────

def _replace(chart: ChartFile, target: str, sources: str) -> None:
    target_id = decode(target.strip())
    source_ids = parse_id_list(sources)
    if not source_ids:
        click.echo("No keysounds given to replace.")
        return

    document = chart.reload()
    reports = merge_keysounds(document, target_id, source_ids)

    for report in reports:
        click.echo(
            f"Replaced {encode(report.old_id)} with {encode(report.new_id)} "
            f"({report.replaced} note(s))"
        )
        if not report.complete:
            click.echo(
                f"  WARNING: {len(report.refused)} BGM/control line(s) still reference "
                f"{encode(report.old_id)}, whose declaration was removed.",
                err=True,
            )
    chart.save()


def _prune_unused(chart: ChartFile, assume_yes: bool, delete_audio: bool | None) -> None:
    document = chart.reload()
    unused = document.unused_keysounds()
    if not unused:
        click.echo("No unused keysounds are present in the .bms file.")
        return

    click.echo("The following keysounds are unused:")
    for declaration in unused:
        click.echo(str(declaration))
    click.echo()

    if not assume_yes and not click.confirm("Would you like to remove them from the .bms file?"):
        return
    if delete_audio is None:
        delete_audio = click.confirm(
            "Would you like to delete the corresponding audio files for the unused keysounds?"
        )

    directory = chart.directory if delete_audio else None
    removed = prune_unused_keysounds(document, unused, directory)
    click.echo(f"Removed {len(removed)} keysound declaration(s).")
    chart.save()


def _prune_orphans(chart: ChartFile, assume_yes: bool) -> None:
    document = chart.reload()
    orphans = find_orphaned_audio(chart.directory, document.declarations.filenames())
    if not orphans:
        click.echo("No unused files found.")
        return

    for path in orphans:
        click.echo(str(path))
    click.echo()
    click.echo(f"{len(orphans)} unused files were found.")

    if not assume_yes and not click.confirm("Would you like to delete them?"):
        return
    failed = delete_files(orphans)
    click.echo(f"Deleted {len(orphans) - len(failed)} file(s).")
    for path in failed:
        click.echo(f"  Could not delete {path}", err=True)


def _run(action: Callable[[], None]) -> None:
    """Run a workflow from a subcommand, exiting with status 1 on failure."""
    try:
        action()
    except (BmsError, OSError) as exc:
        _fail(exc)
        sys.exit(1)


# ── CLI group ──────────────────────────────────────────────────────────────────

@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="bmskeys")
@click.argument("chart_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging on stderr.")
@click.option(
    "--encoding",
    default=config.ENCODING,
    show_default=True,
    help="Text encoding of the chart file.",
)
@click.option("--no-backup", is_flag=True, help="Do not copy the chart before saving edits.")
@click.pass_context
def main(
    ctx: click.Context, chart_path: Path, verbose: bool, encoding: str, no_backup: bool
) -> None:
    """
    bmskeys: keysound maintenance for BMS charts.

    CHART_PATH is the .bms/.bme file to edit. Unless --no-backup is given it is
    copied to <name>_backup<ext> beside the original just before the first save.
    """
    _configure_logging(verbose)

    try:
        backup_suffix = None if no_backup else config.BACKUP_SUFFIX
        chart = ChartFile.open(chart_path, encoding=encoding, backup_suffix=backup_suffix)
    except (BmsError, OSError) as exc:
        _fail(exc)
        sys.exit(1)

    ctx.obj = chart


# ── replace subcommand ─────────────────────────────────────────────────────────

@main.command()
@click.argument("target")
@click.argument("sources")
@click.pass_obj
def replace(chart: ChartFile, target: str, sources: str) -> None:
    """
    Replace keysounds SOURCES with TARGET.

    SOURCES is a comma-separated list of ids. Their declarations are removed
    and every playable note using them is pointed at TARGET.

    \b
    Examples:
      bmskeys song.bms replace 0A 0B,0C,0D
    """
    _run(lambda: _replace(chart, target, sources))


# ── unused subcommand ──────────────────────────────────────────────────────────

@main.command()
@click.option("--yes", "-y", is_flag=True, help="Remove without asking.")
@click.option(
    "--delete-files/--keep-files",
    "delete_audio",
    default=False,
    show_default=True,
    help="Also delete the audio files of removed keysounds.",
)
@click.pass_obj
def unused(chart: ChartFile, yes: bool, delete_audio: bool) -> None:
    """List keysounds no note uses and remove their declarations."""
    _run(lambda: _prune_unused(chart, yes, delete_audio))


# ── orphans subcommand ─────────────────────────────────────────────────────────

@main.command()
@click.option("--yes", "-y", is_flag=True, help="Delete without asking.")
@click.pass_obj
def orphans(chart: ChartFile, yes: bool) -> None:
    """List audio files beside the chart that no keysound declares, and delete them."""
    _run(lambda: _prune_orphans(chart, yes))


# ── shell subcommand ───────────────────────────────────────────────────────────

@main.command()
@click.pass_obj
def shell(chart: ChartFile) -> None:
    """Edit keysounds from an interactive menu."""
    while True:
        click.echo(MENU)
        choice = click.prompt("", default="", show_default=False, prompt_suffix="> ").strip()
        if not choice:
            continue

        command = choice[0].lower()
        try:
            if command == "r":
                target = click.prompt(
                    "Enter the ID (eg. 0A) of the keysound which you would like to replace with"
                )
                sources = click.prompt(
                    "Enter the ID's which you would like replaced (eg. 0B,0C,0D,0E)"
                )
                _replace(chart, target, sources)
            elif command == "u":
                _prune_unused(chart, assume_yes=False, delete_audio=None)
            elif command == "a":
                _prune_orphans(chart, assume_yes=False)
            elif command == "q":
                return
            else:
                click.echo(f"Unknown command: {choice[0]}", err=True)
        except (BmsError, OSError) as exc:
            _fail(exc)
