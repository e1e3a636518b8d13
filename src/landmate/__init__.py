"""Landmate CLI - Payment schedules for land agreements and their amendments"""

import sys
from pathlib import Path
from typing import Optional

import typer
from loguru import logger
from rich import box
from rich.console import Console
from rich.table import Table

__version__ = "0.1.0"

# Initialize Typer app and Rich console
app = typer.Typer(
    name="landmate",
    help="Compute payment schedules from land agreement snapshots",
    add_completion=False
)
console = Console()


def configure_logging(level: str) -> None:
    """Route loguru output to stderr at the given level"""
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


def display_summary(schedules: list) -> None:
    """Display one row per computed agreement"""
    table = Table(title="Agreement Schedules", box=box.ROUNDED)
    table.add_column("Agreement", style="cyan")
    table.add_column("Group")
    table.add_column("Terms", justify="right")
    table.add_column("Payments", justify="right")
    table.add_column("Total", justify="right", style="green")
    table.add_column("Final Term End")

    for schedule in schedules:
        table.add_row(
            schedule.agreement.name or schedule.agreement_id,
            schedule.agreement.agreement_group or "-",
            str(len(schedule.agreement_terms)),
            str(len(schedule.all_payments())),
            f"{schedule.total_amount():,.2f}",
            schedule.final_term_end_text or "-",
        )

    console.print(table)


@app.command()
def schedule(
    snapshot: Path = typer.Argument(..., help="JSON snapshot of agreement records"),
    agreement_id: Optional[str] = typer.Option(
        None,
        "--agreement",
        "-a",
        help="Only compute the agreement with this id"
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the computed schedules to this JSON file"
    ),
    env_file: Optional[Path] = typer.Option(
        None,
        "--env-file",
        help="Load engine settings from this env file"
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Log level (defaults to APP_LOG_LEVEL)"
    ),
) -> None:
    """
    Compute payment schedules for every original agreement in a snapshot
    """
    from landmate.core.agreement_index import AgreementIndex
    from landmate.services import AgreementScheduleServiceFactory
    from landmate.utils.file_utils import write_json
    from landmate.utils.settings.factory import settings_factory

    configure_logging(log_level or settings_factory.create_app_settings().log_level)

    service = (
        AgreementScheduleServiceFactory.from_env_file(env_file)
        if env_file
        else AgreementScheduleServiceFactory.create_default()
    )

    loaded = service.load_snapshot(snapshot)
    if loaded.is_err():
        console.print(f"[red]Error: {loaded.err()}[/red]")
        raise typer.Exit(1)

    agreements = loaded.unwrap()
    if agreement_id:
        index = AgreementIndex(agreements)
        target = index.get(agreement_id)
        if target is None:
            console.print(f"[red]Error: agreement '{agreement_id}' not found in {snapshot}[/red]")
            raise typer.Exit(1)
        results = {agreement_id: service.compute(target, index)}
    else:
        results = service.compute_all(agreements)

    schedules = [r.unwrap() for r in results.values() if r.is_ok()]
    for failed_id, result in results.items():
        if result.is_err():
            console.print(f"[yellow]Skipped {failed_id}: {result.err()}[/yellow]")

    display_summary(schedules)

    if output:
        write_json([s.model_dump(mode="json") for s in schedules], output)
        console.print(f"[green]✓ Wrote {len(schedules)} schedules to {output}[/green]")


@app.command()
def version() -> None:
    """Show Landmate version"""
    console.print(f"[bold blue]Landmate[/bold blue] version [green]{__version__}[/green]")


def main() -> None:
    """Entry point for the CLI application"""
    app()


if __name__ == "__main__":
    main()
