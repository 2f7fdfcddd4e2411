"""Command-line entry point for inspecting image module layouts."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click
from rich.table import Table

from .aggregator import TierView
from .console import console
from .errors import ImageModulesError
from .layout import load_layout
from .logging_setup import init_json_logging
from .settings import AppSettings
from .tiers import LoaderTier
from .utils.error_format import escape_markup
from .utils.error_format import format_error_message

logger = logging.getLogger(__name__)

TIER_CHOICES = ["all", *(tier.short_name for tier in LoaderTier)]


def _selected_tiers(tier: str) -> list[LoaderTier]:
    if tier == "all":
        return list(LoaderTier)
    return [LoaderTier.from_label(tier)]


def _render_view(tier: LoaderTier, view: TierView) -> None:
    if not view:
        console.print(f"[dim]{tier.label}: no modules[/dim]")
        return

    table = Table(title=f"{tier.label} (loader {tier.id})", show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Module", style="green")
    table.add_column("Packages")

    for index, (module, packages) in enumerate(view.items()):
        table.add_row(str(index), escape_markup(module), escape_markup("\n".join(packages)) or "[dim]-[/dim]")

    console.print(table)


def _report_missing(missing: dict[LoaderTier, list[str]]) -> None:
    for t, names in missing.items():
        logger.error(f"No package data for {len(names)} modules in {t.label}: {', '.join(names)}")
        console.print(
            f"[red]Error:[/red] No package data set for modules in {t.label}: {escape_markup(', '.join(names))}"
        )


@click.group(invoke_without_command=True)
@click.version_option(package_name="image-modules")
@click.pass_context
def cli(ctx: click.Context):
    """image-modules - loader tier layout of runtime image modules."""
    if ctx.invoked_subcommand is None:
        click.echo("\n" + ctx.get_help())
        ctx.exit()


@cli.command("tiers")
def list_tiers():
    """List the loader tiers with their ids and record labels."""
    table = Table(title="Loader Tiers", show_header=True, header_style="bold cyan")
    table.add_column("Id", justify="right")
    table.add_column("Name", style="green")
    table.add_column("Label", style="yellow")
    for tier in LoaderTier:
        table.add_row(str(tier.id), tier.short_name, tier.label)
    console.print(table)


@cli.command("show")
@click.argument("layout", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--tier", "-t", type=click.Choice(TIER_CHOICES), default="all", help="Tier to show")
@click.option("--json", "as_json", is_flag=True, help="Print views as JSON keyed by tier label")
@click.option("--base-module", help="Module sorted first in its tier (overrides settings)")
@click.option("--log-file", type=click.Path(dir_okay=False, path_type=Path), help="Write JSONL logs to this file")
@click.pass_context
def show(
    ctx: click.Context,
    layout: Path,
    tier: str,
    as_json: bool,
    base_module: str | None,
    log_file: Path | None,
):
    """Show the per-tier module/package views of a LAYOUT manifest."""
    settings = AppSettings()
    log_config = settings.get_logging()
    if log_file or log_config.get("path"):
        init_json_logging(log_file or log_config.get("path"), log_config.get("level"))

    try:
        image_layout = load_layout(layout)
        # Explicit flag beats the manifest, which beats settings
        if base_module:
            image_layout.base_module = base_module
        modules = image_layout.to_image_modules(settings.get_base_module())
        selected = _selected_tiers(tier)
        missing = {t: modules.missing_modules(t) for t in selected}
        missing = {t: names for t, names in missing.items() if names}
        if missing:
            _report_missing(missing)
            ctx.exit(1)
        views = {t: modules.build_view(t) for t in selected}
        logger.info(f"Built {len(views)} tier views from {layout}")
    except ImageModulesError as e:
        logger.error(f"Failed to build views for {layout}: {e}")
        console.print(f"[red]Error:[/red] {escape_markup(format_error_message(e))}")
        ctx.exit(1)

    if as_json:
        click.echo(json.dumps({t.label: view for t, view in views.items()}, indent=2))
        return

    console.print(f"[dim]Base module: {escape_markup(modules.base_module)}[/dim]")
    for t, view in views.items():
        _render_view(t, view)


def main():
    cli()


if __name__ == "__main__":
    main()
