"""Command-line interface for the weigh-ticket generator."""

import logging
from pathlib import Path

import click
import numpy as np

from weighticket.config.constants import (
    DEFAULT_DAILY_COUNT_BASE,
    DEFAULT_DAILY_COUNT_RANGE,
    DEFAULT_SPACING_BASE,
    DEFAULT_SPACING_RANGE,
    FILE_KINDS,
)
from weighticket.generator.report_generator import OUTPUT_FORMATS, ReportGenerator
from weighticket.storage.config_store import (
    config_path,
    data_dir,
    load_config,
    output_dir as default_output_dir,
    registry_path,
)
from weighticket.storage.file_registry import FileRegistry
from weighticket.tickets.errors import TicketGenerationError
from weighticket.validation.record_checks import verify_records
from weighticket.validation.request_checks import parse_generation_request


@click.group()
@click.option("--data-dir", "data_dir_override", default=None, type=click.Path(path_type=Path),
              help="Data directory (config, registry, output). Defaults to $WEIGHTICKET_DATA_DIR or ./data.")
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging.")
@click.pass_context
def main(ctx, data_dir_override, verbose):
    """Synthetic weigh-ticket report generator."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["data_dir"] = data_dir(data_dir_override)


@main.command()
@click.option("--start", "start_date", required=True, help="First date (YYYY-MM-DD).")
@click.option("--end", "end_date", required=True, help="Last date (YYYY-MM-DD).")
@click.option("--last-ticket", "last_ticket", required=True, type=int, help="Last recorded ticket number.")
@click.option("--last-ticket-date", "last_ticket_date", required=True, help="Date of the last recorded ticket.")
@click.option("--spacing", default=DEFAULT_SPACING_BASE, help="Nominal increment between tickets.")
@click.option("--spacing-range", default=DEFAULT_SPACING_RANGE, help="± variation of the increment.")
@click.option("--daily-count", default=DEFAULT_DAILY_COUNT_BASE, help="Tickets issued per full day.")
@click.option("--daily-count-range", default=DEFAULT_DAILY_COUNT_RANGE, help="± variation of the daily count.")
@click.option("--price", default=None, type=float, help="Price per ton (defaults to config).")
@click.option("--skip-sundays/--no-skip-sundays", default=None, help="Skip Sundays (defaults to config).")
@click.option("--seed", default=None, type=int, help="RNG seed for a reproducible run.")
@click.option("--format", "fmt", default="xlsx", type=click.Choice(OUTPUT_FORMATS), help="Output format.")
@click.option("--config", "config_file", default=None, type=click.Path(path_type=Path), help="Config JSON file.")
@click.option("--output-dir", default=None, type=click.Path(path_type=Path), help="Output directory.")
@click.option("--validate", is_flag=True, help="Check the generated sequence before writing.")
@click.pass_context
def generate(ctx, start_date, end_date, last_ticket, last_ticket_date, spacing,
             spacing_range, daily_count, daily_count_range, price, skip_sundays,
             seed, fmt, config_file, output_dir, validate):
    """Generate a ticket report for a date range."""
    logger = logging.getLogger(__name__)
    base = ctx.obj["data_dir"]

    config = load_config(config_file or config_path(base))

    payload = {
        "startDate": start_date,
        "endDate": end_date,
        "lastTicketNumber": last_ticket,
        "lastTicketDate": last_ticket_date,
        "spacingVariance": spacing,
        "spacingVarianceRange": spacing_range,
        "dailyTicketCount": daily_count,
        "dailyTicketCountRange": daily_count_range,
        "pricePerTon": price,
        "skipSundays": skip_sundays,
    }

    rng = np.random.default_rng(seed)
    gen = ReportGenerator(
        output_dir=output_dir or default_output_dir(base),
        registry=FileRegistry(registry_path(base)),
    )

    try:
        params, drivers = parse_generation_request(payload, config)
        records = gen.generate_records(params, drivers, rng)
    except TicketGenerationError as exc:
        raise click.ClickException(str(exc))

    if validate:
        report = verify_records(records, params, drivers)
        click.echo(report.summary())
        if not report.passed:
            raise click.ClickException("Generated sequence failed checks; nothing written")

    path = gen.render(fmt, records, params)
    logger.info(f"Done: {len(records)} tickets")
    click.echo(str(path))


@main.command("to-txt")
@click.argument("report", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--zip", "as_zip", is_flag=True, help="One file per ticket inside a zip.")
@click.pass_context
def to_txt(ctx, report, as_zip):
    """Convert an xlsx report into text slips."""
    base = ctx.obj["data_dir"]
    gen = ReportGenerator(default_output_dir(base), FileRegistry(registry_path(base)))
    try:
        path = gen.convert_excel(report.read_bytes(), as_zip=as_zip)
    except TicketGenerationError as exc:
        raise click.ClickException(str(exc))
    click.echo(str(path))


@main.command("files")
@click.option("--kind", default=None, type=click.Choice(FILE_KINDS), help="Only this kind.")
@click.pass_context
def list_files(ctx, kind):
    """List generated files, newest first."""
    registry = FileRegistry(registry_path(ctx.obj["data_dir"]))
    entries = registry.list_by_kind(kind) if kind else registry.list_all()
    for e in entries:
        click.echo(f"{e.id:>5}  {e.kind:<8} {e.created_at}  {e.name}")


@main.command("files-delete")
@click.argument("file_id", type=int)
@click.option("--remove-file", is_flag=True, help="Also delete the file from disk.")
@click.pass_context
def delete_file(ctx, file_id, remove_file):
    """Delete a registry entry."""
    registry = FileRegistry(registry_path(ctx.obj["data_dir"]))
    entry = registry.delete_by_id(file_id, remove_file=remove_file)
    if entry is None:
        raise click.ClickException(f"File {file_id} not found")
    click.echo(f"Deleted {entry.name}")


@main.command()
@click.option("--host", default="127.0.0.1", help="Host to bind.")
@click.option("--port", default=8787, help="Port to bind.")
@click.pass_context
def serve(ctx, host, port):
    """Run the HTTP API."""
    from weighticket.web.server import run_server

    run_server(host=host, port=port, base_dir=ctx.obj["data_dir"])


if __name__ == "__main__":
    main()
