"""
Main CLI entry point for buildlog using Click.

Usage:
    buildlog enrich EVENT_FILE... [--reference-time ISO] [--output FILE]
    buildlog decode PROJECT_NAME [--json]
    buildlog validate EVENT_FILE... [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

import click
from dateutil import parser as date_parser

from buildlog import __version__
from buildlog.config import EnrichmentSettings, load_settings
from buildlog.enums import BuildResult
from buildlog.validation import RecordValidator
from buildlog.workflow import EnrichmentResult, decode_project_name, enrich_files
from buildlog.writers import JSONWriter, record_to_json, write_records_to_ndjson


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure logging based on verbosity."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


class Config:
    """Shared configuration for CLI commands."""

    def __init__(self) -> None:
        self.verbose = False
        self.debug = False
        self.settings_path: Optional[str] = None

    def settings(self, **overrides) -> EnrichmentSettings:
        """Build enrichment settings from the --config file and overrides."""
        try:
            if self.settings_path:
                return load_settings(self.settings_path, **overrides)
            return EnrichmentSettings(**overrides)
        except (OSError, ValueError) as e:
            raise click.ClickException(f"Error loading settings: {e}")


pass_config = click.make_pass_decorator(Config, ensure=True)


def _parse_reference_time(value: Optional[str]) -> datetime:
    if not value:
        return datetime.now(timezone.utc)
    try:
        parsed = date_parser.parse(value)
    except (ValueError, OverflowError):
        raise click.BadParameter(f"Could not parse reference time: {value}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


_RESULT_COLORS = {
    BuildResult.SUCCESS.value: "green",
    BuildResult.UNSTABLE.value: "yellow",
    BuildResult.FAILURE.value: "red",
    BuildResult.ABORTED.value: "magenta",
}


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug output")
@click.option(
    "--config",
    "-c",
    "settings_path",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON file of enrichment settings",
)
@click.version_option(version=__version__, prog_name="buildlog")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, debug: bool, settings_path: Optional[str]) -> None:
    """Enrich build-completion events into log pipeline records."""
    ctx.ensure_object(Config)
    ctx.obj.verbose = verbose
    ctx.obj.debug = debug
    ctx.obj.settings_path = settings_path
    setup_logging(verbose=verbose, debug=debug)


@cli.command()
@click.argument("events", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option("--reference-time", "-t", help="Notification time (ISO-8601, default now)")
@click.option(
    "--output",
    "-o",
    default="-",
    show_default=True,
    help="NDJSON file to append to, or - for stdout",
)
@click.option(
    "--output-dir",
    "-d",
    type=click.Path(file_okay=False),
    help="Write one pretty-printed JSON file per record instead",
)
@click.option(
    "--include-redacted-keys",
    is_flag=True,
    help="Include names of redacted variables in records",
)
@pass_config
def enrich(
    config: Config,
    events: tuple[str, ...],
    reference_time: Optional[str],
    output: str,
    output_dir: Optional[str],
    include_redacted_keys: bool,
) -> None:
    """Build records from event payloads and write them as JSON.

    Example:
        buildlog enrich event-42.json -o /var/log/builds.ndjson
    """
    logger = logging.getLogger("enrich")

    overrides = {}
    if include_redacted_keys:
        overrides["include_redacted_keys"] = True
    settings = config.settings(**overrides)

    result = enrich_files(events, _parse_reference_time(reference_time), settings)

    for warning in result.warnings:
        click.echo(click.style(f"Warning: {warning}", fg="yellow"), err=True)

    try:
        if output_dir:
            paths = JSONWriter(output_dir).write_all(result.records)
            for path in paths:
                click.echo(str(path))
        elif output == "-":
            for record in result.records:
                click.echo(record_to_json(record))
        else:
            count = write_records_to_ndjson(result.records, output)
            logger.info(f"Appended {count} record(s) to {output}")
    except OSError as e:
        raise click.ClickException(f"Error writing output: {e}")

    if result.has_errors:
        click.echo(click.style("Some events could not be parsed:", fg="red"), err=True)
        for error in result.errors:
            click.echo(f"  - {error}", err=True)
        sys.exit(1)


@cli.command()
@click.argument("project_name")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@pass_config
def decode(config: Config, project_name: str, as_json: bool) -> None:
    """Decode naming-convention fields from a project name.

    Example:
        buildlog decode "SH_CS_Orders_202402_{Billing}_Build_GN"
    """
    fields = decode_project_name(project_name, config.settings())

    output = {
        "location": fields.location,
        "department": fields.department,
        "appname": fields.appname,
        "version": fields.version,
        "subsys": fields.subsys,
        "jobsuffix": fields.jobsuffix,
        "jobtype": fields.jobtype,
        "jobenv": fields.jobenv,
    }

    if as_json:
        click.echo(json.dumps(output, ensure_ascii=False, indent=2))
        return

    if not fields.matched:
        click.echo(click.style("No match: naming convention not followed", fg="yellow"))
        return

    for key, value in output.items():
        click.echo(f"{key}: {value}")


@cli.command()
@click.argument("events", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option("--reference-time", "-t", help="Notification time (ISO-8601, default now)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@pass_config
def validate(
    config: Config,
    events: tuple[str, ...],
    reference_time: Optional[str],
    as_json: bool,
) -> None:
    """Build and validate records without writing.

    Example:
        buildlog validate event-42.json --reference-time 2024-02-01T08:00:00Z
    """
    settings = config.settings(include_redacted_keys=True)
    result = enrich_files(events, _parse_reference_time(reference_time), settings)

    validator = RecordValidator()
    all_valid = not result.has_errors
    reports = []

    for record, source in zip(result.records, result.sources):
        validation = validator.validate(record)
        all_valid = all_valid and validation.is_valid
        reports.append((source, record, validation))

    if as_json:
        output = {
            "is_valid": all_valid,
            "parse_errors": result.errors,
            "records": [
                {
                    "source": source,
                    "project_name": record.project_name,
                    "build_num": record.build_num,
                    "is_valid": validation.is_valid,
                    "issues": [
                        {"field": i.field, "message": i.message, "severity": i.severity}
                        for i in validation.issues
                    ],
                }
                for source, record, validation in reports
            ],
        }
        click.echo(json.dumps(output, ensure_ascii=False, indent=2))
    else:
        for source, record, validation in reports:
            status = (
                click.style("PASSED", fg="green")
                if validation.is_valid
                else click.style("FAILED", fg="red")
            )
            result_text = click.style(
                record.result or "RUNNING", fg=_RESULT_COLORS.get(record.result or "", "cyan")
            )
            click.echo(f"{source}: {status} ({record.project_name} #{record.build_num} {result_text})")
            for issue in validation.errors:
                click.echo(f"  ✗ {issue.field}: {issue.message}")
            for issue in validation.warnings:
                click.echo(f"  ⚠ {issue.field}: {issue.message}")
            for issue in validation.infos:
                click.echo(f"  ? {issue.field}: {issue.message}")

        _print_parse_errors(result)

    if not all_valid:
        sys.exit(1)


def _print_parse_errors(result: EnrichmentResult) -> None:
    if result.errors:
        click.echo(click.style("Parse errors:", fg="red"), err=True)
        for error in result.errors:
            click.echo(f"  - {error}", err=True)


def app(args: Optional[list[str]] = None) -> int:
    """
    Main application entry point (for testing).

    Args:
        args: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success)
    """
    try:
        cli(args, standalone_mode=False)
        return 0
    except click.ClickException as e:
        e.show()
        return 1
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 1
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        return 1


def main() -> None:
    """CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
