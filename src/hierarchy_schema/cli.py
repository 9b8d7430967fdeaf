"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys

import click

from hierarchy_schema.configuration import (
    DEFAULT_CONFIG_FILENAME,
    write_placeholder_configuration,
)
from hierarchy_schema.generation_run import (
    GenerationRequest,
    GenerationRunError,
    check_catalog,
    execute_generation_run,
)


class CliError(Exception):
    """Custom CLI error."""


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="%(levelname)s %(name)s: %(message)s",
        )


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="hierarchy-schema")
def cli() -> None:
    """Compose schema documents from class and interface hierarchies."""


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML generation configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML generation configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="generate")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON generation configuration file",
)
@click.option(
    "--output",
    "output_path",
    required=False,
    type=click.Path(path_type=str),
    help="Path to the JSON schema document to write (default: stdout)",
)
@click.option(
    "--type",
    "root_types",
    multiple=True,
    help="Root type to emit; repeat for several. Defaults to the configured root types.",
)
@click.option(
    "--best-effort",
    is_flag=True,
    default=False,
    help="Emit the types that composed successfully and report the failed ones.",
)
@click.option("--verbose", is_flag=True, default=False, help="Log composition details.")
def generate(
    config_path: str,
    output_path: str | None,
    root_types: tuple[str, ...],
    best_effort: bool,
    verbose: bool,
) -> None:
    """Compose the configured type catalog and write the schema graph document."""
    _configure_logging(verbose)
    try:
        outcome = execute_generation_run(
            GenerationRequest(
                config_path=config_path,
                output_path=output_path,
                root_types=root_types,
                best_effort=best_effort,
            )
        )
    except GenerationRunError as exc:
        raise CliError(str(exc)) from exc

    if outcome.output_path is None:
        click.echo(outcome.document_text, nl=False)
    else:
        click.echo(str(outcome.output_path))
    if not outcome.is_ok:
        failures = "\n".join(f"  - {failure.describe()}" for failure in outcome.failures)
        raise CliError(f"Some types could not be composed:\n{failures}")


@cli.command(name="check")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON generation configuration file",
)
@click.option("--verbose", is_flag=True, default=False, help="Log composition details.")
def check(config_path: str, verbose: bool) -> None:
    """Compose every catalog type and report the ones that fail."""
    _configure_logging(verbose)
    try:
        report = check_catalog(config_path)
    except GenerationRunError as exc:
        raise CliError(str(exc)) from exc
    if not report.is_ok:
        failures = "\n".join(f"  - {line}" for line in report.describe_failures())
        raise CliError(f"Schema composition failed:\n{failures}")
    click.echo(f"ok: {len(report.schemas)} types")


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
