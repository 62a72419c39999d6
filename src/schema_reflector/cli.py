"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from schema_reflector.configuration import (
    DEFAULT_CONFIG_FILENAME,
    Configuration,
    ConfigurationError,
    build_reflector,
    load_configuration,
    resolve_import_path,
    write_placeholder_configuration,
)
from schema_reflector.configuration.runtime_settings import (
    CacheSettings,
    HookReferences,
    ReflectorOptions,
)
from schema_reflector.schema_model import dump_schema
from schema_reflector.type_reflection import SchemaGenerationError


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="schema-reflector")
def cli() -> None:
    """Reflect Python types into JSON Schema documents."""


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML reflector configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML reflector configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="reflect")
@click.argument("target")
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help="Path to the YAML reflector configuration file",
)
@click.option(
    "--output",
    "output_path",
    required=False,
    type=click.Path(path_type=str),
    help="Write the schema to this file instead of standard output",
)
@click.option(
    "--indent",
    default=2,
    show_default=True,
    type=click.IntRange(min=0),
    help="Indentation width of the JSON output",
)
@click.option("--verbose", is_flag=True, default=False, help="Log reflection details to stderr.")
def reflect_target(
    target: str,
    config_path: str | None,
    output_path: str | None,
    indent: int,
    verbose: bool,
) -> None:
    """Reflect TARGET (``package.module:TypeName``) into a JSON Schema document."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)
    try:
        configuration = (
            load_configuration(config_path) if config_path else _default_configuration()
        )
        reflector = build_reflector(configuration)
        schema = reflector.reflect_from_type(resolve_import_path(target))
        document = dump_schema(schema, indent=indent)
    except (ConfigurationError, SchemaGenerationError) as exc:
        raise CliError(str(exc)) from exc

    if output_path is None:
        click.echo(document)
        return
    destination = Path(output_path)
    try:
        destination.write_text(document + "\n", encoding="utf-8")
    except OSError as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(destination.resolve()))


def _default_configuration() -> Configuration:
    return Configuration(
        path=None,
        options=ReflectorOptions(),
        hooks=HookReferences(),
        cache=CacheSettings(),
    )


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
