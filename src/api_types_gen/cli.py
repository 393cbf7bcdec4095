"""CLI entry point for api-types-gen."""

import logging
from pathlib import Path

import click
import pydantic

from api_types_gen.constants import FORMAT_ALIASES, SUPPORTED_FORMATS
from api_types_gen.errors import ApiTypesError, ValidationError
from api_types_gen.generator.pipeline import ApiTypesGenerator
from api_types_gen.spec.base import EndpointSpec, RunOptions
from api_types_gen.spec.loader import save_config
from api_types_gen.spec.validator import validate_name, validate_url


def _prompt_valid(text: str, check) -> str:
    """Prompt until check(value) stops raising ValidationError; returns the raw value."""
    while True:
        value = click.prompt(text).strip()
        try:
            check(value)
        except ValidationError as e:
            click.secho(f"  {e}", fg="red")
            continue
        return value


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@click.group()
def main():
    """API Types: generate TypeScript types from live API responses."""
    pass


@main.command()
@click.option("-c", "--config", "config_path", type=click.Path(exists=True, path_type=Path), help="JSON or YAML file listing endpoints.")
@click.option("--name", default=None, help="Type name for a single endpoint (without --config).")
@click.option("--url", default=None, help="URL for a single endpoint (without --config).")
@click.option("-o", "--output", default="./types", show_default=True, type=click.Path(path_type=Path), help="Output directory for generated files.")
@click.option("-f", "--format", "fmt", default="typescript", show_default=True, help="Output format or alias (see 'formats').")
@click.option("--runtime", is_flag=True, help="Include runtime type-check code.")
@click.option("-p", "--parallel", default=3, show_default=True, type=click.IntRange(1, 10), help="Maximum concurrent requests.")
@click.option("-t", "--timeout", default=30, show_default=True, type=click.IntRange(1, 300), help="Request timeout in seconds.")
@click.option("-r", "--retries", default=2, show_default=True, type=click.IntRange(min=0), help="Retries per endpoint.")
@click.option("--retry-delay", default=1000, show_default=True, type=click.IntRange(min=0), help="Delay between retries in ms.")
@click.option("--sample-only", is_flag=True, help="Only sample the first items of array responses (single endpoint).")
@click.option("-q", "--quiet", is_flag=True, help="Only print errors.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.option("--strict", is_flag=True, help="Exit with status 1 if any endpoint fails.")
def generate(
    config_path: Path | None,
    name: str | None,
    url: str | None,
    output: Path,
    fmt: str,
    runtime: bool,
    parallel: int,
    timeout: int,
    retries: int,
    retry_delay: int,
    sample_only: bool,
    quiet: bool,
    verbose: bool,
    strict: bool,
):
    """Fetch API samples and generate type files."""
    _configure_logging(verbose)
    try:
        options = RunOptions(
            output_dir=str(output),
            concurrency=parallel,
            timeout=timeout,
            retries=retries,
            retry_delay_ms=retry_delay,
            format=fmt,
            runtime_check=runtime,
            quiet=quiet,
        )
        generator = ApiTypesGenerator(options)

        if config_path:
            stats = generator.generate_from_config(config_path)
        else:
            if name is None:
                name = _prompt_valid("Type name", validate_name)
            if url is None:
                url = _prompt_valid("API URL", validate_url)
            stats = generator.generate([EndpointSpec(name=name, url=url, sample_only=sample_only)])
    except (ApiTypesError, pydantic.ValidationError) as e:
        raise click.ClickException(str(e))

    if strict and stats.failed:
        raise SystemExit(1)


@main.command()
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Config file path (default: api-types.<format>).")
@click.option("--format", "config_format", default="json", type=click.Choice(["json", "yaml"]), help="Config file format.")
def init(output: Path | None, config_format: str):
    """Interactively create an endpoint config file."""
    click.echo("Endpoint config wizard. Press Ctrl+C to abort.")
    specs: list[EndpointSpec] = []
    while True:
        name = _prompt_valid("Type name", validate_name)
        url = _prompt_valid("API URL", validate_url)
        method = click.prompt("HTTP method", default="GET", type=click.Choice(["GET", "POST", "PUT", "DELETE"], case_sensitive=False))
        sample_only = click.confirm("Only sample array responses?", default=False)
        specs.append(EndpointSpec(name=name, url=url, method=method.upper(), sample_only=sample_only))
        if not click.confirm("Add another endpoint?", default=False):
            break

    output = output or Path(f"api-types.{'yaml' if config_format == 'yaml' else 'json'}")
    save_config(specs, output)
    click.echo(f"Config saved to {output}")
    click.echo(f"Run: api-types generate --config {output}")


@main.command()
def formats():
    """List supported output formats and their aliases."""
    for canonical in SUPPORTED_FORMATS:
        aliases = sorted(alias for alias, target in FORMAT_ALIASES.items() if target == canonical and alias != canonical)
        click.echo(f"{canonical} (aliases: {', '.join(aliases)})")
