"""CLI for envconfig."""

from pathlib import Path
from typing import Optional

import click
from dotenv import load_dotenv

from envconfig import __version__
from envconfig.config.exceptions import ConfigError
from envconfig.config.loader import ConfigLoader
from envconfig.secrets import SecretError, SecretsClient, available_backends
from envconfig.template import TemplateError, TemplateRenderer
from envconfig.utils.logging import LOG_FORMATS, LOG_LEVELS, setup_logging
from monitoring import write_metrics_file


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    raise SystemExit(1)


@click.command()
@click.version_option(version=__version__, prog_name="envconfig")
@click.option("--profile", "-p", default=None, help="AWS profile to use")
@click.option(
    "--region", "-r", default=None, help="AWS region for secrets referenced by name"
)
@click.option(
    "--backend",
    "-b",
    type=click.Choice(available_backends()),
    default=None,
    help="Secret backend (default: aws)",
)
@click.option(
    "--secrets-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="JSON secrets file for the file backend",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Settings file (default: envconfig.yaml if present)",
)
@click.option(
    "--environment", "-e", default=None, help="Environment block of the settings file"
)
@click.option(
    "--env-file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Dotenv file to load (default: .env if present)",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Log level (default: INFO)",
)
@click.option(
    "--log-format",
    type=click.Choice(sorted(LOG_FORMATS)),
    default=None,
    help="Log format (default: standard)",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Also write logs to this file",
)
@click.option(
    "--metrics-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write Prometheus metrics to this textfile",
)
@click.argument("input_path", type=click.Path(dir_okay=False))
@click.argument("output_path", type=click.Path(dir_okay=False))
def cli(
    profile: Optional[str],
    region: Optional[str],
    backend: Optional[str],
    secrets_file: Optional[str],
    config_path: Optional[str],
    environment: Optional[str],
    env_file: Optional[str],
    log_level: Optional[str],
    log_format: Optional[str],
    log_file: Optional[str],
    metrics_file: Optional[str],
    input_path: str,
    output_path: str,
):
    """Replace environment and secret placeholders in INPUT_PATH, writing OUTPUT_PATH.

    \b
    Environment placeholders: ${NAME}  {$NAME}  $NAME
    Secret placeholders:      {secret-id}  {{secret-id}}  {secret-id[key]}

    Lines starting with #, / or * are copied unchanged.
    """
    dotenv_path = Path(env_file) if env_file else Path(".env")
    if dotenv_path.exists():
        load_dotenv(dotenv_path)

    try:
        settings = ConfigLoader(config_path).load(
            environment=environment,
            overrides={
                "backend": backend,
                "profile": profile,
                "region": region,
                "secrets_file": secrets_file,
                "log_level": log_level,
                "log_format": log_format,
                "log_file": log_file,
                "metrics_file": metrics_file,
            },
        )
    except ConfigError as e:
        _fail(str(e))

    setup_logging(
        level=settings.log_level,
        format_style=settings.log_format,
        log_file=settings.log_file,
    )

    try:
        client = SecretsClient.from_backend(
            settings.backend,
            profile=settings.profile,
            default_region=settings.region,
            **settings.backend_options(),
        )
        TemplateRenderer(client).render_file(input_path, output_path)
    except (TemplateError, SecretError) as e:
        _fail(str(e))
    finally:
        if settings.metrics_file:
            write_metrics_file(settings.metrics_file)

    click.echo(f"Output file generated successfully: {output_path}")


def main():
    """Entry point."""
    cli()


if __name__ == "__main__":
    main()
