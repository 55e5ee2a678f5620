"""Command-line tool for inspecting and migrating versioned settings.

This script provides access to a configured settings store:
- Showing and setting values for the current application version
- Inspecting values from the previous version
- Upgrading settings after an application update
- Resetting the current version to defaults
"""

import contextlib
import sys
from collections.abc import Iterator
from pathlib import Path
from typing import NoReturn

import click
from dependency_injector import providers
from sqlalchemy.exc import SQLAlchemyError

from versioned_settings.container import Container
from versioned_settings.properties import SettingsProperty, SettingsPropertyValue
from versioned_settings.provider import VersionedSettingsProvider
from versioned_settings.system.path_resolver import PathResolver
from versioned_settings.system.structlog_configurator import configure_structlog


def _fail(message: str) -> NoReturn:
    """Print an error and exit with status 1."""
    click.echo(click.style(f"✗ Error: {message}", fg="red"), err=True)
    sys.exit(1)


@contextlib.contextmanager
def _reporting_errors() -> Iterator[None]:
    """Report store, name and capability errors through _fail."""
    try:
        yield
    except (ValueError, OSError, NotImplementedError, SQLAlchemyError) as e:
        _fail(str(e))


def _provider(ctx: click.Context) -> VersionedSettingsProvider:
    return ctx.obj["container"].settings_provider()


def _format_value(value: SettingsPropertyValue) -> str:
    return value.serialized_value if value.is_present else "<unset>"


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Configuration file (defaults to $VERSIONED_SETTINGS_CONFIG)",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None) -> None:
    """Versioned settings manager.

    Inspect, edit and migrate settings stored for each application version.
    """
    container = Container()
    container.path_resolver.override(providers.Object(PathResolver(config_path)))

    try:
        config = container.config()
    except (ValueError, OSError) as e:
        _fail(str(e))

    configure_structlog(config.logging)

    ctx.ensure_object(dict)
    ctx.obj["container"] = container


@cli.command()
@click.argument("names", nargs=-1, required=True)
@click.pass_context
def show(ctx: click.Context, names: tuple[str, ...]) -> None:
    """Show current-version values for NAMES."""
    with _reporting_errors():
        provider = _provider(ctx)
        values = provider.get_property_values([SettingsProperty(name=name) for name in names])

    click.echo(f"Version {provider.current_version}")
    for name, value in values.items():
        click.echo(f"  {name}={_format_value(value)}")


@cli.command(name="set")
@click.argument("name")
@click.argument("value")
@click.pass_context
def set_value(ctx: click.Context, name: str, value: str) -> None:
    """Store VALUE for NAME under the current version."""
    with _reporting_errors():
        provider = _provider(ctx)
        property_value = SettingsPropertyValue(SettingsProperty(name=name))
        property_value.property_value = value
        provider.set_property_values([property_value])

    click.echo(click.style(f"✓ {name} saved for version {provider.current_version}", fg="green"))


@cli.command()
@click.option("--yes", is_flag=True, help="Don't ask for confirmation")
@click.pass_context
def reset(ctx: click.Context, yes: bool) -> None:
    """Delete every value stored for the current version."""
    with _reporting_errors():
        provider = _provider(ctx)
    if not yes:
        click.confirm(
            f"Delete all settings stored for version {provider.current_version}?", abort=True
        )

    with _reporting_errors():
        provider.reset()
    click.echo(click.style(f"✓ Settings for version {provider.current_version} reset", fg="green"))


@cli.command()
@click.argument("name")
@click.pass_context
def previous(ctx: click.Context, name: str) -> None:
    """Show the previous version's value for NAME."""
    with _reporting_errors():
        value = _provider(ctx).get_previous_version(SettingsProperty(name=name))
    click.echo(f"{name}={_format_value(value)}")


@cli.command()
@click.argument("names", nargs=-1, required=True)
@click.option(
    "--purge/--no-purge",
    default=None,
    help="Delete versions older than the current one afterwards (default from config)",
)
@click.pass_context
def upgrade(ctx: click.Context, names: tuple[str, ...], purge: bool | None) -> None:
    """Copy the previous version's values for NAMES into the current version."""
    with _reporting_errors():
        result = _provider(ctx).upgrade(
            [SettingsProperty(name=name) for name in names], delete_old_versions=purge
        )

    if not result.performed:
        click.echo(f"No settings older than {result.current_version}, nothing to upgrade")
        return

    click.echo(
        click.style(
            f"✓ Upgraded {result.previous_version} → {result.current_version}", fg="green"
        )
    )
    click.echo(f"  Migrated: {', '.join(result.migrated) if result.migrated else 'none'}")
    if result.purged:
        click.echo(f"  Purged versions: {', '.join(str(v) for v in result.purged)}")


@cli.command()
@click.pass_context
def versions(ctx: click.Context) -> None:
    """List every version with stored settings."""
    with _reporting_errors():
        provider = _provider(ctx)
        recorded = provider.list_versions()

    if not recorded:
        click.echo("No settings stored.")
        return

    for version in recorded:
        marker = " (current)" if version == provider.current_version else ""
        click.echo(f"{version}{marker}")


def main() -> None:
    """Entry point for the versioned-settings command."""
    cli(obj={})


if __name__ == "__main__":
    main()
