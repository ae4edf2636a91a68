"""Config command: inspect, check and reset the configuration file."""

import sys

import click

from kontrolhid.models import DEFAULT_CONFIG_PATH, KontrolConfig
from kontrolhid.utils import PydanticPersistence

from .common import load_config


@click.group(name="config")
def config():
    """Inspect or reset the kontrolhid configuration."""
    pass


@config.command(name="show")
def show_config():
    """Display the configuration (defaults if no file exists)."""
    current = load_config(None)

    click.echo(f"Configuration ({DEFAULT_CONFIG_PATH}):\n")
    for name, field in KontrolConfig.model_fields.items():
        value = getattr(current, name)
        if name == "model":
            value = f"{value.value} ({value.display_name})"
        elif name in ("vendor_id", "product_id") and value is not None:
            value = f"0x{value:04X}"
        click.echo(f"  {name}: {value}")
        if field.description:
            click.echo(f"      {field.description}")

    click.echo(f"\n  resolved product id: 0x{current.resolved_product_id:04X}")


@config.command(name="path")
def config_path():
    """Print the path of the configuration file."""
    click.echo(str(DEFAULT_CONFIG_PATH))


@config.command(name="validate")
def validate_config():
    """Check the configuration file without changing it."""
    if not DEFAULT_CONFIG_PATH.exists():
        click.echo(f"No configuration file at {DEFAULT_CONFIG_PATH}; defaults are used.")
        return

    valid, error = PydanticPersistence.validate_json(DEFAULT_CONFIG_PATH, KontrolConfig)
    if not valid:
        click.echo(f"ERROR: {error}", err=True)
        sys.exit(1)
    click.echo(f"{DEFAULT_CONFIG_PATH} is valid.")


@config.command(name="reset")
@click.confirmation_option(prompt="Reset configuration to defaults?")
def reset_config():
    """Overwrite the configuration file with the defaults."""
    KontrolConfig().save()
    click.echo(f"Configuration reset: {DEFAULT_CONFIG_PATH}")
