"""Helpers shared by the device commands."""

import sys
import time
from collections.abc import Callable

import click

from kontrolhid.devices import KontrolController
from kontrolhid.exceptions import KontrolError, format_error_for_display
from kontrolhid.models import KontrolConfig, KontrolModel

model_option = click.option(
    "--model",
    "-m",
    type=click.Choice([model.value for model in KontrolModel], case_sensitive=False),
    default=None,
    help="Keyboard model (default: from config)",
)


def load_config(model: str | None) -> KontrolConfig:
    """Load the saved config, exiting with a readable error if it is broken."""
    try:
        config = KontrolConfig.load_or_default()
    except KontrolError as e:
        report_error(e)
        sys.exit(1)

    if model:
        config = config.model_copy(update={"model": KontrolModel(model.upper())})
    return config


def report_error(error: Exception) -> None:
    user_message, recovery_hint = format_error_for_display(error)
    click.echo(f"ERROR: {user_message}", err=True)
    if recovery_hint:
        click.echo(recovery_hint, err=True)


def require_connection(controller: KontrolController) -> None:
    if not controller.is_connected:
        click.echo(
            f"{controller.device_name} not found "
            f"(USB {controller.info.vendor_id:04X}:{controller.info.product_id:04X}).",
            err=True,
        )
        sys.exit(1)


def run_until_interrupted(
    controller: KontrolController,
    interval: float,
    tick: Callable[[], None] | None = None,
) -> None:
    """Flush the controller every `interval` seconds until Ctrl+C."""
    try:
        while True:
            if tick:
                tick()
            controller.flush()
            time.sleep(interval)
    except KeyboardInterrupt:
        click.echo("\nStopping...")
