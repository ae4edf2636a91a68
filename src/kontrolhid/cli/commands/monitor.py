"""Monitor command: print decoded keyboard events."""

import logging
from datetime import datetime

import click

from kontrolhid.devices import (
    ButtonEvent,
    DeviceEvent,
    EncoderEvent,
    KontrolController,
    MainEncoderEvent,
    OctaveEvent,
)
from kontrolhid.devices.kontrol1 import Button

from .common import load_config, model_option, require_connection, run_until_interrupted

logger = logging.getLogger(__name__)


def format_event(event: DeviceEvent) -> str:
    """Human-readable one-line description of an event."""
    if isinstance(event, ButtonEvent):
        button = Button(event.button)
        if button.is_touch:
            return f"touch {button.name} {'touched' if event.pressed else 'released'}"
        return f"button {button.name} {'pressed' if event.pressed else 'released'}"
    if isinstance(event, MainEncoderEvent):
        return f"main encoder {'+1' if event.increased else '-1'}"
    if isinstance(event, EncoderEvent):
        return f"encoder {event.index + 1} {event.delta:+d}"
    if isinstance(event, OctaveEvent):
        return f"first note {event.first_note}"
    return repr(event)


class EventPrinter:
    """Observer echoing events and mirroring the last one on the display."""

    def __init__(self, controller: KontrolController, light_buttons: bool):
        self.controller = controller
        self.light_buttons = light_buttons

    def on_kontrol_event(self, event: DeviceEvent) -> None:
        timestamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]
        text = format_event(event)
        click.echo(f"[{timestamp}] {text}")

        self.controller.write_line(1, text.upper())
        if self.light_buttons and isinstance(event, ButtonEvent):
            self.controller.set_button_light(Button(event.button), event.pressed)


@click.command(name="monitor")
@model_option
@click.option(
    "--light/--no-light",
    default=True,
    help="Light button LEDs while pressed (default: enabled)",
)
def monitor(model: str | None, light: bool):
    """
    Print button, encoder and octave events of the keyboard.

    The last event is also shown on the keyboard's display.

    Press Ctrl+C to stop monitoring.
    """
    config = load_config(model)

    with KontrolController(config) as controller:
        require_connection(controller)

        controller.register_observer(EventPrinter(controller, light))
        controller.write_line(0, "KONTROLHID MONITOR")

        logger.info(f"Monitoring {controller.device_name} (light buttons: {light})")
        click.echo(f"Monitoring {controller.device_name}")
        click.echo(f"Keys: {controller.num_keys}, first note: {controller.first_note}")
        click.echo("\nPress Ctrl+C to stop\n")

        run_until_interrupted(controller, config.flush_interval)
