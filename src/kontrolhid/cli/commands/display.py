"""Display command: show text, bars and key colors on the keyboard."""

import click

from kontrolhid.devices import KontrolController
from kontrolhid.models import Color

from .common import load_config, model_option, require_connection, run_until_interrupted

NUM_BARS = 9


def parse_bar(value: str) -> tuple[int, int]:
    """Parse COLUMN=VALUE into (column, value)."""
    column, sep, level = value.partition("=")
    if not sep:
        raise click.BadParameter(f"expected COLUMN=VALUE, got '{value}'")
    try:
        column_index, level_value = int(column), int(level)
    except ValueError:
        raise click.BadParameter(f"expected integers in '{value}'") from None
    if not 0 <= column_index < NUM_BARS:
        raise click.BadParameter(f"bar column must be 0-{NUM_BARS - 1}, got {column_index}")
    return column_index, level_value


def parse_color(value: str) -> Color:
    """Parse #RRGGBB into a Color."""
    try:
        return Color.from_hex(value)
    except ValueError:
        raise click.BadParameter(f"expected #RRGGBB, got '{value}'") from None


def _parse_bars(ctx, param, values):
    return [parse_bar(value) for value in values]


def _parse_color(ctx, param, value):
    return parse_color(value) if value else None


@click.command(name="display")
@click.argument("line1")
@click.argument("line2", required=False, default="")
@model_option
@click.option(
    "--bar",
    "bars",
    multiple=True,
    callback=_parse_bars,
    metavar="COLUMN=VALUE",
    help="Value bar (0-127) for a column 0-8; repeatable",
)
@click.option("--pan", is_flag=True, help="Draw bars centered (panorama style)")
@click.option("--border", is_flag=True, help="Draw a border around the bars")
@click.option(
    "--keys",
    "key_color",
    callback=_parse_color,
    metavar="#RRGGBB",
    help="Light every key in this color",
)
def display(
    line1: str,
    line2: str,
    model: str | None,
    bars: list[tuple[int, int]],
    pan: bool,
    border: bool,
    key_color: Color | None,
):
    """
    Show two lines of text on the keyboard display.

    A '.' lights the dot after the preceding character.

    Press Ctrl+C to clear the display and exit.
    """
    config = load_config(model)

    with KontrolController(config) as controller:
        require_connection(controller)

        controller.write_line(0, line1)
        controller.write_line(1, line2)
        for column, value in bars:
            if pan:
                controller.set_pan_bar(column, value, border=border)
            else:
                controller.set_bar(column, value, border=border)
        if key_color:
            for key in range(controller.num_keys):
                controller.set_key_color(key, key_color)

        click.echo(f"Showing text on {controller.device_name}. Press Ctrl+C to exit.")
        run_until_interrupted(controller, config.flush_interval)

        controller.clear_display()
        controller.clear_key_colors()
        controller.flush()
