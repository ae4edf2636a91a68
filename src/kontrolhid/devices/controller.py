"""
Keyboard controller for Komplete Kontrol S-series keyboards.

Architecture Overview
=====================

The KontrolController is the main user-facing API. It opens the keyboard,
delivers decoded input to observers and offers text, bar and LED helpers
that hide the HID report layout.

::

    ┌─────────────────────────────────────────────────────────────────────┐
    │                         USER APPLICATION                            │
    └────────────────────────────┬────────────────────────────────────────┘
                                 │ write_line(), set_bar(), flush()
                                 ↓
    ┌─────────────────────────────────────────────────────────────────────┐
    │                      KontrolController                              │
    │                   (devices/controller.py)                           │
    └──────────┬──────────────────────────────────────────┬───────────────┘
               │ owns                                      │ notifies
               ↓                                           ↓
    ┌──────────────────────┐                   ┌──────────────────────┐
    │   Kontrol1Device     │── events via ───→ │  KontrolObserver(s)  │
    │  input + output      │   TaskScheduler   │  on_kontrol_event()  │
    └──────────┬───────────┘                   └──────────────────────┘
               │ reports
               ↓
    ┌──────────────────────┐
    │   HidapiTransport    │
    └──────────────────────┘

Output is buffered: the helpers only change memory and flush() writes
the reports that changed. Applications call flush() from their own loop.

If the keyboard cannot be opened the controller still starts; it runs
as a disconnected stub where every helper works on memory and nothing
is written.

Usage Example
-------------

.. code-block:: python

    with KontrolController(KontrolConfig(model=KontrolModel.S49)) as kontrol:
        kontrol.register_observer(my_observer)
        kontrol.write_line(0, "HELLO")
        kontrol.set_bar(0, 64, 127)
        kontrol.flush()
"""

import logging
from collections.abc import Callable

from kontrolhid.devices.kontrol1 import Button, Kontrol1Device, KontrolInfo
from kontrolhid.devices.kontrol1.input import DEFAULT_FIRST_NOTE
from kontrolhid.devices.protocols import DeviceEvent, HidTransport, KontrolObserver
from kontrolhid.exceptions import DeviceError
from kontrolhid.hid import HidapiTransport, TaskScheduler
from kontrolhid.models import Color, KontrolConfig
from kontrolhid.utils import ObserverManager

logger = logging.getLogger(__name__)

TransportFactory = Callable[[], HidapiTransport]

BUTTON_LED_ON = 0xFF
BUTTON_LED_DIM = 0x20


class KontrolController:
    """
    High-level controller for one Kontrol S-series keyboard.

    Composes transport, scheduler and device and provides a clean
    API working with rows, columns, buttons, notes and colors.
    """

    # ================================================================
    # INITIALIZATION
    # ================================================================

    def __init__(
        self,
        config: KontrolConfig | None = None,
        transport_factory: TransportFactory | None = None,
    ):
        """
        Initialize keyboard controller.

        Args:
            config: Connection settings (defaults to an S49)
            transport_factory: Creates the (unopened) transport; defaults
                               to an HidapiTransport for the configured ids
        """
        self.config = config or KontrolConfig()
        self.info = KontrolInfo.from_config(self.config)
        self._transport_factory = transport_factory or self._create_transport

        self._scheduler = TaskScheduler()
        self._observers = ObserverManager[KontrolObserver](observer_type_name="kontrol")
        self._device: Kontrol1Device | None = None

    def _create_transport(self) -> HidapiTransport:
        return HidapiTransport(
            vendor_id=self.info.vendor_id,
            product_id=self.info.product_id,
            read_size=self.config.input_report_size,
            read_timeout_ms=self.config.read_timeout_ms,
        )

    # ================================================================
    # LIFECYCLE MANAGEMENT
    # ================================================================

    def start(self) -> None:
        """Open the keyboard and start delivering events."""
        if self._device is not None:
            logger.warning("KontrolController already started")
            return

        self._scheduler.start()

        transport: HidTransport | None = self._transport_factory()
        try:
            transport.open()
        except DeviceError as e:
            logger.warning(f"{e.user_message}; running without a keyboard")
            transport = None

        self._device = Kontrol1Device(self.info, self._scheduler, transport)
        self._device.on_event(self._handle_event)
        self._device.reset()
        self._device.initialize()
        logger.info(
            f"KontrolController started ({self.info.display_name}, "
            f"{'connected' if self.is_connected else 'disconnected'})"
        )

    def stop(self) -> None:
        """Switch off LEDs, close the keyboard and stop event delivery."""
        if self._device:
            self._device.shutdown()
            self._device = None

        self._scheduler.stop()
        logger.info("KontrolController stopped")

    def __enter__(self):
        """Context manager entry."""
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.stop()

    # ================================================================
    # OBSERVER PATTERN
    # ================================================================

    def register_observer(self, observer: KontrolObserver) -> None:
        """Register observer for keyboard events."""
        self._observers.register(observer)

    def unregister_observer(self, observer: KontrolObserver) -> None:
        """Unregister observer."""
        self._observers.unregister(observer)

    def _handle_event(self, event: DeviceEvent) -> None:
        """Forward one decoded event. Runs on the scheduler thread."""
        logger.debug(f"Keyboard event: {event}")
        self._observers.notify("on_kontrol_event", event)

    # ================================================================
    # DISPLAY
    # ================================================================

    def write_line(self, row: int, text: str) -> bool:
        """
        Replace a whole text row.

        Args:
            row: Text row (0-1)
            text: Up to 72 characters; '.' lights the dot of the previous one

        Returns:
            True if applied, False if not started
        """
        if not self._device:
            logger.warning("Cannot write line: controller not started")
            return False

        with self._device.output.edit_display() as display:
            display.set_text(row, text, width=72)
        return True

    def set_cell(self, row: int, block: int, text: str) -> bool:
        """
        Write up to 8 characters into the block above encoder `block`.

        Blocks 0-7 sit above the value encoders, block 8 is the rightmost.
        """
        if not self._device:
            logger.warning("Cannot set cell: controller not started")
            return False

        with self._device.output.edit_display() as display:
            display.set_cell(row, block, text)
        return True

    def set_bar(self, column: int, value: int, max_value: int = 127, border: bool = False) -> bool:
        """Show a value bar in bar column 0-8."""
        if not self._device:
            logger.warning("Cannot set bar: controller not started")
            return False

        with self._device.output.edit_display() as display:
            display.set_bar(column, border, value, max_value)
        return True

    def set_pan_bar(self, column: int, value: int, max_value: int = 127, border: bool = False) -> bool:
        """Show a centered (panorama) bar in bar column 0-8."""
        if not self._device:
            logger.warning("Cannot set pan bar: controller not started")
            return False

        with self._device.output.edit_display() as display:
            display.set_pan_bar(column, border, value, max_value)
        return True

    def clear_display(self) -> bool:
        if not self._device:
            logger.warning("Cannot clear display: controller not started")
            return False

        with self._device.output.edit_display() as display:
            display.clear()
        return True

    # ================================================================
    # LED CONTROL
    # ================================================================

    def set_button_light(self, button: Button, on: bool, dim: bool = False) -> bool:
        """
        Switch a button LED on or off.

        Args:
            button: Button with an LED (buttons without one are ignored)
            on: Light the LED
            dim: Use the low intensity instead of full brightness
        """
        if not self._device:
            logger.warning("Cannot set button light: controller not started")
            return False

        intensity = (BUTTON_LED_DIM if dim else BUTTON_LED_ON) if on else 0
        self._device.output.set_button_led(button, intensity)
        return True

    def turn_off_button_lights(self) -> bool:
        if not self._device:
            logger.warning("Cannot turn off button lights: controller not started")
            return False

        self._device.turn_off_button_leds()
        return True

    def set_key_color(self, key: int, color: Color) -> bool:
        """
        Color a key by its physical position.

        Args:
            key: Key index (0 = lowest key), independent of the octave
            color: RGB color
        """
        if not self._device:
            logger.warning("Cannot set key color: controller not started")
            return False

        self._device.output.set_key_color(key, color)
        return True

    def set_note_color(self, note: int, color: Color) -> bool:
        """
        Color the key that currently plays a MIDI note.

        Returns:
            False if not started or the note is outside the current range
        """
        if not self._device:
            logger.warning("Cannot set note color: controller not started")
            return False

        return self._device.set_note_color(note, *color.to_7bit())

    def clear_key_colors(self) -> bool:
        if not self._device:
            logger.warning("Cannot clear key colors: controller not started")
            return False

        self._device.output.clear_key_leds()
        return True

    def flush(self) -> int:
        """
        Write all display and LED changes.

        Returns:
            Number of reports written
        """
        if not self._device:
            return 0
        return self._device.flush()

    # ================================================================
    # PROPERTIES
    # ================================================================

    @property
    def is_connected(self) -> bool:
        """Check if a keyboard is open."""
        return self._device is not None and self._device.is_connected

    @property
    def device_name(self) -> str:
        """Get the model name of the keyboard."""
        return self.info.display_name

    @property
    def num_keys(self) -> int:
        return self.info.num_keys

    @property
    def first_note(self) -> int:
        """MIDI note on the lowest key (follows the octave buttons)."""
        if self._device:
            return self._device.first_note
        return DEFAULT_FIRST_NOTE

    @property
    def note_range(self) -> tuple[int, int]:
        """Lowest and highest MIDI note currently on the keyboard."""
        if self._device:
            return self._device.mapper.note_range()
        return (DEFAULT_FIRST_NOTE, DEFAULT_FIRST_NOTE + self.num_keys - 1)
