"""Kontrol S-series display and LED output."""

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager

import numpy as np

from kontrolhid.devices.protocols import HidTransport
from kontrolhid.models import Color

from .buttons import LED_MAPPING, NUM_BUTTON_LEDS, Button
from .display import DisplayBuffer
from .model import KontrolInfo
from .reports import (
    NUM_KEY_LEDS,
    REPORT_ID_OUTPUT_DISPLAY,
    REPORT_ID_OUTPUT_INIT,
    REPORT_ID_OUTPUT_KEY_LEDS,
    REPORT_ID_OUTPUT_LEDS,
    button_led_payload,
    init_payload,
    key_led_payload,
)

logger = logging.getLogger(__name__)

MAX_KEY_CHANNEL = 127
MAX_BUTTON_INTENSITY = 255
NUM_DISPLAY_PACKETS = 3


class Kontrol1Output:
    """
    Owns the output state of one keyboard and sends it differentially.

    Three independent resources are kept here, each with its own lock:

    - the display buffer (three 0xE0 packets)
    - the 21 button LED intensities (0x80)
    - the 88 x 3 key LED colors (0x82)

    Setters only change memory. flush() renders every packet, compares
    it with the last one successfully written and sends only what
    changed. The snapshots start empty, so the first flush sends
    everything; a failed write keeps the old snapshot and the packet is
    retried on the next flush.
    """

    def __init__(self, transport: HidTransport | None, info: KontrolInfo):
        """
        Initialize output.

        Args:
            transport: HID transport used for writing reports, None when
                       the keyboard could not be opened (all writes are no-ops)
            info: Keyboard metadata (number of keys)
        """
        self.transport = transport
        self.info = info

        self._display = DisplayBuffer()
        self._display_lock = threading.Lock()
        self._sent_display: list[bytes | None] = [None] * NUM_DISPLAY_PACKETS

        self._button_states = bytearray(NUM_BUTTON_LEDS)
        self._button_lock = threading.Lock()
        self._sent_buttons: bytes | None = None

        self._key_colors = np.zeros((NUM_KEY_LEDS, 3), dtype=np.uint8)
        self._key_lock = threading.Lock()
        self._sent_keys: bytes | None = None

        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def initialize(self) -> bool:
        """Send the init report that wakes up display and LEDs."""
        if self._send(REPORT_ID_OUTPUT_INIT, init_payload()):
            logger.info(f"Initialized {self.info.display_name}")
            return True
        logger.error(f"Failed to initialize {self.info.display_name}")
        return False

    def close(self) -> None:
        """Stop writing; later flushes become no-ops."""
        self._closed = True

    # =================================================================
    # Display
    # =================================================================

    @contextmanager
    def edit_display(self) -> Iterator[DisplayBuffer]:
        """
        Lock the display buffer for changes.

        Example:
            with output.edit_display() as display:
                display.set_text(0, "HELLO")
                display.set_bar(0, True, 64, 127)
        """
        with self._display_lock:
            yield self._display

    def flush_display(self) -> int:
        """Send display packets that changed. Returns the number written."""
        written = 0
        with self._display_lock:
            for row in range(NUM_DISPLAY_PACKETS):
                packet = self._display.render(row)
                if packet == self._sent_display[row]:
                    continue
                if self._send(REPORT_ID_OUTPUT_DISPLAY, packet):
                    self._sent_display[row] = packet
                    written += 1
        return written

    # =================================================================
    # Button LEDs
    # =================================================================

    def set_button_led(self, button: Button, intensity: int) -> None:
        """
        Set the brightness of a button LED.

        Buttons without an LED are ignored.

        Args:
            button: Button id
            intensity: 0 (off) - 255 (full)
        """
        slot = LED_MAPPING.get(button)
        if slot is None:
            return
        with self._button_lock:
            self._button_states[slot] = max(0, min(MAX_BUTTON_INTENSITY, intensity))

    def get_button_led(self, button: Button) -> int:
        slot = LED_MAPPING.get(button)
        if slot is None:
            return 0
        with self._button_lock:
            return self._button_states[slot]

    def flush_button_leds(self) -> int:
        with self._button_lock:
            payload = button_led_payload(self._button_states)
            if payload == self._sent_buttons:
                return 0
            if not self._send(REPORT_ID_OUTPUT_LEDS, payload):
                return 0
            self._sent_buttons = payload
            return 1

    def turn_off_button_leds(self) -> int:
        """Switch off every button LED and send the change right away."""
        with self._button_lock:
            self._button_states[:] = bytes(NUM_BUTTON_LEDS)
        return self.flush_button_leds()

    # =================================================================
    # Key LEDs
    # =================================================================

    def set_key_led(self, key: int, red: int, green: int, blue: int) -> None:
        """
        Set the color of a key LED.

        Key 0 is the lowest physical key regardless of the octave
        transpose. Out-of-range keys are ignored.

        Args:
            key: Key index (0-87)
            red, green, blue: Channel values (0-127)
        """
        if not 0 <= key < NUM_KEY_LEDS:
            return
        rgb = [max(0, min(MAX_KEY_CHANNEL, channel)) for channel in (red, green, blue)]
        with self._key_lock:
            self._key_colors[key] = rgb

    def set_key_color(self, key: int, color: Color) -> None:
        """Set a key LED from an 8-bit color."""
        self.set_key_led(key, *color.to_7bit())

    def get_key_led(self, key: int) -> tuple[int, int, int]:
        if not 0 <= key < NUM_KEY_LEDS:
            return (0, 0, 0)
        with self._key_lock:
            red, green, blue = self._key_colors[key]
        return (int(red), int(green), int(blue))

    def clear_key_leds(self) -> None:
        with self._key_lock:
            self._key_colors[:] = 0

    def flush_key_leds(self) -> int:
        with self._key_lock:
            payload = key_led_payload(self._key_colors.tobytes(), self.info.num_keys)
            if payload == self._sent_keys:
                return 0
            if not self._send(REPORT_ID_OUTPUT_KEY_LEDS, payload):
                return 0
            self._sent_keys = payload
            return 1

    # =================================================================
    # All
    # =================================================================

    def flush(self) -> int:
        """Send everything that changed since the last flush."""
        written = self.flush_display() + self.flush_button_leds() + self.flush_key_leds()
        if written:
            logger.debug(f"Flushed {written} report(s)")
        return written

    def reset_snapshots(self) -> None:
        """Forget what was sent so the next flush resends everything."""
        with self._display_lock:
            self._sent_display = [None] * NUM_DISPLAY_PACKETS
        with self._button_lock:
            self._sent_buttons = None
        with self._key_lock:
            self._sent_keys = None

    def _send(self, report_id: int, payload: bytes) -> bool:
        if self._closed or self.transport is None:
            return False
        try:
            sent = self.transport.send_output_report(report_id, payload)
        except Exception as e:
            logger.error(f"Error writing report 0x{report_id:02X}: {e}", exc_info=True)
            return False
        if not sent:
            logger.warning(f"Failed to write report 0x{report_id:02X} ({len(payload)} bytes)")
            return False
        return True
