"""
Input report decoding for Kontrol S-series keyboards.

Input Flow: Knob Turn → Your Code
=================================

::

    Hardware (encoder 3 turned one detent)
          ↓
    [HID report 0x01: ... counters ... first note]
          ↓
    ┌──────────────────────────────────────┐
    │      Kontrol1Input.decode()          │
    │                                      │
    │  main encoder nibble changed?        │
    │  value encoder counters changed?     │
    │  button bitmasks → edges             │
    │  touch byte (only if no encoder      │
    │  moved in this report)               │
    │  first note changed?                 │
    └────────────┬─────────────────────────┘
                 ↓
    [EncoderEvent(index=3, delta=1)]
          ↓
    Kontrol1Device schedules dispatch to observers

Touching a knob to turn it also triggers its touch sensor, so touch
decoding is skipped for reports in which any encoder moved.

The very first report after (re)connecting only establishes the
baseline of the encoders and the first note; it emits no encoder or
octave events.
"""

import logging
import threading

from kontrolhid.devices.protocols import (
    ButtonEvent,
    DeviceEvent,
    EncoderEvent,
    MainEncoderEvent,
    OctaveEvent,
)

from .buttons import (
    BUTTON_BYTE_0,
    BUTTON_BYTE_1,
    BUTTON_BYTE_2,
    MAIN_TOUCH_BYTE,
    TEST_BITS,
    TOUCH_BYTE,
    Button,
)
from .encoders import encoder_delta, main_encoder_increased
from .reports import (
    MIN_INPUT_SIZE,
    OFFSET_BUTTONS,
    OFFSET_ENCODERS,
    OFFSET_FIRST_NOTE,
    OFFSET_MAIN_ENCODER,
    OFFSET_MAIN_TOUCH,
    OFFSET_TOUCH,
    REPORT_ID_INPUT_UI,
)

logger = logging.getLogger(__name__)

NUM_ENCODERS = 8

# C3, the lowest key of an untransposed keyboard
DEFAULT_FIRST_NOTE = 48


class Kontrol1Input:
    """
    Stateful parser of the keyboard's input report.

    Keeps the last seen encoder positions, button states and first note
    so that each report is turned into the events describing what
    changed. State is guarded by a lock because reports arrive on the
    transport's reader thread while the application may reset or read
    it.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._main_encoder_value = 0
        self._encoder_values = [0] * NUM_ENCODERS
        self._pressed: dict[Button, bool] = {}
        self._first_note = DEFAULT_FIRST_NOTE
        self._first_report = True

    @property
    def first_note(self) -> int:
        """MIDI note on the lowest key as last reported by the keyboard."""
        with self._lock:
            return self._first_note

    @property
    def main_encoder_value(self) -> int:
        with self._lock:
            return self._main_encoder_value

    @property
    def encoder_values(self) -> tuple[int, ...]:
        with self._lock:
            return tuple(self._encoder_values)

    def is_pressed(self, button: Button) -> bool:
        with self._lock:
            return self._pressed.get(button, False)

    def reset(self) -> None:
        """Forget all state; the next report is treated as the first one."""
        with self._lock:
            self._main_encoder_value = 0
            self._encoder_values = [0] * NUM_ENCODERS
            self._pressed.clear()
            self._first_note = DEFAULT_FIRST_NOTE
            self._first_report = True
        logger.debug("Input decoder reset")

    def decode(self, report_id: int, payload: bytes) -> list[DeviceEvent]:
        """
        Decode one input report into events.

        Args:
            report_id: HID report id
            payload: Report data without the report id byte

        Returns:
            Events in order: main encoder, value encoders, buttons,
            touch sensors, octave. Empty for reports that are ignored.
        """
        if report_id != REPORT_ID_INPUT_UI:
            logger.debug(f"Ignoring input report 0x{report_id:02X} ({len(payload)} bytes)")
            return []

        if len(payload) < MIN_INPUT_SIZE:
            logger.warning(
                f"Dropping short input report: {len(payload)} bytes, expected at least {MIN_INPUT_SIZE}"
            )
            return []

        events: list[DeviceEvent] = []
        with self._lock:
            first_report = self._first_report
            self._first_report = False

            encoder_change = self._decode_main_encoder(payload, first_report, events)
            encoder_change = self._decode_encoders(payload, first_report, events) or encoder_change

            self._decode_buttons(payload[OFFSET_BUTTONS], BUTTON_BYTE_0, events)
            self._decode_buttons(payload[OFFSET_BUTTONS + 1], BUTTON_BYTE_1, events)
            self._decode_buttons(payload[OFFSET_BUTTONS + 2], BUTTON_BYTE_2, events)
            self._decode_buttons(payload[OFFSET_MAIN_TOUCH], MAIN_TOUCH_BYTE, events)
            if not encoder_change:
                self._decode_buttons(payload[OFFSET_TOUCH], TOUCH_BYTE, events)

            first_note = payload[OFFSET_FIRST_NOTE]
            if first_note != self._first_note:
                self._first_note = first_note
                if not first_report:
                    events.append(OctaveEvent(first_note=first_note))

        if events:
            logger.debug(f"Decoded {len(events)} event(s): {events}")
        return events

    def _decode_main_encoder(
        self, payload: bytes, first_report: bool, events: list[DeviceEvent]
    ) -> bool:
        value = payload[OFFSET_MAIN_ENCODER] & 0x0F
        if value == self._main_encoder_value:
            return False

        increased = main_encoder_increased(self._main_encoder_value, value)
        self._main_encoder_value = value
        if not first_report:
            events.append(MainEncoderEvent(increased=increased))
        return True

    def _decode_encoders(
        self, payload: bytes, first_report: bool, events: list[DeviceEvent]
    ) -> bool:
        changed = False
        for index in range(NUM_ENCODERS):
            position = OFFSET_ENCODERS + 2 * index
            value = payload[position] | payload[position + 1] << 8
            if value == self._encoder_values[index]:
                continue

            delta = encoder_delta(self._encoder_values[index], value)
            self._encoder_values[index] = value
            changed = True
            if not first_report:
                events.append(EncoderEvent(index=index, delta=delta))
        return changed

    def _decode_buttons(self, mask: int, buttons: tuple[Button, ...], events: list[DeviceEvent]) -> None:
        for bit, button in zip(TEST_BITS, buttons):
            pressed = bool(mask & bit)
            if pressed != self._pressed.get(button, False):
                self._pressed[button] = pressed
                events.append(ButtonEvent(button=button, pressed=pressed))
