"""Kontrol S-series device implementation."""

import logging
import threading
from collections.abc import Callable
from functools import partial

from kontrolhid.devices.protocols import DeviceEvent, HidTransport, Scheduler
from kontrolhid.exceptions import collect_errors

from .input import Kontrol1Input
from .mapper import KeyLedMapper
from .model import KontrolInfo
from .output import Kontrol1Output

logger = logging.getLogger(__name__)

EventCallback = Callable[[DeviceEvent], None]


class Kontrol1Device:
    """
    Complete Kontrol S-series keyboard with input and output.

    Wires the HID transport to the report decoder and hands every decoded
    event to the scheduler, so the reader thread never runs application
    code. Output state lives in Kontrol1Output and is only written on
    flush().

    Constructed without a transport the device is a disconnected stub:
    input never arrives and every write is a no-op.
    """

    def __init__(
        self,
        info: KontrolInfo,
        scheduler: Scheduler,
        transport: HidTransport | None = None,
    ):
        """
        Initialize device.

        Args:
            info: Keyboard metadata
            scheduler: Runs event dispatch off the reader thread
            transport: Open HID transport, or None for a disconnected stub
        """
        self.info = info
        self._scheduler = scheduler
        self._transport = transport
        self._input = Kontrol1Input()
        self._output = Kontrol1Output(transport, info)
        self.mapper = KeyLedMapper(info.num_keys, lambda: self._input.first_note)

        self._callback: EventCallback | None = None
        self._shutdown_lock = threading.Lock()
        self._is_shut_down = False

        if transport is not None:
            transport.set_input_callback(self.handle_report)

    @property
    def input(self) -> Kontrol1Input:
        return self._input

    @property
    def output(self) -> Kontrol1Output:
        return self._output

    @property
    def is_connected(self) -> bool:
        return self._transport is not None and not self._is_shut_down

    @property
    def first_note(self) -> int:
        """MIDI note on the lowest key."""
        return self._input.first_note

    @property
    def num_keys(self) -> int:
        return self.info.num_keys

    def on_event(self, callback: EventCallback | None) -> None:
        """Set the function that receives decoded events (on the scheduler thread)."""
        self._callback = callback

    # =================================================================
    # Lifecycle
    # =================================================================

    def initialize(self) -> bool:
        """Send the init report."""
        if not self.is_connected:
            logger.debug("Skipping init: keyboard not connected")
            return False
        return self._output.initialize()

    def reset(self) -> None:
        """
        Reset input and output state after a (re)connect.

        The next report re-establishes the encoder baseline and the next
        flush resends every packet.
        """
        self._input.reset()
        self._output.reset_snapshots()
        logger.info(f"{self.info.display_name} state reset")

    def shutdown(self) -> None:
        """
        Switch off all LEDs and release the keyboard.

        Safe to call more than once; only the first call has an effect.
        """
        with self._shutdown_lock:
            if self._is_shut_down:
                return
            self._is_shut_down = True

        if self._transport is None:
            return

        self._transport.set_input_callback(None)

        collector = collect_errors(f"shut down {self.info.display_name}")
        with collector.try_operation("turn off button LEDs"):
            self._output.turn_off_button_leds()
        with collector.try_operation("turn off key LEDs"):
            self._output.clear_key_leds()
            self._output.flush_key_leds()
        self._output.close()
        with collector.try_operation("close transport"):
            self._transport.close()

        if collector.has_errors:
            logger.warning(collector.get_summary())
        logger.info(f"{self.info.display_name} shut down")

    # =================================================================
    # Input
    # =================================================================

    def handle_report(self, report_id: int, payload: bytes) -> None:
        """
        Decode one input report and schedule dispatch of its events.

        Called on the transport's reader thread.
        """
        for event in self._input.decode(report_id, payload):
            self._scheduler.schedule(partial(self._dispatch, event))

    def _dispatch(self, event: DeviceEvent) -> None:
        callback = self._callback
        if callback is not None:
            callback(event)

    # =================================================================
    # Output
    # =================================================================

    def set_note_color(self, note: int, red: int, green: int, blue: int) -> bool:
        """
        Color the key currently playing a MIDI note.

        Returns:
            False if the note is outside the keyboard's current range
        """
        index = self.mapper.to_local_index(note)
        if index is None:
            return False
        self._output.set_key_led(index, red, green, blue)
        return True

    def turn_off_button_leds(self) -> None:
        self._output.turn_off_button_leds()

    def flush(self) -> int:
        """Write everything that changed; returns the number of reports written."""
        if not self.is_connected:
            return 0
        return self._output.flush()
