"""Device events and the collaborator protocols of the driver."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol


class DeviceEvent:
    """Generic device event (input from hardware)."""

    pass


@dataclass(frozen=True)
class ButtonEvent(DeviceEvent):
    """A button or touch sensor changed state."""

    button: int  # Button id, see kontrol1.buttons.Button
    pressed: bool


@dataclass(frozen=True)
class MainEncoderEvent(DeviceEvent):
    """The main (browse) encoder moved one detent."""

    increased: bool


@dataclass(frozen=True)
class EncoderEvent(DeviceEvent):
    """One of the eight value encoders moved."""

    index: int  # 0-7
    delta: int  # Signed, already divided by the encoder step size


@dataclass(frozen=True)
class OctaveEvent(DeviceEvent):
    """The keyboard was transposed; `first_note` is now on the lowest key."""

    first_note: int


InputCallback = Callable[[int, bytes], None]


class HidTransport(Protocol):
    """Raw HID handle of one connected keyboard."""

    def send_output_report(self, report_id: int, payload: bytes) -> bool:
        """
        Write one output report.

        Returns:
            True if written, False if the device is closed or the write failed.
            Implementations never raise on write failure.
        """
        ...

    def set_input_callback(self, callback: InputCallback | None) -> None:
        """Register the function receiving (report_id, payload) of each input report."""
        ...

    def close(self) -> None:
        """Release the handle. Safe to call more than once."""
        ...


class Scheduler(Protocol):
    """Defers work off the calling thread."""

    def schedule(self, task: Callable[[], None], delay_ms: int = 0) -> None:
        """Run `task` later, after at least `delay_ms` milliseconds."""
        ...


class KontrolObserver(Protocol):
    """Receives decoded keyboard events."""

    def on_kontrol_event(self, event: DeviceEvent) -> None:
        """Handle one event. Called on the scheduler thread."""
        ...
