"""Keyboard devices and the high-level controller."""

from .controller import KontrolController
from .protocols import (
    ButtonEvent,
    DeviceEvent,
    EncoderEvent,
    HidTransport,
    KontrolObserver,
    MainEncoderEvent,
    OctaveEvent,
    Scheduler,
)

__all__ = [
    "ButtonEvent",
    "DeviceEvent",
    "EncoderEvent",
    "HidTransport",
    "KontrolController",
    "KontrolObserver",
    "MainEncoderEvent",
    "OctaveEvent",
    "Scheduler",
]
