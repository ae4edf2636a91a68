"""Komplete Kontrol S-series (first generation) HID driver."""

from .buttons import LED_MAPPING, Button
from .device import Kontrol1Device
from .display import DisplayBuffer
from .input import Kontrol1Input
from .mapper import KeyLedMapper
from .model import KontrolInfo
from .output import Kontrol1Output

__all__ = [
    "Button",
    "DisplayBuffer",
    "KeyLedMapper",
    "Kontrol1Device",
    "Kontrol1Input",
    "Kontrol1Output",
    "KontrolInfo",
    "LED_MAPPING",
]
