"""HID driver for Native Instruments Komplete Kontrol S-series (MK1) keyboards."""

__version__ = "0.1.0"
