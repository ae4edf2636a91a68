"""Data models for kontrolhid."""

from .color import Color
from .config import DEFAULT_CONFIG_PATH, KontrolConfig
from .enums import VENDOR_ID, KontrolModel

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "VENDOR_ID",
    # Models
    "Color",
    "KontrolConfig",
    # Enums
    "KontrolModel",
]
