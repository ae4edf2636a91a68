"""
Exceptions of kontrolhid.

::

    KontrolError
    ├── DeviceError
    │   ├── DeviceNotFoundError
    │   └── DeviceWriteError
    └── ConfigurationError
        ├── ConfigFileInvalidError
        └── ConfigValidationError

Nothing in the report codec raises these: malformed input reports are
dropped and failed writes are logged. They surface only where the
application asks for something that cannot be done (opening a missing
keyboard, loading a broken config file).
"""

from .base import KontrolError
from .config import ConfigFileInvalidError, ConfigurationError, ConfigValidationError
from .device import DeviceError, DeviceNotFoundError, DeviceWriteError
from .handlers import (
    ErrorCollector,
    collect_errors,
    format_error_for_display,
    wrap_hid_open_error,
    wrap_pydantic_error,
)

__all__ = [
    "ConfigFileInvalidError",
    "ConfigValidationError",
    "ConfigurationError",
    "DeviceError",
    "DeviceNotFoundError",
    "DeviceWriteError",
    "ErrorCollector",
    "KontrolError",
    "collect_errors",
    "format_error_for_display",
    "wrap_hid_open_error",
    "wrap_pydantic_error",
]
