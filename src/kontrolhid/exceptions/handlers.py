"""
Conversion and reporting helpers for errors.

Low-level failures (OSError from hidapi, pydantic ValidationError) are
turned into KontrolError subclasses where they cross into the driver.
The CLI shows `user_message` and `recovery_hint`; everything else is
logged with `technical_message`.

Shutdown is best effort: every step runs even if an earlier one failed,
and the failures are reported together::

    collector = collect_errors("shut down keyboard")
    with collector.try_operation("turn off button LEDs"):
        output.turn_off_button_leds()
    with collector.try_operation("close transport"):
        transport.close()
    if collector.has_errors:
        logger.warning(collector.get_summary())
"""

import logging

from pydantic import ValidationError

from .base import KontrolError
from .config import ConfigFileInvalidError, ConfigValidationError
from .device import DeviceNotFoundError

logger = logging.getLogger(__name__)


def _field_name(error: dict) -> str:
    return ".".join(str(part) for part in error.get("loc", ("unknown",)))


def wrap_pydantic_error(error: Exception, file_path: str) -> KontrolError:
    """
    Convert a failed `model_validate_json` into a configuration error.

    Malformed JSON becomes ConfigFileInvalidError; well formed JSON with
    bad values becomes ConfigValidationError naming the field(s).
    """
    if not isinstance(error, ValidationError):
        return ConfigValidationError("unknown", None, str(error), file_path)

    errors = error.errors()
    json_errors = [err for err in errors if err.get("type") == "json_invalid"]
    if json_errors:
        return ConfigFileInvalidError(file_path, json_errors[0].get("msg", str(error)))

    if len(errors) == 1:
        only = errors[0]
        return ConfigValidationError(
            field=_field_name(only),
            value=only.get("input"),
            error_msg=only.get("msg", "validation failed"),
            file_path=file_path,
        )

    lines = [f"  - {_field_name(err)}: {err.get('msg', 'validation failed')}" for err in errors]
    return ConfigValidationError(
        field="multiple fields",
        value=None,
        error_msg=f"{len(errors)} validation errors:\n" + "\n".join(lines),
        file_path=file_path,
    )


def wrap_hid_open_error(error: Exception, vendor_id: int, product_id: int) -> KontrolError:
    """
    Convert a failed hidapi open into DeviceNotFoundError.

    hidapi only says "open failed", so absent devices, busy devices and
    missing permissions all map to the same error.
    """
    if isinstance(error, KontrolError):
        return error
    return DeviceNotFoundError(vendor_id, product_id, original_error=str(error))


def format_error_for_display(error: Exception) -> tuple[str, str | None]:
    """Return (message, recovery hint or None) for printing."""
    if isinstance(error, KontrolError):
        return error.user_message, error.recovery_hint
    return f"{type(error).__name__}: {error}", None


def collect_errors(operation: str) -> "ErrorCollector":
    """Start a best-effort batch named `operation`."""
    return ErrorCollector(operation)


class ErrorCollector:
    """Runs a series of steps, remembering which of them raised."""

    def __init__(self, operation: str):
        self.operation = operation
        self.errors: list[tuple[str, Exception]] = []
        self.success_count = 0

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    def try_operation(self, step: str) -> "_Step":
        """Context manager recording (and suppressing) an exception of `step`."""
        return _Step(self, step)

    def get_summary(self) -> str:
        if not self.errors:
            return f"{self.operation}: all {self.success_count} steps succeeded"

        total = self.error_count + self.success_count
        lines = [f"Failed {self.error_count} of {total} steps to {self.operation}:"]
        lines.extend(f"  - {step}: {error}" for step, error in self.errors)
        return "\n".join(lines)


class _Step:
    def __init__(self, collector: ErrorCollector, step: str):
        self._collector = collector
        self._step = step

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self._collector.success_count += 1
            return False

        if not issubclass(exc_type, Exception):
            return False

        logger.debug(f"{self._collector.operation}: {self._step} failed: {exc_val}", exc_info=True)
        self._collector.errors.append((self._step, exc_val))
        return True
