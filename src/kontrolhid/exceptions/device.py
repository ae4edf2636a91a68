"""HID device exceptions.

This module defines exceptions for device errors:
- DeviceError: Base class for device errors
- DeviceNotFoundError: Device could not be opened
- DeviceWriteError: An output report could not be written
"""

from .base import KontrolError


class DeviceError(KontrolError):
    """HID device initialization or operation failed."""

    def __init__(
        self,
        user_message: str,
        vendor_id: int | None = None,
        product_id: int | None = None,
        **kwargs
    ):
        """
        Initialize device error.

        Args:
            user_message: User-friendly error message
            vendor_id: USB vendor id of the device (if applicable)
            product_id: USB product id of the device (if applicable)
        """
        super().__init__(user_message, **kwargs)
        self.vendor_id = vendor_id
        self.product_id = product_id


class DeviceNotFoundError(DeviceError):
    """The keyboard could not be opened over HID."""

    def __init__(self, vendor_id: int, product_id: int, original_error: str | None = None):
        """
        Initialize device-not-found error.

        Args:
            vendor_id: USB vendor id that was requested
            product_id: USB product id that was requested
            original_error: The error message reported by hidapi
        """
        user_msg = f"Could not open USB connection to {vendor_id:04x}:{product_id:04x}."
        tech_msg = user_msg
        if original_error:
            tech_msg += f"\nOriginal error: {original_error}"

        recovery = (
            "Check that the keyboard is plugged in and powered, that no other "
            "application (e.g. Komplete Kontrol) holds the device, and that your "
            "user has permission to access hidraw devices. "
            "Run 'kontrolhid config show' to check the configured model."
        )

        super().__init__(
            user_message=user_msg,
            technical_message=tech_msg,
            vendor_id=vendor_id,
            product_id=product_id,
            recoverable=True,
            recovery_hint=recovery,
        )


class DeviceWriteError(DeviceError):
    """Writing an output report to the device failed."""

    def __init__(self, report_id: int, original_error: str | None = None):
        """
        Initialize device write error.

        Args:
            report_id: The output report that failed
            original_error: The error message reported by hidapi
        """
        user_msg = f"Failed to write output report 0x{report_id:02X} to the keyboard."
        tech_msg = user_msg
        if original_error:
            tech_msg += f"\nOriginal error: {original_error}"

        super().__init__(
            user_message=user_msg,
            technical_message=tech_msg,
            recoverable=True,
            recovery_hint="The keyboard may have been disconnected. Reconnect it and restart.",
        )
        self.report_id = report_id
