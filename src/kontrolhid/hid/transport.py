"""hidapi transport for one connected keyboard."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

import hid

from kontrolhid.exceptions import DeviceWriteError, wrap_hid_open_error

if TYPE_CHECKING:
    from kontrolhid.devices.protocols import InputCallback

logger = logging.getLogger(__name__)


class HidapiTransport:
    """
    Raw HID handle with a background reader thread.

    Output reports are written under a lock so the application loop and
    shutdown never interleave writes. Input reports are read by a daemon
    thread and handed to the input callback as (report_id, payload).
    """

    def __init__(
        self,
        vendor_id: int,
        product_id: int,
        read_size: int = 64,
        read_timeout_ms: int = 100,
    ):
        """
        Initialize transport (does not open the device).

        Args:
            vendor_id: USB vendor id
            product_id: USB product id
            read_size: Maximum input report size including the report id
            read_timeout_ms: Timeout of one blocking read; bounds how long
                             close() waits for the reader thread
        """
        self.vendor_id = vendor_id
        self.product_id = product_id
        self._read_size = read_size
        self._read_timeout_ms = read_timeout_ms

        self._device: hid.device | None = None
        self._write_lock = threading.Lock()
        self._callback: InputCallback | None = None
        self._running = False
        self._reader_thread: threading.Thread | None = None

    def open(self) -> None:
        """
        Open the device and start the reader thread.

        Raises:
            DeviceNotFoundError: If the device is absent or cannot be opened
        """
        if self._device is not None:
            logger.warning("HID transport already open")
            return

        device = hid.device()
        try:
            device.open(self.vendor_id, self.product_id)
        except OSError as e:
            raise wrap_hid_open_error(e, self.vendor_id, self.product_id) from e

        self._device = device
        logger.info(
            f"Opened HID device {self.vendor_id:04X}:{self.product_id:04X} "
            f"({self.product_name or 'unknown product'})"
        )

        self._running = True
        self._reader_thread = threading.Thread(
            target=self._read_loop, name="kontrolhid-reader", daemon=True
        )
        self._reader_thread.start()

    @property
    def is_open(self) -> bool:
        return self._device is not None

    @property
    def product_name(self) -> str | None:
        if self._device is None:
            return None
        try:
            return self._device.get_product_string()
        except (OSError, ValueError):
            return None

    @property
    def serial_number(self) -> str | None:
        if self._device is None:
            return None
        try:
            return self._device.get_serial_number_string()
        except (OSError, ValueError):
            return None

    def set_input_callback(self, callback: InputCallback | None) -> None:
        """Register the function receiving (report_id, payload) of each input report."""
        self._callback = callback

    def send_output_report(self, report_id: int, payload: bytes) -> bool:
        """
        Write one output report.

        Returns:
            True if written, False if closed or the write failed
        """
        with self._write_lock:
            if self._device is None:
                return False
            try:
                written = self._device.write(bytes((report_id,)) + bytes(payload))
            except (OSError, ValueError) as e:
                logger.error(DeviceWriteError(report_id, original_error=str(e)).technical_message)
                return False

        if written < 0:
            logger.warning(f"HID write of report 0x{report_id:02X} returned {written}")
            return False
        return True

    def close(self) -> None:
        """Stop the reader and release the handle. Safe to call more than once."""
        self._running = False

        reader = self._reader_thread
        if reader and reader.is_alive() and reader is not threading.current_thread():
            reader.join(timeout=max(1.0, 2 * self._read_timeout_ms / 1000))
        self._reader_thread = None

        with self._write_lock:
            device = self._device
            self._device = None
        if device is None:
            return

        try:
            device.close()
        except (OSError, ValueError) as e:
            logger.error(f"Error closing HID device: {e}")
        logger.info(f"Closed HID device {self.vendor_id:04X}:{self.product_id:04X}")

    def _read_loop(self) -> None:
        logger.debug("HID reader started")
        while self._running:
            device = self._device
            if device is None:
                break
            try:
                data = device.read(self._read_size, self._read_timeout_ms)
            except (OSError, ValueError) as e:
                if self._running:
                    logger.error(f"Error reading HID report: {e}")
                break

            if not data:
                continue

            callback = self._callback
            if callback is None:
                continue
            try:
                callback(data[0], bytes(data[1:]))
            except Exception as e:
                logger.error(f"Error handling HID report 0x{data[0]:02X}: {e}", exc_info=True)

        logger.debug("HID reader stopped")

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
