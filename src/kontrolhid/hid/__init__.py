"""HID transport and task scheduling."""

from .scheduler import TaskScheduler
from .transport import HidapiTransport

__all__ = ["HidapiTransport", "TaskScheduler"]
