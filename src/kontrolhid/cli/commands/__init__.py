"""CLI commands for kontrolhid."""

from .config import config
from .display import display
from .monitor import monitor

__all__ = ["config", "display", "monitor"]
