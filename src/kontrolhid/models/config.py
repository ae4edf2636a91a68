"""Driver configuration model."""

from pathlib import Path

from pydantic import BaseModel, Field

from kontrolhid.utils.persistence import PydanticPersistence

from .enums import VENDOR_ID, KontrolModel

DEFAULT_CONFIG_PATH = Path.home() / ".kontrolhid" / "config.json"


class KontrolConfig(BaseModel):
    """Keyboard connection and driver settings."""

    model: KontrolModel = Field(
        default=KontrolModel.S49,
        description="Keyboard model (S25, S49, S61 or S88)",
    )
    vendor_id: int = Field(
        default=VENDOR_ID, ge=0, le=0xFFFF, description="USB vendor id"
    )
    product_id: int | None = Field(
        default=None,
        ge=0,
        le=0xFFFF,
        description="USB product id (None = derived from the model)",
    )
    read_timeout_ms: int = Field(
        default=100,
        gt=0,
        description="Timeout of one blocking HID read in the reader thread (milliseconds)",
    )
    input_report_size: int = Field(
        default=64,
        ge=38,
        description="Maximum size of one input report including the report id",
    )
    flush_interval: float = Field(
        default=0.05,
        gt=0,
        description="How often the CLI flushes display and LED state (seconds)",
    )

    @property
    def resolved_product_id(self) -> int:
        """Configured product id, or the one of the selected model."""
        if self.product_id is not None:
            return self.product_id
        return self.model.product_id

    @classmethod
    def load_or_default(cls, path: Path | None = None) -> "KontrolConfig":
        """
        Load config from file or return default.

        Args:
            path: Path to config file. If None, uses ~/.kontrolhid/config.json.

        Raises:
            ConfigFileInvalidError: If config file has invalid JSON syntax
            ConfigValidationError: If config values fail validation
        """
        if path is None:
            path = DEFAULT_CONFIG_PATH
        return PydanticPersistence.load_json_or_default(path, cls)

    def save(self, path: Path | None = None) -> None:
        """Save config to file."""
        if path is None:
            path = DEFAULT_CONFIG_PATH
        PydanticPersistence.save_json(self, path)
