"""Kontrol S-series device metadata."""

from dataclasses import dataclass

from kontrolhid.models import VENDOR_ID, KontrolConfig, KontrolModel


@dataclass
class KontrolInfo:
    """Metadata about a connected keyboard."""
    model: KontrolModel
    vendor_id: int
    product_id: int

    @property
    def num_keys(self) -> int:
        return self.model.num_keys

    @property
    def key_led_size(self) -> int:
        """Payload size of the key LED report (3 bytes per key)."""
        return self.model.num_keys * 3

    @property
    def display_name(self) -> str:
        return self.model.display_name

    @classmethod
    def from_model(cls, model: KontrolModel) -> "KontrolInfo":
        return cls(model=model, vendor_id=VENDOR_ID, product_id=model.product_id)

    @classmethod
    def from_config(cls, config: KontrolConfig) -> "KontrolInfo":
        return cls(
            model=config.model,
            vendor_id=config.vendor_id,
            product_id=config.resolved_product_id,
        )
