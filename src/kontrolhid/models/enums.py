"""Enumerations for the Kontrol keyboard family."""

from enum import Enum

# Native Instruments
VENDOR_ID = 0x17CC


class KontrolModel(str, Enum):
    """First generation Komplete Kontrol S-series models."""

    S25 = "S25"
    S49 = "S49"
    S61 = "S61"
    S88 = "S88"

    @property
    def num_keys(self) -> int:
        """Number of keys (and key LEDs) on the keyboard."""
        return {
            KontrolModel.S25: 25,
            KontrolModel.S49: 49,
            KontrolModel.S61: 61,
            KontrolModel.S88: 88,
        }[self]

    @property
    def product_id(self) -> int:
        """USB product id."""
        return {
            KontrolModel.S25: 0x1340,
            KontrolModel.S49: 0x1350,
            KontrolModel.S61: 0x1360,
            KontrolModel.S88: 0x1410,
        }[self]

    @property
    def display_name(self) -> str:
        """Human-readable name."""
        return f"Komplete Kontrol {self.value}"

    @classmethod
    def from_product_id(cls, product_id: int) -> "KontrolModel | None":
        """Look up the model for a USB product id."""
        for model in cls:
            if model.product_id == product_id:
                return model
        return None
