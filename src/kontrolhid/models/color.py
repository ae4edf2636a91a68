"""Key LED colors."""

from pydantic import BaseModel, ConfigDict, Field


class Color(BaseModel):
    """8-bit RGB color.

    Applications work with ordinary 0-255 channels. The key light guide
    takes 7-bit channels; `to_7bit()` does the conversion when a color is
    stored in the key LED vector.
    """

    model_config = ConfigDict(frozen=True)

    r: int = Field(ge=0, le=255, description="Red (0-255)")
    g: int = Field(ge=0, le=255, description="Green (0-255)")
    b: int = Field(ge=0, le=255, description="Blue (0-255)")

    @classmethod
    def off(cls) -> "Color":
        return cls(r=0, g=0, b=0)

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        """Parse '#RRGGBB' (the '#' is optional)."""
        digits = value.removeprefix("#")
        if len(digits) != 6:
            raise ValueError(f"Expected #RRGGBB, got '{value}'")
        return cls(r=int(digits[0:2], 16), g=int(digits[2:4], 16), b=int(digits[4:6], 16))

    def to_rgb_tuple(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def to_7bit(self) -> tuple[int, int, int]:
        """Channels for the key LED report.

        Example:
            >>> Color(r=255, g=128, b=0).to_7bit()
            (127, 64, 0)
        """
        return (self.r >> 1, self.g >> 1, self.b >> 1)

    def to_hex(self) -> str:
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"
