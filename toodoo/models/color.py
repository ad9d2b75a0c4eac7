"""Color value and hex encoding for category colors."""

import re
from pydantic import BaseModel, Field

_HEX_PATTERN = re.compile(r"^#?[0-9A-Fa-f]{6}$")


class Color(BaseModel):
    """An opaque RGB color."""

    red: int = Field(..., ge=0, le=255)
    green: int = Field(..., ge=0, le=255)
    blue: int = Field(..., ge=0, le=255)

    class Config:
        """Pydantic configuration."""
        frozen = True


def is_valid_hex(value: str) -> bool:
    return bool(value) and _HEX_PATTERN.match(value) is not None


def decode_color(hex_string: str) -> Color:
    """Decode a six-digit hex string (optional leading '#') into a Color.

    Raises:
        ValueError: If the string is not six hex digits
    """
    if not is_valid_hex(hex_string):
        raise ValueError(f"Invalid color encoding: {hex_string!r}")
    digits = hex_string.lstrip("#")
    return Color(
        red=int(digits[0:2], 16),
        green=int(digits[2:4], 16),
        blue=int(digits[4:6], 16),
    )


def encode_color(color: Color) -> str:
    """Encode a Color as six uppercase hex digits without a leading '#'."""
    return f"{color.red:02X}{color.green:02X}{color.blue:02X}"


def canonical_hex(hex_string: str) -> str:
    """Normalize a hex encoding to the stored form (uppercase, no '#')."""
    return encode_color(decode_color(hex_string))
