"""
Pixel Sprite Editor - Color Domain Model

Canonical RGBA8 color representation. Hex strings cross the boundary
between the editor core and the surrounding application in both
directions: the active color comes in as 6 or 8 hex digits, and the
eyedropper reports picked colors as hex.
"""

from typing import Optional, Tuple

HEX_DIGITS = set('0123456789abcdefABCDEF')


class Color:
    """Immutable RGBA color with uint8 channel storage.

    Internal storage: _r, _g, _b, _a (uint8 0-255)
    """

    __slots__ = ('_r', '_g', '_b', '_a')

    def __init__(self, r: int, g: int, b: int, a: int = 255):
        """Direct construction from RGBA uint8 values (0-255).

        Args:
            r: Red component (0-255)
            g: Green component (0-255)
            b: Blue component (0-255)
            a: Alpha component (0-255), opaque by default
        """
        # Clamp to valid uint8 range
        self._r = max(0, min(255, int(r)))
        self._g = max(0, min(255, int(g)))
        self._b = max(0, min(255, int(b)))
        self._a = max(0, min(255, int(a)))

    @property
    def r(self) -> int:
        """Red component (0-255) - READ ONLY"""
        return self._r

    @property
    def g(self) -> int:
        """Green component (0-255) - READ ONLY"""
        return self._g

    @property
    def b(self) -> int:
        """Blue component (0-255) - READ ONLY"""
        return self._b

    @property
    def a(self) -> int:
        """Alpha component (0-255) - READ ONLY"""
        return self._a

    # ========================================
    # Conversion Methods
    # ========================================

    def to_rgba(self) -> Tuple[int, int, int, int]:
        """Convert to an (r, g, b, a) tuple, the pixel write format"""
        return self._r, self._g, self._b, self._a

    def to_hex(self) -> str:
        """Convert to hex color string.

        Returns:
            '#rrggbbaa' when alpha < 255, '#rrggbb' otherwise
        """
        if self._a < 255:
            return f"#{self._r:02x}{self._g:02x}{self._b:02x}{self._a:02x}"
        return f"#{self._r:02x}{self._g:02x}{self._b:02x}"

    # ========================================
    # Static Factory Methods
    # ========================================

    @staticmethod
    def from_hex(hex_string: str) -> Optional['Color']:
        """Create Color from hex string: #RRGGBB, #RRGGBBAA, with or without #.

        Six digits mean fully opaque.

        Args:
            hex_string: Hex color string

        Returns:
            Color object if parse succeeds, None otherwise
        """
        if not isinstance(hex_string, str):
            return None

        # Strip leading # if present
        digits = hex_string.strip().lstrip('#')

        if len(digits) not in (6, 8) or not set(digits) <= HEX_DIGITS:
            return None

        r = int(digits[0:2], 16)
        g = int(digits[2:4], 16)
        b = int(digits[4:6], 16)
        a = int(digits[6:8], 16) if len(digits) == 8 else 255
        return Color(r, g, b, a)

    @staticmethod
    def from_rgba(rgba) -> 'Color':
        """Create Color from any 4-item sequence of channel values"""
        r, g, b, a = rgba
        return Color(r, g, b, a)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Color):
            return NotImplemented
        return self.to_rgba() == other.to_rgba()

    def __hash__(self) -> int:
        return hash(self.to_rgba())

    def __repr__(self) -> str:
        return f"Color({self._r}, {self._g}, {self._b}, {self._a})"

    def __str__(self) -> str:
        return self.to_hex()


def parse_hex_rgba(hex_string: str) -> Tuple[int, int, int, int]:
    """Parse a 6 or 8 digit hex color into an RGBA tuple

    Raises:
        ValueError: If the string is not a valid hex color
    """
    color = Color.from_hex(hex_string)
    if color is None:
        raise ValueError(f"Invalid hex color: {hex_string!r}")
    return color.to_rgba()


def rgba_to_hex(rgba) -> str:
    """Format an RGBA tuple the way the eyedropper reports it"""
    return Color.from_rgba(rgba).to_hex()
