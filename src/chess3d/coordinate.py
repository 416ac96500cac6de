"""
A cell of the cubic board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

# Board is always 8x8x8. Kept as a constant so bounds checks read the same everywhere
BOARD_DIMENSIONS = (8, 8, 8)

# Only these exact characters decode: 'A'-'H' for x, '1'-'8' for y and z
FILE_LETTERS = {chr(ord("A") + i): i + 1 for i in range(BOARD_DIMENSIONS[0])}
AXIS_DIGITS = {str(i): i for i in range(1, max(BOARD_DIMENSIONS) + 1)}


@dataclass(frozen=True)
class Coordinate:
    x: int
    y: int
    z: int

    @classmethod
    def from_key(cls, key: str) -> Optional[Coordinate]:
        """Key notation: '1,1,1' - '8,8,8'. Returns None for anything malformed or off the board."""
        parts = key.split(",")
        if len(parts) != 3:
            return None
        axes = [AXIS_DIGITS.get(part) for part in parts]
        if None in axes:
            return None
        coordinate = cls(*axes)
        return coordinate if coordinate.is_within_bounds() else None

    def to_key(self) -> str:
        return f"{self.x},{self.y},{self.z}"

    @classmethod
    def from_notation(cls, notation: str) -> Optional[Coordinate]:
        """
        Algebraic-style notation: 'A11' - 'H88'.
        ---

        The letter encodes the x-axis, followed by a digit for y and a digit for z.
        Returns None for anything that is not exactly a letter A-H and two digits 1-8.
        """
        if len(notation) != 3:
            return None
        x = FILE_LETTERS.get(notation[0].upper())
        y = AXIS_DIGITS.get(notation[1])
        z = AXIS_DIGITS.get(notation[2])
        if x is None or y is None or z is None:
            return None
        coordinate = cls(x, y, z)
        return coordinate if coordinate.is_within_bounds() else None

    def to_notation(self) -> str:
        return f"{chr(self.x + ord('A') - 1)}{self.y}{self.z}"

    @classmethod
    def parse(cls, text: str) -> Optional[Coordinate]:
        """Text typed by a user can use either notation"""
        text = text.strip()
        if "," in text:
            return cls.from_key(text)
        return cls.from_notation(text)

    def is_within_bounds(self) -> bool:
        return (
            (1 <= self.x <= BOARD_DIMENSIONS[0])
            and (1 <= self.y <= BOARD_DIMENSIONS[1])
            and (1 <= self.z <= BOARD_DIMENSIONS[2])
        )

    def shifted(self, dx: int, dy: int, dz: int) -> Coordinate:
        return Coordinate(self.x + dx, self.y + dy, self.z + dz)
