"""Distance units supported by the ruler."""

from typing import Union
from enum import Enum


class Unit(Enum):
    """Enumeration for display units."""

    KILOMETERS = "km"
    MILES = "mi"
    NAUTICAL_MILES = "nmi"

    def __str__(self) -> str:
        return self.value

    @property
    def factor(self) -> float:
        """Multiplicative conversion factor from kilometers."""
        return _FACTORS[self]

    @classmethod
    def parse(cls, value: Union["Unit", str]) -> "Unit":
        """
        Normalize a unit given as a Unit or as its symbol.

        Args:
            value: Unit member or one of "km", "mi", "nmi"

        Returns:
            The matching Unit

        Raises:
            ValueError: If value is not a recognized unit
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            choices = ", ".join(unit.value for unit in cls)
            raise ValueError(f"Unknown unit {value!r} (expected one of: {choices})")


_FACTORS = {
    Unit.KILOMETERS: 1.0,
    Unit.MILES: 0.621371,
    Unit.NAUTICAL_MILES: 0.539957,
}
