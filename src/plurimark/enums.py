"""Enumerations for plurimark type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum

__all__ = ["PluralCategory"]


class PluralCategory(StrEnum):
    """CLDR plural category.

    StrEnum provides automatic string conversion: str(PluralCategory.ONE) == "one"

    Declaration order is the CLDR ordinal order. Dispatch code and category
    listings are always produced in this order, so it must not change.
    """

    ZERO = "zero"
    ONE = "one"
    TWO = "two"
    FEW = "few"
    MANY = "many"
    OTHER = "other"

    @property
    def ordinal(self) -> int:
        """Position in CLDR order (ZERO=0 ... OTHER=5)."""
        return _ORDINALS[self]

    @property
    def pascal_name(self) -> str:
        """Name as written in emitted code: ``One``, ``Few``, ``Other``."""
        return self.value.capitalize()


_ORDINALS: dict[PluralCategory, int] = {
    category: index for index, category in enumerate(PluralCategory)
}
