"""
PageWindow Value Object

Immutable (skip, take) pair describing a sub-range of an ordered result set.
"""

from dataclasses import dataclass
from typing import Optional

from exceptions import ValidationError


@dataclass(frozen=True)
class PageWindow:
    """
    Immutable pagination window.

    Both bounds are optional. Negative values are rejected on construction,
    so a PageWindow that exists is always safe to hand to the store.
    """

    skip: Optional[int] = None
    take: Optional[int] = None

    def __post_init__(self):
        """Validate bounds."""
        invalid = {}
        if self.skip is not None and self.skip < 0:
            invalid["skip"] = self.skip
        if self.take is not None and self.take < 0:
            invalid["take"] = self.take
        if invalid:
            names = " and ".join(invalid)
            raise ValidationError(
                f"Pagination parameter {names} must be non-negative",
                invalid_fields=invalid
            )

    @property
    def offset(self) -> int:
        """Number of leading records to drop."""
        return self.skip or 0

    @property
    def limit(self) -> Optional[int]:
        """Maximum number of records to keep, or None for no limit."""
        return self.take

    @property
    def is_unbounded(self) -> bool:
        return self.offset == 0 and self.limit is None

    def __str__(self) -> str:
        return f"skip={self.skip} take={self.take}"
