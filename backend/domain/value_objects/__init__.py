"""
Domain Value Objects

Value objects are immutable types that represent descriptive aspects of the domain.
They have no conceptual identity and are compared by their values, not by ID.

Examples:
- PageWindow: Validated (skip, take) pagination window
"""

from .page_window import PageWindow

__all__ = ["PageWindow"]
