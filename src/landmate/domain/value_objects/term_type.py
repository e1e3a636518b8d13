"""Term type value object"""

from enum import StrEnum
from typing import Optional


class TermType(StrEnum):
    """Term types that operational milestones act on; any other value is free-form"""

    CONSTRUCTION = "Construction"
    OPERATIONS = "Operations"

    @classmethod
    def is_operational(cls, term_type: Optional[str]) -> bool:
        """Check if a raw term type is Construction or Operations"""
        return term_type in (cls.CONSTRUCTION.value, cls.OPERATIONS.value)
