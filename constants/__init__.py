"""
Constants Package

Shared constants for the calculator, the share codec and input validation.
"""

from .defaults import (
    DEFAULT_TITLE,
    DEFAULT_DESCRIPTION,
    DEFAULT_INGREDIENTS,
    FLOUR_PERCENTAGE,
    DERIVED_PLACES,
    SCALED_PLACES,
)

from .encoding import (
    FIELD_SEPARATOR,
    ENTRY_SEPARATOR,
    NOTES_SEPARATOR,
    FLOUR_FLAG,
    OTHER_FLAG,
    NAME_ESCAPES,
    NOTES_ESCAPES,
    FRAGMENT_PREFIX,
)

from .validation import (
    MAX_LENGTHS,
    MAX_WEIGHT,
    MAX_PERCENTAGE,
    MAX_INGREDIENTS,
)
