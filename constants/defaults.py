"""
Default Recipe

The recipe a fresh editing session starts with.
"""

DEFAULT_TITLE = 'Neapolitan Pizza'
DEFAULT_DESCRIPTION = 'Default recipe'

# (name, is_flour, amount in grams, baker's percentage)
DEFAULT_INGREDIENTS = (
    ('Flour', True, 1000.0, 100.0),
    ('Water', False, 600.0, 60.0),
    ('Salt', False, 30.0, 3.0),
    ('Yeast', False, 2.0, 0.2),
)

# Percentage every flour ingredient carries
FLOUR_PERCENTAGE = 100.0

# Rounding applied when writing a derived field
DERIVED_PLACES = 2
SCALED_PLACES = 1
