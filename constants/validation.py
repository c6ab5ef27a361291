"""
Validation Constants

Limits applied to user input before it reaches the calculator or the
database.
"""

# Maximum field lengths for stored text
MAX_LENGTHS = {
    'recipe_title': 200,
    'recipe_description': 2000,
    'ingredient_name': 100,
    'notes': 10000,
}

# Upper bound for any single weight in grams (10 tonnes is plenty for a bakery)
MAX_WEIGHT = 10_000_000.0

# Upper bound for a baker's percentage
MAX_PERCENTAGE = 10_000.0

# Maximum number of ingredients accepted in one recipe
MAX_INGREDIENTS = 200
