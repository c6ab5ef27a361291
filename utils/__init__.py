# Utility modules for the baker's percentage calculator
from .numbers import is_finite_number, safe_float, safe_int, parse_strict_float, parse_bool
from .sanitizer import (
    sanitize_text, sanitize_recipe_title, sanitize_ingredient_name,
    sanitize_notes, sanitize_description
)
