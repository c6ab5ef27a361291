"""
Models Package

Exports the calculator's snapshot types, the database models and the db
instance for use throughout the application.
"""

from .base import db

from .ingredient import Ingredient, ingredients_from_list, default_ingredients
from .draft import RecipeDraft, default_draft
from .recipe import Recipe, RecipeIngredient

__all__ = [
    'db',
    'Ingredient',
    'ingredients_from_list',
    'default_ingredients',
    'RecipeDraft',
    'default_draft',
    'Recipe',
    'RecipeIngredient',
]
