"""
Recipe Storage Service

Saves, loads, updates and deletes recipes through Flask-SQLAlchemy.
Ingredients are stored as flat (name, is_flour, amount, percentage,
sort_order) rows; ids used by the editor are local and reassigned on load.

All functions must run inside a Flask application context.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from models import db, Recipe, RecipeIngredient, Ingredient, RecipeDraft
from .calculations import calculate_total_weight

logger = logging.getLogger(__name__)


class RecipeStoreError(Exception):
    """Raised when the database rejects a recipe operation."""
    pass


def ingredient_rows(ingredients):
    """Flatten an ingredient snapshot into storable rows, in display order."""
    return [
        {
            'name': ing.name,
            'is_flour': ing.is_flour,
            'amount': ing.amount,
            'percentage': ing.percentage,
            'sort_order': index,
        }
        for index, ing in enumerate(ingredients)
    ]


def recipe_to_draft(recipe):
    """Load a stored recipe into an editor draft; ingredient ids become 1..n."""
    rows = sorted(recipe.ingredients, key=lambda row: row.sort_order or 0)
    ingredients = tuple(
        Ingredient(
            id=index + 1,
            name=row.name or '',
            is_flour=bool(row.is_flour),
            amount=float(row.amount or 0),
            percentage=float(row.percentage or 0),
        )
        for index, row in enumerate(rows)
    )
    return RecipeDraft(
        title=recipe.title,
        description=recipe.description or '',
        notes=recipe.notes or '',
        ingredients=ingredients,
        is_public=bool(recipe.is_public),
    )


def _replace_ingredients(recipe, ingredients):
    recipe.ingredients = [RecipeIngredient(**row) for row in ingredient_rows(ingredients)]
    recipe.total_weight = round(calculate_total_weight(ingredients))


def _commit(action):
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception("Error trying to %s recipe", action)
        raise RecipeStoreError(f"Failed to {action} recipe") from e


def list_recipes():
    """All saved recipes, most recently updated first."""
    return Recipe.query.order_by(Recipe.updated_at.desc(), Recipe.id.desc()).all()


def get_recipe(recipe_id):
    return db.session.get(Recipe, recipe_id)


def save_recipe(title, description, notes, ingredients, is_public=False):
    """Insert a new recipe with its ingredients and return it."""
    recipe = Recipe(
        title=title,
        description=description,
        notes=notes,
        is_public=bool(is_public),
    )
    _replace_ingredients(recipe, ingredients)
    db.session.add(recipe)
    _commit('save')
    logger.info("Saved recipe %s '%s' with %d ingredients", recipe.id, recipe.title, len(ingredients))
    return recipe


def update_recipe(recipe_id, title=None, description=None, notes=None,
                  ingredients=None, is_public=None):
    """
    Update the provided fields of a saved recipe.

    Passing ingredients replaces the whole ingredient list and refreshes
    total_weight.

    Returns:
        The updated Recipe, or None if no recipe has that id
    """
    recipe = get_recipe(recipe_id)
    if recipe is None:
        return None

    if title is not None:
        recipe.title = title
    if description is not None:
        recipe.description = description
    if notes is not None:
        recipe.notes = notes
    if is_public is not None:
        recipe.is_public = bool(is_public)
    if ingredients is not None:
        _replace_ingredients(recipe, ingredients)

    _commit('update')
    return recipe


def delete_recipe(recipe_id):
    """Delete a recipe and its ingredients. Returns False if it did not exist."""
    recipe = get_recipe(recipe_id)
    if recipe is None:
        return False
    db.session.delete(recipe)
    _commit('delete')
    logger.info("Deleted recipe %s", recipe_id)
    return True
