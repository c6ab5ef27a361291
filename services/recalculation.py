"""
Recalculation Service

Pure functions that apply one edit to an ingredient snapshot and return the
new snapshot with amounts and percentages consistent again.

Every edit names the field that is now authoritative; derived fields are
recomputed from it and never the other way round. When an edit does not
apply (unknown id, negative or non-finite input, or a result too large to
represent) the input tuple itself is returned, so callers can detect a no-op with ``is``.
"""

import logging
import math
from dataclasses import replace

from constants import FLOUR_PERCENTAGE, DERIVED_PLACES, SCALED_PLACES
from models.ingredient import Ingredient
from utils.numbers import is_finite_number
from .calculations import (
    calculate_total_weight,
    get_total_flour_weight,
    percentage_of,
    amount_for,
    round_to,
)

logger = logging.getLogger(__name__)


def _index_of(ingredients, ingredient_id):
    for index, ing in enumerate(ingredients):
        if ing.id == ingredient_id:
            return index
    return -1


def _is_valid_quantity(value):
    return is_finite_number(value) and value >= 0


def _rederive(ingredients, total_flour):
    """Non-flour amounts from percentages, or None if any amount overflows."""
    result = []
    for ing in ingredients:
        if ing.is_flour:
            result.append(ing)
            continue
        amount = amount_for(ing.percentage, total_flour, DERIVED_PLACES)
        if amount is None:
            return None
        result.append(replace(ing, amount=amount))
    return tuple(result)


def recalculate(ingredients):
    """
    Re-derive every non-flour amount from its percentage.

    With no flour weight, or amounts too large to represent, the snapshot
    is returned unchanged.
    """
    ingredients = tuple(ingredients)
    total_flour = get_total_flour_weight(ingredients)
    if total_flour <= 0 or not math.isfinite(total_flour):
        return ingredients

    derived = _rederive(ingredients, total_flour)
    return ingredients if derived is None else derived


def update_amount(ingredients, ingredient_id, amount):
    """
    Set the amount of one ingredient.

    Flour: the other ingredients keep their percentages and their amounts
    follow the new flour total. Non-flour: only this ingredient's
    percentage is recomputed.
    """
    ingredients = tuple(ingredients)
    index = _index_of(ingredients, ingredient_id)
    if index == -1 or not _is_valid_quantity(amount):
        return ingredients

    edited = replace(ingredients[index], amount=float(amount))
    updated = ingredients[:index] + (edited,) + ingredients[index + 1:]

    total_flour = get_total_flour_weight(updated)
    if not math.isfinite(total_flour):
        return ingredients
    if total_flour <= 0:
        return updated

    if edited.is_flour:
        derived = _rederive(updated, total_flour)
        return ingredients if derived is None else derived

    percentage = percentage_of(edited.amount, total_flour, DERIVED_PLACES)
    if percentage is None:
        return ingredients
    return updated[:index] + (replace(edited, percentage=percentage),) + updated[index + 1:]


def update_percentage(ingredients, ingredient_id, percentage):
    """
    Set the baker's percentage of a non-flour ingredient and derive its amount.

    Flour is always 100%, so editing a flour ingredient's percentage is a no-op.
    """
    ingredients = tuple(ingredients)
    index = _index_of(ingredients, ingredient_id)
    if index == -1 or not _is_valid_quantity(percentage):
        return ingredients

    target = ingredients[index]
    if target.is_flour:
        return ingredients

    amount = amount_for(percentage, get_total_flour_weight(ingredients), DERIVED_PLACES)
    if amount is None:
        return ingredients

    edited = replace(target, percentage=float(percentage), amount=amount)
    return ingredients[:index] + (edited,) + ingredients[index + 1:]


def toggle_flour(ingredients, ingredient_id):
    """
    Switch an ingredient between the flour and non-flour roles.

    The toggled ingredient keeps its amount. Every other non-flour ingredient
    keeps its percentage and gets a new amount from the new flour total, so
    the recipe's proportions survive the change. No replacement flour is
    promoted here, even when the last flour is toggled off.
    """
    ingredients = tuple(ingredients)
    index = _index_of(ingredients, ingredient_id)
    if index == -1:
        return ingredients

    flipped = tuple(
        replace(ing, is_flour=not ing.is_flour) if i == index else ing
        for i, ing in enumerate(ingredients)
    )
    total_flour = get_total_flour_weight(flipped)
    if not math.isfinite(total_flour):
        return ingredients

    result = []
    for i, ing in enumerate(flipped):
        if ing.is_flour:
            result.append(replace(ing, percentage=FLOUR_PERCENTAGE))
        elif i == index:
            percentage = percentage_of(ing.amount, total_flour, DERIVED_PLACES)
            if percentage is None and total_flour > 0:
                return ingredients
            result.append(ing if percentage is None else replace(ing, percentage=percentage))
        else:
            amount = amount_for(ing.percentage, total_flour, DERIVED_PLACES)
            if amount is None:
                return ingredients
            result.append(replace(ing, amount=amount))

    logger.debug("Toggled ingredient %s to %s; flour total now %.2f g",
                 ingredient_id, 'flour' if flipped[index].is_flour else 'non-flour', total_flour)
    return tuple(result)


def set_total_weight(ingredients, new_total):
    """
    Scale every amount so the recipe weighs new_total grams.

    Amounts are rounded to one decimal. Percentages are untouched because
    scaling keeps every ratio to flour. Rejected (no-op) for a negative or
    non-finite target and for a recipe that currently weighs nothing.
    """
    ingredients = tuple(ingredients)
    if not _is_valid_quantity(new_total):
        return ingredients

    current_total = calculate_total_weight(ingredients)
    if current_total == 0 or not math.isfinite(current_total):
        return ingredients

    ratio = new_total / current_total
    scaled = [ing.amount * ratio for ing in ingredients]
    if not all(math.isfinite(amount) for amount in scaled):
        return ingredients
    return tuple(
        replace(ing, amount=round_to(amount, SCALED_PLACES))
        for ing, amount in zip(ingredients, scaled)
    )


def remove_ingredient(ingredients, ingredient_id):
    """
    Remove an ingredient.

    If that removes the last flour while other ingredients remain, the first
    remaining ingredient becomes flour and the other amounts are recomputed.
    """
    ingredients = tuple(ingredients)
    index = _index_of(ingredients, ingredient_id)
    if index == -1:
        return ingredients

    remaining = ingredients[:index] + ingredients[index + 1:]
    if not remaining or any(ing.is_flour for ing in remaining):
        return remaining

    promoted = (replace(remaining[0], is_flour=True, percentage=FLOUR_PERCENTAGE),) + remaining[1:]
    total_flour = promoted[0].amount
    derived = promoted if total_flour <= 0 else _rederive(promoted, total_flour)
    if derived is None:
        return ingredients
    logger.info("Removed last flour; promoted '%s' to flour", promoted[0].name)
    return derived


def reorder_ingredients(ingredients, dragged_id, target_id):
    """Move the dragged ingredient into the target's position."""
    ingredients = tuple(ingredients)
    dragged_index = _index_of(ingredients, dragged_id)
    target_index = _index_of(ingredients, target_id)
    if dragged_index == -1 or target_index == -1 or dragged_index == target_index:
        return ingredients

    reordered = list(ingredients)
    dragged = reordered.pop(dragged_index)
    reordered.insert(target_index, dragged)
    return tuple(reordered)


def add_ingredient(ingredients, new_id, name=''):
    """Append a blank non-flour ingredient with the given id."""
    ingredients = tuple(ingredients)
    if _index_of(ingredients, new_id) != -1:
        return ingredients
    return ingredients + (Ingredient(id=new_id, name=name),)


def update_name(ingredients, ingredient_id, name):
    ingredients = tuple(ingredients)
    index = _index_of(ingredients, ingredient_id)
    if index == -1 or ingredients[index].name == name:
        return ingredients
    return ingredients[:index] + (replace(ingredients[index], name=name),) + ingredients[index + 1:]
