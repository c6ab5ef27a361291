"""
Ingredient Model

The immutable ingredient record the calculator works on. Flour ingredients
carry an authoritative amount in grams; every other ingredient carries an
authoritative baker's percentage and its amount is derived from the total
flour weight.
"""

from dataclasses import dataclass, asdict

from constants import DEFAULT_INGREDIENTS, FLOUR_PERCENTAGE, MAX_WEIGHT, MAX_PERCENTAGE
from utils.numbers import safe_float, safe_int, parse_bool
from utils.sanitizer import sanitize_ingredient_name


@dataclass(frozen=True)
class Ingredient:
    """One row of a recipe. Instances are never mutated; edits build new ones."""
    id: int
    name: str = ''
    is_flour: bool = False
    amount: float = 0.0
    percentage: float = 0.0

    def to_dict(self):
        return asdict(self)

    @classmethod
    def from_dict(cls, data, default_id=0):
        """
        Build an ingredient from a JSON-style mapping.

        Numbers are parsed leniently (bad values become 0) and clamped to
        the allowed range. Flour ingredients always get a percentage of 100.

        Raises:
            ValueError: if data is not a mapping
        """
        if not isinstance(data, dict):
            raise ValueError('Ingredient must be an object')

        is_flour = parse_bool(data.get('is_flour', False))
        amount = safe_float(data.get('amount'), default=0.0, min_val=0.0, max_val=MAX_WEIGHT)
        if is_flour:
            percentage = FLOUR_PERCENTAGE
        else:
            percentage = safe_float(data.get('percentage'), default=0.0,
                                    min_val=0.0, max_val=MAX_PERCENTAGE)

        return cls(
            id=safe_int(data.get('id'), default=default_id),
            name=sanitize_ingredient_name(data.get('name', '')),
            is_flour=is_flour,
            amount=amount,
            percentage=percentage,
        )


def ingredients_from_list(items):
    """
    Convert a JSON list into an ingredient snapshot (a tuple).

    Missing ids are filled in positionally starting at 1.

    Raises:
        ValueError: if items is not a list or an entry is not an object
    """
    if not isinstance(items, list):
        raise ValueError('Ingredients must be a list')
    return tuple(Ingredient.from_dict(item, default_id=index + 1)
                 for index, item in enumerate(items))


def default_ingredients():
    """The starting ingredient snapshot, ids 1..n."""
    return tuple(
        Ingredient(id=index + 1, name=name, is_flour=is_flour,
                   amount=amount, percentage=percentage)
        for index, (name, is_flour, amount, percentage) in enumerate(DEFAULT_INGREDIENTS)
    )
