"""
Services Package

Business logic for the baker's percentage calculator.
"""

from .calculations import (
    calculate_total_weight,
    get_total_flour_weight,
    get_flour_count,
    round_to,
)

from .recalculation import (
    recalculate,
    update_amount,
    update_percentage,
    toggle_flour,
    set_total_weight,
    remove_ingredient,
    reorder_ingredients,
    add_ingredient,
    update_name,
)

from .codec import (
    encode_recipe,
    decode_recipe,
    build_share_fragment,
)

from .editor import (
    IdSequence,
    RecipeEditor,
)

from .recipes import (
    RecipeStoreError,
    ingredient_rows,
    recipe_to_draft,
    list_recipes,
    get_recipe,
    save_recipe,
    update_recipe,
    delete_recipe,
)

__all__ = [
    # Calculations
    'calculate_total_weight',
    'get_total_flour_weight',
    'get_flour_count',
    'round_to',
    # Recalculation
    'recalculate',
    'update_amount',
    'update_percentage',
    'toggle_flour',
    'set_total_weight',
    'remove_ingredient',
    'reorder_ingredients',
    'add_ingredient',
    'update_name',
    # Share codec
    'encode_recipe',
    'decode_recipe',
    'build_share_fragment',
    # Editor
    'IdSequence',
    'RecipeEditor',
    # Storage
    'RecipeStoreError',
    'ingredient_rows',
    'recipe_to_draft',
    'list_recipes',
    'get_recipe',
    'save_recipe',
    'update_recipe',
    'delete_recipe',
]
