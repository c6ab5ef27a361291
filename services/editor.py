"""
Recipe Editor

Observable container for the recipe being edited. It owns the session's
ingredient id sequence, hands each edit to the recalculation service and
notifies subscribers synchronously after every change it commits.

Edits are expected to arrive one at a time from a single event loop; the
editor does no locking of its own.
"""

import logging
from dataclasses import replace
from typing import Callable

from models.draft import RecipeDraft, default_draft
from . import recalculation
from .calculations import calculate_total_weight, get_total_flour_weight, get_flour_count
from .codec import build_share_fragment, decode_recipe

logger = logging.getLogger(__name__)


class IdSequence:
    """Monotonic ingredient id generator scoped to one editing session."""

    def __init__(self, start: int = 1) -> None:
        self._next = start

    def next_id(self) -> int:
        value = self._next
        self._next += 1
        return value

    def peek(self) -> int:
        return self._next

    def reset(self, value: int = 1) -> None:
        self._next = value

    def advance_past(self, ingredients) -> None:
        """Make sure the next id is larger than every id in ingredients."""
        highest = max((ing.id for ing in ingredients), default=0)
        if highest >= self._next:
            self._next = highest + 1


class RecipeEditor:
    """
    Holds the current RecipeDraft.

    Listeners registered with subscribe() receive the new draft after each
    commit. Edits that change nothing do not notify.
    """

    def __init__(self, initial: RecipeDraft = None, sequence: IdSequence = None) -> None:
        self._state = initial if initial is not None else default_draft()
        self._sequence = sequence if sequence is not None else IdSequence()
        self._sequence.advance_past(self._state.ingredients)
        self._listeners: list[Callable] = []

    # ------------------------------------------------------------------
    # Store protocol
    # ------------------------------------------------------------------

    def get_state(self) -> RecipeDraft:
        return self._state

    def set_state(self, state: RecipeDraft) -> None:
        if state is self._state or state == self._state:
            return
        self._state = state
        for listener in list(self._listeners):
            listener(state)

    def subscribe(self, listener: Callable) -> Callable:
        """Register a listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @property
    def sequence(self) -> IdSequence:
        return self._sequence

    def _apply(self, edit, *args) -> bool:
        """Run an engine edit on the ingredients; True if anything changed."""
        current = self._state.ingredients
        updated = edit(current, *args)
        if updated is current or updated == current:
            return False
        self.set_state(replace(self._state, ingredients=updated))
        return True

    # ------------------------------------------------------------------
    # Recipe-level edits
    # ------------------------------------------------------------------

    def set_title(self, title: str) -> None:
        self.set_state(replace(self._state, title=title))

    def set_description(self, description: str) -> None:
        self.set_state(replace(self._state, description=description))

    def set_notes(self, notes: str) -> None:
        self.set_state(replace(self._state, notes=notes))

    def set_public(self, is_public: bool) -> None:
        self.set_state(replace(self._state, is_public=bool(is_public)))

    def toggle_view_mode(self) -> None:
        self.set_state(replace(self._state, view_mode=not self._state.view_mode))

    # ------------------------------------------------------------------
    # Ingredient edits
    # ------------------------------------------------------------------

    def set_ingredients(self, ingredients) -> None:
        ingredients = tuple(ingredients)
        self._sequence.advance_past(ingredients)
        self.set_state(replace(self._state, ingredients=ingredients))

    def add_ingredient(self, name: str = '') -> int:
        """Append a blank ingredient and return its id."""
        new_id = self._sequence.next_id()
        self._apply(recalculation.add_ingredient, new_id, name)
        return new_id

    def remove_ingredient(self, ingredient_id: int) -> bool:
        return self._apply(recalculation.remove_ingredient, ingredient_id)

    def update_ingredient_name(self, ingredient_id: int, name: str) -> bool:
        return self._apply(recalculation.update_name, ingredient_id, name)

    def update_ingredient_amount(self, ingredient_id: int, amount: float) -> bool:
        return self._apply(recalculation.update_amount, ingredient_id, amount)

    def update_ingredient_percentage(self, ingredient_id: int, percentage: float) -> bool:
        return self._apply(recalculation.update_percentage, ingredient_id, percentage)

    def toggle_ingredient_flour(self, ingredient_id: int) -> bool:
        return self._apply(recalculation.toggle_flour, ingredient_id)

    def reorder_ingredients(self, dragged_id: int, target_id: int) -> bool:
        return self._apply(recalculation.reorder_ingredients, dragged_id, target_id)

    def set_total_weight(self, new_total: float) -> bool:
        return self._apply(recalculation.set_total_weight, new_total)

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def total_weight(self) -> float:
        return calculate_total_weight(self._state.ingredients)

    @property
    def total_flour_weight(self) -> float:
        return get_total_flour_weight(self._state.ingredients)

    @property
    def flour_count(self) -> int:
        return get_flour_count(self._state.ingredients)

    # ------------------------------------------------------------------
    # Sharing
    # ------------------------------------------------------------------

    def share_fragment(self) -> str:
        return build_share_fragment(self._state.ingredients, self._state.notes)

    def load_fragment(self, token: str) -> bool:
        """
        Replace ingredients and notes with the contents of a share token.

        Returns False and leaves the state alone if the token is malformed.
        """
        decoded = decode_recipe(token)
        if decoded is None:
            return False
        self._sequence.advance_past(decoded.ingredients)
        self.set_state(replace(self._state, ingredients=decoded.ingredients, notes=decoded.notes))
        return True

    def reset(self) -> None:
        """Back to the default recipe with a fresh id sequence."""
        initial = default_draft()
        self._sequence.reset()
        self._sequence.advance_past(initial.ingredients)
        logger.info("Editor reset to default recipe")
        self.set_state(initial)
