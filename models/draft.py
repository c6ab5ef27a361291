"""
Recipe Draft Model

The complete in-memory state of the recipe being edited.
"""

from dataclasses import dataclass, field

from constants import DEFAULT_TITLE, DEFAULT_DESCRIPTION
from .ingredient import default_ingredients


@dataclass(frozen=True)
class RecipeDraft:
    """Snapshot of the editor: recipe metadata plus the ordered ingredients."""
    title: str = ''
    description: str = ''
    notes: str = ''
    ingredients: tuple = field(default_factory=tuple)
    is_public: bool = False
    view_mode: bool = False

    def to_dict(self):
        return {
            'title': self.title,
            'description': self.description,
            'notes': self.notes,
            'ingredients': [ing.to_dict() for ing in self.ingredients],
            'is_public': self.is_public,
            'view_mode': self.view_mode,
        }


def default_draft():
    return RecipeDraft(
        title=DEFAULT_TITLE,
        description=DEFAULT_DESCRIPTION,
        ingredients=default_ingredients(),
    )
