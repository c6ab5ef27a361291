"""
Recipe Models

Contains the Recipe and RecipeIngredient models used to persist saved
recipes. Ingredients are stored as flat rows in display order.
"""

from datetime import datetime, timezone

from .base import db


def _utcnow():
    return datetime.now(timezone.utc)


class Recipe(db.Model):
    """Saved recipe with its metadata and ordered ingredient rows."""
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False, index=True)
    description = db.Column(db.Text, default='')
    notes = db.Column(db.Text, default='')
    is_public = db.Column(db.Boolean, default=False)

    # Sum of all ingredient amounts in grams, rounded
    total_weight = db.Column(db.Integer, default=0)

    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, index=True)

    ingredients = db.relationship(
        'RecipeIngredient',
        backref='recipe',
        lazy=True,
        cascade='all, delete-orphan',
        order_by='RecipeIngredient.sort_order',
    )

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description or '',
            'notes': self.notes or '',
            'is_public': bool(self.is_public),
            'total_weight': self.total_weight or 0,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }


class RecipeIngredient(db.Model):
    """One ingredient row: (name, is_flour, amount, percentage, sort_order)."""
    id = db.Column(db.Integer, primary_key=True)
    recipe_id = db.Column(db.Integer, db.ForeignKey('recipe.id', ondelete='CASCADE'), nullable=False, index=True)
    name = db.Column(db.String(100), nullable=False, default='')
    is_flour = db.Column(db.Boolean, default=False)
    amount = db.Column(db.Float, default=0.0)
    percentage = db.Column(db.Float, default=0.0)
    sort_order = db.Column(db.Integer, default=0)
