"""Shared fixtures: a testing app with an in-memory database, and snapshot builders."""

import pytest

from app import create_app
from models import db, Ingredient


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def make_ingredients(*rows):
    """Build a snapshot from (name, is_flour, amount, percentage) rows, ids 1..n."""
    return tuple(
        Ingredient(id=index + 1, name=name, is_flour=is_flour, amount=amount, percentage=percentage)
        for index, (name, is_flour, amount, percentage) in enumerate(rows)
    )


@pytest.fixture
def dough():
    """Flour 1000 g, Water 60%, Salt 2%."""
    return make_ingredients(
        ('Flour', True, 1000.0, 100.0),
        ('Water', False, 600.0, 60.0),
        ('Salt', False, 20.0, 2.0),
    )


@pytest.fixture
def pizza():
    """The default recipe: total weight 1632 g."""
    return make_ingredients(
        ('Flour', True, 1000.0, 100.0),
        ('Water', False, 600.0, 60.0),
        ('Salt', False, 30.0, 3.0),
        ('Yeast', False, 2.0, 0.2),
    )
